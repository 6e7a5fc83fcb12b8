import pytest
from fastapi.testclient import TestClient
from sqlalchemy.pool import StaticPool

from core.context import AppContext
from database import Base, build_engine, build_session_factory
from main import create_app
from services.google_play_service import RawSubscription
from utils.errors import GooglePlayError


class FakeGooglePlay:
    """In-memory stand-in for GooglePlayService that records every call."""

    def __init__(self):
        self.subscriptions = []
        self.details = {}
        self.failing_details = set()
        self.list_error = None
        self.inapp_products = []
        self.inapp_error = None
        self.purchase = {"purchaseState": 0, "orderId": "GPA.1234-5678"}
        self.purchase_error = None
        self.auth_error = None
        self.app_details_error = None
        self.calls = {
            "list_subscriptions": 0,
            "get_subscription": 0,
            "list_inapp_products": 0,
            "get_product_purchase": 0,
            "check_authentication": 0,
            "get_app_details": 0,
        }

    def list_subscriptions(self, package_name):
        self.calls["list_subscriptions"] += 1
        if self.list_error:
            raise self.list_error
        return [RawSubscription.from_api(item) for item in self.subscriptions]

    def get_subscription(self, package_name, product_id):
        self.calls["get_subscription"] += 1
        if product_id in self.failing_details:
            raise GooglePlayError("Google Play API error: 404", status_code=404)
        return RawSubscription.from_api(self.details[product_id])

    def list_inapp_products(self, package_name):
        self.calls["list_inapp_products"] += 1
        if self.inapp_error:
            raise self.inapp_error
        return self.inapp_products

    def get_product_purchase(self, package_name, product_id, token):
        self.calls["get_product_purchase"] += 1
        if self.purchase_error:
            raise self.purchase_error
        return self.purchase

    def check_authentication(self):
        self.calls["check_authentication"] += 1
        if self.auth_error:
            raise self.auth_error
        return {"client_email": "validator@example.iam.gserviceaccount.com", "project_id": "example"}

    def get_app_details(self, package_name):
        self.calls["get_app_details"] += 1
        if self.app_details_error:
            raise self.app_details_error
        return {"defaultLanguage": "en-US", "contactEmail": "dev@example.com"}


@pytest.fixture
def engine():
    engine = build_engine("sqlite://", poolclass=StaticPool)
    Base.metadata.create_all(bind=engine)
    yield engine
    engine.dispose()


@pytest.fixture
def session_factory(engine):
    return build_session_factory(engine)


@pytest.fixture
def db_session(session_factory):
    db = session_factory()
    yield db
    db.close()


@pytest.fixture
def fake_google_play():
    return FakeGooglePlay()


@pytest.fixture
def context(fake_google_play, session_factory, engine):
    return AppContext(
        google_play=fake_google_play,
        session_factory=session_factory,
        package_name="com.example.app",
        engine=engine,
        catalog_max_workers=2
    )


@pytest.fixture
def client(context):
    with TestClient(create_app(context)) as test_client:
        yield test_client
