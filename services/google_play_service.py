import json
import threading
from dataclasses import dataclass, field
from typing import Optional, Dict, Any, List

import google.auth.transport.requests
from google.oauth2 import service_account
from googleapiclient.discovery import build
from googleapiclient.errors import HttpError
from loguru import logger

from utils.constants import ANDROID_PUBLISHER_API_VERSION, ANDROID_PUBLISHER_SCOPES
from utils.errors import GooglePlayError


@dataclass(frozen=True)
class Price:
    units: Optional[int] = None
    nanos: Optional[int] = None
    price_micros: Optional[int] = None
    currency_code: Optional[str] = None

    @classmethod
    def from_money(cls, money: Optional[Dict[str, Any]]) -> Optional["Price"]:
        """Maps a google.type.Money or a legacy {priceMicros, currency} payload."""
        if not money:
            return None

        currency_code = money.get("currencyCode") or money.get("currency")

        if "units" in money or "nanos" in money:
            try:
                # proto3 drops zero-valued fields and serializes int64 as a string
                return cls(
                    units=int(money.get("units", 0)),
                    nanos=int(money.get("nanos", 0)),
                    currency_code=currency_code
                )
            except (TypeError, ValueError):
                return cls(currency_code=currency_code)

        if "priceMicros" in money:
            try:
                return cls(price_micros=int(money["priceMicros"]), currency_code=currency_code)
            except (TypeError, ValueError):
                return cls(currency_code=currency_code)

        return cls(currency_code=currency_code)


@dataclass(frozen=True)
class RegionalPriceOffer:
    region: Optional[str]
    price: Optional[Price]
    currency_code: Optional[str]


@dataclass(frozen=True)
class BasePlan:
    base_plan_id: str
    billing_period_duration: Optional[str] = None
    regional_price_offers: List[RegionalPriceOffer] = field(default_factory=list)
    usd_price: Optional[Price] = None

    @classmethod
    def from_api(cls, data: Dict[str, Any]) -> "BasePlan":
        offers = []
        for config in data.get("regionalConfigs") or []:
            price = Price.from_money(config.get("price"))
            offers.append(RegionalPriceOffer(
                region=config.get("regionCode"),
                price=price,
                currency_code=price.currency_code if price else None
            ))

        return cls(
            base_plan_id=data.get("basePlanId", ""),
            billing_period_duration=(data.get("autoRenewingBasePlanType") or {}).get("billingPeriodDuration"),
            regional_price_offers=offers,
            usd_price=Price.from_money((data.get("otherRegionsConfig") or {}).get("usdPrice"))
        )


@dataclass(frozen=True)
class Listing:
    title: Optional[str] = None
    description: Optional[str] = None


@dataclass(frozen=True)
class RawSubscription:
    product_id: str
    status: Optional[str] = None
    listings: Dict[str, Listing] = field(default_factory=dict)
    base_plans: List[BasePlan] = field(default_factory=list)
    tax_and_compliance_settings: Optional[Dict[str, Any]] = None

    @classmethod
    def from_api(cls, data: Dict[str, Any]) -> "RawSubscription":
        base_plans = data.get("basePlans") or []

        return cls(
            product_id=data.get("productId", ""),
            status=_subscription_status(data, base_plans),
            listings=_parse_listings(data.get("listings")),
            base_plans=[BasePlan.from_api(plan) for plan in base_plans],
            tax_and_compliance_settings=data.get("taxAndComplianceSettings")
        )


def _subscription_status(data: Dict[str, Any], base_plans: List[Dict[str, Any]]) -> Optional[str]:
    if data.get("status"):
        return data["status"]

    # monetization.subscriptions carries state per base plan only
    states = [plan.get("state") for plan in base_plans if plan.get("state")]
    if not states:
        return None
    if "ACTIVE" in states:
        return "active"
    if "DRAFT" in states:
        return "draft"
    return "inactive"


def _parse_listings(listings: Any) -> Dict[str, Listing]:
    if not listings:
        return {}

    if isinstance(listings, dict):
        return {
            locale: Listing(title=value.get("title"), description=value.get("description"))
            for locale, value in listings.items()
        }

    return {
        item["languageCode"]: Listing(title=item.get("title"), description=item.get("description"))
        for item in listings
        if item.get("languageCode")
    }


def _error_details(error: HttpError) -> Any:
    try:
        payload = json.loads(error.content)
    except (TypeError, ValueError):
        return error.content.decode("utf-8", errors="replace") if error.content else None

    return payload.get("error", payload) if isinstance(payload, dict) else payload


class GooglePlayService:
    """Android Publisher v3 client.

    A discovery client is built per thread because the underlying httplib2
    transport can not be shared across threads.
    """

    def __init__(self, credentials_path: Optional[str] = None, credentials=None):
        if credentials is None and credentials_path is None:
            raise ValueError("credentials_path or credentials is required")

        self.credentials_path = credentials_path
        self._credentials = credentials
        self._local = threading.local()
        self._lock = threading.Lock()

    @property
    def credentials(self):
        with self._lock:
            if self._credentials is None:
                self._credentials = service_account.Credentials.from_service_account_file(
                    self.credentials_path,
                    scopes=ANDROID_PUBLISHER_SCOPES
                )
        return self._credentials

    def _get_service(self):
        service = getattr(self._local, "service", None)
        if service is None:
            service = build(
                'androidpublisher',
                ANDROID_PUBLISHER_API_VERSION,
                credentials=self.credentials,
                cache_discovery=False
            )
            self._local.service = service
        return service

    def _execute(self, operation: str, request, **context) -> Dict[str, Any]:
        try:
            return request.execute() or {}
        except HttpError as e:
            logger.error(f"Google Play {operation} failed ({context}): {e}")
            raise GooglePlayError(
                f"Google Play API error: {e}",
                status_code=e.resp.status if e.resp is not None else None,
                original_error=e
            )

    def list_subscriptions(self, package_name: str) -> List[RawSubscription]:
        subscriptions = []
        page_token = None

        while True:
            params = {"packageName": package_name}
            if page_token:
                params["pageToken"] = page_token

            response = self._execute(
                "monetization.subscriptions.list",
                self._get_service().monetization().subscriptions().list(**params),
                package_name=package_name
            )

            subscriptions.extend(
                RawSubscription.from_api(item) for item in response.get("subscriptions", [])
            )

            page_token = response.get("nextPageToken")
            if not page_token:
                return subscriptions

    def get_subscription(self, package_name: str, product_id: str) -> RawSubscription:
        response = self._execute(
            "monetization.subscriptions.get",
            self._get_service().monetization().subscriptions().get(
                packageName=package_name,
                productId=product_id
            ),
            package_name=package_name,
            product_id=product_id
        )
        return RawSubscription.from_api(response)

    def list_inapp_products(self, package_name: str) -> List[Dict[str, Any]]:
        response = self._execute(
            "inappproducts.list",
            self._get_service().inappproducts().list(packageName=package_name),
            package_name=package_name
        )
        return response.get("inappproduct", [])

    def get_product_purchase(self, package_name: str, product_id: str, token: str) -> Dict[str, Any]:
        try:
            return self._get_service().purchases().products().get(
                packageName=package_name,
                productId=product_id,
                token=token
            ).execute()
        except HttpError as e:
            raise GooglePlayError(
                f"Google Play API error: {e}",
                status_code=e.resp.status if e.resp is not None else None,
                original_error=e
            )

    def check_authentication(self) -> Dict[str, Any]:
        credentials = self.credentials
        credentials.refresh(google.auth.transport.requests.Request())

        return {
            "client_email": getattr(credentials, "service_account_email", None),
            "project_id": getattr(credentials, "project_id", None)
        }

    def get_app_details(self, package_name: str) -> Dict[str, Any]:
        edits = self._get_service().edits()
        edit = self._execute("edits.insert", edits.insert(packageName=package_name, body={}), package_name=package_name)

        try:
            return self._execute(
                "edits.details.get",
                edits.details().get(packageName=package_name, editId=edit["id"]),
                package_name=package_name
            )
        finally:
            try:
                self._execute(
                    "edits.delete",
                    edits.delete(packageName=package_name, editId=edit["id"]),
                    package_name=package_name
                )
            except GooglePlayError as e:
                logger.warning(f"Could not discard edit {edit['id']} for {package_name}: {e}")


def http_error_details(error: Optional[Exception]) -> Any:
    if isinstance(error, HttpError):
        return _error_details(error)
    return None
