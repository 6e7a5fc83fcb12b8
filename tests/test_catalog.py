from schemas.catalog_schemas import NormalizationError
from services.google_play_service import Listing
from usecases.catalog import CatalogUseCase, collapse_listings
from utils.errors import GooglePlayError


def _base_plan(base_plan_id, period="P1M", regional=None, usd=None):
    plan = {
        "basePlanId": base_plan_id,
        "state": "ACTIVE",
        "autoRenewingBasePlanType": {"billingPeriodDuration": period},
        "regionalConfigs": regional or [],
    }
    if usd:
        plan["otherRegionsConfig"] = {"usdPrice": usd}
    return plan


def _subscription(product_id, base_plans, listings=None):
    return {
        "packageName": "com.example.app",
        "productId": product_id,
        "basePlans": base_plans,
        "listings": listings or [],
        "taxAndComplianceSettings": {"eeaWithdrawalRightType": "WITHDRAWAL_RIGHT_SERVICE"},
    }


def _catalog(fake_google_play, *subscriptions):
    fake_google_play.subscriptions = [
        _subscription(sub["productId"], sub["basePlans"]) for sub in subscriptions
    ]
    fake_google_play.details = {sub["productId"]: sub for sub in subscriptions}


def test_one_product_per_base_plan_in_order(fake_google_play):
    _catalog(fake_google_play, _subscription("premium", [
        _base_plan("monthly", "P1M", regional=[
            {"regionCode": "BR", "price": {"currencyCode": "BRL", "units": "19", "nanos": 900000000}}
        ]),
        _base_plan("yearly", "P1Y", usd={"currencyCode": "USD", "units": "49", "nanos": 990000000}),
    ]))

    products = CatalogUseCase(fake_google_play).list_unified_catalog("com.example.app")

    assert [p.metadata.base_plan_id for p in products] == ["monthly", "yearly"]
    assert products[0].price == "19.9"
    assert products[0].currency_code == "BRL"
    assert products[0].billing_period == "P1M"
    assert products[1].price == "49.99"
    assert products[1].currency_code == "USD"
    assert products[1].billing_period == "P1Y"
    assert all(p.type == "subscription" and p.id == "premium" for p in products)
    assert products[0].metadata.status == "active"
    assert products[0].metadata.tax_and_compliance_settings == {
        "eeaWithdrawalRightType": "WITHDRAWAL_RIGHT_SERVICE"
    }


def test_subscription_without_base_plans_contributes_nothing(fake_google_play):
    _catalog(
        fake_google_play,
        _subscription("empty", []),
        _subscription("premium", [_base_plan("monthly")]),
    )

    products = CatalogUseCase(fake_google_play).list_unified_catalog("com.example.app")

    assert [p.id for p in products] == ["premium"]


def test_missing_price_and_period_fall_back(fake_google_play):
    plan = _base_plan("legacy")
    del plan["autoRenewingBasePlanType"]
    _catalog(fake_google_play, _subscription("premium", [plan]))

    [product] = CatalogUseCase(fake_google_play).list_unified_catalog("com.example.app")

    assert product.price == "N/A"
    assert product.currency_code == "USD"
    assert product.billing_period == "N/A"


def test_failed_detail_fetch_keeps_the_rest_of_the_catalog(fake_google_play):
    _catalog(
        fake_google_play,
        _subscription("alpha", [_base_plan("monthly")]),
        _subscription("beta", [_base_plan("monthly")]),
        _subscription("gamma", [_base_plan("monthly")]),
    )
    fake_google_play.details["alpha"]["listings"] = [{"languageCode": "en-US", "title": "Alpha"}]
    fake_google_play.failing_details = {"beta"}

    products = CatalogUseCase(fake_google_play, max_workers=3).list_unified_catalog("com.example.app")

    assert [p.id for p in products] == ["alpha", "beta", "gamma"]
    assert products[0].names == {"en": "Alpha"}
    # beta comes from the coarse list record
    assert products[1].names == {}
    assert fake_google_play.calls["get_subscription"] == 3


def test_listings_use_detail_response(fake_google_play):
    detail = _subscription("premium", [_base_plan("monthly")], listings=[
        {"languageCode": "en-US", "title": "Premium", "description": "All features"},
        {"languageCode": "es-419", "title": "Premium ES", "description": "Todo"},
    ])
    fake_google_play.subscriptions = [_subscription("premium", [_base_plan("monthly")])]
    fake_google_play.details = {"premium": detail}

    [product] = CatalogUseCase(fake_google_play).list_unified_catalog("com.example.app")

    assert product.names == {"en": "Premium", "es": "Premium ES"}
    assert product.descriptions == {"en": "All features", "es": "Todo"}


def test_locale_collapse_later_tag_wins():
    names, descriptions = collapse_listings({
        "pt-PT": Listing(title="B"),
        "pt-BR": Listing(title="A", description="Brasil"),
    })

    assert names == {"pt": "B"}
    assert descriptions == {"pt": "Brasil"}


def test_list_failure_returns_normalization_error(fake_google_play):
    fake_google_play.list_error = GooglePlayError("Google Play API error: 403", status_code=403)

    result = CatalogUseCase(fake_google_play).list_unified_catalog("com.example.app")

    assert isinstance(result, NormalizationError)
    assert result.error == "normalization_failed"
    assert "403" in result.details
    assert fake_google_play.calls["get_subscription"] == 0


def test_empty_catalog(fake_google_play):
    assert CatalogUseCase(fake_google_play).list_unified_catalog("com.example.app") == []
