from concurrent.futures import ThreadPoolExecutor
from datetime import datetime, timezone
from typing import Dict, List, Optional, Union

from loguru import logger

from schemas.catalog_schemas import NormalizationError, UnifiedProduct, UnifiedProductMetadata
from services.google_play_service import BasePlan, Listing, Price, RawSubscription
from utils.constants import DEFAULT_CURRENCY_CODE, NOT_AVAILABLE, PRODUCT_TYPES
from utils.pricing import format_price


def primary_language(locale: str) -> str:
    return locale.replace("_", "-").split("-")[0].lower()


def collapse_listings(listings: Dict[str, Listing]) -> tuple[Dict[str, str], Dict[str, str]]:
    """Keys titles and descriptions by primary language subtag.

    Locale tags are visited in lexicographic order and the later tag wins,
    so {"pt-BR", "pt-PT"} resolves to the "pt-PT" listing.
    """
    names = {}
    descriptions = {}

    for locale in sorted(listings):
        listing = listings[locale]
        language = primary_language(locale)

        if listing.title is not None:
            names[language] = listing.title
        if listing.description is not None:
            descriptions[language] = listing.description

    return names, descriptions


def select_price(base_plan: BasePlan) -> Optional[Price]:
    if base_plan.regional_price_offers and base_plan.regional_price_offers[0].price is not None:
        return base_plan.regional_price_offers[0].price
    return base_plan.usd_price


class CatalogUseCase:
    def __init__(self, google_play, max_workers: int = 4):
        self.google_play = google_play
        self.max_workers = max(1, max_workers)

    def _fetch_detail(self, package_name: str, subscription: RawSubscription) -> RawSubscription:
        try:
            return self.google_play.get_subscription(package_name, subscription.product_id)
        except Exception as e:
            logger.warning(
                f"Detail fetch failed for {subscription.product_id} in {package_name}, "
                f"using list data instead: {e}"
            )
            return subscription

    def _fetch_details(self, package_name: str, subscriptions: List[RawSubscription]) -> List[RawSubscription]:
        if not subscriptions:
            return []

        workers = min(self.max_workers, len(subscriptions))
        with ThreadPoolExecutor(max_workers=workers) as executor:
            return list(executor.map(lambda sub: self._fetch_detail(package_name, sub), subscriptions))

    def _to_unified_products(self, subscription: RawSubscription) -> List[UnifiedProduct]:
        names, descriptions = collapse_listings(subscription.listings)
        products = []

        for base_plan in subscription.base_plans:
            price = select_price(base_plan)

            products.append(UnifiedProduct(
                id=subscription.product_id,
                type=PRODUCT_TYPES["subscription"],
                price=format_price(price),
                currency_code=(price.currency_code if price and price.currency_code else DEFAULT_CURRENCY_CODE),
                billing_period=base_plan.billing_period_duration or NOT_AVAILABLE,
                names=dict(names),
                descriptions=dict(descriptions),
                metadata=UnifiedProductMetadata(
                    base_plan_id=base_plan.base_plan_id,
                    status=subscription.status,
                    tax_and_compliance_settings=subscription.tax_and_compliance_settings
                )
            ))

        return products

    def list_unified_catalog(self, package_name: str) -> Union[List[UnifiedProduct], NormalizationError]:
        try:
            subscriptions = self.google_play.list_subscriptions(package_name)
        except Exception as e:
            logger.error(f"Error listing subscriptions for {package_name}: {e}")
            return NormalizationError(
                message="Failed to fetch subscription plans",
                details=str(e),
                timestamp=datetime.now(timezone.utc)
            )

        detailed = self._fetch_details(package_name, subscriptions)

        products = []
        for subscription in detailed:
            products.extend(self._to_unified_products(subscription))

        logger.info(f"Normalized {len(products)} products from {len(subscriptions)} subscriptions for {package_name}")
        return products
