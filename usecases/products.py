from typing import Any, Dict, List

from loguru import logger

from utils.errors import GooglePlayError


class ProductsUseCase:
    def __init__(self, google_play):
        self.google_play = google_play

    def list_products(self, package_name: str) -> List[Dict[str, Any]]:
        try:
            products = self.google_play.list_inapp_products(package_name)
        except GooglePlayError as e:
            logger.error(f"Error fetching in-app products for {package_name}: {e}")
            return []

        logger.debug(f"Fetched {len(products)} in-app products for {package_name}")
        return products
