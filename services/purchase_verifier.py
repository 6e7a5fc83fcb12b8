from typing import Any, Dict, Optional

from loguru import logger

from services.google_play_service import http_error_details
from utils.constants import REQUIRED_PURCHASE_FIELDS
from utils.errors import GooglePlayError, MissingFieldError, VerificationError


def validate_purchase_fields(**fields: Optional[str]) -> None:
    missing = [name for name in REQUIRED_PURCHASE_FIELDS if not fields.get(name)]
    if missing:
        raise MissingFieldError(missing_fields=missing, required_fields=REQUIRED_PURCHASE_FIELDS)


class PurchaseVerifier:
    def __init__(self, google_play):
        self.google_play = google_play

    def verify(self, package_name: str, product_id: str, token: str) -> Dict[str, Any]:
        try:
            purchase = self.google_play.get_product_purchase(package_name, product_id, token)
        except GooglePlayError as e:
            details = http_error_details(e.original_error)
            logger.error(
                f"Error verifying purchase (package={package_name}, product={product_id}): "
                f"{details if details is not None else e}"
            )
            raise VerificationError(
                "An internal error occurred during purchase verification.",
                status_code=e.status_code,
                details=details if details is not None else "No additional details",
                original_error=e
            )
        except Exception as e:
            logger.error(f"Error verifying purchase (package={package_name}, product={product_id}): {e}")
            raise VerificationError(
                "An internal error occurred during purchase verification.",
                details="No additional details",
                original_error=e
            )

        if not purchase:
            logger.error(f"Empty purchase payload (package={package_name}, product={product_id})")
            raise VerificationError("Failed to verify purchase", details=purchase)

        logger.info(f"Purchase verified successfully (package={package_name}, product={product_id})")
        return purchase
