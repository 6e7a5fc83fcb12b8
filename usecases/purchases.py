from dataclasses import dataclass
from enum import Enum
from typing import Any, Dict, Optional

from loguru import logger

from services.entitlement_service import EntitlementService
from services.purchase_verifier import PurchaseVerifier, validate_purchase_fields
from utils.errors import GrantError, MissingFieldError, VerificationError


class VerificationState(Enum):
    RECEIVED = "received"
    VALIDATED = "validated"
    VERIFYING = "verifying"
    VERIFIED = "verified"
    GRANTING = "granting"
    COMPLETED = "completed"
    REJECTED = "rejected"
    VERIFY_FAILED = "verify_failed"


@dataclass
class VerificationOutcome:
    state: VerificationState
    purchase_info: Optional[Dict[str, Any]] = None
    grant_error: Optional[GrantError] = None

    @property
    def entitlement_granted(self) -> bool:
        return self.state == VerificationState.COMPLETED and self.grant_error is None


class PurchaseUseCase:
    def __init__(self, verifier: PurchaseVerifier, entitlement_service: EntitlementService):
        self.verifier = verifier
        self.entitlement_service = entitlement_service
        self.state = VerificationState.RECEIVED

    def verify_purchase(
        self,
        package_name: Optional[str],
        product_id: Optional[str],
        token: Optional[str],
        profile_id: Optional[str]
    ) -> VerificationOutcome:
        """Verifies a purchase token and grants premium access to the profile.

        Raises MissingFieldError before any external call and VerificationError
        when the authority rejects the token. A failed grant is kept on the
        outcome; the purchase is still reported as verified.
        """
        self.state = VerificationState.RECEIVED

        try:
            validate_purchase_fields(
                packageName=package_name,
                productId=product_id,
                token=token,
                profileId=profile_id
            )
        except MissingFieldError as e:
            self.state = VerificationState.REJECTED
            logger.warning(f"Purchase verification rejected, missing: {', '.join(e.missing_fields)}")
            raise

        self.state = VerificationState.VALIDATED
        logger.debug(f"Verifying purchase (package={package_name}, product={product_id}, profile={profile_id})")

        self.state = VerificationState.VERIFYING
        try:
            purchase_info = self.verifier.verify(package_name, product_id, token)
        except VerificationError:
            self.state = VerificationState.VERIFY_FAILED
            raise

        self.state = VerificationState.VERIFIED

        self.state = VerificationState.GRANTING
        grant_error = None
        try:
            self.entitlement_service.grant(profile_id, purchase_info)
        except GrantError as e:
            # TODO: retry or surface grant failures once product decides the policy
            logger.error(
                f"Purchase verified but entitlement grant failed "
                f"(profile={profile_id}, package={package_name}, product={product_id}): {e}"
            )
            grant_error = e

        self.state = VerificationState.COMPLETED

        return VerificationOutcome(
            state=self.state,
            purchase_info=purchase_info,
            grant_error=grant_error
        )
