from typing import Annotated, Optional
from starlette import status
from fastapi import APIRouter, Body, Depends
from fastapi.responses import JSONResponse
from loguru import logger

from core.context import AppContext, get_context
from database import db_dependency
from schemas.purchase_schemas import VerifyPurchaseRequest, VerifyPurchaseResponse
from services.entitlement_service import EntitlementService
from services.purchase_verifier import PurchaseVerifier
from usecases.purchases import PurchaseUseCase
from utils.errors import MissingFieldError, VerificationError


router = APIRouter(
    tags=["purchases"]
)

context_dependency = Annotated[AppContext, Depends(get_context)]


@router.post("/verify-purchase", status_code=status.HTTP_200_OK)
def verify_purchase(
    db: db_dependency,
    context: context_dependency,
    purchase_request: Annotated[Optional[VerifyPurchaseRequest], Body()] = None
):
    # an absent or null body is an empty request, reported as missing fields
    purchase_request = purchase_request or VerifyPurchaseRequest()

    purchase_usecase = PurchaseUseCase(
        verifier=PurchaseVerifier(context.google_play),
        entitlement_service=EntitlementService(db)
    )

    try:
        outcome = purchase_usecase.verify_purchase(
            package_name=purchase_request.package_name,
            product_id=purchase_request.product_id,
            token=purchase_request.token,
            profile_id=purchase_request.profile_id
        )
    except (MissingFieldError, VerificationError):
        raise
    except Exception as e:
        logger.exception(
            f"Unexpected error verifying purchase "
            f"(package={purchase_request.package_name}, product={purchase_request.product_id})"
        )
        return JSONResponse(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            content={
                "error": "An internal error occurred during purchase verification.",
                "details": str(e)
            }
        )

    return VerifyPurchaseResponse(
        message="Purchase verified successfully",
        purchase_info=outcome.purchase_info,
        entitlement_granted=outcome.entitlement_granted
    ).model_dump(by_alias=True)
