from starlette import status
from fastapi import APIRouter
from fastapi.responses import JSONResponse

from database import db_dependency
from schemas.purchase_schemas import EntitlementResponse
from services.entitlement_service import EntitlementService


router = APIRouter(
    prefix="/entitlements",
    tags=["entitlements"]
)


@router.get("/{profile_id}", status_code=status.HTTP_200_OK)
def retrieve_entitlement(db: db_dependency, profile_id: str):
    entitlement = EntitlementService(db).get(profile_id)

    if not entitlement:
        return JSONResponse(
            status_code=status.HTTP_404_NOT_FOUND,
            content={"error": f"No entitlement found for profileId: {profile_id}"}
        )

    return EntitlementResponse(
        profile_id=entitlement.profile_id,
        is_premium=entitlement.is_premium,
        purchase_info=entitlement.purchase_info,
        created_at=entitlement.created_at,
        updated_at=entitlement.updated_at
    ).model_dump(by_alias=True, mode="json")
