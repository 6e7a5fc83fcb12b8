from datetime import datetime
from typing import Any, Dict, Optional

from pydantic import BaseModel, ConfigDict, Field


class VerifyPurchaseRequest(BaseModel):
    # all optional so absent fields reach the workflow and yield a 400, not a 422
    model_config = ConfigDict(populate_by_name=True)

    package_name: Optional[str] = Field(default=None, alias="packageName")
    product_id: Optional[str] = Field(default=None, alias="productId")
    token: Optional[str] = None
    profile_id: Optional[str] = Field(default=None, alias="profileId")


class VerifyPurchaseResponse(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    message: str
    purchase_info: Dict[str, Any] = Field(alias="purchaseInfo")
    entitlement_granted: bool = Field(alias="entitlementGranted")


class EntitlementResponse(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    profile_id: str = Field(alias="profileId")
    is_premium: bool = Field(alias="isPremium")
    purchase_info: Optional[Dict[str, Any]] = Field(default=None, alias="purchaseInfo")
    created_at: datetime = Field(alias="createdAt")
    updated_at: Optional[datetime] = Field(default=None, alias="updatedAt")
