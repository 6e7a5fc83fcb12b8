from datetime import datetime
from typing import Any, Dict, Literal, Optional

from pydantic import BaseModel, ConfigDict, Field


class UnifiedProductMetadata(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    base_plan_id: Optional[str] = Field(default=None, alias="basePlanId")
    status: Optional[str] = None
    tax_and_compliance_settings: Optional[Dict[str, Any]] = Field(default=None, alias="taxAndComplianceSettings")


class UnifiedProduct(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    id: str
    type: Literal["subscription", "one_time"]
    price: str
    currency_code: str = Field(default="USD", alias="currencyCode")
    billing_period: str = Field(default="N/A", alias="billingPeriod")
    names: Dict[str, str] = Field(default_factory=dict)
    descriptions: Dict[str, str] = Field(default_factory=dict)
    metadata: UnifiedProductMetadata


class NormalizationError(BaseModel):
    error: Literal["normalization_failed"] = "normalization_failed"
    message: str
    details: Any = None
    timestamp: datetime
