from __future__ import annotations

from datetime import datetime
from typing import Any, Literal, Optional

from pydantic import BaseModel, Field
from pydantic.alias_generators import to_camel

Status = Literal["draft", "submitted", "under_review", "credit_check", "approved", "rejected", "completed"]
# Applications enter the workflow as a draft or straight into submission
IntakeStatus = Literal["draft", "submitted"]
PropertyType = Literal["detached", "semi_detached", "terraced", "flat", "bungalow"]
PurchaseType = Literal["purchase", "remortgage", "first_time_buyer"]

_camel_config = {"populate_by_name": True, "alias_generator": to_camel}


class ApplicationCreate(BaseModel):
    applicant_id: str
    lender_id: str
    property_value: float = Field(..., ge=0)
    loan_amount: float = Field(..., ge=0)
    deposit_amount: float = Field(..., ge=0)
    loan_term_years: int = Field(..., ge=1, le=40)
    interest_rate: float = Field(..., ge=0)
    property_address: str = Field(..., max_length=500)
    property_type: PropertyType
    purchase_type: PurchaseType
    status: IntakeStatus = "draft"

    model_config = _camel_config


class StatusUpdate(BaseModel):
    status: Status
    notes: Optional[str] = Field(None, max_length=1000)

    model_config = _camel_config


class ApplicationResponse(BaseModel):
    id: str
    applicant_id: str
    lender_id: str
    status: Status
    property_value: float
    loan_amount: float
    deposit_amount: float
    loan_term_years: int
    interest_rate: float
    property_address: str
    property_type: str
    purchase_type: str
    monthly_payment: Optional[float] = None
    loan_to_value_ratio: Optional[float] = None
    affordability_ratio: Optional[float] = None
    risk_score: Optional[int] = None
    notes: Optional[str] = None
    submitted_at: Optional[datetime] = None
    reviewed_at: Optional[datetime] = None
    decision_at: Optional[datetime] = None
    created_at: datetime
    updated_at: datetime

    model_config = {**_camel_config, "from_attributes": True}


class ApplicationEventResponse(BaseModel):
    id: str
    sequence: int
    event_type: str
    old_value: Optional[str] = None
    new_value: Optional[str] = None
    description: str
    event_metadata: Optional[dict[str, Any]] = None
    created_at: datetime

    model_config = {**_camel_config, "from_attributes": True}


class ApplicationStatistics(BaseModel):
    total: int
    pending: int
    approved: int
    rejected: int
    avg_loan_amount: Optional[float] = None
    total_loan_value: float

    model_config = _camel_config
