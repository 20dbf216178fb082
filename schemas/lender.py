from datetime import datetime
from typing import Optional

from pydantic import BaseModel, Field
from pydantic.alias_generators import to_camel

_camel_config = {"populate_by_name": True, "alias_generator": to_camel}


class LenderCreate(BaseModel):
    name: str = Field(..., max_length=200)
    code: str = Field(..., max_length=50)
    email: str
    phone: Optional[str] = None
    website: Optional[str] = None
    is_active: bool = True
    min_credit_score: int = Field(600, ge=0, le=850)
    max_ltv_ratio: float = Field(95.0, ge=0, le=100)
    min_deposit_percentage: float = Field(5.0, ge=0, le=100)
    max_loan_amount: float = Field(1_000_000.0, ge=0)
    min_loan_amount: float = Field(50_000.0, ge=0)
    interest_rate_base: float = Field(4.5, ge=0)
    processing_fee: float = Field(0.0, ge=0)

    model_config = _camel_config


class LenderResponse(BaseModel):
    id: str
    name: str
    code: str
    email: str
    phone: Optional[str] = None
    website: Optional[str] = None
    is_active: bool
    min_credit_score: int
    max_ltv_ratio: float
    min_deposit_percentage: float
    max_loan_amount: float
    min_loan_amount: float
    interest_rate_base: float
    processing_fee: float
    created_at: datetime
    updated_at: datetime

    model_config = {**_camel_config, "from_attributes": True}
