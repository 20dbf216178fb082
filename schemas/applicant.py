from __future__ import annotations

from datetime import date, datetime
from typing import Literal, Optional

from pydantic import BaseModel, Field
from pydantic.alias_generators import to_camel

EmploymentStatus = Literal["employed", "self_employed", "unemployed", "retired"]

_camel_config = {"populate_by_name": True, "alias_generator": to_camel}


class ApplicantCreate(BaseModel):
    first_name: str = Field(..., max_length=100)
    last_name: str = Field(..., max_length=100)
    email: str = Field(..., max_length=255)
    phone: str = Field(..., max_length=20)
    date_of_birth: Optional[date] = None
    employment_status: EmploymentStatus
    employer_name: Optional[str] = Field(None, max_length=200)
    job_title: Optional[str] = Field(None, max_length=100)
    employment_start_date: Optional[date] = None
    annual_income: float = Field(..., ge=0)
    other_income: float = Field(0, ge=0)
    monthly_expenses: float = Field(0, ge=0)
    existing_debt: float = Field(0, ge=0, description="Existing annual debt")
    credit_score: Optional[int] = Field(None, ge=0, le=850)
    address_line_1: str = Field(..., max_length=200)
    address_line_2: Optional[str] = Field(None, max_length=200)
    city: str = Field(..., max_length=100)
    postcode: str = Field(..., max_length=20)
    country: str = Field("United Kingdom", max_length=100)

    model_config = _camel_config


class ApplicantFinancialsUpdate(BaseModel):
    """Financial fields that may change until an application is finalized."""
    employment_status: Optional[EmploymentStatus] = None
    employment_start_date: Optional[date] = None
    annual_income: Optional[float] = Field(None, ge=0)
    other_income: Optional[float] = Field(None, ge=0)
    monthly_expenses: Optional[float] = Field(None, ge=0)
    existing_debt: Optional[float] = Field(None, ge=0)
    credit_score: Optional[int] = Field(None, ge=0, le=850)

    model_config = _camel_config


class ApplicantResponse(BaseModel):
    id: str
    first_name: str
    last_name: str
    full_name: str
    email: str
    phone: str
    employment_status: str
    employment_start_date: Optional[date] = None
    annual_income: float
    other_income: float
    monthly_income: float
    monthly_expenses: float
    existing_debt: float
    credit_score: Optional[int] = None
    city: str
    postcode: str
    country: str
    created_at: datetime
    updated_at: datetime

    model_config = {**_camel_config, "from_attributes": True}
