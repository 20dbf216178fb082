from typing import Literal, Optional

from pydantic import BaseModel, Field
from pydantic.alias_generators import to_camel

_camel_config = {"populate_by_name": True, "alias_generator": to_camel}


class CriterionResultSchema(BaseModel):
    name: str
    met: bool
    reason: str
    expected: Optional[str] = None
    actual: Optional[str] = None


class DecisionResultSchema(BaseModel):
    approved: bool
    reasons: list[str] = Field(default_factory=list)
    recommendation: Literal["Approve", "Manual review required"]
    criteria_results: list[CriterionResultSchema] = Field(default_factory=list)

    model_config = _camel_config


class LenderFitSchema(BaseModel):
    lender_id: str
    lender_name: str
    eligible: bool
    interest_rate: float
    rejection_reasons: list[str] = Field(default_factory=list)
    criteria_results: list[CriterionResultSchema] = Field(default_factory=list)

    model_config = _camel_config
