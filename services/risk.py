"""
Weighted 0-100 risk score. Higher is better (lower risk).

Weights: credit score 40, debt-to-income 30, loan-to-value 20, employment 10.
"""
from __future__ import annotations

import math
from typing import NamedTuple, Optional

from errors import ValidationError

MAX_CREDIT_SCORE = 850

CREDIT_WEIGHT = 40
DTI_WEIGHT = 30
LTV_WEIGHT = 20
EMPLOYMENT_WEIGHT = 10


class RiskComponents(NamedTuple):
    credit: float
    dti: float
    ltv: float
    employment: float

    @property
    def total(self) -> float:
        return self.credit + self.dti + self.ltv + self.employment


def score_components(
    credit_score: Optional[int],
    dti: float,
    ltv: float,
    employment_months: int,
) -> RiskComponents:
    credit_score = credit_score or 0
    if not 0 <= credit_score <= MAX_CREDIT_SCORE:
        raise ValidationError(f"credit_score must be between 0 and {MAX_CREDIT_SCORE}, got {credit_score}")
    if dti < 0 or ltv < 0 or employment_months < 0:
        raise ValidationError("dti, ltv and employment_months must be non-negative")

    return RiskComponents(
        credit=min(CREDIT_WEIGHT, credit_score / MAX_CREDIT_SCORE * CREDIT_WEIGHT),
        dti=max(0.0, DTI_WEIGHT - dti / 2),
        ltv=max(0.0, LTV_WEIGHT - ltv / 5),
        # Full marks at 60 months
        employment=min(EMPLOYMENT_WEIGHT, employment_months / 6),
    )


def risk_score(
    credit_score: Optional[int],
    dti: float,
    ltv: float,
    employment_months: int,
) -> int:
    """Sum of the four components, rounded half-up. A missing credit score counts as 0."""
    total = score_components(credit_score, dti, ltv, employment_months).total
    return int(math.floor(total + 0.5))
