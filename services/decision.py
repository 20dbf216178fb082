"""
Automated approval rules for a mortgage application.
Every gate is checked; each failing gate contributes one reason. The caller
applies the resulting decision to the workflow; nothing here mutates state.
"""
from __future__ import annotations

from datetime import datetime
from typing import Optional

from models import MortgageApplication
from schemas.decision import CriterionResultSchema, DecisionResultSchema
from services.metrics import employment_duration_months

MIN_CREDIT_SCORE = 700
MAX_LTV_RATIO = 80
MAX_AFFORDABILITY_RATIO = 35
MIN_EMPLOYMENT_MONTHS = 12
MIN_RISK_SCORE = 60

RECOMMEND_APPROVE = "Approve"
RECOMMEND_MANUAL_REVIEW = "Manual review required"


def evaluate_decision(
    credit_score: Optional[int],
    loan_to_value_ratio: float,
    affordability_ratio: float,
    employment_months: int,
    risk_score: int,
) -> DecisionResultSchema:
    """Apply the five hard gates. Missing values count as failing their gate."""
    criteria_results: list[CriterionResultSchema] = []
    reasons: list[str] = []

    def gate(name: str, met: bool, reason: str, expected: str, actual: str) -> None:
        criteria_results.append(
            CriterionResultSchema(name=name, met=met, reason=reason if not met else f"Meets {expected}", expected=expected, actual=actual)
        )
        if not met:
            reasons.append(reason)

    score = credit_score if credit_score is not None else 0
    gate(
        "Credit Score",
        score >= MIN_CREDIT_SCORE,
        "Credit score below threshold",
        f"≥ {MIN_CREDIT_SCORE}",
        str(credit_score) if credit_score is not None else "N/A",
    )

    ltv = loan_to_value_ratio or 0
    gate("Loan to Value", ltv <= MAX_LTV_RATIO, "LTV ratio exceeds 80%", f"≤ {MAX_LTV_RATIO}%", f"{ltv:.2f}%")

    affordability = affordability_ratio or 0
    gate(
        "Affordability",
        affordability <= MAX_AFFORDABILITY_RATIO,
        "Monthly payment exceeds 35% of income",
        f"≤ {MAX_AFFORDABILITY_RATIO}%",
        f"{affordability:.2f}%",
    )

    gate(
        "Employment Duration",
        employment_months >= MIN_EMPLOYMENT_MONTHS,
        "Employment duration less than 12 months",
        f"≥ {MIN_EMPLOYMENT_MONTHS} months",
        f"{employment_months} months",
    )

    risk = risk_score if risk_score is not None else 0
    gate("Risk Score", risk >= MIN_RISK_SCORE, "Risk score below acceptable threshold", f"≥ {MIN_RISK_SCORE}", str(risk))

    approved = not reasons
    return DecisionResultSchema(
        approved=approved,
        reasons=reasons,
        recommendation=RECOMMEND_APPROVE if approved else RECOMMEND_MANUAL_REVIEW,
        criteria_results=criteria_results,
    )


def evaluate_application(application: MortgageApplication, now: datetime) -> DecisionResultSchema:
    """Evaluate an application (with its applicant loaded) using its stored derived fields."""
    applicant = application.applicant
    return evaluate_decision(
        credit_score=applicant.credit_score,
        loan_to_value_ratio=application.loan_to_value_ratio,
        affordability_ratio=application.affordability_ratio,
        employment_months=employment_duration_months(applicant.employment_start_date, now),
        risk_score=application.risk_score,
    )


def meets_basic_criteria(application: MortgageApplication) -> bool:
    """Looser pre-screen than the automated approval gates."""
    return (
        (application.loan_to_value_ratio or 0) <= 95
        and (application.affordability_ratio or 0) <= 40
        and (application.applicant.credit_score or 0) >= 600
    )
