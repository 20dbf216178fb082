"""
Checks a mortgage application against one lender's acceptance criteria and
prices the lender's rate for it. Produces eligibility, rejection reasons and
per-criterion results.
"""
from __future__ import annotations

from models import Lender, MortgageApplication
from schemas.decision import CriterionResultSchema, LenderFitSchema

# Rate loadings on top of the lender's base rate
SUB_PRIME_CREDIT_SCORE = 700
SUB_PRIME_LOADING = 0.5
HIGH_LTV_RATIO = 80
HIGH_LTV_LOADING = 0.25


def can_accept_application(lender: Lender, application: MortgageApplication) -> bool:
    return evaluate_lender_fit(lender, application).eligible


def calculate_interest_rate(lender: Lender, application: MortgageApplication) -> float:
    rate = lender.interest_rate_base
    if (application.applicant.credit_score or 0) < SUB_PRIME_CREDIT_SCORE:
        rate += SUB_PRIME_LOADING
    if (application.loan_to_value_ratio or 0) > HIGH_LTV_RATIO:
        rate += HIGH_LTV_LOADING
    return round(rate, 2)


def evaluate_lender_fit(lender: Lender, application: MortgageApplication) -> LenderFitSchema:
    criteria_results: list[CriterionResultSchema] = []
    rejection_reasons: list[str] = []

    met = bool(lender.is_active)
    criteria_results.append(
        CriterionResultSchema(
            name="Lender Active",
            met=met,
            reason="Lender is not accepting applications" if not met else "Lender is active",
            expected="Active",
            actual="Active" if met else "Inactive",
        )
    )
    if not met:
        rejection_reasons.append(f"Lender {lender.name} is inactive")

    score = application.applicant.credit_score
    met = score is not None and score >= lender.min_credit_score
    criteria_results.append(
        CriterionResultSchema(
            name="Credit Score",
            met=met,
            reason=f"Minimum required score is {lender.min_credit_score} but applicant's score is {score if score is not None else 'N/A'}"
            if not met
            else f"Meets minimum {lender.min_credit_score}",
            expected=f"≥ {lender.min_credit_score}",
            actual=str(score) if score is not None else "N/A",
        )
    )
    if not met:
        rejection_reasons.append(f"Credit score {score} below minimum required {lender.min_credit_score}")

    ltv = application.loan_to_value_ratio or 0
    met = ltv <= lender.max_ltv_ratio
    criteria_results.append(
        CriterionResultSchema(
            name="Loan to Value",
            met=met,
            reason=f"LTV {ltv:.2f}% exceeds maximum {lender.max_ltv_ratio:.2f}%" if not met else f"Within {lender.max_ltv_ratio:.2f}%",
            expected=f"≤ {lender.max_ltv_ratio:.2f}%",
            actual=f"{ltv:.2f}%",
        )
    )
    if not met:
        rejection_reasons.append(f"LTV {ltv:.2f}% above maximum {lender.max_ltv_ratio:.2f}%")

    amount = application.loan_amount
    min_amt = lender.min_loan_amount
    max_amt = lender.max_loan_amount
    met = min_amt <= amount <= max_amt
    criteria_results.append(
        CriterionResultSchema(
            name="Loan Amount",
            met=met,
            reason=f"Loan amount £{amount:,.0f} must be between £{min_amt:,.0f} and £{max_amt:,.0f}"
            if not met
            else f"Within £{min_amt:,.0f}–£{max_amt:,.0f}",
            expected=f"£{min_amt:,.0f} – £{max_amt:,.0f}",
            actual=f"£{amount:,.0f}",
        )
    )
    if not met:
        rejection_reasons.append(f"Loan amount £{amount:,.0f} outside range £{min_amt:,.0f}–£{max_amt:,.0f}")

    return LenderFitSchema(
        lender_id=lender.id,
        lender_name=lender.name,
        eligible=not rejection_reasons,
        interest_rate=calculate_interest_rate(lender, application),
        rejection_reasons=rejection_reasons,
        criteria_results=criteria_results,
    )
