"""
Financial metrics for a mortgage application.
Pure functions over plain numbers: no I/O, no clock, no ORM objects.
Percentages are returned on a 0-100 scale, rounded to 2 decimals.
"""
from __future__ import annotations

from datetime import date, datetime
from typing import Optional

from errors import ValidationError

# Lending multiple of gross annual income
INCOME_MULTIPLE = 4.5


def _require_non_negative(name: str, value: float) -> None:
    if value is None or value < 0:
        raise ValidationError(f"{name} must be a non-negative number, got {value!r}")


def loan_to_value(loan_amount: float, property_value: float) -> float:
    """Loan amount as a percentage of property value; 0 for a zero property value."""
    _require_non_negative("loan_amount", loan_amount)
    _require_non_negative("property_value", property_value)
    if property_value <= 0:
        return 0.0
    return round(loan_amount / property_value * 100, 2)


def monthly_payment(loan_amount: float, annual_rate_pct: float, term_years: int) -> float:
    """
    Repayment mortgage instalment from the standard amortization formula.
    A zero rate spreads the principal evenly over the term.
    """
    _require_non_negative("loan_amount", loan_amount)
    _require_non_negative("interest_rate", annual_rate_pct)
    if term_years is None or term_years <= 0:
        raise ValidationError(f"loan_term_years must be positive, got {term_years!r}")

    monthly_rate = annual_rate_pct / 100 / 12
    number_of_payments = term_years * 12

    if monthly_rate == 0:
        return round(loan_amount / number_of_payments, 2)

    growth = (1 + monthly_rate) ** number_of_payments
    payment = loan_amount * (monthly_rate * growth) / (growth - 1)
    return round(payment, 2)


def monthly_income(annual_income: float, other_income: float = 0) -> float:
    _require_non_negative("annual_income", annual_income)
    _require_non_negative("other_income", other_income or 0)
    return (annual_income + (other_income or 0)) / 12


def debt_to_income_ratio(existing_annual_debt: float, monthly_income: float) -> float:
    """Monthly share of existing annual debt as a percentage of monthly income."""
    _require_non_negative("existing_debt", existing_annual_debt or 0)
    if monthly_income is None or monthly_income <= 0:
        return 0.0
    monthly_debt = (existing_annual_debt or 0) / 12
    return round(monthly_debt / monthly_income * 100, 2)


def affordability_ratio(monthly_payment: float, monthly_income: float) -> float:
    """Mortgage payment as a percentage of monthly income, rounded to 2 decimals."""
    _require_non_negative("monthly_payment", monthly_payment)
    if monthly_income is None or monthly_income <= 0:
        return 0.0
    return round(monthly_payment / monthly_income * 100, 2)


def employment_duration_months(start_date: Optional[date], now: datetime | date) -> int:
    """Whole calendar months between start_date and now (0 when unknown or in the future)."""
    if start_date is None:
        return 0
    if isinstance(start_date, datetime):
        start_date = start_date.date()
    today = now.date() if isinstance(now, datetime) else now
    months = (today.year - start_date.year) * 12 + (today.month - start_date.month)
    if today.day < start_date.day:
        months -= 1
    return max(0, months)


def max_affordable_mortgage(annual_income: float, existing_debt: float = 0) -> float:
    """Income-multiple borrowing ceiling less existing debt, floored at 0."""
    _require_non_negative("annual_income", annual_income)
    _require_non_negative("existing_debt", existing_debt or 0)
    return max(0.0, annual_income * INCOME_MULTIPLE - (existing_debt or 0))
