"""
Financial metrics: LTV, amortized payment, DTI, affordability, employment duration.
Run from project root: python -m pytest tests/test_metrics.py -v
"""
import unittest
from datetime import date, datetime, timezone

from errors import ValidationError
from services import metrics


class TestLoanToValue(unittest.TestCase):
    def test_percentage_rounded_to_two_places(self):
        self.assertEqual(metrics.loan_to_value(270_000, 300_000), 90.0)
        self.assertEqual(metrics.loan_to_value(200_000, 300_000), 66.67)

    def test_zero_property_value_gives_zero(self):
        self.assertEqual(metrics.loan_to_value(150_000, 0), 0)

    def test_negative_property_value_rejected(self):
        with self.assertRaises(ValidationError):
            metrics.loan_to_value(100_000, -1)

    def test_negative_loan_rejected(self):
        with self.assertRaises(ValidationError):
            metrics.loan_to_value(-5, 100_000)


class TestMonthlyPayment(unittest.TestCase):
    def test_standard_amortization(self):
        """270k over 25 years at 4.5%."""
        self.assertAlmostEqual(metrics.monthly_payment(270_000, 4.5, 25), 1500.75, delta=0.05)

    def test_zero_rate_spreads_principal_evenly(self):
        self.assertEqual(metrics.monthly_payment(120_000, 0, 10), 1000.0)
        payment = metrics.monthly_payment(100_000, 0, 30)
        self.assertAlmostEqual(payment * 360, 100_000, delta=360 * 0.005)

    def test_higher_rate_costs_more(self):
        self.assertGreater(metrics.monthly_payment(200_000, 6, 25), metrics.monthly_payment(200_000, 4, 25))

    def test_invalid_term_rejected(self):
        with self.assertRaises(ValidationError):
            metrics.monthly_payment(200_000, 4.5, 0)

    def test_negative_rate_rejected(self):
        with self.assertRaises(ValidationError):
            metrics.monthly_payment(200_000, -1, 25)


class TestIncomeRatios(unittest.TestCase):
    def test_monthly_income_includes_other_income(self):
        self.assertEqual(metrics.monthly_income(60_000, 12_000), 6_000)

    def test_debt_to_income(self):
        # 5,000 a year against 5,000 a month
        self.assertEqual(metrics.debt_to_income_ratio(5_000, 5_000), 8.33)

    def test_debt_to_income_without_income(self):
        self.assertEqual(metrics.debt_to_income_ratio(5_000, 0), 0)

    def test_affordability_is_rounded(self):
        self.assertEqual(metrics.affordability_ratio(1_000, 3_000), 33.33)

    def test_affordability_without_income(self):
        self.assertEqual(metrics.affordability_ratio(1_000, 0), 0)

    def test_max_affordable_mortgage(self):
        self.assertEqual(metrics.max_affordable_mortgage(60_000, 5_000), 265_000)
        self.assertEqual(metrics.max_affordable_mortgage(1_000, 50_000), 0)


class TestEmploymentDuration(unittest.TestCase):
    def test_whole_months(self):
        now = datetime(2021, 1, 15, 9, 0, tzinfo=timezone.utc)
        self.assertEqual(metrics.employment_duration_months(date(2020, 1, 15), now), 12)

    def test_partial_month_not_counted(self):
        now = datetime(2020, 2, 29, tzinfo=timezone.utc)
        self.assertEqual(metrics.employment_duration_months(date(2020, 1, 31), now), 0)

    def test_missing_start_date(self):
        self.assertEqual(metrics.employment_duration_months(None, datetime.now(timezone.utc)), 0)

    def test_future_start_date(self):
        self.assertEqual(metrics.employment_duration_months(date(2030, 1, 1), date(2026, 1, 1)), 0)


if __name__ == "__main__":
    unittest.main()
