"""Shared builders for tests: a fixed clock, in-memory database, sample records."""
from datetime import date, datetime, timezone

from database import build_engine, build_sessionmaker, init_db
from models import Applicant, Lender, MortgageApplication
from schemas.applicant import ApplicantCreate
from schemas.application import ApplicationCreate
from schemas.lender import LenderCreate
from utils.clock import fixed_clock

NOW = datetime(2026, 6, 15, 12, 0, tzinfo=timezone.utc)
CLOCK = fixed_clock(NOW)

TEST_DATABASE_URL = "sqlite+aiosqlite:///:memory:"


async def make_database():
    """Fresh in-memory engine with all tables; returns (engine, session_factory)."""
    engine = build_engine(TEST_DATABASE_URL)
    await init_db(engine)
    return engine, build_sessionmaker(engine)


def applicant_fields(**overrides):
    fields = {
        "first_name": "John",
        "last_name": "Doe",
        "email": "john.doe@example.com",
        "phone": "07700900000",
        "date_of_birth": date(1990, 1, 1),
        "employment_status": "employed",
        "employer_name": "Test Company",
        "job_title": "Software Developer",
        # Five full years before NOW
        "employment_start_date": date(2021, 6, 1),
        "annual_income": 60_000,
        "other_income": 0,
        "monthly_expenses": 1_500,
        "existing_debt": 5_000,
        "credit_score": 750,
        "address_line_1": "123 Test Street",
        "city": "London",
        "postcode": "SW1A 1AA",
    }
    fields.update(overrides)
    return fields


def applicant_create(**overrides) -> ApplicantCreate:
    return ApplicantCreate(**applicant_fields(**overrides))


def lender_create(**overrides) -> LenderCreate:
    fields = {
        "name": "Test Lender",
        "code": "TEST001",
        "email": "test@lender.com",
        "min_credit_score": 600,
        "max_ltv_ratio": 95,
        "interest_rate_base": 4.5,
    }
    fields.update(overrides)
    return LenderCreate(**fields)


def application_create(applicant_id: str, lender_id: str, **overrides) -> ApplicationCreate:
    fields = {
        "applicant_id": applicant_id,
        "lender_id": lender_id,
        "property_value": 300_000,
        "loan_amount": 270_000,
        "deposit_amount": 30_000,
        "loan_term_years": 25,
        "interest_rate": 4.5,
        "property_address": "456 Property Lane, London, SW1A 2BB",
        "property_type": "semi_detached",
        "purchase_type": "purchase",
    }
    fields.update(overrides)
    return ApplicationCreate(**fields)


def transient_application(status: str = "draft", applicant: Applicant = None, **overrides) -> MortgageApplication:
    """Unsaved application with derived fields filled in, for pure tests."""
    fields = {
        "id": "app-test",
        "applicant_id": "applicant-test",
        "lender_id": "lender-test",
        "property_value": 300_000,
        "loan_amount": 200_000,
        "deposit_amount": 100_000,
        "loan_term_years": 25,
        "interest_rate": 4.5,
        "property_address": "456 Property Lane",
        "property_type": "detached",
        "purchase_type": "purchase",
        "status": status,
        "loan_to_value_ratio": 66.67,
        "monthly_payment": 1111.66,
        "affordability_ratio": 22.23,
        "risk_score": 78,
    }
    fields.update(overrides)
    application = MortgageApplication(**fields)
    application.applicant = applicant or Applicant(id="applicant-test", **applicant_fields())
    return application


def transient_lender(**overrides) -> Lender:
    fields = {
        "id": "lender-test",
        "name": "Test Lender",
        "code": "TEST001",
        "email": "test@lender.com",
        "is_active": True,
        "min_credit_score": 600,
        "max_ltv_ratio": 95.0,
        "min_loan_amount": 50_000.0,
        "max_loan_amount": 1_000_000.0,
        "interest_rate_base": 4.5,
    }
    fields.update(overrides)
    return Lender(**fields)
