"""
Seed lenders and a sample applicant for local development.
Run: python -m scripts.seed_data (from the project root).
"""
import asyncio
from datetime import date, datetime, timezone

from sqlalchemy import select

from database import AsyncSessionLocal, init_db
from models import Applicant, Lender

LENDERS_DATA = [
    {
        "id": "northbank",
        "name": "Northbank Building Society",
        "code": "NBS001",
        "email": "mortgages@northbank.example",
        "min_credit_score": 620,
        "max_ltv_ratio": 90.0,
        "min_deposit_percentage": 10.0,
        "min_loan_amount": 50_000.0,
        "max_loan_amount": 750_000.0,
        "interest_rate_base": 4.25,
    },
    {
        "id": "harbour",
        "name": "Harbour Home Loans",
        "code": "HHL001",
        "email": "applications@harbour.example",
        "min_credit_score": 680,
        "max_ltv_ratio": 85.0,
        "min_deposit_percentage": 15.0,
        "min_loan_amount": 75_000.0,
        "max_loan_amount": 1_500_000.0,
        "interest_rate_base": 4.5,
        "processing_fee": 999.0,
    },
    {
        "id": "firststep",
        "name": "FirstStep Mortgages",
        "code": "FSM001",
        "email": "hello@firststep.example",
        "min_credit_score": 600,
        "max_ltv_ratio": 95.0,
        "min_deposit_percentage": 5.0,
        "min_loan_amount": 25_000.0,
        "max_loan_amount": 400_000.0,
        "interest_rate_base": 5.1,
    },
]

SAMPLE_APPLICANT = {
    "id": "applicant-sample",
    "first_name": "Jane",
    "last_name": "Doe",
    "email": "jane.doe@example.com",
    "phone": "07700900000",
    "date_of_birth": date(1990, 1, 1),
    "employment_status": "employed",
    "employer_name": "Acme Ltd",
    "job_title": "Software Developer",
    "employment_start_date": date(2020, 1, 1),
    "annual_income": 60_000.0,
    "other_income": 0.0,
    "monthly_expenses": 1_500.0,
    "existing_debt": 5_000.0,
    "credit_score": 750,
    "address_line_1": "123 Test Street",
    "city": "London",
    "postcode": "SW1A 1AA",
}


async def seed():
    await init_db()
    now = datetime.now(timezone.utc)
    async with AsyncSessionLocal() as session:
        for data in LENDERS_DATA:
            existing = await session.execute(select(Lender).where(Lender.id == data["id"]))
            if existing.scalar_one_or_none():
                print(f"Lender {data['id']} already exists, skipping")
                continue
            session.add(Lender(**data, created_at=now, updated_at=now))
            print(f"Seeded lender: {data['name']}")

        existing = await session.execute(select(Applicant).where(Applicant.id == SAMPLE_APPLICANT["id"]))
        if existing.scalar_one_or_none() is None:
            session.add(Applicant(**SAMPLE_APPLICANT, created_at=now, updated_at=now))
            print(f"Seeded applicant: {SAMPLE_APPLICANT['email']}")
        await session.commit()
    print("Seed complete.")


if __name__ == "__main__":
    asyncio.run(seed())
