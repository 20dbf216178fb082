"""
Persistence-aware application operations.

Every function works inside the caller's AsyncSession and never commits; the
request (or background task) that owns the session decides the transaction
boundary.
"""
from __future__ import annotations

import logging
import uuid
from datetime import datetime
from typing import NamedTuple, Optional

from sqlalchemy import func, select
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm import selectinload

from errors import NotFoundError, ValidationError
from models import Applicant, ApplicationEvent, Lender, MortgageApplication
from schemas.applicant import ApplicantCreate, ApplicantFinancialsUpdate
from schemas.application import ApplicationCreate, ApplicationStatistics
from schemas.decision import DecisionResultSchema, LenderFitSchema
from schemas.lender import LenderCreate
from services import metrics
from services.decision import evaluate_application
from services.lender_criteria import evaluate_lender_fit
from services.risk import risk_score
from services.state_machine import FINALIZED_STATUSES, PENDING_STATUSES, ApplicationStatus
from services.workflow import ApplicationWorkflow

logger = logging.getLogger(__name__)


class DerivedFields(NamedTuple):
    loan_to_value_ratio: float
    monthly_payment: float
    affordability_ratio: float
    risk_score: int


def compute_derived_fields(
    applicant: Applicant,
    property_value: float,
    loan_amount: float,
    interest_rate: float,
    loan_term_years: int,
    now: datetime,
) -> DerivedFields:
    """All derived metrics for an application, computed before anything is written."""
    ltv = metrics.loan_to_value(loan_amount, property_value)
    payment = metrics.monthly_payment(loan_amount, interest_rate, loan_term_years)
    income = metrics.monthly_income(applicant.annual_income, applicant.other_income)
    affordability = metrics.affordability_ratio(payment, income)
    dti = metrics.debt_to_income_ratio(applicant.existing_debt, income)
    months = metrics.employment_duration_months(applicant.employment_start_date, now)
    return DerivedFields(
        loan_to_value_ratio=ltv,
        monthly_payment=payment,
        affordability_ratio=affordability,
        risk_score=risk_score(applicant.credit_score, dti, ltv, months),
    )


async def get_applicant(session: AsyncSession, applicant_id: str) -> Applicant:
    result = await session.execute(select(Applicant).where(Applicant.id == applicant_id))
    applicant = result.scalar_one_or_none()
    if not applicant:
        raise NotFoundError("Applicant", applicant_id)
    return applicant


async def get_lender(session: AsyncSession, lender_id: str) -> Lender:
    result = await session.execute(select(Lender).where(Lender.id == lender_id))
    lender = result.scalar_one_or_none()
    if not lender:
        raise NotFoundError("Lender", lender_id)
    return lender


async def get_application(session: AsyncSession, application_id: str) -> MortgageApplication:
    """Application with applicant and lender loaded."""
    result = await session.execute(
        select(MortgageApplication)
        .options(selectinload(MortgageApplication.applicant), selectinload(MortgageApplication.lender))
        .where(MortgageApplication.id == application_id)
        .execution_options(populate_existing=True)
    )
    application = result.scalar_one_or_none()
    if not application:
        raise NotFoundError("Application", application_id)
    return application


async def create_applicant(session: AsyncSession, data: ApplicantCreate, now: datetime) -> Applicant:
    existing = await session.execute(select(Applicant).where(Applicant.email == data.email))
    if existing.scalar_one_or_none():
        raise ValidationError(f"An applicant with email {data.email} already exists")
    applicant = Applicant(
        id=f"applicant-{uuid.uuid4().hex[:12]}",
        **data.model_dump(by_alias=False),
        created_at=now,
        updated_at=now,
    )
    session.add(applicant)
    await session.flush()
    return applicant


async def update_applicant_financials(
    session: AsyncSession,
    applicant_id: str,
    data: ApplicantFinancialsUpdate,
    now: datetime,
) -> Applicant:
    """
    Financial details are locked once any of the applicant's applications is finalized.
    Open applications are re-scored against the new figures in the same unit of work.
    """
    applicant = await get_applicant(session, applicant_id)
    finalized = await session.execute(
        select(func.count(MortgageApplication.id)).where(
            MortgageApplication.applicant_id == applicant_id,
            MortgageApplication.status.in_(sorted(FINALIZED_STATUSES)),
        )
    )
    if finalized.scalar_one():
        raise ValidationError("Applicant has a finalized application; financial details can no longer change")
    for field, value in data.model_dump(by_alias=False, exclude_unset=True).items():
        setattr(applicant, field, value)
    applicant.updated_at = now

    # Open applications carry metrics derived from these figures
    result = await session.execute(
        select(MortgageApplication).where(
            MortgageApplication.applicant_id == applicant_id,
            MortgageApplication.status.not_in(sorted(FINALIZED_STATUSES)),
        )
    )
    applications = list(result.scalars().all())
    refreshed = [
        compute_derived_fields(
            applicant,
            property_value=application.property_value,
            loan_amount=application.loan_amount,
            interest_rate=application.interest_rate,
            loan_term_years=application.loan_term_years,
            now=now,
        )
        for application in applications
    ]
    for application, derived in zip(applications, refreshed):
        for field, value in derived._asdict().items():
            setattr(application, field, value)
        application.updated_at = now
    await session.flush()
    if applications:
        logger.info("Recomputed metrics for %d application(s) of applicant %s", len(applications), applicant_id)
    return applicant


async def create_lender(session: AsyncSession, data: LenderCreate, now: datetime) -> Lender:
    existing = await session.execute(select(Lender).where(Lender.code == data.code))
    if existing.scalar_one_or_none():
        raise ValidationError(f"Lender code {data.code} already in use")
    lender = Lender(
        id=f"lender-{uuid.uuid4().hex[:12]}",
        **data.model_dump(by_alias=False),
        created_at=now,
        updated_at=now,
    )
    session.add(lender)
    await session.flush()
    return lender


async def create_application(
    session: AsyncSession,
    data: ApplicationCreate,
    workflow: ApplicationWorkflow,
) -> MortgageApplication:
    """
    Create an application with its derived metrics and announce it.
    Metrics are computed before the row is added, so a failure writes nothing.
    """
    applicant = await get_applicant(session, data.applicant_id)
    await get_lender(session, data.lender_id)

    now = workflow.clock()
    derived = compute_derived_fields(
        applicant,
        property_value=data.property_value,
        loan_amount=data.loan_amount,
        interest_rate=data.interest_rate,
        loan_term_years=data.loan_term_years,
        now=now,
    )

    application = MortgageApplication(
        id=f"app-{uuid.uuid4().hex[:12]}",
        **data.model_dump(by_alias=False),
        **derived._asdict(),
        submitted_at=now if data.status == ApplicationStatus.SUBMITTED.value else None,
        created_at=now,
        updated_at=now,
    )
    session.add(application)
    await session.flush()
    await workflow.created(application)
    logger.info(
        "Created application %s (status=%s, ltv=%s, risk_score=%s)",
        application.id,
        application.status,
        derived.loan_to_value_ratio,
        derived.risk_score,
    )
    return await get_application(session, application.id)


async def evaluate(session: AsyncSession, application_id: str, now: datetime) -> DecisionResultSchema:
    application = await get_application(session, application_id)
    return evaluate_application(application, now)


async def process_automated_decision(
    session: AsyncSession,
    application_id: str,
    workflow: ApplicationWorkflow,
) -> MortgageApplication:
    application = await get_application(session, application_id)
    await workflow.process_automated_decision(application)
    await session.flush()
    return application


async def transition_status(
    session: AsyncSession,
    application_id: str,
    new_status: str,
    notes: Optional[str],
    workflow: ApplicationWorkflow,
) -> MortgageApplication:
    application = await get_application(session, application_id)
    await workflow.transition(application, new_status, notes)
    await session.flush()
    return application


async def lender_fit(session: AsyncSession, application_id: str) -> LenderFitSchema:
    application = await get_application(session, application_id)
    return evaluate_lender_fit(application.lender, application)


async def list_applications(
    session: AsyncSession,
    status: Optional[str] = None,
    lender_id: Optional[str] = None,
    min_risk_score: Optional[int] = None,
) -> list[MortgageApplication]:
    query = select(MortgageApplication).order_by(MortgageApplication.created_at.desc())
    if status:
        query = query.where(MortgageApplication.status == status)
    if lender_id:
        query = query.where(MortgageApplication.lender_id == lender_id)
    if min_risk_score is not None:
        query = query.where(MortgageApplication.risk_score >= min_risk_score)
    result = await session.execute(query)
    return list(result.scalars().all())


async def applications_requiring_review(session: AsyncSession, limit: int = 50) -> list[MortgageApplication]:
    """Manual review queue, oldest submission first."""
    result = await session.execute(
        select(MortgageApplication)
        .where(MortgageApplication.status == ApplicationStatus.UNDER_REVIEW.value)
        .order_by(MortgageApplication.submitted_at.asc())
        .limit(limit)
    )
    return list(result.scalars().all())


async def list_events(session: AsyncSession, application_id: str) -> list[ApplicationEvent]:
    await get_application(session, application_id)
    result = await session.execute(
        select(ApplicationEvent)
        .where(ApplicationEvent.application_id == application_id)
        .order_by(ApplicationEvent.created_at, ApplicationEvent.sequence)
    )
    return list(result.scalars().all())


async def application_statistics(session: AsyncSession, lender_id: Optional[str] = None) -> ApplicationStatistics:
    def scoped(query):
        if lender_id:
            return query.where(MortgageApplication.lender_id == lender_id)
        return query

    count = func.count(MortgageApplication.id)
    total = (await session.execute(scoped(select(count)))).scalar_one()
    pending = (
        await session.execute(scoped(select(count).where(MortgageApplication.status.in_(sorted(PENDING_STATUSES)))))
    ).scalar_one()
    approved = (
        await session.execute(scoped(select(count).where(MortgageApplication.status == ApplicationStatus.APPROVED.value)))
    ).scalar_one()
    rejected = (
        await session.execute(scoped(select(count).where(MortgageApplication.status == ApplicationStatus.REJECTED.value)))
    ).scalar_one()
    avg_loan = (await session.execute(scoped(select(func.avg(MortgageApplication.loan_amount))))).scalar_one()
    approved_value = (
        await session.execute(
            scoped(
                select(func.coalesce(func.sum(MortgageApplication.loan_amount), 0)).where(
                    MortgageApplication.status == ApplicationStatus.APPROVED.value
                )
            )
        )
    ).scalar_one()
    return ApplicationStatistics(
        total=total,
        pending=pending,
        approved=approved,
        rejected=rejected,
        avg_loan_amount=round(avg_loan, 2) if avg_loan is not None else None,
        total_loan_value=float(approved_value),
    )
