"""
Stubbed credit check. No bureau is called: the applicant's existing score is
echoed into a CreditCheck snapshot.

run_credit_check is the background-task entry point. It owns its session and
is idempotent within a workflow cycle (since the application's submission).
"""
from __future__ import annotations

import logging
import uuid
from datetime import datetime
from typing import Optional

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

from errors import NotFoundError
from models import CreditCheck, MortgageApplication
from services import metrics
from services.applications import get_application
from services.state_machine import ApplicationStatus
from services.workflow import build_workflow
from utils.clock import Clock, utc_now

logger = logging.getLogger(__name__)

BUREAUS_CHECKED = ["Experian", "Equifax", "TransUnion"]
CREDIT_CHECK_NOTE = "Credit check initiated"


async def perform_credit_check(session: AsyncSession, application: MortgageApplication, now: datetime) -> CreditCheck:
    applicant = application.applicant
    income = metrics.monthly_income(applicant.annual_income, applicant.other_income)
    check = CreditCheck(
        id=f"chk-{uuid.uuid4().hex[:12]}",
        application_id=application.id,
        credit_score=applicant.credit_score,
        credit_report_data={
            "bureaus_checked": BUREAUS_CHECKED,
            "checked_at": now.isoformat(),
            "debt_to_income_ratio": metrics.debt_to_income_ratio(applicant.existing_debt, income),
            "payment_history": "Good",
            "credit_utilization": 35,
            "length_of_credit_history": 10,
        },
        status="completed",
        checked_at=now,
        created_at=now,
    )
    session.add(check)
    await session.flush()
    return check


async def latest_credit_check(session: AsyncSession, application_id: str) -> Optional[CreditCheck]:
    result = await session.execute(
        select(CreditCheck)
        .where(CreditCheck.application_id == application_id)
        .order_by(CreditCheck.checked_at.desc())
        .limit(1)
    )
    return result.scalar_one_or_none()


async def _existing_check_for_cycle(session: AsyncSession, application: MortgageApplication) -> Optional[CreditCheck]:
    query = select(CreditCheck).where(
        CreditCheck.application_id == application.id,
        CreditCheck.status == "completed",
    )
    if application.submitted_at is not None:
        query = query.where(CreditCheck.checked_at >= application.submitted_at)
    result = await session.execute(query.limit(1))
    return result.scalar_one_or_none()


async def run_credit_check(
    application_id: str,
    session_factory: async_sessionmaker[AsyncSession],
    clock: Clock = utc_now,
) -> Optional[CreditCheck]:
    """
    Record a credit check for the application and move it from submitted to
    credit_check. Re-running for the same cycle returns the existing check.
    """
    async with session_factory() as session:
        try:
            try:
                application = await get_application(session, application_id)
            except NotFoundError:
                logger.warning("Credit check skipped: application %s no longer exists", application_id)
                return None

            existing = await _existing_check_for_cycle(session, application)
            if existing is not None:
                logger.info("Credit check already recorded for application %s (%s)", application_id, existing.id)
                return existing

            workflow, _ = build_workflow(session, clock=clock, credit_checks_enabled=False)
            check = await perform_credit_check(session, application, clock())
            if application.status == ApplicationStatus.SUBMITTED.value:
                await workflow.transition(application, ApplicationStatus.CREDIT_CHECK.value, CREDIT_CHECK_NOTE)
            await session.commit()
            logger.info("Credit check %s completed for application %s", check.id, application_id)
            return check
        except Exception:
            await session.rollback()
            raise
