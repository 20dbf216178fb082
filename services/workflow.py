"""
Drives an application through its lifecycle and notifies listeners.

The workflow owns no storage: listeners (audit recorder, credit-check queue)
are handed in explicitly, in the order they should run.
"""
from __future__ import annotations

import logging
from typing import Optional, Sequence

from sqlalchemy.ext.asyncio import AsyncSession

from config import settings
from errors import InvalidTransitionError
from models import MortgageApplication
from schemas.decision import DecisionResultSchema
from services import state_machine
from services.decision import evaluate_application
from services.events import (
    ApplicationSubmitted,
    AuditRecorder,
    CreditCheckQueue,
    LifecycleEvent,
    Listener,
    StatusChanged,
)
from services.state_machine import ApplicationStatus
from utils.clock import Clock, utc_now

logger = logging.getLogger(__name__)

AUTO_APPROVAL_NOTE = "Approved via automated system"
MANUAL_REVIEW_PREFIX = "Requires manual review: "


class ApplicationWorkflow:
    def __init__(self, listeners: Sequence[Listener] = (), clock: Clock = utc_now):
        self.listeners = list(listeners)
        self.clock = clock

    async def _emit(self, event: LifecycleEvent) -> None:
        for listener in self.listeners:
            await listener(event)

    async def created(self, application: MortgageApplication) -> ApplicationSubmitted:
        """Announce a newly created application."""
        event = ApplicationSubmitted(
            application_id=application.id,
            applicant_id=application.applicant_id,
            status=application.status,
            occurred_at=self.clock(),
        )
        await self._emit(event)
        return event

    async def transition(
        self,
        application: MortgageApplication,
        new_status: str,
        notes: Optional[str] = None,
    ) -> StatusChanged:
        try:
            event = state_machine.transition(application, new_status, notes, now=self.clock())
        except InvalidTransitionError:
            logger.warning(
                "Rejected transition of application %s from %s to %s", application.id, application.status, new_status
            )
            raise
        logger.info("Application %s: %s -> %s", application.id, event.old_status, event.new_status)
        await self._emit(event)
        return event

    async def process_automated_decision(self, application: MortgageApplication) -> DecisionResultSchema:
        """Approve outright when every gate passes; otherwise refer for manual review."""
        decision = evaluate_application(application, self.clock())
        if decision.approved:
            await self.transition(application, ApplicationStatus.APPROVED.value, AUTO_APPROVAL_NOTE)
        else:
            await self.transition(
                application,
                ApplicationStatus.UNDER_REVIEW.value,
                MANUAL_REVIEW_PREFIX + ", ".join(decision.reasons),
            )
        logger.info("Automated decision for %s: %s", application.id, decision.recommendation)
        return decision


def build_workflow(
    session: AsyncSession,
    clock: Clock = utc_now,
    credit_checks_enabled: Optional[bool] = None,
) -> tuple[ApplicationWorkflow, CreditCheckQueue]:
    """Standard wiring: audit first, then the credit-check queue."""
    if credit_checks_enabled is None:
        credit_checks_enabled = settings.credit_check_enabled
    queue = CreditCheckQueue(enabled=credit_checks_enabled)
    return ApplicationWorkflow([AuditRecorder(session), queue], clock=clock), queue
