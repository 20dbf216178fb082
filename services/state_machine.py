"""
Application status lifecycle.

draft -> submitted -> credit_check / under_review -> approved / rejected -> completed

Any status may be entered from a non-finalized one. Once finalized (approved,
rejected, completed) the only permitted move is into completed.
"""
from __future__ import annotations

from datetime import datetime
from enum import Enum
from typing import Optional

from errors import InvalidTransitionError, ValidationError
from models import MortgageApplication
from services.events import StatusChanged


class ApplicationStatus(str, Enum):
    DRAFT = "draft"
    SUBMITTED = "submitted"
    UNDER_REVIEW = "under_review"
    CREDIT_CHECK = "credit_check"
    APPROVED = "approved"
    REJECTED = "rejected"
    COMPLETED = "completed"


FINALIZED_STATUSES = frozenset(s.value for s in (ApplicationStatus.APPROVED, ApplicationStatus.REJECTED, ApplicationStatus.COMPLETED))
PENDING_STATUSES = frozenset(s.value for s in (ApplicationStatus.SUBMITTED, ApplicationStatus.UNDER_REVIEW, ApplicationStatus.CREDIT_CHECK))
DECISION_STATUSES = frozenset(s.value for s in (ApplicationStatus.APPROVED, ApplicationStatus.REJECTED))


def parse_status(value: str) -> ApplicationStatus:
    try:
        return ApplicationStatus(value)
    except ValueError:
        allowed = ", ".join(s.value for s in ApplicationStatus)
        raise ValidationError(f"Unknown status {value!r}; expected one of: {allowed}") from None


def is_finalized(status: str) -> bool:
    return status in FINALIZED_STATUSES


def is_pending(status: str) -> bool:
    return status in PENDING_STATUSES


def can_transition(current: str, new_status: str) -> bool:
    return not is_finalized(current) or new_status == ApplicationStatus.COMPLETED.value


def transition(
    application: MortgageApplication,
    new_status: str,
    notes: Optional[str] = None,
    *,
    now: datetime,
) -> StatusChanged:
    """
    Move the application to new_status and return the resulting event.
    Raises InvalidTransitionError without touching the application when it is
    finalized and new_status is not completed. Notes are kept unless given.
    """
    target = parse_status(new_status)
    old_status = application.status
    if not can_transition(old_status, target):
        raise InvalidTransitionError(application.id, old_status, target.value)

    application.status = target.value
    if notes is not None:
        application.notes = notes
    if target == ApplicationStatus.SUBMITTED and application.submitted_at is None:
        application.submitted_at = now
    elif target == ApplicationStatus.UNDER_REVIEW:
        application.reviewed_at = now
    elif target.value in DECISION_STATUSES:
        application.decision_at = now
    application.updated_at = now

    return StatusChanged(
        application_id=application.id,
        applicant_id=application.applicant_id,
        old_status=old_status,
        new_status=target.value,
        occurred_at=now,
    )
