"""
Lifecycle events and the listeners that consume them.

Listeners are plain async callables invoked in order by ApplicationWorkflow
after a successful change; there is no global event bus.
"""
from __future__ import annotations

import logging
import uuid
from dataclasses import dataclass
from datetime import datetime
from typing import Any, Awaitable, Callable, Optional, Union

from sqlalchemy import func, select
from sqlalchemy.ext.asyncio import AsyncSession

from models import ApplicationEvent

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class ApplicationSubmitted:
    application_id: str
    applicant_id: str
    status: str
    occurred_at: datetime


@dataclass(frozen=True)
class StatusChanged:
    application_id: str
    applicant_id: str
    old_status: str
    new_status: str
    occurred_at: datetime


LifecycleEvent = Union[ApplicationSubmitted, StatusChanged]
Listener = Callable[[LifecycleEvent], Awaitable[None]]


class AuditRecorder:
    """Writes one ApplicationEvent per lifecycle event into the caller's session."""

    def __init__(self, session: AsyncSession):
        self.session = session

    async def __call__(self, event: LifecycleEvent) -> None:
        metadata = {
            "timestamp": event.occurred_at.isoformat(),
            "application_id": event.application_id,
            "applicant_id": event.applicant_id,
        }
        if isinstance(event, ApplicationSubmitted):
            await self.record_event(
                event.application_id,
                "created",
                None,
                event.status,
                f"Application created with status {event.status}",
                metadata,
                event.occurred_at,
            )
        else:
            await self.record_event(
                event.application_id,
                "status_change",
                event.old_status,
                event.new_status,
                f"Status changed from {event.old_status} to {event.new_status}",
                metadata,
                event.occurred_at,
            )

    async def record_event(
        self,
        application_id: str,
        event_type: str,
        old_value: Optional[str],
        new_value: Optional[str],
        description: str,
        metadata: dict[str, Any],
        recorded_at: Optional[datetime] = None,
    ) -> ApplicationEvent:
        last_sequence = await self.session.scalar(
            select(func.coalesce(func.max(ApplicationEvent.sequence), 0)).where(
                ApplicationEvent.application_id == application_id
            )
        )
        row = ApplicationEvent(
            id=f"evt-{uuid.uuid4().hex[:12]}",
            application_id=application_id,
            sequence=last_sequence + 1,
            event_type=event_type,
            old_value=old_value,
            new_value=new_value,
            description=description,
            event_metadata=metadata,
        )
        if recorded_at is not None:
            row.created_at = recorded_at
        self.session.add(row)
        await self.session.flush()
        return row


class CreditCheckQueue:
    """
    Outbound queue of applications awaiting a credit check.
    Only applications created directly as submitted are queued; the caller
    drains it after the submission has been committed.
    """

    def __init__(self, enabled: bool = True):
        self.enabled = enabled
        self._pending: list[str] = []

    async def __call__(self, event: LifecycleEvent) -> None:
        if not self.enabled or not isinstance(event, ApplicationSubmitted):
            return
        if event.status != "submitted":
            return
        logger.info("Queued credit check for application %s", event.application_id)
        self._pending.append(event.application_id)

    def drain(self) -> list[str]:
        pending, self._pending = self._pending, []
        return pending

    def __len__(self) -> int:
        return len(self._pending)
