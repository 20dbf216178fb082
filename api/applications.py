from __future__ import annotations

from typing import Optional

from fastapi import APIRouter, BackgroundTasks, Depends, Query
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

from api.http_errors import to_http
from database import get_db, get_session_factory
from errors import InvalidTransitionError, NotFoundError, ValidationError
from schemas.application import (
    ApplicationCreate,
    ApplicationEventResponse,
    ApplicationResponse,
    ApplicationStatistics,
    Status,
    StatusUpdate,
)
from schemas.decision import DecisionResultSchema, LenderFitSchema
from services import applications as service
from services.credit_check import run_credit_check
from services.workflow import build_workflow
from utils.clock import Clock, get_clock

router = APIRouter(prefix="/api/applications", tags=["applications"])


@router.get("", response_model=list[ApplicationResponse])
async def list_applications(
    status: Optional[Status] = None,
    lender_id: Optional[str] = None,
    min_risk_score: Optional[int] = None,
    db: AsyncSession = Depends(get_db),
):
    return await service.list_applications(db, status=status, lender_id=lender_id, min_risk_score=min_risk_score)


@router.get("/stats", response_model=ApplicationStatistics)
async def application_statistics(lender_id: Optional[str] = None, db: AsyncSession = Depends(get_db)):
    return await service.application_statistics(db, lender_id=lender_id)


@router.get("/review-queue", response_model=list[ApplicationResponse])
async def review_queue(limit: int = Query(50, ge=1, le=200), db: AsyncSession = Depends(get_db)):
    return await service.applications_requiring_review(db, limit=limit)


@router.get("/{application_id}", response_model=ApplicationResponse)
async def get_application(application_id: str, db: AsyncSession = Depends(get_db)):
    try:
        return await service.get_application(db, application_id)
    except NotFoundError as e:
        raise to_http(e) from e


@router.post("", response_model=ApplicationResponse, status_code=201)
async def create_application(
    body: ApplicationCreate,
    background_tasks: BackgroundTasks,
    db: AsyncSession = Depends(get_db),
    session_factory: async_sessionmaker[AsyncSession] = Depends(get_session_factory),
    clock: Clock = Depends(get_clock),
):
    workflow, credit_checks = build_workflow(db, clock=clock)
    try:
        app = await service.create_application(db, body, workflow)
    except (NotFoundError, ValidationError) as e:
        raise to_http(e) from e
    # The submission must be durable before any credit check is dispatched
    await db.commit()
    for application_id in credit_checks.drain():
        background_tasks.add_task(run_credit_check, application_id, session_factory, clock)
    return app


@router.patch("/{application_id}/status", response_model=ApplicationResponse)
async def update_status(
    application_id: str,
    body: StatusUpdate,
    db: AsyncSession = Depends(get_db),
    clock: Clock = Depends(get_clock),
):
    workflow, _ = build_workflow(db, clock=clock)
    try:
        return await service.transition_status(db, application_id, body.status, body.notes, workflow)
    except (NotFoundError, InvalidTransitionError, ValidationError) as e:
        raise to_http(e) from e


@router.get("/{application_id}/evaluate", response_model=DecisionResultSchema)
async def evaluate_application(
    application_id: str,
    db: AsyncSession = Depends(get_db),
    clock: Clock = Depends(get_clock),
):
    try:
        return await service.evaluate(db, application_id, clock())
    except NotFoundError as e:
        raise to_http(e) from e


@router.post("/{application_id}/process-decision", response_model=ApplicationResponse)
async def process_automated_decision(
    application_id: str,
    db: AsyncSession = Depends(get_db),
    clock: Clock = Depends(get_clock),
):
    workflow, _ = build_workflow(db, clock=clock)
    try:
        return await service.process_automated_decision(db, application_id, workflow)
    except (NotFoundError, InvalidTransitionError) as e:
        raise to_http(e) from e


@router.get("/{application_id}/events", response_model=list[ApplicationEventResponse])
async def list_events(application_id: str, db: AsyncSession = Depends(get_db)):
    try:
        return await service.list_events(db, application_id)
    except NotFoundError as e:
        raise to_http(e) from e


@router.get("/{application_id}/lender-fit", response_model=LenderFitSchema)
async def lender_fit(application_id: str, db: AsyncSession = Depends(get_db)):
    try:
        return await service.lender_fit(db, application_id)
    except NotFoundError as e:
        raise to_http(e) from e
