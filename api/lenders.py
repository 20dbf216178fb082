from typing import Optional

from fastapi import APIRouter, Depends
from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from api.http_errors import to_http
from database import get_db
from errors import NotFoundError, ValidationError
from models import Lender
from schemas.lender import LenderCreate, LenderResponse
from services import applications as service
from utils.clock import Clock, get_clock

router = APIRouter(prefix="/api/lenders", tags=["lenders"])


@router.get("", response_model=list[LenderResponse])
async def list_lenders(active: Optional[bool] = None, db: AsyncSession = Depends(get_db)):
    query = select(Lender).order_by(Lender.name)
    if active is not None:
        query = query.where(Lender.is_active == active)
    result = await db.execute(query)
    return result.scalars().all()


@router.get("/{lender_id}", response_model=LenderResponse)
async def get_lender(lender_id: str, db: AsyncSession = Depends(get_db)):
    try:
        return await service.get_lender(db, lender_id)
    except NotFoundError as e:
        raise to_http(e) from e


@router.post("", response_model=LenderResponse, status_code=201)
async def create_lender(
    body: LenderCreate,
    db: AsyncSession = Depends(get_db),
    clock: Clock = Depends(get_clock),
):
    try:
        return await service.create_lender(db, body, clock())
    except ValidationError as e:
        raise to_http(e) from e
