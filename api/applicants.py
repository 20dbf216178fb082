from fastapi import APIRouter, Depends
from sqlalchemy.ext.asyncio import AsyncSession

from api.http_errors import to_http
from database import get_db
from errors import NotFoundError, ValidationError
from schemas.applicant import ApplicantCreate, ApplicantFinancialsUpdate, ApplicantResponse
from services import applications as service
from utils.clock import Clock, get_clock

router = APIRouter(prefix="/api/applicants", tags=["applicants"])


@router.post("", response_model=ApplicantResponse, status_code=201)
async def create_applicant(
    body: ApplicantCreate,
    db: AsyncSession = Depends(get_db),
    clock: Clock = Depends(get_clock),
):
    try:
        return await service.create_applicant(db, body, clock())
    except ValidationError as e:
        raise to_http(e) from e


@router.get("/{applicant_id}", response_model=ApplicantResponse)
async def get_applicant(applicant_id: str, db: AsyncSession = Depends(get_db)):
    try:
        return await service.get_applicant(db, applicant_id)
    except NotFoundError as e:
        raise to_http(e) from e


@router.patch("/{applicant_id}", response_model=ApplicantResponse)
async def update_applicant(
    applicant_id: str,
    body: ApplicantFinancialsUpdate,
    db: AsyncSession = Depends(get_db),
    clock: Clock = Depends(get_clock),
):
    try:
        return await service.update_applicant_financials(db, applicant_id, body, clock())
    except (NotFoundError, ValidationError) as e:
        raise to_http(e) from e
