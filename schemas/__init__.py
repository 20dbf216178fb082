from schemas.applicant import ApplicantCreate, ApplicantFinancialsUpdate, ApplicantResponse
from schemas.application import (
    ApplicationCreate,
    ApplicationEventResponse,
    ApplicationResponse,
    ApplicationStatistics,
    StatusUpdate,
)
from schemas.decision import CriterionResultSchema, DecisionResultSchema, LenderFitSchema
from schemas.lender import LenderCreate, LenderResponse

__all__ = [
    "ApplicantCreate",
    "ApplicantFinancialsUpdate",
    "ApplicantResponse",
    "ApplicationCreate",
    "ApplicationEventResponse",
    "ApplicationResponse",
    "ApplicationStatistics",
    "StatusUpdate",
    "CriterionResultSchema",
    "DecisionResultSchema",
    "LenderFitSchema",
    "LenderCreate",
    "LenderResponse",
]
