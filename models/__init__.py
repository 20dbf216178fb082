from models.applicant import Applicant
from models.application import MortgageApplication
from models.audit import ApplicationEvent, CreditCheck
from models.lender import Lender

__all__ = [
    "Applicant",
    "ApplicationEvent",
    "CreditCheck",
    "Lender",
    "MortgageApplication",
]
