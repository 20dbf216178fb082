from sqlalchemy import Column, Date, DateTime, Float, Integer, String, func
from sqlalchemy.orm import relationship

from database import Base


class Applicant(Base):
    __tablename__ = "applicants"

    id = Column(String(64), primary_key=True, index=True)
    first_name = Column(String(100), nullable=False)
    last_name = Column(String(100), nullable=False)
    email = Column(String(255), unique=True, nullable=False, index=True)
    phone = Column(String(20), nullable=False)
    date_of_birth = Column(Date, nullable=True)
    # employed, self_employed, unemployed, retired
    employment_status = Column(String(32), nullable=False)
    employer_name = Column(String(200), nullable=True)
    job_title = Column(String(100), nullable=True)
    employment_start_date = Column(Date, nullable=True)
    annual_income = Column(Float, nullable=False)
    other_income = Column(Float, nullable=False, default=0)
    monthly_expenses = Column(Float, nullable=False, default=0)
    # Annual figure; DTI divides it by 12
    existing_debt = Column(Float, nullable=False, default=0)
    # Null until a credit check has populated it
    credit_score = Column(Integer, nullable=True, index=True)
    address_line_1 = Column(String(200), nullable=False)
    address_line_2 = Column(String(200), nullable=True)
    city = Column(String(100), nullable=False)
    postcode = Column(String(20), nullable=False)
    country = Column(String(100), nullable=False, default="United Kingdom")
    created_at = Column(DateTime(timezone=True), server_default=func.now(), nullable=False)
    updated_at = Column(DateTime(timezone=True), server_default=func.now(), onupdate=func.now(), nullable=False)

    applications = relationship("MortgageApplication", back_populates="applicant")

    @property
    def full_name(self) -> str:
        return f"{self.first_name} {self.last_name}"

    @property
    def monthly_income(self) -> float:
        return ((self.annual_income or 0) + (self.other_income or 0)) / 12

    @property
    def is_employed(self) -> bool:
        return self.employment_status in ("employed", "self_employed")
