from sqlalchemy import Boolean, Column, DateTime, Float, Integer, String, func
from sqlalchemy.orm import relationship

from database import Base


class Lender(Base):
    __tablename__ = "lenders"

    id = Column(String(64), primary_key=True, index=True)
    name = Column(String(200), nullable=False)
    code = Column(String(50), unique=True, nullable=False, index=True)
    email = Column(String(255), nullable=False)
    phone = Column(String(20), nullable=True)
    website = Column(String(255), nullable=True)
    is_active = Column(Boolean, nullable=False, default=True, index=True)
    # Acceptance criteria
    min_credit_score = Column(Integer, nullable=False, default=600)
    max_ltv_ratio = Column(Float, nullable=False, default=95.0)
    min_deposit_percentage = Column(Float, nullable=False, default=5.0)
    max_loan_amount = Column(Float, nullable=False, default=1_000_000.0)
    min_loan_amount = Column(Float, nullable=False, default=50_000.0)
    interest_rate_base = Column(Float, nullable=False, default=4.5)
    processing_fee = Column(Float, nullable=False, default=0.0)
    created_at = Column(DateTime(timezone=True), server_default=func.now(), nullable=False)
    updated_at = Column(DateTime(timezone=True), server_default=func.now(), onupdate=func.now(), nullable=False)

    applications = relationship("MortgageApplication", back_populates="lender")
