from sqlalchemy import Column, DateTime, Float, ForeignKey, Integer, String, Text, func
from sqlalchemy.orm import relationship

from database import Base


class MortgageApplication(Base):
    __tablename__ = "mortgage_applications"

    id = Column(String(64), primary_key=True, index=True)
    applicant_id = Column(String(64), ForeignKey("applicants.id", ondelete="CASCADE"), nullable=False, index=True)
    lender_id = Column(String(64), ForeignKey("lenders.id", ondelete="CASCADE"), nullable=False, index=True)
    property_value = Column(Float, nullable=False)
    loan_amount = Column(Float, nullable=False)
    deposit_amount = Column(Float, nullable=False)
    loan_term_years = Column(Integer, nullable=False)
    interest_rate = Column(Float, nullable=False)
    property_address = Column(String(500), nullable=False)
    # detached, semi_detached, terraced, flat, bungalow
    property_type = Column(String(32), nullable=False)
    # purchase, remortgage, first_time_buyer
    purchase_type = Column(String(32), nullable=False)
    status = Column(String(32), nullable=False, default="draft", index=True)
    # Derived at creation time
    monthly_payment = Column(Float, nullable=True)
    loan_to_value_ratio = Column(Float, nullable=True)
    affordability_ratio = Column(Float, nullable=True)
    risk_score = Column(Integer, nullable=True, index=True)
    submitted_at = Column(DateTime(timezone=True), nullable=True, index=True)
    reviewed_at = Column(DateTime(timezone=True), nullable=True)
    decision_at = Column(DateTime(timezone=True), nullable=True)
    notes = Column(Text, nullable=True)
    created_at = Column(DateTime(timezone=True), server_default=func.now(), nullable=False)
    updated_at = Column(DateTime(timezone=True), server_default=func.now(), onupdate=func.now(), nullable=False)

    applicant = relationship("Applicant", back_populates="applications")
    lender = relationship("Lender", back_populates="applications")
    events = relationship(
        "ApplicationEvent",
        back_populates="application",
        cascade="all, delete-orphan",
        order_by="ApplicationEvent.sequence",
    )
    credit_checks = relationship("CreditCheck", back_populates="application", cascade="all, delete-orphan")
