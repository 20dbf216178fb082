from sqlalchemy import JSON, Column, DateTime, ForeignKey, Integer, String, Text, func
from sqlalchemy.orm import relationship

from database import Base


class ApplicationEvent(Base):
    """Append-only audit record; one row per status transition."""

    __tablename__ = "application_events"

    id = Column(String(64), primary_key=True, index=True)
    application_id = Column(
        String(64), ForeignKey("mortgage_applications.id", ondelete="CASCADE"), nullable=False, index=True
    )
    # Per-application insertion order; breaks ties between equal timestamps
    sequence = Column(Integer, nullable=False, default=0)
    event_type = Column(String(50), nullable=False, index=True)
    old_value = Column(String(255), nullable=True)
    new_value = Column(String(255), nullable=True)
    description = Column(Text, nullable=False)
    # "metadata" is reserved on declarative classes
    event_metadata = Column("metadata", JSON, nullable=True)
    created_at = Column(DateTime(timezone=True), server_default=func.now(), nullable=False)

    application = relationship("MortgageApplication", back_populates="events")


class CreditCheck(Base):
    __tablename__ = "credit_checks"

    id = Column(String(64), primary_key=True, index=True)
    application_id = Column(
        String(64), ForeignKey("mortgage_applications.id", ondelete="CASCADE"), nullable=False, index=True
    )
    credit_score = Column(Integer, nullable=True)
    credit_report_data = Column(JSON, nullable=True)
    status = Column(String(32), nullable=False, default="pending")
    checked_at = Column(DateTime(timezone=True), nullable=True)
    created_at = Column(DateTime(timezone=True), server_default=func.now(), nullable=False)

    application = relationship("MortgageApplication", back_populates="credit_checks")
