# backend/clinic_admin/models/payment.py
import uuid

from sqlalchemy import Column, String, Numeric, DateTime, ForeignKey
from sqlalchemy.orm import relationship
from sqlalchemy.sql import func

from ..core.db import Base

class Payment(Base):
    __tablename__ = "payments"

    id = Column(String(36), primary_key=True, default=lambda: str(uuid.uuid4()))
    patient_id = Column(String(36), ForeignKey("patients.id"), nullable=True, index=True)

    amount  = Column(Numeric(14, 2), nullable=True)                 # unset/0 → not yet determined
    status  = Column(String(20), default="pending", nullable=False)  # "pending" | "completed" | "cancelled"
    payment_method = Column(String(20), nullable=True)               # "cash" | "debit" | "credit" | "transfer"

    created_at = Column(DateTime(timezone=True), server_default=func.now(), nullable=False)
    paid_at    = Column(DateTime(timezone=True), nullable=True)

    patient = relationship("Patient", back_populates="payments", lazy="joined")

    def __repr__(self):
        return (
            f"<Payment(id={self.id}, patient_id={self.patient_id}, amount={self.amount}, "
            f"status='{self.status}', method='{self.payment_method}')>"
        )
