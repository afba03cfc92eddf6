from datetime import datetime
from decimal import Decimal
from typing import Any, Iterable, List, Literal, Optional

from pydantic import BaseModel, ConfigDict, Field, ValidationError

from ..services.errors import PaymentDecodeError

PaymentStatus = Literal["pending", "completed", "cancelled"]
PaymentMethod = Literal["cash", "debit", "credit", "transfer"]

PAYMENT_STATUSES = ("pending", "completed", "cancelled")
PAYMENT_METHODS = ("cash", "debit", "credit", "transfer")


class ProfileRef(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    full_name: Optional[str] = None


class PatientRef(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: str
    profile: Optional[ProfileRef] = None


class PaymentRecord(BaseModel):
    """One payment row joined with its patient and the patient's profile."""

    model_config = ConfigDict(from_attributes=True, frozen=True)

    id: str
    amount: Optional[Decimal] = Field(default=None, ge=0)
    payment_method: Optional[PaymentMethod] = None
    status: PaymentStatus
    created_at: datetime
    paid_at: Optional[datetime] = None
    patient: Optional[PatientRef] = None

    @property
    def patient_name(self) -> Optional[str]:
        if self.patient and self.patient.profile:
            return self.patient.profile.full_name or None
        return None

    @property
    def is_pending(self) -> bool:
        return self.status == "pending"


class PaymentUpdate(BaseModel):
    """Fields written by the pending → completed transition."""

    amount: Decimal = Field(gt=0)
    payment_method: PaymentMethod
    status: Literal["completed"] = "completed"
    paid_at: datetime


def decode_payment(row: Any) -> PaymentRecord:
    try:
        return PaymentRecord.model_validate(row)
    except ValidationError as e:
        raise PaymentDecodeError(f"Unexpected payment record shape: {e}") from e


def decode_payments(rows: Iterable[Any]) -> List[PaymentRecord]:
    return [decode_payment(r) for r in rows]
