# backend/clinic_admin/services/store.py
from __future__ import annotations

import logging
from typing import Any, Dict, List, Mapping, Protocol, Union

from fastapi import Depends
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session, joinedload

from ..core.db import get_db
from ..models.patient import Patient
from ..models.payment import Payment
from ..schemas.payment import PaymentRecord, PaymentUpdate, decode_payments
from .errors import InvalidTransition, PaymentNotFound, StoreError

logger = logging.getLogger(__name__)

UPDATABLE_FIELDS = ("amount", "payment_method", "status", "paid_at")


class PaymentStore(Protocol):
    """Data access for payment records owned by the managed database."""

    def list_payments(self) -> List[PaymentRecord]:
        """All payments joined with patient + profile, newest first."""
        ...

    def update_payment(self, payment_id: str, fields: Union[PaymentUpdate, Mapping[str, Any]]) -> None:
        ...


def _update_values(fields: Union[PaymentUpdate, Mapping[str, Any]]) -> Dict[str, Any]:
    if isinstance(fields, PaymentUpdate):
        fields = fields.model_dump()
    unknown = set(fields) - set(UPDATABLE_FIELDS)
    if unknown:
        raise ValueError(f"Cannot update payment fields: {sorted(unknown)}")
    return dict(fields)


class SqlPaymentStore:
    """PaymentStore backed by the SQLAlchemy session of the managed Postgres DB."""

    def __init__(self, db: Session):
        self.db = db

    def list_payments(self) -> List[PaymentRecord]:
        try:
            rows = (
                self.db.query(Payment)
                .options(joinedload(Payment.patient).joinedload(Patient.profile))
                .order_by(Payment.created_at.desc())
                .all()
            )
        except SQLAlchemyError as e:
            raise StoreError(f"Failed to load payments: {e}") from e
        return decode_payments(rows)

    def update_payment(self, payment_id: str, fields: Union[PaymentUpdate, Mapping[str, Any]]) -> None:
        values = _update_values(fields)
        try:
            # Only pending rows may move; completed/cancelled rows are left alone.
            updated = (
                self.db.query(Payment)
                .filter(Payment.id == payment_id, Payment.status == "pending")
                .update(values, synchronize_session=False)
            )
            if not updated:
                current = self.db.query(Payment.status).filter(Payment.id == payment_id).scalar()
                self.db.rollback()
                if current is None:
                    raise PaymentNotFound(payment_id)
                raise InvalidTransition(payment_id, current)
            self.db.commit()
        except SQLAlchemyError as e:
            self.db.rollback()
            raise StoreError(f"Failed to update payment {payment_id}: {e}") from e
        logger.info("Payment %s updated: %s", payment_id, sorted(values))


def get_payment_store(db: Session = Depends(get_db)) -> PaymentStore:
    return SqlPaymentStore(db)
