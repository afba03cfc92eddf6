from datetime import datetime
from decimal import Decimal

import pytest
from pydantic import ValidationError

from clinic_admin.schemas.payment import PaymentUpdate, decode_payment
from clinic_admin.services.errors import PaymentDecodeError, StoreError


def test_decode_nested_record():
    record = decode_payment({
        "id": "1",
        "amount": "150000",
        "status": "completed",
        "payment_method": "credit",
        "created_at": "2024-05-01T10:00:00+07:00",
        "patient": {"id": "pat-1", "profile": {"full_name": "Ani"}},
    })
    assert record.amount == Decimal("150000")
    assert record.patient_name == "Ani"
    assert not record.is_pending


@pytest.mark.parametrize(
    "patient",
    [None, {"id": "pat-1"}, {"id": "pat-1", "profile": None}, {"id": "pat-1", "profile": {"full_name": ""}}],
)
def test_missing_names_are_tolerated(patient):
    record = decode_payment({"id": "1", "status": "pending", "created_at": datetime(2024, 5, 1), "patient": patient})
    assert record.patient_name is None


@pytest.mark.parametrize(
    "row",
    [
        {"id": "1", "status": "refunded", "created_at": "2024-05-01T10:00:00"},
        {"id": "1", "status": "pending"},
        {"id": "1", "status": "completed", "payment_method": "bitcoin", "created_at": "2024-05-01T10:00:00"},
        {"status": "pending", "created_at": "2024-05-01T10:00:00"},
        {"id": "1", "status": "completed", "amount": "-5", "created_at": "2024-05-01T10:00:00"},
    ],
)
def test_shape_mismatch_raises_decode_error(row):
    with pytest.raises(PaymentDecodeError) as exc:
        decode_payment(row)
    assert isinstance(exc.value, StoreError)


def test_update_requires_positive_amount():
    with pytest.raises(ValidationError):
        PaymentUpdate(amount=Decimal("0"), payment_method="cash", paid_at=datetime(2024, 5, 1))
