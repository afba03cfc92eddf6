import os

os.environ.setdefault("DATABASE_URL", "sqlite:///:memory:")
os.environ.setdefault("SECRET_KEY", "test-secret")
os.environ.setdefault("TIMEZONE", "Asia/Jakarta")

from datetime import datetime
from decimal import Decimal

import pytest

from clinic_admin.schemas.payment import PaymentRecord, PaymentUpdate, decode_payment
from clinic_admin.services.errors import InvalidTransition, PaymentNotFound, StoreError
from clinic_admin.services.notifier import MemoryNotifier


def make_payment(
    id,
    status="pending",
    amount=None,
    patient="Ani",
    created_at=datetime(2024, 5, 1, 10, 0),
    payment_method=None,
    paid_at=None,
) -> PaymentRecord:
    row = {
        "id": str(id),
        "status": status,
        "amount": amount,
        "payment_method": payment_method,
        "created_at": created_at,
        "paid_at": paid_at,
        "patient": None,
    }
    if patient is not None:
        row["patient"] = {"id": f"pat-{id}", "profile": {"full_name": patient}}
    return decode_payment(row)


class FakePaymentStore:
    """In-memory PaymentStore that records update calls."""

    def __init__(self, payments=()):
        self.payments = list(payments)
        self.list_calls = 0
        self.updates = []
        self.fail_list = False
        self.fail_update = False

    def list_payments(self):
        self.list_calls += 1
        if self.fail_list:
            raise StoreError("connection refused")
        return sorted(self.payments, key=lambda p: p.created_at, reverse=True)

    def update_payment(self, payment_id, fields):
        if self.fail_update:
            raise StoreError("connection reset")
        if isinstance(fields, PaymentUpdate):
            fields = fields.model_dump()
        self.updates.append((payment_id, dict(fields)))
        for i, p in enumerate(self.payments):
            if p.id == payment_id:
                if p.status != "pending":
                    raise InvalidTransition(payment_id, p.status)
                self.payments[i] = p.model_copy(update=fields)
                return
        raise PaymentNotFound(payment_id)


@pytest.fixture
def sample_payments():
    return [
        make_payment(1, status="pending", amount=Decimal("0"), patient="Ani",
                     created_at=datetime(2024, 5, 1, 23, 0)),
        make_payment(2, status="completed", amount=Decimal("150000"), patient="Budi",
                     created_at=datetime(2024, 4, 30, 9, 0), payment_method="cash",
                     paid_at=datetime(2024, 4, 30, 10, 0)),
    ]


@pytest.fixture
def store(sample_payments):
    return FakePaymentStore(sample_payments)


@pytest.fixture
def notifier():
    return MemoryNotifier()
