from __future__ import annotations

from dataclasses import dataclass
from decimal import Decimal
from typing import Iterable, Sequence

from ..schemas.payment import PaymentRecord


@dataclass(frozen=True)
class PaymentSummary:
    total_revenue: Decimal = Decimal("0")
    pending_count: int = 0


def total_revenue(payments: Iterable[PaymentRecord]) -> Decimal:
    return sum((p.amount or Decimal("0") for p in payments if p.status == "completed"), Decimal("0"))


def pending_count(payments: Iterable[PaymentRecord]) -> int:
    return sum(1 for p in payments if p.status == "pending")


def summarize(payments: Sequence[PaymentRecord]) -> PaymentSummary:
    return PaymentSummary(total_revenue=total_revenue(payments), pending_count=pending_count(payments))
