# backend/clinic_admin/services/editor.py
from __future__ import annotations

import logging
from dataclasses import dataclass
from datetime import datetime, timezone
from decimal import Decimal, InvalidOperation
from typing import Callable, Optional

from ..schemas.payment import PAYMENT_METHODS, PaymentRecord, PaymentUpdate
from .errors import DashboardError, InvalidTransition, PaymentValidationError
from .notifier import Notifier
from .store import PaymentStore

logger = logging.getLogger(__name__)

DEFAULT_METHOD = "cash"

MSG_SUCCESS = "Pembayaran berhasil diproses!"
MSG_FAILED = "Gagal memproses pembayaran"
MSG_INVALID_AMOUNT = "Jumlah pembayaran harus lebih dari Rp 0"
MSG_INVALID_METHOD = "Metode pembayaran tidak valid"
MSG_AMOUNT_PRECISION = "Jumlah pembayaran maksimal 2 angka desimal"
MSG_AMOUNT_TOO_LARGE = "Jumlah pembayaran terlalu besar"

# Matches payments.amount Numeric(14, 2).
AMOUNT_STEP = Decimal("0.01")
AMOUNT_MAX = Decimal("999999999999.99")


@dataclass
class EditorForm:
    amount: str = ""
    payment_method: str = DEFAULT_METHOD


def amount_text(amount: Optional[Decimal]) -> str:
    """Prefill text for the amount input: '' when unset or zero."""
    if amount is None or amount <= 0:
        return ""
    if amount == amount.to_integral_value():
        return str(int(amount))
    return format(amount.normalize(), "f")


def parse_amount(text: str) -> Decimal:
    try:
        value = Decimal((text or "").strip())
    except InvalidOperation:
        raise PaymentValidationError(MSG_INVALID_AMOUNT)
    if not value.is_finite() or value <= 0:
        raise PaymentValidationError(MSG_INVALID_AMOUNT)
    if value > AMOUNT_MAX:
        raise PaymentValidationError(MSG_AMOUNT_TOO_LARGE)
    rounded = value.quantize(AMOUNT_STEP)
    if rounded != value:
        raise PaymentValidationError(MSG_AMOUNT_PRECISION)
    return rounded


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


class PaymentEditor:
    """Modal form that completes one pending payment at a time."""

    def __init__(
        self,
        store: PaymentStore,
        notifier: Notifier,
        on_success: Optional[Callable[[], object]] = None,
        clock: Callable[[], datetime] = _utcnow,
    ):
        self.store = store
        self.notifier = notifier
        self.on_success = on_success
        self.clock = clock
        self.selected: Optional[PaymentRecord] = None
        self.form = EditorForm()
        self.is_open = False
        self.is_submitting = False
        self.last_error: Optional[Exception] = None

    def open(self, payment: PaymentRecord) -> None:
        if not payment.is_pending:
            raise InvalidTransition(payment.id, payment.status)
        self.selected = payment
        self.form = EditorForm(
            amount=amount_text(payment.amount),
            payment_method=payment.payment_method or DEFAULT_METHOD,
        )
        self.last_error = None
        self.is_open = True

    def cancel(self) -> None:
        self._close()

    def _close(self) -> None:
        self.is_open = False
        self.selected = None
        self.form = EditorForm()

    def validate(self) -> PaymentUpdate:
        amount = parse_amount(self.form.amount)
        if self.form.payment_method not in PAYMENT_METHODS:
            raise PaymentValidationError(MSG_INVALID_METHOD)
        return PaymentUpdate(
            amount=amount,
            payment_method=self.form.payment_method,
            paid_at=self.clock(),
        )

    def submit(self, form: Optional[EditorForm] = None) -> bool:
        """Complete the selected payment. Returns True when the store accepted it."""
        if not self.is_open or self.selected is None or self.is_submitting:
            return False
        if form is not None:
            self.form = form

        try:
            update = self.validate()
        except PaymentValidationError as e:
            logger.info("Rejected payment form for %s: %s", self.selected.id, e)
            self.last_error = e
            self.notifier.error(str(e))
            return False

        self.is_submitting = True
        try:
            self.store.update_payment(self.selected.id, update)
        except DashboardError as e:
            logger.exception("Error processing payment %s", self.selected.id)
            self.last_error = e
            self.notifier.error(MSG_FAILED)
            return False
        finally:
            self.is_submitting = False

        self.last_error = None
        self.notifier.success(MSG_SUCCESS)
        self._close()
        if self.on_success is not None:
            self.on_success()
        return True
