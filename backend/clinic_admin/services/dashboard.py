"""
View model for the administration dashboard.

Owns the fetched payment list, the derived aggregates, the active
filter criteria and the payment editor. Aggregates are only replaced
after a confirmed successful fetch, so a failed call never leaves the
dashboard half updated.
"""
from __future__ import annotations

import itertools
import logging
from datetime import tzinfo
from decimal import Decimal
from typing import List, Optional

from ..schemas.payment import PaymentRecord
from .aggregates import PaymentSummary, summarize
from .editor import PaymentEditor
from .errors import PaymentNotFound, StoreError
from .filters import FilterCriteria, apply_filters, clear_filters, has_active_filters
from .notifier import Notifier
from .store import PaymentStore

logger = logging.getLogger(__name__)

MSG_FETCH_FAILED = "Gagal memuat data pembayaran"


class PaymentDashboard:
    def __init__(
        self,
        store: PaymentStore,
        notifier: Notifier,
        tz: Optional[tzinfo] = None,
        refetch_on_update: bool = True,
    ):
        self.store = store
        self.notifier = notifier
        self.tz = tz
        self.payments: List[PaymentRecord] = []
        self.summary = PaymentSummary()
        self.criteria = FilterCriteria()
        self.fetch_error: Optional[StoreError] = None
        self._fetch_seq = itertools.count(1)
        self._latest_fetch = 0
        self.editor = PaymentEditor(
            store,
            notifier,
            on_success=self.refresh if refetch_on_update else None,
        )

    # ---------------- fetch & aggregate ----------------
    def refresh(self) -> bool:
        seq = next(self._fetch_seq)
        self._latest_fetch = seq
        try:
            payments = self.store.list_payments()
        except StoreError as e:
            logger.exception("Error fetching payments")
            self.fetch_error = e
            self.notifier.error(MSG_FETCH_FAILED)
            return False

        if seq != self._latest_fetch:
            # A newer fetch started while this one was running; its result wins.
            logger.debug("Discarding stale payment fetch #%s", seq)
            return False

        self.payments = payments
        self.summary = summarize(payments)
        self.fetch_error = None
        return True

    @property
    def total_revenue(self) -> Decimal:
        return self.summary.total_revenue

    @property
    def pending_count(self) -> int:
        return self.summary.pending_count

    # ---------------- filters ----------------
    def set_filters(self, criteria: FilterCriteria) -> None:
        self.criteria = criteria

    def clear_filters(self) -> None:
        self.criteria = clear_filters()

    @property
    def has_active_filters(self) -> bool:
        return has_active_filters(self.criteria)

    @property
    def visible_payments(self) -> List[PaymentRecord]:
        return apply_filters(self.payments, self.criteria, self.tz)

    # ---------------- editor ----------------
    def find(self, payment_id: str) -> PaymentRecord:
        for p in self.payments:
            if p.id == payment_id:
                return p
        raise PaymentNotFound(payment_id)

    def open_editor(self, payment_id: str) -> PaymentEditor:
        self.editor.open(self.find(payment_id))
        return self.editor
