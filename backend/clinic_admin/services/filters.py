# backend/clinic_admin/services/filters.py
"""
Client-side filtering of the fetched payment list.

All active criteria are AND-ed together and the source order
(created_at descending) is preserved. Dates are compared as local
calendar days in the configured clinic timezone.
"""
from __future__ import annotations

from dataclasses import dataclass
from datetime import date, datetime, time, tzinfo
from typing import Callable, List, Optional, Sequence

from ..schemas.payment import PAYMENT_STATUSES, PaymentRecord

STATUS_ALL = "all"
STATUS_FILTER_OPTIONS = (STATUS_ALL,) + PAYMENT_STATUSES

END_OF_DAY = time(23, 59, 59, 999000)

Predicate = Callable[[PaymentRecord], bool]


def _parse_date(value: Optional[str]) -> Optional[date]:
    if not value:
        return None
    try:
        return date.fromisoformat(value.strip())
    except ValueError:
        return None


@dataclass(frozen=True)
class FilterCriteria:
    search_name: str = ""
    status: str = STATUS_ALL
    start_date: Optional[date] = None
    end_date: Optional[date] = None

    @classmethod
    def from_query(
        cls,
        q: Optional[str] = None,
        status: Optional[str] = None,
        start: Optional[str] = None,
        end: Optional[str] = None,
    ) -> "FilterCriteria":
        status = (status or STATUS_ALL).strip().lower()
        if status not in STATUS_FILTER_OPTIONS:
            status = STATUS_ALL
        return cls(
            search_name=q or "",
            status=status,
            start_date=_parse_date(start),
            end_date=_parse_date(end),
        )

    @property
    def search_text(self) -> str:
        return self.search_name.strip()

    def as_query(self) -> dict:
        """Query-string form, used to keep filters across redirects."""
        params = {}
        if self.search_name:
            params["q"] = self.search_name
        if self.status != STATUS_ALL:
            params["status"] = self.status
        if self.start_date:
            params["start"] = self.start_date.isoformat()
        if self.end_date:
            params["end"] = self.end_date.isoformat()
        return params


def clear_filters() -> FilterCriteria:
    return FilterCriteria()


def has_active_filters(criteria: FilterCriteria) -> bool:
    return bool(
        criteria.search_text
        or criteria.status != STATUS_ALL
        or criteria.start_date
        or criteria.end_date
    )


def to_local(value: datetime, tz: Optional[tzinfo] = None) -> datetime:
    """Naive local wall-clock time; naive inputs are taken as already local."""
    if value.tzinfo is None:
        return value
    if tz is not None:
        value = value.astimezone(tz)
    return value.replace(tzinfo=None)


def build_predicates(criteria: FilterCriteria, tz: Optional[tzinfo] = None) -> List[Predicate]:
    predicates: List[Predicate] = []

    needle = criteria.search_text.lower()
    if needle:
        predicates.append(
            lambda p: p.patient_name is not None and needle in p.patient_name.lower()
        )

    if criteria.status != STATUS_ALL:
        status = criteria.status
        predicates.append(lambda p: p.status == status)

    if criteria.start_date:
        lower = datetime.combine(criteria.start_date, time.min)
        predicates.append(lambda p: to_local(p.created_at, tz) >= lower)

    if criteria.end_date:
        upper = datetime.combine(criteria.end_date, END_OF_DAY)
        predicates.append(lambda p: to_local(p.created_at, tz) <= upper)

    return predicates


def apply_filters(
    payments: Sequence[PaymentRecord],
    criteria: FilterCriteria,
    tz: Optional[tzinfo] = None,
) -> List[PaymentRecord]:
    predicates = build_predicates(criteria, tz)
    return [p for p in payments if all(pred(p) for pred in predicates)]
