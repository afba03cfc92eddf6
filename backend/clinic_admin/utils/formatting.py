# backend/clinic_admin/utils/formatting.py
from datetime import datetime, tzinfo
from decimal import Decimal, ROUND_HALF_UP
from typing import Optional

from ..core.config import settings

MONTHS_ID = [
    "Januari", "Februari", "Maret", "April", "Mei", "Juni",
    "Juli", "Agustus", "September", "Oktober", "November", "Desember",
]

STATUS_LABELS = {
    "pending": "Belum Lunas",
    "completed": "Lunas",
    "cancelled": "Dibatalkan",
}

STATUS_BADGES = {
    "pending": "default",
    "completed": "secondary",
    "cancelled": "outline",
}

METHOD_LABELS = {
    "cash": "Tunai",
    "debit": "Kartu Debit",
    "credit": "Kartu Kredit",
    "transfer": "Transfer Bank",
}

NAME_PLACEHOLDER = "Nama tidak tersedia"
AMOUNT_PLACEHOLDER = "Jumlah belum ditentukan"


def format_number_id(value) -> str:
    """Indonesian grouping: 1.234.567,5 (at most 3 fraction digits)."""
    d = Decimal(str(value or 0)).quantize(Decimal("0.001"), rounding=ROUND_HALF_UP)
    sign = "-" if d < 0 else ""
    int_part, _, frac = f"{abs(d):f}".partition(".")
    frac = frac.rstrip("0")
    grouped = f"{int(int_part):,}".replace(",", ".")
    return sign + grouped + ("," + frac if frac else "")


def format_rupiah(value) -> str:
    return f"{settings.CURRENCY_PREFIX} {format_number_id(value)}"


def format_amount(value) -> str:
    """Row amount, or the placeholder when not yet determined."""
    if value is None or Decimal(str(value)) <= 0:
        return AMOUNT_PLACEHOLDER
    return format_rupiah(value)


def format_date_id(value: Optional[datetime], tz: Optional[tzinfo] = None) -> str:
    if value is None:
        return "-"
    if value.tzinfo is not None and tz is not None:
        value = value.astimezone(tz)
    return f"{value.day} {MONTHS_ID[value.month - 1]} {value.year}"


def status_label(status: str) -> str:
    return STATUS_LABELS.get(status, status)


def method_label(method: Optional[str]) -> str:
    return METHOD_LABELS.get(method or "", method or "")
