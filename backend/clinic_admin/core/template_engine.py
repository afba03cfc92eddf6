from fastapi.templating import Jinja2Templates
from datetime import datetime
from functools import lru_cache
from zoneinfo import ZoneInfo

from .config import settings
from ..utils.formatting import (
    AMOUNT_PLACEHOLDER,
    METHOD_LABELS,
    NAME_PLACEHOLDER,
    STATUS_BADGES,
    STATUS_LABELS,
    format_amount,
    format_date_id,
    format_rupiah,
    method_label,
    status_label,
)

# -----------------------------------------------------
# 🕓 Clinic timezone
# -----------------------------------------------------
@lru_cache(maxsize=1)
def local_tz() -> ZoneInfo:
    return ZoneInfo(settings.TIMEZONE)

# -----------------------------------------------------
# 📁 Template Directory Setup
# -----------------------------------------------------
# Allow override via env var; defaults to clinic_admin/templates
templates = Jinja2Templates(directory=settings.TEMPLATES_DIR)

# Expose globals to Jinja templates
templates.env.globals.update({
    "datetime": datetime,
    "APP_NAME": settings.PROJECT_NAME,
    "STATUS_LABELS": STATUS_LABELS,
    "STATUS_BADGES": STATUS_BADGES,
    "METHOD_LABELS": METHOD_LABELS,
    "NAME_PLACEHOLDER": NAME_PLACEHOLDER,
    "AMOUNT_PLACEHOLDER": AMOUNT_PLACEHOLDER,
})

templates.env.filters.update({
    "rupiah": format_rupiah,
    "amount": format_amount,
    "tanggal": lambda value: format_date_id(value, local_tz()),
    "status_label": status_label,
    "method_label": method_label,
})
