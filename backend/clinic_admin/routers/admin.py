from fastapi import APIRouter, Request, Depends, Form, HTTPException, Query
from fastapi.responses import RedirectResponse, HTMLResponse
from starlette.status import HTTP_302_FOUND
from typing import Optional
from urllib.parse import urlencode
import logging

from ..core.template_engine import templates, local_tz
from ..services.dashboard import PaymentDashboard
from ..services.editor import EditorForm
from ..services.errors import InvalidTransition, PaymentNotFound, PaymentValidationError
from ..services.filters import STATUS_FILTER_OPTIONS, FilterCriteria
from ..services.notifier import MemoryNotifier, Notifier, get_notifier, pop_flashes
from ..services.store import PaymentStore, get_payment_store

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/admin", tags=["Admin"])

DASHBOARD_URL = "/admin/dashboard"


def _dashboard_url(criteria: FilterCriteria, **extra) -> str:
    params = {**criteria.as_query(), **extra}
    return f"{DASHBOARD_URL}?{urlencode(params)}" if params else DASHBOARD_URL


def _render(request: Request, dash: PaymentDashboard, status_code: int = 200):
    editor = dash.editor
    return templates.TemplateResponse(
        "admin/dashboard.html",
        {
            "request": request,
            "title": "Dashboard Administrasi",
            "total_revenue": dash.total_revenue,
            "pending_count": dash.pending_count,
            "payments": dash.visible_payments,
            "source_count": len(dash.payments),
            "criteria": dash.criteria,
            "has_active_filters": dash.has_active_filters,
            "status_options": STATUS_FILTER_OPTIONS,
            "editor": editor,
            "filter_query": urlencode(dash.criteria.as_query()),
            "clear_url": DASHBOARD_URL,
            "cancel_url": _dashboard_url(dash.criteria),
            "flashes": pop_flashes(request),
        },
        status_code=status_code,
    )


# ------------------------------------------------
# 🏠 Admin Home → Redirect
# ------------------------------------------------
@router.get("/", response_class=HTMLResponse)
def admin_home_redirect():
    return RedirectResponse(url=DASHBOARD_URL, status_code=HTTP_302_FOUND)


# ------------------------------------------------
# 📋 Dashboard – summary cards + filters + payment list
# ------------------------------------------------
@router.get("/dashboard", response_class=HTMLResponse)
def dashboard(
    request: Request,
    q: Optional[str] = None,
    status: Optional[str] = None,
    start: Optional[str] = None,
    end: Optional[str] = None,
    process: Optional[str] = None,
    store: PaymentStore = Depends(get_payment_store),
    notifier: Notifier = Depends(get_notifier),
):
    dash = PaymentDashboard(store, notifier, tz=local_tz(), refetch_on_update=False)
    dash.refresh()
    dash.set_filters(FilterCriteria.from_query(q, status, start, end))

    if process:
        try:
            dash.open_editor(process)
        except (PaymentNotFound, InvalidTransition) as e:
            # Only pending payments get the "Proses Bayar" action.
            logger.info("Editor not opened: %s", e)

    return _render(request, dash)


# ------------------------------------------------
# 💳 Process Payment (pending → completed)
# ------------------------------------------------
@router.post("/payments/{payment_id}/process", response_class=HTMLResponse)
def process_payment(
    request: Request,
    payment_id: str,
    amount: str = Form(""),
    payment_method: str = Form("cash"),
    q: Optional[str] = Form(None),
    status: Optional[str] = Form(None),
    start: Optional[str] = Form(None),
    end: Optional[str] = Form(None),
    store: PaymentStore = Depends(get_payment_store),
    notifier: Notifier = Depends(get_notifier),
):
    dash = PaymentDashboard(store, notifier, tz=local_tz(), refetch_on_update=False)
    dash.set_filters(FilterCriteria.from_query(q, status, start, end))
    if not dash.refresh():
        return _render(request, dash, status_code=502)

    try:
        editor = dash.open_editor(payment_id)
    except PaymentNotFound:
        raise HTTPException(status_code=404, detail="Payment not found")
    except InvalidTransition as e:
        raise HTTPException(status_code=409, detail=str(e))

    if editor.submit(EditorForm(amount=amount, payment_method=payment_method)):
        # Redirect → GET refetches the whole list and aggregates.
        return RedirectResponse(url=_dashboard_url(dash.criteria), status_code=HTTP_302_FOUND)

    if isinstance(editor.last_error, PaymentValidationError):
        code = 400
    elif isinstance(editor.last_error, (PaymentNotFound, InvalidTransition)):
        # Row changed between the fetch and the update.
        code = 409
    else:
        code = 502
    return _render(request, dash, status_code=code)


# ------------------------------------------------
# 📊 API: Filtered payments + summary
# ------------------------------------------------
@router.get("/api/payments")
def payments_api(
    q: Optional[str] = Query(None),
    status: Optional[str] = Query(None),
    start: Optional[str] = Query(None),
    end: Optional[str] = Query(None),
    store: PaymentStore = Depends(get_payment_store),
):
    notifier = MemoryNotifier()
    dash = PaymentDashboard(store, notifier, tz=local_tz())
    if not dash.refresh():
        raise HTTPException(status_code=502, detail=notifier.errors[-1])
    dash.set_filters(FilterCriteria.from_query(q, status, start, end))

    visible = dash.visible_payments
    return {
        "summary": {
            "total_revenue": str(dash.total_revenue),
            "pending_count": dash.pending_count,
        },
        "has_active_filters": dash.has_active_filters,
        "count": len(visible),
        "total": len(dash.payments),
        "payments": [
            {
                "id": p.id,
                "patient_name": p.patient_name,
                "amount": str(p.amount) if p.amount is not None else None,
                "payment_method": p.payment_method,
                "status": p.status,
                "created_at": p.created_at.isoformat(),
                "paid_at": p.paid_at.isoformat() if p.paid_at else None,
            }
            for p in visible
        ],
    }
