from datetime import datetime, timezone
from decimal import Decimal

import pytest

from clinic_admin.services.editor import (
    MSG_AMOUNT_PRECISION,
    MSG_AMOUNT_TOO_LARGE,
    MSG_FAILED,
    MSG_INVALID_AMOUNT,
    MSG_SUCCESS,
    EditorForm,
    PaymentEditor,
    amount_text,
    parse_amount,
)
from clinic_admin.services.errors import InvalidTransition, PaymentValidationError

from conftest import make_payment

PAID_AT = datetime(2024, 5, 2, 9, 30, tzinfo=timezone.utc)


@pytest.fixture
def refetches():
    return []


@pytest.fixture
def editor(store, notifier, refetches):
    return PaymentEditor(store, notifier, on_success=lambda: refetches.append(True), clock=lambda: PAID_AT)


def test_open_prefills_empty_amount_for_zero(editor, sample_payments):
    editor.open(sample_payments[0])
    assert editor.is_open
    assert editor.form == EditorForm(amount="", payment_method="cash")


def test_open_prefills_existing_amount_and_method(editor):
    payment = make_payment(9, amount=Decimal("150000"), payment_method="transfer")
    editor.open(payment)
    assert editor.form.amount == "150000"
    assert editor.form.payment_method == "transfer"


@pytest.mark.parametrize(
    "amount, text",
    [(None, ""), (Decimal("0"), ""), (Decimal("150000.00"), "150000"), (Decimal("12500.50"), "12500.5")],
)
def test_amount_text(amount, text):
    assert amount_text(amount) == text


def test_open_rejects_non_pending(editor, sample_payments):
    with pytest.raises(InvalidTransition):
        editor.open(sample_payments[1])
    assert not editor.is_open


@pytest.mark.parametrize("amount", ["", "0", "-5000", "abc", "NaN", "Infinity"])
def test_invalid_amount_never_reaches_store(editor, store, notifier, sample_payments, amount):
    editor.open(sample_payments[0])
    assert editor.submit(EditorForm(amount=amount, payment_method="cash")) is False

    assert store.updates == []
    assert editor.is_open
    assert editor.form.amount == amount
    assert isinstance(editor.last_error, PaymentValidationError)
    assert notifier.errors == [MSG_INVALID_AMOUNT]


def test_invalid_method_is_rejected(editor, store, sample_payments):
    editor.open(sample_payments[0])
    assert editor.submit(EditorForm(amount="10000", payment_method="bitcoin")) is False
    assert store.updates == []
    assert editor.is_open


def test_successful_submit_completes_payment(editor, store, notifier, refetches, sample_payments):
    editor.open(sample_payments[0])
    assert editor.submit(EditorForm(amount="175000", payment_method="debit")) is True

    assert store.updates == [
        ("1", {
            "amount": Decimal("175000"),
            "payment_method": "debit",
            "status": "completed",
            "paid_at": PAID_AT,
        })
    ]
    assert notifier.successes == [MSG_SUCCESS]
    assert not editor.is_open
    assert editor.selected is None
    assert editor.form == EditorForm()
    assert refetches == [True]

    updated = {p.id: p for p in store.list_payments()}["1"]
    assert updated.status == "completed"
    assert updated.paid_at == PAID_AT


def test_store_failure_keeps_editor_open_with_values(editor, store, notifier, refetches, sample_payments):
    store.fail_update = True
    editor.open(sample_payments[0])
    form = EditorForm(amount="20000", payment_method="credit")

    assert editor.submit(form) is False
    assert editor.is_open
    assert editor.form == form
    assert not editor.is_submitting
    assert notifier.errors == [MSG_FAILED]
    assert refetches == []


def test_retry_after_failure(editor, store, sample_payments):
    store.fail_update = True
    editor.open(sample_payments[0])
    editor.submit(EditorForm(amount="20000", payment_method="credit"))

    store.fail_update = False
    assert editor.submit() is True
    assert store.updates[0][1]["amount"] == Decimal("20000")


def test_submit_while_in_flight_is_ignored(editor, store, sample_payments):
    editor.open(sample_payments[0])
    editor.is_submitting = True
    assert editor.submit(EditorForm(amount="1000")) is False
    assert store.updates == []


def test_cancel_resets_without_store_call(editor, store, sample_payments):
    editor.open(sample_payments[0])
    editor.form.amount = "5000"
    editor.cancel()
    assert not editor.is_open
    assert editor.form == EditorForm()
    assert store.updates == []


def test_submit_without_open_editor_does_nothing(editor, store):
    assert editor.submit(EditorForm(amount="1000")) is False
    assert store.updates == []


@pytest.mark.parametrize(
    "amount, message",
    [
        ("0.001", MSG_AMOUNT_PRECISION),
        ("12500.555", MSG_AMOUNT_PRECISION),
        ("1e20", MSG_AMOUNT_TOO_LARGE),
        ("1000000000000", MSG_AMOUNT_TOO_LARGE),
    ],
)
def test_amount_must_fit_the_stored_column(editor, store, notifier, sample_payments, amount, message):
    editor.open(sample_payments[0])
    assert editor.submit(EditorForm(amount=amount, payment_method="cash")) is False
    assert store.updates == []
    assert editor.is_open
    assert notifier.errors == [message]


@pytest.mark.parametrize(
    "text, value",
    [("0.01", Decimal("0.01")), ("0.010", Decimal("0.01")), ("999999999999.99", Decimal("999999999999.99"))],
)
def test_parse_amount_accepts_column_values(text, value):
    assert parse_amount(text) == value
