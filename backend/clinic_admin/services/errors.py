"""Exception types shared by the payment dashboard services."""


class DashboardError(Exception):
    """Base class for every error raised by the dashboard services."""


class StoreError(DashboardError):
    """The payment store failed to read or write (database / network)."""


class PaymentDecodeError(StoreError):
    """A record returned by the store does not have the expected shape."""


class PaymentValidationError(DashboardError):
    """User input failed a local precondition; never reaches the store."""


class PaymentNotFound(DashboardError):
    def __init__(self, payment_id: str):
        super().__init__(f"Payment {payment_id} not found")
        self.payment_id = payment_id


class InvalidTransition(DashboardError):
    def __init__(self, payment_id: str, status: str):
        super().__init__(f"Payment {payment_id} is '{status}', only pending payments can be processed")
        self.payment_id = payment_id
        self.status = status
