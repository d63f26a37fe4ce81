class MerchantBIError(ValueError):
    """Base class for query errors surfaced to callers."""


class NotFoundError(MerchantBIError):
    """Raised when a referenced ledger record does not exist."""

    entity = "Record"

    def __init__(self, record_id) -> None:
        self.record_id = record_id
        super().__init__(f"{self.entity} not found.")


class MerchantNotFoundError(NotFoundError):
    entity = "Merchant"


class CustomerNotFoundError(NotFoundError):
    entity = "Customer"


class InvalidArgumentError(MerchantBIError):
    """Raised for filters the caller must fix, e.g. a non-positive limit."""
