from typing import List, Optional


class TraceLedgerError(Exception):
    """Base class for every error the ledger raises on purpose."""

    status_code = 500
    retryable = False

    def __init__(self, message: str, errors: Optional[List[str]] = None):
        super().__init__(message)
        self.message = message
        self.errors = errors or []


# ---------- Validation (400) ----------
class ValidationError(TraceLedgerError):
    status_code = 400


class MissingFieldError(ValidationError):
    def __init__(self, fields: List[str]):
        super().__init__(
            "All fields are required: farmerName, herbName, quantity, latitude, longitude, imageUrl",
            [f"{f} is required" for f in fields],
        )
        self.fields = fields


class InvalidCoordinatesError(ValidationError):
    def __init__(self, errors: List[str]):
        super().__init__(
            "Invalid coordinates. Latitude must be between -90 and 90, longitude between -180 and 180",
            errors,
        )


class InvalidQuantityError(ValidationError):
    def __init__(self, detail: str = "Quantity must be greater than 0"):
        super().__init__("Quantity must be greater than 0", [detail])


class FieldLengthError(ValidationError):
    def __init__(self, errors: List[str]):
        super().__init__("Validation error", errors)


# ---------- Lookup / persistence ----------
class NotFoundError(TraceLedgerError):
    status_code = 404

    def __init__(self, batch_id: str):
        super().__init__("Collection event not found with the provided batch ID")
        self.batch_id = batch_id


class DuplicateBatchIdError(TraceLedgerError):
    status_code = 409
    retryable = True

    def __init__(self, batch_id: str):
        super().__init__("Duplicate batch ID. Please try again.")
        self.batch_id = batch_id


class PersistenceError(TraceLedgerError):
    status_code = 500
    retryable = True

    def __init__(self, message: str = "Database operation failed"):
        super().__init__(message)


# ---------- Verification ----------
class VerificationTimeoutError(TraceLedgerError):
    status_code = 503
    retryable = True

    def __init__(self, timeout: float):
        super().__init__("Herb verification timed out. Please try again.")
        self.timeout = timeout


class VerificationFailedError(TraceLedgerError):
    status_code = 502

    def __init__(self):
        super().__init__("Herb verification failed")
