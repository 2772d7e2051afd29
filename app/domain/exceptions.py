from enum import Enum
from app.core.utils.serialization import normalize_ctx


class AppError(Exception):
    def __init__(self, message: str = "", *, ctx: dict | None = None) -> None:
        super().__init__(message or self.__class__.__name__)
        self.ctx = normalize_ctx(ctx or {})


class NotFound(AppError):
    pass
class Forbidden(AppError):
    pass
class Conflict(AppError):
    pass
class InvalidInput(AppError):
    pass
class Unprocessable(AppError):
    pass


class ScanFailure(str, Enum):
    MISSING_CODE = "MISSING_CODE"
    INVALID_FORMAT = "INVALID_FORMAT"
    NOT_FOUND = "NOT_FOUND"
    NOT_YET_CONFIRMED = "NOT_YET_CONFIRMED"
    ALREADY_USED = "ALREADY_USED"
    CANCELLED = "CANCELLED"
    UNKNOWN_STATUS = "UNKNOWN_STATUS"


class ScanRejected(AppError):
    """A scanned ticket was refused at the door. `reason` drives the HTTP status."""

    def __init__(self, reason: ScanFailure, message: str, *, ctx: dict | None = None) -> None:
        super().__init__(message, ctx=ctx)
        self.reason = reason
