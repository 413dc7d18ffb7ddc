"""
Domain errors raised by the CRUD layer.

Routers translate them into HTTPException responses carrying a human readable
message and a short machine readable code.
"""
import logging

from fastapi import HTTPException

logger = logging.getLogger(__name__)


class LedgerError(ValueError):
    status_code = 400
    code = "bad_request"

    def __init__(self, message: str, code: str = None, status_code: int = None):
        super().__init__(message)
        self.message = message
        if code is not None:
            self.code = code
        if status_code is not None:
            self.status_code = status_code

    def to_detail(self) -> dict:
        return {"message": self.message, "code": self.code}


class NotFoundError(LedgerError):
    status_code = 404
    code = "not_found"

    def __init__(self, entity: str):
        super().__init__(f"{entity} not found")
        self.entity = entity


class InvalidStateError(LedgerError):
    code = "invalid_state"


class DuplicateError(LedgerError):
    code = "duplicate"


class ConflictError(LedgerError):
    status_code = 409
    code = "conflict"


class InvalidReferenceError(NotFoundError):
    """A request body points at a record that does not exist."""
    status_code = 400


def to_http_exception(e: LedgerError) -> HTTPException:
    logger.warning(f"Request rejected ({e.code}): {e.message}")
    return HTTPException(status_code=e.status_code, detail=e.to_detail())
