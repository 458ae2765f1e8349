"""
Domain error taxonomy

Every error carries the HTTP status it maps to and enough detail for the
terminal to render a message. Handlers in barpos.main turn them into JSON.
"""

from typing import Any, Dict, Optional

from fastapi import Request, status
from fastapi.responses import JSONResponse
import structlog

logger = structlog.get_logger(__name__)


class POSError(Exception):
    """Base class for all floor/session/order errors"""

    status_code: int = status.HTTP_400_BAD_REQUEST
    code: str = "pos_error"

    def __init__(self, message: str, **details: Any):
        super().__init__(message)
        self.message = message
        self.details: Dict[str, Any] = details

    def to_dict(self) -> Dict[str, Any]:
        return {
            "error": self.message,
            "code": self.code,
            "details": {key: str(value) for key, value in self.details.items()},
        }


class ValidationError(POSError):
    """Malformed input: non-positive quantity, blank name, bad table number"""

    status_code = status.HTTP_422_UNPROCESSABLE_ENTITY
    code = "validation_error"


class NotFoundError(POSError):
    """Unknown table, product or session id"""

    status_code = status.HTTP_404_NOT_FOUND
    code = "not_found"


class InvalidStateError(POSError):
    """Operation not legal for the current table/session status"""

    status_code = status.HTTP_409_CONFLICT
    code = "invalid_state"


class InvalidTransitionError(POSError):
    """Illegal manual table status change"""

    status_code = status.HTTP_409_CONFLICT
    code = "invalid_transition"


class ConflictError(POSError):
    """Duplicate table number"""

    status_code = status.HTTP_409_CONFLICT
    code = "conflict"


class TableBusyError(POSError):
    """Another terminal holds the table for longer than the lock timeout"""

    status_code = status.HTTP_503_SERVICE_UNAVAILABLE
    code = "table_busy"


async def pos_error_handler(request: Request, exc: POSError) -> JSONResponse:
    """Render a POSError as a JSON response"""
    logger.warning(
        "Request rejected",
        path=request.url.path,
        method=request.method,
        code=exc.code,
        error=exc.message,
    )
    return JSONResponse(status_code=exc.status_code, content=exc.to_dict())


def not_found(kind: str, identifier: Optional[Any]) -> NotFoundError:
    """Build a NotFoundError for a missing entity"""
    return NotFoundError(f"{kind} not found", **{f"{kind.lower()}_id": identifier})
