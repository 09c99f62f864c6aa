"""Shared response helpers: caller errors are reported in-band as {"action": "FAILED", "error": ...}."""

from fastapi import HTTPException
from fastapi.responses import JSONResponse

from services.errors import AssignmentError, ConcurrentModificationError


def failed(error: AssignmentError) -> JSONResponse:
    """Validation errors keep HTTP 200; missing/duplicate references use 404/409."""
    return JSONResponse(
        status_code=error.status_code,
        content={"action": "FAILED", "error": error.message},
    )


def conflict(error: ConcurrentModificationError) -> HTTPException:
    # Raised (not returned) so the request session rolls back.
    return HTTPException(
        status_code=409,
        detail={"action": "FAILED", "error": "Concurrent modification, retry the request"},
    )
