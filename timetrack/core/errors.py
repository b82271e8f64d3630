import logging
from typing import Dict, List

from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse

logger = logging.getLogger(__name__)


class ActiveTimerError(Exception):
    """Raised when a write would leave more than one running timer"""

    def __init__(self, message: str, active_entry_id: str):
        super().__init__(message)
        self.message = message
        self.active_entry_id = active_entry_id


class LinkedEntriesError(Exception):
    """Raised when deleting a project or task name that time entries still reference"""

    def __init__(self, message: str, entry_count: int):
        super().__init__(message)
        self.message = message
        self.entry_count = entry_count


def flatten_validation_errors(errors) -> Dict[str, List[str]]:
    """Group pydantic error messages by the field they belong to"""
    fields: Dict[str, List[str]] = {}
    for error in errors:
        loc = [str(part) for part in error.get("loc", ())]
        # Drop the request section ("body", "query", "path") when a field follows it
        if len(loc) > 1 and loc[0] in ("body", "query", "path", "header"):
            loc = loc[1:]
        field = ".".join(loc) or "body"
        fields.setdefault(field, []).append(error.get("msg", "Invalid value"))
    return fields


async def validation_exception_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    return JSONResponse(
        status_code=status.HTTP_400_BAD_REQUEST,
        content={
            "detail": "Validation failed",
            "errors": flatten_validation_errors(exc.errors()),
        },
    )


async def active_timer_exception_handler(request: Request, exc: ActiveTimerError) -> JSONResponse:
    return JSONResponse(
        status_code=status.HTTP_409_CONFLICT,
        content={"detail": exc.message, "active_entry_id": exc.active_entry_id},
    )


async def linked_entries_exception_handler(request: Request, exc: LinkedEntriesError) -> JSONResponse:
    return JSONResponse(
        status_code=status.HTTP_409_CONFLICT,
        content={"detail": exc.message, "entry_count": exc.entry_count},
    )


async def unhandled_exception_handler(request: Request, exc: Exception) -> JSONResponse:
    logger.error(f"Unhandled error on {request.method} {request.url.path}", exc_info=exc)
    return JSONResponse(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        content={"detail": "Internal server error"},
    )


def register_exception_handlers(app: FastAPI) -> None:
    app.add_exception_handler(RequestValidationError, validation_exception_handler)
    app.add_exception_handler(ActiveTimerError, active_timer_exception_handler)
    app.add_exception_handler(LinkedEntriesError, linked_entries_exception_handler)
    app.add_exception_handler(Exception, unhandled_exception_handler)
