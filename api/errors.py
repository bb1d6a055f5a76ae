from __future__ import annotations

from fastapi import HTTPException

from services.statistics import StatisticsError


def http_error(exc: StatisticsError) -> HTTPException:
    """Service error -> HTTPException carrying the error's status and {message, details}."""
    detail = {"message": exc.message}
    if exc.details:
        detail["details"] = exc.details
    return HTTPException(status_code=exc.status_code, detail=detail)
