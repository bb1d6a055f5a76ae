from __future__ import annotations

from typing import Any, Dict, Optional


class StatisticsError(Exception):
    """Base error of the statistics core; `status_code` is what the API answers with."""

    status_code = 500

    def __init__(self, message: str, details: Optional[Dict[str, Any]] = None):
        self.message = message
        self.details = details or {}
        super().__init__(message)


class InvalidRangeError(StatisticsError):
    """Malformed or out-of-domain date, month or year. Raised before any I/O."""

    status_code = 400


class StoreUnavailableError(StatisticsError):
    """The record store failed to answer a query. The whole report fails."""

    status_code = 503
