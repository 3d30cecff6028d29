# core/errors.py
"""Scan error taxonomy.

Every failure a scan can surface is a ``ScanError`` carrying a stable
``code``, a human message and a ``retryable`` flag, so callers can tell
"try again" (collaborator down, timeout) from "fix the request".
"""
from typing import Any, Dict, Optional


class ScanError(Exception):
    code = "SCAN_ERROR"
    retryable = False
    http_status = 500

    def __init__(self, message: str, details: Optional[Dict[str, Any]] = None):
        super().__init__(message)
        self.message = message
        self.details = details or {}

    def to_dict(self) -> Dict[str, Any]:
        return {
            "ok": False,
            "error": {
                "code": self.code,
                "message": self.message,
                "retryable": self.retryable,
                "details": self.details,
            },
        }


class InvalidInput(ScanError):
    code = "INVALID_INPUT"
    http_status = 400


class RouteUnavailable(ScanError):
    code = "ROUTE_UNAVAILABLE"
    retryable = True
    http_status = 503


class ReportStoreUnavailable(ScanError):
    code = "REPORT_STORE_UNAVAILABLE"
    retryable = True
    http_status = 503


class ScanTimeout(ScanError):
    code = "SCAN_TIMEOUT"
    retryable = True
    http_status = 504
