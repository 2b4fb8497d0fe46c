"""Error taxonomy for the autocorrector.

Every failure that ends a request is raised as an ``AutocorrectorError``
carrying an ``ErrorCode``. The FastAPI app turns it into a JSON body with
the mapped HTTP status, so handlers never build error responses by hand.

Usage:
    raise AutocorrectorError(
        ErrorCode.LINTER_TIMEOUT,
        "ruff did not finish in time",
        details={"timeout_seconds": 30},
    )
"""

from __future__ import annotations

from enum import Enum
from typing import Any, Dict, Optional


class ErrorCode(Enum):
    # Upload / archive errors
    ARCHIVE_INVALID = "ARCHIVE_001"
    ARCHIVE_READ_FAILED = "ARCHIVE_002"
    UPLOAD_INVALID = "UPLOAD_001"
    UPLOAD_MISSING_FILE = "UPLOAD_002"
    UPLOAD_TOO_LARGE = "UPLOAD_003"

    # Linter errors
    LINTER_NOT_INSTALLED = "LINTER_001"
    LINTER_FAILED = "LINTER_002"
    LINTER_TIMEOUT = "LINTER_003"
    LINTER_OUTPUT_INVALID = "LINTER_004"

    # System errors
    INTERNAL_ERROR = "SYSTEM_001"


class AutocorrectorError(Exception):
    """
    Base exception with structured error information.

    Attributes:
        code: ErrorCode enum value
        message: Human-readable error message
        details: Optional dictionary with additional context
        http_status: HTTP status code used for the response
    """

    HTTP_STATUS_MAP: Dict[ErrorCode, int] = {
        ErrorCode.ARCHIVE_INVALID: 400,
        ErrorCode.ARCHIVE_READ_FAILED: 400,
        ErrorCode.UPLOAD_INVALID: 400,
        ErrorCode.UPLOAD_MISSING_FILE: 400,
        ErrorCode.UPLOAD_TOO_LARGE: 413,      # Payload Too Large
        ErrorCode.LINTER_NOT_INSTALLED: 503,  # Service Unavailable
        ErrorCode.LINTER_FAILED: 500,
        ErrorCode.LINTER_TIMEOUT: 504,        # Gateway Timeout
        ErrorCode.LINTER_OUTPUT_INVALID: 502, # Bad Gateway
        ErrorCode.INTERNAL_ERROR: 500,
    }

    def __init__(
        self,
        code: ErrorCode,
        message: str,
        details: Optional[Dict[str, Any]] = None,
        http_status: Optional[int] = None,
    ):
        self.code = code
        self.message = message
        self.details = details or {}
        self.http_status = http_status or self.HTTP_STATUS_MAP.get(code, 500)
        super().__init__(f"[{code.value}] {message}")

    def to_dict(self) -> Dict[str, Any]:
        """Convert error to a JSON-serialisable dictionary."""
        return {
            "code": self.code.value,
            "message": self.message,
            "details": self.details,
            "http_status": self.http_status,
        }


__all__ = ["ErrorCode", "AutocorrectorError"]
