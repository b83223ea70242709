from enum import Enum
from typing import Optional, Dict, Any


class ErrorCode(str, Enum):
    # General errors
    INTERNAL_SERVER_ERROR = "INTERNAL_SERVER_ERROR"
    VALIDATION_ERROR = "VALIDATION_ERROR"
    NOT_FOUND = "NOT_FOUND"
    HTTP_ERROR = "HTTP_ERROR"

    # Input errors
    MISSING_URL = "MISSING_URL"
    MISSING_CONTENT = "MISSING_CONTENT"
    INVALID_URL = "INVALID_URL"
    MISSING_IMAGE_URL = "MISSING_IMAGE_URL"
    INVALID_IMAGE_URL = "INVALID_IMAGE_URL"

    # Pipeline errors
    FETCH_FAILED = "FETCH_FAILED"
    EXTRACTION_ERROR = "EXTRACTION_ERROR"
    NORMALIZATION_ERROR = "NORMALIZATION_ERROR"
    PROXY_ERROR = "PROXY_ERROR"


class AppException(Exception):
    """Base exception class for the application"""

    def __init__(
        self,
        code: ErrorCode,
        message: str,
        status_code: int = 400,
        details: Optional[Dict[str, Any]] = None
    ):
        self.code = code
        self.message = message
        self.status_code = status_code
        self.details = details or {}
        super().__init__(message)

    def to_dict(self) -> Dict[str, Any]:
        """Convert exception to dictionary for JSON response"""
        result = {
            "success": False,
            "error": self.message,
            "code": self.code.value if isinstance(self.code, ErrorCode) else self.code
        }
        if self.details:
            result["details"] = self.details
        return result
