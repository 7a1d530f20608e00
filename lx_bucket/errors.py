"""
Error types raised by lx_bucket.
"""

from typing import Dict, Any, Optional

from pydantic import BaseModel


class ErrorResponse(BaseModel):
    """Serializable error payload."""

    code: str
    message: str
    details: Dict[str, Any] = {}


class LxBucketException(Exception):
    """Base exception for lx_bucket."""

    def __init__(self, code: str, message: str, details: Optional[Dict[str, Any]] = None):
        self.code = code
        self.message = message
        self.details = details or {}
        super().__init__(message)

    def to_response(self) -> ErrorResponse:
        """Convert to error response."""
        return ErrorResponse(
            code=self.code,
            message=self.message,
            details=self.details
        )


class InvalidParameterError(LxBucketException):
    """A bucket tuning parameter is missing, non-finite or not positive."""

    def __init__(self, parameter: str, value: Any, message: Optional[str] = None):
        self.parameter = parameter
        self.value = value
        super().__init__(
            "INVALID_PARAMETER",
            message or f"{parameter} must be a finite number greater than zero",
            {"parameter": parameter, "value": repr(value)}
        )


class BucketOverflowError(LxBucketException):
    """Raised by the strict drip-in when the bucket overflows.

    The post-drip bucket is attached so the caller can keep using it;
    an overflow does not lock the bucket.
    """

    def __init__(self, bucket: Any, message: str = "Bucket overflow"):
        self.bucket = bucket
        super().__init__(
            "OVERFLOW_ERROR",
            message,
            {"level": bucket.level, "capacity": bucket.capacity}
        )
