"""
Shared error handling for the ACL decision engine.
"""

from typing import Dict, Any, Optional
from pydantic import BaseModel


class ErrorResponse(BaseModel):
    """Standard error response format."""

    code: str
    message: str
    details: Dict[str, Any] = {}


class AccessLayerException(Exception):
    """Base exception for the access layer."""

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


class AccessError(AccessLayerException):
    """Errors raised by the ACL engine."""

    def __init__(self, message: str = "Access evaluation failed", details: Optional[Dict[str, Any]] = None,
                 code: str = "ACCESS_ERROR"):
        super().__init__(code, message, details)


class AclDecodeError(AccessError):
    """An encoded ACL could not be decoded.

    ``details`` carries the cursor ``position`` and a ``snippet`` of the
    surrounding text so corrupt stored data can be located.
    """

    code = "ACL_DECODE_ERROR"

    def __init__(self, message: str = "Malformed ACL", details: Optional[Dict[str, Any]] = None):
        super().__init__(message, details, code=type(self).code)

    @property
    def position(self) -> Optional[int]:
        return self.details.get("position")


class TruncatedError(AclDecodeError):
    """Input ended while more characters were required."""

    code = "ACL_TRUNCATED"


class MalformedError(AclDecodeError):
    """A string, length or structural field does not parse."""

    code = "ACL_MALFORMED"


class BadPrivilegeFlagError(AclDecodeError):
    """A privilege list character is neither an allow nor a deny flag."""

    code = "ACL_BAD_PRIVILEGE_FLAG"


class BadWhoTypeError(AclDecodeError):
    """A who-kind character is outside the known set."""

    code = "ACL_BAD_WHO_TYPE"


class InvalidStateError(AccessError):
    """Caller misuse, e.g. a privilege index outside the table."""

    def __init__(self, message: str = "Invalid state", details: Optional[Dict[str, Any]] = None):
        super().__init__(message, details, code="ACL_INVALID_STATE")
