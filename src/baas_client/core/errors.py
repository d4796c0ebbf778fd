from __future__ import annotations

from enum import Enum
from typing import Any, Dict, List, Optional


class ErrorCode(str, Enum):
    # auth
    INVALID_USER = "INVALID_USER"
    UNAUTHORIZED = "UNAUTHORIZED"
    INVALID_TOKEN = "INVALID_TOKEN"
    TOKEN_EXPIRED = "TOKEN_EXPIRED"
    # request shape
    NOT_FOUND = "NOT_FOUND"
    BAD_REQUEST = "BAD_REQUEST"
    INVALID_REQUEST = "INVALID_REQUEST"
    VALIDATION_ERROR = "VALIDATION_ERROR"
    # state
    ALREADY_EXISTS = "ALREADY_EXISTS"
    ALREADY_COMPLETED = "ALREADY_COMPLETED"
    EXPIRED = "EXPIRED"
    # limits
    RATE_LIMIT_EXCEEDED = "RATE_LIMIT_EXCEEDED"
    MAX_ATTEMPTS_EXCEEDED = "MAX_ATTEMPTS_EXCEEDED"
    INVALID_CODE = "INVALID_CODE"
    # server
    INTERNAL_SERVER_ERROR = "INTERNAL_SERVER_ERROR"
    NOT_IMPLEMENTED = "NOT_IMPLEMENTED"
    EXTERNAL_SERVER_ERROR = "EXTERNAL_SERVER_ERROR"
    WEBHOOK_ERROR = "WEBHOOK_ERROR"
    # vendor
    UNSUPPORTED_VENDOR = "UNSUPPORTED_VENDOR"
    UNSUPPORTED_METHOD = "UNSUPPORTED_METHOD"
    FCM_SUBSCRIBE_FAILED = "FCM_SUBSCRIBE_FAILED"

    @classmethod
    def lookup(cls, value: Any) -> Optional["ErrorCode"]:
        """Return the member for a wire value, or None for codes we don't know."""
        try:
            return cls(value)
        except ValueError:
            return None


# Canonical HTTP status per code. Wire contract; keep in declaration order.
ERROR_CODE_STATUS: Dict[ErrorCode, int] = {
    ErrorCode.INVALID_USER: 400,
    ErrorCode.UNAUTHORIZED: 401,
    ErrorCode.INVALID_TOKEN: 401,
    ErrorCode.TOKEN_EXPIRED: 401,
    ErrorCode.NOT_FOUND: 404,
    ErrorCode.BAD_REQUEST: 400,
    ErrorCode.INVALID_REQUEST: 400,
    ErrorCode.VALIDATION_ERROR: 400,
    ErrorCode.ALREADY_EXISTS: 409,
    ErrorCode.ALREADY_COMPLETED: 400,
    ErrorCode.EXPIRED: 410,
    ErrorCode.RATE_LIMIT_EXCEEDED: 429,
    ErrorCode.MAX_ATTEMPTS_EXCEEDED: 429,
    ErrorCode.INVALID_CODE: 400,
    ErrorCode.INTERNAL_SERVER_ERROR: 500,
    ErrorCode.NOT_IMPLEMENTED: 501,
    ErrorCode.EXTERNAL_SERVER_ERROR: 502,
    ErrorCode.WEBHOOK_ERROR: 500,
    ErrorCode.UNSUPPORTED_VENDOR: 400,
    ErrorCode.UNSUPPORTED_METHOD: 405,
    ErrorCode.FCM_SUBSCRIBE_FAILED: 500,
}


class BaaSError(Exception):
    """Base error for every failure surfaced by the SDK."""


# --- Server-declared failures ------------------------------------------------ #


class BaaSAPIError(BaaSError):
    """A FAIL envelope returned by the server, tagged with its semantic kind."""

    def __init__(
        self,
        *,
        error_code: str,
        message: str,
        status_code: Optional[int] = None,
        request_id: Optional[str] = None,
        timestamp: Optional[str] = None,
        path: Optional[str] = None,
        detail: Optional[List[Dict[str, str]]] = None,
    ):
        super().__init__(f"{error_code}: {message}" if message else error_code)
        self.error_code = error_code
        self.message = message
        self.status_code = status_code
        self.request_id = request_id
        self.timestamp = timestamp
        self.path = path
        self.detail = detail

    @property
    def code(self) -> Optional[ErrorCode]:
        return ErrorCode.lookup(self.error_code)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "kind": type(self).__name__,
            "error_code": self.error_code,
            "message": self.message,
            "status_code": self.status_code,
            "request_id": self.request_id,
            "timestamp": self.timestamp,
            "path": self.path,
            "detail": self.detail,
        }


class AuthError(BaaSAPIError):
    pass


class ValidationError(BaaSAPIError):
    @property
    def details(self) -> List[Dict[str, str]]:
        return self.detail or []

    def field_messages(self) -> List[str]:
        """Per-field messages for display; the top-level message when no detail."""
        if not self.detail:
            return [self.message]
        return [f"{d['field']}: {d['reason']}" for d in self.detail]


class ConflictError(BaaSAPIError):
    pass


class ExpiredError(BaaSAPIError):
    pass


class RateLimitError(BaaSAPIError):
    pass


class NotFoundError(BaaSAPIError):
    pass


class ServerError(BaaSAPIError):
    pass


# --- Client-side failures (never sent by the server) ------------------------- #


class ConfigurationError(BaaSError):
    pass


class MalformedResponseError(BaaSError):
    def __init__(self, message: str, *, status_code: Optional[int] = None):
        super().__init__(message)
        self.status_code = status_code


class NetworkError(BaaSError):
    pass


class InvalidPhoneError(BaaSError, ValueError):
    pass


__all__ = [
    "ErrorCode",
    "ERROR_CODE_STATUS",
    "BaaSError",
    "BaaSAPIError",
    "AuthError",
    "ValidationError",
    "ConflictError",
    "ExpiredError",
    "RateLimitError",
    "NotFoundError",
    "ServerError",
    "ConfigurationError",
    "MalformedResponseError",
    "NetworkError",
    "InvalidPhoneError",
]
