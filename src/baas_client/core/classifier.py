from __future__ import annotations

from typing import TYPE_CHECKING, Dict, Optional, Type

from .errors import (
    AuthError,
    BaaSAPIError,
    ConflictError,
    ErrorCode,
    ExpiredError,
    NotFoundError,
    RateLimitError,
    ServerError,
    ValidationError,
)

if TYPE_CHECKING:
    from .envelope import FailureEnvelope

ERROR_KINDS: Dict[ErrorCode, Type[BaaSAPIError]] = {
    ErrorCode.INVALID_USER: AuthError,
    ErrorCode.UNAUTHORIZED: AuthError,
    ErrorCode.INVALID_TOKEN: AuthError,
    ErrorCode.TOKEN_EXPIRED: AuthError,
    ErrorCode.VALIDATION_ERROR: ValidationError,
    ErrorCode.INVALID_REQUEST: ValidationError,
    ErrorCode.BAD_REQUEST: ValidationError,
    ErrorCode.INVALID_CODE: ValidationError,
    ErrorCode.ALREADY_EXISTS: ConflictError,
    ErrorCode.ALREADY_COMPLETED: ConflictError,
    ErrorCode.EXPIRED: ExpiredError,
    ErrorCode.RATE_LIMIT_EXCEEDED: RateLimitError,
    ErrorCode.MAX_ATTEMPTS_EXCEEDED: RateLimitError,
    ErrorCode.NOT_FOUND: NotFoundError,
    ErrorCode.INTERNAL_SERVER_ERROR: ServerError,
    ErrorCode.NOT_IMPLEMENTED: ServerError,
    ErrorCode.EXTERNAL_SERVER_ERROR: ServerError,
    ErrorCode.WEBHOOK_ERROR: ServerError,
    ErrorCode.FCM_SUBSCRIBE_FAILED: ServerError,
    ErrorCode.UNSUPPORTED_VENDOR: ServerError,
    ErrorCode.UNSUPPORTED_METHOD: ServerError,
}


def check_complete(kinds: Dict[ErrorCode, Type[BaaSAPIError]]) -> None:
    """Raise if any ErrorCode has no kind."""
    missing = [code.value for code in ErrorCode if code not in kinds]
    if missing:
        raise RuntimeError(f"ErrorCode(s) without an error kind: {', '.join(missing)}")


check_complete(ERROR_KINDS)


def kind_for_status(status_code: Optional[int]) -> Type[BaaSAPIError]:
    """Best-effort kind for codes the SDK doesn't know yet."""
    if status_code in (401, 403):
        return AuthError
    if status_code == 404:
        return NotFoundError
    if status_code == 409:
        return ConflictError
    if status_code == 410:
        return ExpiredError
    if status_code == 429:
        return RateLimitError
    if status_code is not None and 400 <= status_code < 500:
        return ValidationError
    return ServerError


def kind_for(error_code: str, status_code: Optional[int] = None) -> Type[BaaSAPIError]:
    code = ErrorCode.lookup(error_code)
    if code is None:
        return kind_for_status(status_code)
    return ERROR_KINDS[code]


def classify(
    failure: "FailureEnvelope", *, status_code: Optional[int] = None
) -> BaaSAPIError:
    """
    Map a FAIL envelope to a typed error.
    - Known codes use ERROR_KINDS; unknown ones fall back to the HTTP status
    - errorCode, message, request_id, timestamp, path and detail are preserved
    """
    cls = kind_for(failure.error_code, status_code)
    detail = (
        [d.model_dump() for d in failure.detail] if failure.detail is not None else None
    )
    return cls(
        error_code=failure.error_code,
        message=failure.message or failure.error_code,
        status_code=status_code,
        request_id=failure.request_id,
        timestamp=failure.timestamp,
        path=failure.path,
        detail=detail,
    )


__all__ = ["ERROR_KINDS", "check_complete", "classify", "kind_for", "kind_for_status"]
