"""Response envelope contract shared by every BaaS endpoint.

Wire shape::

    {"result": "SUCCESS" | "FAIL", "data"?, "message"?, "errorCode"?,
     "timestamp"?, "request_id"?, "path"?, "detail"?}
"""

from __future__ import annotations

from typing import Annotated, Any, List, Literal, Optional, Union

from pydantic import BaseModel, ConfigDict, Field, TypeAdapter, model_validator
from pydantic import ValidationError as PydanticValidationError

from .classifier import classify
from .errors import ErrorCode, MalformedResponseError

RESULT_SUCCESS = "SUCCESS"
RESULT_FAIL = "FAIL"


class ValidationDetail(BaseModel):
    field: str
    reason: str

    model_config = ConfigDict(extra="allow")


class SuccessEnvelope(BaseModel):
    result: Literal["SUCCESS"]
    data: Any = None
    message: Optional[str] = None

    model_config = ConfigDict(extra="ignore")

    @model_validator(mode="before")
    @classmethod
    def _no_error_code(cls, raw: Any) -> Any:
        if isinstance(raw, dict) and raw.get("errorCode") is not None:
            raise ValueError("SUCCESS envelope must not carry an errorCode")
        return raw


class FailureEnvelope(BaseModel):
    result: Literal["FAIL"]
    error_code: str = Field(alias="errorCode", min_length=1)
    message: str = ""
    timestamp: Optional[str] = None
    request_id: Optional[str] = None
    path: Optional[str] = None
    detail: Optional[List[ValidationDetail]] = None

    model_config = ConfigDict(populate_by_name=True, extra="ignore")

    @model_validator(mode="after")
    def _detail_only_for_validation(self) -> "FailureEnvelope":
        if self.detail is not None and self.error_code != ErrorCode.VALIDATION_ERROR:
            raise ValueError("detail is only allowed with VALIDATION_ERROR")
        return self


ResponseEnvelope = Annotated[
    Union[SuccessEnvelope, FailureEnvelope], Field(discriminator="result")
]

_envelope_adapter: TypeAdapter[Union[SuccessEnvelope, FailureEnvelope]] = TypeAdapter(
    ResponseEnvelope
)


def parse_envelope(
    raw: Any, *, status_code: Optional[int] = None
) -> Union[SuccessEnvelope, FailureEnvelope]:
    """Validate a decoded JSON body as an envelope or raise MalformedResponseError."""
    if not isinstance(raw, dict):
        raise MalformedResponseError(
            f"Expected a JSON object envelope, got {type(raw).__name__}",
            status_code=status_code,
        )

    result = raw.get("result")
    if result not in (RESULT_SUCCESS, RESULT_FAIL):
        raise MalformedResponseError(
            f"Envelope 'result' must be SUCCESS or FAIL, got {result!r}",
            status_code=status_code,
        )

    try:
        return _envelope_adapter.validate_python(raw)
    except PydanticValidationError as exc:
        raise MalformedResponseError(
            f"Invalid {result} envelope: {exc}", status_code=status_code
        ) from exc


def unwrap(raw: Any, *, status_code: Optional[int] = None) -> Any:
    """Return `data` of a SUCCESS envelope; raise the classified error on FAIL."""
    envelope = parse_envelope(raw, status_code=status_code)
    if isinstance(envelope, FailureEnvelope):
        raise classify(envelope, status_code=status_code)
    if status_code is not None and status_code >= 400:
        raise MalformedResponseError(
            f"SUCCESS envelope with HTTP status {status_code}", status_code=status_code
        )
    return envelope.data


__all__ = [
    "RESULT_SUCCESS",
    "RESULT_FAIL",
    "ValidationDetail",
    "SuccessEnvelope",
    "FailureEnvelope",
    "ResponseEnvelope",
    "parse_envelope",
    "unwrap",
]
