"""Core surface for baas-client (transport-agnostic)."""

from .classifier import ERROR_KINDS, classify
from .client import BaaSClient, parse_model, session_cookie_name
from .config import (
    ALL_PROJECT_ID_VARS,
    DEFAULT_BASE_URL,
    LOCAL_BASE_URL,
    EnvironmentSource,
    ProjectContext,
    load_env_config,
    resolve_base_url,
    resolve_project_context,
    resolve_project_id,
)
from .envelope import (
    FailureEnvelope,
    ResponseEnvelope,
    SuccessEnvelope,
    ValidationDetail,
    parse_envelope,
    unwrap,
)
from .errors import (
    ERROR_CODE_STATUS,
    AuthError,
    BaaSAPIError,
    BaaSError,
    ConfigurationError,
    ConflictError,
    ErrorCode,
    ExpiredError,
    InvalidPhoneError,
    MalformedResponseError,
    NetworkError,
    NotFoundError,
    RateLimitError,
    ServerError,
    ValidationError,
)
from .registry import (
    discover_tool_modules,
    iter_tool_functions,
    register_discovered_tools,
)

__all__ = [
    # Client
    "BaaSClient",
    "parse_model",
    "session_cookie_name",
    # Config
    "EnvironmentSource",
    "ProjectContext",
    "resolve_project_id",
    "resolve_project_context",
    "resolve_base_url",
    "load_env_config",
    "ALL_PROJECT_ID_VARS",
    "DEFAULT_BASE_URL",
    "LOCAL_BASE_URL",
    # Envelope
    "SuccessEnvelope",
    "FailureEnvelope",
    "ResponseEnvelope",
    "ValidationDetail",
    "parse_envelope",
    "unwrap",
    # Errors
    "ErrorCode",
    "ERROR_CODE_STATUS",
    "ERROR_KINDS",
    "classify",
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
    # Registry helpers
    "discover_tool_modules",
    "iter_tool_functions",
    "register_discovered_tools",
]
