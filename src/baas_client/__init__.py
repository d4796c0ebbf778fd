"""baas_client package exports."""

from .core import (
    AuthError,
    BaaSAPIError,
    BaaSClient,
    BaaSError,
    ConfigurationError,
    ConflictError,
    EnvironmentSource,
    ErrorCode,
    ExpiredError,
    InvalidPhoneError,
    MalformedResponseError,
    NetworkError,
    NotFoundError,
    ProjectContext,
    RateLimitError,
    ServerError,
    ValidationError,
    resolve_project_id,
)
from .tools import (
    check_auth,
    format_phone,
    get_account_info,
    get_faq_post,
    get_notice_post,
    list_faq_posts,
    list_notice_posts,
    login,
    logout,
    register_recipient,
    signup,
    validate_phone,
)

__all__ = [
    # Client
    "BaaSClient",
    "EnvironmentSource",
    "ProjectContext",
    "resolve_project_id",
    # Exceptions
    "ErrorCode",
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
    # Account
    "signup",
    "login",
    "logout",
    "get_account_info",
    "check_auth",
    # Messaging
    "register_recipient",
    "validate_phone",
    "format_phone",
    # Board
    "list_notice_posts",
    "get_notice_post",
    "list_faq_posts",
    "get_faq_post",
]
