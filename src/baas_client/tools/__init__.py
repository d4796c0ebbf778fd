"""
Domain bindings for the BaaS endpoints.

Every public coroutine takes the shared BaaSClient as its first parameter so
the registry can expose it as a tool.
"""

from .account import check_auth, get_account_info, login, logout, signup
from .board import get_faq_post, get_notice_post, list_faq_posts, list_notice_posts
from .messaging import format_phone, register_recipient, validate_phone

__all__ = [
    "signup",
    "login",
    "logout",
    "get_account_info",
    "check_auth",
    "register_recipient",
    "validate_phone",
    "format_phone",
    "list_notice_posts",
    "get_notice_post",
    "list_faq_posts",
    "get_faq_post",
]
