from __future__ import annotations

import logging
from typing import Any, Dict

OBSERVABILITY_LOGGER = "baas_client.observability"

RESERVED_LOG_KEYS = {
    "name",
    "msg",
    "args",
    "levelname",
    "levelno",
    "pathname",
    "filename",
    "module",
    "exc_info",
    "exc_text",
    "stack_info",
    "lineno",
    "funcName",
    "created",
    "msecs",
    "relativeCreated",
    "thread",
    "threadName",
    "processName",
    "process",
    "message",
    "asctime",
}

# Never emitted, whatever the caller passes in.
SECRET_KEYS = {"user_pw", "password", "cookie", "cookies", "access_token"}


def _clean_fields(fields: Dict[str, Any]) -> Dict[str, Any]:
    return {
        k: v
        for k, v in fields.items()
        if k not in RESERVED_LOG_KEYS and k not in SECRET_KEYS
    }


def log_event(
    event: str,
    logger: logging.Logger | None = None,
    *,
    level: int = logging.INFO,
    **fields: Any,
) -> None:
    """
    Minimal structured logging helper.
    - Passes fields through `extra` so LogfmtFormatter can include them.
    - Drops reserved LogRecord attributes and secret-looking keys.
    """
    log = logger or logging.getLogger(OBSERVABILITY_LOGGER)
    log.log(level, event, extra=_clean_fields(fields))


__all__ = ["log_event", "OBSERVABILITY_LOGGER"]
