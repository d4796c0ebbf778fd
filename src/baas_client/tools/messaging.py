from __future__ import annotations

import json
import re
from typing import Any, Dict, Optional
from urllib.parse import quote

from baas_client.core.client import BaaSClient
from baas_client.core.errors import InvalidPhoneError
from baas_client.models import RecipientCreateRequest

PHONE_RE = re.compile(r"010-[0-9]{4}-[0-9]{4}")
_NON_DIGIT_RE = re.compile(r"[^0-9]")


def validate_phone(phone: str) -> bool:
    """True for the 010-XXXX-XXXX mobile format."""
    return bool(PHONE_RE.fullmatch(phone or ""))


def format_phone(value: str) -> str:
    """
    Progressively format digits as 010-XXXX-XXXX while the user types.
    Non-digits are dropped and input is cut at 11 digits; idempotent.
    """
    digits = _NON_DIGIT_RE.sub("", value or "")
    if len(digits) <= 3:
        return digits
    if len(digits) <= 7:
        return f"{digits[:3]}-{digits[3:]}"
    return f"{digits[:3]}-{digits[3:7]}-{digits[7:11]}"


def _recipient_body(request: RecipientCreateRequest) -> Dict[str, Any]:
    # Server stores metadata as a JSON string; blank description is a single space.
    return {
        "name": request.name,
        "phone": request.phone,
        "description": request.description or " ",
        "data": (
            json.dumps(request.metadata, ensure_ascii=False)
            if request.metadata
            else "{}"
        ),
    }


async def register_recipient(
    client: BaaSClient,
    name: str,
    phone: str,
    *,
    description: Optional[str] = None,
    metadata: Optional[Dict[str, Any]] = None,
    project_id: Optional[str] = None,
) -> Dict[str, Any]:
    """
    Register a contact (reservation, inquiry, newsletter...) for the project.

    The phone must already be in 010-XXXX-XXXX form; otherwise
    InvalidPhoneError is raised before any request is sent. `metadata` is
    stored server-side as a JSON string.
    """
    if not validate_phone(phone):
        raise InvalidPhoneError(
            f"Invalid phone number {phone!r}; expected 010-XXXX-XXXX"
        )

    request = RecipientCreateRequest(
        name=name, phone=phone, description=description, metadata=metadata
    )
    resolved = client.resolve_project_id(project_id)
    return await client.post(
        f"/recipient/{quote(resolved, safe='')}",
        json=_recipient_body(request),
        operation="register_recipient",
    )


__all__ = ["PHONE_RE", "validate_phone", "format_phone", "register_recipient"]
