import json

import pytest
import respx
from baas_client.core.errors import InvalidPhoneError, ValidationError
from baas_client.models import Recipient
from baas_client.tools.messaging import (
    format_phone,
    register_recipient,
    validate_phone,
)
from conftest import BASE_URL, PROJECT_ID, failure, success
from httpx import Response

RECIPIENT = {
    "id": "r1",
    "project_id": PROJECT_ID,
    "name": "Hong",
    "phone": "010-1234-5678",
    "description": None,
    "data": "{}",
    "created_at": "2025-11-26T10:00:00+09:00",
    "removed_at": None,
}


@pytest.mark.parametrize(
    "phone,ok",
    [
        ("010-1234-5678", True),
        ("010-123-5678", False),
        ("01012345678", False),
        ("011-1234-5678", False),
        ("010-1234-56789", False),
        ("", False),
        ("010-1234-5678\n", False),
        (" 010-1234-5678", False),
        ("010-\u0661\u0662\u0663\u0664-\u0665\u0666\u0667\u0668", False),
    ],
)
def test_validate_phone(phone, ok):
    assert validate_phone(phone) is ok


@pytest.mark.parametrize(
    "raw,expected",
    [
        ("01012345678", "010-1234-5678"),
        ("010", "010"),
        ("0101", "010-1"),
        ("0101234", "010-1234"),
        ("01012345", "010-1234-5"),
        ("010 1234 5678", "010-1234-5678"),
        ("010123456789", "010-1234-5678"),
        ("", ""),
        ("010-\u0661\u0662\u0663\u0664-5678", "010-5678"),
    ],
)
def test_format_phone(raw, expected):
    assert format_phone(raw) == expected


@pytest.mark.parametrize("raw", ["01012345678", "0101234", "010-1234-5678", "01"])
def test_format_phone_is_idempotent(raw):
    once = format_phone(raw)
    assert format_phone(once) == once


@pytest.mark.asyncio
@respx.mock
@pytest.mark.parametrize(
    "phone", ["010-12-3456", "010-1234-5678\n", "010-\u0661\u0662\u0663\u0664-5678"]
)
async def test_invalid_phone_never_reaches_network(client, phone):
    route = respx.post(f"{BASE_URL}/recipient/{PROJECT_ID}").mock(
        return_value=Response(200, json=success(RECIPIENT))
    )

    async with client:
        with pytest.raises(InvalidPhoneError):
            await register_recipient(client, "Hong", phone)

    assert not route.called


def test_invalid_phone_error_is_value_error():
    assert issubclass(InvalidPhoneError, ValueError)


@pytest.mark.asyncio
@respx.mock
async def test_register_recipient_defaults(client):
    route = respx.post(f"{BASE_URL}/recipient/{PROJECT_ID}").mock(
        return_value=Response(200, json=success(RECIPIENT))
    )

    async with client:
        result = await register_recipient(client, "Hong", "010-1234-5678")

    assert result == RECIPIENT
    assert Recipient.model_validate(result).removed_at is None
    body = json.loads(route.calls[0].request.content)
    assert body == {
        "name": "Hong",
        "phone": "010-1234-5678",
        "description": " ",
        "data": "{}",
    }


@pytest.mark.asyncio
@respx.mock
async def test_register_recipient_serializes_metadata(client):
    route = respx.post(f"{BASE_URL}/recipient/other-proj").mock(
        return_value=Response(200, json=success(RECIPIENT))
    )
    metadata = {"type": "reservation", "date": "2024-12-25", "partySize": 4}

    async with client:
        await register_recipient(
            client,
            "Hong",
            "010-1234-5678",
            description="Dinner at 7",
            metadata=metadata,
            project_id="other-proj",
        )

    body = json.loads(route.calls[0].request.content)
    assert body["description"] == "Dinner at 7"
    assert json.loads(body["data"]) == metadata


@pytest.mark.asyncio
@respx.mock
async def test_register_recipient_server_validation_error(client):
    respx.post(f"{BASE_URL}/recipient/{PROJECT_ID}").mock(
        return_value=Response(
            400,
            json=failure(
                "VALIDATION_ERROR",
                "Invalid input",
                detail=[{"field": "name", "reason": "too long"}],
            ),
        )
    )

    async with client:
        with pytest.raises(ValidationError) as exc:
            await register_recipient(client, "x" * 100, "010-1234-5678")

    assert exc.value.details == [{"field": "name", "reason": "too long"}]


@pytest.mark.asyncio
@respx.mock
async def test_register_recipient_quotes_project_id(client):
    route = respx.route(method="POST", host="api.example.com").mock(
        return_value=Response(200, json=success(RECIPIENT))
    )

    async with client:
        await register_recipient(
            client, "Hong", "010-1234-5678", project_id="team/a"
        )

    assert route.called
    assert route.calls[0].request.url.raw_path == b"/recipient/team%2Fa"
