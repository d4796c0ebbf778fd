import logging

import httpx
import pytest
import respx
from baas_client.core.client import BaaSClient, session_cookie_name
from baas_client.core.config import DEFAULT_BASE_URL, EnvironmentSource
from baas_client.core.errors import (
    AuthError,
    ConfigurationError,
    MalformedResponseError,
    NetworkError,
    ServerError,
)
from baas_client.models import TokenResponse
from conftest import BASE_URL, failure, success
from httpx import Response


@pytest.mark.asyncio
async def test_get_returns_envelope_data(client):
    async with respx.mock:
        route = respx.get(f"{BASE_URL}/account/info").mock(
            return_value=Response(200, json=success({"id": "1"}))
        )
        async with client:
            data = await client.get("/account/info")

    assert data == {"id": "1"}
    assert route.called


@pytest.mark.asyncio
async def test_json_content_type_only_with_body(client):
    async with respx.mock:
        post = respx.post(f"{BASE_URL}/account/login").mock(
            return_value=Response(200, json=success(None))
        )
        get = respx.get(f"{BASE_URL}/account/info").mock(
            return_value=Response(200, json=success(None))
        )
        async with client:
            await client.post("/account/login", json={"user_id": "u"})
            await client.get("/account/info")

    assert post.calls[0].request.headers["content-type"] == "application/json"
    assert "content-type" not in get.calls[0].request.headers


@pytest.mark.asyncio
async def test_fail_envelope_raises_classified_error(client):
    async with respx.mock:
        respx.get(f"{BASE_URL}/account/info").mock(
            return_value=Response(
                401,
                json=failure("UNAUTHORIZED", "login required", request_id="rid-1"),
            )
        )
        async with client:
            with pytest.raises(AuthError) as exc:
                await client.get("/account/info", requires_auth=True)

    assert exc.value.status_code == 401
    assert exc.value.request_id == "rid-1"
    assert "login required" in str(exc.value)


@pytest.mark.asyncio
async def test_non_json_body_is_malformed(client):
    async with respx.mock:
        respx.get(f"{BASE_URL}/account/info").mock(
            return_value=Response(502, text="<html>Bad Gateway</html>")
        )
        async with client:
            with pytest.raises(MalformedResponseError) as exc:
                await client.get("/account/info")

    assert "Expected JSON" in str(exc.value)
    assert exc.value.status_code == 502


@pytest.mark.asyncio
async def test_empty_body_is_malformed(client):
    async with respx.mock:
        respx.post(f"{BASE_URL}/account/logout").mock(return_value=Response(204))
        async with client:
            with pytest.raises(MalformedResponseError):
                await client.post("/account/logout")


@pytest.mark.asyncio
async def test_json_without_envelope_is_malformed(client):
    async with respx.mock:
        respx.get(f"{BASE_URL}/account/info").mock(
            return_value=Response(200, json={"id": "1"})
        )
        async with client:
            with pytest.raises(MalformedResponseError):
                await client.get("/account/info")


@pytest.mark.asyncio
async def test_connect_error_is_network_error_without_retry(client):
    async with respx.mock:
        route = respx.get(f"{BASE_URL}/account/info").mock(
            side_effect=httpx.ConnectError("refused")
        )
        async with client:
            with pytest.raises(NetworkError):
                await client.get("/account/info")

    assert route.call_count == 1


@pytest.mark.asyncio
async def test_timeout_is_network_error(client):
    async with respx.mock:
        respx.get(f"{BASE_URL}/account/info").mock(
            side_effect=httpx.ReadTimeout("slow")
        )
        async with client:
            with pytest.raises(NetworkError):
                await client.get("/account/info", timeout=0.01)


@pytest.mark.asyncio
async def test_server_error_is_not_retried(client):
    async with respx.mock:
        route = respx.get(f"{BASE_URL}/account/info").mock(
            return_value=Response(503, json=failure("EXTERNAL_SERVER_ERROR"))
        )
        async with client:
            with pytest.raises(ServerError):
                await client.get("/account/info")

    assert route.call_count == 1


@pytest.mark.asyncio
async def test_none_params_are_dropped(client):
    async with respx.mock:
        route = respx.get(f"{BASE_URL}/things").mock(
            return_value=Response(200, json=success([]))
        )
        async with client:
            await client.get("/things", params={"offset": 0, "keyword": None})

    params = route.calls[0].request.url.params
    assert params["offset"] == "0"
    assert "keyword" not in params


@pytest.mark.asyncio
async def test_session_cookie_is_stored_and_resent(client):
    cookie = session_cookie_name("proj-1")
    async with respx.mock:
        respx.post(f"{BASE_URL}/account/login").mock(
            return_value=Response(
                200,
                json=success({"access_token": "t", "token_type": "bearer"}),
                headers={
                    "set-cookie": f"{cookie}=t; Path=/; HttpOnly; Secure; SameSite=None"
                },
            )
        )
        info = respx.get(f"{BASE_URL}/account/info").mock(
            return_value=Response(200, json=success({"id": "1"}))
        )
        async with client:
            assert not client.has_session()
            await client.post("/account/login", json={"user_id": "u"})
            assert client.has_session()
            assert client.has_session("proj-1")
            assert not client.has_session("other")
            await client.get("/account/info", requires_auth=True)
            client.clear_session()
            assert not client.has_session()

    assert f"{cookie}=t" in info.calls[0].request.headers["cookie"]


@pytest.mark.asyncio
async def test_invoke_model_validates_data(client):
    async with respx.mock:
        respx.post(f"{BASE_URL}/account/login").mock(
            return_value=Response(
                200, json=success({"access_token": "t", "token_type": "bearer"})
            )
        )
        respx.get(f"{BASE_URL}/account/info").mock(
            return_value=Response(200, json=success({"unexpected": True}))
        )
        async with client:
            token = await client.invoke_model(TokenResponse, "POST", "/account/login")
            with pytest.raises(MalformedResponseError):
                await client.invoke_model(TokenResponse, "GET", "/account/info")

    assert token == TokenResponse(access_token="t", token_type="bearer")


def test_session_cookie_name():
    assert session_cookie_name() == "access_token"
    assert session_cookie_name("abc") == "access_token_abc"


def test_project_id_resolution_is_cached():
    env = EnvironmentSource(variables={"BAAS_PROJECT_ID": "env-proj"})
    client = BaaSClient(env=env)
    assert client.base_url == DEFAULT_BASE_URL
    assert client.resolve_project_id() == "env-proj"
    assert client.resolve_project_id("override") == "override"
    assert client.resolve_project_id() == "env-proj"


def test_project_id_missing_raises_configuration_error():
    client = BaaSClient(env=EnvironmentSource())
    with pytest.raises(ConfigurationError):
        client.resolve_project_id()


def test_from_env(monkeypatch):
    monkeypatch.setattr("baas_client.core.config.load_dotenv", lambda *a, **k: None)
    monkeypatch.setenv("BAAS_API_BASE_URL", "http://localhost:8000")
    monkeypatch.setenv("BAAS_PROJECT_ID", "env-proj")
    client = BaaSClient.from_env()
    assert client.base_url == "http://localhost:8000"
    assert client.resolve_project_id() == "env-proj"


@pytest.mark.asyncio
async def test_injected_http_client_is_not_closed():
    http = httpx.AsyncClient(base_url=BASE_URL)
    client = BaaSClient(base_url=BASE_URL, http=http)
    await client.aclose()
    assert not http.is_closed
    await http.aclose()


@pytest.mark.asyncio
async def test_undecodable_body_is_malformed(client, caplog):
    caplog.set_level(logging.INFO, logger="baas_client.observability")
    async with respx.mock:
        respx.get(f"{BASE_URL}/account/info").mock(
            return_value=Response(
                200, headers={"content-encoding": "gzip"}, content=b"not gzip"
            )
        )
        async with client:
            with pytest.raises(MalformedResponseError) as exc:
                await client.get("/account/info")

    assert isinstance(exc.value.__cause__, httpx.DecodingError)
    record = next(r for r in caplog.records if r.getMessage() == "baas_call")
    assert record.error_type == "DecodingError"
