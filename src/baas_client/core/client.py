import logging
import time
from typing import Any, Dict, Optional, Type, TypeVar

import httpx
from pydantic import BaseModel
from pydantic import ValidationError as PydanticValidationError

from .config import EnvironmentSource, resolve_base_url, resolve_project_id
from .envelope import unwrap
from .errors import BaaSAPIError, MalformedResponseError, NetworkError
from .observability import log_event

T = TypeVar("T", bound=BaseModel)

SESSION_COOKIE = "access_token"


def session_cookie_name(project_id: Optional[str] = None) -> str:
    """Cookie the server sets on login: admin users vs. project-scoped users."""
    return f"{SESSION_COOKIE}_{project_id}" if project_id else SESSION_COOKIE


def parse_model(model: Type[T], data: Any) -> T:
    try:
        return model.model_validate(data)
    except PydanticValidationError as exc:
        raise MalformedResponseError(
            f"Response data did not match model {model.__name__}: {exc}"
        ) from exc


def _clean_params(params: Optional[Dict[str, Any]]) -> Optional[Dict[str, Any]]:
    if not params:
        return None
    return {k: v for k, v in params.items() if v is not None}


class BaaSClient:
    """
    Shared async HTTP client for the BaaS REST API.
    - Keeps one httpx.AsyncClient; its cookie jar carries the session cookies
    - Unwraps the response envelope and raises classified errors
    - No retries, no backoff; callers own recovery
    """

    def __init__(
        self,
        *,
        base_url: Optional[str] = None,
        env: Optional[EnvironmentSource] = None,
        project_id: Optional[str] = None,
        timeout_seconds: float = 10.0,
        logger: Optional[logging.Logger] = None,
        http: Optional[httpx.AsyncClient] = None,
    ):
        self.env = env if env is not None else EnvironmentSource()
        self.base_url = resolve_base_url(base_url, self.env)
        self.timeout_seconds = timeout_seconds
        self.log = logger or logging.getLogger("baas_client.client")
        self._explicit_project_id = project_id
        self._project_id: Optional[str] = None

        self._owns_http = http is None
        self.http = http or httpx.AsyncClient(
            base_url=self.base_url,
            headers={"Accept": "application/json"},
            timeout=timeout_seconds,
        )

    @classmethod
    def from_env(cls, *, use_dotenv: bool = True, **kwargs: Any) -> "BaaSClient":
        env = EnvironmentSource.from_os(use_dotenv=use_dotenv)
        return cls(env=env, **kwargs)

    async def aclose(self) -> None:
        if self._owns_http:
            await self.http.aclose()

    async def __aenter__(self) -> "BaaSClient":
        return self

    async def __aexit__(self, exc_type, exc, tb) -> None:
        await self.aclose()

    # --- Project context --------------------------------------------------- #

    def resolve_project_id(self, explicit: Optional[str] = None) -> str:
        """Per-call override, else the client's project id resolved once."""
        if explicit:
            return resolve_project_id(explicit, self.env)
        if self._project_id is None:
            self._project_id = resolve_project_id(self._explicit_project_id, self.env)
        return self._project_id

    # --- Session cookies --------------------------------------------------- #

    def has_session(self, project_id: Optional[str] = None) -> bool:
        names = {c.name for c in self.http.cookies.jar}
        if project_id:
            return session_cookie_name(project_id) in names
        return any(
            n == SESSION_COOKIE or n.startswith(SESSION_COOKIE + "_") for n in names
        )

    def clear_session(self) -> None:
        self.http.cookies.clear()

    # --- Requests ---------------------------------------------------------- #

    async def invoke(
        self,
        method: str,
        path: str,
        *,
        json: Optional[Dict[str, Any]] = None,
        params: Optional[Dict[str, Any]] = None,
        requires_auth: bool = False,
        timeout: Optional[float] = None,
        operation: Optional[str] = None,
    ) -> Any:
        """
        Core request method.
        - Sends session cookies from the jar on every call
        - Raises NetworkError when no response arrives (incl. the per-call timeout)
        - Raises MalformedResponseError on non-JSON or non-envelope bodies
        - Raises the classified BaaSAPIError on FAIL envelopes
        - Returns the envelope's `data` on SUCCESS
        """
        method = method.upper()
        start = time.perf_counter()
        fields: Dict[str, Any] = {
            "method": method,
            "endpoint": path,
            "operation": operation,
        }

        if requires_auth and not self.has_session():
            self.log.debug(
                "baas.no_session_cookie", extra={"endpoint": path, "method": method}
            )

        headers = {"Content-Type": "application/json"} if json is not None else None

        try:
            resp = await self.http.request(
                method,
                path,
                params=_clean_params(params),
                json=json,
                headers=headers,
                timeout=timeout if timeout is not None else httpx.USE_CLIENT_DEFAULT,
            )
        except httpx.TransportError as exc:
            log_event(
                "baas_call",
                level=logging.WARNING,
                status="exception",
                error_type=type(exc).__name__,
                duration_ms=self._elapsed_ms(start),
                **fields,
            )
            raise NetworkError(
                f"Network error calling {method} {path}: {exc!r}"
            ) from exc
        except httpx.DecodingError as exc:
            # A response arrived but its body can't be decoded.
            log_event(
                "baas_call",
                level=logging.WARNING,
                status="undecodable",
                error_type=type(exc).__name__,
                duration_ms=self._elapsed_ms(start),
                **fields,
            )
            raise MalformedResponseError(
                f"Undecodable body from {method} {path}: {exc}"
            ) from exc

        fields["status"] = resp.status_code
        fields["duration_ms"] = self._elapsed_ms(start)

        try:
            data = unwrap(self._safe_json(resp), status_code=resp.status_code)
        except BaaSAPIError as exc:
            log_event(
                "baas_call",
                level=logging.WARNING,
                error_type=type(exc).__name__,
                error_code=exc.error_code,
                request_id=exc.request_id,
                **fields,
            )
            raise
        except MalformedResponseError as exc:
            log_event(
                "baas_call",
                level=logging.WARNING,
                error_type=type(exc).__name__,
                **fields,
            )
            raise

        log_event("baas_call", **fields)
        return data

    async def invoke_model(
        self, model: Type[T], method: str, path: str, **kwargs: Any
    ) -> T:
        data = await self.invoke(method, path, **kwargs)
        return parse_model(model, data)

    async def get(
        self,
        path: str,
        *,
        params: Optional[Dict[str, Any]] = None,
        **kwargs: Any,
    ) -> Any:
        return await self.invoke("GET", path, params=params, **kwargs)

    async def post(
        self, path: str, *, json: Optional[Dict[str, Any]] = None, **kwargs: Any
    ) -> Any:
        return await self.invoke("POST", path, json=json, **kwargs)

    @staticmethod
    def _elapsed_ms(start: float) -> int:
        return int((time.perf_counter() - start) * 1000)

    def _safe_json(self, resp: httpx.Response) -> Any:
        if not resp.content:
            raise MalformedResponseError(
                f"Empty body from {resp.request.method} {resp.request.url} "
                f"(status {resp.status_code})",
                status_code=resp.status_code,
            )
        try:
            return resp.json()
        except ValueError as exc:
            snippet = (resp.text or "")[:500]
            raise MalformedResponseError(
                f"Expected JSON from {resp.request.method} "
                f"{resp.request.url}, got non-JSON body snippet: "
                f"{snippet!r}",
                status_code=resp.status_code,
            ) from exc


__all__ = ["BaaSClient", "SESSION_COOKIE", "parse_model", "session_cookie_name"]
