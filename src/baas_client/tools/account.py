from __future__ import annotations

from typing import Any, Dict, Optional

from baas_client.core.client import BaaSClient
from baas_client.core.errors import AuthError
from baas_client.models import SignupOptions

SIGNUP_PATH = "/account/signup"
# Some deployments expose project-user signup under this path instead.
SIGNUP_PROJECT_PATH = "/account/signup-project"


async def signup(
    client: BaaSClient,
    user_id: str,
    user_pw: str,
    name: str,
    phone: str,
    *,
    options: Optional[SignupOptions] = None,
    project_id: Optional[str] = None,
    path: str = SIGNUP_PATH,
) -> Dict[str, Any]:
    """
    Create a project user account.

    `options` carries the optional consent flags and free-form `data`;
    `path` selects between /account/signup and /account/signup-project.
    Returns the created account record.
    """
    body: Dict[str, Any] = {
        "user_id": user_id,
        "user_pw": user_pw,
        "name": name,
        "phone": phone,
        "project_id": client.resolve_project_id(project_id),
    }
    if options is not None:
        body.update(options.model_dump(exclude_none=True))
    return await client.post(path, json=body, operation="signup")


async def login(
    client: BaaSClient,
    user_id: str,
    user_pw: str,
    *,
    project_id: Optional[str] = None,
    project_scoped: bool = True,
) -> Dict[str, Any]:
    """
    Log in; the server sets the session cookie on the client's jar.

    With project_scoped=False the request omits project_id (administrative
    user, cookie `access_token`).
    Returns {"access_token": str, "token_type": "bearer"}.
    """
    body: Dict[str, Any] = {"user_id": user_id, "user_pw": user_pw}
    if project_scoped:
        body["project_id"] = client.resolve_project_id(project_id)
    return await client.post("/account/login", json=body, operation="login")


async def logout(client: BaaSClient) -> None:
    """Log out; the server clears the session cookie."""
    await client.post("/account/logout", requires_auth=True, operation="logout")


async def get_account_info(client: BaaSClient) -> Dict[str, Any]:
    """Return the logged-in user's account record."""
    return await client.get("/account/info", requires_auth=True, operation="account_info")


async def check_auth(client: BaaSClient) -> Dict[str, Any]:
    """
    Report whether the current session is valid.

    Only authentication failures mean "logged out"; any other error propagates.
    """
    try:
        user = await get_account_info(client)
    except AuthError:
        return {"is_logged_in": False, "user": None}
    return {"is_logged_in": True, "user": user}


__all__ = [
    "SIGNUP_PATH",
    "SIGNUP_PROJECT_PATH",
    "signup",
    "login",
    "logout",
    "get_account_info",
    "check_auth",
]
