from __future__ import annotations

import os
from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Mapping, Optional, Tuple

from dotenv import load_dotenv

from .errors import ConfigurationError

DEFAULT_BASE_URL = "https://api.aiapp.link"
LOCAL_BASE_URL = "http://localhost:8000"

# Checked in order after an explicit argument. The last one lives in the
# bundler's import-time env object, not the process env.
PROJECT_ID_ENV_VARS = (
    "BAAS_PROJECT_ID",
    "REACT_APP_BAAS_PROJECT_ID",
    "NEXT_PUBLIC_BAAS_PROJECT_ID",
)
IMPORT_META_PROJECT_ID_VAR = "VITE_BAAS_PROJECT_ID"
ALL_PROJECT_ID_VARS = PROJECT_ID_ENV_VARS + (IMPORT_META_PROJECT_ID_VAR,)

BASE_URL_ENV_VARS = (
    "BAAS_API_BASE_URL",
    "REACT_APP_API_URL",
    "NEXT_PUBLIC_API_URL",
)


def _frozen(mapping: Optional[Mapping[str, str]]) -> Mapping[str, str]:
    return MappingProxyType(dict(mapping or {}))


@dataclass(frozen=True)
class EnvironmentSource:
    """Snapshot of the configuration inputs the resolver is allowed to read."""

    variables: Mapping[str, str] = field(default_factory=dict)
    import_meta_env: Mapping[str, str] = field(default_factory=dict)

    def __post_init__(self) -> None:
        object.__setattr__(self, "variables", _frozen(self.variables))
        object.__setattr__(self, "import_meta_env", _frozen(self.import_meta_env))

    @classmethod
    def from_os(
        cls,
        *,
        use_dotenv: bool = False,
        import_meta_env: Optional[Mapping[str, str]] = None,
    ) -> "EnvironmentSource":
        """Snapshot os.environ (optionally after loading .env)."""
        if use_dotenv:
            load_dotenv()
        return cls(variables=dict(os.environ), import_meta_env=import_meta_env or {})

    def get(self, name: str) -> Optional[str]:
        return _clean(self.variables.get(name))

    def get_import_meta(self, name: str) -> Optional[str]:
        return _clean(self.import_meta_env.get(name))


@dataclass(frozen=True)
class ProjectContext:
    project_id: str


def _clean(value: Optional[str]) -> Optional[str]:
    if value is None:
        return None
    value = value.strip()
    return value or None


def resolve_project_id(
    explicit: Optional[str] = None, env: Optional[EnvironmentSource] = None
) -> str:
    """
    Resolve the project identifier; the first non-empty source wins.

    Order: explicit argument, BAAS_PROJECT_ID, REACT_APP_BAAS_PROJECT_ID,
    NEXT_PUBLIC_BAAS_PROJECT_ID, then VITE_BAAS_PROJECT_ID from import_meta_env.
    """
    candidate = _clean(explicit)
    if candidate:
        return candidate

    env = env or EnvironmentSource()
    for name in PROJECT_ID_ENV_VARS:
        candidate = env.get(name)
        if candidate:
            return candidate

    candidate = env.get_import_meta(IMPORT_META_PROJECT_ID_VAR)
    if candidate:
        return candidate

    raise ConfigurationError(
        "BaaS project_id is not configured. Pass it explicitly or set one of: "
        + ", ".join(ALL_PROJECT_ID_VARS)
    )


def resolve_project_context(
    explicit: Optional[str] = None, env: Optional[EnvironmentSource] = None
) -> ProjectContext:
    return ProjectContext(project_id=resolve_project_id(explicit, env))


def resolve_base_url(
    explicit: Optional[str] = None, env: Optional[EnvironmentSource] = None
) -> str:
    candidate = _clean(explicit)
    if candidate:
        return candidate.rstrip("/")
    env = env or EnvironmentSource()
    for name in BASE_URL_ENV_VARS:
        candidate = env.get(name)
        if candidate:
            return candidate.rstrip("/")
    return DEFAULT_BASE_URL


def load_env_config(*, use_dotenv: bool = True) -> Tuple[str, Optional[str]]:
    """Load base URL and project id from environment (optional .env)."""
    env = EnvironmentSource.from_os(use_dotenv=use_dotenv)
    try:
        project_id: Optional[str] = resolve_project_id(None, env)
    except ConfigurationError:
        project_id = None
    return resolve_base_url(None, env), project_id


__all__ = [
    "DEFAULT_BASE_URL",
    "LOCAL_BASE_URL",
    "PROJECT_ID_ENV_VARS",
    "IMPORT_META_PROJECT_ID_VAR",
    "ALL_PROJECT_ID_VARS",
    "BASE_URL_ENV_VARS",
    "EnvironmentSource",
    "ProjectContext",
    "resolve_project_id",
    "resolve_project_context",
    "resolve_base_url",
    "load_env_config",
]
