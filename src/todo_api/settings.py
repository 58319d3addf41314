from __future__ import annotations

import os
from dataclasses import dataclass
from typing import List


@dataclass(frozen=True)
class Settings:
    """
    Application settings loaded from environment variables.

    Env vars:
    - CORS_ALLOW_ORIGINS: comma-separated list of allowed origins; '*' by default
    - LOG_LEVEL: root logger level name (default: INFO)
    - API_PREFIX: path prefix for the todos routes (default: none, routes live at /todos)
    - SEED_SAMPLE_TODOS: 'false' to start with an empty store (default: true)
    """

    cors_allow_origins: List[str]
    log_level: str = "INFO"
    api_prefix: str = ""
    seed_sample_todos: bool = True


def _get_env(name: str, default: str) -> str:
    value = os.getenv(name, default)
    if value is None or value == "":
        return default
    return value


def _parse_bool(value: str, default: bool = False) -> bool:
    v = value.strip().lower()
    if v in {"1", "true", "yes", "on"}:
        return True
    if v in {"0", "false", "no", "off"}:
        return False
    return default


def _parse_origins(origins_value: str) -> List[str]:
    """
    Parse CORS origins from env. Supports:
    - '*' to allow all origins
    - Comma-separated list of origins
    """
    value = origins_value.strip()
    if value == "*":
        return ["*"]
    return [o.strip() for o in value.split(",") if o.strip()]


def _normalize_prefix(prefix: str) -> str:
    p = prefix.strip().rstrip("/")
    if p and not p.startswith("/"):
        p = "/" + p
    return p


# PUBLIC_INTERFACE
def get_settings() -> Settings:
    """Return application settings loaded from environment variables."""
    origins = _parse_origins(_get_env("CORS_ALLOW_ORIGINS", "*"))
    log_level = _get_env("LOG_LEVEL", "INFO").strip().upper()
    api_prefix = _normalize_prefix(os.getenv("API_PREFIX", ""))
    seed = _parse_bool(_get_env("SEED_SAMPLE_TODOS", "true"), True)

    return Settings(
        cors_allow_origins=origins,
        log_level=log_level,
        api_prefix=api_prefix,
        seed_sample_todos=seed,
    )
