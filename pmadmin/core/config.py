from __future__ import annotations

import os
from dataclasses import dataclass

DEFAULT_API_BASE_URL = "http://localhost:8080/api"
DEFAULT_CORS_ORIGINS = ("http://localhost:3000", "http://127.0.0.1:3000")


@dataclass(frozen=True, slots=True)
class Settings:
    """Runtime configuration read from the environment."""

    api_base_url: str = DEFAULT_API_BASE_URL
    api_token: str | None = None
    api_timeout: float = 10.0
    probe_timeout: float = 5.0
    cors_origins: tuple[str, ...] = DEFAULT_CORS_ORIGINS


def _float_env(name: str, default: float) -> float:
    value = os.getenv(name)
    if not value:
        return default
    try:
        parsed = float(value)
    except ValueError as exc:
        raise ValueError(f"{name} must be a number, got {value!r}") from exc
    if parsed <= 0:
        raise ValueError(f"{name} must be positive")
    return parsed


def load_settings() -> Settings:
    """Build :class:`Settings` from ``PMADMIN_*`` environment variables."""

    origins_env = os.getenv("API_CORS_ORIGINS", "")
    origins = tuple(origin.strip() for origin in origins_env.split(",") if origin.strip())

    return Settings(
        api_base_url=os.getenv("PMADMIN_API_BASE_URL") or DEFAULT_API_BASE_URL,
        api_token=os.getenv("PMADMIN_API_TOKEN") or None,
        api_timeout=_float_env("PMADMIN_API_TIMEOUT", 10.0),
        probe_timeout=_float_env("PMADMIN_PROBE_TIMEOUT", 5.0),
        cors_origins=origins or DEFAULT_CORS_ORIGINS,
    )
