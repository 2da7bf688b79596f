"""The mapping's single setting: the API key."""

from __future__ import annotations

import os
from dataclasses import dataclass

from dotenv import load_dotenv

DEFAULT_API_KEY_ENV = "INFLUENCE_EXPLORER_API_KEY"


@dataclass(frozen=True)
class Settings:
    api_key: str

    def __repr__(self) -> str:
        return "Settings(api_key='***')"


def load_settings(
    *,
    api_key: str | None = None,
    api_key_env: str = DEFAULT_API_KEY_ENV,
) -> Settings:
    """Resolve the API key from an explicit value or `api_key_env` (`.env` honored)."""
    load_dotenv()
    resolved = api_key or os.getenv(api_key_env)
    if not resolved:
        raise RuntimeError(
            f"Missing Influence Explorer API key. Set env var {api_key_env} "
            "or pass api.key in config."
        )
    return Settings(api_key=resolved)


def api_key_available(
    *,
    api_key: str | None = None,
    api_key_env: str = DEFAULT_API_KEY_ENV,
) -> bool:
    """True if `load_settings` would find a key (explicit value, env or `.env`)."""
    load_dotenv()
    return bool(api_key or os.getenv(api_key_env))
