"""Environment-driven settings for the reasoning service client."""

from __future__ import annotations

import logging
import os
from dataclasses import dataclass
from typing import Mapping, Optional

logger = logging.getLogger(__name__)

_API_KEY_ENV = "TEAMBALANCE_API_KEY"
_API_KEY_FALLBACK_ENV = "ANTHROPIC_API_KEY"
_MODEL_ENV = "TEAMBALANCE_MODEL"
_MAX_TOKENS_ENV = "TEAMBALANCE_MAX_TOKENS"
_TIMEOUT_ENV = "TEAMBALANCE_TIMEOUT"
_BASE_URL_ENV = "TEAMBALANCE_BASE_URL"

DEFAULT_MODEL = "claude-sonnet-4-20250514"
DEFAULT_MAX_TOKENS = 2048
DEFAULT_TIMEOUT_SECONDS = 60.0
DEFAULT_BASE_URL = "https://api.anthropic.com"


def _env_number(environ: Mapping[str, str], name: str, default, cast):
    """Read ``name`` with ``cast``; unset or unparseable values give ``default``."""

    raw = environ.get(name)
    if raw is None:
        return default
    try:
        return cast(raw)
    except ValueError:
        logger.warning("Invalid value for %s: %r; using default %s", name, raw, default)
        return default


@dataclass(frozen=True)
class EngineSettings:
    api_key: Optional[str]
    model: str = DEFAULT_MODEL
    max_tokens: int = DEFAULT_MAX_TOKENS
    timeout_seconds: float = DEFAULT_TIMEOUT_SECONDS
    base_url: str = DEFAULT_BASE_URL

    @classmethod
    def from_env(cls, environ: Mapping[str, str] | None = None) -> "EngineSettings":
        env = os.environ if environ is None else environ
        api_key = env.get(_API_KEY_ENV) or env.get(_API_KEY_FALLBACK_ENV) or None
        return cls(
            api_key=api_key,
            model=env.get(_MODEL_ENV) or DEFAULT_MODEL,
            max_tokens=max(256, _env_number(env, _MAX_TOKENS_ENV, DEFAULT_MAX_TOKENS, int)),
            timeout_seconds=min(600.0, max(1.0, _env_number(env, _TIMEOUT_ENV, DEFAULT_TIMEOUT_SECONDS, float))),
            base_url=(env.get(_BASE_URL_ENV) or DEFAULT_BASE_URL).rstrip("/"),
        )
