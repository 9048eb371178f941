"""Runtime settings read from the environment.

``bootstrap.settings()`` loads a ``.env`` file first (python-dotenv), so
local overrides can live next to the project without being exported.
"""

from __future__ import annotations

import os
from collections.abc import Mapping
from dataclasses import dataclass
from pathlib import Path

DEFAULT_MAIL_FROM = "AgroMarket <onboarding@resend.dev>"
DEFAULT_GEOCODER_URL = "https://nominatim.openstreetmap.org"
DEFAULT_RESEND_URL = "https://api.resend.com/emails"


class ConfigurationError(Exception):
    """An environment variable holds a value that cannot be used."""


def _float(env: Mapping[str, str], name: str, default: float) -> float:
    raw = env.get(name)
    if raw is None or not raw.strip():
        return default
    try:
        value = float(raw)
    except ValueError:
        raise ConfigurationError(f"{name} must be a number, got {raw!r}") from None
    if value <= 0:
        raise ConfigurationError(f"{name} must be positive, got {raw!r}")
    return value


def _int(env: Mapping[str, str], name: str, default: int) -> int:
    raw = env.get(name)
    if raw is None or not raw.strip():
        return default
    try:
        value = int(raw)
    except ValueError:
        raise ConfigurationError(f"{name} must be an integer, got {raw!r}") from None
    if value <= 0:
        raise ConfigurationError(f"{name} must be positive, got {raw!r}")
    return value


def _bool(env: Mapping[str, str], name: str, default: bool = False) -> bool:
    raw = env.get(name)
    if raw is None:
        return default
    return raw.strip().lower() in {"1", "true", "yes", "y", "on"}


@dataclass(frozen=True)
class Settings:
    data_dir: Path
    store_timeout: float = 5.0
    resend_api_key: str | None = None
    resend_url: str = DEFAULT_RESEND_URL
    mail_from: str = DEFAULT_MAIL_FROM
    notify_timeout: float = 10.0
    notify_attempts: int = 3
    notify_backoff: float = 0.5
    notify_queue_size: int = 1000
    geocoder_url: str = DEFAULT_GEOCODER_URL
    geocoder_timeout: float = 5.0
    log_level: str = "INFO"
    log_json: bool = False

    @property
    def database_path(self) -> Path:
        return self.data_dir / "agromarket.json"

    @classmethod
    def from_env(cls, environ: Mapping[str, str] | None = None) -> Settings:
        env = os.environ if environ is None else environ
        return cls(
            data_dir=Path(env.get("AGROMARKET_DATA_DIR") or "data").expanduser(),
            store_timeout=_float(env, "AGROMARKET_STORE_TIMEOUT", 5.0),
            resend_api_key=(env.get("RESEND_API_KEY") or "").strip() or None,
            resend_url=env.get("AGROMARKET_RESEND_URL") or DEFAULT_RESEND_URL,
            mail_from=env.get("AGROMARKET_MAIL_FROM") or DEFAULT_MAIL_FROM,
            notify_timeout=_float(env, "AGROMARKET_NOTIFY_TIMEOUT", 10.0),
            notify_attempts=_int(env, "AGROMARKET_NOTIFY_ATTEMPTS", 3),
            notify_backoff=_float(env, "AGROMARKET_NOTIFY_BACKOFF", 0.5),
            notify_queue_size=_int(env, "AGROMARKET_NOTIFY_QUEUE_SIZE", 1000),
            geocoder_url=env.get("AGROMARKET_GEOCODER_URL") or DEFAULT_GEOCODER_URL,
            geocoder_timeout=_float(env, "AGROMARKET_GEOCODER_TIMEOUT", 5.0),
            log_level=(env.get("AGROMARKET_LOG_LEVEL") or "INFO").upper(),
            log_json=_bool(env, "AGROMARKET_LOG_JSON"),
        )
