"""Configuration helpers for the AuraStyle app."""

from dataclasses import dataclass
from pathlib import Path
import os
from typing import Optional

DEFAULT_GEMINI_MODEL = "gemini-3.1-pro-preview"
DEFAULT_HOST = "0.0.0.0"
DEFAULT_PORT = 8080
DEFAULT_SESSION_LIMIT = 1000
DEFAULT_SESSION_IDLE_SECONDS = 3600


@dataclass
class StylistConfig:
    """Configuration values for the stylist app.

    Only the Gemini API key is a credential. It is never validated here: a
    missing or wrong key surfaces as a failed model call, not a startup error.
    """

    api_key: Optional[str] = None
    model: str = DEFAULT_GEMINI_MODEL
    log_level: str = "INFO"
    host: str = DEFAULT_HOST
    port: int = DEFAULT_PORT
    environment: str | None = None
    session_limit: int = DEFAULT_SESSION_LIMIT
    session_idle_seconds: int = DEFAULT_SESSION_IDLE_SECONDS

    @classmethod
    def from_env(cls) -> "StylistConfig":
        """Resolve settings from the process environment and an optional settings file.

        The file is ``APP_CONFIG_PATH`` when set, otherwise
        ``<APP_CONFIG_DIR>/<APP_ENV>.yaml``. A variable present in the
        environment always beats the same key in the file.
        """

        env_name = os.getenv("APP_ENV")
        file_settings = cls._read_settings_file(cls._settings_path(env_name))

        def setting(key: str, default: Optional[str] = None) -> Optional[str]:
            return os.getenv(key.upper()) or file_settings.get(key) or default

        return cls(
            api_key=setting("gemini_api_key") or setting("google_api_key"),
            model=setting("gemini_model", DEFAULT_GEMINI_MODEL),
            log_level=setting("log_level", "INFO").upper(),
            host=setting("app_host", DEFAULT_HOST),
            port=_bounded_int(setting("app_port"), DEFAULT_PORT, upper=65535),
            environment=env_name,
            session_limit=_bounded_int(setting("session_limit"), DEFAULT_SESSION_LIMIT),
            session_idle_seconds=_bounded_int(setting("session_idle_seconds"), DEFAULT_SESSION_IDLE_SECONDS),
        )

    @staticmethod
    def _settings_path(env_name: str | None) -> Optional[Path]:
        explicit = os.getenv("APP_CONFIG_PATH")
        if explicit:
            return Path(explicit)
        if env_name:
            return Path(os.getenv("APP_CONFIG_DIR", "config/environments")) / f"{env_name}.yaml"
        return None

    @staticmethod
    def _read_settings_file(path: Optional[Path]) -> dict:
        """Collect flat ``key: value`` lines; comments and lines without a colon are skipped."""

        if path is None or not path.exists():
            return {}
        settings: dict[str, str] = {}
        for line in path.read_text().splitlines():
            key, colon, value = line.strip().partition(":")
            if not colon or key.startswith("#"):
                continue
            settings[key.strip()] = _unquote(value.strip())
        return settings


def _unquote(value: str) -> str:
    if len(value) >= 2 and value[0] == value[-1] and value[0] in "\"'":
        return value[1:-1]
    return value


def _bounded_int(raw: Optional[str], default: int, upper: Optional[int] = None) -> int:
    """Parse a positive integer setting, keeping ``default`` for junk or out-of-range values."""

    try:
        value = int(str(raw).strip())
    except (TypeError, ValueError):
        return default
    if value <= 0 or (upper is not None and value > upper):
        return default
    return value
