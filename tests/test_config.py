"""Environment and file based configuration."""

from pathlib import Path

import pytest

from stylist_app.config import DEFAULT_GEMINI_MODEL, DEFAULT_PORT, DEFAULT_SESSION_IDLE_SECONDS, StylistConfig

_ENV_KEYS = [
    "APP_ENV",
    "APP_CONFIG_PATH",
    "APP_CONFIG_DIR",
    "GEMINI_API_KEY",
    "GOOGLE_API_KEY",
    "GEMINI_MODEL",
    "LOG_LEVEL",
    "APP_HOST",
    "APP_PORT",
    "SESSION_LIMIT",
    "SESSION_IDLE_SECONDS",
]


@pytest.fixture(autouse=True)
def clean_env(monkeypatch: pytest.MonkeyPatch) -> None:
    for key in _ENV_KEYS:
        monkeypatch.delenv(key, raising=False)


def test_defaults_without_environment() -> None:
    config = StylistConfig.from_env()

    assert config.api_key is None
    assert config.model == DEFAULT_GEMINI_MODEL
    assert config.port == DEFAULT_PORT
    assert config.log_level == "INFO"
    assert config.environment is None


def test_environment_variables(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("GEMINI_API_KEY", "secret")
    monkeypatch.setenv("GEMINI_MODEL", "gemini-2.5-flash")
    monkeypatch.setenv("LOG_LEVEL", "debug")
    monkeypatch.setenv("APP_PORT", "9000")

    config = StylistConfig.from_env()

    assert config.api_key == "secret"
    assert config.model == "gemini-2.5-flash"
    assert config.log_level == "DEBUG"
    assert config.port == 9000


def test_google_api_key_fallback(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("GOOGLE_API_KEY", "google-secret")
    assert StylistConfig.from_env().api_key == "google-secret"


def test_invalid_port_falls_back_to_default(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("APP_PORT", "not-a-port")
    assert StylistConfig.from_env().port == DEFAULT_PORT


def test_environment_yaml_is_merged_under_env_vars(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
    env_dir = tmp_path / "environments"
    env_dir.mkdir()
    (env_dir / "staging.yaml").write_text(
        "# staging settings\n"
        "gemini_model: \"gemini-staging\"\n"
        "app_port: 8181\n"
        "gemini_api_key: 'from-file'\n"
    )
    monkeypatch.setenv("APP_ENV", "staging")
    monkeypatch.setenv("APP_CONFIG_DIR", str(env_dir))
    monkeypatch.setenv("GEMINI_API_KEY", "from-env")

    config = StylistConfig.from_env()

    assert config.environment == "staging"
    assert config.model == "gemini-staging"
    assert config.port == 8181
    assert config.api_key == "from-env"


def test_session_bounds_from_environment(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("SESSION_LIMIT", "25")
    monkeypatch.setenv("SESSION_IDLE_SECONDS", "-5")

    config = StylistConfig.from_env()

    assert config.session_limit == 25
    assert config.session_idle_seconds == DEFAULT_SESSION_IDLE_SECONDS
