from pathlib import Path

import pytest

from luis_async.config import DEFAULT_ENDPOINT, ClientConfig

_ENV_VARS = (
    "LUIS_APP_ID",
    "LUIS_SUBSCRIPTION_KEY",
    "LUIS_VERBOSE",
    "LUIS_ENDPOINT",
    "LUIS_TIMEOUT_SECONDS",
    "LOG_LEVEL",
)


@pytest.fixture
def clean_env(monkeypatch: pytest.MonkeyPatch, tmp_path: Path) -> Path:
    """Clear LUIS variables and return a path to a non-existent .env file."""
    for name in _ENV_VARS:
        # setenv first so teardown restores the original state even after
        # load_dotenv writes the variable
        monkeypatch.setenv(name, "")
        monkeypatch.delenv(name)
    return tmp_path / "missing.env"


def test_from_env_defaults(monkeypatch: pytest.MonkeyPatch, clean_env: Path) -> None:
    monkeypatch.setenv("LUIS_APP_ID", "app-guid")
    monkeypatch.setenv("LUIS_SUBSCRIPTION_KEY", "secret-key")

    config = ClientConfig.from_env(clean_env)

    assert config == ClientConfig(
        application_id="app-guid",
        subscription_key="secret-key",
        verbose=True,
        endpoint=DEFAULT_ENDPOINT,
        timeout_seconds=30.0,
        log_level="INFO",
    )


def test_from_env_reads_optional_values(
    monkeypatch: pytest.MonkeyPatch, clean_env: Path
) -> None:
    monkeypatch.setenv("LUIS_APP_ID", "app-guid")
    monkeypatch.setenv("LUIS_SUBSCRIPTION_KEY", "secret-key")
    monkeypatch.setenv("LUIS_VERBOSE", "no")
    monkeypatch.setenv("LUIS_ENDPOINT", "https://eastus.example.test/luis/v2.0/apps/")
    monkeypatch.setenv("LUIS_TIMEOUT_SECONDS", "2.5")
    monkeypatch.setenv("LOG_LEVEL", "debug")

    config = ClientConfig.from_env(clean_env)

    assert config.verbose is False
    assert config.endpoint == "https://eastus.example.test/luis/v2.0/apps"
    assert config.timeout_seconds == 2.5
    assert config.log_level == "DEBUG"


def test_from_env_loads_env_file(
    monkeypatch: pytest.MonkeyPatch, clean_env: Path, tmp_path: Path
) -> None:
    env_file = tmp_path / ".env"
    env_file.write_text("LUIS_APP_ID=file-app\nLUIS_SUBSCRIPTION_KEY=file-key\n")

    config = ClientConfig.from_env(env_file)

    assert config.application_id == "file-app"
    assert config.subscription_key == "file-key"


def test_from_env_requires_app_id(clean_env: Path) -> None:
    with pytest.raises(ValueError, match="LUIS_APP_ID"):
        ClientConfig.from_env(clean_env)


def test_from_env_requires_subscription_key(
    monkeypatch: pytest.MonkeyPatch, clean_env: Path
) -> None:
    monkeypatch.setenv("LUIS_APP_ID", "app-guid")

    with pytest.raises(ValueError, match="LUIS_SUBSCRIPTION_KEY"):
        ClientConfig.from_env(clean_env)


@pytest.mark.parametrize(
    ("name", "value"),
    [
        ("LUIS_VERBOSE", "maybe"),
        ("LUIS_TIMEOUT_SECONDS", "soon"),
        ("LOG_LEVEL", "LOUD"),
    ],
)
def test_from_env_rejects_invalid_values(
    monkeypatch: pytest.MonkeyPatch, clean_env: Path, name: str, value: str
) -> None:
    monkeypatch.setenv("LUIS_APP_ID", "app-guid")
    monkeypatch.setenv("LUIS_SUBSCRIPTION_KEY", "secret-key")
    monkeypatch.setenv(name, value)

    with pytest.raises(ValueError, match=name):
        ClientConfig.from_env(clean_env)
