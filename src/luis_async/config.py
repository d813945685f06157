"""Configuration management for the async LUIS client.

Loads settings from environment variables with sensible defaults.
Supports .env files via python-dotenv.
"""

import os
from dataclasses import dataclass
from pathlib import Path

from dotenv import load_dotenv

DEFAULT_ENDPOINT = "https://westus.api.cognitive.microsoft.com/luis/v2.0/apps"

_TRUE_VALUES = {"1", "true", "yes", "on"}
_FALSE_VALUES = {"0", "false", "no", "off"}


@dataclass(frozen=True)
class ClientConfig:
    """LUIS client configuration.

    Attributes:
        application_id: GUID of the LUIS app, from luis.ai.
        subscription_key: LUIS subscription key from the Azure Portal.
        verbose: Ask LUIS for all intent scores and log each exchange.
        endpoint: Base URL of the LUIS v2 prediction API.
        timeout_seconds: HTTP timeout used by the default transport.
        log_level: Logging level name for the CLI.
    """

    application_id: str
    subscription_key: str
    verbose: bool = True
    endpoint: str = DEFAULT_ENDPOINT
    timeout_seconds: float = 30.0
    log_level: str = "INFO"

    @classmethod
    def from_env(cls, env_file: str | Path | None = None) -> "ClientConfig":
        """Load configuration from environment variables.

        Args:
            env_file: Optional path to .env file. If None, searches for .env
                     in current directory and parent directories.

        Returns:
            ClientConfig instance with values from environment.

        Raises:
            ValueError: If required environment variables are missing or invalid.
        """
        if env_file:
            load_dotenv(env_file)
        else:
            load_dotenv()

        # Required vars
        application_id = os.getenv("LUIS_APP_ID")
        if not application_id:
            raise ValueError(
                "LUIS_APP_ID environment variable is required. "
                "Find the app ID at https://www.luis.ai"
            )
        subscription_key = os.getenv("LUIS_SUBSCRIPTION_KEY")
        if not subscription_key:
            raise ValueError(
                "LUIS_SUBSCRIPTION_KEY environment variable is required. "
                "Get one from the Azure Portal"
            )

        # Optional vars with defaults
        verbose = _parse_bool("LUIS_VERBOSE", os.getenv("LUIS_VERBOSE", "true"))
        endpoint = os.getenv("LUIS_ENDPOINT", DEFAULT_ENDPOINT).rstrip("/")
        raw_timeout = os.getenv("LUIS_TIMEOUT_SECONDS", "30")
        try:
            timeout_seconds = float(raw_timeout)
        except ValueError:
            raise ValueError(
                f"Invalid LUIS_TIMEOUT_SECONDS: {raw_timeout}. Must be a number"
            ) from None
        log_level = os.getenv("LOG_LEVEL", "INFO").upper()

        # Validate log level
        valid_levels = {"DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"}
        if log_level not in valid_levels:
            raise ValueError(
                f"Invalid LOG_LEVEL: {log_level}. Must be one of {valid_levels}"
            )

        return cls(
            application_id=application_id,
            subscription_key=subscription_key,
            verbose=verbose,
            endpoint=endpoint,
            timeout_seconds=timeout_seconds,
            log_level=log_level,
        )


def _parse_bool(name: str, value: str) -> bool:
    normalized = value.strip().lower()
    if normalized in _TRUE_VALUES:
        return True
    if normalized in _FALSE_VALUES:
        return False
    raise ValueError(f"Invalid {name}: {value}. Expected true or false")
