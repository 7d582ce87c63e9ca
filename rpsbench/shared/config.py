import json
from pathlib import Path
from typing import Dict, Any, List, Optional
from urllib.parse import urlsplit

from pydantic import Field, ValidationError, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from rpsbench.const import (
    CONFIG_FILE_NAME, DEFAULT_CANDIDATE_PORTS, DEFAULT_CONNECTIONS, DEFAULT_DISPATCH_STRATEGY,
    DEFAULT_DURATION_SEC, DEFAULT_LOG_LEVEL, DEFAULT_THREADS, DEFAULT_TOTAL_REQUESTS, DEFAULT_URL,
    DEFAULT_WARMUP_REQUESTS, ENV_PREFIX, LIBRARY_LOG_LEVELS, PROBE_TIMEOUT_SEC, REQUEST_TIMEOUT_SEC,
    SENTINEL_BODY, STRATEGY_AUTO, STRATEGY_BATCH, STRATEGY_POOL, THROUGHPUT_THRESHOLD_RPS
)
from rpsbench.benchmark.exceptions import ConfigurationError


class Config(BaseSettings):
    """Global configuration settings for the benchmark harness."""

    duration: int = Field(default=DEFAULT_DURATION_SEC, ge=1)
    connections: int = Field(default=DEFAULT_CONNECTIONS, ge=1)
    threads: int = Field(default=DEFAULT_THREADS, ge=1)
    url: str = DEFAULT_URL
    total_requests: int = Field(default=DEFAULT_TOTAL_REQUESTS, ge=0)
    warmup_requests: int = Field(default=DEFAULT_WARMUP_REQUESTS, ge=0)
    threshold_rps: float = Field(default=THROUGHPUT_THRESHOLD_RPS, gt=0)
    candidate_ports: List[int] = Field(default_factory=lambda: list(DEFAULT_CANDIDATE_PORTS))
    sentinel: str = SENTINEL_BODY
    probe_timeout: float = Field(default=PROBE_TIMEOUT_SEC, gt=0)
    request_timeout: float = Field(default=REQUEST_TIMEOUT_SEC, gt=0)
    dispatch_strategy: str = DEFAULT_DISPATCH_STRATEGY
    log_level: str = DEFAULT_LOG_LEVEL
    library_log_levels: Dict[str, str] = Field(default_factory=lambda: dict(LIBRARY_LOG_LEVELS))

    model_config = SettingsConfigDict(
        env_prefix=ENV_PREFIX,
        frozen=True,
    )

    @field_validator("url")
    @classmethod
    def _check_url(cls, value: str) -> str:
        parts = urlsplit(value)
        if parts.scheme not in ("http", "https") or not parts.hostname:
            raise ValueError(f"expected an http(s) URL with a host, got {value!r}")
        return value

    @field_validator("candidate_ports")
    @classmethod
    def _check_ports(cls, value: List[int]) -> List[int]:
        for port in value:
            if not 0 < port < 65536:
                raise ValueError(f"port out of range: {port}")
        return value

    @field_validator("dispatch_strategy")
    @classmethod
    def _check_strategy(cls, value: str) -> str:
        value = value.lower()
        if value not in (STRATEGY_AUTO, STRATEGY_POOL, STRATEGY_BATCH):
            raise ValueError(f"unknown dispatch strategy: {value}")
        return value

    @classmethod
    def load_config_from_json(cls) -> Dict[str, Any]:
        """Load configuration from rpsbench.json in the working directory."""
        config_path = Path(CONFIG_FILE_NAME)
        if config_path.exists():
            with open(config_path, 'r') as f:
                data = json.load(f)
            if not isinstance(data, dict):
                raise ConfigurationError(
                    f"Configuration file {CONFIG_FILE_NAME} must contain a JSON object, got {type(data).__name__}",
                    config_key=CONFIG_FILE_NAME,
                    suggestions=[f"Put the settings in ./{CONFIG_FILE_NAME} inside a single {{...}} object"],
                )
            return data
        return {}

    @classmethod
    def settings_customise_sources(
        cls,
        settings_cls,
        init_settings,
        env_settings,
        dotenv_settings,
        file_secret_settings,
    ):
        """
        Customise the sources for settings.

        Order of precedence (highest to lowest):
        1. Init settings (kwargs passed to constructor, i.e. CLI flags)
        2. Environment variables
        3. JSON config file
        4. Default values
        """
        def json_source():
            return cls.load_config_from_json()

        return (
            init_settings,
            env_settings,
            json_source,
        )


def load_config(**overrides: Optional[Any]) -> Config:
    """Build the settings once, dropping overrides that were not supplied.

    Raises:
        ConfigurationError: If any value fails validation or the JSON file is unreadable.
    """
    values = {key: value for key, value in overrides.items() if value is not None}
    try:
        return Config(**values)
    except json.JSONDecodeError as e:
        raise ConfigurationError(
            f"Invalid JSON in configuration file {CONFIG_FILE_NAME}: {e}",
            config_key=CONFIG_FILE_NAME,
            suggestions=[f"Fix or remove ./{CONFIG_FILE_NAME}"],
            cause=e,
        ) from e
    except ValidationError as e:
        first = e.errors()[0]
        key = ".".join(str(part) for part in first.get("loc", ())) or None
        raise ConfigurationError(
            f"Configuration validation error: {e}",
            config_key=key,
            suggestions=[
                f"Check the value given for '{key}'" if key else "Check the supplied options",
                f"Environment overrides use the {ENV_PREFIX} prefix",
            ],
            cause=e,
        ) from e
