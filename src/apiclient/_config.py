import os
from typing import Any, Optional

from pydantic import BaseModel, field_validator

from ._utils.constants import (
    DEFAULT_MAX_WORKERS,
    DEFAULT_TIMEOUT,
    ENV_ACCESS_TOKEN,
    ENV_DEBUG,
    ENV_FOLLOW_REDIRECTS,
    ENV_MAX_WORKERS,
    ENV_PRINT_RESPONSE,
    ENV_TIMEOUT,
)
from .models.errors import ConfigurationError

_TRUE_VALUES = {"1", "true", "yes", "on"}


class Config(BaseModel):
    """Client-wide defaults applied to every fetch."""

    timeout: float = DEFAULT_TIMEOUT
    token: Optional[str] = None
    print_response: bool = False
    debug: bool = False
    follow_redirects: bool = True
    max_workers: int = DEFAULT_MAX_WORKERS

    @field_validator("timeout")
    @classmethod
    def validate_timeout(cls, value: float) -> float:
        if value <= 0:
            raise ValueError("timeout must be positive")
        return value

    @field_validator("max_workers")
    @classmethod
    def validate_max_workers(cls, value: int) -> int:
        if value <= 0:
            raise ValueError("max_workers must be positive")
        return value

    @classmethod
    def from_env(cls, **overrides: Any) -> "Config":
        """Build a config from ``APICLIENT_*`` variables.

        Keyword arguments that are not ``None`` take precedence over the
        environment.

        Raises:
            ConfigurationError: A numeric variable does not parse.
        """
        values: dict[str, Any] = {
            "timeout": _env_number(ENV_TIMEOUT, float),
            "token": os.getenv(ENV_ACCESS_TOKEN) or None,
            "print_response": _env_flag(ENV_PRINT_RESPONSE),
            "debug": _env_flag(ENV_DEBUG),
            "follow_redirects": _env_flag(ENV_FOLLOW_REDIRECTS),
            "max_workers": _env_number(ENV_MAX_WORKERS, int),
        }
        values.update({k: v for k, v in overrides.items() if v is not None})
        return cls(**{k: v for k, v in values.items() if v is not None})


def _env_flag(name: str) -> Optional[bool]:
    value = os.getenv(name)
    if value is None or value.strip() == "":
        return None
    return value.strip().lower() in _TRUE_VALUES


def _env_number(name: str, kind: type) -> Optional[Any]:
    value = os.getenv(name, "").strip()
    if not value:
        return None
    try:
        return kind(value)
    except ValueError as e:
        raise ConfigurationError(f"{name} must be a number, got {value!r}") from e
