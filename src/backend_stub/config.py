"""Centralised, injectable configuration for backend stubs."""

from __future__ import annotations

import os
from dataclasses import dataclass, replace
from typing import Self

from dotenv import load_dotenv

from .config_file import StubConfigFile
from .exceptions import BooleanEnvVarError, LogLevelEnvVarError, PositiveIntegerEnvVarError
from .response_as import DEFAULT_CHARSET, validate_charset

LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")


@dataclass(frozen=True)
class StubConfig:
    """Immutable configuration shared by a stub and its effect wrappers.

    Load from environment with `StubConfig.from_env()` or construct directly for testing.
    """

    # Charset used when a request does not declare how to decode its body
    default_charset: str = DEFAULT_CHARSET

    # Thread pool size for FutureEffect.from_config
    future_max_workers: int = 4

    # Logging
    log_unmatched: bool = True
    log_level: str = "INFO"

    @classmethod
    def from_env(cls, dotenv_path: str | None = None) -> Self:
        """Load configuration from environment variables.

        Args:
            dotenv_path: Optional path to .env file. If None, uses default .env discovery.

        Returns:
            StubConfig instance populated from environment.
        """
        load_dotenv(dotenv_path)

        default_charset = os.getenv("BACKEND_STUB_DEFAULT_CHARSET", "").strip() or DEFAULT_CHARSET
        return cls(
            default_charset=validate_charset(default_charset),
            future_max_workers=_parse_optional_positive_int(
                os.getenv("BACKEND_STUB_FUTURE_MAX_WORKERS", ""),
                env_name="BACKEND_STUB_FUTURE_MAX_WORKERS",
            )
            or 4,
            log_unmatched=_parse_optional_bool(
                os.getenv("BACKEND_STUB_LOG_UNMATCHED", ""),
                env_name="BACKEND_STUB_LOG_UNMATCHED",
            )
            is not False,
            log_level=_parse_optional_log_level(
                os.getenv("BACKEND_STUB_LOG_LEVEL", ""),
                env_name="BACKEND_STUB_LOG_LEVEL",
            )
            or "INFO",
        )

    def with_overrides(
        self,
        *,
        default_charset: str | None = None,
        future_max_workers: int | None = None,
        log_unmatched: bool | None = None,
        log_level: str | None = None,
    ) -> Self:
        """Return a new config with specified overrides."""
        return replace(
            self,
            default_charset=self.default_charset
            if default_charset is None
            else validate_charset(default_charset),
            future_max_workers=self.future_max_workers
            if future_max_workers is None
            else future_max_workers,
            log_unmatched=self.log_unmatched if log_unmatched is None else log_unmatched,
            log_level=self.log_level if log_level is None else log_level.upper(),
        )

    def with_file_overrides(self, file_config: StubConfigFile) -> Self:
        """Return a new config with config-file values overriding env/default values."""
        return self.with_overrides(
            default_charset=file_config.default_charset,
            future_max_workers=file_config.future_max_workers,
            log_unmatched=file_config.log_unmatched,
            log_level=file_config.log_level,
        )


def _parse_optional_positive_int(value: str, *, env_name: str) -> int | None:
    """Parse an optional positive integer from an environment variable."""
    text = value.strip()
    if not text:
        return None
    try:
        parsed = int(text)
    except ValueError as exc:
        raise PositiveIntegerEnvVarError(env_name) from exc
    if parsed < 1:
        raise PositiveIntegerEnvVarError(env_name)
    return parsed


def _parse_optional_bool(value: str, *, env_name: str) -> bool | None:
    """Parse an optional boolean from an environment variable."""
    text = value.strip().lower()
    if not text:
        return None
    if text in {"1", "true", "yes", "y", "on"}:
        return True
    if text in {"0", "false", "no", "n", "off"}:
        return False
    raise BooleanEnvVarError(env_name)


def _parse_optional_log_level(value: str, *, env_name: str) -> str | None:
    text = value.strip().upper()
    if not text:
        return None
    if text not in LOG_LEVELS:
        raise LogLevelEnvVarError(env_name)
    return text
