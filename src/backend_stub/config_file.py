"""Typed parsing and validation for stub config files.

Example file:

    schema_version = 1

    [stub]
    default_charset = "utf-8"
    future_max_workers = 8
    log_unmatched = false
    log_level = "DEBUG"
"""

from __future__ import annotations

import tomllib
from dataclasses import dataclass
from pathlib import Path

from pydantic import BaseModel, ConfigDict, ValidationError, field_validator

from .exceptions import (
    ConfigFileNotFoundError,
    ConfigFileParseError,
    ConfigFileValidationError,
    UnknownCharsetError,
)
from .response_as import validate_charset

_SCHEMA_VERSION = 1
_LOG_LEVELS = frozenset({"DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"})


@dataclass(frozen=True)
class StubConfigFile:
    """Validated stub config values loaded from a TOML file."""

    default_charset: str | None = None
    future_max_workers: int | None = None
    log_unmatched: bool | None = None
    log_level: str | None = None


class _StubSectionModel(BaseModel):
    model_config = ConfigDict(extra="forbid", frozen=True)

    default_charset: str | None = None
    future_max_workers: int | None = None
    log_unmatched: bool | None = None
    log_level: str | None = None

    @field_validator("default_charset")
    @classmethod
    def _validate_charset(cls, value: str | None) -> str | None:
        if value is None:
            return None
        text = value.strip()
        if not text:
            raise ValueError
        try:
            return validate_charset(text)
        except UnknownCharsetError as exc:
            raise ValueError(f"unknown charset {text!r}") from exc

    @field_validator("future_max_workers")
    @classmethod
    def _validate_positive_int(cls, value: int | None) -> int | None:
        if value is None:
            return None
        if value < 1:
            raise ValueError
        return value

    @field_validator("log_level")
    @classmethod
    def _validate_log_level(cls, value: str | None) -> str | None:
        if value is None:
            return None
        level = value.strip().upper()
        if level not in _LOG_LEVELS:
            raise ValueError
        return level


class _ConfigFileModel(BaseModel):
    model_config = ConfigDict(extra="forbid", frozen=True)

    schema_version: int
    stub: _StubSectionModel

    @field_validator("schema_version")
    @classmethod
    def _validate_schema_version(cls, value: int) -> int:
        if value != _SCHEMA_VERSION:
            raise ValueError
        return value


def _format_validation_error(exc: ValidationError) -> str:
    first = exc.errors()[0]
    location = ".".join(str(part) for part in first.get("loc", ("<root>",)))
    message = str(first.get("msg", "invalid value"))
    return f"{location}: {message}"


def load_stub_config_file(*, path: Path) -> StubConfigFile:
    """Load and validate a stub TOML config file."""
    if not path.exists():
        raise ConfigFileNotFoundError(str(path))

    raw_payload = path.read_text(encoding="utf-8")
    try:
        payload: object = tomllib.loads(raw_payload)
    except tomllib.TOMLDecodeError as exc:
        raise ConfigFileParseError(str(path), str(exc)) from exc

    try:
        model = _ConfigFileModel.model_validate(payload)
    except ValidationError as exc:
        raise ConfigFileValidationError(str(path), _format_validation_error(exc)) from exc

    section = model.stub
    return StubConfigFile(
        default_charset=section.default_charset,
        future_max_workers=section.future_max_workers,
        log_unmatched=section.log_unmatched,
        log_level=section.log_level,
    )
