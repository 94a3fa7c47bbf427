"""Custom exceptions for backend-stub.

Exceptions raised by user-supplied producers and transforms are never wrapped
in these types; they reach the caller unchanged.
"""

from __future__ import annotations


class BackendStubError(Exception):
    """Base exception for all backend-stub errors."""

    pass


class UnknownCharsetError(BackendStubError, LookupError):
    """Raised when a response spec names a charset Python cannot decode."""

    def __init__(self, charset: str) -> None:
        self.charset = charset
        super().__init__(f"Unknown charset for response decoding: {charset!r}")


class ConfigFileNotFoundError(BackendStubError, FileNotFoundError):
    """Raised when a stub config file path does not exist."""

    def __init__(self, path: str) -> None:
        super().__init__(f"Config file not found: {path}")


class ConfigFileParseError(BackendStubError, ValueError):
    """Raised when a stub config file is not valid TOML."""

    def __init__(self, path: str, detail: str) -> None:
        super().__init__(f"Config file {path} could not be parsed: {detail}")


class ConfigFileValidationError(BackendStubError, ValueError):
    """Raised when a stub config file fails schema validation."""

    def __init__(self, path: str, detail: str) -> None:
        super().__init__(f"Config file {path} is invalid: {detail}")


class PositiveIntegerEnvVarError(BackendStubError, ValueError):
    """Raised when an environment variable must be a positive integer."""

    def __init__(self, env_name: str) -> None:
        super().__init__(f"{env_name} must be a positive integer.")


class BooleanEnvVarError(BackendStubError, ValueError):
    """Raised when an environment variable must be a supported boolean."""

    def __init__(self, env_name: str) -> None:
        super().__init__(f"{env_name} must be a boolean value (true/false, 1/0, yes/no, on/off).")


class LogLevelEnvVarError(BackendStubError, ValueError):
    """Raised when an environment variable must name a logging level."""

    def __init__(self, env_name: str) -> None:
        super().__init__(f"{env_name} must be one of DEBUG, INFO, WARNING, ERROR, CRITICAL.")
