"""Error hierarchy for mxidwc."""

from __future__ import annotations

from datetime import datetime, timezone
from enum import Enum
from typing import Any

__all__ = [
    "MxidwcError",
    "InvalidPatternError",
    "PatternViolation",
    "ConfigNotFoundError",
    "ConfigError",
    "ErrorCodes",
]


class MxidwcError(Exception):
    """Base error for all mxidwc errors."""

    def __init__(
        self,
        code: str,
        message: str,
        details: dict[str, Any] | None = None,
        cause: Exception | None = None,
    ) -> None:
        super().__init__(message)
        self.code = code
        self.message = message
        self.details: dict[str, Any] = details or {}
        self.cause = cause
        self.timestamp = datetime.now(timezone.utc).isoformat()

    def __str__(self) -> str:
        return f"[{self.code}] {self.message}"


class PatternViolation(str, Enum):
    """Structural rule broken by an allow-list pattern."""

    MISSING_AT_PREFIX = "missing_at_prefix"
    MULTIPLE_AT = "multiple_at"
    MISSING_DELIMITER = "missing_delimiter"
    MULTIPLE_DELIMITERS = "multiple_delimiters"
    EMPTY_LOCALPART = "empty_localpart"
    EMPTY_DOMAINPART = "empty_domainpart"
    MULTIPLE_WILDCARDS = "multiple_wildcards"

    @property
    def description(self) -> str:
        return _VIOLATION_DESCRIPTIONS[self]


_VIOLATION_DESCRIPTIONS: dict[PatternViolation, str] = {
    PatternViolation.MISSING_AT_PREFIX: "must start with '@'",
    PatternViolation.MULTIPLE_AT: "must contain exactly one '@'",
    PatternViolation.MISSING_DELIMITER: "must contain a ':' between localpart and domainpart",
    PatternViolation.MULTIPLE_DELIMITERS: "must contain exactly one ':'",
    PatternViolation.EMPTY_LOCALPART: "localpart must not be empty",
    PatternViolation.EMPTY_DOMAINPART: "domainpart must not be empty",
    PatternViolation.MULTIPLE_WILDCARDS: "each part may contain at most one '*'",
}


class InvalidPatternError(MxidwcError):
    """Raised when an allow-list pattern is not a fully-qualified MXID pattern."""

    def __init__(
        self,
        pattern: str,
        violation: PatternViolation,
        index: int | None = None,
        **kwargs: Any,
    ) -> None:
        where = f" (entry {index})" if index is not None else ""
        super().__init__(
            code="INVALID_PATTERN",
            message=f"Invalid pattern '{pattern}'{where}: {violation.description}",
            details={"pattern": pattern, "violation": violation, "index": index},
            **kwargs,
        )

    @property
    def pattern(self) -> str:
        """The offending pattern string."""
        return self.details["pattern"]

    @property
    def violation(self) -> PatternViolation:
        """The structural rule the pattern broke."""
        return self.details["violation"]

    @property
    def index(self) -> int | None:
        """Position of the pattern in a batch, or None for a single compile."""
        return self.details["index"]


class ConfigNotFoundError(MxidwcError):
    """Raised when a configuration file cannot be found."""

    def __init__(self, config_path: str, **kwargs: Any) -> None:
        super().__init__(
            code="CONFIG_NOT_FOUND",
            message=f"Configuration file not found: {config_path}",
            details={"config_path": config_path},
            **kwargs,
        )


class ConfigError(MxidwcError):
    """Raised when configuration is invalid."""

    def __init__(self, message: str, **kwargs: Any) -> None:
        super().__init__(code="CONFIG_INVALID", message=message, **kwargs)


class ErrorCodes:
    """All error codes as constants.

    Example:
        if error.code == ErrorCodes.INVALID_PATTERN:
            report_bad_allowlist()
    """

    INVALID_PATTERN = "INVALID_PATTERN"
    CONFIG_NOT_FOUND = "CONFIG_NOT_FOUND"
    CONFIG_INVALID = "CONFIG_INVALID"

    def __setattr__(self, name: str, value: object) -> None:
        raise AttributeError("ErrorCodes is immutable")
