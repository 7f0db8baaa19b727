"""mxidwc - Wildcard allow-lists for Matrix user IDs."""

from __future__ import annotations

# Core
from mxidwc.pattern import WILDCARD_GROUP, CompiledMatcher, compile_pattern, compile_patterns
from mxidwc.matcher import first_match, is_allowed

# Allow-list
from mxidwc.allowlist import Allowlist

# Config
from mxidwc.config import AllowlistSettings, Config

# Errors
from mxidwc.errors import (
    ConfigError,
    ConfigNotFoundError,
    ErrorCodes,
    InvalidPatternError,
    MxidwcError,
    PatternViolation,
)

__version__ = "0.1.0"

__all__ = [
    # Core
    "CompiledMatcher",
    "compile_pattern",
    "compile_patterns",
    "is_allowed",
    "first_match",
    "WILDCARD_GROUP",
    # Allow-list
    "Allowlist",
    # Config
    "Config",
    "AllowlistSettings",
    # Errors
    "ErrorCodes",
    "MxidwcError",
    "InvalidPatternError",
    "PatternViolation",
    "ConfigError",
    "ConfigNotFoundError",
]
