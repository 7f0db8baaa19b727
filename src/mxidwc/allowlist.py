"""Allow-list of MXID wildcard patterns.

This module defines the Allowlist class, which owns a compiled list of
patterns and answers "may this user proceed" for callers such as a bridge
or bot.
"""

from __future__ import annotations

import logging
import threading
from collections.abc import Iterable

from pydantic import ValidationError

from mxidwc.config import AllowlistSettings, Config
from mxidwc.errors import ConfigError
from mxidwc.matcher import first_match
from mxidwc.pattern import CompiledMatcher, compile_pattern, compile_patterns

__all__ = ["Allowlist", "DEFAULT_KEY"]

DEFAULT_KEY = "allowed_users"


class Allowlist:
    """Ordered allow-list of compiled MXID patterns.

    Patterns are compiled when they enter the list, so an invalid pattern is
    reported at load time rather than at check time.

    Thread safety:
        Internally synchronized. All public methods (check, add_pattern,
        remove_pattern, reload) are safe to call concurrently.
    """

    def __init__(self, patterns: Iterable[str] = ()) -> None:
        """Initialize the allow-list.

        Args:
            patterns: Pattern strings, compiled in order.

        Raises:
            TypeError: If ``patterns`` is a single string.
            InvalidPatternError: For the first invalid pattern.
        """
        self._matchers: list[CompiledMatcher] = list(compile_patterns(patterns))
        self._yaml_path: str | None = None
        self._key: str = DEFAULT_KEY
        self._logger: logging.Logger = logging.getLogger("mxidwc.allowlist")
        self._lock = threading.Lock()

    @classmethod
    def from_config(cls, config: Config, key: str = DEFAULT_KEY) -> Allowlist:
        """Build an allow-list from the pattern list stored under ``key``.

        A missing or empty key yields an empty allow-list.

        Raises:
            ConfigError: If the value under ``key`` is not a list of strings.
            InvalidPatternError: For the first invalid pattern.
        """
        raw = config.get(key)
        try:
            settings = AllowlistSettings.model_validate(
                {"allowed_users": raw if raw is not None else []}
            )
        except ValidationError as e:
            raise ConfigError(
                f"'{key}' must be a list of strings",
                details={"key": key, "errors": e.errors()},
                cause=e,
            ) from e
        return cls(settings.allowed_users)

    @classmethod
    def load(cls, yaml_path: str, key: str = DEFAULT_KEY) -> Allowlist:
        """Load an allow-list from a YAML file.

        Args:
            yaml_path: Path to the YAML configuration file.
            key: Dot-path of the pattern list inside the file.

        Raises:
            ConfigNotFoundError: If the file does not exist.
            ConfigError: If the YAML is invalid or has structural errors.
            InvalidPatternError: For the first invalid pattern.
        """
        config = Config.load(yaml_path)
        allowlist = cls.from_config(config, key=key)
        allowlist._yaml_path = config.path
        allowlist._key = key
        allowlist._logger.debug(
            "Allowlist loaded: path=%s key=%s patterns=%d", yaml_path, key, len(allowlist)
        )
        return allowlist

    @property
    def matchers(self) -> tuple[CompiledMatcher, ...]:
        """Snapshot of the compiled matchers, in evaluation order."""
        with self._lock:
            return tuple(self._matchers)

    @property
    def patterns(self) -> list[str]:
        """The source pattern strings, in evaluation order."""
        return [m.pattern for m in self.matchers]

    def __len__(self) -> int:
        with self._lock:
            return len(self._matchers)

    def check(self, user_id: str) -> bool:
        """Check if ``user_id`` matches any pattern in the allow-list.

        Returns:
            True if allowed, False otherwise. Malformed IDs are never allowed.
        """
        matched = first_match(user_id, self.matchers)
        if matched is None:
            self._logger.debug("Allowlist check: user=%s decision=deny rule=default", user_id)
            return False
        self._logger.debug(
            "Allowlist check: user=%s decision=allow rule=%s", user_id, matched.pattern
        )
        return True

    def add_pattern(self, pattern: str) -> None:
        """Append a pattern at the lowest priority.

        Raises:
            InvalidPatternError: If the pattern is invalid. The list is unchanged.
        """
        matcher = compile_pattern(pattern)
        with self._lock:
            self._matchers.append(matcher)

    def remove_pattern(self, pattern: str) -> bool:
        """Remove the first entry whose source string equals ``pattern``.

        Returns:
            True if an entry was found and removed, False otherwise.
        """
        with self._lock:
            for i, matcher in enumerate(self._matchers):
                if matcher.pattern == pattern:
                    self._matchers.pop(i)
                    return True
            return False

    def reload(self) -> None:
        """Re-read the allow-list from the YAML file it was loaded from.

        Only works if the allow-list was created via Allowlist.load(). The
        current patterns are kept if the reload fails.

        Raises:
            ConfigError: If no YAML path was stored, or the file is invalid.
            ConfigNotFoundError: If the file has disappeared.
            InvalidPatternError: For the first invalid pattern in the file.
        """
        with self._lock:
            yaml_path = self._yaml_path
            key = self._key
        if yaml_path is None:
            raise ConfigError("Cannot reload: allow-list was not loaded from a YAML file")
        reloaded = Allowlist.load(yaml_path, key=key)
        with self._lock:
            self._matchers = reloaded._matchers
        self._logger.debug("Allowlist reloaded: path=%s patterns=%d", yaml_path, len(reloaded))
