"""Compilation of MXID wildcard patterns into anchored regular expressions.

A pattern has the shape of a fully-qualified Matrix ID, ``@localpart:domainpart``,
where each part may contain one ``*``. The wildcard matches any run of
characters other than ``@`` and ``:``, so it never spills from one part into
the other.
"""

from __future__ import annotations

import re
from collections.abc import Iterable
from dataclasses import dataclass

from mxidwc.errors import InvalidPatternError, PatternViolation

__all__ = ["CompiledMatcher", "WILDCARD_GROUP", "compile_pattern", "compile_patterns"]

SIGIL = "@"
DELIMITER = ":"
WILDCARD = "*"

# Capture group substituted for each wildcard.
WILDCARD_GROUP = f"([^{DELIMITER}{SIGIL}]*)"


@dataclass(frozen=True)
class CompiledMatcher:
    """A validated pattern and the anchored expression compiled from it.

    Immutable, so a list of matchers can be shared between threads.
    """

    pattern: str
    regex: re.Pattern[str]

    def match(self, identifier: str) -> re.Match[str] | None:
        """Return the full-string match of ``identifier``, or None."""
        return self.regex.fullmatch(identifier)

    def matches(self, identifier: str) -> bool:
        """Check whether ``identifier`` matches the whole pattern."""
        return self.match(identifier) is not None

    def captures(self, identifier: str) -> tuple[str, ...] | None:
        """Return the text matched by each wildcard, in order, or None on mismatch."""
        m = self.match(identifier)
        if m is None:
            return None
        return m.groups()

    def __str__(self) -> str:
        return self.regex.pattern


def _split_parts(pattern: str) -> tuple[str, str]:
    """Validate the MXID shape of ``pattern`` and return (localpart, domainpart)."""
    if not pattern.startswith(SIGIL):
        raise InvalidPatternError(pattern, PatternViolation.MISSING_AT_PREFIX)
    if pattern.count(SIGIL) > 1:
        raise InvalidPatternError(pattern, PatternViolation.MULTIPLE_AT)

    delimiters = pattern.count(DELIMITER)
    if delimiters == 0:
        raise InvalidPatternError(pattern, PatternViolation.MISSING_DELIMITER)
    if delimiters > 1:
        raise InvalidPatternError(pattern, PatternViolation.MULTIPLE_DELIMITERS)

    localpart, _, domainpart = pattern[len(SIGIL):].partition(DELIMITER)
    if not localpart:
        raise InvalidPatternError(pattern, PatternViolation.EMPTY_LOCALPART)
    if not domainpart:
        raise InvalidPatternError(pattern, PatternViolation.EMPTY_DOMAINPART)

    if localpart.count(WILDCARD) > 1 or domainpart.count(WILDCARD) > 1:
        raise InvalidPatternError(pattern, PatternViolation.MULTIPLE_WILDCARDS)

    return localpart, domainpart


def _part_to_regex(part: str) -> str:
    """Escape a localpart or domainpart, substituting the wildcard if present."""
    before, wildcard, after = part.partition(WILDCARD)
    if not wildcard:
        return re.escape(part)
    return re.escape(before) + WILDCARD_GROUP + re.escape(after)


def compile_pattern(pattern: str) -> CompiledMatcher:
    """Compile an allow-list pattern into a full-string matcher.

    Args:
        pattern: A pattern such as ``@*:example.com`` or
            ``@bot.*:*.example.com``.

    Returns:
        A CompiledMatcher. ``str()`` of the result is the anchored
        expression, e.g. ``^@([^:@]*):example\\.com$``.

    Raises:
        InvalidPatternError: If the pattern is not shaped like a
            fully-qualified MXID or a part holds more than one wildcard.
    """
    localpart, domainpart = _split_parts(pattern)
    expression = (
        "^"
        + re.escape(SIGIL)
        + _part_to_regex(localpart)
        + re.escape(DELIMITER)
        + _part_to_regex(domainpart)
        + "$"
    )
    return CompiledMatcher(pattern=pattern, regex=re.compile(expression))


def compile_patterns(patterns: Iterable[str]) -> tuple[CompiledMatcher, ...]:
    """Compile patterns in order, stopping at the first invalid one.

    Raises:
        InvalidPatternError: For the first invalid pattern, with its position
            in ``patterns`` recorded as ``index``. Nothing is returned for
            the patterns compiled before it.
        TypeError: If ``patterns`` is a single string rather than a
            collection of strings.
    """
    if isinstance(patterns, str):
        raise TypeError("patterns must be a collection of strings, not a single str")
    compiled: list[CompiledMatcher] = []
    for i, pattern in enumerate(patterns):
        try:
            compiled.append(compile_pattern(pattern))
        except InvalidPatternError as e:
            raise InvalidPatternError(pattern, e.violation, index=i) from e
    return tuple(compiled)
