"""Evaluation of an identifier against compiled allow-list matchers."""

from __future__ import annotations

from collections.abc import Iterable

from mxidwc.pattern import CompiledMatcher

__all__ = ["first_match", "is_allowed"]


def first_match(identifier: str, matchers: Iterable[CompiledMatcher]) -> CompiledMatcher | None:
    """Return the first matcher that fully matches ``identifier``, or None."""
    for matcher in matchers:
        if matcher.matches(identifier):
            return matcher
    return None


def is_allowed(identifier: str, matchers: Iterable[CompiledMatcher]) -> bool:
    """Check whether any matcher accepts ``identifier``.

    The identifier is not validated. A malformed MXID simply fails to match
    any well-formed matcher. An empty collection allows no one.
    """
    return first_match(identifier, matchers) is not None
