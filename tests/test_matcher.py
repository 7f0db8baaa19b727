"""Tests for evaluating identifiers against compiled matchers."""

from __future__ import annotations

import pytest

from mxidwc.matcher import first_match, is_allowed
from mxidwc.pattern import compile_patterns


class TestIsAllowed:
    """Matching table for is_allowed()."""

    @pytest.mark.parametrize(
        ("identifier", "allowed_users", "expected"),
        [
            pytest.param("@someone:example.com", [], False, id="empty-allows-no-one"),
            pytest.param(
                "@someone:example.com", ["@someone:example.com"], True, id="direct-match"
            ),
            pytest.param(
                "@someone:example.com",
                ["@another:example.com", "@someone:example.com"],
                True,
                id="direct-match-later-on",
            ),
            pytest.param(
                "@someone:example.com", ["@another:example.com"], False, id="no-match"
            ),
            pytest.param(
                "@someone:example.com", ["@*:example.com"], True, id="localpart-only-wildcard"
            ),
            pytest.param(
                "@bot.abc:example.com", ["@bot.*:example.com"], True, id="localpart-wildcard"
            ),
            pytest.param(
                "@bot.abc:example.com",
                ["@employee.*:example.com"],
                False,
                id="localpart-wildcard-mismatch",
            ),
            pytest.param(
                "@someone:example.com", ["@*:another.com"], False, id="wildcard-other-domain"
            ),
            pytest.param(
                "@someone:example.com", ["@someone:*"], True, id="domainpart-only-wildcard"
            ),
            pytest.param(
                "@someone:example.organization.com",
                ["@someone:*.organization.com"],
                True,
                id="domainpart-wildcard",
            ),
            pytest.param(
                "@someone:example.another.com",
                ["@someone:*.organization.com"],
                False,
                id="domainpart-wildcard-mismatch",
            ),
        ],
    )
    def test_match_table(self, identifier: str, allowed_users: list[str], expected: bool) -> None:
        assert is_allowed(identifier, compile_patterns(allowed_users)) is expected

    def test_malformed_identifier_never_matches(self) -> None:
        """Malformed identifiers are rejected, not raised on."""
        matchers = compile_patterns(["@*:*"])
        assert is_allowed("someone:example.com", matchers) is False
        assert is_allowed("@someone", matchers) is False
        assert is_allowed("@a:b:c", matchers) is False
        assert is_allowed("", matchers) is False

    def test_wildcard_does_not_span_extra_delimiter(self) -> None:
        assert is_allowed("@a:b:example.com", compile_patterns(["@*:example.com"])) is False

    def test_literal_dot(self) -> None:
        assert is_allowed("@axb:example.com", compile_patterns(["@a.b:example.com"])) is False

    def test_empty_localpart_matches_standalone_wildcard(self) -> None:
        assert is_allowed("@:example.com", compile_patterns(["@*:example.com"])) is True

    def test_accepts_generator_of_matchers(self) -> None:
        matchers = compile_patterns(["@someone:example.com"])
        assert is_allowed("@someone:example.com", (m for m in matchers)) is True


class TestFirstMatch:
    """Tests for first_match()."""

    def test_returns_first_matching_matcher(self) -> None:
        matchers = compile_patterns(["@other:example.com", "@*:example.com", "@someone:*"])
        matched = first_match("@someone:example.com", matchers)
        assert matched is not None
        assert matched.pattern == "@*:example.com"

    def test_returns_none_without_match(self) -> None:
        assert first_match("@someone:example.com", compile_patterns(["@x:y"])) is None
