"""
Unit tests for the command matcher.

Covers exact precedence, positional prefix matching, ambiguity and the
unsupported-command fallback.
"""

from dataclasses import dataclass

import pytest

from utils.command_matcher import (
    AMBIGUOUS_HEADER,
    UNSUPPORTED_COMMAND_OUTPUT,
    MatchType,
    match_command,
    prefix_match_by_words,
)


@dataclass
class Candidate:
    command: str
    output: str = ""


class TestPrefixMatchByWords:
    """Tests for prefix_match_by_words"""

    def test_abbreviated_words_match(self):
        assert prefix_match_by_words("sh ip int", "show ip interface brief")

    def test_prefix_failure_at_any_position(self):
        assert not prefix_match_by_words("sh ip intx", "show ip interface brief")

    def test_candidate_shorter_than_input(self):
        assert not prefix_match_by_words("show ip interface brief", "show ip")

    def test_zero_word_input_never_matches(self):
        assert not prefix_match_by_words("   ", "show version")

    def test_comparison_ignores_case(self):
        assert prefix_match_by_words("SH VER", "show version")

    def test_prefix_is_positional_not_substring(self):
        assert not prefix_match_by_words("ip", "show ip route")
        assert not prefix_match_by_words("how", "show")


class TestMatchCommand:
    """Tests for match_command"""

    def test_exact_match(self):
        result = match_command("Show  Version", [Candidate("show version", "v1.0")])

        assert result.match_type == MatchType.EXACT
        assert result.output == "v1.0"

    def test_exact_wins_over_partial(self):
        candidates = [
            Candidate("show version detail", "detail"),
            Candidate("show version", "exact"),
            Candidate("show ver", "short"),
        ]

        result = match_command("show version", candidates)

        assert result.match_type == MatchType.EXACT
        assert result.output == "exact"

    def test_first_exact_wins(self):
        candidates = [Candidate("show clock", "first"), Candidate("SHOW CLOCK", "second")]

        result = match_command("show clock", candidates)

        assert result.output == "first"

    def test_single_partial(self):
        result = match_command("sh ip int", [Candidate("show ip interface brief", "Gi0/0 up")])

        assert result.match_type == MatchType.PARTIAL_SINGLE
        assert result.output == "Gi0/0 up"

    def test_multi_partial_lists_candidates_in_scan_order(self):
        candidates = [
            Candidate("show ip route", "routes"),
            Candidate("show version", "ver"),
            Candidate("  show ip running-config ", "cfg"),
        ]

        result = match_command("sh ip r", candidates)

        assert result.match_type == MatchType.PARTIAL_MULTI
        assert result.output == (
            "which command do you mean?\n"
            " -- show ip route\n"
            " -- show ip running-config"
        )
        assert result.candidates == ["show ip route", "show ip running-config"]

    def test_failed_prefix_falls_back_to_unsupported(self):
        result = match_command("sh ip intx", [Candidate("show ip interface brief", "x")])

        assert result.match_type == MatchType.NONE
        assert result.output == "unspport command"

    def test_no_candidates(self):
        result = match_command("show version", [])

        assert result.match_type == MatchType.NONE
        assert result.output == UNSUPPORTED_COMMAND_OUTPUT

    def test_blank_input_is_rejected(self):
        with pytest.raises(ValueError):
            match_command(" \t ", [Candidate("show version")])

    def test_sentinel_values(self):
        assert [t.value for t in MatchType] == ["exact", "partial_single", "partial_multi", "none"]
        assert AMBIGUOUS_HEADER == "which command do you mean?"
