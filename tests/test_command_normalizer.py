"""
Unit tests for command normalization.
"""

import pytest

from utils.command_normalizer import command_words, normalize_command


class TestNormalizeCommand:
    """Tests for normalize_command"""

    def test_collapses_case_and_whitespace(self):
        assert normalize_command("Show  IP\tInterface") == "show ip interface"
        assert normalize_command("show ip interface") == "show ip interface"

    def test_blank_input_returns_empty(self):
        assert normalize_command("") == ""
        assert normalize_command("   \t \r\n ") == ""

    def test_line_breaks_become_spaces(self):
        assert normalize_command("show\r\nversion\nbrief") == "show version brief"

    def test_trims_edges(self):
        assert normalize_command("  display   current-configuration  ") == "display current-configuration"

    @pytest.mark.parametrize("raw", [
        "Show  IP\tInterface",
        "  SHOW\r\n\r\nRUN  ",
        "display\tinterface  GigabitEthernet0/0/1",
        "",
        "x",
    ])
    def test_idempotent(self, raw):
        once = normalize_command(raw)
        assert normalize_command(once) == once


class TestCommandWords:
    """Tests for command_words"""

    def test_splits_normalized_words(self):
        assert command_words(" Show IP\tRoute ") == ["show", "ip", "route"]

    def test_blank_has_no_words(self):
        assert command_words("  ") == []
