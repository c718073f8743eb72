"""
Canonical form of a typed command, used only for comparison.

The stored command text is never replaced by its normalized form.
"""

from typing import List


def normalize_command(raw: str) -> str:
    """
    Collapse whitespace and lower-case a command string.

    Args:
        raw: Command text as typed or stored

    Returns:
        The trimmed, single-spaced, lower-cased command, or "" for blank input
    """
    text = raw.strip()
    if not text:
        return text
    text = text.replace("\r\n", "\n")
    text = text.replace("\t", " ")
    text = " ".join(text.split())
    return text.lower()


def command_words(raw: str) -> List[str]:
    """Split a command into its normalized words."""
    return normalize_command(raw).split()
