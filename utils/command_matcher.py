"""
Fuzzy matching of a typed command against the commands registered for a device.

Resolution order:
1. Exact: the input normalizes to the same text as a candidate (first one wins)
2. Positional prefix: every input word is a prefix of the candidate word at the
   same position, e.g. "sh ip int" -> "show ip interface brief"
3. Nothing matched: the device answers with the unsupported-command text
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import List, Protocol, Sequence

from utils.command_normalizer import command_words, normalize_command


UNSUPPORTED_COMMAND_OUTPUT = "unspport command"
AMBIGUOUS_HEADER = "which command do you mean?"
AMBIGUOUS_LINE_PREFIX = " -- "


class MatchType(str, Enum):
    EXACT = "exact"
    PARTIAL_SINGLE = "partial_single"
    PARTIAL_MULTI = "partial_multi"
    NONE = "none"


class CommandCandidate(Protocol):
    command: str
    output: str


@dataclass(frozen=True)
class MatchResult:
    """Outcome of matching one input against a device's commands."""

    match_type: MatchType
    output: str
    candidates: List[str] = field(default_factory=list)


def prefix_match_by_words(user_input: str, candidate: str) -> bool:
    """
    Check whether each input word prefixes the candidate word at the same index.

    The candidate must have at least as many words as the input. Input without
    any words never matches.
    """
    input_words = command_words(user_input)
    candidate_words = command_words(candidate)
    if not input_words:
        return False
    if len(candidate_words) < len(input_words):
        return False
    return all(
        candidate_words[i].startswith(word) for i, word in enumerate(input_words)
    )


def format_disambiguation(commands: Sequence[str]) -> str:
    lines = [AMBIGUOUS_HEADER]
    lines.extend(AMBIGUOUS_LINE_PREFIX + command.strip() for command in commands)
    return "\n".join(lines)


def match_command(user_input: str, candidates: Sequence[CommandCandidate]) -> MatchResult:
    """
    Match a typed command against candidate records.

    Args:
        user_input: Raw command text typed by the client
        candidates: Records for one device, in the order the store returned them

    Returns:
        MatchResult describing the match and the text the device should print

    Raises:
        ValueError: If the input is blank; callers must reject it beforehand
    """
    normalized_input = normalize_command(user_input)
    if not normalized_input:
        raise ValueError("Command input must not be blank")

    partial: List[CommandCandidate] = []
    for candidate in candidates:
        if normalize_command(candidate.command) == normalized_input:
            return MatchResult(MatchType.EXACT, candidate.output)
        if prefix_match_by_words(normalized_input, candidate.command):
            partial.append(candidate)

    if len(partial) == 1:
        return MatchResult(MatchType.PARTIAL_SINGLE, partial[0].output)
    if len(partial) > 1:
        commands = [candidate.command.strip() for candidate in partial]
        return MatchResult(MatchType.PARTIAL_MULTI, format_disambiguation(commands), commands)
    return MatchResult(MatchType.NONE, UNSUPPORTED_COMMAND_OUTPUT)
