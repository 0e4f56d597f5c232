"""
Line scanner that finds a definition while skipping unrelated blocks.

A declaration only counts when it sits outside of any rule block that is not
itself the match: the scanner tests each line against the definition pattern
and, when a non-matching line opens a ``{`` block, skips the whole block
(counting nested braces) before testing lines again.
"""

import enum
import logging
from dataclasses import dataclass
from typing import List, Optional

from lessgoto.features.classify import DefinitionPattern

logger = logging.getLogger("lessgoto")


class ScanState(enum.Enum):
    SCANNING = "scanning"
    SKIPPING_BLOCK = "skipping_block"


@dataclass(frozen=True)
class Match:
    """Zero-based position of a matched definition line."""

    line: int
    character: int


def split_lines(text: str) -> List[str]:
    """Split on newlines only, keeping line indices aligned with the editor."""
    return text.split("\n")


def brace_delta(line: str) -> int:
    return line.count("{") - line.count("}")


def find_definition_in_text(
    text: str, pattern: DefinitionPattern
) -> Optional[Match]:
    """
    Scan file text for the first line declaring the symbol.

    Args:
        text: Full file content.
        pattern: The declaration pattern to look for.

    Returns:
        The Match of the first declaring line outside unrelated blocks, or
        None. Unbalanced braces end the scan without a match.
    """
    lines = split_lines(text)
    state = ScanState.SCANNING
    depth = 0

    for index, line in enumerate(lines):
        if state is ScanState.SKIPPING_BLOCK:
            depth += brace_delta(line)
            if depth <= 0:
                state = ScanState.SCANNING
            continue

        column = pattern.match(line)
        if column is not None:
            return Match(line=index, character=column)

        if "{" in line:
            depth = brace_delta(line)
            # A block opened and closed on the same line needs no skipping
            if depth > 0:
                state = ScanState.SKIPPING_BLOCK

    if state is ScanState.SKIPPING_BLOCK:
        logger.debug("Unbalanced braces, %d block(s) left open", depth)
    return None

