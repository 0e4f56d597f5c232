"""
Symbol classification for the LESS Language Server.

This module decides what sits under the cursor on a single line of LESS
source: a variable reference (``@name`` or ``@{name}``) or a mixin call
(``.name(...)``). It also builds the pattern used to recognise the
declaration of that symbol.
"""

import enum
import logging
import re
from dataclasses import dataclass
from typing import Optional

logger = logging.getLogger("lessgoto")

IMPORT_KEYWORD = "@import"

# Matches "@name" and "@{name}"
_VARIABLE_PATTERN = re.compile(r"@(?:\{([A-Za-z0-9_-]+)\}|([A-Za-z0-9_-]+))")

# Matches ".mixin-name()" or ".mixin-name(parameter)"
_MIXIN_PATTERN = re.compile(r"\.([A-Za-z0-9_-]+)\s*\(.*?\)")


class SymbolKind(enum.Enum):
    VARIABLE = "variable"
    MIXIN = "mixin"


@dataclass(frozen=True)
class DefinitionPattern:
    """
    Recognises the line that declares a symbol.

    A variable ``v`` is declared by ``@v:`` and a mixin ``m`` by
    ``.m(...) {``, both optionally preceded by whitespace.
    """

    kind: SymbolKind
    name: str

    def match(self, line: str) -> Optional[int]:
        """
        Test a raw line against the declaration form.

        Args:
            line: The line text, untrimmed.

        Returns:
            The column where the match starts, or None if the line does not
            declare the symbol. Leading whitespace is part of the match, so a
            match always starts at column 0.
        """
        body = line.lstrip()
        if self.kind is SymbolKind.VARIABLE:
            matched = self._match_variable(body)
        else:
            matched = self._match_mixin(body)
        return 0 if matched else None

    def _match_variable(self, body: str) -> bool:
        head = "@" + self.name
        if not body.startswith(head):
            return False
        return body[len(head) :].lstrip().startswith(":")

    def _match_mixin(self, body: str) -> bool:
        head = "." + self.name + "("
        if not body.startswith(head):
            return False
        rest = body[len(head) :]
        # Any ")" followed by optional whitespace and "{" closes the signature
        close = rest.find(")")
        while close != -1:
            if rest[close + 1 :].lstrip().startswith("{"):
                return True
            close = rest.find(")", close + 1)
        return False


@dataclass(frozen=True)
class SymbolRef:
    """A symbol found under the cursor."""

    kind: SymbolKind
    name: str

    def pattern(self) -> DefinitionPattern:
        return DefinitionPattern(self.kind, self.name)


def is_import_line(line: str) -> bool:
    return line.strip().startswith(IMPORT_KEYWORD)


def classify_variable(line: str, character: int) -> Optional[SymbolRef]:
    """
    Find the variable reference under the cursor.

    Both ends of a token's span count as "on" the token, so a cursor placed
    right after ``@name`` still selects it.

    Args:
        line: The text of the cursor line.
        character: The cursor offset in the line.

    Returns:
        A variable SymbolRef, or None if the cursor is not on a variable or
        the line is an import statement.
    """
    # The quoted path of an import is not a variable
    if is_import_line(line):
        return None

    for match in _VARIABLE_PATTERN.finditer(line):
        if match.start() <= character <= match.end():
            name = match.group(1) or match.group(2)
            return SymbolRef(SymbolKind.VARIABLE, name)
    return None


def classify_mixin(line: str, character: int) -> Optional[SymbolRef]:
    """
    Find the mixin call under the cursor.

    Only the first mixin call on the line is considered, and the cursor has
    to be on its name: a cursor inside the argument list is not a mixin
    lookup.

    Args:
        line: The text of the cursor line.
        character: The cursor offset in the line.

    Returns:
        A mixin SymbolRef, or None.
    """
    match = _MIXIN_PATTERN.search(line)
    if match is None:
        return None

    start, end = match.start(), match.end()
    open_paren = match.group(0).index("(")
    if character >= start + open_paren + 1:
        return None

    if start <= character <= end:
        return SymbolRef(SymbolKind.MIXIN, match.group(1))
    return None


def classify(line: str, character: int) -> Optional[SymbolRef]:
    """Classify the cursor position, trying mixins before variables."""
    symbol = classify_mixin(line, character)
    if symbol is None:
        symbol = classify_variable(line, character)
    if symbol is not None:
        logger.debug("Classified %s '%s'", symbol.kind.value, symbol.name)
    return symbol
