"""Utility functions for the LESS Language Server."""

import logging
import os
from typing import Optional
from urllib.parse import urlparse

from lsprotocol.types import Location, Position, Range
from pygls import uris
from pygls.workspace import TextDocument

logger = logging.getLogger("lessgoto")

LESS_EXTENSION = ".less"


def canonical_path(path: str) -> str:
    """
    Normalize a file-system path so that two spellings of the same file
    compare equal (absolute, no ``..`` segments, no duplicate separators).
    """
    return os.path.normpath(os.path.abspath(path))


def path_from_uri(uri: str) -> Optional[str]:
    """Convert a ``file://`` URI to a canonical path, or None for other schemes."""
    if urlparse(uri).scheme != "file":
        return None
    path = uris.to_fs_path(uri)
    if not path:
        return None
    return canonical_path(path)


def uri_from_path(path: str) -> Optional[str]:
    return uris.from_fs_path(path)


def is_less_document(doc: TextDocument) -> bool:
    path = doc.path
    return bool(path) and path.lower().endswith(LESS_EXTENSION)


def range_at(line: int, character: int) -> Range:
    """Create an empty LSP Range at the given position."""
    position = Position(line=line, character=character)
    return Range(start=position, end=position)


def location_at(uri: str, line: int, character: int) -> Location:
    """Create an LSP Location pointing to a single position in a document."""
    return Location(uri=uri, range=range_at(line, character))


def get_line_text(doc: TextDocument, position: Position) -> Optional[str]:
    """
    Get the text of the line containing the cursor.

    Args:
        doc: The text document.
        position: The cursor position.

    Returns:
        The line without its line terminator, or None if the position is
        outside the document.
    """
    try:
        line = doc.lines[position.line]
    except IndexError:
        return None
    return line.rstrip("\r\n")
