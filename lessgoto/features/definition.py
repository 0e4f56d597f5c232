"""
Definition finding functionality for the LESS Language Server.

This module provides the go-to-definition feature, resolving variables and
mixins to their declarations in the current file or its imports.
"""

import logging
from typing import Callable, Optional

from lsprotocol import types
from pygls.workspace import TextDocument

from lessgoto import utils
from lessgoto.config import DefinitionConfig
from lessgoto.features.classify import classify
from lessgoto.features.imports import ImportResolver
from lessgoto.features.search import find_definition
from lessgoto.filesystem import FileSystem

logger = logging.getLogger("lessgoto")


async def get_definition_location(
    doc: TextDocument,
    position: types.Position,
    config: DefinitionConfig,
    fs: FileSystem,
    is_cancelled: Optional[Callable[[], bool]] = None,
) -> Optional[types.Location]:
    """
    Get the definition location for the symbol at the given position.

    Args:
        doc: The current document.
        position: The cursor position.
        config: Settings snapshot for this request.
        fs: File-system access.
        is_cancelled: Optional cancellation check for the search.

    Returns:
        Location of the definition, or None if not found.
    """
    line_text = utils.get_line_text(doc, position)
    if line_text is None:
        return None

    # The client counts characters in its position encoding (UTF-16 by default)
    cursor = doc.position_codec.position_from_client_units(doc.lines, position)
    symbol = classify(line_text, cursor.character)
    if symbol is None:
        return None

    start_file = utils.path_from_uri(doc.uri)
    if start_file is None:
        logger.debug("Cannot search from non-file document: %s", doc.uri)
        return None

    resolver = ImportResolver(config, fs)
    result = await find_definition(
        start_file,
        symbol.pattern(),
        resolver,
        fs,
        is_cancelled=is_cancelled,
        max_files=config.max_files,
    )
    if result is None:
        return None

    uri = utils.uri_from_path(result.path)
    if not uri:
        return None
    return utils.location_at(uri, result.line, result.character)
