"""
Breadth-first definition search across the import graph.

Starting from the requesting file, files are taken from a FIFO queue, scanned
for the definition, and their imports appended to the queue. The first match
wins, so the definition closest to the start file by import distance is
returned; ties go to the earlier import statement.
"""

import logging
from collections import deque
from dataclasses import dataclass
from typing import Callable, Deque, Optional, Set

from lessgoto.features.classify import DefinitionPattern
from lessgoto.features.imports import ImportResolver, iter_leading_imports
from lessgoto.features.scanner import find_definition_in_text
from lessgoto.filesystem import FileSystem

logger = logging.getLogger("lessgoto")


@dataclass(frozen=True)
class DefinitionResult:
    """Where a definition was found: canonical file path and position."""

    path: str
    line: int
    character: int


async def find_definition(
    start_file: str,
    pattern: DefinitionPattern,
    resolver: ImportResolver,
    fs: FileSystem,
    is_cancelled: Optional[Callable[[], bool]] = None,
    max_files: Optional[int] = None,
) -> Optional[DefinitionResult]:
    """
    Search ``start_file`` and its transitive imports for a definition.

    Each file is read at most once, so circular imports terminate. Files
    that cannot be read and imports that cannot be resolved are skipped.

    Args:
        start_file: Canonical path of the file the request came from.
        pattern: The declaration pattern to look for.
        resolver: Resolves import paths to canonical file paths.
        fs: File-system access.
        is_cancelled: Checked before every file read; when it returns True
            the search is abandoned.
        max_files: Stop after visiting this many files.

    Returns:
        The first DefinitionResult in breadth-first order, or None.
    """
    queue: Deque[str] = deque([start_file])
    visited: Set[str] = set()

    while queue:
        if is_cancelled is not None and is_cancelled():
            logger.debug("Definition search cancelled")
            return None

        path = queue.popleft()
        if path in visited:
            continue
        if max_files is not None and len(visited) >= max_files:
            logger.info("Definition search stopped after %d files", max_files)
            return None
        visited.add(path)

        text = await fs.read_text(path)
        if text is None:
            continue

        match = find_definition_in_text(text, pattern)
        if match is not None:
            logger.debug(
                "Found %s '%s' in %s:%d",
                pattern.kind.value,
                pattern.name,
                path,
                match.line,
            )
            return DefinitionResult(path, match.line, match.character)

        for statement in iter_leading_imports(text):
            resolved = await resolver.resolve(statement.path, path)
            if resolved is not None:
                queue.append(resolved)

    logger.debug(
        "No definition for %s '%s' in %d file(s)",
        pattern.kind.value,
        pattern.name,
        len(visited),
    )
    return None
