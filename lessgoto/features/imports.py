"""
Import statement parsing and resolution.

Imports are read from the top of a LESS file and resolved against the
configured include paths first, then against the importing file's directory.
"""

import logging
import os
import re
from dataclasses import dataclass
from typing import Iterator, Optional, Tuple

from lessgoto.config import DefinitionConfig
from lessgoto.features.scanner import split_lines
from lessgoto.filesystem import FileSystem
from lessgoto.utils import canonical_path

logger = logging.getLogger("lessgoto")

DEFAULT_EXTENSION = ".less"

STYLESHEET_EXTENSIONS = (".less", ".css")

# Matches '@import "path";' and '@import (reference, optional) "path";'
_IMPORT_PATTERN = re.compile(
    r"@import\s+(?:\(\s*([\w\s,-]*?)\s*\)\s+)?[\"'](.+?)[\"'];"
)

_COMMENT_PREFIXES = ("//", "/*", "*")


@dataclass(frozen=True)
class ImportStatement:
    """
    A parsed ``@import``.

    Attributes:
        path: The quoted path, as written.
        options: Import options such as ``reference`` or ``optional``. They
            do not affect resolution: a ``(reference)`` import is searched
            like any other.
    """

    path: str
    options: Tuple[str, ...] = ()


def parse_import(line: str) -> Optional[ImportStatement]:
    match = _IMPORT_PATTERN.search(line)
    if match is None:
        return None
    raw_options = (match.group(1) or "").split(",")
    options = tuple(option.strip() for option in raw_options if option.strip())
    return ImportStatement(path=match.group(2), options=options)


def normalize_import_path(import_path: str) -> str:
    """Append the default extension unless the path names a stylesheet."""
    if import_path.lower().endswith(STYLESHEET_EXTENSIONS):
        return import_path
    return import_path + DEFAULT_EXTENSION


def is_comment_line(line: str) -> bool:
    return line.strip().startswith(_COMMENT_PREFIXES)


def opens_block_comment(line: str) -> bool:
    """Check whether a line leaves a ``/* ... */`` comment open."""
    if line.strip().startswith("//"):
        return False
    return line.rfind("/*") > line.rfind("*/")


def iter_leading_imports(text: str) -> Iterator[ImportStatement]:
    """
    Yield the imports at the top of a file.

    Blank lines and comments, including every line of a multi-line block
    comment, are skipped. The first other line that is not an import ends the
    import section.
    """
    in_block_comment = False
    for line in split_lines(text):
        if in_block_comment:
            in_block_comment = "*/" not in line
            continue
        if is_comment_line(line) and opens_block_comment(line):
            in_block_comment = True
            continue

        statement = parse_import(line)
        if statement is not None:
            yield statement
        elif line.strip() and not is_comment_line(line):
            return


class ImportResolver:
    """
    Locate the file an import refers to.

    Each call checks the file system afresh; nothing is cached between calls.
    """

    def __init__(self, config: DefinitionConfig, fs: FileSystem):
        self.config = config
        self.fs = fs

    async def resolve(self, import_path: str, importing_file: str) -> Optional[str]:
        """
        Resolve an import path.

        Args:
            import_path: The path literal from the import statement.
            importing_file: Canonical path of the file containing the import.

        Returns:
            The canonical path of the first existing candidate, or None if
            the import cannot be resolved.
        """
        import_path = normalize_import_path(import_path)

        for root in self.config.resolved_include_paths():
            candidate = _join(root, import_path)
            if await self.fs.exists(candidate):
                return candidate

        candidate = _join(os.path.dirname(importing_file), import_path)
        if await self.fs.exists(candidate):
            return candidate

        logger.debug("Unresolved import '%s' in %s", import_path, importing_file)
        return None


def _join(root: str, import_path: str) -> str:
    # An absolute import path replaces the root, as with os.path.join
    return canonical_path(os.path.join(root, import_path))
