"""
File-system access used by the definition search.

Every call reports failure through its return value (``None`` for an
unreadable file, ``False`` for a missing one) so that the search can skip a
file without relying on exception handling.
"""

import asyncio
import logging
from abc import ABC, abstractmethod
from pathlib import Path
from typing import Optional

from pygls.workspace import Workspace

from lessgoto import utils

logger = logging.getLogger("lessgoto")


class FileSystem(ABC):
    """Asynchronous reads and existence checks over canonical file paths."""

    @abstractmethod
    async def read_text(self, path: str) -> Optional[str]:
        """Return the file content, or None if it cannot be read."""
        ...

    @abstractmethod
    async def exists(self, path: str) -> bool:
        """Return True if ``path`` names an existing file."""
        ...


def _read_file(path: str) -> Optional[str]:
    try:
        data = Path(path).read_bytes()
    except OSError as e:
        logger.debug("Could not read %s: %s", path, e)
        return None
    return data.decode("utf-8", errors="replace")


class LocalFileSystem(FileSystem):
    """Disk access, run in a worker thread so the event loop stays free."""

    async def read_text(self, path: str) -> Optional[str]:
        return await asyncio.to_thread(_read_file, path)

    async def exists(self, path: str) -> bool:
        return await asyncio.to_thread(Path(path).is_file)


class WorkspaceFileSystem(LocalFileSystem):
    """
    Disk access that prefers documents open in the editor.

    An open document's unsaved buffer is what the user sees, so it is read
    instead of the file on disk.
    """

    def __init__(self, workspace: Workspace):
        self.workspace = workspace

    def _open_document_source(self, path: str) -> Optional[str]:
        uri = utils.uri_from_path(path)
        if not uri:
            return None
        doc = self.workspace.text_documents.get(uri)
        if doc is None:
            return None
        return doc.source

    async def read_text(self, path: str) -> Optional[str]:
        source = self._open_document_source(path)
        if source is not None:
            return source
        return await super().read_text(path)

    async def exists(self, path: str) -> bool:
        if self._open_document_source(path) is not None:
            return True
        return await super().exists(path)
