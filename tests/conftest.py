"""
Shared test fixtures and utilities for lessgoto tests.
"""

import asyncio
from pathlib import Path
from typing import Callable, Iterable, List, Optional
from unittest.mock import AsyncMock, Mock

import pytest
from lsprotocol.types import Location, Position
from pygls.workspace import TextDocument

from lessgoto import utils
from lessgoto.config import DefinitionConfig
from lessgoto.features.definition import get_definition_location
from lessgoto.filesystem import FileSystem, LocalFileSystem
from lessgoto.server import LessLanguageServer


# =============================================================================
# File Systems
# =============================================================================


class RecordingFileSystem(LocalFileSystem):
    """Disk access that records every read, to check the traversal order."""

    def __init__(self):
        self.reads: List[str] = []

    async def read_text(self, path: str) -> Optional[str]:
        self.reads.append(path)
        return await super().read_text(path)


@pytest.fixture
def recording_fs():
    return RecordingFileSystem()


# =============================================================================
# Basic Mocks
# =============================================================================


@pytest.fixture
def mock_language_server():
    """Create a mock LessLanguageServer."""
    ls = Mock(spec=LessLanguageServer)
    ls.logger = Mock()
    ls.workspace = Mock()
    ls.workspace.text_documents = {}
    ls.get_config = AsyncMock(return_value=DefinitionConfig())
    return ls


# =============================================================================
# LESS Project Test Harness
# =============================================================================


class LessProject:
    """
    Test harness writing LESS files into a temporary workspace.

    Provides a clean API for running goto-definition against real files.
    """

    def __init__(self, root: Path):
        self.root = root

    def path(self, name: str) -> str:
        return utils.canonical_path(str(self.root / name))

    def write(self, name: str, source: str) -> str:
        """Write a file relative to the workspace root and return its path."""
        path = self.root / name
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(source, encoding="utf-8")
        return self.path(name)

    def document(self, name: str) -> TextDocument:
        """Open a workspace file as a TextDocument, as the editor would."""
        path = self.root / name
        source = path.read_text(encoding="utf-8") if path.exists() else ""
        return TextDocument(path.as_uri(), source=source)

    def config(self, include_paths: Iterable[str] = (), **kwargs) -> DefinitionConfig:
        return DefinitionConfig(
            include_paths=tuple(include_paths),
            workspace_root=str(self.root),
            **kwargs,
        )

    def goto_definition(
        self,
        name: str,
        line: int,
        character: int,
        include_paths: Iterable[str] = (),
        fs: Optional[FileSystem] = None,
        is_cancelled: Optional[Callable[[], bool]] = None,
        **config_kwargs,
    ) -> Optional[Location]:
        """
        Run goto-definition with the cursor in the given file.

        Args:
            name: File the cursor is in, relative to the workspace root.
            line: Cursor line (0-indexed).
            character: Cursor character (0-indexed).
            include_paths: Configured include paths.
            fs: File system to use, LocalFileSystem by default.
            is_cancelled: Optional cancellation check.

        Returns:
            The Location result, or None.
        """
        return asyncio.run(
            get_definition_location(
                self.document(name),
                Position(line=line, character=character),
                self.config(include_paths, **config_kwargs),
                fs or LocalFileSystem(),
                is_cancelled=is_cancelled,
            )
        )

    def assert_location(
        self,
        result: Optional[Location],
        name: str,
        expected_line: int,
        expected_char: int = 0,
    ) -> None:
        """Assert that a result points at a position in the given file."""
        assert result is not None, "Expected a definition location, got None"
        assert isinstance(result, Location)
        assert utils.path_from_uri(result.uri) == self.path(name)
        assert result.range.start.line == expected_line, (
            f"Expected line {expected_line}, got {result.range.start.line}"
        )
        assert result.range.start.character == expected_char, (
            f"Expected char {expected_char}, got {result.range.start.character}"
        )


@pytest.fixture
def less_project(tmp_path):
    """Create a LessProject rooted in a temporary directory."""
    return LessProject(tmp_path)
