"""
Configuration for definition lookups.

Settings are read from the ``less-go-to-definition`` section of the client
configuration once per request and frozen into a DefinitionConfig, which is
then passed explicitly to the import resolver and the search.
"""

import logging
import os
from dataclasses import dataclass
from typing import Any, Mapping, Optional, Tuple

logger = logging.getLogger("lessgoto")

SETTINGS_SECTION = "less-go-to-definition"

WORKSPACE_FOLDER_PLACEHOLDER = "${workspaceFolder}"


@dataclass(frozen=True)
class DefinitionConfig:
    """
    Settings snapshot for one definition request.

    Attributes:
        include_paths: Directories searched for imports, in order, before the
            importing file's own directory. May contain ``${workspaceFolder}``.
        workspace_root: Path substituted for ``${workspaceFolder}``; relative
            include paths are resolved against it too.
        max_files: Upper bound on the number of files a single search visits,
            or None for no bound.
    """

    include_paths: Tuple[str, ...] = ()
    workspace_root: str = ""
    max_files: Optional[int] = None

    @classmethod
    def from_settings(
        cls, settings: Optional[Mapping[str, Any]], workspace_root: Optional[str]
    ) -> "DefinitionConfig":
        """
        Build a config from the raw client settings section.

        Invalid values are dropped with a warning rather than failing the
        request.
        """
        settings = settings or {}
        include_paths = settings.get("includePaths") or []
        if not isinstance(include_paths, (list, tuple)):
            logger.warning("Ignoring includePaths: expected a list of strings")
            include_paths = []

        valid_paths = []
        for include_path in include_paths:
            if isinstance(include_path, str) and include_path:
                valid_paths.append(include_path)
            else:
                logger.warning("Ignoring invalid include path: %r", include_path)

        max_files = settings.get("maxFiles")
        if max_files is not None and (
            isinstance(max_files, bool)
            or not isinstance(max_files, int)
            or max_files <= 0
        ):
            logger.warning("Ignoring maxFiles: expected a positive integer")
            max_files = None

        return cls(
            include_paths=tuple(valid_paths),
            workspace_root=workspace_root or "",
            max_files=max_files,
        )

    def resolved_include_paths(self):
        """Yield include roots with the workspace placeholder substituted."""
        for include_path in self.include_paths:
            root = include_path.replace(
                WORKSPACE_FOLDER_PLACEHOLDER, self.workspace_root
            )
            if not os.path.isabs(root) and self.workspace_root:
                root = os.path.join(self.workspace_root, root)
            yield root
