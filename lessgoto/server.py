"""
lessgoto - LESS Language Server.

This module defines the LSP server and registers go-to-definition for LESS
variables and mixins.
"""

import logging
from typing import Any, Dict, Optional

from lsprotocol import types
from pygls import uris
from pygls.lsp.server import LanguageServer

from lessgoto import utils
from lessgoto.config import SETTINGS_SECTION, DefinitionConfig
from lessgoto.features.definition import get_definition_location
from lessgoto.filesystem import WorkspaceFileSystem
from lessgoto.logger_setup import setup_logging

logger = logging.getLogger("lessgoto")


def supports_configuration(
    capabilities: Optional[types.ClientCapabilities],
) -> bool:
    """Check whether the client answers workspace/configuration requests."""
    if capabilities is None or capabilities.workspace is None:
        return False
    return bool(capabilities.workspace.configuration)


class LessLanguageServer(LanguageServer):
    """Language server implementation for LESS stylesheets."""

    def __init__(self, *args, **kwargs):
        super().__init__(*args, **kwargs)
        self.logger = setup_logging(self)
        self.logger.info("LESS Language Server starting...")

    async def fetch_settings(
        self, scope_uri: Optional[str] = None
    ) -> Optional[Dict[str, Any]]:
        """
        Ask the client for the less-go-to-definition settings section.

        Returns:
            The settings mapping, or None if the client does not support
            configuration requests or the request fails.
        """
        if not supports_configuration(self.client_capabilities):
            return None

        item = types.ConfigurationItem(scope_uri=scope_uri, section=SETTINGS_SECTION)
        params = types.ConfigurationParams(items=[item])
        try:
            result = await self.workspace_configuration_async(params)
        except Exception as e:
            self.logger.warning("Could not fetch settings: %s", e)
            return None

        if not result or not isinstance(result[0], dict):
            return None
        return result[0]

    def workspace_root(self) -> str:
        """Return the workspace root path, or the first workspace folder."""
        root = self.workspace.root_path
        if root:
            return root
        for folder in self.workspace.folders.values():
            path = uris.to_fs_path(folder.uri)
            if path:
                return path
        return ""

    async def get_config(self, scope_uri: Optional[str] = None) -> DefinitionConfig:
        """Build the settings snapshot for one request."""
        settings = await self.fetch_settings(scope_uri)
        return DefinitionConfig.from_settings(settings, self.workspace_root())


server = LessLanguageServer("lessgoto", "v0.1.0")


# -----------------------------------------------------------------------------
# Navigation Features
# -----------------------------------------------------------------------------


@server.feature(types.TEXT_DOCUMENT_DEFINITION)
async def goto_definition(
    ls: LessLanguageServer, params: types.DefinitionParams
) -> Optional[types.Location]:
    """Jump to the definition of the variable or mixin at the cursor."""
    ls.logger.debug("Definition requested: %s", params.text_document.uri)
    doc = ls.workspace.get_text_document(params.text_document.uri)
    if not utils.is_less_document(doc):
        return None

    config = await ls.get_config(params.text_document.uri)
    fs = WorkspaceFileSystem(ls.workspace)
    return await get_definition_location(doc, params.position, config, fs)
