import logging
import os
from typing import Optional

from lsprotocol.types import LogMessageParams, MessageType
from pygls.lsp.server import LanguageServer

LOG_LEVEL_ENV = "LESSGOTO_LOG_LEVEL"


class LspLogHandler(logging.Handler):
    """Forwards log records to the client as window/logMessage notifications."""

    LEVEL_TO_MESSAGE_TYPE = {
        logging.CRITICAL: MessageType.Error,
        logging.ERROR: MessageType.Error,
        logging.WARNING: MessageType.Warning,
        logging.INFO: MessageType.Info,
        logging.DEBUG: MessageType.Log,
    }

    def __init__(self, ls: LanguageServer):
        super().__init__()
        self.ls = ls

    def emit(self, record):
        try:
            message = self.format(record)
            message_type = self.LEVEL_TO_MESSAGE_TYPE.get(
                record.levelno, MessageType.Log
            )
            self.ls.window_log_message(
                LogMessageParams(message=message, type=message_type)
            )
        except Exception:
            self.handleError(record)


def get_log_level(default: int = logging.INFO) -> int:
    """Read the log level name from the environment, e.g. LESSGOTO_LOG_LEVEL=DEBUG."""
    name = os.environ.get(LOG_LEVEL_ENV)
    if not name:
        return default
    level = logging.getLevelName(name.strip().upper())
    return level if isinstance(level, int) else default


def setup_logging(
    ls: LanguageServer, level: Optional[int] = None
) -> logging.Logger:
    """Configures the "lessgoto" logger for the console and the LSP client."""
    if level is None:
        level = get_log_level()
    logger = logging.getLogger("lessgoto")
    logger.setLevel(level)

    # Reloading the server must not stack handlers
    if not logger.handlers:
        console_handler = logging.StreamHandler()
        console_handler.setLevel(level)
        console_handler.setFormatter(
            logging.Formatter("%(asctime)s - %(name)s - %(levelname)s - %(message)s")
        )

        lsp_handler = LspLogHandler(ls)
        lsp_handler.setLevel(level)
        lsp_handler.setFormatter(logging.Formatter("%(levelname)s - %(message)s"))

        logger.addHandler(console_handler)
        logger.addHandler(lsp_handler)

    return logger
