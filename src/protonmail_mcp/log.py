"""Logging channels.

Everything goes to stderr: stdout carries the MCP stdio protocol.
"""

import logging
import sys
from typing import Optional

LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"

# Errors and lifecycle events, always on.
logger = logging.getLogger("protonmail_mcp")
# Verbose diagnostics, only emitted when DEBUG=true.
debug_logger = logging.getLogger("protonmail_mcp.debug")

_handler: Optional[logging.Handler] = None


def configure_logging(debug: bool = False) -> None:
    global _handler
    if _handler is None:
        _handler = logging.StreamHandler(sys.stderr)
        _handler.setFormatter(logging.Formatter(LOG_FORMAT))
        logger.addHandler(_handler)
    logger.setLevel(logging.INFO)

    debug_logger.setLevel(logging.DEBUG)
    debug_logger.disabled = not debug

    smtp_logger = logging.getLogger("aiosmtplib")
    if debug:
        smtp_logger.setLevel(logging.DEBUG)
        if _handler not in smtp_logger.handlers:
            smtp_logger.addHandler(_handler)
    elif _handler in smtp_logger.handlers:
        smtp_logger.removeHandler(_handler)
