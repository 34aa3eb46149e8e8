"""Console entrypoint for the Protonmail MCP server."""

import asyncio
import sys
from types import TracebackType
from typing import Optional, Type

from dotenv import load_dotenv

from .config import ConfigurationError, EmailConfig, load_config
from .log import configure_logging, logger
from .server import ServerStartupError, _run


def _excepthook(
    exc_type: Type[BaseException],
    exc: BaseException,
    tb: Optional[TracebackType],
) -> None:
    logger.error("Uncaught exception: %s", exc, exc_info=(exc_type, exc, tb))


def _loop_exception_handler(loop: asyncio.AbstractEventLoop, context: dict) -> None:
    exc = context.get("exception")
    logger.error("Unhandled rejection: %s", exc if exc is not None else context.get("message"))
    # Task finalizers call this handler and ignore anything it raises, so the
    # exit has to run as a loop callback.
    loop.call_soon_threadsafe(sys.exit, 1)


async def _serve(config: EmailConfig) -> None:
    asyncio.get_running_loop().set_exception_handler(_loop_exception_handler)
    await _run(config)


def main() -> None:
    """Start the MCP stdio server."""
    # Local development: .env never overrides the real environment
    load_dotenv()
    configure_logging()
    try:
        config = load_config()
    except ConfigurationError as e:
        logger.error("%s", e)
        sys.exit(1)

    configure_logging(config.debug)
    sys.excepthook = _excepthook

    try:
        asyncio.run(_serve(config))
    except KeyboardInterrupt:
        pass
    except ServerStartupError as e:
        logger.error("Server startup failed: %s", e)
        sys.exit(1)
    except Exception as e:
        logger.error("Server error: %s", e)
        sys.exit(1)
