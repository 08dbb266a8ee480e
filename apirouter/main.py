"""Console entry point for apirouter.

Runs a local chat host on stdin: every input line is delivered to the
router as an API chat message, so configured routes can be exercised
without a real chat server.

Key functions:
    main: Set up logging and config, wire the host, and read stdin.
    run: Synchronous wrapper for the ``apirouter`` console script.
"""

import sys
from typing import Iterable, Optional

import structlog

from .host import CHAT_MESSAGE_EVENT, READY_EVENT, EventHost, announce_ready, install
from .logging_config import setup_logging
from .models import ChatMessage, MessageType


def dispatch_lines(host, lines: Iterable[str], who: str = "console") -> int:
    """Deliver each non-blank line to ``host`` as an API chat message.

    Exceptions raised by a route handler are logged and the next line is
    processed. Returns the number of messages delivered.
    """
    logger = structlog.get_logger("apirouter.host")
    delivered = 0
    for line in lines:
        content = line.rstrip("\r\n")
        if not content.strip():
            continue
        message = ChatMessage(type=MessageType.API, content=content, who=who)
        delivered += 1
        try:
            host.trigger(CHAT_MESSAGE_EVENT, message)
        except Exception as e:
            logger.error(
                "route_handler_failed",
                content=content,
                error=str(e),
                error_type=type(e).__name__,
            )
    return delivered


def main(lines: Optional[Iterable[str]] = None) -> int:
    """Main entry point."""
    # Phase 1: defaults, cache_logger_on_first_use=False
    setup_logging()
    logger = structlog.get_logger("apirouter")

    # Import here to ensure logging is configured first
    from .config import get_config
    from .loader import load_routes

    config = get_config()
    config.validate()

    # Phase 2: reconfigure with real config
    setup_logging(config)

    routes = load_routes(config.routes)
    host = EventHost()
    install(host, config.command_prefix, routes)
    announce_ready(host)
    host.trigger(READY_EVENT)

    logger.info(
        "console_host_listening",
        prefix=config.command_prefix,
        commands=sorted(routes),
    )
    delivered = dispatch_lines(host, sys.stdin if lines is None else lines)
    logger.info("console_host_stopped", messages=delivered)
    return 0


def run():
    """Synchronous entry point for the ``apirouter`` console script."""
    try:
        sys.exit(main())
    except KeyboardInterrupt:
        pass


if __name__ == "__main__":
    run()
