"""In-process event host and host integration helpers.

A chat host delivers events to subscribed callbacks: ``ready`` once at
startup and ``chat:message`` for every message. EventHost is a small
synchronous implementation of that contract, used by the console
script and by tests; any object with a compatible ``on()`` works with
install() and announce_ready().
"""

from collections import defaultdict
from importlib.metadata import PackageNotFoundError, version
from typing import Any, Callable, Dict, List

import structlog

from .router import CommandRouter, RouteTable, route

logger = structlog.get_logger("apirouter.host")

READY_EVENT = "ready"
CHAT_MESSAGE_EVENT = "chat:message"

DISTRIBUTION_NAME = "apirouter"


class EventHost:
    """Synchronous event bus.

    Callbacks run in subscription order on the caller's thread.
    Exceptions raised by a callback propagate out of trigger().
    """

    def __init__(self):
        self._subscribers: Dict[str, List[Callable[..., Any]]] = defaultdict(list)

    def on(self, event: str, callback: Callable[..., Any]) -> None:
        """Subscribe ``callback`` to ``event``."""
        self._subscribers[event].append(callback)

    def trigger(self, event: str, *args: Any) -> None:
        """Invoke every callback subscribed to ``event`` with ``args``."""
        for callback in list(self._subscribers.get(event, ())):
            callback(*args)

    def subscriber_count(self, event: str) -> int:
        return len(self._subscribers.get(event, ()))


def get_version() -> str:
    """Installed package version, from distribution metadata."""
    try:
        return version(DISTRIBUTION_NAME)
    except PackageNotFoundError:
        return "0.0.0+unknown"


def install(host, prefix: str, routes: RouteTable) -> CommandRouter:
    """Build a router and subscribe it to the host's chat messages."""
    router = route(prefix, routes)
    host.on(CHAT_MESSAGE_EVENT, router)
    return router


def announce_ready(host) -> None:
    """Log the loaded version when the host fires its ready event."""

    def _on_ready(*_args: Any) -> None:
        logger.info("api_router_loaded", version=get_version())

    host.on(READY_EVENT, _on_ready)
