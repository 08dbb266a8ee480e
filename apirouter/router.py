"""Prefix-based chat command router.

Turns a command prefix and a route table into a single message handler
that a host event system calls once per chat message. Matching messages
are parsed into a command name and positional string arguments and
dispatched to the handler registered under that name.

Everything that is not a recognised command (wrong message type, missing
prefix, unknown command, non-callable route) is ignored silently. This
module never logs: most chat traffic is not addressed to the router.

Key classes:
    CommandRouter: Callable message handler bound to a prefix and routes.

Key functions:
    route: Build a CommandRouter (the usual entry point).
    is_command, parse_command, parse_input, execute: The dispatch steps.

Example::

    routes = {"gather": almanac.gather, "harvest": almanac.harvest}
    host.on("chat:message", route("!alal-", routes))
"""

from __future__ import annotations

from collections.abc import Mapping
from typing import Any, Callable, List, Optional

# Message type the host assigns to API (command) chat messages
API_MESSAGE_TYPE = "api"

RouteHandler = Callable[..., Any]
RouteTable = Mapping[str, RouteHandler]


def _field(message: Any, name: str) -> Any:
    """Read ``name`` from an attribute-style or mapping-style message."""
    if isinstance(message, Mapping):
        return message.get(name)
    return getattr(message, name, None)


def _type_value(message: Any) -> Any:
    msg_type = _field(message, "type")
    # str-valued enums compare by value
    return getattr(msg_type, "value", msg_type)


def is_command(prefix: str, message: Any) -> bool:
    """Whether ``message`` is an API message whose content starts with ``prefix``.

    The prefix comparison is case-sensitive. Messages without a string
    ``content`` never match.
    """
    if _type_value(message) != API_MESSAGE_TYPE:
        return False
    content = _field(message, "content")
    return (
        isinstance(prefix, str)
        and isinstance(content, str)
        and content.startswith(prefix)
    )


def parse_command(prefix: str, message: Any) -> str:
    """Extract the lowercased command name from a matching message.

    The command word is everything up to the first ASCII space. The prefix
    is stripped from the start of that word only, so prefix text repeated
    inside the command name is left alone.
    """
    token = _field(message, "content").split(" ")[0]
    if token.startswith(prefix):
        token = token[len(prefix):]
    return token.lower()


def parse_input(message: Any) -> List[str]:
    """Split content on whitespace and drop the command word.

    No quoting or escaping: an argument can never contain whitespace.
    """
    return _field(message, "content").split()[1:]


def execute(routes: RouteTable, command: str, args: List[str]) -> None:
    """Call ``routes[command](*args)`` if it exists and is callable."""
    if not isinstance(routes, Mapping):
        return
    handler: Optional[RouteHandler] = routes.get(command)
    if not callable(handler):
        return
    handler(*args)


class CommandRouter:
    """Message handler bound to a command prefix and a route table.

    The route table is held by reference and never copied or modified,
    so changes the caller makes to it show up on the next message.
    Instances carry no per-message state.

    Args:
        prefix: Command prefix, e.g. ``"!alal-"``.
        routes: Mapping of lowercase command name to handler. Handlers
            receive the parsed arguments as positional strings; their
            return values are discarded and their exceptions propagate.
    """

    def __init__(self, prefix: str, routes: RouteTable):
        self.prefix = prefix
        self.routes = routes

    def __call__(self, message: Any) -> None:
        if not is_command(self.prefix, message):
            return
        execute(
            self.routes,
            parse_command(self.prefix, message),
            parse_input(message),
        )

    def __repr__(self) -> str:
        return f"CommandRouter(prefix={self.prefix!r})"


def route(prefix: str, routes: RouteTable) -> CommandRouter:
    """Configure a router for ``prefix`` and ``routes``.

    Nothing is validated here; bad input simply never dispatches.
    Each call returns an independent handler.
    """
    return CommandRouter(prefix, routes)
