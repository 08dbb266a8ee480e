"""Prefix-based chat command router.

Maps chat messages such as ``!alal-harvest herb1 herb2`` to handler
functions called with positional string arguments.
"""

from .router import (
    API_MESSAGE_TYPE,
    CommandRouter,
    execute,
    is_command,
    parse_command,
    parse_input,
    route,
)

__all__ = [
    "API_MESSAGE_TYPE",
    "CommandRouter",
    "execute",
    "is_command",
    "parse_command",
    "parse_input",
    "route",
]
