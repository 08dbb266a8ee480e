"""Exception hierarchy for apirouter.

The router core raises nothing of its own; these exceptions cover the
layers around it (configuration and route loading).
"""

from typing import Any, Optional


class ApiRouterError(Exception):
    """Base exception for all apirouter errors.

    Attributes:
        message: Human-readable error description.
        module: Originating module name (e.g. "loader").
        context: Arbitrary key-value pairs for structured logging.
    """

    def __init__(
        self,
        message: str = "",
        *,
        module: Optional[str] = None,
        **context: Any,
    ) -> None:
        self.message = message
        self.module = module
        self.context = context
        super().__init__(message)

    def __str__(self) -> str:
        parts = [self.message or self.__class__.__name__]
        if self.module:
            parts.append(f"[module={self.module}]")
        if self.context:
            ctx = ", ".join(f"{k}={v}" for k, v in self.context.items())
            parts.append(f"({ctx})")
        return " ".join(parts)

    def __repr__(self) -> str:
        cls = self.__class__.__name__
        return f"{cls}({self.message!r}, module={self.module!r})"


class ConfigError(ApiRouterError):
    """Configuration could not be read."""

    def __init__(
        self,
        message: str = "",
        *,
        module: Optional[str] = None,
        **context: Any,
    ) -> None:
        super().__init__(message, module=module or "config", **context)


class RouteResolutionError(ApiRouterError):
    """A configured route target could not be turned into a callable.

    Attributes:
        target: The ``"module:attribute"`` string that failed.
    """

    def __init__(
        self,
        message: str = "",
        *,
        target: Optional[str] = None,
        module: Optional[str] = None,
        **context: Any,
    ) -> None:
        self.target = target
        super().__init__(
            message, module=module or "loader", target=target, **context
        )
