"""Route table loading from configuration.

Settings name route handlers as ``"package.module:attribute"`` strings.
This module imports them and builds the route table the router uses.
"""

import importlib
from typing import Callable, Dict, Mapping

import structlog

from .exceptions import RouteResolutionError

logger = structlog.get_logger("apirouter.loader")


def resolve_target(target: str) -> Callable:
    """Import and return the callable named by ``target``.

    Args:
        target: ``"module:attr"``; ``attr`` may be dotted
            (``"module:Class.method"``).

    Raises:
        RouteResolutionError: If the target is malformed, cannot be
            imported, or does not name a callable.
    """
    if not isinstance(target, str) or target.count(":") != 1:
        raise RouteResolutionError(
            "Route target must look like 'module:attribute'", target=str(target)
        )
    module_name, _, attr_path = target.partition(":")
    if not module_name or not attr_path:
        raise RouteResolutionError(
            "Route target must look like 'module:attribute'", target=target
        )

    try:
        obj = importlib.import_module(module_name)
    except ImportError as e:
        raise RouteResolutionError(
            "Route module could not be imported", target=target, error=str(e)
        ) from e

    for attr in attr_path.split("."):
        try:
            obj = getattr(obj, attr)
        except AttributeError as e:
            raise RouteResolutionError(
                "Route attribute not found", target=target, attribute=attr
            ) from e

    if not callable(obj):
        raise RouteResolutionError(
            "Route target is not callable", target=target, type=type(obj).__name__
        )
    return obj


def load_routes(targets: Mapping[str, str]) -> Dict[str, Callable]:
    """Resolve every configured route, skipping the ones that fail.

    Command names are lowercased, since the router lowercases the
    command word before lookup.
    """
    routes: Dict[str, Callable] = {}
    for name, target in targets.items():
        command = str(name).lower()
        try:
            routes[command] = resolve_target(target)
        except RouteResolutionError as e:
            logger.error(
                "route_load_failed",
                command=command,
                target=str(target),
                error=str(e),
            )
            continue
        logger.debug("route_loaded", command=command, target=target)

    logger.info(
        "routes_loaded",
        loaded=len(routes),
        failed=len(targets) - len(routes),
    )
    return routes
