"""Configuration management for apirouter.

Loads ``settings.yaml`` and ``.env`` from the config directory into a
Config object. Property getters provide safe access with defaults for
the command prefix, the route table targets, and logging.

Key classes:
    Config: Central configuration manager.

Key functions:
    get_config: Singleton accessor for the global Config instance.
"""

import os
from pathlib import Path
from typing import Dict, Optional

import structlog
import yaml
from dotenv import load_dotenv

from .exceptions import ConfigError

logger = structlog.get_logger("apirouter.config")

DEFAULT_PREFIX = "!api-"


class Config:
    """Central configuration manager for apirouter.

    Args:
        config_dir: Path to the config directory. Defaults to
            ``<repo_root>/config/``.
    """

    def __init__(self, config_dir: Optional[Path] = None):
        if config_dir is None:
            config_dir = Path(__file__).parent.parent / "config"
        self.config_dir = config_dir

        env_file = config_dir / ".env"
        if env_file.exists():
            load_dotenv(env_file)

        self.settings = self._load_yaml("settings.yaml")

    def _load_yaml(self, filename: str) -> dict:
        """Load a YAML configuration file."""
        filepath = self.config_dir / filename
        if not filepath.exists():
            return {}
        try:
            with open(filepath, "r") as f:
                data = yaml.safe_load(f) or {}
        except yaml.YAMLError as e:
            raise ConfigError(
                "Invalid YAML", path=str(filepath), error=str(e)
            ) from e
        if not isinstance(data, dict):
            raise ConfigError(
                "Top-level YAML value must be a mapping",
                path=str(filepath),
                type=type(data).__name__,
            )
        return data

    @property
    def command_prefix(self) -> str:
        """Chat command prefix. Env var APIROUTER_PREFIX takes precedence."""
        return (
            os.environ.get("APIROUTER_PREFIX")
            or self.settings.get("command_prefix", DEFAULT_PREFIX)
        )

    @property
    def routes(self) -> Dict[str, str]:
        """Command name -> ``"module:attribute"`` handler targets."""
        routes = self.settings.get("routes", {})
        if not isinstance(routes, dict):
            logger.error("routes_invalid_type", type=type(routes).__name__)
            return {}
        return routes

    @property
    def log_dir(self) -> Path:
        """Get log directory path."""
        configured = self.settings.get("log_dir")
        if configured:
            return Path(configured).expanduser()
        return Path(__file__).parent.parent / "logs"

    @property
    def logging_level(self) -> str:
        """Global log level (default INFO). Controls console and combined file."""
        log_config = self.settings.get("logging", {})
        return log_config.get("level", "INFO")

    @property
    def logging_subsystem_levels(self) -> dict:
        """Per-subsystem log level overrides. E.g. {"loader": "DEBUG"}."""
        log_config = self.settings.get("logging", {})
        return log_config.get("subsystem_levels", {})

    @property
    def logging_max_file_size_mb(self) -> int:
        """Max size per log file in MB before rotation (default 10)."""
        log_config = self.settings.get("logging", {})
        return log_config.get("max_file_size_mb", 10)

    @property
    def logging_backup_count(self) -> int:
        """Number of rotated log files to keep (default 5)."""
        log_config = self.settings.get("logging", {})
        return log_config.get("backup_count", 5)

    def validate(self):
        """Check settings at startup.

        Logs warnings/errors but does not raise: a bad prefix or route
        only means some commands never dispatch.
        """
        prefix = self.command_prefix
        if not isinstance(prefix, str) or not prefix:
            logger.error("command_prefix_invalid", prefix=repr(prefix))
        elif any(ch.isspace() for ch in prefix):
            # The command word is cut at the first space
            logger.warning("command_prefix_contains_whitespace", prefix=prefix)

        routes = self.routes
        if not routes:
            logger.warning("no_routes_configured")
        for name, target in routes.items():
            if not isinstance(target, str):
                logger.error(
                    "route_target_invalid_type",
                    command=name,
                    type=type(target).__name__,
                )


_config: Optional[Config] = None


def get_config() -> Config:
    """Get or create the global config instance."""
    global _config
    if _config is None:
        _config = Config()
    return _config


def reset_config() -> None:
    """Drop the global config instance (used by tests)."""
    global _config
    _config = None
