"""Logging configuration for apirouter.

structlog + stdlib integration with per-subsystem log files.

Subsystem hierarchy (stdlib dotted names, structlog wraps them):
    root               → ConsoleHandler (terminal)
      └─ apirouter     → RotatingFileHandler → apirouter.log (combined)
           ├─ apirouter.host   → RFH → host.log
           ├─ apirouter.loader → RFH → loader.log
           └─ apirouter.config → RFH → config.log

The router module itself has no logger.
"""

import logging
import logging.handlers
import sys
from pathlib import Path

import structlog

SUBSYSTEMS = ("host", "loader", "config")

LOGGER_PREFIX = "apirouter"


def _rotating_handler(path: Path, level: int, max_bytes: int, backup_count: int,
                      formatter: logging.Formatter) -> logging.Handler:
    handler = logging.handlers.RotatingFileHandler(
        path,
        maxBytes=max_bytes,
        backupCount=backup_count,
        encoding="utf-8",
    )
    handler.setLevel(level)
    handler.setFormatter(formatter)
    return handler


def setup_logging(config=None) -> None:
    """Configure structured logging with subsystem file handlers.

    Sets up:
    1. Root logger: ConsoleHandler
    2. "apirouter" logger: RotatingFileHandler → logs/apirouter.log
    3. "apirouter.<subsystem>" loggers: individual RotatingFileHandlers

    Subsystem loggers propagate, so every event lands in its subsystem
    file, the combined file, and the console.

    Args:
        config: Optional Config instance. The first call (before config
            loads) uses defaults and does not cache loggers; the second
            call uses the real config and caches.
    """
    if config is not None:
        log_dir = config.log_dir
        root_level_name = str(config.logging_level).upper()
        subsystem_levels = config.logging_subsystem_levels
        max_bytes = config.logging_max_file_size_mb * 1024 * 1024
        backup_count = config.logging_backup_count
        cache_loggers = True
    else:
        log_dir = Path(__file__).parent.parent / "logs"
        root_level_name = "INFO"
        subsystem_levels = {}
        max_bytes = 10 * 1024 * 1024  # 10 MB
        backup_count = 5
        cache_loggers = False

    root_level = getattr(logging, root_level_name, logging.INFO)

    file_handlers_ok = False
    try:
        log_dir.mkdir(parents=True, exist_ok=True)
        file_handlers_ok = True
    except OSError as exc:
        print(
            f"WARNING: Cannot create log directory {log_dir}: {exc}. "
            "Falling back to console-only logging.",
            file=sys.stderr,
        )

    file_formatter = structlog.stdlib.ProcessorFormatter(
        processors=[
            structlog.stdlib.add_logger_name,
            structlog.stdlib.add_log_level,
            structlog.processors.TimeStamper(fmt="iso"),
            structlog.processors.format_exc_info,
            structlog.dev.ConsoleRenderer(colors=False),
        ],
    )

    # 1. Root logger: console only
    root_logger = logging.getLogger()
    root_logger.setLevel(logging.DEBUG)  # Handlers filter by level
    root_logger.handlers.clear()

    console_handler = logging.StreamHandler(sys.stderr)
    console_handler.setLevel(root_level)
    console_handler.setFormatter(
        logging.Formatter("%(asctime)s [%(levelname)s] %(message)s")
    )
    root_logger.addHandler(console_handler)

    # 2. Combined log file
    pkg_logger = logging.getLogger(LOGGER_PREFIX)
    pkg_logger.setLevel(logging.DEBUG)
    pkg_logger.handlers.clear()
    pkg_logger.propagate = True

    if file_handlers_ok:
        pkg_logger.addHandler(_rotating_handler(
            log_dir / "apirouter.log", root_level, max_bytes, backup_count,
            file_formatter,
        ))

    # 3. Per-subsystem files
    for subsystem in SUBSYSTEMS:
        sub_logger = logging.getLogger(f"{LOGGER_PREFIX}.{subsystem}")
        sub_level_name = str(subsystem_levels.get(subsystem, "")).upper()
        sub_level = getattr(logging, sub_level_name, root_level) if sub_level_name else root_level
        sub_logger.setLevel(sub_level)
        sub_logger.handlers.clear()
        sub_logger.propagate = True

        if file_handlers_ok:
            sub_logger.addHandler(_rotating_handler(
                log_dir / f"{subsystem}.log", sub_level, max_bytes, backup_count,
                file_formatter,
            ))

    structlog.configure(
        processors=[
            structlog.stdlib.filter_by_level,
            structlog.stdlib.add_logger_name,
            structlog.stdlib.add_log_level,
            structlog.stdlib.PositionalArgumentsFormatter(),
            structlog.processors.TimeStamper(fmt="iso"),
            structlog.processors.StackInfoRenderer(),
            structlog.processors.format_exc_info,
            structlog.processors.UnicodeDecoder(),
            structlog.dev.ConsoleRenderer(),
        ],
        wrapper_class=structlog.stdlib.BoundLogger,
        context_class=dict,
        logger_factory=structlog.stdlib.LoggerFactory(),
        cache_logger_on_first_use=cache_loggers,
    )
