import logging
import logging.handlers
import sys
from pathlib import Path

import structlog


def setup_logging(log_level: str = "INFO", log_to_file: bool = False) -> None:
    """Set up logging for the plugin host.

    Args:
        log_level: Logging level (DEBUG, INFO, WARNING, ERROR, CRITICAL)
        log_to_file: Whether to log to files in addition to console
    """
    level = getattr(logging, log_level.upper())

    # Configure structlog
    structlog.configure(
        processors=[
            structlog.contextvars.merge_contextvars,
            structlog.processors.add_log_level,
            structlog.processors.TimeStamper(fmt="iso"),
            structlog.dev.set_exc_info,
            # JSON formatting for file logs
            (
                structlog.processors.JSONRenderer()
                if log_to_file
                else structlog.dev.ConsoleRenderer()
            ),
        ],
        wrapper_class=structlog.stdlib.BoundLogger,
        logger_factory=structlog.stdlib.LoggerFactory(),
        cache_logger_on_first_use=True,
    )

    console_handler = logging.StreamHandler(sys.stdout)
    console_handler.setLevel(level)
    console_handler.setFormatter(
        logging.Formatter("%(asctime)s - %(name)s - %(levelname)s - %(message)s")
    )

    root_logger = logging.getLogger()
    root_logger.setLevel(level)
    root_logger.handlers.clear()
    root_logger.addHandler(console_handler)

    if log_to_file:
        logs_dir = Path("logs")
        logs_dir.mkdir(exist_ok=True)

        app_handler = logging.handlers.RotatingFileHandler(
            logs_dir / "pluginhost.log", maxBytes=10 * 1024 * 1024, backupCount=5  # 10MB
        )
        app_handler.setLevel(logging.INFO)
        app_handler.setFormatter(
            logging.Formatter(
                "%(asctime)s - %(name)s - %(levelname)s - %(funcName)s:%(lineno)d - %(message)s"
            )
        )
        root_logger.addHandler(app_handler)


def get_plugin_logger(plugin_name: str) -> structlog.BoundLogger:
    """Get a structured logger whose records carry the plugin's name.

    Args:
        plugin_name: Name of the plugin the logger belongs to

    Returns:
        Structured logger bound with ``plugin=<plugin_name>``
    """
    return structlog.get_logger("pluginhost.plugins").bind(plugin=plugin_name)
