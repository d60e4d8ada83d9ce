"""
Centralized logging configuration for the reseller order portal.

Every record carries the thread name and a short prefix of the user token
of the workflow that produced it, so interleaved requests from different
resellers can be told apart.

Features:
    - Thread name and workflow prefix in all log messages
    - Console output (always enabled)
    - Rotating file logs (optional, for production)
    - Separate error log for ERROR/CRITICAL messages
    - Helper functions for getting loggers with consistent naming

Log Format:
    2026-01-12 10:15:30 [INFO    ] [MainThread] [-] reseller_order_portal.app - Starting application
    2026-01-12 10:15:31 [INFO    ] [Thread-3] [a1b2c3d4] reseller_order_portal.services.batch - Added item

Usage:
    # At application startup
    from logging_config import setup_logging, get_logger

    setup_logging(log_level=logging.INFO, enable_file_logging=True)

    # In modules
    logger = get_logger(__name__)

    # Scoped to one reseller's workflow
    wf_logger = get_workflow_logger(user_token)
"""

import logging
import sys
import threading
from logging.handlers import RotatingFileHandler
from pathlib import Path
from typing import Optional


APP_NAMESPACE = "reseller_order_portal"
WORKFLOW_PREFIX_LENGTH = 8


# =============================================================================
# CONTEXT FILTER
# =============================================================================

class WorkflowContextFilter(logging.Filter):
    """
    Logging filter that adds request context to all log records.

    Adds:
        - thread_name: Name of the current thread
        - workflow: Short user-token prefix, or '-' outside a workflow
    """

    def filter(self, record: logging.LogRecord) -> bool:
        record.thread_name = threading.current_thread().name
        if not hasattr(record, "workflow"):
            record.workflow = "-"
        return True


class _WorkflowAdapter(logging.LoggerAdapter):
    """Attaches the workflow prefix to every record."""

    def process(self, msg, kwargs):
        extra = kwargs.setdefault("extra", {})
        extra.setdefault("workflow", self.extra["workflow"])
        return msg, kwargs


# =============================================================================
# LOGGING SETUP
# =============================================================================

def setup_logging(
    app_name: str = APP_NAMESPACE,
    log_level: int = logging.INFO,
    log_dir: Optional[Path] = None,
    enable_file_logging: bool = True,
) -> logging.Logger:
    """
    Configure application logging.

    Args:
        app_name: Name of the root logger (default: "reseller_order_portal")
        log_level: Minimum log level (default: INFO)
        log_dir: Directory for log files (default: ./logs relative to this file)
        enable_file_logging: Whether to write to log files (default: True)

    Returns:
        Configured root logger instance
    """
    logger = logging.getLogger(app_name)
    logger.setLevel(log_level)
    logger.propagate = False

    # Allows re-configuration (tests create several apps)
    logger.handlers.clear()

    formatter = logging.Formatter(
        fmt="%(asctime)s [%(levelname)-8s] [%(thread_name)s] [%(workflow)s] %(name)s - %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S"
    )
    context_filter = WorkflowContextFilter()

    console_handler = logging.StreamHandler(sys.stdout)
    console_handler.setLevel(log_level)
    console_handler.setFormatter(formatter)
    console_handler.addFilter(context_filter)
    logger.addHandler(console_handler)

    if enable_file_logging:
        if log_dir is None:
            log_dir = Path(__file__).parent / "logs"
        log_dir.mkdir(parents=True, exist_ok=True)

        app_log_file = log_dir / f"{app_name}.log"
        file_handler = RotatingFileHandler(
            filename=app_log_file,
            maxBytes=10 * 1024 * 1024,  # 10 MB per file
            backupCount=5,
            encoding="utf-8"
        )
        file_handler.setLevel(log_level)
        file_handler.setFormatter(formatter)
        file_handler.addFilter(context_filter)
        logger.addHandler(file_handler)

        error_log_file = log_dir / f"{app_name}_error.log"
        error_handler = RotatingFileHandler(
            filename=error_log_file,
            maxBytes=10 * 1024 * 1024,
            backupCount=5,
            encoding="utf-8"
        )
        error_handler.setLevel(logging.ERROR)
        error_handler.setFormatter(formatter)
        error_handler.addFilter(context_filter)
        logger.addHandler(error_handler)

        logger.info(f"File logging enabled: {app_log_file}")

    logger.info(f"Logging configured at level {logging.getLevelName(log_level)}")
    return logger


# =============================================================================
# LOGGER FACTORY FUNCTIONS
# =============================================================================

def get_logger(name: str) -> logging.Logger:
    """
    Get a child logger with the application namespace.

    Args:
        name: Module name (typically __name__)

    Returns:
        Logger instance, e.g. "reseller_order_portal.services.batch"
    """
    if not name.startswith(APP_NAMESPACE):
        name = f"{APP_NAMESPACE}.{name}"
    return logging.getLogger(name)


def get_workflow_logger(user_token: str, name: str = "workflow") -> logging.LoggerAdapter:
    """
    Get a logger bound to one reseller's workflow.

    Only the first characters of the token are logged.

    Args:
        user_token: Opaque authenticated-user token
        name: Logger name suffix

    Returns:
        LoggerAdapter that tags every record with the token prefix
    """
    prefix = str(user_token)[:WORKFLOW_PREFIX_LENGTH] or "-"
    return _WorkflowAdapter(get_logger(name), {"workflow": prefix})
