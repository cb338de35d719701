"""Logger setup utilities.

Owns the gateway logger configuration (handlers, formatters). Modules
get their own logger reference via:
    _logger = logging.getLogger(f"{APP_NAME}.<area>")

Python loggers are singletons by name and every module logger is a child
of the APP_NAME logger, so configuring the parent once covers them all.
"""

from __future__ import annotations

__all__ = [
    "configure_gateway_logging",
    "get_gateway_log_path",
    "setup_jsonl_logger",
]

import logging
import sys
from pathlib import Path

from erp_gateway.config import GatewayConfig
from erp_gateway.constants import APP_NAME
from erp_gateway.utils.logging.iso_formatter import ConsoleFormatter, ISO8601Formatter


def _ensure_log_directory(log_file: Path) -> None:
    """Create log directory with owner-only permissions.

    Args:
        log_file: Path to the log file (parent directory will be created).

    Raises:
        PermissionError: If unable to create log directory due to permissions.
        OSError: If directory creation fails for other reasons.
    """
    try:
        log_file.parent.mkdir(parents=True, exist_ok=True)
        if sys.platform != "win32":
            try:
                log_file.parent.chmod(0o700)
            except OSError:
                pass  # Permission changes might fail on some systems
    except PermissionError as e:
        raise PermissionError(f"Cannot create log directory {log_file.parent}: {e}") from e
    except OSError as e:
        raise OSError(f"Failed to create log directory {log_file.parent}: {e}") from e


def _close_handlers(logger: logging.Logger) -> None:
    for handler in logger.handlers:
        handler.close()
    logger.handlers.clear()


def get_gateway_log_path(config: GatewayConfig) -> Path:
    """Get full path to the gateway log file.

    Args:
        config: Gateway configuration.

    Returns:
        Path: <log_dir>/gateway.jsonl
    """
    return Path(config.log_dir).expanduser() / "gateway.jsonl"


def setup_jsonl_logger(
    logger_name: str,
    log_file: Path,
    log_level: int = logging.INFO,
) -> logging.Logger:
    """Set up a logger that writes JSONL with ISO 8601 timestamps.

    Args:
        logger_name: Name for the logger (e.g., "erp-gateway")
        log_file: Path to the log file
        log_level: Logging level (default: INFO)

    Returns:
        logging.Logger: Configured logger instance

    Raises:
        PermissionError: If unable to create log directory due to permissions
        OSError: If directory creation fails for other reasons
    """
    _ensure_log_directory(log_file)

    logger = logging.getLogger(logger_name)
    logger.setLevel(log_level)
    logger.propagate = False
    _close_handlers(logger)

    file_handler = logging.FileHandler(log_file, mode="a", encoding="utf-8")
    file_handler.setLevel(log_level)
    file_handler.setFormatter(ISO8601Formatter())
    logger.addHandler(file_handler)

    return logger


def configure_gateway_logging(config: GatewayConfig, *, log_to_file: bool = True) -> logging.Logger:
    """Configure the gateway logger.

    Sets up:
    - stderr handler: human-readable, at the configured level
    - file handler: JSONL at <log_dir>/gateway.jsonl (optional)

    Args:
        config: Gateway configuration with log directory and level.
        log_to_file: Attach the JSONL file handler.

    Returns:
        The configured APP_NAME logger.
    """
    level = logging.getLevelName(config.log_level)

    if log_to_file:
        logger = setup_jsonl_logger(APP_NAME, get_gateway_log_path(config), level)
    else:
        logger = logging.getLogger(APP_NAME)
        logger.setLevel(level)
        logger.propagate = False
        _close_handlers(logger)

    stderr_handler = logging.StreamHandler()
    stderr_handler.setLevel(level)
    stderr_handler.setFormatter(ConsoleFormatter())
    logger.addHandler(stderr_handler)

    return logger
