"""Centralized logging configuration for issue-filer.

On a GitHub Actions runner, records are rendered as workflow commands so that
debug, warning and error lines are annotated by the runner. Elsewhere the
plain format is used. An optional rotating file log mirrors the console.
"""

from __future__ import annotations

import logging
import os
import re
from logging.handlers import RotatingFileHandler
from pathlib import Path

from issuefiler.workflow import escape_data

# Default configuration
DEFAULT_LOG_FILE = "issuefiler.log"
DEFAULT_MAX_BYTES = 10 * 1024 * 1024  # 10MB
DEFAULT_BACKUP_COUNT = 5
DEFAULT_LOG_LEVEL = "INFO"

# Log format
LOG_FORMAT = "%(asctime)s | %(levelname)-8s | %(name)s | %(message)s"
DATE_FORMAT = "%Y-%m-%d %H:%M:%S"

# Workflow command per level; INFO and below-INFO custom levels stay plain
_COMMANDS = {
    logging.DEBUG: "debug",
    logging.WARNING: "warning",
    logging.ERROR: "error",
    logging.CRITICAL: "error",
}


class ActionsFormatter(logging.Formatter):
    """Render records as GitHub Actions workflow commands."""

    def format(self, record: logging.LogRecord) -> str:
        message = super().format(record)
        command = _COMMANDS.get(record.levelno)
        if command is None:
            return message
        return f"::{command}::{escape_data(message)}"


def _default_level() -> str:
    level = os.environ.get("ISSUEFILER_LOG_LEVEL")
    if level:
        return level
    # Set by the runner when a workflow is re-run with debug logging
    if os.environ.get("RUNNER_DEBUG") == "1":
        return "DEBUG"
    return DEFAULT_LOG_LEVEL


def setup_logging(
    level: str | None = None,
    log_dir: str | Path | None = None,
    log_file: str = DEFAULT_LOG_FILE,
    max_bytes: int = DEFAULT_MAX_BYTES,
    backup_count: int = DEFAULT_BACKUP_COUNT,
    console: bool = True,
    actions: bool | None = None,
) -> logging.Logger:
    """Set up the issuefiler logger.

    Args:
        level: Log level (DEBUG, INFO, WARNING, ERROR). Defaults to INFO.
               Can be overridden with ISSUEFILER_LOG_LEVEL, or RUNNER_DEBUG=1.
        log_dir: Directory for a rotating log file. No file log when unset.
                 Can be set with ISSUEFILER_LOG_DIR environment variable.
        log_file: Log file name. Defaults to 'issuefiler.log'.
        max_bytes: Maximum size per log file before rotation. Defaults to 10MB.
        backup_count: Number of backup files to keep. Defaults to 5.
        console: Whether to log to the console. Defaults to True.
        actions: Render console records as workflow commands. Defaults to
                 True when running under GitHub Actions.

    Returns:
        The root issuefiler logger.
    """
    if level is None:
        level = _default_level()
    log_level = getattr(logging, level.upper(), logging.INFO)

    if actions is None:
        actions = os.environ.get("GITHUB_ACTIONS") == "true"

    logger = logging.getLogger("issuefiler")
    logger.setLevel(log_level)

    # Remove existing handlers to avoid duplicates
    for handler in list(logger.handlers):
        handler.close()
    logger.handlers.clear()

    formatter = logging.Formatter(LOG_FORMAT, datefmt=DATE_FORMAT)

    if console:
        console_handler = logging.StreamHandler()
        console_handler.setLevel(log_level)
        console_handler.setFormatter(ActionsFormatter("%(message)s") if actions else formatter)
        logger.addHandler(console_handler)

    if log_dir is None:
        log_dir = os.environ.get("ISSUEFILER_LOG_DIR")
    if log_dir:
        log_dir = Path(log_dir)
        log_dir.mkdir(parents=True, exist_ok=True)
        file_handler = RotatingFileHandler(
            log_dir / log_file,
            maxBytes=max_bytes,
            backupCount=backup_count,
            encoding="utf-8",
        )
        file_handler.setLevel(log_level)
        file_handler.setFormatter(formatter)
        logger.addHandler(file_handler)

    logger.debug("issuefiler logging initialized (level=%s, actions=%s)", level, actions)

    return logger


def get_logger(name: str) -> logging.Logger:
    """Get a logger for a component.

    Args:
        name: Component name (e.g., 'kanban', 'filer').
              Will be prefixed with 'issuefiler.'.

    Returns:
        Logger instance for the component.
    """
    if not name.startswith("issuefiler."):
        name = f"issuefiler.{name}"
    return logging.getLogger(name)


def truncate_output(output: str, max_length: int = 2000) -> str:
    """Truncate long output for logging.

    Args:
        output: The output string to truncate.
        max_length: Maximum length before truncation.

    Returns:
        Truncated string with indicator if truncated.
    """
    if len(output) <= max_length:
        return output
    return output[:max_length] + f"\n... [truncated, {len(output) - max_length} more chars]"


def sanitize_for_log(text: str) -> str:
    """Remove sensitive data from log output.

    Args:
        text: Text that may contain sensitive data.

    Returns:
        Sanitized text safe for logging.
    """
    patterns = [
        (r"ghp_[a-zA-Z0-9]{36}", "[GITHUB_TOKEN]"),  # GitHub PAT
        (r"gho_[a-zA-Z0-9]{36}", "[GITHUB_TOKEN]"),  # GitHub OAuth
        (r"ghs_[a-zA-Z0-9]{36}", "[GITHUB_TOKEN]"),  # Actions installation token
        (r"github_pat_[a-zA-Z0-9_]{82}", "[GITHUB_TOKEN]"),  # Fine-grained PAT
        (r"Bearer [a-zA-Z0-9._-]+", "Bearer [REDACTED]"),  # Bearer tokens
        (r"token=[a-zA-Z0-9._-]+", "token=[REDACTED]"),  # Query param tokens
    ]

    result = text
    for pat, replacement in patterns:
        result = re.sub(pat, replacement, result)

    return result
