"""Logging setup for the Vendor Portal.

Log records go to the console and to a size-rotated file. Rotated copies of
the file are purged after a retention period so long-running deployments do
not accumulate old logs.
"""

import logging
import os
from datetime import datetime, timedelta
from logging.handlers import RotatingFileHandler
from pathlib import Path
from stat import ST_MTIME
from typing import Optional

LOG_FORMAT = "%(asctime)s [%(levelname)s] %(name)s: %(message)s"
LOG_FILE = os.getenv("LOG_FILE", "vendor_portal.log")
LOG_RETENTION_DAYS = int(os.getenv("LOG_RETENTION_DAYS", "30"))
LOG_MAX_BYTES = 1_000_000
LOG_BACKUPS = 3

# Third-party loggers that are chatty at INFO
_QUIET_LOGGERS = ("httpx", "httpcore")

_configured = False


def configure_logging(level: Optional[str] = None) -> None:
    """Attach file and console handlers to the root logger.

    ``level`` defaults to the ``LOG_LEVEL`` environment variable (``INFO``
    when unset). Calling this more than once is a no-op.
    """

    global _configured
    if _configured:
        return

    level_name = (level or os.getenv("LOG_LEVEL", "INFO")).upper()
    root = logging.getLogger()
    root.setLevel(getattr(logging, level_name, logging.INFO))

    formatter = logging.Formatter(LOG_FORMAT)
    for handler in _build_handlers(LOG_FILE):
        handler.setFormatter(formatter)
        root.addHandler(handler)

    for name in _QUIET_LOGGERS:
        logging.getLogger(name).setLevel(logging.WARNING)

    _configured = True
    purged = _purge_old_logs()
    if purged:
        root.info("Removed %d expired log file(s)", purged)


def _build_handlers(log_file: str) -> list[logging.Handler]:
    return [
        RotatingFileHandler(log_file, maxBytes=LOG_MAX_BYTES, backupCount=LOG_BACKUPS),
        logging.StreamHandler(),
    ]


def get_logger(name: str) -> logging.Logger:
    """Return a logger with the configured settings."""
    return logging.getLogger(name)


def flush_logs() -> None:
    """Flush buffered records and truncate the current log file."""

    for handler in logging.getLogger().handlers:
        handler.flush()
    open(LOG_FILE, "w").close()


def _purge_old_logs() -> int:
    """Delete rotated log files older than ``LOG_RETENTION_DAYS``.

    Returns the number of files removed.
    """

    if LOG_RETENTION_DAYS <= 0:
        return 0

    log_path = Path(LOG_FILE).resolve()
    cutoff = datetime.now() - timedelta(days=LOG_RETENTION_DAYS)
    removed = 0
    for file in log_path.parent.glob(f"{log_path.name}.*"):
        try:
            mtime = datetime.fromtimestamp(file.stat()[ST_MTIME])
        except FileNotFoundError:
            continue
        if mtime >= cutoff:
            continue
        try:
            file.unlink()
            removed += 1
        except FileNotFoundError:
            pass
    return removed


__all__ = ["configure_logging", "get_logger", "flush_logs"]
