"""
Error handling and logging module.

Provides the schedule error taxonomy and centralized error logging with file persistence.
"""

import os
import logging
from logging.handlers import RotatingFileHandler
from typing import Optional
from config import LOGS_DIR

# ============================================================================
# ERROR TAXONOMY
# ============================================================================

class ScheduleError(Exception):
    """Base class for every failure raised while resolving a schedule"""


class CacheIOError(ScheduleError):
    """Storage-layer fault (corrupt or missing file, permission denial)"""

    def __init__(self, key: str, reason: Exception):
        super().__init__(f"cache I/O failed for key {key!r}: {reason}")
        self.key = key
        self.reason = reason


class FetchError(ScheduleError):
    """Upstream request failed or answered with a non-success status"""

    def __init__(self, status: Optional[int], url: str, message: str = None):
        if message is None:
            message = f"request to {url} failed (status: {status})"
        super().__init__(message)
        self.status = status
        self.url = url


class InvalidInput(ScheduleError, ValueError):
    """Caller supplied an argument outside the accepted domain"""


class InvalidMatchType(InvalidInput):
    def __init__(self, match_type):
        super().__init__(f"Unknown match type: {match_type!r}")
        self.match_type = match_type


class InvalidLocale(InvalidInput):
    def __init__(self, locale):
        super().__init__(f"Unsupported locale: {locale!r}")
        self.locale = locale


class MalformedDocument(ScheduleError):
    """Expected fields are missing from an upstream document"""


# ============================================================================
# ERROR LOGGING SYSTEM
# ============================================================================

# Setup logger with rotation (5MB per file, keep 5 backup files)
error_logger = logging.getLogger('splatoon_schedule')
error_logger.setLevel(logging.WARNING)

# Rotating file handler - creates new file when size exceeds 5MB
error_log_file = os.path.join(LOGS_DIR, "errors.log")
if not any(isinstance(h, RotatingFileHandler) for h in error_logger.handlers):
    error_handler = RotatingFileHandler(
        error_log_file,
        maxBytes=5*1024*1024,  # 5MB per file
        backupCount=5,          # Keep 5 backup files
        encoding='utf-8'
    )
    error_handler.setLevel(logging.WARNING)

    # Format: timestamp | level | location | message
    error_formatter = logging.Formatter(
        '%(asctime)s | %(levelname)s | %(funcName)s:%(lineno)d | %(message)s',
        datefmt='%Y-%m-%d %H:%M:%S'
    )
    error_handler.setFormatter(error_formatter)
    error_logger.addHandler(error_handler)


def get_logger(name: str) -> logging.Logger:
    """Get a child of the project logger so records share the rotating file handler"""
    return error_logger.getChild(name)


def log_error(error: Exception, context: str = None, extra_info: dict = None):
    """Log error to local file for debugging

    Args:
        error: The exception that occurred
        context: Description of what was happening when error occurred
        extra_info: Additional key-value pairs to log

    Example:
        try:
            await repository.fetch_schedules()
        except FetchError as e:
            log_error(e, "Fetching schedules", {"status": e.status})
    """
    try:
        error_msg = f"{type(error).__name__}: {str(error)}"
        if context:
            error_msg = f"[{context}] {error_msg}"
        if extra_info:
            info_str = " | ".join(f"{k}={v}" for k, v in extra_info.items())
            error_msg = f"{error_msg} | {info_str}"

        # Expected failures carry their own message, no traceback needed
        error_logger.error(error_msg, exc_info=not isinstance(error, ScheduleError))
    except Exception as log_e:
        print(f"⚠️ Failed to log error: {log_e}")
