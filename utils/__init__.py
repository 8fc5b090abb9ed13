"""Utils package - Utility functions and helpers"""

from .error_handling import (
    ScheduleError,
    CacheIOError,
    FetchError,
    InvalidInput,
    InvalidMatchType,
    InvalidLocale,
    MalformedDocument,
    get_logger,
    log_error,
)
from .localization import LocalizationResolver, resolve_localized_name
from .timestamp import now_ms, parse_iso_instant, to_epoch_ms

__all__ = [
    'ScheduleError',
    'CacheIOError',
    'FetchError',
    'InvalidInput',
    'InvalidMatchType',
    'InvalidLocale',
    'MalformedDocument',
    'get_logger',
    'log_error',
    'LocalizationResolver',
    'resolve_localized_name',
    'now_ms',
    'parse_iso_instant',
    'to_epoch_ms',
]
