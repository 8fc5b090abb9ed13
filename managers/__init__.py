"""Managers package - Schedule fetching and resolution"""

from .schedule_repository import (
    ScheduleRepository,
    fetch_json,
    SCHEDULES_CACHE_KEY,
    LOCALE_CACHE_KEY_PREFIX,
)
from .schedule_manager import (
    ScheduleResolver,
    ScheduleClient,
)

__all__ = [
    'ScheduleRepository',
    'fetch_json',
    'SCHEDULES_CACHE_KEY',
    'LOCALE_CACHE_KEY_PREFIX',
    'ScheduleResolver',
    'ScheduleClient',
]
