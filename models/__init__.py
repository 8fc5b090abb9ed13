"""Models package - Core data structures and cache stores"""

from .cache import CacheEntry, CacheStore, VolatileCache, PersistentCache, create_cache_store
from .schedule import (
    MatchType,
    MatchLayout,
    MATCH_TYPE_TABLE,
    MatchSetting,
    ScheduleNode,
    ScheduleDocument,
    ScheduleInfo,
    ScheduleResult,
    ResolutionStatus,
    UNKNOWN_RULE,
    UNKNOWN_STAGE,
)

__all__ = [
    'CacheEntry',
    'CacheStore',
    'VolatileCache',
    'PersistentCache',
    'create_cache_store',
    'MatchType',
    'MatchLayout',
    'MATCH_TYPE_TABLE',
    'MatchSetting',
    'ScheduleNode',
    'ScheduleDocument',
    'ScheduleInfo',
    'ScheduleResult',
    'ResolutionStatus',
    'UNKNOWN_RULE',
    'UNKNOWN_STAGE',
]
