"""
Cache management module for upstream documents with TTL expiry.

Provides:
- CacheStore: Async get/set/delete contract shared by every backend
- VolatileCache: Process-lifetime in-memory cache
- PersistentCache: One JSON file per key with disk persistence
"""

import os
import json
import uuid
import asyncio
from dataclasses import dataclass
from typing import Any, Callable, Dict, Optional
from urllib.parse import quote

from config import CACHE_TTL_SECONDS, config as default_config
from utils.error_handling import CacheIOError, get_logger
from utils.timestamp import now_ms

logger = get_logger('cache')

Clock = Callable[[], int]

# ============================================================================
# CACHE ENTRY
# ============================================================================

@dataclass(frozen=True)
class CacheEntry:
    """A cached value stamped with its write time (epoch ms) and lifetime"""
    timestamp: int
    data: Any
    ttl_ms: int = CACHE_TTL_SECONDS * 1000

    def is_fresh(self, now: int) -> bool:
        return now - self.timestamp < self.ttl_ms

    def to_json(self) -> dict:
        return {'timestamp': self.timestamp, 'ttl': self.ttl_ms, 'data': self.data}

    @classmethod
    def from_json(cls, raw: dict, default_ttl_ms: int) -> 'CacheEntry':
        if not isinstance(raw, dict) or 'timestamp' not in raw or 'data' not in raw:
            raise ValueError("cache file is not a {timestamp, data} document")
        timestamp = raw['timestamp']
        ttl = raw.get('ttl', default_ttl_ms)
        if isinstance(timestamp, bool) or not isinstance(timestamp, (int, float)):
            raise ValueError(f"invalid timestamp: {timestamp!r}")
        if isinstance(ttl, bool) or not isinstance(ttl, (int, float)):
            raise ValueError(f"invalid ttl: {ttl!r}")
        return cls(timestamp=int(timestamp), data=raw['data'], ttl_ms=int(ttl))


# ============================================================================
# CACHE STORE CONTRACT
# ============================================================================

class CacheStore:
    """Key/value store whose entries expire after a TTL

    Staleness is checked lazily on read: a stale hit is removed from storage
    and reported as a miss. Backends never raise to their callers.
    """

    def __init__(self, ttl_seconds: float = CACHE_TTL_SECONDS, clock: Optional[Clock] = None):
        """
        Args:
            ttl_seconds: Lifetime of entries written without an override (default: 1 hour)
            clock: Callable returning the current time in epoch milliseconds
        """
        self.ttl_ms = int(ttl_seconds * 1000)
        self.clock = clock or now_ms

    def _new_entry(self, value: Any, ttl_seconds: Optional[float]) -> CacheEntry:
        ttl_ms = self.ttl_ms if ttl_seconds is None else int(ttl_seconds * 1000)
        return CacheEntry(timestamp=self.clock(), data=value, ttl_ms=ttl_ms)

    async def get(self, key: str) -> Optional[Any]:
        raise NotImplementedError

    async def set(self, key: str, value: Any, ttl_seconds: Optional[float] = None) -> None:
        raise NotImplementedError

    async def delete(self, key: str) -> None:
        raise NotImplementedError

    async def clear(self) -> None:
        raise NotImplementedError


# ============================================================================
# IN-MEMORY CACHE
# ============================================================================

class VolatileCache(CacheStore):
    """In-memory cache that lives as long as the process"""

    def __init__(self, ttl_seconds: float = CACHE_TTL_SECONDS, clock: Optional[Clock] = None):
        super().__init__(ttl_seconds, clock)
        self.cache: Dict[str, CacheEntry] = {}

    async def get(self, key: str) -> Optional[Any]:
        entry = self.cache.get(key)
        if entry is None:
            return None

        if not entry.is_fresh(self.clock()):
            logger.debug("Cache EXPIRED for %s", key)
            del self.cache[key]
            return None

        return entry.data

    async def set(self, key: str, value: Any, ttl_seconds: Optional[float] = None) -> None:
        self.cache[key] = self._new_entry(value, ttl_seconds)

    async def delete(self, key: str) -> None:
        self.cache.pop(key, None)

    async def clear(self) -> None:
        self.cache.clear()

    def __len__(self) -> int:
        return len(self.cache)


# ============================================================================
# DISK CACHE
# ============================================================================

class PersistentCache(CacheStore):
    """File-backed cache keeping one JSON document per key

    Features:
    - Survives restarts
    - Blocking file work runs in a worker thread
    - Atomic replace on write so readers never see a partial file
    - I/O failures are logged and downgraded (miss on read, no-op on write)
    """

    FILE_SUFFIX = '.json'

    def __init__(self, cache_dir: str, ttl_seconds: float = CACHE_TTL_SECONDS,
                 clock: Optional[Clock] = None):
        """
        Initialize PersistentCache

        Args:
            cache_dir: Directory for disk cache storage (created if missing)
            ttl_seconds: Time-to-live in seconds (default: 1 hour)
            clock: Callable returning the current time in epoch milliseconds
        """
        super().__init__(ttl_seconds, clock)
        self.cache_dir = cache_dir
        try:
            os.makedirs(cache_dir, exist_ok=True)
        except OSError as e:
            logger.warning("Could not create cache directory %s: %s", cache_dir, e)

    def _get_cache_file(self, key: str) -> str:
        """Get cache file path for a key

        Percent-encoding keeps distinct keys on distinct files.
        """
        return os.path.join(self.cache_dir, quote(key, safe='-_.') + self.FILE_SUFFIX)

    # ------------------------------------------------------------------
    # Blocking helpers (run via asyncio.to_thread)
    # ------------------------------------------------------------------

    def _read_entry(self, key: str) -> Optional[CacheEntry]:
        cache_file = self._get_cache_file(key)
        try:
            with open(cache_file, 'r', encoding='utf-8') as f:
                raw = json.load(f)
            return CacheEntry.from_json(raw, self.ttl_ms)
        except FileNotFoundError:
            return None
        except (OSError, OverflowError, ValueError) as e:
            raise CacheIOError(key, e) from e

    def _write_entry(self, key: str, entry: CacheEntry):
        cache_file = self._get_cache_file(key)
        tmp_file = f"{cache_file}.{uuid.uuid4().hex}.tmp"
        try:
            os.makedirs(self.cache_dir, exist_ok=True)
            with open(tmp_file, 'w', encoding='utf-8') as f:
                json.dump(entry.to_json(), f, ensure_ascii=False)
            os.replace(tmp_file, cache_file)
        except (OSError, TypeError, ValueError) as e:
            try:
                os.remove(tmp_file)
            except OSError:
                pass
            raise CacheIOError(key, e) from e

    def _remove_file(self, key: str):
        try:
            os.remove(self._get_cache_file(key))
        except FileNotFoundError:
            pass
        except OSError as e:
            raise CacheIOError(key, e) from e

    def _remove_all(self) -> int:
        removed = 0
        try:
            filenames = os.listdir(self.cache_dir)
        except FileNotFoundError:
            return 0
        except OSError as e:
            raise CacheIOError('*', e) from e

        for filename in filenames:
            if not filename.endswith(self.FILE_SUFFIX):
                continue
            try:
                os.remove(os.path.join(self.cache_dir, filename))
                removed += 1
            except FileNotFoundError:
                pass
            except OSError as e:
                raise CacheIOError(filename, e) from e
        return removed

    # ------------------------------------------------------------------
    # CacheStore contract
    # ------------------------------------------------------------------

    async def get(self, key: str) -> Optional[Any]:
        try:
            entry = await asyncio.to_thread(self._read_entry, key)
        except CacheIOError as e:
            logger.warning("Failed to read cache for key %s: %s", key, e.reason)
            return None

        if entry is None:
            return None

        if not entry.is_fresh(self.clock()):
            logger.debug("Disk cache EXPIRED for %s", key)
            await self.delete(key)
            return None

        return entry.data

    async def set(self, key: str, value: Any, ttl_seconds: Optional[float] = None) -> None:
        entry = self._new_entry(value, ttl_seconds)
        try:
            await asyncio.to_thread(self._write_entry, key, entry)
        except CacheIOError as e:
            logger.warning("Failed to write cache for key %s: %s", key, e.reason)

    async def delete(self, key: str) -> None:
        try:
            await asyncio.to_thread(self._remove_file, key)
        except CacheIOError as e:
            logger.warning("Failed to delete cache for key %s: %s", key, e.reason)

    async def clear(self) -> None:
        try:
            removed = await asyncio.to_thread(self._remove_all)
        except CacheIOError as e:
            logger.warning("Could not delete disk cache files: %s", e.reason)
            return
        if removed:
            logger.info("Deleted %d disk cache files", removed)


def create_cache_store(cfg=None) -> CacheStore:
    """Build the cache backend selected by configuration

    Args:
        cfg: ScheduleConfig to read from (default: module-level config)

    Returns:
        PersistentCache when CACHE_BACKEND is 'file', VolatileCache otherwise
    """
    cfg = cfg or default_config
    if cfg.CACHE_BACKEND == 'file':
        return PersistentCache(cfg.CACHE_DIR)
    return VolatileCache()
