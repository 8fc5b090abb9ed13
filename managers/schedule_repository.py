"""
Schedule repository - fetches splatoon3.ink documents with cache memoization.

Each cache slot holds one complete document, replaced atomically on refresh.
"""

import asyncio
from typing import Any, Awaitable, Callable, Dict, Optional

import aiohttp

from config import SUPPORTED_LOCALES, config
from models.cache import CacheStore
from utils.error_handling import FetchError, InvalidLocale, MalformedDocument, get_logger

logger = get_logger('repository')

SCHEDULES_CACHE_KEY = 'splatoon3_schedules'
LOCALE_CACHE_KEY_PREFIX = 'splatoon3_locale_'

# (url, headers) -> parsed JSON body, raising FetchError on failure
FetchJson = Callable[[str, Dict[str, str]], Awaitable[Any]]


async def fetch_json(url: str, headers: Dict[str, str], timeout: float = None) -> Any:
    """GET a JSON document with aiohttp

    Args:
        url: Document URL
        headers: Request headers (User-Agent)
        timeout: Total request timeout in seconds (default: config.REQUEST_TIMEOUT)

    Returns:
        Parsed JSON body

    Raises:
        FetchError: on non-2xx status or transport failure
        MalformedDocument: if the body is not JSON
    """
    timeout = timeout if timeout is not None else config.REQUEST_TIMEOUT
    try:
        async with aiohttp.ClientSession() as session:
            async with session.get(url, headers=headers, timeout=aiohttp.ClientTimeout(total=timeout)) as response:
                if not 200 <= response.status < 300:
                    raise FetchError(response.status, url)
                try:
                    # splatoon3.ink may not label the body application/json
                    return await response.json(content_type=None)
                except ValueError as e:
                    raise MalformedDocument(f"{url} did not return JSON: {e}") from e
    except (aiohttp.ClientError, asyncio.TimeoutError) as e:
        raise FetchError(None, url, f"request to {url} failed: {type(e).__name__}: {e}") from e


class ScheduleRepository:
    """Fetch schedules and locale catalogs, memoized through a CacheStore"""

    def __init__(self, cache: CacheStore, user_agent: str = None, default_locale: str = None,
                 base_url: str = None, fetch: Optional[FetchJson] = None):
        """
        Args:
            cache: Store used to memoize raw documents
            user_agent: Client identifier sent as User-Agent (default: config.USER_AGENT)
            default_locale: Locale used when a call does not name one (default: config.DEFAULT_LOCALE)
            base_url: Upstream data root (default: config.BASE_URL)
            fetch: Transport coroutine (default: aiohttp-backed fetch_json)
        """
        self.cache = cache
        self.user_agent = user_agent or config.USER_AGENT
        self.default_locale = default_locale or config.DEFAULT_LOCALE
        self.base_url = (base_url or config.BASE_URL).rstrip('/')
        self.fetch = fetch or fetch_json

        if self.default_locale not in SUPPORTED_LOCALES:
            raise InvalidLocale(self.default_locale)

    @property
    def headers(self) -> Dict[str, str]:
        return {'User-Agent': self.user_agent}

    async def _get_or_fetch(self, cache_key: str, url: str) -> Any:
        cached = await self.cache.get(cache_key)
        if cached is not None:
            return cached

        logger.debug("Cache miss for %s, fetching %s", cache_key, url)
        data = await self.fetch(url, self.headers)
        await self.cache.set(cache_key, data)
        return data

    async def fetch_schedules(self) -> Any:
        """Get the raw schedules.json document

        Raises:
            FetchError: if the upstream request fails
        """
        return await self._get_or_fetch(SCHEDULES_CACHE_KEY, f"{self.base_url}/schedules.json")

    async def fetch_locale(self, locale: str = None) -> Any:
        """Get the raw locale catalog for a locale (default locale when omitted)

        Raises:
            InvalidLocale: if the locale is not published upstream
            FetchError: if the upstream request fails
        """
        target_locale = locale or self.default_locale
        if target_locale not in SUPPORTED_LOCALES:
            raise InvalidLocale(target_locale)

        return await self._get_or_fetch(
            f"{LOCALE_CACHE_KEY_PREFIX}{target_locale}",
            f"{self.base_url}/locale/{target_locale}.json",
        )
