"""
Schedule management for Splatoon 3 rotation lookups.

Handles picking the rotation window that covers an instant and localizing it.
"""

import asyncio
from typing import Any, Optional

from models.cache import CacheStore, VolatileCache
from models.schedule import (
    UNKNOWN_RULE, UNKNOWN_STAGE, MatchSetting, ResolutionStatus, ScheduleDocument,
    ScheduleInfo, ScheduleResult, get_match_layout,
)
from managers.schedule_repository import FetchJson, ScheduleRepository
from utils.error_handling import (
    FetchError, InvalidInput, MalformedDocument, get_logger, log_error,
)
from utils.localization import LocalizationResolver
from utils.timestamp import Instant, to_epoch_ms

logger = get_logger('resolver')


# ============================================================================
# SCHEDULE RESOLVER
# ============================================================================

class ScheduleResolver:
    """Resolve the localized schedule of a match type at a point in time

    Each call is a single pass: fetch -> select -> extract -> localize -> assemble.
    Only the raw documents are cached (by the repository), never the answer.
    """

    def __init__(self, repository: ScheduleRepository):
        self.repository = repository

    async def resolve(self, time: Instant, match_type, locale: str = None) -> ScheduleResult:
        """Resolve the schedule window covering ``time``

        Args:
            time: Aware datetime (naive is read as UTC), epoch milliseconds or ISO string
            match_type: MatchType or its string value
            locale: Catalog locale (default: repository's default locale)

        Returns:
            ScheduleResult tagged FOUND, NOT_FOUND, FETCH_FAILED, INVALID_INPUT
            or MALFORMED_DOCUMENT. Never raises.
        """
        context = {"match_type": match_type, "locale": locale}
        try:
            return await self._resolve(time, match_type, locale)
        except InvalidInput as e:
            log_error(e, "Resolving schedule", context)
            return ScheduleResult.failure(ResolutionStatus.INVALID_INPUT, e)
        except FetchError as e:
            log_error(e, "Resolving schedule", {**context, "status": e.status})
            return ScheduleResult.failure(ResolutionStatus.FETCH_FAILED, e)
        except MalformedDocument as e:
            log_error(e, "Resolving schedule", context)
            return ScheduleResult.failure(ResolutionStatus.MALFORMED_DOCUMENT, e)
        except Exception as e:
            # Transport faults outside the taxonomy still count as a failed fetch
            log_error(e, "Resolving schedule", context)
            return ScheduleResult.failure(ResolutionStatus.FETCH_FAILED, e)

    async def _resolve(self, time: Instant, match_type, locale: Optional[str]) -> ScheduleResult:
        # Validate caller input before any network traffic
        layout = get_match_layout(match_type)
        try:
            time_ms = to_epoch_ms(time)
        except ValueError as e:
            raise InvalidInput(f"Invalid time: {e}") from e

        raw_schedules, catalog = await self._fetch_documents(locale)

        document = ScheduleDocument.from_raw(raw_schedules)
        node = document.find_node(layout, time_ms)
        if node is None:
            logger.debug("No %s window covers %d", layout.list_key, time_ms)
            return ScheduleResult.not_found()

        setting = node.match_setting(layout)
        if setting is None:
            return ScheduleResult.not_found()

        info = self._localize(setting, LocalizationResolver(catalog), node.start_time, node.end_time)
        return ScheduleResult.success(info)

    async def _fetch_documents(self, locale: Optional[str]):
        """Fetch schedules and locale concurrently, re-raising the first failure"""
        results = await asyncio.gather(
            self.repository.fetch_schedules(),
            self.repository.fetch_locale(locale),
            return_exceptions=True,
        )
        for result in results:
            if isinstance(result, BaseException):
                raise result
        return results

    @staticmethod
    def _localize(setting: MatchSetting, resolver: LocalizationResolver,
                  start_time: str, end_time: str) -> ScheduleInfo:
        rule = resolver.resolve(setting.rule_id) if setting.rule_id else UNKNOWN_RULE
        stages = tuple(
            resolver.resolve(stage_id) if stage_id else UNKNOWN_STAGE
            for stage_id in setting.stage_ids
        )
        return ScheduleInfo(rule=rule, stages=stages, start_time=start_time, end_time=end_time)

    async def get_schedule_for_time(self, time: Instant, match_type,
                                    locale: str = None) -> Optional[ScheduleInfo]:
        """Same as resolve() but collapses every non-found outcome to None"""
        result = await self.resolve(time, match_type, locale)
        return result.info


# ============================================================================
# CLIENT FACADE
# ============================================================================

class ScheduleClient:
    """Public entry point wiring a cache, a repository and a resolver together

    Example:
        client = ScheduleClient(PersistentCache('./my-cache'), default_locale='de-DE')
        info = await client.get_schedule_for_time(datetime.now(timezone.utc), 'xmatch')
    """

    def __init__(self, cache: CacheStore = None, user_agent: str = None,
                 default_locale: str = None, fetch: Optional[FetchJson] = None,
                 base_url: str = None):
        # A fresh cache per client, never a process-wide default
        self.cache = cache if cache is not None else VolatileCache()
        self.repository = ScheduleRepository(
            self.cache,
            user_agent=user_agent,
            default_locale=default_locale,
            base_url=base_url,
            fetch=fetch,
        )
        self.resolver = ScheduleResolver(self.repository)

    async def fetch_schedules(self) -> Any:
        return await self.repository.fetch_schedules()

    async def fetch_locale(self, locale: str = None) -> Any:
        return await self.repository.fetch_locale(locale)

    async def resolve(self, time: Instant, match_type, locale: str = None) -> ScheduleResult:
        return await self.resolver.resolve(time, match_type, locale)

    async def get_schedule_for_time(self, time: Instant, match_type,
                                    locale: str = None) -> Optional[ScheduleInfo]:
        return await self.resolver.get_schedule_for_time(time, match_type, locale)
