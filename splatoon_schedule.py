"""
Splatoon 3 schedule lookup - quick access to the rotation live at a given time

Usage:
    python splatoon_schedule.py bankara_open --locale en-US
    python splatoon_schedule.py xmatch --at 2024-01-01T01:00:00Z --cache-dir ./my-cache
"""
import sys
import asyncio
import argparse
import datetime
from typing import Optional

from config import SUPPORTED_LOCALES, config
from managers.schedule_manager import ScheduleClient
from models.cache import CacheStore, PersistentCache, create_cache_store
from models.schedule import MatchType, ScheduleInfo, ScheduleResult
from utils.formatting import format_schedule_info
from utils.timestamp import Instant


async def get_schedule(date_time: Instant, match_type=MatchType.BANKARA_OPEN,
                       cache: CacheStore = None, locale: str = None) -> Optional[ScheduleInfo]:
    """
    Look up the schedule window covering ``date_time``

    Returns:
        ScheduleInfo, or None if nothing is running or the lookup failed
    """
    client = ScheduleClient(cache)
    return await client.get_schedule_for_time(date_time, match_type, locale)


async def lookup(match_type: str, at: Instant, locale: Optional[str],
                 cache: CacheStore) -> ScheduleResult:
    client = ScheduleClient(cache)
    return await client.resolve(at, match_type, locale)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Show the Splatoon 3 rotation live at a given time")
    parser.add_argument("match_type", choices=[mt.value for mt in MatchType])
    parser.add_argument("--locale", choices=SUPPORTED_LOCALES, default=None,
                        help=f"Catalog language (default: {config.DEFAULT_LOCALE})")
    parser.add_argument("--at", default=None, help="ISO-8601 instant (default: now)")
    parser.add_argument("--cache-dir", default=None, help="Persist downloaded documents in this directory")
    parser.add_argument("--timezone", default=config.DISPLAY_TIMEZONE, help="Display timezone")
    return parser


def main(argv=None) -> int:
    args = build_parser().parse_args(argv)

    at = args.at or datetime.datetime.now(datetime.timezone.utc)
    cache = PersistentCache(args.cache_dir) if args.cache_dir else create_cache_store()

    result = asyncio.run(lookup(args.match_type, at, args.locale, cache))
    if not result.found:
        print(f"❌ {result.status.value}" + (f": {result.error}" if result.error else ""))
        return 1

    print(format_schedule_info(result.info, args.match_type, args.timezone))
    return 0


if __name__ == "__main__":
    sys.exit(main())
