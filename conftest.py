"""
Shared pytest fixtures: fake transport, controllable clock, sample documents.
"""

import copy
from typing import Any, Dict, List, Tuple

import pytest

from utils.error_handling import FetchError

BASE_URL = "https://splatoon3.test/data"
SCHEDULES_URL = f"{BASE_URL}/schedules.json"


def locale_url(locale: str) -> str:
    return f"{BASE_URL}/locale/{locale}.json"


class FakeClock:
    """Epoch-millisecond clock advanced by hand"""

    def __init__(self, start_ms: int = 1_704_067_200_000):
        self.now = start_ms

    def __call__(self) -> int:
        return self.now

    def advance(self, seconds: float):
        self.now += int(seconds * 1000)


class FakeFetcher:
    """Stand-in for the HTTP transport

    ``routes`` maps a URL to a JSON body, an int status (raised as FetchError)
    or an exception instance to raise.
    """

    def __init__(self, routes: Dict[str, Any] = None):
        self.routes = routes or {}
        self.calls: List[Tuple[str, Dict[str, str]]] = []

    async def __call__(self, url: str, headers: Dict[str, str]) -> Any:
        self.calls.append((url, dict(headers)))
        if url not in self.routes:
            raise FetchError(404, url)
        route = self.routes[url]
        if isinstance(route, Exception):
            raise route
        if isinstance(route, int):
            raise FetchError(route, url)
        return copy.deepcopy(route)

    def urls(self) -> List[str]:
        return [url for url, _ in self.calls]


def make_setting(rule_id: str = None, stage_ids: List[str] = (), mode: str = None) -> dict:
    setting = {
        "vsRule": {"id": rule_id} if rule_id is not None else None,
        "vsStages": [{"id": stage_id} for stage_id in stage_ids],
    }
    if mode is not None:
        setting["mode"] = mode
    return setting


def make_node(start: str, end: str, setting_key: str, setting: Any) -> dict:
    return {"startTime": start, "endTime": end, setting_key: setting}


@pytest.fixture
def clock():
    return FakeClock()


@pytest.fixture
def schedules_doc():
    """Two back-to-back windows for every list, plus bankara OPEN/CHALLENGE split"""
    return {
        "data": {
            "regularSchedules": {"nodes": [
                make_node("2024-01-01T00:00:00Z", "2024-01-01T02:00:00Z",
                          "regularMatchSetting", make_setting("area", ["101", "102"])),
                make_node("2024-01-01T02:00:00Z", "2024-01-01T04:00:00Z",
                          "regularMatchSetting", make_setting("turf", ["103", "104"])),
            ]},
            "bankaraSchedules": {"nodes": [
                make_node("2024-01-01T00:00:00Z", "2024-01-01T02:00:00Z", "bankaraMatchSettings", [
                    make_setting("tower", ["101", "103"], mode="CHALLENGE"),
                    make_setting("clam", ["102", "104"], mode="OPEN"),
                ]),
            ]},
            "xSchedules": {"nodes": [
                make_node("2024-01-01T00:00:00Z", "2024-01-01T02:00:00Z",
                          "xMatchSetting", make_setting("rain", ["104", "101"])),
            ]},
            "eventSchedules": {"nodes": [
                make_node("2024-01-01T00:00:00Z", "2024-01-01T02:00:00Z",
                          "leagueMatchSetting", make_setting("area", ["103"])),
            ]},
            "festSchedules": {"nodes": [
                make_node("2024-01-01T00:00:00Z", "2024-01-01T02:00:00Z", "festMatchSetting", None),
            ]},
        }
    }


@pytest.fixture
def catalog():
    return {
        "area": {"name": "Splat Zones"},
        "turf": {"name": "Turf War"},
        "tower": {"name": "Tower Control"},
        "clam": {"name": "Clam Blitz"},
        "rain": {"name": "Rainmaker"},
        "101": {"name": "Stage A"},
        "102": {"name": "Stage B"},
        "103": {"name": "Stage C"},
        "104": {"name": "Stage D"},
    }


@pytest.fixture
def fetcher(schedules_doc, catalog):
    return FakeFetcher({
        SCHEDULES_URL: schedules_doc,
        locale_url("en-US"): catalog,
        locale_url("ja-JP"): {"area": {"name": "ガチエリア"}, "101": {"name": "ユノハナ大渓谷"}},
    })
