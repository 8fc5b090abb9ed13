"""
Schedule data structures for Splatoon 3 rotations.

Raw upstream JSON is checked once here, at the document boundary, so the
resolver works with typed nodes and settings instead of speculative lookups.
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Dict, Iterator, Optional, Tuple

from utils.error_handling import InvalidMatchType, MalformedDocument
from utils.timestamp import to_epoch_ms

UNKNOWN_RULE = "Unknown Rule"
UNKNOWN_STAGE = "Unknown Stage"

# ============================================================================
# MATCH TYPES
# ============================================================================

class MatchType(str, Enum):
    REGULAR = 'regular'                      # Regular Battle (Turf War)
    BANKARA_OPEN = 'bankara_open'            # Anarchy Battle (Open)
    BANKARA_CHALLENGE = 'bankara_challenge'  # Anarchy Battle (Series)
    XMATCH = 'xmatch'                        # X Battle
    EVENT = 'event'                          # Challenge (event match)
    FEST = 'fest'                            # Splatfest Battle (only during a Splatfest)

    @classmethod
    def parse(cls, value) -> 'MatchType':
        """Coerce a string or MatchType, raising InvalidMatchType for anything else"""
        if isinstance(value, cls):
            return value
        try:
            return cls(value)
        except ValueError:
            raise InvalidMatchType(value) from None


@dataclass(frozen=True)
class MatchLayout:
    """Where a match type lives in the schedule document"""
    list_key: str
    setting_key: str
    submode: Optional[str] = None
    optional_list: bool = False


MATCH_TYPE_TABLE: Dict[MatchType, MatchLayout] = {
    MatchType.REGULAR: MatchLayout('regularSchedules', 'regularMatchSetting'),
    MatchType.BANKARA_OPEN: MatchLayout('bankaraSchedules', 'bankaraMatchSettings', submode='OPEN'),
    MatchType.BANKARA_CHALLENGE: MatchLayout('bankaraSchedules', 'bankaraMatchSettings', submode='CHALLENGE'),
    MatchType.XMATCH: MatchLayout('xSchedules', 'xMatchSetting'),
    MatchType.EVENT: MatchLayout('eventSchedules', 'leagueMatchSetting'),
    MatchType.FEST: MatchLayout('festSchedules', 'festMatchSetting', optional_list=True),
}


def get_match_layout(match_type) -> MatchLayout:
    return MATCH_TYPE_TABLE[MatchType.parse(match_type)]


# ============================================================================
# DOCUMENT STRUCTURES
# ============================================================================

def _ref_id(ref: Any) -> Optional[str]:
    """Read ``ref.id`` as a non-empty string, or None"""
    if not isinstance(ref, dict):
        return None
    ref_id = ref.get('id')
    if isinstance(ref_id, str) and ref_id:
        return ref_id
    return None


@dataclass(frozen=True)
class MatchSetting:
    """Rule and stage identifiers of one match setting block"""
    rule_id: Optional[str]
    stage_ids: Tuple[Optional[str], Optional[str]]
    mode: Optional[str] = None

    @classmethod
    def from_raw(cls, raw: Any) -> 'MatchSetting':
        if not isinstance(raw, dict):
            raise MalformedDocument(f"match setting is not an object: {raw!r}")

        stages = raw.get('vsStages')
        if not isinstance(stages, list):
            stages = []
        first = _ref_id(stages[0]) if len(stages) > 0 else None
        second = _ref_id(stages[1]) if len(stages) > 1 else None

        mode = raw.get('mode')
        return cls(
            rule_id=_ref_id(raw.get('vsRule')),
            stage_ids=(first, second),
            mode=mode if isinstance(mode, str) else None,
        )


@dataclass(frozen=True)
class ScheduleNode:
    """One time window of a node list"""
    start_time: str
    end_time: str
    start_ms: int
    end_ms: int
    settings: Dict[str, Any] = field(default_factory=dict, compare=False)

    @classmethod
    def from_raw(cls, raw: Any) -> 'ScheduleNode':
        if not isinstance(raw, dict):
            raise MalformedDocument(f"schedule node is not an object: {raw!r}")
        start_time = raw.get('startTime')
        end_time = raw.get('endTime')
        try:
            start_ms = to_epoch_ms(start_time)
            end_ms = to_epoch_ms(end_time)
        except (TypeError, ValueError) as e:
            raise MalformedDocument(f"schedule node has invalid times: {e}") from e
        return cls(start_time, end_time, start_ms, end_ms, raw)

    def contains(self, time_ms: int) -> bool:
        """Half-open interval check: start <= t < end"""
        return self.start_ms <= time_ms < self.end_ms

    def match_setting(self, layout: MatchLayout) -> Optional[MatchSetting]:
        """Pick this node's setting for a match type

        With a submode, the setting value is treated as a list and filtered by
        ``mode``; otherwise the value is used directly. Returns None when the
        node carries no setting for the match type.
        """
        raw = self.settings.get(layout.setting_key)
        if not raw:
            return None

        if layout.submode is None:
            return MatchSetting.from_raw(raw)

        candidates = raw if isinstance(raw, list) else [raw]
        for candidate in candidates:
            if not isinstance(candidate, dict):
                continue
            setting = MatchSetting.from_raw(candidate)
            if setting.mode == layout.submode:
                return setting
        return None


@dataclass
class ScheduleDocument:
    """Top-level ``data`` object of schedules.json"""
    data: Dict[str, Any]

    @classmethod
    def from_raw(cls, raw: Any) -> 'ScheduleDocument':
        data = raw.get('data') if isinstance(raw, dict) else None
        if not isinstance(data, dict):
            raise MalformedDocument("schedule document has no 'data' object")
        return cls(data)

    def nodes_for(self, layout: MatchLayout) -> Iterator[ScheduleNode]:
        """Parse the node list a match type reads from, one node at a time

        Nodes are only validated as they are reached, so a scan that stops early
        never reads the rest of the list.

        Raises:
            MalformedDocument: if a required node list is missing or a node is invalid
        """
        container = self.data.get(layout.list_key)
        if container is None and layout.optional_list:
            return
        if not isinstance(container, dict):
            raise MalformedDocument(f"schedule document has no '{layout.list_key}' object")

        nodes = container.get('nodes')
        if nodes is None and layout.optional_list:
            return
        if not isinstance(nodes, list):
            raise MalformedDocument(f"'{layout.list_key}.nodes' is not a list")
        for node in nodes:
            yield ScheduleNode.from_raw(node)

    def find_node(self, layout: MatchLayout, time_ms: int) -> Optional[ScheduleNode]:
        """First node in list order whose window contains the instant"""
        for node in self.nodes_for(layout):
            if node.contains(time_ms):
                return node
        return None


# ============================================================================
# RESOLUTION RESULTS
# ============================================================================

@dataclass(frozen=True)
class ScheduleInfo:
    """Localized schedule for one window"""
    rule: str
    stages: Tuple[str, str]
    start_time: str
    end_time: str

    def to_dict(self) -> dict:
        return {
            'rule': self.rule,
            'stages': list(self.stages),
            'startTime': self.start_time,
            'endTime': self.end_time,
        }


class ResolutionStatus(str, Enum):
    FOUND = 'found'
    NOT_FOUND = 'not_found'
    FETCH_FAILED = 'fetch_failed'
    INVALID_INPUT = 'invalid_input'
    MALFORMED_DOCUMENT = 'malformed_document'


@dataclass(frozen=True)
class ScheduleResult:
    """Outcome of a resolution: the schedule, or why there is none"""
    status: ResolutionStatus
    info: Optional[ScheduleInfo] = None
    error: Optional[Exception] = field(default=None, compare=False)

    @property
    def found(self) -> bool:
        return self.status is ResolutionStatus.FOUND

    def __bool__(self) -> bool:
        return self.found

    @classmethod
    def success(cls, info: ScheduleInfo) -> 'ScheduleResult':
        return cls(ResolutionStatus.FOUND, info)

    @classmethod
    def not_found(cls) -> 'ScheduleResult':
        return cls(ResolutionStatus.NOT_FOUND)

    @classmethod
    def failure(cls, status: ResolutionStatus, error: Exception) -> 'ScheduleResult':
        return cls(status, None, error)
