# pickpack_StatsReporter/core/model.py
from __future__ import annotations
from dataclasses import dataclass
from enum import Enum
from typing import Union


class ParseError(Exception):
    """Raised when a spreadsheet cannot be read or decoded into a grid."""


class RecordKind(str, Enum):
    PICK = "pick"
    PACK = "pack"


class EfficiencyTier(str, Enum):
    LEVEL1 = "level1"   # worst
    LEVEL2 = "level2"
    LEVEL3 = "level3"   # best

    @property
    def rank(self) -> int:
        return int(self.value[-1])


@dataclass(frozen=True)
class PickRecord:
    id: str                       # "{file_name}-{employee}-{row_index}"
    file_name: str
    week: str | None
    employee: str
    total_picks: float = 0.0
    avg_pick_time: float = 0.0
    total_items_picked: float = 0.0
    total_bins: float = 0.0
    avg_time_per_bin: float = 0.0
    avg_bins_per_pick: float = 0.0
    total_orders: float = 0.0
    avg_orders_per_pick: float = 0.0
    total_pick_time: float = 0.0  # hours
    items_per_hour: float = 0.0
    bins_per_hour: float = 0.0
    avg_items_per_bin: float = 0.0
    kind: RecordKind = RecordKind.PICK


@dataclass(frozen=True)
class PackRecord:
    id: str
    file_name: str
    week: str | None
    employee: str
    orders_per_hour: float = 0.0
    total_packs: float = 0.0
    total_items: float = 0.0
    total_time: float = 0.0       # hours
    avg_pack_time: float = 0.0
    avg_items_per_pack: float = 0.0
    kind: RecordKind = RecordKind.PACK


Record = Union[PickRecord, PackRecord]


@dataclass(frozen=True)
class EmployeePerformance:
    employee: str
    total_pick_time: float        # hours
    total_bins: float
    avg_time_per_bin: float       # seconds
    total_packs: float | None
    total_pack_time: float | None # hours
    weeks: tuple[str, ...]
    efficiency: EfficiencyTier


@dataclass(frozen=True)
class WeeklyTrend:
    week: str
    total_pick_time: float
    total_bins: float
    avg_time_per_bin: float
    employee_count: int
