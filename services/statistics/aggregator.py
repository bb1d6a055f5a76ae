from __future__ import annotations

import math
from dataclasses import dataclass
from typing import Iterable, List, Sequence, Tuple, Union

from .store import ActivityRecord, RecordKind
from .windows import TimeWindow

Number = Union[int, float]


@dataclass(frozen=True)
class Totals:
    total_duration: Number = 0
    total_calories_burned: Number = 0
    total_calories_consumed: Number = 0
    session_count: int = 0
    entry_count: int = 0


@dataclass(frozen=True)
class Bucket:
    window: TimeWindow
    totals: Totals


@dataclass(frozen=True)
class Aggregate:
    window: TimeWindow
    totals: Totals
    buckets: Tuple[Bucket, ...] = ()


def _value(v) -> float:
    return float(v) if v is not None else 0.0


def _sum(values: List[float]) -> Number:
    total = math.fsum(values)
    return int(total) if total.is_integer() else total


def reduce_records(records: Iterable[ActivityRecord]) -> Totals:
    """
    Sum the numeric metrics of `records`. Missing fields count as 0.

    fsum keeps float totals exact, so any permutation of the same records
    gives identical results. Whole-number totals come back as int.
    """
    durations: List[float] = []
    burned: List[float] = []
    consumed: List[float] = []
    sessions = 0
    entries = 0

    for r in records:
        if r.kind == RecordKind.workout:
            sessions += 1
        elif r.kind == RecordKind.nutrition:
            entries += 1
        else:
            raise ValueError(f"unknown record kind {r.kind!r}")

        durations.append(_value(r.duration_minutes))
        burned.append(_value(r.calories_burned))
        consumed.append(_value(r.calories_consumed))

    return Totals(
        total_duration=_sum(durations),
        total_calories_burned=_sum(burned),
        total_calories_consumed=_sum(consumed),
        session_count=sessions,
        entry_count=entries,
    )


def aggregate(records: Sequence[ActivityRecord], window: TimeWindow) -> Aggregate:
    """Totals over `window` plus one bucket per sub-window (boundaries inclusive)."""
    in_window = [r for r in records if window.contains(r.occurred_at)]

    buckets = tuple(
        Bucket(window=sub, totals=reduce_records(r for r in in_window if sub.contains(r.occurred_at)))
        for sub in window.sub_windows
    )
    return Aggregate(window=window, totals=reduce_records(in_window), buckets=buckets)
