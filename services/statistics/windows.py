from __future__ import annotations

import calendar
from dataclasses import dataclass
from datetime import date, datetime, time, timedelta, timezone
from enum import IntEnum
from typing import Optional, Tuple, Union

from models.enums import SummaryRange

from .errors import InvalidRangeError

DateInput = Union[date, datetime, str]

MONTH_NAMES = (
    "January", "February", "March", "April", "May", "June",
    "July", "August", "September", "October", "November", "December",
)


def utcnow() -> datetime:
    return datetime.now(timezone.utc).replace(tzinfo=None)


def to_naive_utc(ts: datetime) -> datetime:
    if ts.tzinfo is None:
        return ts
    return ts.astimezone(timezone.utc).replace(tzinfo=None)


def start_of_day(d: date) -> datetime:
    return datetime.combine(d, time.min)


def end_of_day(d: date) -> datetime:
    return datetime.combine(d, time.max)


class Weekday(IntEnum):
    monday = 0
    tuesday = 1
    wednesday = 2
    thursday = 3
    friday = 4
    saturday = 5
    sunday = 6

    @property
    def label(self) -> str:
        return self.name.capitalize()


@dataclass(frozen=True)
class TimeWindow:
    """Inclusive on both ends. Sub-windows are disjoint and ordered."""

    start: datetime
    end: datetime
    label: str = ""
    weekday: Optional[Weekday] = None
    sub_windows: Tuple["TimeWindow", ...] = ()

    def contains(self, ts: datetime) -> bool:
        return self.start <= ts <= self.end

    @property
    def start_date(self) -> date:
        return self.start.date()

    @property
    def end_date(self) -> date:
        return self.end.date()


def parse_iso_date(value: DateInput) -> date:
    if isinstance(value, datetime):
        return to_naive_utc(value).date()
    if isinstance(value, date):
        return value
    if isinstance(value, str):
        try:
            return datetime.strptime(value.strip(), "%Y-%m-%d").date()
        except ValueError:
            raise InvalidRangeError(f"Invalid date {value!r}, expected YYYY-MM-DD") from None
    raise InvalidRangeError(f"Invalid date {value!r}, expected YYYY-MM-DD")


def _require_int(value, name: str, low: int, high: int) -> int:
    if isinstance(value, bool) or not isinstance(value, int):
        raise InvalidRangeError(f"{name} must be an integer", {name: value})
    if not low <= value <= high:
        raise InvalidRangeError(f"{name} must be between {low} and {high}", {name: value})
    return value


def day_window(d: date) -> TimeWindow:
    return TimeWindow(
        start=start_of_day(d),
        end=end_of_day(d),
        label=d.isoformat(),
        weekday=Weekday(d.weekday()),
    )


def resolve_week(reference: Optional[DateInput] = None, *, now: Optional[datetime] = None) -> TimeWindow:
    """Monday..Sunday week containing `reference` (default: today), split into 7 days."""
    day = parse_iso_date(reference) if reference is not None else to_naive_utc(now or utcnow()).date()
    try:
        monday = day - timedelta(days=day.weekday())
        days = tuple(day_window(monday + timedelta(days=i)) for i in range(7))
    except OverflowError:
        raise InvalidRangeError(f"Week of {day.isoformat()} is outside the supported calendar") from None

    return TimeWindow(start=days[0].start, end=days[-1].end, label=monday.isoformat(), sub_windows=days)


def resolve_month(
    month: Optional[int] = None,
    year: Optional[int] = None,
    *,
    now: Optional[datetime] = None,
) -> TimeWindow:
    """
    Calendar month split into calendar weeks clipped to the month: the first
    sub-window starts on day 1, the last one ends on the month's last day and
    every one in between is a full Monday..Sunday week.
    """
    current = to_naive_utc(now or utcnow())
    target_month = _require_int(current.month if month is None else month, "month", 1, 12)
    target_year = _require_int(current.year if year is None else year, "year", 1, 9999)

    first = date(target_year, target_month, 1)
    last = date(target_year, target_month, calendar.monthrange(target_year, target_month)[1])

    weeks = []
    cursor = first
    while True:
        # clip before adding: the last week of 9999-12 would pass date.max
        week_end = cursor + timedelta(days=min(Weekday.sunday - cursor.weekday(), (last - cursor).days))
        weeks.append(TimeWindow(start=start_of_day(cursor), end=end_of_day(week_end), label=cursor.isoformat()))
        if week_end == last:
            break
        cursor = week_end + timedelta(days=1)

    return TimeWindow(
        start=start_of_day(first),
        end=end_of_day(last),
        label=f"{target_year:04d}-{target_month:02d}",
        sub_windows=tuple(weeks),
    )


def resolve_range(start_date: DateInput, end_date: DateInput) -> TimeWindow:
    """Caller-supplied calendar range, used verbatim. No sub-windows."""
    start = parse_iso_date(start_date)
    end = parse_iso_date(end_date)
    if end < start:
        raise InvalidRangeError(
            "endDate must not be before startDate",
            {"startDate": start.isoformat(), "endDate": end.isoformat()},
        )
    return TimeWindow(
        start=start_of_day(start),
        end=end_of_day(end),
        label=f"{start.isoformat()}/{end.isoformat()}",
    )


def _shift_months(ts: datetime, months: int) -> datetime:
    index = ts.year * 12 + (ts.month - 1) + months
    year, month = divmod(index, 12)
    month += 1
    if not 1 <= year <= 9999:
        raise InvalidRangeError(f"{ts.isoformat()} shifted by {months} months is outside the calendar")
    day = min(ts.day, calendar.monthrange(year, month)[1])
    return ts.replace(year=year, month=month, day=day)


def resolve_trailing(time_range: Union[SummaryRange, str], *, now: Optional[datetime] = None) -> TimeWindow:
    """Rolling window ending now: last 7 days, last month or last year."""
    try:
        span = SummaryRange(time_range)
    except ValueError:
        raise InvalidRangeError(
            f"timeRange must be one of {', '.join(r.value for r in SummaryRange)}",
            {"timeRange": time_range},
        ) from None

    end = to_naive_utc(now or utcnow())
    if span == SummaryRange.week:
        start = end - timedelta(days=7)
    elif span == SummaryRange.month:
        start = _shift_months(end, -1)
    elif span == SummaryRange.year:
        start = _shift_months(end, -12)
    else:
        raise ValueError(f"unhandled range {span!r}")

    return TimeWindow(start=start, end=end, label=span.value)
