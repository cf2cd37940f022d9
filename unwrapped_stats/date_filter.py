"""Date window filtering, named presets and custom range validation"""
import logging
from dataclasses import dataclass
from datetime import date, datetime, time, timedelta
from typing import Optional, Sequence, Union

from unwrapped_stats.errors import RangeError
from unwrapped_stats.models.events import NormalizedEvent
from unwrapped_stats.normalizer import to_epoch_ms

logger = logging.getLogger(__name__)

PRESETS = (
    'today',
    'yesterday',
    'last7days',
    'last30days',
    'thisMonth',
    'lastMonth',
    'thisYear',
    'lastYear',
    'allTime',
)

END_OF_DAY = time(23, 59, 59)

@dataclass(frozen=True)
class DateRange:
    """Inclusive window; a None bound is open"""
    start: Optional[datetime] = None
    end: Optional[datetime] = None

    @property
    def is_bounded(self) -> bool:
        return self.start is not None or self.end is not None

ALL_TIME = DateRange()

def filter_events(events: Sequence[NormalizedEvent],
                  start: Optional[datetime] = None,
                  end: Optional[datetime] = None) -> Sequence[NormalizedEvent]:
    """
    Keep events with start <= timestamp <= end.

    With no bounds the input is returned as is, so records with broken
    timestamps survive. With any bound, such records are dropped.
    """
    if start is None and end is None:
        return events

    start_ms = to_epoch_ms(start) if start is not None else None
    end_ms = to_epoch_ms(end) if end is not None else None

    kept = []
    for event in events:
        ts = event.timestamp_ms
        if ts is None:
            continue
        if start_ms is not None and ts < start_ms:
            continue
        if end_ms is not None and ts > end_ms:
            continue
        kept.append(event)
    return tuple(kept)

def _at(day: date, moment: time, now: datetime) -> datetime:
    return datetime.combine(day, moment, tzinfo=now.tzinfo)

def resolve_preset(name: str, now: Optional[datetime] = None) -> Optional[DateRange]:
    """
    Turn a preset name into a DateRange relative to `now` (local calendar).

    Unknown names return None so the caller keeps its current window.
    """
    now = now or datetime.now()
    today = now.date()

    if name == 'today':
        return DateRange(_at(today, time.min, now), _at(today, END_OF_DAY, now))
    if name == 'yesterday':
        yesterday = today - timedelta(days=1)
        return DateRange(_at(yesterday, time.min, now), _at(yesterday, END_OF_DAY, now))
    if name == 'last7days':
        return DateRange(_at(today - timedelta(days=7), time.min, now), now)
    if name == 'last30days':
        return DateRange(_at(today - timedelta(days=30), time.min, now), now)
    if name == 'thisMonth':
        return DateRange(_at(today.replace(day=1), time.min, now), now)
    if name == 'lastMonth':
        last_day_prev = today.replace(day=1) - timedelta(days=1)
        return DateRange(_at(last_day_prev.replace(day=1), time.min, now), _at(last_day_prev, END_OF_DAY, now))
    if name == 'thisYear':
        return DateRange(_at(date(today.year, 1, 1), time.min, now), now)
    if name == 'lastYear':
        return DateRange(
            _at(date(today.year - 1, 1, 1), time.min, now),
            _at(date(today.year - 1, 12, 31), END_OF_DAY, now),
        )
    if name == 'allTime':
        return ALL_TIME

    logger.warning(f"Unknown date preset '{name}' ignored. Known presets: {', '.join(PRESETS)}")
    return None

def _as_date(value: Union[date, str]) -> date:
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    try:
        return date.fromisoformat(str(value).strip())
    except ValueError:
        raise RangeError(f"Invalid date: {value}")

def custom_range(start_date: Optional[Union[date, str]],
                 end_date: Optional[Union[date, str]]) -> DateRange:
    """Validate two calendar dates into a window covering both days entirely"""
    if not start_date or not end_date:
        raise RangeError("Please select both start and end dates")

    start = datetime.combine(_as_date(start_date), time.min)
    end = datetime.combine(_as_date(end_date), END_OF_DAY)
    if start > end:
        raise RangeError("Start date must be before end date")
    return DateRange(start, end)
