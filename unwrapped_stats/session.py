"""Immutable stats session and the guarded slot holding the current one"""
import logging
import threading
from dataclasses import dataclass
from typing import Optional, Tuple

from unwrapped_stats.date_filter import ALL_TIME, DateRange
from unwrapped_stats.models.events import NormalizedEvent
from unwrapped_stats.models.stats import StatsResult

logger = logging.getLogger(__name__)

@dataclass(frozen=True)
class StatsSession:
    """
    What one upload batch produced.

    retained_events is None for processed stats input, which therefore
    cannot be re-filtered. Every filter change yields a new session built
    from the same retained events.
    """
    result: StatsResult
    retained_events: Optional[Tuple[NormalizedEvent, ...]] = None
    date_range: DateRange = ALL_TIME
    batch_id: int = 0

    @property
    def supports_filtering(self) -> bool:
        return self.retained_events is not None

class SessionStore:
    """Holds the latest committed session; stale batches are refused"""

    def __init__(self):
        self._lock = threading.Lock()
        self._latest_batch = 0
        self._current: Optional[StatsSession] = None

    @property
    def current(self) -> Optional[StatsSession]:
        return self._current

    def begin_batch(self) -> int:
        """Issue the generation token for a new upload batch"""
        with self._lock:
            self._latest_batch += 1
            return self._latest_batch

    def commit(self, session: StatsSession) -> bool:
        """
        Store `session` if its batch is still the newest one issued.

        Re-filtered sessions of the committed batch are accepted too, even
        while a newer batch is still loading. Returns False when the session
        was discarded.
        """
        with self._lock:
            current_batch = self._current.batch_id if self._current else None
            if session.batch_id not in (self._latest_batch, current_batch):
                logger.warning(
                    f"Discarding result of batch {session.batch_id}; batch {self._latest_batch} is newer"
                )
                return False
            self._current = session
            return True

    def reset(self) -> None:
        """Forget the current session and invalidate batches in flight"""
        with self._lock:
            self._latest_batch += 1
            self._current = None
