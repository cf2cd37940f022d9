"""Main stats computation and re-filtering logic for listening history"""
import logging
from datetime import date, datetime
from typing import Any, Optional, Sequence, Union

from unwrapped_stats.aggregator import aggregate
from unwrapped_stats.config import Settings
from unwrapped_stats.date_filter import ALL_TIME, DateRange, custom_range, filter_events, resolve_preset
from unwrapped_stats.errors import FilterUnavailableError, StatsError
from unwrapped_stats.ingest import ProgressCallback, detect_format, read_batch
from unwrapped_stats.models.stats import StatsResult
from unwrapped_stats.normalizer import normalize_events
from unwrapped_stats.ranking import StatsRanker
from unwrapped_stats.session import SessionStore, StatsSession

logger = logging.getLogger(__name__)

class StatsEngine:
    """Loads upload batches into sessions and recomputes them for date windows"""

    def __init__(self, settings: Settings, store: Optional[SessionStore] = None):
        """Initialize engine with settings"""
        self.settings = settings
        self.ranker = StatsRanker()
        self.store = store or SessionStore()

    def compute(self, events, date_range: DateRange = ALL_TIME,
                now: Optional[datetime] = None) -> StatsResult:
        """Filter, aggregate and rank `events` for one window"""
        in_scope = filter_events(events, date_range.start, date_range.end)
        totals = aggregate(in_scope)
        return self.ranker.build_result(totals, now=now)

    def build_session(self, payloads: Sequence[Any], batch_id: int = 0,
                      now: Optional[datetime] = None) -> StatsSession:
        """Turn parsed payloads into a fresh, unfiltered session"""
        detected = detect_format(payloads)
        if not detected.is_raw:
            logger.info("Using processed stats as-is; date filtering disabled")
            return StatsSession(result=detected.aggregated, batch_id=batch_id)

        events = normalize_events(detected.raw_events)
        result = self.compute(events, now=now)
        logger.info(
            f"Computed stats: {result.total_streams} streams, {result.unique_artists} artists, "
            f"{result.unique_songs} songs, {result.unique_albums} albums"
        )
        return StatsSession(result=result, retained_events=events, batch_id=batch_id)

    def load_files(self, paths: Sequence[str],
                   on_progress: Optional[ProgressCallback] = None,
                   now: Optional[datetime] = None) -> StatsSession:
        """
        Read a batch of files and commit its session.

        Raises a StatsError subclass when any file fails; nothing is
        committed in that case and the previous session stays current. A
        batch overtaken by a newer one is computed but not committed.
        """
        batch_id = self.store.begin_batch()
        logger.info(f"Loading batch {batch_id} with {len(paths)} file(s)...")
        try:
            payloads = read_batch(paths, workers=self.settings.READ_WORKERS, on_progress=on_progress)
            session = self.build_session(payloads, batch_id=batch_id, now=now)
        except StatsError as e:
            logger.error(f"Batch {batch_id} failed: {e}")
            raise

        self.store.commit(session)
        return session

    def apply_date_range(self, session: StatsSession, date_range: DateRange,
                         now: Optional[datetime] = None) -> StatsSession:
        """Recompute `session` from its retained events for `date_range`"""
        if not session.supports_filtering:
            raise FilterUnavailableError()

        result = self.compute(session.retained_events, date_range, now=now)
        logger.info(f"Applied date range {date_range.start} .. {date_range.end}: {result.total_streams} streams")
        filtered = StatsSession(
            result=result,
            retained_events=session.retained_events,
            date_range=date_range,
            batch_id=session.batch_id,
        )
        self.store.commit(filtered)
        return filtered

    def apply_preset(self, session: StatsSession, name: str,
                     now: Optional[datetime] = None) -> StatsSession:
        """Apply a named preset; an unknown name leaves `session` unchanged"""
        date_range = resolve_preset(name, now=now)
        if date_range is None:
            return session
        return self.apply_date_range(session, date_range, now=now)

    def apply_custom_range(self, session: StatsSession,
                           start_date: Optional[Union[date, str]],
                           end_date: Optional[Union[date, str]],
                           now: Optional[datetime] = None) -> StatsSession:
        """Apply a validated calendar range; RangeError leaves `session` current"""
        date_range = custom_range(start_date, end_date)
        return self.apply_date_range(session, date_range, now=now)

    def apply_configured_filter(self, session: StatsSession,
                                now: Optional[datetime] = None) -> StatsSession:
        """Apply DATE_START/DATE_END, else DATE_PRESET, from settings"""
        if self.settings.DATE_START or self.settings.DATE_END:
            return self.apply_custom_range(session, self.settings.DATE_START, self.settings.DATE_END, now=now)
        if self.settings.DATE_PRESET:
            return self.apply_preset(session, self.settings.DATE_PRESET, now=now)
        return session
