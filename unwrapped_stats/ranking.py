"""Ranking of aggregates and assembly of the StatsResult"""
from datetime import datetime
from typing import Dict, List, Optional

from unwrapped_stats.models.events import AggregateTotals, EntityAggregate
from unwrapped_stats.models.stats import RankedEntity, StatsResult

MS_PER_MINUTE = 60000
MS_PER_HOUR = 3600000

class StatsRanker:
    """Turns running totals into sorted top lists and headline numbers"""

    def rank(self, aggregates: Dict[str, EntityAggregate]) -> List[RankedEntity]:
        """
        Sort by descending play count.

        sorted() is stable, so entities with equal counts keep the order in
        which they were first seen.
        """
        ordered = sorted(aggregates.values(), key=lambda a: a.play_count, reverse=True)
        return [
            RankedEntity(
                key=a.key,
                display_name=a.display_name,
                artist_name=a.artist_name,
                playtime_ms=a.playtime_ms,
                play_count=a.play_count,
                playtime_minutes=a.playtime_ms // MS_PER_MINUTE,
                uri=a.uri,
            )
            for a in ordered
        ]

    def build_result(self, totals: AggregateTotals, now: Optional[datetime] = None) -> StatsResult:
        """Assemble the immutable snapshot for one aggregation pass"""
        now = now or datetime.now()
        return StatsResult(
            year=now.year,
            total_streams=totals.total_streams,
            unique_songs=len(totals.songs),
            unique_artists=len(totals.artists),
            unique_albums=len(totals.albums),
            total_playtime_ms=totals.total_playtime_ms,
            total_minutes=totals.total_playtime_ms // MS_PER_MINUTE,
            total_hours=totals.total_playtime_ms // MS_PER_HOUR,
            top_artists=self.rank(totals.artists),
            top_songs=self.rank(totals.songs),
            top_albums=self.rank(totals.albums),
        )
