"""Domain models for normalized listening events and running aggregates"""
from dataclasses import dataclass
from typing import Dict, Optional

@dataclass(frozen=True)
class NormalizedEvent:
    """One play in canonical form, whatever export variant it came from"""
    timestamp_ms: Optional[int]  # None when the raw timestamp did not parse
    artist_name: str
    track_name: str
    album_name: str
    played_ms: int
    track_uri: Optional[str] = None
    artist_uri: Optional[str] = None
    album_uri: Optional[str] = None

@dataclass
class EntityAggregate:
    """Running totals for one artist, song or album"""
    key: str
    display_name: str
    artist_name: Optional[str] = None
    playtime_ms: int = 0
    play_count: int = 0
    uri: Optional[str] = None

    def add(self, played_ms: int, uri: Optional[str]) -> None:
        """Fold one play in. The first non-null URI sticks."""
        self.playtime_ms += played_ms
        self.play_count += 1
        if uri and not self.uri:
            self.uri = uri

@dataclass
class AggregateTotals:
    """Output of one aggregation pass; maps keep first-seen order"""
    artists: Dict[str, EntityAggregate]
    songs: Dict[str, EntityAggregate]
    albums: Dict[str, EntityAggregate]
    total_playtime_ms: int
    total_streams: int
