"""Per-artist, per-song and per-album accumulation of plays"""
from typing import Dict, Iterable, Optional

from unwrapped_stats.models.events import AggregateTotals, EntityAggregate, NormalizedEvent

def song_key(track_name: str, artist_name: str) -> str:
    return f"{track_name} - {artist_name}"

def album_key(album_name: str, artist_name: str) -> str:
    return f"{album_name} - {artist_name}"

def _entry(table: Dict[str, EntityAggregate], key: str, display_name: str,
           artist_name: Optional[str] = None) -> EntityAggregate:
    aggregate = table.get(key)
    if aggregate is None:
        aggregate = EntityAggregate(key=key, display_name=display_name, artist_name=artist_name)
        table[key] = aggregate
    return aggregate

def aggregate(events: Iterable[NormalizedEvent]) -> AggregateTotals:
    """Fold events into running totals in one pass"""
    artists: Dict[str, EntityAggregate] = {}
    songs: Dict[str, EntityAggregate] = {}
    albums: Dict[str, EntityAggregate] = {}
    total_playtime_ms = 0
    total_streams = 0

    for event in events:
        total_playtime_ms += event.played_ms
        total_streams += 1

        artist = event.artist_name
        _entry(artists, artist, artist).add(event.played_ms, event.artist_uri)
        _entry(songs, song_key(event.track_name, artist), event.track_name, artist).add(
            event.played_ms, event.track_uri)
        _entry(albums, album_key(event.album_name, artist), event.album_name, artist).add(
            event.played_ms, event.album_uri)

    return AggregateTotals(
        artists=artists,
        songs=songs,
        albums=albums,
        total_playtime_ms=total_playtime_ms,
        total_streams=total_streams,
    )
