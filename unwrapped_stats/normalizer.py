"""Normalization of raw streaming history records from any export variant"""
import logging
from datetime import datetime, timedelta, timezone
from typing import Any, Dict, Optional, Tuple

from unwrapped_stats.models.events import NormalizedEvent

logger = logging.getLogger(__name__)

# Field aliases in priority order. The first alias with a non-empty value wins.
FIELD_ALIASES: Dict[str, Tuple[str, ...]] = {
    'timestamp': ('ts', 'endTime', 'timestamp'),
    'artist_name': ('master_metadata_album_artist_name', 'artistName'),
    'track_name': ('master_metadata_track_name', 'trackName'),
    'album_name': ('master_metadata_album_album_name', 'albumName'),
    'played_ms': ('ms_played', 'msPlayed'),
    'track_uri': ('spotify_track_uri', 'track_uri'),
    'artist_uri': ('spotify_artist_uri', 'artist_uri'),
    'album_uri': ('spotify_album_uri', 'album_uri'),
}

UNKNOWN_ARTIST = 'Unknown Artist'
UNKNOWN_TRACK = 'Unknown Track'
UNKNOWN_ALBUM = 'Unknown Album'

# Layouts tried after ISO-8601 fails
_FALLBACK_FORMATS = (
    '%Y-%m-%d %H:%M',
    '%Y/%m/%d %H:%M:%S',
    '%Y/%m/%d',
    '%d/%m/%Y %H:%M',
)

_EPOCH = datetime(1970, 1, 1, tzinfo=timezone.utc)

def resolve_field(raw: Dict[str, Any], field: str) -> Any:
    """Return the value of the first alias of `field` present in `raw`, else None"""
    for alias in FIELD_ALIASES[field]:
        value = raw.get(alias)
        if value is not None and value != '':
            return value
    return None

def to_epoch_ms(dt: datetime) -> int:
    """Milliseconds since the epoch. Naive datetimes are read as local time."""
    if dt.tzinfo is None or dt.tzinfo.utcoffset(dt) is None:
        dt = dt.astimezone()
    return (dt - _EPOCH) // timedelta(milliseconds=1)

def parse_timestamp(value: Any) -> Optional[int]:
    """Parse an export timestamp into epoch milliseconds, None if unparseable"""
    if value is None or isinstance(value, bool):
        return None
    if isinstance(value, (int, float)):
        try:
            return int(value)
        except (ValueError, OverflowError):
            return None
    if isinstance(value, datetime):
        return to_epoch_ms(value)
    if not isinstance(value, str):
        return None

    text = value.strip()
    if not text:
        return None
    try:
        return to_epoch_ms(datetime.fromisoformat(text.replace('Z', '+00:00')))
    except ValueError:
        pass
    for fmt in _FALLBACK_FORMATS:
        try:
            return to_epoch_ms(datetime.strptime(text, fmt))
        except ValueError:
            continue
    return None

def _played_ms(value: Any) -> int:
    if value is None or isinstance(value, bool):
        return 0
    try:
        return max(0, int(value))
    except (ValueError, TypeError, OverflowError):
        logger.debug(f"Treating unreadable ms_played value {value!r} as 0")
        return 0

def _text(value: Any, default: str) -> str:
    return str(value) if value is not None else default

def _optional_text(value: Any) -> Optional[str]:
    return str(value) if value is not None else None

def normalize_event(raw: Dict[str, Any]) -> NormalizedEvent:
    """
    Map one raw record onto NormalizedEvent.

    Never rejects a record: missing names fall back to the Unknown defaults
    and an unparseable timestamp is kept as None for the date filter to judge.
    """
    return NormalizedEvent(
        timestamp_ms=parse_timestamp(resolve_field(raw, 'timestamp')),
        artist_name=_text(resolve_field(raw, 'artist_name'), UNKNOWN_ARTIST),
        track_name=_text(resolve_field(raw, 'track_name'), UNKNOWN_TRACK),
        album_name=_text(resolve_field(raw, 'album_name'), UNKNOWN_ALBUM),
        played_ms=_played_ms(resolve_field(raw, 'played_ms')),
        track_uri=_optional_text(resolve_field(raw, 'track_uri')),
        artist_uri=_optional_text(resolve_field(raw, 'artist_uri')),
        album_uri=_optional_text(resolve_field(raw, 'album_uri')),
    )

def normalize_events(raw_events) -> Tuple[NormalizedEvent, ...]:
    """Normalize a flattened sequence of raw records; non-object entries become empty records"""
    normalized = []
    skipped = 0
    for raw in raw_events:
        if not isinstance(raw, dict):
            skipped += 1
            raw = {}
        normalized.append(normalize_event(raw))
    if skipped:
        logger.warning(f"{skipped} non-object entries normalized as unknown plays")
    return tuple(normalized)
