"""Tests for the StatsResult and RankedEntity models"""
import pytest
from pydantic import ValidationError

from unwrapped_stats.models.stats import RankedEntity, StatsResult


def test_legacy_snake_case_rows_validate():
    row = RankedEntity.model_validate({
        "name": "Song - Band",
        "track_name": "Song",
        "artist_name": "Band",
        "playtime_ms": 190000,
        "play_count": 3,
        "spotify_uri": "spotify:track:1",
    })
    assert row.key == "Song - Band"
    assert row.display_name == "Song"
    assert row.uri == "spotify:track:1"
    assert row.playtime_minutes == 3


def test_display_name_defaults_to_key():
    assert RankedEntity.model_validate({"name": "Band"}).display_name == "Band"


def test_camel_case_result_validates():
    result = StatsResult.model_validate({
        "year": 2023,
        "totalStreams": 10,
        "topArtists": [{"key": "X", "playCount": 10}],
        "topSongs": [],
        "topAlbums": [],
    })
    assert result.total_streams == 10
    assert result.top_artists[0].play_count == 10


def test_result_is_frozen():
    result = StatsResult(year=2024)
    with pytest.raises(ValidationError):
        result.total_streams = 5


def test_truncated_keeps_totals():
    rows = [RankedEntity(key=str(i), play_count=1) for i in range(5)]
    result = StatsResult(total_streams=5, top_artists=rows, top_songs=rows, top_albums=rows)
    cut = result.truncated(2)
    assert len(cut.top_artists) == len(cut.top_songs) == len(cut.top_albums) == 2
    assert cut.total_streams == 5
    assert result.truncated(None) is result


def test_top_lists_cannot_be_appended_to():
    result = StatsResult(top_artists=[RankedEntity(key="X", play_count=1)])
    assert isinstance(result.top_artists, tuple)
    with pytest.raises(AttributeError):
        result.top_artists.append(RankedEntity(key="Y", play_count=1))
