"""Shared fixtures for the stats engine tests"""
import json
from datetime import datetime

import pytest

from unwrapped_stats.config import Settings
from unwrapped_stats.engine import StatsEngine

FIXED_NOW = datetime(2024, 7, 15, 14, 30, 0)


@pytest.fixture
def now():
    return FIXED_NOW


@pytest.fixture
def extended_events():
    """Two plays in the Extended Streaming History layout"""
    return [
        {
            "ts": "2024-01-01T00:00:00Z",
            "master_metadata_album_artist_name": "Art A",
            "master_metadata_track_name": "Song 1",
            "ms_played": 180000,
        },
        {
            "ts": "2024-06-01T00:00:00Z",
            "master_metadata_album_artist_name": "Art A",
            "master_metadata_track_name": "Song 2",
            "ms_played": 120000,
        },
    ]


@pytest.fixture
def account_data_events():
    """Plays in the older account-data StreamingHistory layout"""
    return [
        {"endTime": "2024-02-10 08:15", "artistName": "Band B", "trackName": "Tune", "msPlayed": 200000},
        {"endTime": "2024-02-11 21:40", "artistName": "Band B", "trackName": "Tune", "msPlayed": 150000},
    ]


@pytest.fixture
def settings():
    return Settings(READ_WORKERS=2, DATE_PRESET=None, DATE_START=None, DATE_END=None, TOP_LIMIT=None)


@pytest.fixture
def engine(settings):
    return StatsEngine(settings)


@pytest.fixture
def write_json(tmp_path):
    """Write a payload to tmp_path/<name> and return its path as a string"""
    def _write(name, payload):
        path = tmp_path / name
        path.write_text(json.dumps(payload), encoding="utf-8")
        return str(path)
    return _write
