"""Tests for utils/formatting.py and utils/json_encoder.py"""
import json
from datetime import date, datetime

from unwrapped_stats.utils.formatting import format_date_european, format_time, spotify_url
from unwrapped_stats.utils.json_encoder import json_dumps


def test_format_time():
    assert format_time(0) == "0h 0m"
    assert format_time(5400000) == "1h 30m"
    assert format_time(59999) == "0h 0m"


def test_format_date_european():
    assert format_date_european(date(2024, 3, 9)) == "09/03/2024"
    assert format_date_european(datetime(2024, 12, 31, 23, 59, 59)) == "31/12/2024"
    assert format_date_european(None) == ""


def test_spotify_url():
    assert spotify_url("spotify:track:4uLU6hMCjMI75M1A2tKUQC") == "https://open.spotify.com/track/4uLU6hMCjMI75M1A2tKUQC"
    assert spotify_url("spotify:artist:X") == "https://open.spotify.com/artist/X"
    assert spotify_url("not-a-uri") is None
    assert spotify_url(None) is None


def test_json_dumps_handles_dates():
    encoded = json_dumps({"start": datetime(2024, 3, 1), "day": date(2024, 3, 2)})
    assert json.loads(encoded) == {"start": "2024-03-01T00:00:00", "day": "2024-03-02"}
