"""Tests for aggregator.py"""
from unwrapped_stats.aggregator import aggregate, album_key, song_key
from unwrapped_stats.models.events import NormalizedEvent


def play(track="T", artist="A", album="Al", ms=1000, track_uri=None, artist_uri=None, album_uri=None, ts=0):
    return NormalizedEvent(
        timestamp_ms=ts,
        artist_name=artist,
        track_name=track,
        album_name=album,
        played_ms=ms,
        track_uri=track_uri,
        artist_uri=artist_uri,
        album_uri=album_uri,
    )


def test_totals_match_event_sums():
    events = [play(ms=1000), play(track="U", ms=2500), play(artist="B", ms=0), play(artist="C", ms=7)]
    totals = aggregate(events)
    assert totals.total_playtime_ms == sum(e.played_ms for e in events)
    assert totals.total_streams == len(events)
    assert sum(a.play_count for a in totals.artists.values()) == len(events)
    assert sum(s.play_count for s in totals.songs.values()) == len(events)
    assert sum(a.play_count for a in totals.albums.values()) == len(events)


def test_entity_keys():
    totals = aggregate([play(track="Song", artist="Band", album="Record")])
    assert list(totals.artists) == ["Band"]
    assert list(totals.songs) == [song_key("Song", "Band")] == ["Song - Band"]
    assert list(totals.albums) == [album_key("Record", "Band")] == ["Record - Band"]
    song = totals.songs["Song - Band"]
    assert song.display_name == "Song"
    assert song.artist_name == "Band"


def test_same_track_name_different_artists_are_separate_songs():
    totals = aggregate([play(track="Intro", artist="X"), play(track="Intro", artist="Y")])
    assert len(totals.songs) == 2
    assert len(totals.artists) == 2


def test_first_non_null_uri_wins():
    events = [
        play(artist_uri=None),
        play(artist_uri="spotify:artist:X"),
        play(artist_uri="spotify:artist:Y"),
    ]
    artist = aggregate(events).artists["A"]
    assert artist.uri == "spotify:artist:X"
    assert artist.play_count == 3


def test_uri_kinds_do_not_mix():
    totals = aggregate([play(track_uri="spotify:track:1", album_uri="spotify:album:2")])
    assert totals.artists["A"].uri is None
    assert totals.songs["T - A"].uri == "spotify:track:1"
    assert totals.albums["Al - A"].uri == "spotify:album:2"


def test_empty_input():
    totals = aggregate([])
    assert totals.total_playtime_ms == 0
    assert totals.total_streams == 0
    assert totals.artists == {}


def test_artist_rows_carry_no_artist_name():
    totals = aggregate([play()])
    assert totals.artists["A"].artist_name is None
    assert totals.songs[song_key("T", "A")].artist_name == "A"
