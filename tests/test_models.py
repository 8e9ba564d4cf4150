"""
Tests for record parsing and platform/genre normalization
"""

from datetime import date, datetime, timezone

import pytest

from questlog.models import GameRecord, GameStatus, Genre, Platform, normalize_genre, normalize_platform


@pytest.mark.parametrize(
    "text,expected",
    [
        ("PC", Platform.PC),
        ("Steam Deck", Platform.PC),
        ("Apple Macintosh", Platform.PC),
        ("Linux", Platform.PC),
        ("PlayStation 5", Platform.PLAYSTATION),
        ("PS4", Platform.PLAYSTATION),
        ("PSP", Platform.PLAYSTATION),
        ("PS Vita", Platform.PLAYSTATION),
        ("Xbox Series S/X", Platform.XBOX),
        ("Nintendo Switch", Platform.NINTENDO),
        ("Wii U", Platform.NINTENDO),
        ("Nintendo 3DS", Platform.NINTENDO),
        ("SNES", Platform.NINTENDO),
        ("Game Boy Advance", Platform.NINTENDO),
        ("iOS", Platform.MOBILE),
        ("Android", Platform.MOBILE),
        ("Epson", Platform.OTHER),
        ("Atari 2600", Platform.OTHER),
        ("", Platform.OTHER),
        (None, Platform.OTHER),
    ],
)
def test_normalize_platform(text, expected):
    assert normalize_platform(text) == expected


@pytest.mark.parametrize(
    "text,expected",
    [
        ("RPG", Genre.RPG),
        ("Role-playing", Genre.RPG),
        ("Massively Multiplayer", Genre.MASSIVELY_MULTIPLAYER),
        ("Platformer", Genre.PLATFORMER),
        ("Shooter", Genre.SHOOTER),
        ("Action", Genre.ACTION),
        ("Board Games", Genre.BOARD_GAMES),
        ("Indie", Genre.INDIE),
        ("Strategy", Genre.STRATEGY),
        ("Visual Novel", Genre.OTHER),
        (None, Genre.OTHER),
    ],
)
def test_normalize_genre(text, expected):
    assert normalize_genre(text) == expected


def test_legacy_record_parses():
    """A record in the old browser layout"""
    record = GameRecord.model_validate(
        {
            "id": 3498,
            "name": "ignored",
            "title": "Grand Theft Auto V",
            "status": "completed",
            "platform": "PlayStation 4",
            "genres": [{"id": 4, "name": "Action"}, {"id": 3, "name": "Adventure"}],
            "playtime": None,
            "released": "2013-09-17",
            "addedAt": "2024-01-05T10:00:00.000Z",
            "completedAt": "2024-02-01T18:30:00+00:00",
        }
    )

    assert record.id == "3498"
    assert record.status == GameStatus.COMPLETED
    assert record.genres == ["Action", "Adventure"]
    assert record.genre_set == {Genre.ACTION, Genre.ADVENTURE}
    assert record.playtime_hours == 0
    assert record.release_date == date(2013, 9, 17)
    assert record.added_at.tzinfo is None
    assert record.ecosystem == Platform.PLAYSTATION


def test_storage_uses_legacy_keys():
    record = GameRecord(
        id="1",
        title="Hades",
        playtime_hours=40,
        release_date=date(2020, 9, 17),
        added_at=datetime(2026, 1, 1, 9, 0, tzinfo=timezone.utc),
    )

    data = record.to_storage()

    assert data["playtime"] == 40
    assert data["released"] == "2020-09-17"
    assert "addedAt" in data
    assert "backgroundImage" in data


def test_empty_release_date():
    assert GameRecord(id="1", title="x", released="").release_date is None


def test_rating_bounds():
    with pytest.raises(ValueError):
        GameRecord(id="1", title="x", rating=6)
