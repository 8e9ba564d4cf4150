"""Core data models for library entries."""

import re
from datetime import date, datetime
from enum import Enum

from pydantic import BaseModel, ConfigDict, Field, field_validator
from pydantic.alias_generators import to_camel


def _ensure_naive_datetime(dt: datetime) -> datetime:
    """Ensure datetime is naive local time (no timezone info)."""
    if dt.tzinfo is not None:
        # Convert to local time then strip timezone
        return dt.astimezone().replace(tzinfo=None)
    return dt


class CamelModel(BaseModel):
    """Base model persisted with camelCase keys (legacy storage layout)."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    def to_storage(self) -> dict:
        return self.model_dump(mode="json", by_alias=True)


class GameStatus(str, Enum):
    """Where a game sits in the user's library."""

    BACKLOG = "backlog"
    PLAYING = "playing"
    COMPLETED = "completed"
    DROPPED = "dropped"
    IGNORED = "ignored"


class Platform(str, Enum):
    """Ecosystem buckets that free-text platform names normalize into."""

    PC = "pc"
    PLAYSTATION = "playstation"
    XBOX = "xbox"
    NINTENDO = "nintendo"
    MOBILE = "mobile"
    OTHER = "other"

    @property
    def label(self) -> str:
        return _PLATFORM_LABELS[self]


_PLATFORM_LABELS = {
    Platform.PC: "PC",
    Platform.PLAYSTATION: "PlayStation",
    Platform.XBOX: "Xbox",
    Platform.NINTENDO: "Nintendo",
    Platform.MOBILE: "Mobile",
    Platform.OTHER: "Other",
}

# Checked in order; the first match wins. "ps" alone must be a whole word so
# that names like "Epson" or "Apps" do not count as PlayStation.
_PLATFORM_PATTERNS = [
    (Platform.PLAYSTATION, re.compile(r"playstation|\bps(\d|p|\s?vita)?\b")),
    (Platform.XBOX, re.compile(r"xbox")),
    (
        Platform.NINTENDO,
        re.compile(r"nintendo|switch|\bwii|game\s?boy|gamecube|\b[23]?ds\b|\bs?nes\b"),
    ),
    (Platform.MOBILE, re.compile(r"android|\bios\b|iphone|ipad|mobile")),
    (Platform.PC, re.compile(r"\bpc\b|windows|\bmac|linux|steam")),
]


def normalize_platform(text: str | None) -> Platform:
    """Map a free-text platform name to its ecosystem bucket."""
    if not text:
        return Platform.OTHER
    lowered = text.lower()
    for platform, pattern in _PLATFORM_PATTERNS:
        if pattern.search(lowered):
            return platform
    return Platform.OTHER


class Genre(str, Enum):
    """Closed set of genres (mirrors the RAWG genre list)."""

    ACTION = "action"
    ADVENTURE = "adventure"
    ARCADE = "arcade"
    BOARD_GAMES = "board_games"
    CARD = "card"
    CASUAL = "casual"
    EDUCATIONAL = "educational"
    FAMILY = "family"
    FIGHTING = "fighting"
    INDIE = "indie"
    MASSIVELY_MULTIPLAYER = "massively_multiplayer"
    PLATFORMER = "platformer"
    PUZZLE = "puzzle"
    RACING = "racing"
    RPG = "rpg"
    SHOOTER = "shooter"
    SIMULATION = "simulation"
    SPORTS = "sports"
    STRATEGY = "strategy"
    OTHER = "other"


_GENRE_PATTERNS = [
    (Genre.RPG, re.compile(r"\brpg\b|role[\s-]?playing")),
    (Genre.MASSIVELY_MULTIPLAYER, re.compile(r"massively|\bmmo")),
    (Genre.BOARD_GAMES, re.compile(r"\bboard")),
    (Genre.PLATFORMER, re.compile(r"platform")),
    (Genre.SHOOTER, re.compile(r"shoot|\bfps\b")),
    (Genre.ACTION, re.compile(r"\baction")),
    (Genre.ADVENTURE, re.compile(r"adventure")),
    (Genre.ARCADE, re.compile(r"arcade")),
    (Genre.CARD, re.compile(r"\bcard")),
    (Genre.CASUAL, re.compile(r"casual")),
    (Genre.EDUCATIONAL, re.compile(r"educat")),
    (Genre.FAMILY, re.compile(r"family")),
    (Genre.FIGHTING, re.compile(r"fight")),
    (Genre.INDIE, re.compile(r"\bindie")),
    (Genre.PUZZLE, re.compile(r"puzzle")),
    (Genre.RACING, re.compile(r"racing")),
    (Genre.SIMULATION, re.compile(r"simulat")),
    (Genre.SPORTS, re.compile(r"sport")),
    (Genre.STRATEGY, re.compile(r"strateg")),
]


def normalize_genre(text: str | None) -> Genre:
    """Map a free-text genre name to the closed genre set."""
    if not text:
        return Genre.OTHER
    lowered = text.lower()
    for genre, pattern in _GENRE_PATTERNS:
        if pattern.search(lowered):
            return genre
    return Genre.OTHER


class GameRecord(CamelModel):
    """A game in the user's library."""

    id: str = Field(description="Catalog provider id, or a locally generated one")
    title: str
    status: GameStatus = GameStatus.BACKLOG
    platform: str = "PC"  # free text, see normalize_platform
    genres: list[str] = Field(default_factory=list)
    rating: int = Field(default=0, ge=0, le=5)  # 0 = unrated
    playtime_hours: float = Field(default=0.0, ge=0, alias="playtime")
    added_at: datetime | None = None
    started_at: datetime | None = None
    completed_at: datetime | None = None
    release_date: date | None = Field(default=None, alias="released")
    background_image: str | None = None

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        validate_assignment=True,
    )

    @field_validator("id", mode="before")
    @classmethod
    def coerce_id(cls, v):
        # RAWG ids are integers
        if isinstance(v, int):
            return str(v)
        return v

    @field_validator("genres", mode="before")
    @classmethod
    def flatten_genres(cls, v):
        # Legacy records store RAWG genre objects: [{"id": 4, "name": "Action"}]
        if v is None:
            return []
        return [g.get("name", "") if isinstance(g, dict) else g for g in v]

    @field_validator("platform", mode="before")
    @classmethod
    def default_platform(cls, v):
        return v or "PC"

    @field_validator("rating", mode="before")
    @classmethod
    def default_rating(cls, v):
        return 0 if v is None else v

    @field_validator("playtime_hours", mode="before")
    @classmethod
    def default_playtime(cls, v):
        return 0.0 if v is None else v

    @field_validator("release_date", mode="before")
    @classmethod
    def parse_release_date(cls, v):
        if v in ("", None):
            return None
        if isinstance(v, datetime):
            return v.date()
        if isinstance(v, str) and "T" in v:
            return datetime.fromisoformat(v.replace("Z", "+00:00")).date()
        return v

    @field_validator("added_at", "started_at", "completed_at", mode="after")
    @classmethod
    def ensure_naive(cls, v: datetime | None) -> datetime | None:
        if v is None:
            return None
        return _ensure_naive_datetime(v)

    @property
    def ecosystem(self) -> Platform:
        return normalize_platform(self.platform)

    @property
    def genre_set(self) -> frozenset[Genre]:
        return frozenset(normalize_genre(g) for g in self.genres)

    def has_genre(self, *genres: Genre) -> bool:
        return not self.genre_set.isdisjoint(genres)
