"""RAWG video game database client.

To get a RAWG API key:
1. Go to https://rawg.io/apidocs
2. Sign up and request a key (free for personal use)

Set it as an environment variable:
    export RAWG_API_KEY="your_api_key"
"""

import logging
import os
from datetime import date

import httpx
from pydantic import BaseModel, Field, field_validator

from questlog.models import GameRecord, Platform, normalize_platform

logger = logging.getLogger(__name__)

RAWG_API_BASE = "https://api.rawg.io/api"


class RawgAPIError(Exception):
    """Error from RAWG API."""

    pass


class CatalogGame(BaseModel):
    """A game as described by the RAWG catalog."""

    id: str
    name: str
    released: date | None = None
    playtime: float = 0
    average_playtime: float = 0
    genres: list[str] = Field(default_factory=list)
    platforms: list[str] = Field(default_factory=list)
    background_image: str | None = None

    @field_validator("id", mode="before")
    @classmethod
    def coerce_id(cls, v):
        return str(v)

    @field_validator("released", mode="before")
    @classmethod
    def empty_release(cls, v):
        return v or None

    @field_validator("playtime", "average_playtime", mode="before")
    @classmethod
    def default_playtime(cls, v):
        return v or 0

    @field_validator("genres", mode="before")
    @classmethod
    def genre_names(cls, v):
        return [g["name"] if isinstance(g, dict) else g for g in v or []]

    @classmethod
    def from_api(cls, data: dict) -> "CatalogGame":
        # Prefer the coarse parent platforms ("PlayStation") over exact ones ("PlayStation 5")
        entries = data.get("parent_platforms") or data.get("platforms") or []
        platforms = [p["platform"]["name"] for p in entries if p.get("platform")]
        return cls(
            id=data["id"],
            name=data.get("name") or f"Unknown ({data['id']})",
            released=data.get("released"),
            playtime=data.get("playtime"),
            average_playtime=data.get("average_playtime"),
            genres=data.get("genres"),
            platforms=platforms,
            background_image=data.get("background_image"),
        )

    @property
    def ecosystem(self) -> Platform:
        """First recognised ecosystem, PC when nothing matches."""
        for name in self.platforms:
            platform = normalize_platform(name)
            if platform != Platform.OTHER:
                return platform
        return Platform.PC

    @property
    def platform(self) -> str:
        return self.ecosystem.label

    @property
    def best_playtime(self) -> float:
        return max(self.playtime, self.average_playtime)

    def to_record(self, platform: str | None = None) -> GameRecord:
        return GameRecord(
            id=self.id,
            title=self.name,
            platform=platform or self.platform,
            genres=self.genres,
            playtime_hours=self.best_playtime,
            release_date=self.released,
            background_image=self.background_image,
        )


class RawgClient:
    """Client for the RAWG REST API."""

    def __init__(self, api_key: str | None = None, http_client: httpx.Client | None = None):
        self.api_key = api_key or os.getenv("RAWG_API_KEY")
        self._http_client = http_client or httpx.Client(timeout=30.0)

        if not self.api_key:
            raise RawgAPIError(
                "RAWG API key not provided. Set RAWG_API_KEY environment variable "
                "or pass api_key parameter. Get your key at: https://rawg.io/apidocs"
            )

    def _get(self, path: str, **params) -> dict:
        try:
            response = self._http_client.get(
                f"{RAWG_API_BASE}{path}", params={"key": self.api_key, **params}
            )
            response.raise_for_status()
            return response.json()
        except httpx.HTTPStatusError as e:
            raise RawgAPIError(f"RAWG request failed with HTTP {e.response.status_code}") from e
        except httpx.HTTPError as e:
            raise RawgAPIError(f"RAWG request failed: {e}") from e

    def search_games(self, query: str, page_size: int = 10) -> list[CatalogGame]:
        """Search the catalog by title.

        Args:
            query: Free-text title search.
            page_size: Maximum number of results.

        Returns:
            Matching games, best match first.
        """
        if not query.strip():
            return []
        data = self._get("/games", search=query, page_size=page_size)
        results = [CatalogGame.from_api(item) for item in data.get("results", [])]
        logger.debug(f"RAWG search {query!r}: {len(results)} results")
        return results

    def get_game_details(self, game_id: str | int) -> CatalogGame:
        """Fetch one game's full record."""
        return CatalogGame.from_api(self._get(f"/games/{game_id}"))

    def close(self):
        """Close the HTTP client."""
        self._http_client.close()

    def __enter__(self):
        return self

    def __exit__(self, *args):
        self.close()
