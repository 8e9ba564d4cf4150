"""RAWG catalog integration."""

from questlog.rawg.client import CatalogGame, RawgAPIError, RawgClient

__all__ = ["CatalogGame", "RawgAPIError", "RawgClient"]
