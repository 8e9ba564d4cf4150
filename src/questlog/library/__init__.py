"""Game library and the XP earned by changing it."""

from questlog.library.store import GameLibrary, LibraryStats, is_unreleased, new_game_id

__all__ = ["GameLibrary", "LibraryStats", "is_unreleased", "new_game_id"]
