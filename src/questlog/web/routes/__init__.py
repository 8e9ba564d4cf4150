"""Route handlers for the JSON API."""

from questlog.web.routes import achievements, daily, library, profile, shop

__all__ = ["achievements", "daily", "library", "profile", "shop"]
