"""Configuration for Questlog.

Runtime settings come from environment variables (optionally loaded from a
``.env`` file by the CLI):

    export QUESTLOG_DATA_DIR="~/.questlog"   # where state is stored
    export RAWG_API_KEY="your_rawg_key"      # https://rawg.io/apidocs

Everything else in this module is gamification tuning data.
"""

import os
from pathlib import Path

DEFAULT_DATA_DIR = Path.home() / ".questlog"


def get_data_dir() -> Path:
    """Resolve the data directory from QUESTLOG_DATA_DIR or the default."""
    configured = os.getenv("QUESTLOG_DATA_DIR")
    if configured:
        return Path(configured).expanduser()
    return DEFAULT_DATA_DIR


# =============================================================================
# XP rewards
# =============================================================================

XP_ADD_GAME = 10
XP_START_GAME = 50  # backlog -> playing
XP_COMPLETE_GAME = 200  # playing -> completed

# Level curve: level = floor((xp / BASE_XP) ** (1 / EXPONENT)) + 1
LEVEL_BASE_XP = 500
LEVEL_EXPONENT = 1.2

# Achievement tier -> score points
TIER_VALUES = {
    "bronze": 20,
    "silver": 50,
    "gold": 100,
    "platinum": 250,
}

# Seconds a "new unlock" notification stays queued
UNLOCK_NOTIFICATION_TTL = 5.0

# =============================================================================
# Daily login reward ladder
# =============================================================================

LOGIN_CYCLE_DAYS = 30
LOGIN_DAILY_COINS = 5
LOGIN_CYCLE_END_COINS = 100
LOGIN_MILESTONE_EVERY = 5
LOGIN_MILESTONE_XP_PER_DAY = 10  # day 5 -> 50 XP, day 25 -> 250 XP
