"""
Achievement catalog.

Each entry pairs display data with one predicate over a LibrarySnapshot. The
catalog is configuration: correct a threshold here, not in the engine. Bump
CATALOG_VERSION whenever an id is renamed or removed, and record the rename
in LEGACY_ACHIEVEMENT_ALIASES so stored unlocks follow it.
"""

from datetime import timedelta

from questlog.gamification.snapshot import LibrarySnapshot
from questlog.models import AchievementDefinition, Genre, Platform, Tier

CATALOG_VERSION = 3

# Old id -> canonical id
LEGACY_ACHIEVEMENT_ALIASES = {
    "epic_hero": "level_20",
    "show_off": "download_card",
}

ALL_ECOSYSTEMS = frozenset(Platform) - {Platform.OTHER}


def _a(id, title, description, tier, predicate, icon="Trophy", secret=False):
    return AchievementDefinition(
        id=id,
        title=title,
        description=description,
        tier=tier,
        icon=icon,
        secret=secret,
        predicate=predicate,
    )


B, SV, G, P = Tier.BRONZE, Tier.SILVER, Tier.GOLD, Tier.PLATINUM

ACHIEVEMENTS: tuple[AchievementDefinition, ...] = (
    # Library size
    _a("add_1", "Quest Beginner", "Add your first game to the library.", B,
       lambda s: len(s.games) >= 1, icon="Plus"),
    _a("add_3", "Library Builder", "Add 3 games to your collection.", B,
       lambda s: len(s.games) >= 3, icon="Library"),
    _a("add_10_total", "Growing Collection", "Amass a collection of 10 games.", SV,
       lambda s: len(s.games) >= 10, icon="Library"),
    _a("add_25_total", "Dedicated Collector", "Amass a collection of 25 games.", SV,
       lambda s: len(s.games) >= 25, icon="Library"),
    _a("add_50_total", "The Collector", "Amass a collection of 50 games.", G,
       lambda s: len(s.games) >= 50, icon="Library"),
    _a("library_100", "Library of Alexandria", "Own 100 games.", G,
       lambda s: len(s.games) >= 100, icon="Library"),
    _a("add_10_backlog", "Backlog Warrior", "Have 10 games in your backlog.", SV,
       lambda s: len(s.backlog) >= 10, icon="Layers"),
    _a("add_25_backlog", "Digital Hoarder", "Have 25 games in your backlog.", G,
       lambda s: len(s.backlog) >= 25, icon="Layers"),

    # Completions
    _a("complete_1", "First Blood", "Complete your first game.", B,
       lambda s: len(s.completed) >= 1),
    _a("complete_5", "High Five", "Complete 5 games.", B,
       lambda s: len(s.completed) >= 5),
    _a("complete_10", "On a Roll", "Complete 10 games.", SV,
       lambda s: len(s.completed) >= 10),
    _a("complete_20", "Veteran Gamer", "Complete 20 games.", SV,
       lambda s: len(s.completed) >= 20, icon="Crown"),
    _a("completionist_50", "The Completionist", "Complete 50 games.", G,
       lambda s: len(s.completed) >= 50),

    # Dropping games
    _a("drop_1", "Quitter", "Drop a game. Sometimes it is for the best.", B,
       lambda s: len(s.dropped) >= 1, icon="Ban"),
    _a("drop_5", "Decisive", "Drop 5 games. You know what you like.", SV,
       lambda s: len(s.dropped) >= 5, icon="Ban"),

    # Playing habits
    _a("start_playing", "Press Start", 'Set a game to "Playing" status.', B,
       lambda s: len(s.playing) >= 1, icon="Gamepad2"),
    _a("playing_5_concurrent", "Indecisive", 'Have 5 games in "Playing" status at once.', B,
       lambda s: len(s.playing) >= 5, icon="Shuffle"),
    _a("playing_1_only", "Laser Focus",
       "Have exactly 1 playing game while backlog is not empty.", SV,
       lambda s: len(s.playing) == 1 and len(s.backlog) > 0, icon="Focus"),
    _a("weekend_warrior", "Weekend Warrior", "Complete a game on a Saturday or Sunday.", SV,
       lambda s: s.completed_on_weekend(), icon="Calendar"),
    _a("pile_of_shame", "Pile of Shame", "Have more games in Backlog than Completed.", B,
       lambda s: len(s.backlog) > len(s.completed) > 0, icon="Layers"),
    _a("jack_of_all_trades", "Jack of All Trades",
       "Have at least one game in Playing, Completed, Dropped, and Backlog.", SV,
       lambda s: all((s.playing, s.completed, s.dropped, s.backlog)), icon="Palette"),

    # Diversity
    _a("platforms_3", "Platform Hopper", "Own games on 3 different platforms.", B,
       lambda s: len(s.ecosystems) >= 3, icon="Gamepad2"),
    _a("full_house", "Full House",
       "Own a game on PC, PlayStation, Xbox, Nintendo, and Mobile.", G,
       lambda s: s.ecosystems >= ALL_ECOSYSTEMS, icon="Server"),
    _a("genres_5", "Genre Explorer", "Have games from 5 different genres.", SV,
       lambda s: len(s.genres) >= 5, icon="Map"),

    # Ratings
    _a("first_review", "The Reviewer", "Rate a game for the first time.", B,
       lambda s: len(s.rated) >= 1, icon="Star"),
    _a("rate_5_stars", "Critic's Choice", "Rate a game 5 stars.", B,
       lambda s: any(g.rating == 5 for g in s.games), icon="Star"),
    _a("rate_1_star", "Harsh Critic", "Rate a game 1 star.", B,
       lambda s: any(g.rating == 1 for g in s.games), icon="ThumbsDown"),
    _a("rate_10_total", "Opinionated", "Rate 10 games.", SV,
       lambda s: len(s.rated) >= 10, icon="Star"),
    _a("critics_darling", "Critic's Darling", "Rate 5 games with 5 stars.", SV,
       lambda s: sum(1 for g in s.games if g.rating == 5) >= 5, icon="Heart"),
    _a("the_critic", "The Critic", "Rate all completed games (min 5).", SV,
       lambda s: len(s.completed) >= 5 and all(g.rating > 0 for g in s.completed),
       icon="MessagesSquare"),

    # Quest giver
    _a("quest_1", "Quest Accepted", "Use the Quest Giver once.", B,
       lambda s: s.counters.quest_usage >= 1, icon="Dices"),
    _a("quest_5", "Feeling Lucky", "Use the Quest Giver 5 times.", B,
       lambda s: s.counters.quest_usage >= 5, icon="Dices"),
    _a("quest_10", "Destiny Awaits", "Use the Quest Giver 10 times.", SV,
       lambda s: s.counters.quest_usage >= 10, icon="Sparkles"),

    # Login streaks
    _a("streak_3", "Warming Up", "Open the app 3 days in a row.", B,
       lambda s: s.best_streak >= 3, icon="Flame"),
    _a("streak_7", "On Fire", "Open the app 7 days in a row.", SV,
       lambda s: s.best_streak >= 7, icon="Flame"),
    _a("streak_30", "Unstoppable", "Open the app 30 days in a row.", G,
       lambda s: s.best_streak >= 30, icon="Flame"),

    # Completion rate
    _a("rate_100_percent", "Perfectionist", "Reach 100% completion rate (min 5 games).", G,
       lambda s: len(s.games) >= 5 and len(s.completed) == len(s.games), icon="PieChart"),

    # App usage
    _a("safety_first", "Safety First", "Export your data backup.", B,
       lambda s: s.counters.exported, icon="Server"),
    _a("download_card", "Digital Souvenir", "Download your Gamer Card.", B,
       lambda s: s.counters.card_downloaded, icon="Download"),

    # Genre specialists
    _a("genre_indie_2", "Hidden Gems", "Own 2 Indie games.", B,
       lambda s: s.count_owned(Genre.INDIE) >= 2, icon="Palette"),
    _a("genre_indie_5", "Indie Darling", "Own 5 Indie games.", SV,
       lambda s: s.count_owned(Genre.INDIE) >= 5, icon="Palette"),
    _a("genre_rpg_2", "Start of a Journey", "Complete 2 RPGs.", B,
       lambda s: s.count_completed(Genre.RPG) >= 2, icon="Map"),
    _a("genre_rpg_3", "RPG Legend", "Complete 3 RPGs.", G,
       lambda s: s.count_completed(Genre.RPG) >= 3, icon="Map"),
    _a("strategy_master", "Master Strategist", "Complete 3 Strategy games.", SV,
       lambda s: s.count_completed(Genre.STRATEGY) >= 3, icon="Swords"),
    _a("adventure_time", "Adventure Time", "Complete 3 Adventure games.", SV,
       lambda s: s.count_completed(Genre.ADVENTURE) >= 3, icon="Compass"),
    _a("genre_action_2", "Double Tap", "Own 2 Action or Shooter games.", B,
       lambda s: s.count_owned(Genre.ACTION, Genre.SHOOTER) >= 2, icon="Zap"),
    _a("genre_action_5", "Adrenalin Junkie", "Own 5 Action or Shooter games.", SV,
       lambda s: s.count_owned(Genre.ACTION, Genre.SHOOTER) >= 5, icon="Zap"),

    # Levels
    _a("level_5", "Rising Star", "Reach User Level 5.", B,
       lambda s: s.level >= 5, icon="Sparkles"),
    _a("level_10", "Seasoned Pro", "Reach User Level 10.", SV,
       lambda s: s.level >= 10, icon="Star"),
    _a("level_20", "Epic Hero", "Reach User Level 20.", P,
       lambda s: s.level >= 20, icon="Crown"),
    _a("level_50", "Living Legend", "Reach User Level 50.", P,
       lambda s: s.level >= 50, icon="Zap"),
    _a("level_100", "Ascended", "Reach User Level 100.", P,
       lambda s: s.level >= 100, icon="Sun", secret=True),

    # Special
    _a("marathon", "Marathon", "Complete a game with over 100 hours of playtime.", G,
       lambda s: any(g.playtime_hours >= 100 for g in s.completed), icon="Hourglass"),
    _a("quick_fix", "Quick Fix", "Complete a game with under 2 hours of playtime.", B,
       lambda s: any(0 < g.playtime_hours < 2 for g in s.completed), icon="Zap"),
    _a("century_club", "Century Club", "Reach 1000 hours of total playtime.", P,
       lambda s: s.total_playtime_hours >= 1000, icon="Clock", secret=True),
    _a("empty_plate", "Empty Plate", "Have 0 games in your backlog (min. 5 total games).", P,
       lambda s: len(s.games) >= 5 and not s.backlog, icon="CheckCircle2", secret=True),
    _a("slow_burn", "Slow Burn", "Complete a game more than 1 year after starting it.", G,
       lambda s: s.any_completed_within(more_than=timedelta(days=365)), icon="Timer"),
    _a("old_school", "Blast from the Past", "Own a game released before 2000.", B,
       lambda s: s.owns_release_before(2000), icon="Rewind"),
    _a("future_proof", "Future Proof", "Own a game with a release date in the future.", B,
       lambda s: s.owns_unreleased(), icon="FastForward"),
    _a("patient_gamer", "Patient Gamer", "Complete a game released over 5 years ago.", SV,
       lambda s: s.completed_long_after_release(timedelta(days=5 * 365)), icon="Hourglass"),
    _a("speedrunner", "Speedrunner", "Complete a game within 48 hours of starting.", SV,
       lambda s: s.any_completed_within(less_than=timedelta(hours=48)), icon="Timer"),
    _a("monthly_binge", "Monthly Binge", "Complete 3 games in a single month.", SV,
       lambda s: s.max_completions_in_a_month() >= 3, icon="CalendarDays"),
    _a("quality_control", "Quality Control", "Drop a game you rated 1 star.", B,
       lambda s: any(g.rating == 1 for g in s.dropped), icon="Trash2"),
    _a("year_of_gaming", "Year of Gaming", "Complete 12 games in the last 365 days.", P,
       lambda s: s.completions_since(s.now - timedelta(days=365)) >= 12, icon="Trophy"),
)

ACHIEVEMENTS_BY_ID = {a.id: a for a in ACHIEVEMENTS}


def get_achievement(achievement_id: str) -> AchievementDefinition | None:
    return ACHIEVEMENTS_BY_ID.get(achievement_id)


def evaluate(definition: AchievementDefinition, snapshot: LibrarySnapshot) -> bool:
    return bool(definition.predicate(snapshot))
