"""CLI interface for Questlog."""

import io
import json
import logging
from pathlib import Path

import typer
from dotenv import load_dotenv
from rich.console import Console
from rich.logging import RichHandler
from rich.panel import Panel
from rich.progress_bar import ProgressBar
from rich.table import Table

from questlog.context import QuestLog
from questlog.gamification.shop import SHOP_ITEMS
from questlog.library import new_game_id
from questlog.models import GameRecord, GameStatus, ShopItemType, Tier
from questlog.rawg import RawgAPIError, RawgClient

# Load .env file - try current directory, then home directory
load_dotenv(Path.cwd() / ".env")
load_dotenv(Path.home() / ".questlog" / ".env")

app = typer.Typer(
    name="questlog",
    help="Track your game backlog and level up while you clear it",
    no_args_is_help=True,
)
console = Console()

TIER_STYLES = {
    Tier.BRONZE: "dark_orange3",
    Tier.SILVER: "grey70",
    Tier.GOLD: "gold1",
    Tier.PLATINUM: "cyan",
}

STATUS_STYLES = {
    GameStatus.BACKLOG: "yellow",
    GameStatus.PLAYING: "blue",
    GameStatus.COMPLETED: "green",
    GameStatus.DROPPED: "red",
    GameStatus.IGNORED: "dim",
}


@app.callback()
def configure(
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Show debug logging"),
):
    """Set up logging for every command."""
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(message)s",
        handlers=[RichHandler(console=Console(stderr=True), show_path=False)],
        force=True,
    )


def _find_game(ql: QuestLog, query: str) -> GameRecord:
    game = ql.library.find(query)
    if game is None:
        console.print(f"[bold red]Error:[/bold red] No game matching '{query}' in your library.")
        raise typer.Exit(1)
    return game


def _rawg_client() -> RawgClient:
    try:
        return RawgClient()
    except RawgAPIError as e:
        console.print(f"[bold red]Error:[/bold red] {e}")
        raise typer.Exit(1)


def _announce(ql: QuestLog, level_before: int | None = None):
    """Print level-ups and fresh unlocks since the last command step."""
    if level_before is not None:
        level_now = ql.leveling.level
        if level_now > level_before:
            console.print(
                f"[bold magenta]Level up![/bold magenta] You reached level {level_now} "
                f"({ql.leveling.display_title()})."
            )
        elif level_now < level_before:
            console.print(f"[dim]Level dropped to {level_now}.[/dim]")

    for note in ql.achievements.pending_notifications():
        style = TIER_STYLES[note.tier]
        console.print(
            f"[bold {style}]Achievement unlocked:[/bold {style}] {note.title} "
            f"[dim]({note.tier.value}, claim with 'questlog claim {note.achievement_id}')[/dim]"
        )
        ql.achievements.dismiss(note.achievement_id)


# =============================================================================
# Library
# =============================================================================


@app.command()
def add(
    title: str = typer.Argument(..., help="Game title"),
    platform: str = typer.Option(None, "--platform", "-p", help="Where you own it, e.g. 'PS5'"),
    genre: list[str] = typer.Option(None, "--genre", "-g", help="Genre (repeatable)"),
    lookup: bool = typer.Option(
        False, "--lookup", "-l", help="Fill in details from RAWG (needs RAWG_API_KEY)"
    ),
):
    """Add a game to your backlog."""
    ql = QuestLog()

    if lookup:
        client = _rawg_client()
        try:
            matches = client.search_games(title, page_size=1)
        except RawgAPIError as e:
            console.print(f"[bold red]Error:[/bold red] {e}")
            raise typer.Exit(1)
        finally:
            client.close()
        if not matches:
            console.print(f"[yellow]No RAWG match for '{title}'.[/yellow]")
            raise typer.Exit(1)
        record = matches[0].to_record(platform)
        if genre:
            record.genres = genre
    else:
        record = GameRecord(
            id=new_game_id(),
            title=title,
            platform=platform or "PC",
            genres=genre or [],
        )

    level_before = ql.leveling.level
    if not ql.add_game(record):
        console.print(f"[yellow]{record.title} is already in your library.[/yellow]")
        raise typer.Exit(1)

    console.print(f"[bold green]Added[/bold green] {record.title} ({record.platform}) to your backlog. +10 XP")
    _announce(ql, level_before)


@app.command()
def remove(game: str = typer.Argument(..., help="Game id or title")):
    """Remove a game (and the XP it earned)."""
    ql = QuestLog()
    record = _find_game(ql, game)
    level_before = ql.leveling.level
    ql.remove_game(record.id)
    console.print(f"[green]Removed[/green] {record.title}.")
    _announce(ql, level_before)


@app.command()
def status(
    game: str = typer.Argument(..., help="Game id or title"),
    new_status: GameStatus = typer.Argument(..., help="New status"),
):
    """Move a game to another status."""
    ql = QuestLog()
    record = _find_game(ql, game)
    xp_before = ql.leveling.xp
    level_before = ql.leveling.level

    if not ql.set_status(record.id, new_status):
        console.print(f"[dim]{record.title} is already {new_status.value}.[/dim]")
        return

    delta = ql.leveling.xp - xp_before
    style = STATUS_STYLES[new_status]
    console.print(
        f"{record.title} is now [{style}]{new_status.value}[/{style}]"
        f"{f' ({delta:+d} XP)' if delta else ''}."
    )
    if new_status == GameStatus.COMPLETED:
        console.print("[bold green]Victory![/bold green]")
    _announce(ql, level_before)


@app.command()
def rate(
    game: str = typer.Argument(..., help="Game id or title"),
    rating: int = typer.Argument(..., min=0, max=5, help="Stars 1-5, 0 clears"),
):
    """Rate a game."""
    ql = QuestLog()
    record = _find_game(ql, game)
    ql.set_rating(record.id, rating)
    stars = "★" * rating + "☆" * (5 - rating)
    console.print(f"{record.title}: [gold1]{stars}[/gold1]")
    _announce(ql)


@app.command("list")
def list_games(
    status_filter: GameStatus = typer.Option(None, "--status", "-s", help="Only this status"),
):
    """List the games in your library."""
    ql = QuestLog()
    games = ql.library.by_status(status_filter) if status_filter else ql.library.games

    if not games:
        console.print("[yellow]No games here yet. Add one with 'questlog add'.[/yellow]")
        return

    table = Table(title="Library")
    table.add_column("ID", style="dim")
    table.add_column("Title", style="bold")
    table.add_column("Platform")
    table.add_column("Status")
    table.add_column("Rating")
    table.add_column("Hours", justify="right")

    for g in games:
        style = STATUS_STYLES[g.status]
        table.add_row(
            g.id,
            g.title,
            g.platform,
            f"[{style}]{g.status.value}[/{style}]",
            "★" * g.rating,
            f"{g.playtime_hours:g}",
        )
    console.print(table)

    stats = ql.library.stats()
    console.print(
        f"[dim]{stats.total_games} games, {stats.completion_rate}% completed, "
        f"{stats.total_playtime_hours:g} hours[/dim]"
    )


# =============================================================================
# Profile & achievements
# =============================================================================


@app.command()
def profile(
    name: str = typer.Option(None, "--name", help="Change your display name"),
    title: str = typer.Option(None, "--title", help="Pick an earned title to display"),
):
    """Show your level, XP and wallet."""
    ql = QuestLog()

    if name:
        ql.leveling.set_name(name)
    if title:
        if not ql.leveling.select_title(title):
            available = ", ".join(ql.leveling.available_titles())
            console.print(f"[yellow]Title not earned yet. Available: {available}[/yellow]")

    summary = ql.profile()
    level = summary.level
    console.print(
        Panel(
            f"[bold]{summary.name}[/bold]  [magenta]{level.title}[/magenta]\n"
            f"Level {level.level}  ({level.xp} / {level.next_level_xp} XP)",
            style="blue",
        )
    )
    console.print(ProgressBar(total=100, completed=level.progress_percent, width=40))
    console.print(f"Games: {summary.games} ({summary.completed} completed)")
    console.print(f"Achievements: {summary.achievements_unlocked}/{summary.achievements_total}")
    console.print(f"Score: {summary.score}  Coins: {summary.coins}  Balance: {summary.balance}")
    console.print(f"Login streak: {summary.current_streak} (best {summary.max_streak})")


@app.command()
def achievements(
    show_all: bool = typer.Option(False, "--all", "-a", help="Include locked achievements"),
):
    """List achievements."""
    ql = QuestLog()
    engine = ql.achievements

    table = Table(title="Achievements")
    table.add_column("ID", style="dim")
    table.add_column("Title")
    table.add_column("Tier")
    table.add_column("Description")
    table.add_column("State")

    for definition in engine.catalog:
        record = engine.unlocked.get(definition.id)
        if record is None and not show_all:
            continue
        style = TIER_STYLES[definition.tier]
        if record is None:
            state = "[dim]locked[/dim]"
        elif record.claimed:
            state = "[green]claimed[/green]"
        else:
            state = "[bold yellow]claim me![/bold yellow]"

        hidden = record is None and definition.secret
        table.add_row(
            definition.id if not hidden else "???",
            definition.title if not hidden else "???",
            f"[{style}]{definition.tier.value}[/{style}]",
            definition.description if not hidden else "Secret achievement",
            state,
        )

    console.print(table)
    console.print(
        f"[dim]{len(engine.unlocked)}/{len(engine.catalog)} unlocked, "
        f"score {engine.score()}[/dim]"
    )


@app.command()
def claim(
    achievement_id: str = typer.Argument(None, help="Achievement to claim"),
    claim_all: bool = typer.Option(False, "--all", "-a", help="Claim everything unlocked"),
):
    """Claim unlocked achievements to add their points to your score."""
    ql = QuestLog()

    if claim_all or achievement_id is None:
        claimed = ql.claim_all_achievements()
        if not claimed:
            console.print("[dim]Nothing to claim.[/dim]")
            return
        console.print(f"[bold green]Claimed {len(claimed)} achievements.[/bold green]")
    elif ql.claim_achievement(achievement_id):
        definition = ql.achievements.get(achievement_id)
        console.print(f"[bold green]Claimed[/bold green] {definition.title} (+{definition.points})")
    else:
        console.print(f"[yellow]'{achievement_id}' is not unlocked or already claimed.[/yellow]")
        raise typer.Exit(1)

    console.print(f"Score: {ql.achievements.score()}")


@app.command()
def login():
    """Claim today's daily login reward."""
    ql = QuestLog()
    level_before = ql.leveling.level
    result = ql.claim_daily()

    if not result.success:
        console.print(f"[yellow]{result.message}[/yellow] Come back tomorrow! (streak {result.streak})")
        return

    console.print(f"[bold green]{result.message}[/bold green]  Streak: {result.streak} days")
    _announce(ql, level_before)


@app.command()
def quest():
    """Let the Quest Giver pick your next game from the backlog."""
    ql = QuestLog()
    pick = ql.quest()
    if pick is None:
        console.print("[yellow]Your backlog is empty. Nothing to roll for![/yellow]")
        return
    console.print(Panel(f"Your quest: [bold]{pick.title}[/bold] ({pick.platform})", style="magenta"))
    _announce(ql)


@app.command()
def card(
    save: Path = typer.Option(None, "--save", help="Save the card as an SVG image"),
):
    """Show your gamer card."""
    ql = QuestLog()
    summary = ql.profile()
    frame = ql.shop.equipped(ShopItemType.FRAME)
    style = ql.shop.equipped(ShopItemType.CARD_STYLE)

    panel = Panel(
        f"[bold]{summary.name}[/bold]\n"
        f"[magenta]{summary.level.title}[/magenta] - Level {summary.level.level}\n\n"
        f"Games {summary.games}  Completed {summary.completed}\n"
        f"Achievements {summary.achievements_unlocked}/{summary.achievements_total}  "
        f"Score {summary.score}\n"
        f"Best streak {summary.max_streak} days",
        title="Gamer Card",
        subtitle=f"{style.name} / {frame.name}",
        style="blue",
    )
    console.print(panel)

    if save:
        card_console = Console(record=True, width=60, file=io.StringIO())
        card_console.print(panel)
        card_console.save_svg(str(save), title="Questlog Gamer Card")
        ql.track_action("download_card")
        console.print(f"[green]Saved card to {save}[/green]")
        _announce(ql)


# =============================================================================
# Shop
# =============================================================================


@app.command()
def shop():
    """Browse the cosmetic shop."""
    ql = QuestLog()

    table = Table(title=f"Shop - balance {ql.shop.balance()}")
    table.add_column("ID", style="dim")
    table.add_column("Name", style="bold")
    table.add_column("Type")
    table.add_column("Price", justify="right")
    table.add_column("")

    for item in SHOP_ITEMS:
        if ql.shop.is_owned(item.id):
            equipped = ql.shop.equipped(item.type).id == item.id
            state = "[green]equipped[/green]" if equipped else "owned"
        else:
            state = ""
        table.add_row(item.id, item.name, item.type.value, str(item.price), state)

    console.print(table)


@app.command()
def buy(item_id: str = typer.Argument(..., help="Shop item id")):
    """Buy a shop item."""
    ql = QuestLog()
    result = ql.shop.buy_item(item_id)
    if not result.success:
        console.print(f"[yellow]{result.message}[/yellow]")
        raise typer.Exit(1)
    console.print(f"[bold green]{result.message}[/bold green] Balance: {ql.shop.balance()}")


@app.command()
def equip(item_id: str = typer.Argument(..., help="Shop item id")):
    """Equip an owned shop item."""
    ql = QuestLog()
    result = ql.shop.equip_item(item_id)
    if not result.success:
        console.print(f"[yellow]{result.message}[/yellow]")
        raise typer.Exit(1)
    console.print(f"[green]{result.message}[/green]")


# =============================================================================
# Catalog
# =============================================================================


@app.command()
def search(
    query: str = typer.Argument(..., help="Title to search for"),
    limit: int = typer.Option(10, "--limit", "-n", help="Maximum results"),
):
    """Search the RAWG catalog."""
    client = _rawg_client()
    try:
        with console.status("[dim]Searching RAWG...[/dim]"):
            results = client.search_games(query, page_size=limit)
    except RawgAPIError as e:
        console.print(f"[bold red]Error:[/bold red] {e}")
        raise typer.Exit(1)
    finally:
        client.close()

    if not results:
        console.print("[yellow]No results.[/yellow]")
        return

    table = Table(title=f"RAWG: {query}")
    table.add_column("ID", style="dim")
    table.add_column("Name", style="bold")
    table.add_column("Released")
    table.add_column("Platform")
    table.add_column("Genres")
    for game in results:
        table.add_row(
            game.id,
            game.name,
            str(game.released or ""),
            game.platform,
            ", ".join(game.genres),
        )
    console.print(table)


@app.command()
def refresh(game: str = typer.Argument(..., help="Game id or title")):
    """Update a game's details from RAWG."""
    ql = QuestLog()
    record = _find_game(ql, game)
    if record.id.startswith("local_"):
        console.print(f"[yellow]{record.title} was added by hand and has no RAWG id.[/yellow]")
        raise typer.Exit(1)

    client = _rawg_client()
    try:
        details = client.get_game_details(record.id)
    except RawgAPIError as e:
        console.print(f"[bold red]Error:[/bold red] {e}")
        raise typer.Exit(1)
    finally:
        client.close()

    ql.apply_details(record.id, details)
    console.print(f"[green]Refreshed[/green] {details.name}.")
    _announce(ql)


# =============================================================================
# Data
# =============================================================================


@app.command()
def export(
    path: Path = typer.Argument(Path("questlog-backup.json"), help="Where to write the backup"),
):
    """Export a full backup as JSON."""
    ql = QuestLog()

    def write(backup: dict):
        path.write_text(json.dumps(backup, indent=2, ensure_ascii=False), encoding="utf-8")

    try:
        ql.export_backup(write=write)
    except OSError as e:
        console.print(f"[bold red]Error:[/bold red] Could not write {path}: {e}")
        raise typer.Exit(1)
    console.print(f"[green]Backup written to {path}[/green]")
    _announce(ql)


@app.command("import")
def import_(path: Path = typer.Argument(..., exists=True, dir_okay=False, help="Backup file")):
    """Restore a JSON backup."""
    ql = QuestLog()
    try:
        data = json.loads(path.read_text(encoding="utf-8"))
        written = ql.import_backup(data)
    except (json.JSONDecodeError, ValueError) as e:
        console.print(f"[bold red]Error:[/bold red] {e}")
        raise typer.Exit(1)
    console.print(f"[green]Restored:[/green] {', '.join(written)}")


@app.command()
def reset():
    """Delete all stored data."""
    if typer.confirm("This will delete your library, XP, achievements and purchases. Continue?"):
        QuestLog().reset()
        console.print("[green]All data cleared.[/green]")


@app.command()
def serve(
    host: str = typer.Option("127.0.0.1", help="Host to bind to"),
    port: int = typer.Option(8000, help="Port to listen on"),
):
    """Run the JSON API server."""
    import uvicorn

    from questlog.web.app import create_app

    console.print(f"[bold blue]Serving Questlog API on http://{host}:{port}[/bold blue]")
    uvicorn.run(create_app(), host=host, port=port)


def main():
    """Entry point."""
    app()


if __name__ == "__main__":
    main()
