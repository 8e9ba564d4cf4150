"""
CLI smoke tests (typer CliRunner against a temporary data directory)
"""

import json

import pytest
from typer.testing import CliRunner

from questlog.cli import app
from questlog.context import QuestLog
from questlog.models import GameStatus
from questlog.storage import Storage

runner = CliRunner()


@pytest.fixture(autouse=True)
def data_dir(tmp_path, monkeypatch):
    path = tmp_path / "data"
    monkeypatch.setenv("QUESTLOG_DATA_DIR", str(path))
    monkeypatch.delenv("RAWG_API_KEY", raising=False)
    return path


def load() -> QuestLog:
    return QuestLog(Storage())


def invoke(*args, **kwargs):
    return runner.invoke(app, list(args), **kwargs)


def test_add_and_list():
    result = invoke("add", "Celeste", "--platform", "Switch", "--genre", "Platformer")
    assert result.exit_code == 0, result.output
    assert "Added" in result.output

    ql = load()
    game = ql.library.find("celeste")
    assert game.platform == "Switch"
    assert game.genres == ["Platformer"]
    assert ql.leveling.xp == 10
    assert ql.achievements.is_unlocked("add_1")

    result = invoke("list")
    assert result.exit_code == 0
    assert "Celeste" in result.output


def test_status_and_rate():
    invoke("add", "Hades")

    result = invoke("status", "Hades", "completed")
    assert result.exit_code == 0, result.output
    assert "+250 XP" in result.output

    result = invoke("rate", "Hades", "5")
    assert result.exit_code == 0

    game = load().library.find("Hades")
    assert game.status == GameStatus.COMPLETED
    assert game.rating == 5


def test_rate_out_of_range():
    invoke("add", "Hades")
    result = invoke("rate", "Hades", "7")
    assert result.exit_code != 0


def test_unknown_game():
    result = invoke("remove", "Nothing")
    assert result.exit_code == 1
    assert "No game matching" in result.output


def test_login_twice():
    first = invoke("login")
    second = invoke("login")

    assert "Day 1: +5 coins" in first.output
    assert "Already claimed" in second.output
    assert load().shop.coins == 5


def test_claim_all():
    invoke("add", "Hades")
    result = invoke("claim", "--all")

    assert result.exit_code == 0
    assert "Claimed 1 achievements" in result.output
    assert load().achievements.score() == 20


def test_quest():
    result = invoke("quest")
    assert "backlog is empty" in result.output

    invoke("add", "Hades")
    result = invoke("quest")
    assert "Hades" in result.output
    assert load().achievements.counters.quest_usage == 1


def test_export_and_import(tmp_path, monkeypatch):
    invoke("add", "Hades")
    backup_path = tmp_path / "backup.json"

    result = invoke("export", str(backup_path))
    assert result.exit_code == 0, result.output
    backup = json.loads(backup_path.read_text())
    assert backup["version"] == 2
    assert backup["games"][0]["title"] == "Hades"

    monkeypatch.setenv("QUESTLOG_DATA_DIR", str(tmp_path / "other"))
    result = invoke("import", str(backup_path))
    assert result.exit_code == 0, result.output

    ql = load()
    assert ql.library.find("Hades") is not None
    assert ql.achievements.is_unlocked("safety_first")


def test_export_to_missing_directory_fails(tmp_path):
    result = invoke("export", str(tmp_path / "missing" / "backup.json"))

    assert result.exit_code == 1
    assert "Could not write" in result.output
    assert not load().achievements.is_unlocked("safety_first")


def test_import_rejects_unknown_format(tmp_path):
    bad = tmp_path / "bad.json"
    bad.write_text(json.dumps({"hello": "world"}))

    result = invoke("import", str(bad))

    assert result.exit_code == 1
    assert "Unknown file format" in result.output


def test_card_save(tmp_path):
    target = tmp_path / "card.svg"
    result = invoke("card", "--save", str(target))

    assert result.exit_code == 0, result.output
    assert target.read_text().lstrip().startswith("<svg")
    assert load().achievements.is_unlocked("download_card")


def test_shop_and_buy():
    result = invoke("shop")
    assert result.exit_code == 0

    result = invoke("buy", "theme_emerald")
    assert result.exit_code == 1
    assert "Not enough coins" in result.output

    result = invoke("equip", "frame_default")
    assert result.exit_code == 0


def test_search_without_key():
    result = invoke("search", "doom")
    assert result.exit_code == 1
    assert "RAWG API key not provided" in result.output


def test_profile_rename():
    result = invoke("profile", "--name", "Ada")
    assert result.exit_code == 0
    assert "Ada" in result.output
    assert load().leveling.profile.name == "Ada"


def test_reset():
    invoke("add", "Hades")
    result = invoke("reset", input="y\n")

    assert result.exit_code == 0
    assert load().library.games == []
