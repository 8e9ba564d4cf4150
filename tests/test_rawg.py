"""
Tests for the RAWG catalog client (no network; httpx.MockTransport)
"""

from datetime import date

import httpx
import pytest

from questlog.models import GameStatus, Platform
from questlog.rawg import CatalogGame, RawgAPIError, RawgClient

HOLLOW_KNIGHT = {
    "id": 9767,
    "name": "Hollow Knight",
    "released": "2017-02-24",
    "playtime": 12,
    "average_playtime": 0,
    "background_image": "https://media.rawg.io/hk.jpg",
    "genres": [{"id": 4, "name": "Action"}, {"id": 51, "name": "Indie"}],
    "parent_platforms": [
        {"platform": {"id": 1, "name": "PC"}},
        {"platform": {"id": 7, "name": "Nintendo"}},
    ],
}


def make_client(handler) -> RawgClient:
    return RawgClient(api_key="test-key", http_client=httpx.Client(transport=httpx.MockTransport(handler)))


def test_requires_api_key(monkeypatch):
    monkeypatch.delenv("RAWG_API_KEY", raising=False)
    with pytest.raises(RawgAPIError, match="RAWG_API_KEY"):
        RawgClient()


def test_search_games():
    seen = {}

    def handler(request: httpx.Request) -> httpx.Response:
        seen["path"] = request.url.path
        seen["params"] = dict(request.url.params)
        return httpx.Response(200, json={"count": 1, "results": [HOLLOW_KNIGHT]})

    with make_client(handler) as client:
        results = client.search_games("hollow knight", page_size=5)

    assert seen["path"] == "/api/games"
    assert seen["params"] == {"key": "test-key", "search": "hollow knight", "page_size": "5"}
    assert len(results) == 1
    game = results[0]
    assert game.id == "9767"
    assert game.released == date(2017, 2, 24)
    assert game.genres == ["Action", "Indie"]
    assert game.platforms == ["PC", "Nintendo"]
    assert game.ecosystem == Platform.PC


def test_blank_search_skips_request():
    def handler(request):
        raise AssertionError("no request expected")

    assert make_client(handler).search_games("   ") == []


def test_get_game_details():
    def handler(request: httpx.Request) -> httpx.Response:
        assert request.url.path == "/api/games/9767"
        return httpx.Response(200, json={**HOLLOW_KNIGHT, "average_playtime": 25})

    details = make_client(handler).get_game_details(9767)

    assert details.name == "Hollow Knight"
    assert details.best_playtime == 25


@pytest.mark.parametrize("status_code", [401, 404, 500])
def test_http_errors_raise(status_code):
    client = make_client(lambda request: httpx.Response(status_code, json={}))
    with pytest.raises(RawgAPIError, match=str(status_code)):
        client.get_game_details(1)


def test_network_error_raises():
    def handler(request):
        raise httpx.ConnectError("boom", request=request)

    with pytest.raises(RawgAPIError):
        make_client(handler).search_games("doom")


def test_catalog_game_platform_label():
    game = CatalogGame.from_api(
        {"id": 1, "name": "Bloodborne", "platforms": [{"platform": {"name": "PlayStation 4"}}]}
    )
    assert game.platform == "PlayStation"
    assert game.released is None
    assert game.genres == []


def test_to_record():
    record = CatalogGame.from_api(HOLLOW_KNIGHT).to_record(platform="Switch")

    assert record.id == "9767"
    assert record.title == "Hollow Knight"
    assert record.platform == "Switch"
    assert record.status == GameStatus.BACKLOG
    assert record.playtime_hours == 12
    assert record.release_date == date(2017, 2, 24)
