from __future__ import annotations

from datetime import date

import httpx
import pytest

from hype_rank.balldontlie_client import (
    ApiResponse,
    BallDontLieClient,
    BallDontLieError,
    games_query,
)
from hype_rank.pipeline import fetch_all_games
from hype_rank.settings import Settings
from hype_rank.time_utils import week_ahead_window


def _settings() -> Settings:
    return Settings(BALLDONTLIE_API_KEY="bdl-test", _env_file=None)


def _install_transport(client: BallDontLieClient, handler) -> None:
    client._http.close()
    client._http = httpx.Client(transport=httpx.MockTransport(handler))


def test_games_query_per_league() -> None:
    assert games_query("NBA", "2026-10-20", "2026-10-26") == (
        "/v1/games",
        [("start_date", "2026-10-20"), ("end_date", "2026-10-26")],
    )
    assert games_query("NFL", "2026-10-20", "2026-10-26") == (
        "/nfl/v1/games",
        [("dates[]", "2026-10-20"), ("dates[]", "2026-10-26")],
    )
    with pytest.raises(ValueError, match="unsupported league: MLB"):
        games_query("MLB", "2026-10-20", "2026-10-26")


def test_client_raises_when_key_missing() -> None:
    settings = Settings(balldontlie_api_key="", _env_file=None)
    with (
        BallDontLieClient(settings) as client,
        pytest.raises(BallDontLieError, match="missing balldontlie API key"),
    ):
        client.list_games(league="NBA", start_date="2026-10-20", end_date="2026-10-26")


def test_list_games_sends_bearer_auth_and_decodes() -> None:
    captured: dict[str, object] = {}

    def handler(request: httpx.Request) -> httpx.Response:
        captured["url"] = str(request.url)
        captured["auth"] = request.headers.get("Authorization")
        return httpx.Response(
            200,
            json={
                "data": [
                    {
                        "id": 1,
                        "date": "2026-10-20",
                        "home_team": {"id": 3, "full_name": "Home Team"},
                        "visitor_team": {"id": 4, "full_name": "Visitor Team"},
                        "home_team_score": 0,
                        "visitor_team_score": 0,
                    }
                ],
                "meta": {"next_cursor": None},
            },
        )

    client = BallDontLieClient(_settings())
    _install_transport(client, handler)
    try:
        envelope = client.list_games(league="NFL", start_date="2026-10-20", end_date="2026-10-21")
    finally:
        client.close()

    assert captured["auth"] == "Bearer bdl-test"
    url = httpx.URL(str(captured["url"]))
    assert url.path == "/nfl/v1/games"
    assert url.params.get_list("dates[]") == ["2026-10-20", "2026-10-21"]
    assert [game.league for game in envelope.data] == ["NFL"]
    assert envelope.data[0].visitor_team.full_name == "Visitor Team"


def test_list_games_wraps_status_errors() -> None:
    client = BallDontLieClient(_settings())
    _install_transport(client, lambda request: httpx.Response(401, json={"error": "nope"}))
    try:
        with pytest.raises(BallDontLieError, match="failed with status 401"):
            client.list_games(league="NBA", start_date="2026-10-20", end_date="2026-10-20")
    finally:
        client.close()


def test_list_games_wraps_transport_errors() -> None:
    def handler(request: httpx.Request) -> httpx.Response:
        raise httpx.ConnectError("connection refused", request=request)

    client = BallDontLieClient(_settings())
    _install_transport(client, handler)
    try:
        with pytest.raises(BallDontLieError, match="transport error"):
            client.list_games(league="NBA", start_date="2026-10-20", end_date="2026-10-20")
    finally:
        client.close()


def test_list_games_wraps_invalid_json() -> None:
    client = BallDontLieClient(_settings())
    _install_transport(client, lambda request: httpx.Response(200, text="<html>"))
    try:
        with pytest.raises(BallDontLieError, match="invalid JSON"):
            client.list_games(league="NBA", start_date="2026-10-20", end_date="2026-10-20")
    finally:
        client.close()


def test_list_games_rejects_malformed_envelope(monkeypatch: pytest.MonkeyPatch) -> None:
    client = BallDontLieClient(_settings())

    def fake_request(*, path: str, params: list[tuple[str, str]]) -> ApiResponse:
        return ApiResponse(data={"data": "oops"}, status_code=200, duration_ms=1)

    monkeypatch.setattr(client, "_request", fake_request)
    try:
        with pytest.raises(BallDontLieError, match="missing list data"):
            client.list_games(league="NBA", start_date="2026-10-20", end_date="2026-10-20")
    finally:
        client.close()


def test_fetch_all_games_survives_out_of_range_numbers() -> None:
    row = (
        '{{"id": {game_id}, "date": "2026-10-20", '
        '"home_team": {{"id": 3, "full_name": "Home Team"}}, '
        '"visitor_team": {{"id": 4, "full_name": "Visitor Team"}}, '
        '"home_team_score": 0, "visitor_team_score": {visitor_score}}}'
    )
    bodies = {
        "/v1/games": '{"data": [' + row.format(game_id=7, visitor_score=0) + "]}",
        "/nfl/v1/games": '{"data": [' + row.format(game_id="1e400", visitor_score="-1e400") + "]}",
    }

    def handler(request: httpx.Request) -> httpx.Response:
        return httpx.Response(200, content=bodies[request.url.path].encode("utf-8"))

    client = BallDontLieClient(_settings())
    _install_transport(client, handler)
    try:
        games = fetch_all_games(client, ["NBA", "NFL"], week_ahead_window(date(2026, 10, 19)))
    finally:
        client.close()

    assert [(game.league, game.id) for game in games] == [("NBA", 7), ("NFL", 0)]
    assert games[1].visitor_team_score == 0
