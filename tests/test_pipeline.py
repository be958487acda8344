from __future__ import annotations

import random
from datetime import date

import pytest

from hype_rank import pipeline
from hype_rank.balldontlie_client import BallDontLieError
from hype_rank.extractors.synthetic import SyntheticExtractor
from hype_rank.models import Game, ScheduleEnvelope, Team
from hype_rank.settings import Settings
from hype_rank.time_utils import week_ahead_window


def _game(game_id: int, *, home_id: int, visitor_id: int, league: str) -> Game:
    return Game(
        id=game_id,
        date="2026-10-20",
        home_team=Team(id=home_id, full_name=f"Home {home_id}"),
        visitor_team=Team(id=visitor_id, full_name=f"Visitor {visitor_id}"),
        home_team_score=0,
        visitor_team_score=0,
        league=league,
    )


class _RecordingRandom:
    def __init__(self) -> None:
        self.draws = 0

    def random(self) -> float:
        self.draws += 1
        return 0.5


class _FakeClient:
    def __init__(self, responses: dict[str, list[Game] | Exception]) -> None:
        self.responses = responses
        self.calls: list[tuple[str, str, str]] = []

    def __enter__(self) -> _FakeClient:
        return self

    def __exit__(self, exc_type, exc_val, exc_tb) -> None:
        return None

    def list_games(self, *, league: str, start_date: str, end_date: str) -> ScheduleEnvelope:
        self.calls.append((league, start_date, end_date))
        response = self.responses[league]
        if isinstance(response, Exception):
            raise response
        return ScheduleEnvelope(data=response, meta=None)


def test_fetch_all_games_degrades_failed_league() -> None:
    client = _FakeClient(
        {
            "NBA": BallDontLieError("boom"),
            "NFL": [_game(1, home_id=3, visitor_id=4, league="NFL")],
        }
    )
    window = week_ahead_window(date(2026, 10, 19))

    games = pipeline.fetch_all_games(client, ["NBA", "NFL"], window)  # type: ignore[arg-type]

    assert [game.id for game in games] == [1]
    assert client.calls == [
        ("NBA", "2026-10-20", "2026-10-26"),
        ("NFL", "2026-10-20", "2026-10-26"),
    ]


def test_run_rank_proxy_orders_and_truncates(monkeypatch: pytest.MonkeyPatch) -> None:
    fake = _FakeClient(
        {
            "NBA": [
                _game(1, home_id=1, visitor_id=16, league="NBA"),
                _game(2, home_id=5, visitor_id=5, league="NBA"),
            ],
            "NFL": [_game(3, home_id=10, visitor_id=18, league="NFL")],
        }
    )
    monkeypatch.setattr(pipeline, "BallDontLieClient", lambda settings: fake)

    result = pipeline.run(
        Settings(balldontlie_api_key="k", _env_file=None),
        mode="week",
        top_n=2,
        today=date(2026, 10, 19),
        leagues=["NBA", "NFL"],
    )

    assert result.extractor.info.id == "rank_proxy"
    assert result.window.start == "2026-10-20"
    assert [game.id for game in result.top] == [2, 3]
    assert len(result.games) == 3


def test_run_synthetic_uses_same_day_and_default_top_n(monkeypatch: pytest.MonkeyPatch) -> None:
    games = [_game(index, home_id=index, visitor_id=index + 1, league="NBA") for index in range(8)]
    fake = _FakeClient({"NBA": games})
    monkeypatch.setattr(pipeline, "BallDontLieClient", lambda settings: fake)

    result = pipeline.run(
        Settings(balldontlie_api_key="k", _env_file=None),
        mode="synthetic",
        top_n=None,
        today=date(2026, 10, 19),
        leagues=["NBA"],
        rng=random.Random(7),
    )

    assert fake.calls == [("NBA", "2026-10-19", "2026-10-19")]
    assert len(result.top) == 5
    scores = [game.excitement for game in result.top]
    assert scores == sorted(scores, reverse=True)


def test_run_with_no_games_skips_scoring(monkeypatch: pytest.MonkeyPatch) -> None:
    fake = _FakeClient({"NBA": BallDontLieError("down"), "NFL": []})
    monkeypatch.setattr(pipeline, "BallDontLieClient", lambda settings: fake)

    result = pipeline.run(
        Settings(balldontlie_api_key="k", _env_file=None),
        mode="rank_proxy",
        top_n=10,
        today=date(2026, 10, 19),
        leagues=["NBA", "NFL"],
    )

    assert result.games == []
    assert result.top == []


def test_run_scores_with_the_resolved_extractor(monkeypatch: pytest.MonkeyPatch) -> None:
    def fail_lookup(mode: str, *, rng: random.Random | None = None) -> None:
        raise AssertionError(f"extractor lookup for {mode}")

    fake = _FakeClient({"NBA": [_game(1, home_id=1, visitor_id=2, league="NBA")]})
    monkeypatch.setattr(pipeline, "BallDontLieClient", lambda settings: fake)
    monkeypatch.setattr(pipeline, "get_extractor", fail_lookup)
    monkeypatch.setattr("hype_rank.scoring.get_extractor", fail_lookup)
    stub = _RecordingRandom()
    extractor = SyntheticExtractor(stub)  # type: ignore[arg-type]

    result = pipeline.run(
        Settings(balldontlie_api_key="k", _env_file=None),
        mode=extractor,
        top_n=None,
        today=date(2026, 10, 19),
        leagues=["NBA"],
    )

    assert result.extractor is extractor
    assert stub.draws == 7
    assert [game.id for game in result.top] == [1]
