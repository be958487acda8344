"""Fetch, score and rank one run of scheduled games."""

from __future__ import annotations

import random
from collections.abc import Iterable
from dataclasses import dataclass
from datetime import date

from loguru import logger

from hype_rank.balldontlie_client import BallDontLieClient, BallDontLieError
from hype_rank.extractors import get_extractor
from hype_rank.extractors.base import SignalExtractor
from hype_rank.models import Game
from hype_rank.ranking import top_games
from hype_rank.scoring import score_games
from hype_rank.settings import Settings
from hype_rank.time_utils import DateWindow, window_for


@dataclass(frozen=True)
class RankingRun:
    window: DateWindow
    extractor: SignalExtractor
    games: list[Game]
    top: list[Game]


def fetch_all_games(
    client: BallDontLieClient,
    leagues: Iterable[str],
    window: DateWindow,
) -> list[Game]:
    """Fetch each league in turn; a failed league contributes no games."""
    games: list[Game] = []
    for league in leagues:
        try:
            envelope = client.list_games(
                league=league, start_date=window.start, end_date=window.end
            )
        except BallDontLieError as exc:
            logger.warning("Error fetching {} games: {}", league, exc)
            continue
        logger.info("fetched {} {} games", len(envelope.data), league)
        games.extend(envelope.data)
    return games


def run(
    settings: Settings,
    *,
    mode: str | SignalExtractor,
    top_n: int | None,
    today: date,
    leagues: Iterable[str],
    week_ahead_days: int = 7,
    rng: random.Random | None = None,
) -> RankingRun:
    extractor = get_extractor(mode, rng=rng) if isinstance(mode, str) else mode
    window = window_for(extractor.info.window, today, days=week_ahead_days)
    league_list = list(leagues)
    logger.info("Fetching {} games for {}", " and ".join(league_list), window.describe())

    with BallDontLieClient(settings) as client:
        games = fetch_all_games(client, league_list, window)

    if not games:
        return RankingRun(window=window, extractor=extractor, games=[], top=[])

    score_games(games, extractor)
    limit = extractor.info.default_top_n if top_n is None else top_n
    top = top_games(games, limit)
    return RankingRun(window=window, extractor=extractor, games=games, top=top)
