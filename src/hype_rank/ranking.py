"""Deterministic ordering of scored games."""

from __future__ import annotations

import math

from hype_rank.models import Game, ScoringStateError


def _sort_key(game: Game) -> tuple[bool, float]:
    score = game.excitement
    if score is None:
        raise ScoringStateError(f"game {game.id} has not been scored")
    # nan has no order against numbers; park it after everything else.
    if math.isnan(score):
        return (True, 0.0)
    return (False, -score)


def rank_games(games: list[Game]) -> list[Game]:
    """Sort `games` in place by descending excitement; ties keep input order."""
    games.sort(key=_sort_key)
    return games


def top_games(games: list[Game], top_n: int) -> list[Game]:
    """Rank `games` and return at most `top_n` of them."""
    if top_n < 0:
        raise ValueError(f"top_n must be >= 0, got {top_n}")
    ranked = rank_games(games)
    return ranked[: min(top_n, len(ranked))]
