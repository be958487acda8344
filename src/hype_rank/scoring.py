"""Excitement aggregation for extracted game signals."""

from __future__ import annotations

import math
import random
from dataclasses import fields

from loguru import logger

from hype_rank.extractors import get_extractor
from hype_rank.extractors.base import FactorVector, RankProxySignals, SignalExtractor, Signals
from hype_rank.models import Game

FACTOR_WEIGHTS: dict[str, float] = {
    "predicted_home_win_probability": 0.30,
    "stakes": 0.20,
    "rivalry": 0.15,
    "star_power": 0.15,
    "line_move": 0.10,
    "form_differential": 0.05,
    "time_boost": 0.05,
}


def _float_div(numerator: float, denominator: float) -> float:
    """Divide with IEEE-754 semantics instead of raising on a zero denominator."""
    if denominator == 0:
        if numerator == 0 or math.isnan(numerator):
            return math.nan
        return math.copysign(math.inf, numerator) * math.copysign(1.0, denominator)
    return numerator / denominator


def closeness_score(home_rank: int, visitor_rank: int, max_diff: int) -> float:
    """Return `1 - |home - visitor| / max_diff`, unclamped.

    Gaps wider than `max_diff` go negative; `max_diff == 0` yields -inf (or nan
    for equal ranks).
    """
    diff = abs(float(home_rank - visitor_rank))
    return 1.0 - _float_div(diff, float(max_diff))


def probability_closeness(probability: float) -> float:
    """Map a win probability to 1.0 at a coin flip, falling to 0.0 at certainty."""
    clamped = max(0.0, min(1.0, probability))
    return 1.0 - 2.0 * abs(0.5 - clamped)


def factor_score(vector: FactorVector) -> float:
    """Weighted sum of the factor vector; only the probability is clamped."""
    total = 0.0
    for item in fields(vector):
        value = float(getattr(vector, item.name))
        if item.name == "predicted_home_win_probability":
            value = probability_closeness(value)
        total += value * FACTOR_WEIGHTS[item.name]
    return total


def aggregate(signals: Signals) -> float:
    if isinstance(signals, RankProxySignals):
        return closeness_score(signals.home_rank, signals.visitor_rank, signals.max_diff)
    if isinstance(signals, FactorVector):
        return factor_score(signals)
    raise TypeError(f"unsupported signals type: {type(signals).__name__}")


def score_games(
    games: list[Game],
    mode: str | SignalExtractor,
    *,
    rng: random.Random | None = None,
) -> list[Game]:
    """Attach signals and excitement to every game in place; returns `games`.

    `mode` is a mode id or an already-resolved extractor; `rng` only applies to ids.
    """
    extractor = get_extractor(mode, rng=rng) if isinstance(mode, str) else mode
    for game in games:
        signals = extractor.extract(game)
        game.attach_signals(signals)
        excitement = aggregate(signals)
        game.set_excitement(excitement)
        logger.debug(
            "game {} [{}] signals={} excitement={}", game.id, game.league, signals, excitement
        )
        if not math.isfinite(excitement):
            logger.warning(
                "game {} [{}] scored {}; no max rank gap configured for this league",
                game.id,
                game.league,
                excitement,
            )
    return games
