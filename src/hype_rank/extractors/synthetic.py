from __future__ import annotations

import random

from hype_rank.extractors.base import ExtractorInfo, FactorVector, SignalExtractor
from hype_rank.models import Game

HOME_WIN_PROBABILITY_BASE = 0.5
HOME_WIN_PROBABILITY_SPREAD = 0.1


class SyntheticExtractor:
    """Same-day factors sampled from a generator; no forecast feed is consulted.

    The generator is injected so callers can seed it for reproducible runs.
    """

    info = ExtractorInfo(
        id="synthetic",
        name="Synthetic Multi-Factor",
        description=(
            "Same-day ranking from seven sampled factors combined with fixed weights."
        ),
        window="same_day",
        default_top_n=5,
    )

    def __init__(self, rng: random.Random | None = None) -> None:
        self.rng = rng if rng is not None else random.Random()

    def extract(self, game: Game) -> FactorVector:
        draw = self.rng.random
        return FactorVector(
            predicted_home_win_probability=(
                HOME_WIN_PROBABILITY_BASE + HOME_WIN_PROBABILITY_SPREAD * draw()
            ),
            stakes=draw(),
            rivalry=draw(),
            star_power=draw(),
            line_move=draw(),
            form_differential=draw(),
            time_boost=draw(),
        )


def plugin(rng: random.Random | None = None) -> SignalExtractor:
    return SyntheticExtractor(rng)
