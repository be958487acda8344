from __future__ import annotations

from hype_rank.extractors.base import (
    ExtractorInfo,
    RankProxySignals,
    SignalExtractor,
)
from hype_rank.models import Game

# Heuristic max rank gap per league; also the visitor fallback rank.
MAX_RANK_DIFF: dict[str, int] = {
    "NBA": 16,
    "NFL": 32,
}
DEFAULT_HOME_RANK = 1


class RankProxyExtractor:
    info = ExtractorInfo(
        id="rank_proxy",
        name="Rank-Proxy Closeness",
        description=(
            "Week-ahead forecast from team-id rank proxies; closer proxies score higher."
        ),
        window="week_ahead",
        default_top_n=10,
    )

    def extract(self, game: Game) -> RankProxySignals:
        # Unmapped leagues get 0 here and score as -inf/nan downstream.
        max_diff = MAX_RANK_DIFF.get(game.league, 0)
        home_rank = game.home_team.rank_proxy or DEFAULT_HOME_RANK
        visitor_rank = game.visitor_team.rank_proxy or max_diff
        return RankProxySignals(
            home_rank=home_rank,
            visitor_rank=visitor_rank,
            max_diff=max_diff,
        )


def plugin() -> SignalExtractor:
    return RankProxyExtractor()
