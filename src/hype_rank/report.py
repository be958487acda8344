"""Console text for ranked games."""

from __future__ import annotations

from hype_rank.extractors.base import FactorVector, RankProxySignals, SignalExtractor
from hype_rank.models import Game
from hype_rank.scoring import probability_closeness
from hype_rank.time_utils import DateWindow


def _fmt(value: float | None) -> str:
    if value is None:
        return "n/a"
    return f"{value:.2f}"


def _matchup_line(position: int, game: Game) -> str:
    signals = game.signals
    visitor = game.visitor_team.full_name
    home = game.home_team.full_name
    if isinstance(signals, RankProxySignals):
        visitor = f"{visitor} (Rank Proxy {game.visitor_team.rank_proxy})"
        home = f"{home} (Rank Proxy {game.home_team.rank_proxy})"
    return f"{position}. [{game.league}] {visitor} vs {home}"


def _factor_line(vector: FactorVector) -> str:
    parts = [
        f"closeness {_fmt(probability_closeness(vector.predicted_home_win_probability))}",
        f"stakes {_fmt(vector.stakes)}",
        f"rivalry {_fmt(vector.rivalry)}",
        f"star power {_fmt(vector.star_power)}",
        f"line move {_fmt(vector.line_move)}",
        f"form diff {_fmt(vector.form_differential)}",
        f"time boost {_fmt(vector.time_boost)}",
    ]
    return "   Factors: " + " | ".join(parts)


def format_game(position: int, game: Game) -> list[str]:
    lines = [
        _matchup_line(position, game),
        (
            f"   Scores: Away {game.visitor_team_score} - Home {game.home_team_score}"
            f" | Excitement: {_fmt(game.excitement)}"
        ),
    ]
    if isinstance(game.signals, FactorVector):
        lines.append(_factor_line(game.signals))
    return lines


def format_report(games: list[Game], *, extractor: SignalExtractor, window: DateWindow) -> str:
    """Render ranked games, 1-indexed, visitor listed before home."""
    heading = (
        f"Top {len(games)} games for {window.describe()} "
        f"based on {extractor.info.name.lower()} heuristic:"
    )
    lines = [heading, ""]
    for position, game in enumerate(games, start=1):
        lines.extend(format_game(position, game))
        lines.append("")
    return "\n".join(lines).rstrip() + "\n"


def no_games_notice(window: DateWindow) -> str:
    return f"No games found for {window.describe()}."
