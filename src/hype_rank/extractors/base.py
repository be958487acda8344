from __future__ import annotations

from dataclasses import dataclass
from typing import Literal, Protocol

from hype_rank.models import Game

WindowKind = Literal["week_ahead", "same_day"]


def normalize_mode(value: str) -> str:
    raw = value.strip().lower().replace("-", "_")
    if not raw:
        raise ValueError("scoring mode is required")
    allowed = set("abcdefghijklmnopqrstuvwxyz0123456789_")
    if any(ch not in allowed for ch in raw):
        raise ValueError(f"invalid scoring mode: {value}")
    return raw


@dataclass(frozen=True)
class ExtractorInfo:
    id: str
    name: str
    description: str
    window: WindowKind
    default_top_n: int


@dataclass(frozen=True)
class RankProxySignals:
    """Team-id rank proxies after fallback substitution."""

    home_rank: int
    visitor_rank: int
    max_diff: int


@dataclass(frozen=True)
class FactorVector:
    """Seven per-game factors, each nominally in [0, 1]."""

    predicted_home_win_probability: float
    stakes: float
    rivalry: float
    star_power: float
    line_move: float
    form_differential: float
    time_boost: float


Signals = RankProxySignals | FactorVector


class SignalExtractor(Protocol):
    info: ExtractorInfo

    def extract(self, game: Game) -> Signals:
        raise NotImplementedError
