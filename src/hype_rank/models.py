"""Schedule records decoded from the balldontlie API."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Any

from hype_rank.util.parsing import int_or_zero, safe_str

if TYPE_CHECKING:
    from hype_rank.extractors.base import Signals

KNOWN_LEAGUES: tuple[str, ...] = ("NBA", "NFL")


class ScoringStateError(RuntimeError):
    """Raised when a game's signals or excitement are assigned out of order."""


@dataclass(frozen=True)
class Team:
    id: int
    full_name: str

    @property
    def rank_proxy(self) -> int:
        """Team id used as a placeholder for competitive strength."""
        return self.id

    @classmethod
    def from_payload(cls, payload: Any) -> Team:
        if not isinstance(payload, dict):
            return cls(id=0, full_name="")
        return cls(
            id=int_or_zero(payload.get("id")),
            full_name=safe_str(payload.get("full_name")),
        )


@dataclass
class Game:
    """One scheduled contest; signals and excitement are attached once each."""

    id: int
    date: str
    home_team: Team
    visitor_team: Team
    home_team_score: int
    visitor_team_score: int
    league: str
    signals: Signals | None = field(default=None, compare=False)
    excitement: float | None = field(default=None, compare=False)

    @property
    def is_scored(self) -> bool:
        return self.excitement is not None

    def attach_signals(self, signals: Signals) -> None:
        if self.signals is not None:
            raise ScoringStateError(f"signals already attached to game {self.id}")
        self.signals = signals

    def set_excitement(self, value: float) -> None:
        if self.signals is None:
            raise ScoringStateError(f"game {self.id} has no signals to score")
        if self.excitement is not None:
            raise ScoringStateError(f"excitement already set for game {self.id}")
        self.excitement = float(value)

    @classmethod
    def from_payload(cls, payload: dict[str, Any], *, league: str) -> Game:
        return cls(
            id=int_or_zero(payload.get("id")),
            date=safe_str(payload.get("date")),
            home_team=Team.from_payload(payload.get("home_team")),
            visitor_team=Team.from_payload(payload.get("visitor_team")),
            home_team_score=int_or_zero(payload.get("home_team_score")),
            visitor_team_score=int_or_zero(payload.get("visitor_team_score")),
            league=league,
        )


@dataclass(frozen=True)
class ScheduleEnvelope:
    """Decoded `{"data": [...], "meta": ...}` response; `meta` is kept opaque."""

    data: list[Game]
    meta: Any = None


def decode_schedule(payload: Any, *, league: str) -> ScheduleEnvelope:
    """Decode one games response and tag every game with `league`."""
    if not isinstance(payload, dict):
        raise ValueError(f"{league} games payload must be an object")
    rows = payload.get("data")
    if rows is None:
        rows = []
    if not isinstance(rows, list):
        raise ValueError(f"{league} games payload missing list data")
    games = [Game.from_payload(row, league=league) for row in rows if isinstance(row, dict)]
    return ScheduleEnvelope(data=games, meta=payload.get("meta"))
