"""Date helpers for schedule query windows."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import date, datetime, timedelta
from zoneinfo import ZoneInfo

from hype_rank.extractors.base import WindowKind

ET_ZONE = ZoneInfo("America/New_York")
DATE_FORMAT = "%Y-%m-%d"


@dataclass(frozen=True)
class DateWindow:
    """Inclusive date range for one schedule query."""

    kind: WindowKind
    start_date: date
    end_date: date

    @property
    def start(self) -> str:
        return self.start_date.strftime(DATE_FORMAT)

    @property
    def end(self) -> str:
        return self.end_date.strftime(DATE_FORMAT)

    def describe(self) -> str:
        if self.kind == "same_day":
            return f"today ({self.start})"
        return f"{self.start} to {self.end} (excluding today)"


def today_in(zone: ZoneInfo = ET_ZONE) -> date:
    """Return the current calendar date in `zone`."""
    return datetime.now(zone).date()


def week_ahead_window(today: date, days: int = 7) -> DateWindow:
    """Tomorrow through `today + days`; today itself is excluded."""
    if days < 1:
        raise ValueError(f"week-ahead window needs at least one day, got {days}")
    return DateWindow(
        kind="week_ahead",
        start_date=today + timedelta(days=1),
        end_date=today + timedelta(days=days),
    )


def same_day_window(today: date) -> DateWindow:
    return DateWindow(kind="same_day", start_date=today, end_date=today)


def window_for(kind: WindowKind, today: date, *, days: int = 7) -> DateWindow:
    if kind == "same_day":
        return same_day_window(today)
    return week_ahead_window(today, days)


def parse_date(value: str) -> date | None:
    """Parse a `YYYY-MM-DD` string."""
    raw = value.strip()
    if not raw:
        return None
    try:
        return datetime.strptime(raw, DATE_FORMAT).date()
    except ValueError:
        return None
