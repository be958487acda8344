"""HTTP client for the balldontlie games API."""

from __future__ import annotations

from dataclasses import dataclass
from time import perf_counter
from typing import Any

import httpx
from loguru import logger

from hype_rank.models import ScheduleEnvelope, decode_schedule
from hype_rank.settings import Settings

GAMES_PATHS = {
    "NBA": "/v1/games",
    "NFL": "/nfl/v1/games",
}


class BallDontLieError(RuntimeError):
    """Raised on balldontlie API failures."""


@dataclass(frozen=True)
class ApiResponse:
    """Response data and metadata from an API call."""

    data: Any
    status_code: int
    duration_ms: int


def games_query(league: str, start_date: str, end_date: str) -> tuple[str, list[tuple[str, str]]]:
    """Return the games path and query params for `league` over a date range."""
    path = GAMES_PATHS.get(league)
    if path is None:
        options = ",".join(sorted(GAMES_PATHS))
        raise ValueError(f"unsupported league: {league} (options: {options})")
    if league == "NFL":
        return path, [("dates[]", start_date), ("dates[]", end_date)]
    return path, [("start_date", start_date), ("end_date", end_date)]


class BallDontLieClient:
    """Thin HTTP client around balldontlie; one request per league query, no retries."""

    def __init__(self, settings: Settings) -> None:
        self.settings = settings
        self._base_url = settings.balldontlie_base_url.rstrip("/")
        self._http = httpx.Client(timeout=settings.balldontlie_timeout_s)

    def close(self) -> None:
        self._http.close()

    def __enter__(self) -> BallDontLieClient:
        return self

    def __exit__(self, exc_type, exc_val, exc_tb) -> None:
        self.close()

    def _request(self, *, path: str, params: list[tuple[str, str]]) -> ApiResponse:
        api_key = str(self.settings.balldontlie_api_key).strip()
        if not api_key:
            raise BallDontLieError(
                "missing balldontlie API key; set BALLDONTLIE_API_KEY or configure "
                "balldontlie.key_files in runtime.toml"
            )
        url = f"{self._base_url}/{path.lstrip('/')}"
        headers = {"Authorization": f"Bearer {api_key}"}
        started = perf_counter()
        try:
            response = self._http.get(url, params=params, headers=headers)
            response.raise_for_status()
            data = response.json()
        except httpx.HTTPStatusError as exc:
            raise BallDontLieError(
                f"{path} failed with status {exc.response.status_code}"
            ) from exc
        except httpx.HTTPError as exc:
            raise BallDontLieError(f"{path} failed with transport error: {exc}") from exc
        except ValueError as exc:
            raise BallDontLieError(f"{path} returned invalid JSON") from exc

        return ApiResponse(
            data=data,
            status_code=response.status_code,
            duration_ms=int((perf_counter() - started) * 1000),
        )

    def list_games(self, *, league: str, start_date: str, end_date: str) -> ScheduleEnvelope:
        """Fetch games for one league between two `YYYY-MM-DD` dates."""
        path, params = games_query(league, start_date, end_date)
        raw = self._request(path=path, params=params)
        logger.debug("{} games request took {}ms", league, raw.duration_ms)
        try:
            return decode_schedule(raw.data, league=league)
        except ValueError as exc:
            raise BallDontLieError(str(exc)) from exc
