"""Runtime configuration loader (config-first, flag-overrides)."""

from __future__ import annotations

import tomllib
from dataclasses import dataclass
from pathlib import Path
from typing import Any

DEFAULT_CONFIG_PATH = Path(__file__).resolve().parents[2] / "config" / "runtime.toml"
DEFAULT_LOCAL_OVERRIDE_PATH = Path(__file__).resolve().parents[2] / "config" / "runtime.local.toml"


@dataclass(frozen=True)
class RuntimeConfig:
    """Materialized runtime configuration."""

    config_path: Path
    balldontlie_base_url: str
    balldontlie_timeout_s: float
    balldontlie_key_files: tuple[str, ...]
    ranking_mode: str
    ranking_leagues: tuple[str, ...]
    week_ahead_days: int
    week_ahead_top_n: int
    same_day_top_n: int
    timezone: str

    def top_n_for(self, window: str) -> int:
        if window == "same_day":
            return self.same_day_top_n
        return self.week_ahead_top_n


_CURRENT_RUNTIME_CONFIG: RuntimeConfig | None = None


def set_current_runtime_config(config: RuntimeConfig | None) -> None:
    global _CURRENT_RUNTIME_CONFIG
    _CURRENT_RUNTIME_CONFIG = config


def current_runtime_config() -> RuntimeConfig:
    config = _CURRENT_RUNTIME_CONFIG
    if config is not None:
        return config
    loaded = load_runtime_config()
    set_current_runtime_config(loaded)
    return loaded


def _deep_merge(base: dict[str, Any], overlay: dict[str, Any]) -> dict[str, Any]:
    out = dict(base)
    for key, value in overlay.items():
        existing = out.get(key)
        if isinstance(existing, dict) and isinstance(value, dict):
            out[key] = _deep_merge(existing, value)
        else:
            out[key] = value
    return out


def _read_toml(path: Path) -> dict[str, Any]:
    try:
        payload = tomllib.loads(path.read_text(encoding="utf-8"))
    except OSError as exc:
        raise RuntimeError(f"failed reading runtime config: {path}") from exc
    except tomllib.TOMLDecodeError as exc:
        raise RuntimeError(f"invalid runtime config TOML: {path}") from exc
    return payload


def _as_table(payload: dict[str, Any], key: str) -> dict[str, Any]:
    value = payload.get(key, {})
    if value is None:
        return {}
    if not isinstance(value, dict):
        raise RuntimeError(f"runtime config section [{key}] must be a table")
    return value


def _as_str(value: Any, *, default: str) -> str:
    if isinstance(value, str):
        stripped = value.strip()
        if stripped:
            return stripped
    return default


def _as_int(value: Any, *, default: int) -> int:
    if isinstance(value, bool):
        return default
    if isinstance(value, int):
        return value
    if isinstance(value, float):
        return int(value)
    if isinstance(value, str):
        try:
            return int(value.strip())
        except ValueError:
            return default
    return default


def _as_float(value: Any, *, default: float) -> float:
    if isinstance(value, bool):
        return default
    if isinstance(value, (int, float)):
        return float(value)
    if isinstance(value, str):
        try:
            return float(value.strip())
        except ValueError:
            return default
    return default


def _as_csv_list(values: Any, *, default: tuple[str, ...]) -> tuple[str, ...]:
    if isinstance(values, list):
        cleaned = [str(value).strip() for value in values if str(value).strip()]
        return tuple(cleaned) if cleaned else default
    if isinstance(values, str):
        cleaned = [part.strip() for part in values.split(",") if part.strip()]
        return tuple(cleaned) if cleaned else default
    return default


def load_runtime_config(config_path: Path | None = None) -> RuntimeConfig:
    """Load runtime config from `config/runtime.toml` plus optional local override."""
    source = (config_path or DEFAULT_CONFIG_PATH).expanduser().resolve()
    if not source.exists():
        raise RuntimeError(f"runtime config file not found: {source}")

    payload = _read_toml(source)
    if source == DEFAULT_CONFIG_PATH and DEFAULT_LOCAL_OVERRIDE_PATH.exists():
        payload = _deep_merge(payload, _read_toml(DEFAULT_LOCAL_OVERRIDE_PATH))

    balldontlie = _as_table(payload, "balldontlie")
    ranking = _as_table(payload, "ranking")

    return RuntimeConfig(
        config_path=source,
        balldontlie_base_url=_as_str(
            balldontlie.get("base_url"),
            default="https://api.balldontlie.io",
        ),
        balldontlie_timeout_s=_as_float(balldontlie.get("timeout_s"), default=10.0),
        balldontlie_key_files=_as_csv_list(
            balldontlie.get("key_files"),
            default=("BALLDONTLIE_API_KEY.ignore", "BALLDONTLIE_API_KEY"),
        ),
        ranking_mode=_as_str(ranking.get("mode"), default="rank_proxy"),
        ranking_leagues=tuple(
            league.upper()
            for league in _as_csv_list(ranking.get("leagues"), default=("NBA", "NFL"))
        ),
        week_ahead_days=_as_int(ranking.get("week_ahead_days"), default=7),
        week_ahead_top_n=_as_int(ranking.get("week_ahead_top_n"), default=10),
        same_day_top_n=_as_int(ranking.get("same_day_top_n"), default=5),
        timezone=_as_str(ranking.get("timezone"), default="America/New_York"),
    )
