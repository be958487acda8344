"""CLI entrypoint for hype-rank."""

from __future__ import annotations

import argparse
import random
import sys
from pathlib import Path
from zoneinfo import ZoneInfo, ZoneInfoNotFoundError

from loguru import logger

from hype_rank.balldontlie_client import GAMES_PATHS, BallDontLieError
from hype_rank.extractors import get_extractor, list_extractors, mode_aliases
from hype_rank.log import setup_logging
from hype_rank.pipeline import run
from hype_rank.report import format_report, no_games_notice
from hype_rank.runtime_config import (
    RuntimeConfig,
    current_runtime_config,
    load_runtime_config,
    set_current_runtime_config,
)
from hype_rank.settings import Settings
from hype_rank.time_utils import parse_date, today_in


class CLIError(RuntimeError):
    """User-facing CLI error."""


def _runtime_config(args: argparse.Namespace) -> RuntimeConfig:
    raw_path = str(getattr(args, "config", "") or "").strip()
    if raw_path:
        config = load_runtime_config(Path(raw_path))
        set_current_runtime_config(config)
        return config
    return current_runtime_config()


def _resolve_leagues(raw: list[str] | None, default: tuple[str, ...]) -> list[str]:
    leagues = [value.strip().upper() for value in (raw or default) if value.strip()]
    unknown = sorted(set(leagues) - set(GAMES_PATHS))
    if unknown:
        options = ",".join(sorted(GAMES_PATHS))
        raise CLIError(f"unsupported league: {','.join(unknown)} (options: {options})")
    return leagues


def _cmd_run(args: argparse.Namespace) -> int:
    config = _runtime_config(args)
    mode = str(args.mode or config.ranking_mode)
    rng = random.Random(args.seed) if args.seed is not None else None
    extractor = get_extractor(mode, rng=rng)

    top_n = args.top_n
    if top_n is None:
        top_n = config.top_n_for(extractor.info.window)
    if top_n < 0:
        raise CLIError("--top-n must be >= 0")

    if args.date:
        today = parse_date(args.date)
        if today is None:
            raise CLIError(f"invalid --date value: {args.date} (expected YYYY-MM-DD)")
    else:
        try:
            zone = ZoneInfo(config.timezone)
        except ZoneInfoNotFoundError as exc:
            raise CLIError(f"unknown timezone in runtime config: {config.timezone}") from exc
        today = today_in(zone)

    result = run(
        Settings.from_runtime(),
        mode=extractor,
        top_n=top_n,
        today=today,
        leagues=_resolve_leagues(args.league, config.ranking_leagues),
        week_ahead_days=config.week_ahead_days,
    )
    if not result.top:
        print(no_games_notice(result.window))
        return 0
    print(format_report(result.top, extractor=result.extractor, window=result.window))
    return 0


def _cmd_modes(args: argparse.Namespace) -> int:
    for extractor in list_extractors():
        info = extractor.info
        print(f"{info.id}\t{info.window}\ttop_n={info.default_top_n}\t{info.description}")
    aliases = mode_aliases()
    if aliases:
        rendered = ", ".join(f"{alias}->{target}" for alias, target in sorted(aliases.items()))
        print(f"aliases: {rendered}")
    return 0


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="hype-rank")
    parser.add_argument(
        "--config",
        default="",
        help="Path to runtime config TOML (default: config/runtime.toml).",
    )
    parser.add_argument("--verbose", "-v", action="store_true", help="Enable debug logging.")
    subparsers = parser.add_subparsers(dest="command")

    run_parser = subparsers.add_parser("run", help="Fetch, score and print top games")
    run_parser.add_argument(
        "--mode",
        default="",
        help="Scoring mode: rank_proxy (week ahead) or synthetic (same day).",
    )
    run_parser.add_argument(
        "--top-n",
        type=int,
        default=None,
        help="Number of games to print (default depends on mode).",
    )
    run_parser.add_argument("--date", default="", help="Reference date YYYY-MM-DD.")
    run_parser.add_argument(
        "--league",
        action="append",
        default=None,
        help="League to fetch; repeatable (default from runtime config).",
    )
    run_parser.add_argument(
        "--seed",
        type=int,
        default=None,
        help="Seed for synthetic factor sampling.",
    )
    run_parser.set_defaults(func=_cmd_run)

    modes_parser = subparsers.add_parser("modes", help="List scoring modes")
    modes_parser.set_defaults(func=_cmd_modes)

    return parser


def main(argv: list[str] | None = None) -> int:
    """Run the CLI."""
    parser = _build_parser()
    args = parser.parse_args(argv)
    setup_logging("DEBUG" if args.verbose else "INFO")
    func = getattr(args, "func", None)
    if func is None:
        parser.print_help()
        return 0
    try:
        return int(func(args))
    except (CLIError, BallDontLieError, RuntimeError, ValueError) as exc:
        logger.debug("command failed: {!r}", exc)
        print(str(exc), file=sys.stderr)
        return 2


if __name__ == "__main__":
    raise SystemExit(main())
