from __future__ import annotations

import random

from hype_rank.extractors import rank_proxy, synthetic
from hype_rank.extractors.base import SignalExtractor, normalize_mode

MODE_ALIASES = {
    "week": "rank_proxy",
    "week_ahead": "rank_proxy",
    "today": "synthetic",
    "same_day": "synthetic",
}


def _registry(rng: random.Random | None = None) -> dict[str, SignalExtractor]:
    extractors: list[SignalExtractor] = [
        rank_proxy.plugin(),
        synthetic.plugin(rng),
    ]
    out: dict[str, SignalExtractor] = {}
    for extractor in extractors:
        mode = normalize_mode(extractor.info.id)
        if mode in out:
            raise ValueError(f"duplicate scoring mode: {mode}")
        out[mode] = extractor
    return out


def mode_aliases() -> dict[str, str]:
    return dict(MODE_ALIASES)


def resolve_mode(mode: str) -> str:
    normalized = normalize_mode(mode)
    return MODE_ALIASES.get(normalized, normalized)


def list_extractors() -> list[SignalExtractor]:
    extractors = list(_registry().values())
    extractors.sort(key=lambda extractor: normalize_mode(extractor.info.id))
    return extractors


def get_extractor(mode: str, *, rng: random.Random | None = None) -> SignalExtractor:
    normalized = resolve_mode(mode)
    registry = _registry(rng)
    extractor = registry.get(normalized)
    if extractor is None:
        options = ",".join(sorted(registry.keys()))
        aliases = ",".join(sorted(f"{alias}->{target}" for alias, target in MODE_ALIASES.items()))
        raise ValueError(f"unknown scoring mode: {mode} (options: {options}; aliases: {aliases})")
    return extractor
