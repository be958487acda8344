"""Signal extractors that turn scheduled games into scoring inputs.

One extractor is selected per run by its mode id.
"""

from hype_rank.extractors.registry import (
    get_extractor,
    list_extractors,
    mode_aliases,
    resolve_mode,
)

__all__ = ["get_extractor", "list_extractors", "mode_aliases", "resolve_mode"]
