from __future__ import annotations

from typing import Callable, Dict, Iterable, List

from .defaults import remove_defaults
from .denormalize import denormalize
from .log import get_logger
from .model import BookmarkRecord

log = get_logger(__name__)

FilterFunc = Callable[[Iterable[BookmarkRecord]], List[BookmarkRecord]]

# Application order. The defaults filter matches on the denormalized folder
# path, so it has to come after denormalize.
FILTERS: Dict[str, FilterFunc] = {
    "denormalize": denormalize,
    "ignore-defaults": remove_defaults,
}


def filter_names() -> str:
    return ", ".join(sorted(FILTERS))


def apply_filters(records: Iterable[BookmarkRecord], names: Iterable[str]) -> List[BookmarkRecord]:
    wanted = set(names)
    unknown = sorted(wanted - set(FILTERS))
    if unknown:
        raise ValueError(f"unknown filter(s) {', '.join(unknown)} (available: {filter_names()})")

    out = list(records)
    if not wanted:
        log.info("No filters enabled; keeping all %d records.", len(out))
        return out

    log.info("Applying filters: %s", ", ".join(n for n in FILTERS if n in wanted))
    for name, func in FILTERS.items():
        if name not in wanted:
            continue
        before = len(out)
        out = func(out)
        log.info("Filter %s: %d -> %d records.", name, before, len(out))
    return out
