from __future__ import annotations

from typing import Iterable, List

from .log import get_logger
from .model import BookmarkRecord

log = get_logger(__name__)

# Folder path of the bookmarks Firefox ships with a fresh profile.
DEFAULTS_FOLDER = "menu/Mozilla Firefox"


def remove_defaults(records: Iterable[BookmarkRecord], defaults_folder: str = DEFAULTS_FOLDER) -> List[BookmarkRecord]:
    """Drop the built-in Firefox bookmarks.

    Removed are: every folder record (no ``url``), every record whose
    ``folder`` equals ``defaults_folder`` exactly, and every direct child of
    such a record. Everything else is returned unchanged.
    """
    rows = list(records)
    marker_ids = {r.id for r in rows if r.folder == defaults_folder}

    out: List[BookmarkRecord] = []
    for r in rows:
        if not r.is_leaf:
            continue
        if r.id in marker_ids or r.parent in marker_ids:
            continue
        out.append(r)

    removed = len(rows) - len(out)
    if removed:
        log.info("Removed %d default/folder records (%s).", removed, defaults_folder)
    return out
