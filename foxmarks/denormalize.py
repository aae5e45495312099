from __future__ import annotations

from collections import deque
from dataclasses import replace
from typing import Deque, Dict, Iterable, List

from .log import get_logger
from .model import BookmarkRecord

log = get_logger(__name__)


def denormalize(records: Iterable[BookmarkRecord]) -> List[BookmarkRecord]:
    """Flatten the folder tree into links annotated with their folder path.

    Every folder that has children is absorbed: its path (``folder/title``) is
    prefixed to the ``folder`` of each child and the folder record itself is
    dropped. Folders are absorbed top-down, so a link ends up with the titles
    of all its ancestors regardless of how the ids are ordered.

    Records that never get absorbed stay as they are:

    - links whose parent is not in the input (``folder`` untouched),
    - empty folders (no ``url``); callers wanting links only should pass the
      result through :func:`leaves_only`,
    - members of a parent cycle, which have no ancestor to start from.

    A link that happens to have children is absorbed like a folder: its path
    is passed down and the link itself is dropped.
    """
    working: Dict[int, BookmarkRecord] = {r.id: r for r in sorted(records, key=lambda r: r.id)}
    initial = len(working)

    children: Dict[int, List[int]] = {}
    for r in working.values():
        if r.parent != r.id:
            children.setdefault(r.parent, []).append(r.id)

    pending: Deque[int] = deque(
        rid for rid, r in working.items() if rid in children and _is_top(r, working)
    )

    absorbed = 0
    while pending:
        parent = working[pending.popleft()]
        parent_path = _parent_path(parent)
        for cid in children[parent.id]:
            child = working[cid]
            working[cid] = replace(child, folder=_child_folder(parent_path, child))
            if cid in children:
                pending.append(cid)
        del working[parent.id]
        absorbed += 1

    log.info("Denormalized %d records into %d (%d parents absorbed).", initial, len(working), absorbed)
    return list(working.values())


def leaves_only(records: Iterable[BookmarkRecord]) -> List[BookmarkRecord]:
    return [r for r in records if r.is_leaf]


def _is_top(record: BookmarkRecord, working: Dict[int, BookmarkRecord]) -> bool:
    return record.parent == record.id or record.parent not in working


def _parent_path(parent: BookmarkRecord) -> str:
    if parent.folder:
        return f"{parent.folder}/{parent.title}"
    return parent.title


def _child_folder(parent_path: str, child: BookmarkRecord) -> str:
    if child.folder:
        return f"{parent_path}/{child.folder}"
    return parent_path
