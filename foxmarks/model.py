from __future__ import annotations

from dataclasses import dataclass
from typing import Dict, Optional, Union


@dataclass(frozen=True)
class BookmarkRecord:
    """One row of moz_bookmarks: a link when ``url`` is set, a folder otherwise."""

    id: int
    parent: int
    url: Optional[str]
    title: str = ""
    folder: str = ""

    @property
    def is_leaf(self) -> bool:
        return self.url is not None

    def to_dict(self) -> Dict[str, Union[str, int, None]]:
        # Key order is the column order of every output format.
        return {
            "url": self.url,
            "title": self.title,
            "folder": self.folder,
            "id": self.id,
            "parent": self.parent,
        }
