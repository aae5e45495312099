from __future__ import annotations

import sqlite3
import tempfile
from contextlib import contextmanager
from pathlib import Path
from typing import Iterator, List

from .log import get_logger
from .model import BookmarkRecord

log = get_logger(__name__)

PLACES_FILENAME = "places.sqlite"

# Firefox keeps recent writes in the WAL until the next checkpoint.
_SIDECAR_SUFFIXES = ("-wal",)

BOOKMARKS_QUERY = """
    SELECT b.id, b.parent, p.url, b.title
    FROM moz_bookmarks AS b
    LEFT JOIN moz_places AS p ON p.id = b.fk
    ORDER BY b.id
"""


class PlacesDB:
    def __init__(self, db_path: Path | str, *, readonly: bool = True, busy_timeout_ms: int = 5000):
        self.db_path = Path(db_path)
        self.readonly = readonly
        self.busy_timeout_ms = max(0, int(busy_timeout_ms))
        self.conn: sqlite3.Connection | None = None

    def __enter__(self) -> "PlacesDB":
        self.open()
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        self.close()

    def open(self) -> None:
        if not self.db_path.is_file():
            raise FileNotFoundError(f"{PLACES_FILENAME} not found: {self.db_path}")
        mode = "ro" if self.readonly else "rw"
        uri = f"file:{self.db_path.as_posix()}?mode={mode}"
        timeout_s = max(0.1, self.busy_timeout_ms / 1000.0) if self.busy_timeout_ms > 0 else 0.1
        self.conn = sqlite3.connect(uri, uri=True, timeout=timeout_s)
        self.conn.row_factory = sqlite3.Row
        if self.busy_timeout_ms > 0:
            self.conn.execute(f"PRAGMA busy_timeout = {self.busy_timeout_ms}")

    def close(self) -> None:
        if self.conn is not None:
            self.conn.close()
            self.conn = None

    def read_records(self) -> List[BookmarkRecord]:
        """Every moz_bookmarks row, folders and separators included, unfiltered."""
        if self.conn is None:
            raise RuntimeError("PlacesDB is not open")
        log.info("Bookmarks query: %s", " ".join(BOOKMARKS_QUERY.split()))
        rows = self.conn.execute(BOOKMARKS_QUERY).fetchall()
        out = [_row_to_record(r) for r in rows]
        log.debug("Fetched records: %s", out)
        return out


def read_bookmarks(profile_or_db_path: Path | str) -> List[BookmarkRecord]:
    db_path = resolve_places_path(Path(profile_or_db_path))
    with snapshot(db_path) as copy_path:
        # The snapshot is private, so it may be opened writable for WAL recovery.
        with PlacesDB(copy_path, readonly=False) as db:
            records = db.read_records()
    log.info("Fetched %d bookmark records from %s", len(records), db_path)
    return records


def resolve_places_path(profile_or_db_path: Path) -> Path:
    p = Path(profile_or_db_path)
    if p.is_file():
        return p
    db = p / PLACES_FILENAME
    if db.is_file():
        return db
    raise FileNotFoundError(f"{PLACES_FILENAME} not found in {p}")


@contextmanager
def snapshot(db_path: Path) -> Iterator[Path]:
    """Copy the database (and its WAL) to a temp dir; Firefox locks the live file."""
    with tempfile.TemporaryDirectory(prefix="foxmarks-") as tmp:
        dest = Path(tmp) / PLACES_FILENAME
        dest.write_bytes(db_path.read_bytes())
        for suffix in _SIDECAR_SUFFIXES:
            sidecar = db_path.with_name(db_path.name + suffix)
            if sidecar.is_file():
                dest.with_name(dest.name + suffix).write_bytes(sidecar.read_bytes())
        log.info("Copied %s -> %s", db_path, dest)
        yield dest
    log.debug("Removed snapshot of %s", db_path)


def _row_to_record(row: sqlite3.Row) -> BookmarkRecord:
    return BookmarkRecord(
        id=int(row["id"]),
        parent=int(row["parent"] or 0),
        url=row["url"],
        title=row["title"] or "",
    )
