import logging
import sqlite3
import sys
from pathlib import Path

import pytest

# Allow `import foxmarks` without installing the package.
ROOT = Path(__file__).resolve().parents[1]
sys.path.insert(0, str(ROOT))

# (id, type, fk, parent, position, title, guid)
FIREFOX_BOOKMARKS = [
    (1, 2, None, 0, 0, "", "root________"),
    (2, 2, None, 1, 0, "menu", "menu________"),
    (3, 2, None, 1, 1, "toolbar", "toolbar_____"),
    (4, 2, None, 1, 2, "tags", "tags________"),
    (5, 2, None, 1, 3, "unfiled", "unfiled_____"),
    (6, 2, None, 1, 4, "mobile", "mobile______"),
    (7, 2, None, 2, 0, "Mozilla Firefox", "mozfolder001"),
    (8, 1, 100, 7, 0, "Get Help", "mozlink00001"),
    (9, 1, 101, 7, 1, "About Us", "mozlink00002"),
    (10, 2, None, 3, 0, "Profiles", "folder000010"),
    (11, 2, None, 10, 0, "GitHub", "folder000011"),
    (12, 1, 102, 11, 0, "Vague Coder", "link00000012"),
    (13, 1, 103, 2, 1, "Mozilla", "link00000013"),
    (14, 2, None, 5, 0, "Empty", "folder000014"),
]

FIREFOX_PLACES = [
    (100, "https://support.mozilla.org/products/firefox", "help"),
    (101, "https://www.mozilla.org/about/", "about"),
    (102, "https://github.com/vaguecoder", "github"),
    (103, "https://www.mozilla.org/", "mozilla"),
]


def mk_places_db(path: Path, bookmarks=FIREFOX_BOOKMARKS, places=FIREFOX_PLACES) -> Path:
    conn = sqlite3.connect(path)
    try:
        conn.executescript(
            """
            CREATE TABLE moz_places (
              id INTEGER PRIMARY KEY,
              url TEXT,
              title TEXT,
              hidden INTEGER DEFAULT 0
            );
            CREATE TABLE moz_bookmarks (
              id INTEGER PRIMARY KEY,
              type INTEGER,
              fk INTEGER DEFAULT NULL,
              parent INTEGER,
              position INTEGER,
              title TEXT,
              guid TEXT,
              dateAdded INTEGER,
              lastModified INTEGER
            );
            """
        )
        conn.executemany(
            "INSERT INTO moz_bookmarks(id,type,fk,parent,position,title,guid,dateAdded,lastModified) "
            "VALUES(?,?,?,?,?,?,?,0,0)",
            bookmarks,
        )
        conn.executemany("INSERT INTO moz_places(id,url,title) VALUES(?,?,?)", places)
        conn.commit()
    finally:
        conn.close()
    return path


@pytest.fixture
def places_db(tmp_path: Path) -> Path:
    return mk_places_db(tmp_path / "places.sqlite")


@pytest.fixture(autouse=True)
def _isolate_env_and_logging(monkeypatch):
    """Tests must not pick up FOXMARKS_* from the environment or leak log config."""
    import os

    for name in list(os.environ):
        if name.startswith("FOXMARKS_"):
            monkeypatch.delenv(name, raising=False)

    root = logging.getLogger()
    handlers, level = list(root.handlers), root.level
    yield
    for h in list(root.handlers):
        root.removeHandler(h)
    for h in handlers:
        root.addHandler(h)
    root.setLevel(level)


@pytest.fixture
def make_places_db(tmp_path: Path):
    def _make(name: str = "custom.sqlite", bookmarks=FIREFOX_BOOKMARKS, places=FIREFOX_PLACES) -> Path:
        return mk_places_db(tmp_path / name, bookmarks, places)

    return _make
