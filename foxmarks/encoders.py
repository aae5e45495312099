from __future__ import annotations

import csv
import json
import sys
from contextlib import ExitStack
from dataclasses import dataclass
from pathlib import Path
from typing import Callable, Dict, Iterable, List, Optional, Sequence, TextIO

import yaml

from .log import get_logger
from .model import BookmarkRecord
from .table import render_table

log = get_logger(__name__)

HEADER = ("URL", "TITLE", "FOLDER", "ID", "PARENT")

STDOUT = "-"
_FORMAT_DELIMITER = ":"
_FILES_DELIMITER = ","


class EncodeError(Exception):
    """Writing one output target failed."""


@dataclass(frozen=True)
class OutputTarget:
    format: str
    filename: str = STDOUT

    @property
    def is_stdout(self) -> bool:
        return self.filename == STDOUT

    def __str__(self) -> str:
        return f"{self.format}{_FORMAT_DELIMITER}{self.filename}"


def bookmarks_table(records: Iterable[BookmarkRecord], header: bool, *, underline: bool = True) -> List[List[str]]:
    rows = list(records)
    if not rows:
        # No header either: an empty export stays empty.
        return []

    table: List[List[str]] = []
    if header:
        table.append(list(HEADER))
        if underline:
            table.append(["-" * len(h) for h in HEADER])
    for r in rows:
        table.append([
            (r.url or "").strip(),
            r.title.strip(),
            r.folder.strip(),
            str(r.id),
            str(r.parent),
        ])
    return table


def encode_json(records: Sequence[BookmarkRecord], out: TextIO, *, header: bool = True) -> None:
    json.dump([r.to_dict() for r in records], out, indent="\t", ensure_ascii=False)
    out.write("\n")


def encode_yaml(records: Sequence[BookmarkRecord], out: TextIO, *, header: bool = True) -> None:
    yaml.safe_dump(
        [r.to_dict() for r in records],
        out,
        sort_keys=False,
        allow_unicode=True,
        default_flow_style=False,
    )


def encode_csv(records: Sequence[BookmarkRecord], out: TextIO, *, header: bool = True) -> None:
    writer = csv.writer(out, lineterminator="\n")
    writer.writerows(bookmarks_table(records, header))


def encode_table(records: Sequence[BookmarkRecord], out: TextIO, *, header: bool = True) -> None:
    rows = bookmarks_table(records, header, underline=False)
    for line in render_table(rows, header_separator=header):
        out.write(line + "\n")


Encoder = Callable[..., None]

ENCODERS: Dict[str, Encoder] = {
    "csv": encode_csv,
    "json": encode_json,
    "table": encode_table,
    "yaml": encode_yaml,
}


def encoder_names() -> str:
    return ", ".join(sorted(ENCODERS))


def get_encoder(name: str) -> Encoder:
    try:
        return ENCODERS[name]
    except KeyError:
        raise ValueError(f"unknown output format {name!r} (available: {encoder_names()})") from None


def parse_output_files(value: str) -> List[OutputTarget]:
    """Parse ``FORMAT:FILE[,FORMAT:FILE...]`` into targets sorted by format."""
    out: List[OutputTarget] = []
    for index, item in enumerate(value.split(_FILES_DELIMITER)):
        fmt, _, filename = item.partition(_FORMAT_DELIMITER)
        previous = _FILES_DELIMITER.join(str(t) for t in out)
        if not filename:
            if not fmt:
                if index == 0:
                    raise ValueError(
                        "missing argument in format --output-files=<format>:<filename>"
                        "[,<format>:<filename>,...]"
                    )
                raise ValueError(
                    f"missing arguments after delimiter {_FILES_DELIMITER!r} in "
                    f"--output-files={previous},<format>:<filename>"
                )
            if index == 0:
                raise ValueError(f"missing filename in --output-files={fmt}:<filename>")
            raise ValueError(f"missing filename in --output-files={previous},{fmt}:<filename>")
        if fmt not in ENCODERS:
            raise ValueError(
                "invalid output format in --output-files=<format>:<filename> "
                f"(allowed formats: {encoder_names()})"
            )
        out.append(OutputTarget(format=fmt, filename=filename))
    return sorted(out, key=lambda t: t.format)


def write_outputs(
    records: Sequence[BookmarkRecord],
    targets: Iterable[OutputTarget],
    *,
    header: bool = True,
    stdout: Optional[TextIO] = None,
) -> None:
    """Encode ``records`` into every target; nothing is written (or created) when there are none."""
    if not records:
        log.info("No bookmarks to write; skipping outputs.")
        return
    for target in targets:
        encoder = get_encoder(target.format)
        try:
            with ExitStack() as stack:
                if target.is_stdout:
                    out = stdout or sys.stdout
                else:
                    path = Path(target.filename)
                    if path.parent != Path("."):
                        path.parent.mkdir(parents=True, exist_ok=True)
                    out = stack.enter_context(path.open("w", encoding="utf-8", newline=""))
                encoder(records, out, header=header)
                out.flush()
        except (OSError, yaml.YAMLError, csv.Error, ValueError) as e:
            log.error("Failed to encode %s: %s", target, e)
            raise EncodeError(f"failed to encode to {target}: {e}") from e
        log.info("Wrote %d records as %s to %s", len(records), target.format,
                 "stdout" if target.is_stdout else target.filename)
