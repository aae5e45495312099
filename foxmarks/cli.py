from __future__ import annotations

import argparse
import sqlite3
import sys
import time
from pathlib import Path
from typing import List

import yaml

from . import __version__
from .config import Settings, load_settings
from .encoders import ENCODERS, EncodeError, OutputTarget, encoder_names, parse_output_files, write_outputs
from .filters import apply_filters, filter_names
from .log import LogConfig, get_logger, setup_logging
from .places_db import read_bookmarks

log = get_logger(__name__)

_DENORMALIZE_EXAMPLE = """\
denormalize example:
  raw:
    | URL                   | TITLE       | FOLDER          | ID | PARENT |
    |                       | Profiles    |                 | 1  | 0      |
    |                       | GitHub      |                 | 2  | 1      |
    | github.com/vaguecoder | Vague Coder |                 | 3  | 2      |
  denormalized:
    | github.com/vaguecoder | Vague Coder | Profiles/GitHub | 3  | 2      |
"""


def main(argv: List[str] | None = None) -> int:
    p = argparse.ArgumentParser(
        prog="foxmarks",
        description="Export Firefox bookmarks from places.sqlite as JSON, YAML, CSV or a table.",
        epilog=_DENORMALIZE_EXAMPLE,
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )
    p.add_argument("-V", "--version", action="version", version=f"foxmarks {__version__}")
    p.add_argument("--config", default=None, help="YAML config file (optional). Env vars override defaults.")
    p.add_argument(
        "--input-sqlite-file",
        default=None,
        help="Input places.sqlite file or Firefox profile dir (default: places.sqlite).",
    )
    p.add_argument(
        "--raw",
        action="store_true",
        help=f"Fetch all bookmarks without filtering; disables the filters [{filter_names()}].",
    )
    p.add_argument(
        "--denormalize",
        action="store_true",
        help="Keep only link records, with the full folder path of each in FOLDER.",
    )
    p.add_argument(
        "--ignore-defaults",
        action="store_true",
        help="Drop the default Mozilla Firefox bookmarks (and all folder records).",
    )
    p.add_argument(
        "--stdout-format",
        default=None,
        choices=sorted(ENCODERS),
        help=f"Format written to stdout [{encoder_names()}] (default: table).",
    )
    p.add_argument(
        "--output-files",
        action="append",
        default=[],
        type=_output_files_arg,
        metavar="FORMAT:FILE[,FORMAT:FILE...]",
        help="Also write these files, e.g. json:bookmarks.json,csv:bookmarks.csv.",
    )
    p.add_argument("--no-header", action="store_true", help="Omit the header row of csv/table output.")
    p.add_argument("--silent", action="store_true", help="Discard all logs.")
    p.add_argument("--log-level", default=None, help="DEBUG/INFO/WARN/ERROR (overrides env/config).")
    p.add_argument("--no-color", action="store_true", help="Disable colored logging.")

    args = p.parse_args(argv)
    try:
        cfg = load_settings(args.config)
    except (OSError, ValueError, yaml.YAMLError) as e:
        p.error(f"failed to load config {args.config}: {e}")
    _apply_args(cfg, args)
    if cfg.stdout_format not in ENCODERS:
        p.error(f"invalid stdout format {cfg.stdout_format!r} (available: {encoder_names()})")

    setup_logging(LogConfig(level=cfg.log_level, no_color=cfg.no_color, silent=cfg.silent))
    log.info("Input settings: %s", cfg)

    output_files = sorted((t for group in args.output_files for t in group), key=lambda t: t.format)
    return _cmd_export(cfg, output_files)


def _output_files_arg(value: str) -> List[OutputTarget]:
    try:
        return parse_output_files(value)
    except ValueError as e:
        raise argparse.ArgumentTypeError(str(e)) from None


def _apply_args(cfg: Settings, args: argparse.Namespace) -> None:
    if args.input_sqlite_file:
        cfg.input_sqlite_file = args.input_sqlite_file
    if args.raw:
        cfg.raw = True
    if args.denormalize:
        cfg.denormalize = True
    if args.ignore_defaults:
        cfg.ignore_defaults = True
    if args.stdout_format:
        cfg.stdout_format = args.stdout_format
    if args.no_header:
        cfg.header = False
    if args.silent:
        cfg.silent = True
    if args.log_level:
        cfg.log_level = args.log_level
    if args.no_color:
        cfg.no_color = True


def _cmd_export(cfg: Settings, output_files: List[OutputTarget]) -> int:
    t0 = time.time()
    try:
        records = read_bookmarks(Path(cfg.input_sqlite_file))
    except FileNotFoundError as e:
        log.error("Input file not found: %s", e)
        return 2
    except (OSError, sqlite3.Error, ValueError) as e:
        log.error("Failed to fetch bookmarks from %s: %s", cfg.input_sqlite_file, e)
        return 2

    if cfg.raw and (cfg.denormalize or cfg.ignore_defaults):
        log.info("Raw output requested; skipping filters.")
    records = apply_filters(records, cfg.enabled_filters())
    log.info("Count of bookmarks to write: %d", len(records))

    targets = [OutputTarget(format=cfg.stdout_format)] + output_files
    try:
        write_outputs(records, targets, header=cfg.header, stdout=sys.stdout)
    except EncodeError as e:
        log.error("%s", e)
        return 2

    log.info("Done in %d ms.", int((time.time() - t0) * 1000))
    return 0
