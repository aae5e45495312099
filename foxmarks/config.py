from __future__ import annotations

import os
from dataclasses import dataclass
from pathlib import Path
from typing import Optional

import yaml


def _env_bool(name: str, default: bool) -> bool:
    v = os.getenv(name)
    if v is None or v == "":
        return default
    return v.strip().lower() in ("1", "true", "yes", "y", "on")


def _env_str(name: str, default: str) -> str:
    v = os.getenv(name)
    return default if v is None or v == "" else v


@dataclass
class Settings:
    # Input
    input_sqlite_file: str = "places.sqlite"

    # Filters
    raw: bool = False  # True => ignore denormalize / ignore_defaults
    denormalize: bool = False
    ignore_defaults: bool = False

    # Output
    stdout_format: str = "table"
    header: bool = True

    # Logging / UX
    silent: bool = False
    log_level: str = "INFO"
    no_color: bool = False

    @staticmethod
    def from_env() -> "Settings":
        s = Settings()
        s.input_sqlite_file = _env_str("FOXMARKS_INPUT_SQLITE_FILE", s.input_sqlite_file)

        s.raw = _env_bool("FOXMARKS_RAW", s.raw)
        s.denormalize = _env_bool("FOXMARKS_DENORMALIZE", s.denormalize)
        s.ignore_defaults = _env_bool("FOXMARKS_IGNORE_DEFAULTS", s.ignore_defaults)

        s.stdout_format = _env_str("FOXMARKS_STDOUT_FORMAT", s.stdout_format)
        s.header = _env_bool("FOXMARKS_HEADER", s.header)

        s.silent = _env_bool("FOXMARKS_SILENT", s.silent)
        s.log_level = _env_str("FOXMARKS_LOG_LEVEL", s.log_level)
        s.no_color = _env_bool("FOXMARKS_NO_COLOR", s.no_color)
        return s

    @staticmethod
    def from_file(path: Path) -> "Settings":
        data = yaml.safe_load(path.read_text(encoding="utf-8")) or {}
        if not isinstance(data, dict):
            raise ValueError(f"expected a mapping at the top of {path}, got {type(data).__name__}")
        s = Settings.from_env()
        for k, v in data.items():
            key = str(k).replace("-", "_")
            if hasattr(s, key):
                setattr(s, key, v)
        return s

    def enabled_filters(self) -> list[str]:
        if self.raw:
            return []
        names = []
        if self.denormalize:
            names.append("denormalize")
        if self.ignore_defaults:
            names.append("ignore-defaults")
        return names


def load_settings(config_path: Optional[str]) -> Settings:
    if config_path:
        return Settings.from_file(Path(config_path))
    return Settings.from_env()
