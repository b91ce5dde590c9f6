"""Parsing module for maze game configuration files.

A config file holds one KEY=VALUE pair per line; blank lines and lines
starting with '#' are ignored. Every key is optional:

    ROWS=25
    COLS=25
    SEED=maze-seed
    MOVE_INTERVAL_MS=130
    ANIMATE_GENERATION=False
    LOG_FILE=maze25.log
    LOG_LEVEL=INFO
"""

import logging
from dataclasses import dataclass
from pathlib import Path
from typing import Dict, Optional

from game import COLS, ROWS


LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")

KNOWN_KEYS = {
    "ROWS",
    "COLS",
    "SEED",
    "MOVE_INTERVAL_MS",
    "ANIMATE_GENERATION",
    "LOG_FILE",
    "LOG_LEVEL",
}


@dataclass(frozen=True)
class Config:
    """Parsed configuration for the game."""

    rows: int = ROWS
    cols: int = COLS
    seed: Optional[str] = None
    move_interval_ms: int = 130
    animate_generation: bool = False
    log_file: Optional[Path] = None
    log_level: str = "INFO"

    @property
    def log_level_value(self) -> int:
        return getattr(logging, self.log_level)


class ConfigError(ValueError):
    """Configuration and validation error."""

    pass


def parse_bool(value: str, *, key: str) -> bool:
    """Parse a boolean from a config value."""

    v = value.strip().lower()
    if v in {"true", "1", "yes", "y", "on"}:
        return True
    if v in {"false", "0", "no", "n", "off"}:
        return False
    raise ConfigError(f"Invalid boolean for {key}: {value!r}")


def parse_int(value: str, *, key: str) -> int:
    """Parse an integer from a config value."""

    try:
        return int(value.strip())
    except ValueError as exc:
        msg = f"Invalid integer for {key}: {value!r}"
        raise ConfigError(msg) from exc


def parse_positive(value: str, *, key: str) -> int:
    number = parse_int(value, key=key)
    if number <= 0:
        raise ConfigError(f"{key} must be > 0 (got {number})")
    return number


def read_raw(path: Path) -> Dict[str, str]:
    """Read KEY=VALUE pairs, upper-casing keys."""

    raw: Dict[str, str] = {}
    try:
        with path.open("r", encoding="utf-8") as f:
            for line_no, line in enumerate(f, start=1):
                stripped = line.strip()
                if not stripped or stripped.startswith("#"):
                    continue
                if "=" not in stripped:
                    raise ConfigError(
                        f"Bad syntax at line {line_no}: {line.rstrip()!r} "
                        "(expected KEY=VALUE)"
                    )
                k, v = stripped.split("=", 1)
                raw[k.strip().upper()] = v.strip()
    except FileNotFoundError as exc:
        raise ConfigError(f"Config file not found: {path}") from exc
    except OSError as exc:
        raise ConfigError(f"Could not read config file: {path}: {exc}") from exc
    return raw


def parse_config(raw: Dict[str, str]) -> Config:
    """Validate raw KEY=VALUE pairs into a Config."""

    unknown = sorted(set(raw) - KNOWN_KEYS)
    if unknown:
        raise ConfigError(f"Unknown config keys: {', '.join(unknown)}")

    defaults = Config()
    rows = defaults.rows
    cols = defaults.cols
    interval = defaults.move_interval_ms
    if "ROWS" in raw:
        rows = parse_positive(raw["ROWS"], key="ROWS")
    if "COLS" in raw:
        cols = parse_positive(raw["COLS"], key="COLS")
    if "MOVE_INTERVAL_MS" in raw:
        interval = parse_positive(raw["MOVE_INTERVAL_MS"], key="MOVE_INTERVAL_MS")

    animate = defaults.animate_generation
    if "ANIMATE_GENERATION" in raw:
        animate = parse_bool(raw["ANIMATE_GENERATION"], key="ANIMATE_GENERATION")

    log_level = raw.get("LOG_LEVEL", defaults.log_level).upper()
    if log_level not in LOG_LEVELS:
        raise ConfigError(f"Invalid LOG_LEVEL: {raw['LOG_LEVEL']!r}")

    log_file = raw.get("LOG_FILE") or None

    return Config(
        rows=rows,
        cols=cols,
        seed=raw.get("SEED") or None,
        move_interval_ms=interval,
        animate_generation=animate,
        log_file=Path(log_file).expanduser() if log_file else None,
        log_level=log_level,
    )


def read_config(path: Path) -> Config:
    """Read and validate the configuration file."""

    return parse_config(read_raw(path))
