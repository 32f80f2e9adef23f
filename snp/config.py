"""Configuration loading: YAML file first, ``SNP_*`` environment overlay second.

The result is an immutable ``Config`` read once at startup and passed down
explicitly. Missing or malformed files fall back to defaults.
"""

from __future__ import annotations

import logging
import os
from collections.abc import Mapping
from dataclasses import dataclass, fields, replace
from pathlib import Path

import yaml
from platformdirs import user_config_dir, user_data_dir

from .snippet import DEFAULT_LANGUAGE

logger = logging.getLogger(__name__)

APP_NAME = "snp"
CONFIG_FILENAME = "config.yaml"
CONFIG_ENV_VAR = "SNP_CONFIG"
DEFAULT_CONFIG_PATH = Path(user_config_dir(APP_NAME, appauthor=False)) / CONFIG_FILENAME
DEFAULT_ROOT = Path(user_data_dir(APP_NAME, appauthor=False))


@dataclass(frozen=True)
class Config:
    """Session-wide settings. Colors are ANSI 256 indices or ``#rrggbb``."""

    root: Path = DEFAULT_ROOT
    default_language: str = DEFAULT_LANGUAGE
    theme: str = "dracula"
    log_level: str = "WARNING"
    foreground: str = "15"
    background: str = "0"
    red: str = "1"
    green: str = "2"
    yellow: str = "3"
    blue: str = "4"
    magenta: str = "5"
    cyan: str = "6"
    bright_red: str = "9"
    bright_green: str = "10"
    bright_yellow: str = "11"
    bright_blue: str = "12"
    bright_magenta: str = "13"
    bright_cyan: str = "14"
    gray: str = "7"


# Field name -> environment variable. Bright colors keep the short ``BR`` form.
ENV_VARS: dict[str, str] = {
    "root": "SNP_ROOT",
    "default_language": "SNP_DEFAULT_LANGUAGE",
    "theme": "SNP_THEME",
    "log_level": "SNP_LOG_LEVEL",
    "foreground": "SNP_FOREGROUND",
    "background": "SNP_BACKGROUND",
    "red": "SNP_RED",
    "green": "SNP_GREEN",
    "yellow": "SNP_YELLOW",
    "blue": "SNP_BLUE",
    "magenta": "SNP_MAGENTA",
    "cyan": "SNP_CYAN",
    "bright_red": "SNP_BRRED",
    "bright_green": "SNP_BRGREEN",
    "bright_yellow": "SNP_BRYELLOW",
    "bright_blue": "SNP_BRBLUE",
    "bright_magenta": "SNP_BRMAGENTA",
    "bright_cyan": "SNP_BRCYAN",
    "gray": "SNP_GRAY",
}

_FIELD_NAMES = frozenset(field.name for field in fields(Config))


def config_path(environ: Mapping[str, str] | None = None) -> Path:
    """Return the config file location, honoring ``$SNP_CONFIG``."""
    environ = os.environ if environ is None else environ
    override = environ.get(CONFIG_ENV_VAR, "").strip()
    if override:
        return Path(override).expanduser()
    return DEFAULT_CONFIG_PATH


def _coerce(name: str, value: object) -> object:
    if name == "root":
        return Path(str(value)).expanduser()
    return str(value).strip()


def _apply(config: Config, values: Mapping[str, object]) -> Config:
    updates: dict[str, object] = {}
    for name, value in values.items():
        if name not in _FIELD_NAMES or value is None:
            continue
        coerced = _coerce(name, value)
        if coerced == "":
            continue
        updates[name] = coerced
    return replace(config, **updates) if updates else config


def load_file_values(path: Path) -> dict[str, object]:
    """Read the YAML config file as a flat mapping.

    Returns an empty dict when the file is missing, unreadable, malformed, or
    not a top-level mapping.
    """
    try:
        raw = path.read_text(encoding="utf-8")
    except FileNotFoundError:
        return {}
    except OSError as exc:
        logger.warning("cannot read config %s: %s", path, exc)
        return {}
    try:
        data = yaml.safe_load(raw)
    except yaml.YAMLError as exc:
        logger.warning("ignoring malformed config %s: %s", path, exc)
        return {}
    if data is None:
        return {}
    if not isinstance(data, dict):
        logger.warning("ignoring config %s: expected a mapping", path)
        return {}
    return {str(key): value for key, value in data.items()}


def env_values(environ: Mapping[str, str] | None = None) -> dict[str, object]:
    environ = os.environ if environ is None else environ
    return {name: environ[var] for name, var in ENV_VARS.items() if var in environ}


def load_config(environ: Mapping[str, str] | None = None, path: Path | None = None) -> Config:
    """Build the session config from defaults, file values, then environment."""
    environ = os.environ if environ is None else environ
    path = config_path(environ) if path is None else path
    config = _apply(Config(), load_file_values(path))
    return _apply(config, env_values(environ))
