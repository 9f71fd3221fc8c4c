"""Persistent JSON config and environment settings.

Stores the line-number default, the status-bar hint toggle, and the help
fallback commands. All access is defensive: malformed or missing config
falls back to built-in defaults.
"""

from __future__ import annotations

import json
import os
from collections.abc import Mapping
from dataclasses import dataclass, field
from pathlib import Path

from platformdirs import user_config_dir

APP_NAME = "navipage"
CONFIG_FILENAME = "config.json"
CONFIG_PATH = Path(user_config_dir(APP_NAME, appauthor=False)) / CONFIG_FILENAME

ENV_DIR = "NAVIPAGE_DIR"
ENV_SH = "NAVIPAGE_SH"

HELP_URL = "https://github.com/smlavine/navipage"
DEFAULT_HELP_COMMANDS: tuple[tuple[str, ...], ...] = (
    ("man", "navipage"),
    ("man", "./navipage.1"),
    ("less", "README.md"),
)


@dataclass
class Flags:
    """Command-line switches carried into the pager."""

    debug: bool = False
    numbers: bool = False
    recurse_more: bool = False
    sh: bool = False


@dataclass(frozen=True)
class Settings:
    """Values read from the config file, already validated."""

    numbers: bool = False
    show_hint: bool = True
    help_commands: tuple[tuple[str, ...], ...] = field(default=DEFAULT_HELP_COMMANDS)
    help_url: str = HELP_URL


def load_config(path: Path | None = None) -> dict[str, object]:
    """Load the persisted JSON config object.

    Returns an empty dict when the file is missing, unreadable, malformed, or
    does not decode to a top-level JSON object.
    """
    config_path = path if path is not None else CONFIG_PATH
    try:
        data = json.loads(config_path.read_text(encoding="utf-8"))
    except (OSError, ValueError):
        return {}
    return data if isinstance(data, dict) else {}


def _coerce_help_commands(value: object) -> tuple[tuple[str, ...], ...] | None:
    """Accept a list of non-empty argv lists made only of strings."""
    if not isinstance(value, list) or not value:
        return None
    commands: list[tuple[str, ...]] = []
    for entry in value:
        if not isinstance(entry, list) or not entry:
            return None
        if not all(isinstance(arg, str) and arg for arg in entry):
            return None
        commands.append(tuple(entry))
    return tuple(commands)


def load_settings(path: Path | None = None) -> Settings:
    data = load_config(path)
    defaults = Settings()

    numbers = data.get("numbers")
    show_hint = data.get("show_hint")
    help_url = data.get("help_url")
    help_commands = _coerce_help_commands(data.get("help_commands"))

    return Settings(
        numbers=numbers if isinstance(numbers, bool) else defaults.numbers,
        show_hint=show_hint if isinstance(show_hint, bool) else defaults.show_hint,
        help_commands=help_commands if help_commands is not None else defaults.help_commands,
        help_url=help_url if isinstance(help_url, str) and help_url else defaults.help_url,
    )


def default_corpus_dir(environ: Mapping[str, str] | None = None) -> str | None:
    """Return ``NAVIPAGE_DIR`` when set to a non-empty value."""
    env = os.environ if environ is None else environ
    value = env.get(ENV_DIR, "")
    return value or None


def startup_script(environ: Mapping[str, str] | None = None) -> str | None:
    """Return the ``NAVIPAGE_SH`` snippet when set to a non-empty value."""
    env = os.environ if environ is None else environ
    value = env.get(ENV_SH, "")
    return value or None
