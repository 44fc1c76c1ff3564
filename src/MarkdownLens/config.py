from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path

import yaml

from . import themes
from .markdown_parser import HeaderMode
from .recent_files import DEFAULT_LIMIT

KNOWN_KEYS = {"theme", "header_mode", "recent_file", "max_recent"}


@dataclass(frozen=True)
class ViewerConfig:
    theme: str = themes.DEFAULT_THEME
    header_mode: HeaderMode = HeaderMode.COMPAT
    recent_file: Path | None = None
    max_recent: int = DEFAULT_LIMIT


def load_config(path: str | Path | None = None) -> ViewerConfig:
    """Read a YAML config file; without a path the defaults apply."""
    if path is None:
        return ViewerConfig()
    path = Path(path)
    return parse_config(path.read_text(encoding="utf-8"), base_dir=path.parent)


def parse_config(text: str, base_dir: Path | None = None) -> ViewerConfig:
    """Parse YAML config text; a relative ``recent_file`` is taken from ``base_dir``."""
    data = yaml.safe_load(text) or {}
    if not isinstance(data, dict):
        raise ValueError("Config root must be a mapping.")
    unknown = sorted(str(key) for key in data if key not in KNOWN_KEYS)
    if unknown:
        raise ValueError(f"Unknown config key(s): {', '.join(unknown)}")

    theme = str(data.get("theme") or themes.DEFAULT_THEME)
    themes.get_theme(theme)

    return ViewerConfig(
        theme=theme,
        header_mode=_parse_header_mode(data.get("header_mode")),
        recent_file=_parse_path(data.get("recent_file"), base_dir),
        max_recent=_parse_limit(data.get("max_recent")),
    )


def _parse_header_mode(value) -> HeaderMode:
    if value is None:
        return HeaderMode.COMPAT
    try:
        return HeaderMode(str(value).strip().lower())
    except ValueError:
        choices = ", ".join(mode.value for mode in HeaderMode)
        raise ValueError(f"header_mode must be one of: {choices}") from None


def _parse_path(value, base_dir: Path | None) -> Path | None:
    if not value:
        return None
    path = Path(str(value)).expanduser()
    if not path.is_absolute() and base_dir is not None:
        path = base_dir / path
    return path


def _parse_limit(value) -> int:
    if value is None:
        return DEFAULT_LIMIT
    if isinstance(value, bool) or not isinstance(value, int) or value < 1:
        raise ValueError("max_recent must be a positive integer.")
    return value
