from __future__ import annotations

import logging
from dataclasses import dataclass
from datetime import datetime
from pathlib import Path
from typing import List, Tuple

import yaml

logger = logging.getLogger(__name__)

DEFAULT_LIMIT = 10


@dataclass(frozen=True)
class RecentEntry:
    path: Path
    opened_at: datetime

    @property
    def name(self) -> str:
        return self.path.name


class RecentFiles:
    """Most-recently-opened files, persisted as YAML at ``path``.

    The store is owned by whoever creates it; nothing is shared between
    instances and nothing touches disk until ``load`` or ``save`` is called.
    """

    def __init__(self, path: str | Path, limit: int = DEFAULT_LIMIT) -> None:
        self.path = Path(path)
        self.limit = limit
        self._entries: List[RecentEntry] = []

    @property
    def entries(self) -> Tuple[RecentEntry, ...]:
        return tuple(self._entries)

    def add(self, file: str | Path, opened_at: datetime | None = None) -> RecentEntry:
        resolved = Path(file).expanduser().resolve()
        entry = RecentEntry(path=resolved, opened_at=opened_at or datetime.now())
        self._entries = [e for e in self._entries if e.path != resolved]
        self._entries.insert(0, entry)
        del self._entries[self.limit :]
        return entry

    def load(self) -> "RecentFiles":
        self._entries = []
        if not self.path.exists():
            return self
        try:
            data = yaml.safe_load(self.path.read_text(encoding="utf-8")) or {}
        except (OSError, yaml.YAMLError) as exc:
            logger.warning("Ignoring unreadable recent-files store %s: %s", self.path, exc)
            return self
        if not data:
            return self
        items = data.get("recent") if isinstance(data, dict) else None
        if not isinstance(items, list):
            logger.warning("Ignoring malformed recent-files store %s", self.path)
            return self
        for item in items:
            entry = _entry_from_dict(item)
            if entry is not None:
                self._entries.append(entry)
        del self._entries[self.limit :]
        return self

    def save(self) -> None:
        payload = {
            "recent": [
                {"path": str(entry.path), "opened_at": entry.opened_at.isoformat()}
                for entry in self._entries
            ]
        }
        self.path.parent.mkdir(parents=True, exist_ok=True)
        self.path.write_text(yaml.safe_dump(payload, sort_keys=False), encoding="utf-8")


def _entry_from_dict(item) -> RecentEntry | None:
    if not isinstance(item, dict) or not item.get("path"):
        return None
    opened_at = item.get("opened_at")
    if isinstance(opened_at, datetime):
        stamp = opened_at
    else:
        try:
            stamp = datetime.fromisoformat(str(opened_at))
        except ValueError:
            logger.debug("Bad timestamp for %s in recent-files store", item.get("path"))
            return None
    return RecentEntry(path=Path(str(item["path"])), opened_at=stamp)
