"""
Nankan Settlement - Results Archive

Merge day fragments into the year/month/day results archive and
persist it as JSON.

The archive is replaced one day at a time. Writers to the same archive
file must be serialized by the caller: save() rewrites the whole document.
"""

import copy
import json
import logging
import shutil
from dataclasses import dataclass, field
from pathlib import Path
from typing import Dict, Iterator, List, Optional, Tuple

from .aggregator import split_date
from .config import SettlementConfig

logger = logging.getLogger(__name__)


def merge_archive(existing: dict, fragment: dict, date: str) -> dict:
    """
    Replace one day of the archive with the day from a fragment.

    Only existing[year][month][day] changes; every other branch is
    carried over unchanged. Missing year/month branches are created.
    Neither input is mutated, and merging the same fragment twice gives
    the same archive as merging it once.

    Args:
        existing: Archive document {year: {month: {day: entry}}}
        fragment: Day fragment of the same shape
        date: Date to merge (YYYY-MM-DD)

    Returns:
        Updated archive document

    Raises:
        ValueError: If the date is malformed or missing from the fragment
    """
    year, month, day = split_date(date)

    try:
        day_entry = fragment[year][month][day]
    except (KeyError, TypeError):
        raise ValueError(f"Fragment has no entry for {date}")

    updated = dict(existing or {})
    year_branch = dict(updated.get(year) or {})
    month_branch = dict(year_branch.get(month) or {})

    month_branch[day] = copy.deepcopy(day_entry)
    year_branch[month] = month_branch
    updated[year] = year_branch

    return updated


@dataclass
class ArchiveStore:
    """
    Archive held as a flat mapping of "YYYY-MM-DD" -> day entry.

    Nesting into {year: {month: {day: entry}}} happens only on output,
    so updating a day is a single key upsert.
    """

    entries: Dict[str, dict] = field(default_factory=dict)

    @classmethod
    def from_nested(cls, archive: dict) -> "ArchiveStore":
        store = cls()
        for year, months in (archive or {}).items():
            for month, days in (months or {}).items():
                for day, entry in (days or {}).items():
                    store.entries[f"{year}-{month}-{day}"] = entry
        return store

    def to_nested(self) -> dict:
        nested: dict = {}
        for date, entry in self.entries.items():
            year, month, day = split_date(date)
            nested.setdefault(year, {}).setdefault(month, {})[day] = entry
        return nested

    def upsert(self, date: str, entry: dict) -> "ArchiveStore":
        split_date(date)
        self.entries[date] = entry
        return self

    def get(self, date: str) -> Optional[dict]:
        return self.entries.get(date)

    def dates(self) -> List[str]:
        return sorted(self.entries)

    def items(self) -> Iterator[Tuple[str, dict]]:
        for date in self.dates():
            yield date, self.entries[date]

    def __len__(self) -> int:
        return len(self.entries)

    def __contains__(self, date: str) -> bool:
        return date in self.entries


@dataclass
class ArchiveFile:
    """
    JSON file holding the full results archive.

    Usage:
        archive = ArchiveFile.from_config(config)
        archive.merge_day(fragment, "2026-02-12")
    """

    path: Path
    public_path: Optional[Path] = None

    @classmethod
    def from_config(cls, config: Optional[SettlementConfig] = None) -> "ArchiveFile":
        config = config or SettlementConfig()
        return cls(path=config.archive_path, public_path=config.public_archive_path)

    def load(self) -> dict:
        """Load the archive, or an empty archive if the file does not exist."""
        if not self.path.exists():
            logger.info(f"No archive at {self.path}, starting empty")
            return {}

        with open(self.path, "r", encoding="utf-8") as f:
            return json.load(f)

    def save(self, archive: dict) -> None:
        """Write the archive, then mirror it to the public path if configured."""
        self.path.parent.mkdir(parents=True, exist_ok=True)
        with open(self.path, "w", encoding="utf-8") as f:
            json.dump(archive, f, ensure_ascii=False, indent=2)
        logger.info(f"Saved archive: {self.path}")

        if self.public_path is not None:
            self.public_path.parent.mkdir(parents=True, exist_ok=True)
            shutil.copyfile(self.path, self.public_path)
            logger.info(f"Copied archive to {self.public_path}")

    def merge_day(self, fragment: dict, date: str) -> dict:
        """Load, merge one day's fragment, save. Returns the merged archive."""
        merged = merge_archive(self.load(), fragment, date)
        self.save(merged)
        return merged
