"""
Equipment catalog loader and part number resolver.
"""

import json
import logging
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Callable, Dict, Iterable, List, Optional, Tuple, Union

from .exceptions import CatalogLoadError
from .models import CatalogEntry, CatalogRecord

logger = logging.getLogger(__name__)

# Shorter base segments collide with unrelated parts ("RC-..." vs "RC4")
MIN_BASE_SEGMENT_LENGTH = 3


@dataclass(frozen=True)
class CatalogMatch:
    """A resolved catalog entry and the matching tier that found it."""
    entry: CatalogEntry
    strategy: str


class CatalogIndex:
    """
    Read-only lookup table of catalog entries keyed by part number.

    Resolution runs a ranked list of strategies and stops at the first hit:
    exact key, prefix in either direction, then shared base segment.
    """

    def __init__(self, entries: Iterable[CatalogEntry]):
        self._entries: Dict[str, CatalogEntry] = {}
        for entry in entries:
            if entry.key in self._entries:
                logger.warning(f"Duplicate catalog key {entry.key}, keeping the first entry")
                continue
            self._entries[entry.key] = entry
        self._keys: Tuple[str, ...] = tuple(self._entries)

        self.strategies: List[Tuple[str, Callable[[str], Optional[CatalogEntry]]]] = [
            ('exact', self.match_exact),
            ('prefix', self.match_prefix),
            ('base_segment', self.match_base_segment),
        ]

    def __len__(self) -> int:
        return len(self._entries)

    def __contains__(self, part_number: str) -> bool:
        return part_number in self._entries

    @property
    def keys(self) -> Tuple[str, ...]:
        return self._keys

    def get(self, key: str) -> Optional[CatalogEntry]:
        return self._entries.get(key)

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "CatalogIndex":
        """Build an index from the structured master list layout."""
        if not isinstance(data, dict):
            raise CatalogLoadError("Catalog must be a JSON object keyed by part number")

        entries = []
        for key, raw_entry in data.items():
            try:
                entries.append(_parse_entry(key, raw_entry))
            except (AttributeError, TypeError, ValueError, KeyError) as e:
                logger.warning(f"Skipping malformed catalog entry {key}: {e}")
        return cls(entries)

    @classmethod
    def from_json(cls, path: Union[str, Path]) -> "CatalogIndex":
        """Load the catalog from a structured JSON file."""
        path = Path(path)
        if not path.exists():
            raise CatalogLoadError(f"Catalog file not found: {path}")

        try:
            with open(path, 'r', encoding='utf-8') as f:
                data = json.load(f)
        except (OSError, json.JSONDecodeError) as e:
            raise CatalogLoadError(f"Could not read catalog {path}: {e}") from e

        index = cls.from_dict(data)
        logger.info(f"📚 Loaded {len(index)} catalog entries from {path.name}")
        return index

    def resolve(self, part_number: str) -> Optional[CatalogMatch]:
        """Find the catalog entry for a quoted part number, or None."""
        part_number = (part_number or '').strip()
        if not part_number:
            return None

        for name, strategy in self.strategies:
            entry = strategy(part_number)
            if entry is not None:
                if name != 'exact':
                    logger.debug(f"Matched {part_number} → {entry.key} ({name})")
                return CatalogMatch(entry=entry, strategy=name)
        return None

    def match_exact(self, part_number: str) -> Optional[CatalogEntry]:
        return self._entries.get(part_number)

    def match_prefix(self, part_number: str) -> Optional[CatalogEntry]:
        """Either string is a prefix of the other; the longest key wins."""
        best = None
        for key in self._keys:
            if key.startswith(part_number) or part_number.startswith(key):
                if best is None or len(key) > len(best):
                    best = key
        return self._entries[best] if best is not None else None

    def match_base_segment(self, part_number: str) -> Optional[CatalogEntry]:
        """Text before the first dash matches a key's base segment."""
        base = base_segment(part_number)
        if len(base) < MIN_BASE_SEGMENT_LENGTH:
            return None
        for key in self._keys:
            if base_segment(key) == base:
                return self._entries[key]
        return None


def base_segment(part_number: str) -> str:
    return part_number.split('-', 1)[0]


def load_catalog(path: Union[str, Path]) -> CatalogIndex:
    """Convenience function to load a catalog file."""
    return CatalogIndex.from_json(path)


def _parse_entry(key: str, raw_entry: Dict[str, Any]) -> CatalogEntry:
    main = _parse_record(raw_entry['main'], default_part_number=key)
    sub_components = tuple(
        _parse_record(raw, default_part_number='')
        for raw in raw_entry.get('sub_components') or []
    )
    return CatalogEntry(key=key, main=main, sub_components=sub_components)


def _parse_record(raw: Dict[str, Any], default_part_number: str) -> CatalogRecord:
    return CatalogRecord(
        part_number=str(raw.get('part_num') or default_part_number),
        description=str(raw.get('description') or ''),
        hp=_blank_to_none(raw.get('hp')),
        phase=parse_phase(raw.get('phase')),
        volts=_blank_to_none(raw.get('volts')),
        amps=_blank_to_none(raw.get('amps')),
        breaker_rating=_blank_to_none(raw.get('cb')),
        port=raw.get('port'),
        cold_water=raw.get('cold'),
        hot_water=raw.get('hot'),
        reclaim=raw.get('reclaim'),
        flow_rate_gpm=raw.get('gal_min'),
        heat_output_btuh=raw.get('btuh'),
    )


def parse_phase(value: Any) -> Optional[int]:
    """Normalize a phase cell (3, "3", 3.0) to 1, 3 or None."""
    if value is None or isinstance(value, bool):
        return None
    try:
        phase = int(float(str(value).strip()))
    except (ValueError, OverflowError):
        return None
    return phase if phase in (1, 3) else None


def _blank_to_none(value: Any) -> Any:
    if isinstance(value, str) and value.strip() in ('', '-'):
        return None
    return value
