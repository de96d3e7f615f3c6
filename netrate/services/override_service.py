from __future__ import annotations

import logging
from types import MappingProxyType
from typing import Dict, Iterable, Mapping, Optional

from netrate.schemas.pricing import Override, OverrideEntry, OverrideKey, PriceRow, override_key
from netrate.shared.inputs import parse_number

logger = logging.getLogger(__name__)


def _usable_gross(raw_value: object) -> Optional[float]:
    value = parse_number(raw_value)
    if value is None or value <= 0:
        return None
    return value


class OverrideService:
    """Holds the user's gross overrides, keyed by (platform, season, day type).

    The map has a single writer. Readers take ``snapshot()`` so a recomputation
    never sees a half-applied edit.
    """

    def __init__(self, overrides: Optional[Mapping[OverrideKey, Override]] = None) -> None:
        self._overrides: Dict[OverrideKey, Override] = dict(overrides or {})

    @classmethod
    def from_entries(cls, entries: Iterable[OverrideEntry]) -> "OverrideService":
        """Loads stored overrides, dropping entries ``set_gross`` would have refused."""
        service = cls()
        for entry in entries:
            key = override_key(entry.platform, entry.season, entry.day_type)
            value = _usable_gross(entry.gross_value)
            if value is None:
                logger.debug("ignoring stored gross override %r for %s", entry.gross_value, key)
                continue
            service._overrides[key] = Override(gross_value=value, locked=entry.locked)
        return service

    @staticmethod
    def _key(row: PriceRow) -> OverrideKey:
        return override_key(row.platform, row.season, row.day_type)

    def get(self, row: PriceRow) -> Optional[Override]:
        return self._overrides.get(self._key(row))

    def set_gross(self, row: PriceRow, raw_value: object) -> bool:
        value = _usable_gross(raw_value)
        if value is None:
            logger.debug("ignoring gross override %r for %s", raw_value, self._key(row))
            return False
        key = self._key(row)
        previous = self._overrides.get(key)
        locked = previous.locked if previous is not None else True
        self._overrides[key] = Override(gross_value=value, locked=locked)
        return True

    def toggle_lock(self, row: PriceRow, on: Optional[bool] = None) -> Override:
        key = self._key(row)
        previous = self._overrides.get(key)
        gross_value = previous.gross_value if previous is not None else row.gross
        if on is None:
            on = not (previous.locked if previous is not None else False)
        override = Override(gross_value=gross_value, locked=on)
        self._overrides[key] = override
        return override

    def clear(self, row: PriceRow) -> None:
        self._overrides.pop(self._key(row), None)

    def snapshot(self) -> Mapping[OverrideKey, Override]:
        return MappingProxyType(dict(self._overrides))

    def __len__(self) -> int:
        return len(self._overrides)
