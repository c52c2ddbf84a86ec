"""
Probed match records and the per-build store that indexes them.
"""

from __future__ import annotations

import json
import logging
from dataclasses import dataclass
from enum import Enum, IntEnum
from pathlib import Path
from typing import Dict, Iterable, Iterator, List, Optional, Tuple, Union

from pydantic import BaseModel, ConfigDict, TypeAdapter, ValidationError

from ..util.time import parse_timestamp
from .elements import NdfdElement, lookup_element

logger = logging.getLogger(__name__)

# Value written by the prober when a grid cell holds no data.
MISSING_VALUE = 9999.0


class MatchFileError(RuntimeError):
    """Raised when a match file cannot be read or validated."""


class ValueKind(str, Enum):
    PRESENT = "present"
    MISSING = "missing"
    CODED = "coded"


class Sector(IntEnum):
    CONUS = 0
    PUERTORI = 1
    HAWAII = 2
    GUAM = 3
    ALASKA = 4
    NHEMI = 5
    NPACOCN = 6
    UNDEFINED = 7

    @property
    def sort_weight(self) -> float:
        # Tropical wind sectors sort next to the sectors they hold data for.
        if self is Sector.NHEMI:
            return 0.5
        if self is Sector.NPACOCN:
            return 2.5
        return float(self.value)

    @classmethod
    def from_name(cls, name: str) -> "Sector":
        try:
            return cls[(name or "undefined").strip().upper()]
        except KeyError:
            return cls.UNDEFINED


@dataclass(frozen=True)
class Match:
    """
    One probed value.

    Attributes:
        element: Element the value belongs to.
        valid_time: End of the covered period, epoch seconds UTC.
        kind: Whether the value is numeric, missing, or a coded string.
        value: Numeric value for PRESENT matches.
        text: Coded string (weather) for CODED matches.
        point: Index of the forecast point.
        sector: Sector the value was probed from.
    """
    element: NdfdElement
    valid_time: int
    kind: ValueKind = ValueKind.PRESENT
    value: Optional[float] = None
    text: Optional[str] = None
    point: int = 0
    sector: Sector = Sector.CONUS

    @property
    def is_missing(self) -> bool:
        return self.kind is ValueKind.MISSING


def match_sort_key(match: Match) -> Tuple[float, int, int, int]:
    return (match.sector.sort_weight, int(match.element), match.valid_time, match.point)


class MatchStore:
    """
    Sorted, read-only view of the matches for one document build.

    Lookups are by (point, element) and always come back ordered by valid-time.
    Duplicate (point, element, valid-time) entries keep the one whose sector sorts first.
    """

    def __init__(self, matches: Iterable[Match]):
        self._matches: List[Match] = sorted(matches, key=match_sort_key)
        self._index: Dict[Tuple[int, NdfdElement], List[Match]] = {}
        seen = set()
        for match in self._matches:
            key = (match.point, match.element, match.valid_time)
            if key in seen:
                logger.debug("Dropping duplicate %s match at %s from sector %s", match.element.name, match.valid_time, match.sector.name)
                continue
            seen.add(key)
            self._index.setdefault((match.point, match.element), []).append(match)
        for rows in self._index.values():
            rows.sort(key=lambda m: m.valid_time)

    def __len__(self) -> int:
        return len(self._matches)

    def __iter__(self) -> Iterator[Match]:
        return iter(self._matches)

    def rows(self, element: NdfdElement, point: int = 0) -> List[Match]:
        return list(self._index.get((point, element), []))

    def elements(self, point: int = 0) -> List[NdfdElement]:
        return sorted({element for (pnt, element) in self._index if pnt == point})

    def time_range(self, point: int = 0) -> Optional[Tuple[int, int]]:
        """Earliest and latest valid-time held for a point."""
        times = [
            match.valid_time
            for (pnt, _), rows in self._index.items()
            if pnt == point
            for match in rows
        ]
        if not times:
            return None
        return min(times), max(times)


class MatchRecord(BaseModel):
    """Schema of one entry in a match file."""
    model_config = ConfigDict(extra="forbid")

    element: str
    valid_time: Union[int, str]
    value: Union[float, str, None] = None
    point: int = 0
    sector: str = "conus"


_RECORDS = TypeAdapter(List[MatchRecord])


def match_from_record(record: MatchRecord) -> Match:
    element = lookup_element(record.element)
    if element is None:
        raise MatchFileError(f"Unknown NDFD element '{record.element}'")
    try:
        valid_time = parse_timestamp(record.valid_time)
    except ValueError as exc:
        raise MatchFileError(f"Invalid valid_time for {record.element}: {exc}") from exc
    sector = Sector.from_name(record.sector)

    value = record.value
    if value is None:
        return Match(element, valid_time, ValueKind.MISSING, point=record.point, sector=sector)
    if element is NdfdElement.WEATHER:
        return Match(element, valid_time, ValueKind.CODED, text=str(value), point=record.point, sector=sector)
    try:
        numeric = float(value)
    except ValueError as exc:
        raise MatchFileError(f"Non-numeric value {value!r} for {record.element}") from exc
    if numeric == MISSING_VALUE:
        return Match(element, valid_time, ValueKind.MISSING, point=record.point, sector=sector)
    return Match(element, valid_time, ValueKind.PRESENT, value=numeric, point=record.point, sector=sector)


def load_matches(path: Path | str) -> List[Match]:
    """
    Load a JSON match file produced by the grid prober.

    Raises:
        MatchFileError: If the file is missing, unreadable, or invalid.
    """
    match_path = Path(path).expanduser().resolve()
    if not match_path.exists():
        raise MatchFileError(f"Match file not found: {match_path}")
    try:
        raw = json.loads(match_path.read_text(encoding="utf-8"))
    except OSError as exc:
        raise MatchFileError(f"Unable to read match file: {exc}") from exc
    except json.JSONDecodeError as exc:
        raise MatchFileError(f"Invalid JSON in match file: {exc}") from exc

    try:
        records = _RECORDS.validate_python(raw)
    except ValidationError as exc:
        raise MatchFileError(str(exc)) from exc

    matches = [match_from_record(record) for record in records]
    logger.info("Loaded %d matches from %s", len(matches), match_path)
    return matches
