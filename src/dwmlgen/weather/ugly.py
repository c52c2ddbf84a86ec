"""
Parse coded weather "ugly strings" into structured groups.

An ugly string holds up to five `^`-separated groups, each of the form
`coverage:type:intensity:visibility:qualifiers`. Parsing never raises: absent or
unknown fields fall back to the "none" sentinel.
"""

from __future__ import annotations

import logging
import re
from dataclasses import dataclass, field
from typing import Iterator, Optional, Tuple

from .tokens import (
    ADDITIVE_OR,
    COVERAGE_ENGLISH,
    INTENSITY_ENGLISH,
    TYPE_ENGLISH,
    Coverage,
    Intensity,
    WxType,
    coverage_from_code,
    intensity_from_code,
    is_sentinel,
    translate_qualifier,
    type_from_code,
    visibility_from_code,
)

logger = logging.getLogger(__name__)

MAX_GROUPS = 5
MAX_QUALIFIERS = 5
_QUALIFIER_SPLIT = re.compile(r"[,\s]+")


@dataclass(frozen=True)
class WeatherGroup:
    """
    One weather group.

    Attributes:
        coverage: Coverage or probability token.
        wx_type: Weather type token.
        intensity: Intensity token.
        visibility: Visibility in statute miles (already translated), or None.
        qualifiers: Qualifier codes in their original order, without "OR".
        additive_or: True when the group joins the previous one with "or".
    """
    coverage: Coverage = Coverage.NONE
    wx_type: WxType = WxType.NONE
    intensity: Intensity = Intensity.NONE
    visibility: Optional[str] = None
    qualifiers: Tuple[str, ...] = ()
    additive_or: bool = False

    @property
    def rank(self) -> Tuple[int, int, int]:
        """Dominance key: coverage first, then intensity, then type."""
        return (int(self.coverage), int(self.intensity), int(self.wx_type))

    @property
    def is_empty(self) -> bool:
        return self.wx_type is WxType.NONE

    @property
    def qualifier_text(self) -> str:
        """Qualifiers as one comma-separated English string."""
        if not self.qualifiers:
            return "none"
        return ",".join(translate_qualifier(code) for code in self.qualifiers)

    def english(self) -> str:
        words = []
        if self.coverage is not Coverage.NONE:
            words.append(COVERAGE_ENGLISH[self.coverage])
        if self.intensity is not Intensity.NONE:
            words.append(INTENSITY_ENGLISH[self.intensity])
        words.append(TYPE_ENGLISH[self.wx_type])
        text = " ".join(words)
        if self.qualifiers:
            text += " with " + ", ".join(translate_qualifier(code) for code in self.qualifiers)
        return text


@dataclass(frozen=True)
class WeatherExpression:
    """All groups carried by one weather value, in their original order."""
    groups: Tuple[WeatherGroup, ...] = field(default_factory=tuple)

    def __len__(self) -> int:
        return len(self.groups)

    def __iter__(self) -> Iterator[WeatherGroup]:
        return iter(self.groups)

    def english(self) -> str:
        """Readable rendition, e.g. 'chance light rain and chance light snow'."""
        if not self.groups:
            return "No Weather"
        parts = [group.english() for group in self.groups]
        if len(parts) == 1:
            return parts[0]
        last_joiner = " or " if self.groups[-1].additive_or else " and "
        return ", ".join(parts[:-1]) + last_joiner + parts[-1]


def parse_group(text: str) -> WeatherGroup:
    """Tokenize one `coverage:type:intensity:visibility:qualifiers` group."""
    fields = (text or "").split(":")
    fields += ["none"] * (5 - len(fields))
    coverage_code, type_code, intensity_code, visibility_code = fields[:4]
    qualifier_field = fields[4]

    wx_type = type_from_code(type_code)
    if wx_type is WxType.NONE and not is_sentinel(type_code):
        logger.debug("Unknown weather type token %r", type_code)

    additive_or = False
    qualifiers = []
    for token in _QUALIFIER_SPLIT.split(qualifier_field.strip()):
        if is_sentinel(token):
            continue
        if token == ADDITIVE_OR:
            additive_or = True
            continue
        if len(qualifiers) < MAX_QUALIFIERS:
            qualifiers.append(token)

    return WeatherGroup(
        coverage=coverage_from_code(coverage_code),
        wx_type=wx_type,
        intensity=intensity_from_code(intensity_code),
        visibility=visibility_from_code(visibility_code),
        qualifiers=tuple(qualifiers),
        additive_or=additive_or,
    )


def parse_weather(ugly: Optional[str]) -> WeatherExpression:
    """
    Parse a full ugly string. Groups without a weather type are dropped.
    """
    if not ugly or is_sentinel(ugly):
        return WeatherExpression()
    groups = []
    for chunk in ugly.split("^")[:MAX_GROUPS]:
        group = parse_group(chunk)
        if not group.is_empty:
            groups.append(group)
    return WeatherExpression(tuple(groups))
