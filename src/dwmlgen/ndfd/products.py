"""
Output profiles and the elements each one probes and writes.
"""

from __future__ import annotations

from enum import Enum, IntEnum
from typing import Dict, FrozenSet, Iterable, List

from .elements import NdfdElement


class Product(str, Enum):
    TIME_SERIES = "time-series"
    GLANCE = "glance"
    TWELVE_HOURLY = "12-hourly"
    TWENTY_FOUR_HOURLY = "24-hourly"

    @property
    def is_summary(self) -> bool:
        return self in (Product.TWELVE_HOURLY, Product.TWENTY_FOUR_HOURLY)

    @property
    def concise_name(self) -> str:
        if self.is_summary:
            return "dwmlByDay"
        return self.value

    @property
    def title(self) -> str:
        return _TITLES[self]

    @property
    def summarization(self) -> str:
        if self is Product.TWELVE_HOURLY:
            return "12hourly"
        if self is Product.TWENTY_FOUR_HOURLY:
            return "24hourly"
        return "none"

    @property
    def period_hours(self) -> int:
        """Length of a summary period; 0 for native-cadence profiles."""
        if self is Product.TWELVE_HOURLY:
            return 12
        if self is Product.TWENTY_FOUR_HOURLY:
            return 24
        return 0


_TITLES = {
    Product.TIME_SERIES: "NOAA's National Weather Service Forecast Data",
    Product.GLANCE: "NOAA's National Weather Service Forecast at a Glance",
    Product.TWELVE_HOURLY: "NOAA's National Weather Service Forecast by 12 Hour Period",
    Product.TWENTY_FOUR_HOURLY: "NOAA's National Weather Service Forecast by 24 Hour Period",
}


class UnitSystem(str, Enum):
    ENGLISH = "e"
    METRIC = "m"


class Interest(IntEnum):
    IGNORE = 0
    OPTIONAL = 1
    VITAL = 2


# Elements required to derive condition icons.
ICON_PREREQUISITES: FrozenSet[NdfdElement] = frozenset(
    {NdfdElement.TEMP, NdfdElement.WIND_SPEED, NdfdElement.SKY, NdfdElement.WEATHER, NdfdElement.POP12}
)

_SUMMARY_INPUTS = frozenset(
    {
        NdfdElement.MAX_T,
        NdfdElement.MIN_T,
        NdfdElement.POP12,
        NdfdElement.SKY,
        NdfdElement.WEATHER,
        NdfdElement.TEMP,
        NdfdElement.WIND_SPEED,
        NdfdElement.WIND_DIR,
    }
)

_EMITTED: Dict[Product, FrozenSet[NdfdElement]] = {
    Product.GLANCE: frozenset({NdfdElement.MAX_T, NdfdElement.MIN_T, NdfdElement.SKY, NdfdElement.WEATHER}),
    Product.TWELVE_HOURLY: frozenset({NdfdElement.MAX_T, NdfdElement.MIN_T, NdfdElement.POP12, NdfdElement.WEATHER}),
    Product.TWENTY_FOUR_HOURLY: frozenset(
        {NdfdElement.MAX_T, NdfdElement.MIN_T, NdfdElement.POP12, NdfdElement.WEATHER}
    ),
}


def product_interest(product: Product, include_icons: bool) -> Dict[NdfdElement, int]:
    """Interest level of the product itself in every element, before the user weighs in."""
    if product is Product.TIME_SERIES:
        return {element: Interest.OPTIONAL for element in NdfdElement}
    if product is Product.GLANCE:
        vital = set(_EMITTED[Product.GLANCE])
        if include_icons:
            vital |= ICON_PREREQUISITES | {NdfdElement.WIND_DIR}
    else:
        vital = set(_SUMMARY_INPUTS)
    return {element: (Interest.VITAL if element in vital else Interest.IGNORE) for element in NdfdElement}


def select_elements(
    product: Product,
    requested: Iterable[NdfdElement] = (),
    *,
    include_icons: bool = True,
) -> List[NdfdElement]:
    """
    Score every element and keep those reaching VITAL.

    Each user request adds one to the product's interest. When the user asked for
    nothing and the product forced nothing, every element is bumped by one.
    """
    scores = dict(product_interest(product, include_icons))
    requested = list(requested)
    for element in requested:
        scores[element] += 1
    if not requested and not any(score >= Interest.VITAL for score in scores.values()):
        for element in scores:
            scores[element] += 1
    return [element for element in NdfdElement if scores[element] >= Interest.VITAL]


def emitted_elements(product: Product, selected: Iterable[NdfdElement]) -> List[NdfdElement]:
    """Elements that get their own parameter block in the document."""
    selected = list(selected)
    if product is Product.TIME_SERIES:
        return selected
    allowed = _EMITTED[product]
    return [element for element in selected if element in allowed]
