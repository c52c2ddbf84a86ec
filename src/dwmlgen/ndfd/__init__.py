"""
NDFD element catalogue, output profiles and probed matches.
"""

from .elements import (
    ELEMENTS,
    ElementInfo,
    NamingConvention,
    NdfdElement,
    default_period,
    element_info,
    element_name,
    element_period,
    lookup_element,
    resolve_period,
)
from .matches import Match, MatchFileError, MatchStore, Sector, ValueKind, load_matches
from .products import (
    ICON_PREREQUISITES,
    Interest,
    Product,
    UnitSystem,
    emitted_elements,
    select_elements,
)

__all__ = [
    "ELEMENTS",
    "ElementInfo",
    "NamingConvention",
    "NdfdElement",
    "default_period",
    "element_info",
    "element_name",
    "element_period",
    "lookup_element",
    "resolve_period",
    "Match",
    "MatchFileError",
    "MatchStore",
    "Sector",
    "ValueKind",
    "load_matches",
    "ICON_PREREQUISITES",
    "Interest",
    "Product",
    "UnitSystem",
    "emitted_elements",
    "select_elements",
]
