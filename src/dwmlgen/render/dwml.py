"""
DWML document model and XML serialization.
"""

from __future__ import annotations

import xml.etree.ElementTree as ET
from dataclasses import dataclass, field
from typing import List, Optional, Sequence, Union

from ..ndfd.elements import NdfdElement, element_info
from ..ndfd.products import Product, UnitSystem
from ..summary.layouts import TimeLayout
from ..util.time import format_utc
from ..weather.tokens import COVERAGE_ENGLISH, INTENSITY_ENGLISH, TYPE_ENGLISH
from ..weather.ugly import WeatherExpression

XSD_NS = "http://www.w3.org/2001/XMLSchema"
XSI_NS = "http://www.w3.org/2001/XMLSchema-instance"
SCHEMA_LOCATION = "http://www.nws.noaa.gov/forecasts/xml/DWMLgen/schema/DWML.xsd"
MORE_INFORMATION = "http://www.nws.noaa.gov/forecasts/xml/"
PRODUCTION_CENTER = "Meteorological Development Laboratory"
SUB_CENTER = "Product Generation Branch"
DISCLAIMER = "http://www.nws.noaa.gov/disclaimer.html"
CREDIT = "http://www.weather.gov/"
CREDIT_LOGO = "http://www.weather.gov/images/xml_logo.gif"
FEEDBACK = "http://www.weather.gov/feedback.php"
REFRESH_FREQUENCY = "PT1H"
XML_DECLARATION = '<?xml version="1.0"?>'

WEATHER_NAME = "Weather Type, Coverage, and Intensity"
ICONS_NAME = "Conditions Icons"


@dataclass
class ValueBlock:
    """Numeric values of one element; None renders as a nil value."""
    element: NdfdElement
    layout_key: str
    values: List[Optional[str]]
    unit_system: UnitSystem = UnitSystem.ENGLISH


@dataclass
class WeatherRow:
    expression: Optional[WeatherExpression] = None
    summary: Optional[str] = None


@dataclass
class WeatherBlock:
    layout_key: str
    rows: List[WeatherRow]


@dataclass
class IconBlock:
    layout_key: str
    links: List[Optional[str]]


Block = Union[ValueBlock, WeatherBlock, IconBlock]


@dataclass
class PointBlock:
    """One location and its parameter blocks."""
    index: int
    latitude: float
    longitude: float
    parameters: List[Block] = field(default_factory=list)

    @property
    def key(self) -> str:
        return f"point{self.index}"


@dataclass
class DwmlDocument:
    product: Product
    creation_time: int
    points: List[PointBlock]
    layouts: List[TimeLayout]

    @property
    def layout_keys(self) -> List[str]:
        return [layout.key for layout in self.layouts]


def render_document(document: DwmlDocument) -> str:
    """Serialize a document to an XML 1.0 string."""
    root = ET.Element(
        "dwml",
        {
            "version": "1.0",
            "xmlns:xsd": XSD_NS,
            "xmlns:xsi": XSI_NS,
            "xsi:noNamespaceSchemaLocation": SCHEMA_LOCATION,
        },
    )
    _build_head(root, document)
    data = ET.SubElement(root, "data")
    for point in document.points:
        _build_location(data, point)
    for layout in document.layouts:
        _build_time_layout(data, layout)
    for point in document.points:
        _build_parameters(data, point)

    ET.indent(root, space="  ")
    return XML_DECLARATION + "\n" + ET.tostring(root, encoding="unicode") + "\n"


def _text(parent: ET.Element, tag: str, text: str, attrib: Optional[dict] = None) -> ET.Element:
    node = ET.SubElement(parent, tag, attrib or {})
    node.text = text
    return node


def _nil(parent: ET.Element, tag: str = "value") -> ET.Element:
    return ET.SubElement(parent, tag, {"xsi:nil": "true"})


def _build_head(root: ET.Element, document: DwmlDocument) -> None:
    head = ET.SubElement(root, "head")
    product = ET.SubElement(
        head,
        "product",
        {
            "srsName": "WGS 1984",
            "concise-name": document.product.concise_name,
            "operational-mode": "developmental",
        },
    )
    _text(product, "title", document.product.title)
    _text(product, "field", "meteorological")
    _text(product, "category", "forecast")
    _text(product, "creation-date", format_utc(document.creation_time), {"refresh-frequency": REFRESH_FREQUENCY})

    source = ET.SubElement(head, "source")
    _text(source, "more-information", MORE_INFORMATION)
    center = _text(source, "production-center", PRODUCTION_CENTER)
    _text(center, "sub-center", SUB_CENTER)
    _text(source, "disclaimer", DISCLAIMER)
    _text(source, "credit", CREDIT)
    _text(source, "credit-logo", CREDIT_LOGO)
    _text(source, "feedback", FEEDBACK)


def _build_location(data: ET.Element, point: PointBlock) -> None:
    location = ET.SubElement(data, "location")
    _text(location, "location-key", point.key)
    ET.SubElement(location, "point", {"latitude": f"{point.latitude:.2f}", "longitude": f"{point.longitude:.2f}"})


def _build_time_layout(data: ET.Element, layout: TimeLayout) -> None:
    node = ET.SubElement(data, "time-layout", {"time-coordinate": "local", "summarization": layout.summarization})
    _text(node, "layout-key", layout.key)
    for row in layout.rows:
        attrib = {"period-name": row.name} if row.name else None
        _text(node, "start-valid-time", row.start, attrib)
        if row.end is not None:
            _text(node, "end-valid-time", row.end)


def _build_parameters(data: ET.Element, point: PointBlock) -> None:
    parameters = ET.SubElement(data, "parameters", {"applicable-location": point.key})
    for block in point.parameters:
        if isinstance(block, WeatherBlock):
            _build_weather(parameters, block)
        elif isinstance(block, IconBlock):
            _build_icons(parameters, block)
        else:
            _build_values(parameters, block)


def _build_values(parameters: ET.Element, block: ValueBlock) -> None:
    info = element_info(block.element)
    units = info.metric_units if block.unit_system is UnitSystem.METRIC else info.english_units
    if block.element is NdfdElement.WAVE_HEIGHT:
        parent = ET.SubElement(parameters, "water-state", {"time-layout": block.layout_key})
        node = ET.SubElement(parent, info.tag, {"type": info.type_attr, "units": units})
    else:
        node = ET.SubElement(
            parameters,
            info.tag,
            {"type": info.type_attr, "units": units, "time-layout": block.layout_key},
        )
    _text(node, "name", info.display_name)
    _write_values(node, block.values)


def _write_values(node: ET.Element, values: Sequence[Optional[str]]) -> None:
    for value in values:
        if value is None:
            _nil(node)
        else:
            _text(node, "value", value)


def _build_weather(parameters: ET.Element, block: WeatherBlock) -> None:
    node = ET.SubElement(parameters, "weather", {"time-layout": block.layout_key})
    _text(node, "name", WEATHER_NAME)
    for row in block.rows:
        attrib = {"weather-summary": row.summary} if row.summary else {}
        if row.expression is None and not row.summary:
            _nil(node, "weather-conditions")
            continue
        conditions = ET.SubElement(node, "weather-conditions", attrib)
        for group in row.expression or ():
            value_attrib = {
                "coverage": COVERAGE_ENGLISH[group.coverage],
                "intensity": INTENSITY_ENGLISH[group.intensity],
            }
            if group.additive_or:
                value_attrib["additive"] = "or"
            value_attrib["weather-type"] = TYPE_ENGLISH[group.wx_type]
            value_attrib["qualifier"] = group.qualifier_text
            value = ET.SubElement(conditions, "value", value_attrib)
            if group.visibility is not None:
                _text(value, "visibility", group.visibility, {"units": "statute miles"})
            else:
                ET.SubElement(value, "visibility", {"xsi:nil": "true"})


def _build_icons(parameters: ET.Element, block: IconBlock) -> None:
    node = ET.SubElement(parameters, "conditions-icon", {"type": "forecast-NWS", "time-layout": block.layout_key})
    _text(node, "name", ICONS_NAME)
    for link in block.links:
        if link is None:
            _nil(node, "icon-link")
        else:
            _text(node, "icon-link", link)
