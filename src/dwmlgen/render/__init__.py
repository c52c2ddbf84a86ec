from .dwml import DwmlDocument, IconBlock, PointBlock, ValueBlock, WeatherBlock, WeatherRow, render_document

__all__ = [
    "DwmlDocument",
    "IconBlock",
    "PointBlock",
    "ValueBlock",
    "WeatherBlock",
    "WeatherRow",
    "render_document",
]
