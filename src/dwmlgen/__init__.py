"""
Core package for generating Digital Weather Markup Language (DWML) documents.
"""

from importlib import metadata as _metadata

try:
    __version__ = _metadata.version("dwmlgen")
except _metadata.PackageNotFoundError:  # pragma: no cover
    __version__ = "0.0.0"

__all__ = ["__version__"]
