"""
Document build pipeline.
"""

from .builder import DocumentRequest, active_points, build_document, format_value

__all__ = [
    "DocumentRequest",
    "active_points",
    "build_document",
    "format_value",
]
