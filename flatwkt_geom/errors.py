"""
Geometry Errors
===============

Error types shared by the geometry model and every codec built on it.
Each error carries the offending value so callers can report it.
"""

from typing import Any


class GeometryError(Exception):
    """Base class for all flatwkt errors."""
    pass


class UnsupportedTypeError(GeometryError):
    """Raised when a geometry kind or keyword is outside the closed set."""

    def __init__(self, value: Any):
        self.value = value
        super().__init__(f"unsupported type: {value!r}")


class UnsupportedLayoutError(GeometryError):
    """Raised when a layout is unknown or placed where it is not allowed."""

    def __init__(self, layout: Any):
        self.layout = layout
        super().__init__(f"unsupported layout: {layout!r}")
