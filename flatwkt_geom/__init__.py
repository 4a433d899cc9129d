"""
Geometry Layer
==============

Bounded Context: In-memory geometry model used by the text codecs.

Responsibilities:
- Layout / stride resolution
- Flat-coordinate geometry kinds (immutable)
- Shared error types
- NO parsing, NO formatting, NO geometric algorithms

Design Philosophy:
- One contiguous coordinate buffer per geometry
- Boundary offsets instead of nested containers
- Fail-fast validation at construction
"""

from flatwkt_geom.errors import GeometryError, UnsupportedLayoutError, UnsupportedTypeError
from flatwkt_geom.layout import Layout, m_index, stride, z_index
from flatwkt_geom.shapes import (
    EMPTY_COORD,
    Geometry,
    GeometryCollection,
    GeometryType,
    LinearRing,
    LineString,
    MultiLineString,
    MultiPoint,
    MultiPolygon,
    Point,
    Polygon,
    from_dict,
    is_empty_sentinel,
)

__all__ = [
    # Layout
    "Layout",
    "stride",
    "z_index",
    "m_index",
    # Geometry kinds
    "GeometryType",
    "Geometry",
    "Point",
    "LineString",
    "LinearRing",
    "Polygon",
    "MultiPoint",
    "MultiLineString",
    "MultiPolygon",
    "GeometryCollection",
    "from_dict",
    # Empty point sentinel
    "EMPTY_COORD",
    "is_empty_sentinel",
    # Errors
    "GeometryError",
    "UnsupportedTypeError",
    "UnsupportedLayoutError",
]

__version__ = "1.0.0"
