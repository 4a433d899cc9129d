"""
WKT Encoder
===========

Recursive writer turning a geometry into canonical WKT text.

Design:
- Dispatch on the geometry's `geometry_type` tag (closed set)
- Body nesting mirrors the flat model: depth 0 (Point) to depth 3 (MultiPolygon)
- Output is built in a call-local list and joined once; nothing is returned
  on failure
- Pure: the geometry is only read

Numeric formatting:
    max_decimal_digits < 0   shortest text that round-trips, positional notation
    max_decimal_digits >= 0  rounded to that many fractional digits, then
                             trailing fractional zeros and '.' removed
    non-finite               NaN, +Inf, -Inf

Example:
    >>> encode(LineString(Layout.XY, [0, 0, 1, 1, 2, 2]))
    'LINESTRING (0 0, 1 1, 2 2)'
"""

import math
from typing import Any, Callable, Dict, List, Sequence

import numpy as np

from flatwkt_geom import GeometryType, Layout, UnsupportedLayoutError, UnsupportedTypeError
from flatwkt_wkt.grammar import EMPTY, KEYWORDS, LAYOUT_SUFFIXES

# Print as many decimal digits as needed to round-trip.
DEFAULT_MAX_DECIMAL_DIGITS = -1


def encode(geometry: Any, max_decimal_digits: int = DEFAULT_MAX_DECIMAL_DIGITS) -> str:
    """
    Translate a geometry to WKT.

    Args:
        geometry: Any flatwkt geometry
        max_decimal_digits: Fractional digits per value, -1 for full precision

    Returns:
        WKT text

    Raises:
        UnsupportedTypeError: If the geometry kind is not encodable
        UnsupportedLayoutError: If the layout is unknown, or NONE on anything
            other than an empty GeometryCollection
    """
    parts: List[str] = []
    _write(parts, geometry, max_decimal_digits)
    return "".join(parts)


def format_coordinate(value: float, max_decimal_digits: int = DEFAULT_MAX_DECIMAL_DIGITS) -> str:
    """Format one coordinate value ('.' decimal separator, no grouping)."""
    if math.isnan(value):
        return "NaN"
    if math.isinf(value):
        return "+Inf" if value > 0 else "-Inf"
    if max_decimal_digits < 0:
        return np.format_float_positional(value, unique=True, trim='-')
    return np.format_float_positional(
        value,
        precision=max_decimal_digits,
        unique=False,
        fractional=True,
        trim='-',
    )


def _write(parts: List[str], g: Any, max_decimal_digits: int) -> None:
    kind = getattr(g, 'geometry_type', None)
    if kind not in KEYWORDS:
        raise UnsupportedTypeError(g)

    layout = g.layout
    if layout == Layout.NONE:
        # Only an empty collection may leave its dimensionality undetermined
        if kind is not GeometryType.GEOMETRY_COLLECTION or not g.is_empty():
            raise UnsupportedLayoutError(layout)
        suffix = ""
    else:
        try:
            suffix = LAYOUT_SUFFIXES[layout]
        except (KeyError, TypeError):
            raise UnsupportedLayoutError(layout) from None

    parts.append(KEYWORDS[kind])
    if suffix:
        parts.append(" ")
        parts.append(suffix)
    parts.append(" ")

    if g.is_empty():
        parts.append(EMPTY)
        return
    _BODY_WRITERS[kind](parts, g, max_decimal_digits)


def _write_coord(parts: List[str], coord: Sequence[float], max_decimal_digits: int) -> None:
    parts.append(" ".join(format_coordinate(x, max_decimal_digits) for x in coord))


def _write_flat_coords0(
    parts: List[str], flat_coords: np.ndarray, stride: int, max_decimal_digits: int
) -> None:
    parts.append("(")
    _write_coord(parts, flat_coords[:stride], max_decimal_digits)
    parts.append(")")


def _write_flat_coords1(
    parts: List[str], flat_coords: np.ndarray, stride: int, max_decimal_digits: int
) -> None:
    parts.append("(")
    for i in range(0, len(flat_coords), stride):
        if i != 0:
            parts.append(", ")
        _write_coord(parts, flat_coords[i:i + stride], max_decimal_digits)
    parts.append(")")


def _write_flat_coords2(
    parts: List[str],
    flat_coords: np.ndarray,
    start: int,
    ends: Sequence[int],
    stride: int,
    max_decimal_digits: int,
) -> None:
    parts.append("(")
    for i, end in enumerate(ends):
        if i != 0:
            parts.append(", ")
        _write_flat_coords1(parts, flat_coords[start:end], stride, max_decimal_digits)
        start = end
    parts.append(")")


def _write_flat_coords3(
    parts: List[str],
    flat_coords: np.ndarray,
    endss: Sequence[Sequence[int]],
    stride: int,
    max_decimal_digits: int,
) -> None:
    parts.append("(")
    start = 0
    for i, ends in enumerate(endss):
        if i != 0:
            parts.append(", ")
        _write_flat_coords2(parts, flat_coords, start, ends, stride, max_decimal_digits)
        start = ends[-1]
    parts.append(")")


def _write_members(parts: List[str], g: Any, max_decimal_digits: int) -> None:
    parts.append("(")
    for i, member in enumerate(g.geoms):
        if i != 0:
            parts.append(", ")
        _write(parts, member, max_decimal_digits)
    parts.append(")")


def _write_depth0(parts: List[str], g: Any, max_decimal_digits: int) -> None:
    _write_flat_coords0(parts, g.flat_coords, g.stride, max_decimal_digits)


def _write_depth1(parts: List[str], g: Any, max_decimal_digits: int) -> None:
    _write_flat_coords1(parts, g.flat_coords, g.stride, max_decimal_digits)


def _write_depth2(parts: List[str], g: Any, max_decimal_digits: int) -> None:
    _write_flat_coords2(parts, g.flat_coords, 0, g.ends, g.stride, max_decimal_digits)


def _write_depth3(parts: List[str], g: Any, max_decimal_digits: int) -> None:
    _write_flat_coords3(parts, g.flat_coords, g.endss, g.stride, max_decimal_digits)


_BODY_WRITERS: Dict[GeometryType, Callable[[List[str], Any, int], None]] = {
    GeometryType.POINT: _write_depth0,
    GeometryType.LINE_STRING: _write_depth1,
    GeometryType.LINEAR_RING: _write_depth1,
    GeometryType.MULTI_POINT: _write_depth1,
    GeometryType.POLYGON: _write_depth2,
    GeometryType.MULTI_LINE_STRING: _write_depth2,
    GeometryType.MULTI_POLYGON: _write_depth3,
    GeometryType.GEOMETRY_COLLECTION: _write_members,
}
