"""
flatwkt WKT Codec
=================

Bounded Context: Well-Known Text encoding and decoding.

This package translates between flatwkt geometries and WKT text. The two
directions are inverse for every geometry the encoder accepts.

Public API
----------
    marshal: Geometry -> WKT, full precision
    marshal_with_max_decimal_digits: Geometry -> WKT, limited precision
    unmarshal: WKT -> Geometry

Errors:
    UnsupportedTypeError, UnsupportedLayoutError (from flatwkt_geom)
    WKTError, BraceMismatchError, MalformedCoordinatesError, UnexpectedTokenError

Example:
    >>> from flatwkt_geom import Layout, LineString
    >>> from flatwkt_wkt import marshal, unmarshal
    >>> marshal(LineString(Layout.XY, [0, 0, 1, 1, 2, 2]))
    'LINESTRING (0 0, 1 1, 2 2)'
    >>> unmarshal("POINT Z (1 2 3)").z
    3.0
"""

from flatwkt_geom import Geometry, UnsupportedLayoutError, UnsupportedTypeError

from .decoder import decode, tokenize
from .encoder import DEFAULT_MAX_DECIMAL_DIGITS, encode, format_coordinate
from .errors import BraceMismatchError, MalformedCoordinatesError, UnexpectedTokenError, WKTError

__version__ = "1.0.0"


def marshal(g: Geometry) -> str:
    """Translate a geometry to WKT, printing every value at full precision."""
    return encode(g, DEFAULT_MAX_DECIMAL_DIGITS)


def marshal_with_max_decimal_digits(g: Geometry, max_decimal_digits: int) -> str:
    """Translate a geometry to WKT, printing at most `max_decimal_digits`
    fractional digits per value."""
    return encode(g, max_decimal_digits)


def unmarshal(wkt: str) -> Geometry:
    """Translate WKT to the corresponding geometry."""
    return decode(wkt)


__all__ = [
    '__version__',
    # Codec
    'marshal',
    'marshal_with_max_decimal_digits',
    'unmarshal',
    'encode',
    'decode',
    'format_coordinate',
    'tokenize',
    'DEFAULT_MAX_DECIMAL_DIGITS',
    # Errors
    'UnsupportedTypeError',
    'UnsupportedLayoutError',
    'WKTError',
    'BraceMismatchError',
    'MalformedCoordinatesError',
    'UnexpectedTokenError',
]
