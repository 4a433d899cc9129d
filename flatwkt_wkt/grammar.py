"""
WKT Grammar Tokens
==================

Keyword and dimensionality tables shared by the encoder and decoder.

    wkt     := keyword dim? (EMPTY | body)
    dim     := "Z" | "M" | "ZM"
"""

import re

from flatwkt_geom import GeometryType, Layout

EMPTY = "EMPTY"

# LinearRing has no keyword of its own.
KEYWORDS = {
    GeometryType.POINT: "POINT",
    GeometryType.LINE_STRING: "LINESTRING",
    GeometryType.LINEAR_RING: "LINESTRING",
    GeometryType.POLYGON: "POLYGON",
    GeometryType.MULTI_POINT: "MULTIPOINT",
    GeometryType.MULTI_LINE_STRING: "MULTILINESTRING",
    GeometryType.MULTI_POLYGON: "MULTIPOLYGON",
    GeometryType.GEOMETRY_COLLECTION: "GEOMETRYCOLLECTION",
}

KEYWORD_TYPES = {
    "POINT": GeometryType.POINT,
    "LINESTRING": GeometryType.LINE_STRING,
    "POLYGON": GeometryType.POLYGON,
    "MULTIPOINT": GeometryType.MULTI_POINT,
    "MULTILINESTRING": GeometryType.MULTI_LINE_STRING,
    "MULTIPOLYGON": GeometryType.MULTI_POLYGON,
    "GEOMETRYCOLLECTION": GeometryType.GEOMETRY_COLLECTION,
}

LAYOUT_SUFFIXES = {
    Layout.XY: "",
    Layout.XYZ: "Z",
    Layout.XYM: "M",
    Layout.XYZM: "ZM",
}

SUFFIX_LAYOUTS = {
    "Z": Layout.XYZ,
    "M": Layout.XYM,
    "ZM": Layout.XYZM,
}

# Longest first, so "POINTZM" is not read as "POINTZ" + "M".
FUSED_SUFFIXES = ("ZM", "Z", "M")

PUNCTUATION = "(),"

TOKEN_RE = re.compile(r"[(),]|[^\s(),]+")

NUMBER_RE = re.compile(
    r"[+-]?(?:\d+\.?\d*|\.\d+)(?:[eE][+-]?\d+)?|[+-]?(?:nan|inf|infinity)",
    re.IGNORECASE,
)
