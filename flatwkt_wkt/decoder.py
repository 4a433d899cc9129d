"""
WKT Decoder
===========

Recursive-descent parser turning WKT text into a geometry.

Design:
- Tokens: words/numbers plus the punctuation '(' ')' ','
- One call-local cursor per decode; no shared state
- Each body parser appends into one flat list and records end offsets,
  so the resulting geometry is built in a single construction step
- Errors are raised before any geometry is built

Error mapping:
    unknown keyword                          UnsupportedTypeError
    unknown dimensionality word              UnsupportedLayoutError
    input ends inside '(' or stray ')'       BraceMismatchError
    bad number or wrong value count          MalformedCoordinatesError
    anything else out of place               UnexpectedTokenError
"""

from dataclasses import dataclass
from typing import List, Optional, Tuple

from flatwkt_geom import (
    Geometry,
    GeometryCollection,
    GeometryType,
    Layout,
    LineString,
    MultiLineString,
    MultiPoint,
    MultiPolygon,
    Point,
    Polygon,
    UnsupportedLayoutError,
    UnsupportedTypeError,
)
from flatwkt_wkt.errors import BraceMismatchError, MalformedCoordinatesError, UnexpectedTokenError
from flatwkt_wkt.grammar import (
    EMPTY,
    FUSED_SUFFIXES,
    KEYWORD_TYPES,
    KEYWORDS,
    NUMBER_RE,
    PUNCTUATION,
    SUFFIX_LAYOUTS,
    TOKEN_RE,
)


@dataclass(frozen=True)
class Token:
    """A single WKT token and its character offset in the input."""
    text: str
    position: int

    @property
    def is_punctuation(self) -> bool:
        return self.text in PUNCTUATION

    @property
    def is_number(self) -> bool:
        return NUMBER_RE.fullmatch(self.text) is not None


def tokenize(text: str) -> List[Token]:
    """Split WKT text on whitespace and the grammar punctuation."""
    return [Token(m.group(), m.start()) for m in TOKEN_RE.finditer(text)]


def decode(text: str) -> Geometry:
    """
    Translate WKT to a geometry.

    Args:
        text: WKT text

    Returns:
        Geometry instance

    Raises:
        UnsupportedTypeError: Unknown geometry keyword
        UnsupportedLayoutError: Unknown dimensionality, or collection members
            whose layout differs from the collection's (explicit suffix or
            first member)
        BraceMismatchError: Unbalanced parentheses
        MalformedCoordinatesError: Bad number or value count in a tuple
        UnexpectedTokenError: Any other syntax error
    """
    parser = _Parser(text)
    geometry = parser.parse_geometry()
    parser.finish()
    return geometry


class _Parser:

    def __init__(self, text: str):
        self.text = text
        self.tokens = tokenize(text)
        self.index = 0
        self.depth = 0

    # ------------------------------------------------------------
    # Cursor
    # ------------------------------------------------------------

    def peek(self) -> Optional[Token]:
        if self.index < len(self.tokens):
            return self.tokens[self.index]
        return None

    def next(self) -> Token:
        token = self.peek()
        if token is None:
            if self.depth > 0:
                raise BraceMismatchError()
            raise UnexpectedTokenError(None, len(self.text))
        self.index += 1
        return token

    def accept(self, literal: str) -> bool:
        token = self.peek()
        if token is not None and token.text == literal:
            self.index += 1
            return True
        return False

    def open(self) -> None:
        token = self.next()
        if token.text != "(":
            raise UnexpectedTokenError(token.text, token.position)
        self.depth += 1

    def close(self) -> None:
        token = self.next()
        if token.text != ")":
            raise UnexpectedTokenError(token.text, token.position)
        self.depth -= 1

    def finish(self) -> None:
        token = self.peek()
        if token is None:
            return
        if token.text == ")":
            raise BraceMismatchError()
        raise UnexpectedTokenError(token.text, token.position)

    # ------------------------------------------------------------
    # Header
    # ------------------------------------------------------------

    def parse_header(self) -> Tuple[GeometryType, Optional[Layout]]:
        """Read the keyword and optional dimensionality word."""
        token = self.next()
        word = token.text.upper()
        if word in KEYWORD_TYPES:
            return KEYWORD_TYPES[word], self.parse_suffix()
        for suffix in FUSED_SUFFIXES:
            keyword = word[:-len(suffix)]
            if word.endswith(suffix) and keyword in KEYWORD_TYPES:
                return KEYWORD_TYPES[keyword], SUFFIX_LAYOUTS[suffix]
        raise UnsupportedTypeError(token.text)

    def parse_suffix(self) -> Optional[Layout]:
        token = self.peek()
        if token is None or token.is_punctuation or token.is_number:
            return None
        word = token.text.upper()
        if word == EMPTY:
            return None
        if word not in SUFFIX_LAYOUTS:
            raise UnsupportedLayoutError(token.text)
        self.index += 1
        return SUFFIX_LAYOUTS[word]

    # ------------------------------------------------------------
    # Geometry
    # ------------------------------------------------------------

    def parse_geometry(self) -> Geometry:
        kind, layout = self.parse_header()
        token = self.peek()
        if token is not None and token.text.upper() == EMPTY:
            self.index += 1
            return self.empty_geometry(kind, layout)

        if kind is GeometryType.GEOMETRY_COLLECTION:
            # Without a suffix the collection takes its members' layout
            return GeometryCollection(layout or Layout.NONE, self.parse_members())

        if layout is None:
            layout = Layout.XY
        context = KEYWORDS[kind]
        stride = layout.stride

        if kind is GeometryType.POINT:
            return Point(layout, self.parse_point(stride, context))
        if kind is GeometryType.LINE_STRING:
            return LineString(layout, self.parse_flat_coords1(stride, context, []))
        if kind is GeometryType.MULTI_POINT:
            return MultiPoint(layout, self.parse_multi_point(stride, context))
        if kind in (GeometryType.POLYGON, GeometryType.MULTI_LINE_STRING):
            flat: List[float] = []
            ends = self.parse_flat_coords2(stride, context, flat)
            cls = Polygon if kind is GeometryType.POLYGON else MultiLineString
            return cls(layout, flat, ends)
        flat = []
        endss = self.parse_flat_coords3(stride, context, flat)
        return MultiPolygon(layout, flat, endss)

    @staticmethod
    def empty_geometry(kind: GeometryType, layout: Optional[Layout]) -> Geometry:
        if kind is GeometryType.GEOMETRY_COLLECTION:
            return GeometryCollection.empty(layout or Layout.NONE)
        layout = layout or Layout.XY
        if kind is GeometryType.POINT:
            return Point.empty(layout)
        if kind is GeometryType.LINE_STRING:
            return LineString.empty(layout)
        if kind is GeometryType.MULTI_POINT:
            return MultiPoint.empty(layout)
        if kind is GeometryType.POLYGON:
            return Polygon.empty(layout)
        if kind is GeometryType.MULTI_LINE_STRING:
            return MultiLineString.empty(layout)
        return MultiPolygon.empty(layout)

    # ------------------------------------------------------------
    # Bodies
    # ------------------------------------------------------------

    def parse_tuple(self, stride: int, context: str) -> List[float]:
        values = []
        token = self.peek()
        while token is not None and not token.is_punctuation:
            if token.text.upper() == EMPTY:
                raise UnexpectedTokenError(token.text, token.position)
            if not token.is_number:
                raise MalformedCoordinatesError(f"{context}: {token.text!r} is not a number")
            values.append(float(token.text))
            self.index += 1
            token = self.peek()
        if token is None:
            raise BraceMismatchError()
        if not values and token.text == "(":
            raise UnexpectedTokenError(token.text, token.position)
        if len(values) != stride:
            raise MalformedCoordinatesError(
                f"{context}: expected {stride} values, got {len(values)}"
            )
        return values

    def parse_point(self, stride: int, context: str) -> List[float]:
        self.open()
        values = self.parse_tuple(stride, context)
        self.close()
        return values

    def parse_flat_coords1(self, stride: int, context: str, flat: List[float]) -> List[float]:
        self.open()
        i = 0
        while True:
            flat.extend(self.parse_tuple(stride, f"{context} coordinate {i}"))
            i += 1
            if not self.accept(","):
                break
        self.close()
        return flat

    def parse_flat_coords2(self, stride: int, context: str, flat: List[float]) -> List[int]:
        self.open()
        ends = []
        while True:
            self.parse_flat_coords1(stride, f"{context} group {len(ends)}", flat)
            ends.append(len(flat))
            if not self.accept(","):
                break
        self.close()
        return ends

    def parse_flat_coords3(self, stride: int, context: str, flat: List[float]) -> List[List[int]]:
        self.open()
        endss = []
        while True:
            endss.append(self.parse_flat_coords2(stride, f"{context} polygon {len(endss)}", flat))
            if not self.accept(","):
                break
        self.close()
        return endss

    def parse_multi_point(self, stride: int, context: str) -> List[float]:
        """Accept both MULTIPOINT (1 2, 3 4) and MULTIPOINT ((1 2), (3 4))."""
        if len(self.tokens) > self.index + 1 and self.tokens[self.index + 1].text != "(":
            return self.parse_flat_coords1(stride, context, [])
        self.open()
        flat: List[float] = []
        i = 0
        while True:
            flat.extend(self.parse_point(stride, f"{context} point {i}"))
            i += 1
            if not self.accept(","):
                break
        self.close()
        return flat

    def parse_members(self) -> List[Geometry]:
        self.open()
        members = []
        while True:
            members.append(self.parse_geometry())
            if not self.accept(","):
                break
        self.close()
        return members
