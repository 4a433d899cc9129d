"""
WKT Errors
==========

Decode-side additions to the shared geometry error taxonomy.
"""

from typing import Optional

from flatwkt_geom.errors import GeometryError


class WKTError(GeometryError):
    """Base class for WKT syntax errors."""
    pass


class BraceMismatchError(WKTError):
    """Raised when parentheses do not balance."""

    def __init__(self, message: str = "wkt: brace mismatch"):
        super().__init__(message)


class MalformedCoordinatesError(WKTError):
    """Raised when a coordinate group has a bad value or value count."""

    def __init__(self, context: str):
        self.context = context
        super().__init__(f"wkt: malformed coordinates in {context}")


class UnexpectedTokenError(WKTError):
    """Raised when a token appears where the grammar does not allow it."""

    def __init__(self, token: Optional[str], position: int):
        self.token = token
        self.position = position
        if token is None:
            message = f"wkt: unexpected end of input at offset {position}"
        else:
            message = f"wkt: unexpected token {token!r} at offset {position}"
        super().__init__(message)
