"""
Coordinate Layouts
==================

Pure mapping from a dimensionality tag to a coordinate-tuple width (stride)
and to the slots of the optional Z and M axes.

Design:
- Closed set of tags (str Enum)
- NONE means "undetermined" and is only meaningful for an empty collection
- Lookups are total; there is no runtime failure case
"""

from enum import Enum
from typing import Optional


class Layout(str, Enum):
    """Dimensionality tag of a geometry."""
    NONE = "NONE"
    XY = "XY"
    XYZ = "XYZ"
    XYM = "XYM"
    XYZM = "XYZM"

    @property
    def stride(self) -> int:
        """Number of values in one coordinate tuple."""
        return _STRIDES[self]

    @property
    def z_index(self) -> Optional[int]:
        """Slot of the Z value within a tuple, or None."""
        return _Z_INDEX[self]

    @property
    def m_index(self) -> Optional[int]:
        """Slot of the M value within a tuple, or None."""
        return _M_INDEX[self]


_STRIDES = {
    Layout.NONE: 0,
    Layout.XY: 2,
    Layout.XYZ: 3,
    Layout.XYM: 3,
    Layout.XYZM: 4,
}

_Z_INDEX = {
    Layout.NONE: None,
    Layout.XY: None,
    Layout.XYZ: 2,
    Layout.XYM: None,
    Layout.XYZM: 2,
}

_M_INDEX = {
    Layout.NONE: None,
    Layout.XY: None,
    Layout.XYZ: None,
    Layout.XYM: 2,
    Layout.XYZM: 3,
}


def stride(layout: Layout) -> int:
    return Layout(layout).stride


def z_index(layout: Layout) -> Optional[int]:
    return Layout(layout).z_index


def m_index(layout: Layout) -> Optional[int]:
    return Layout(layout).m_index
