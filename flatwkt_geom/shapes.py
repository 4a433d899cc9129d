"""
Flat Geometry Model
===================

Immutable geometries stored as one contiguous coordinate buffer plus small
boundary-index arrays.

Design:
- One frozen dataclass per geometry kind, tagged with `geometry_type`
- Coordinates live in a single read-only float64 numpy buffer per geometry
- Sub-runs are described by end offsets (`ends`, `endss`), never by nested lists
- Inputs are copied on construction, so no two geometries share storage
- Thread-safe (immutable)

Boundary arrays:
    LineString, LinearRing, MultiPoint   whole buffer is one run
    Polygon, MultiLineString             ends:  (e0, e1, ...), last == len(flat_coords)
    MultiPolygon                         endss: one ends tuple per polygon, running
                                                offsets into the shared buffer

Example:
    >>> poly = Polygon(Layout.XY, [0, 0, 4, 0, 4, 4, 0, 0], ends=[8])
    >>> poly.linear_ring(0).coords()
    [(0.0, 0.0), (4.0, 0.0), (4.0, 4.0), (0.0, 0.0)]
"""

import dataclasses
import math
from dataclasses import dataclass, fields
from enum import Enum
from typing import Any, ClassVar, Dict, List, Sequence, Tuple, Union

import numpy as np

from flatwkt_geom.errors import UnsupportedLayoutError, UnsupportedTypeError
from flatwkt_geom.layout import Layout

# Quiet NaN stored in every slot of an empty Point.
EMPTY_COORD_BITS = 0x7FF8000000000000
EMPTY_COORD = float(np.array([EMPTY_COORD_BITS], dtype=np.uint64).view(np.float64)[0])


def is_empty_sentinel(value: float) -> bool:
    """
    Check whether a coordinate value marks an empty Point.

    NaN never compares equal to itself, so this is the only supported way
    to test for the sentinel.
    """
    return math.isnan(value)


class GeometryType(str, Enum):
    """Closed set of geometry kinds."""
    POINT = "Point"
    LINE_STRING = "LineString"
    LINEAR_RING = "LinearRing"
    POLYGON = "Polygon"
    MULTI_POINT = "MultiPoint"
    MULTI_LINE_STRING = "MultiLineString"
    MULTI_POLYGON = "MultiPolygon"
    GEOMETRY_COLLECTION = "GeometryCollection"


# ============================================================
# Validation helpers
# ============================================================

def _check_layout(layout: Any, allow_none: bool = False) -> Layout:
    try:
        checked = Layout(layout)
    except ValueError:
        raise UnsupportedLayoutError(layout) from None
    # Only a GeometryCollection may leave its dimensionality undetermined
    if checked is Layout.NONE and not allow_none:
        raise UnsupportedLayoutError(checked)
    return checked


def _freeze_coords(flat_coords: Any, layout: Layout) -> np.ndarray:
    """Copy coordinates into a read-only float64 buffer and check its length."""
    flat = np.array(flat_coords, dtype=np.float64)
    if flat.ndim != 1:
        raise ValueError(f"flat_coords must be 1-D, got shape {flat.shape}")
    stride = layout.stride
    if len(flat) % stride != 0:
        raise ValueError(
            f"flat_coords length {len(flat)} is not a multiple of stride {stride}"
        )
    flat.flags.writeable = False
    return flat


def _check_ends(ends: Sequence[int], start: int, stride: int) -> Tuple[int, ...]:
    """Validate one ends array beginning at offset `start`."""
    checked = tuple(int(end) for end in ends)
    previous = start
    for end in checked:
        if end % stride != 0:
            raise ValueError(f"end offset {end} is not a multiple of stride {stride}")
        if end <= previous:
            raise ValueError(f"end offsets must be strictly increasing, got {checked}")
        previous = end
    return checked


def _check_last_end(last: int, length: int) -> None:
    if last != length:
        raise ValueError(
            f"last end offset {last} does not match flat_coords length {length}"
        )


def _flatten_coords(coords: Sequence[Sequence[float]], layout: Layout) -> List[float]:
    stride = layout.stride
    flat: List[float] = []
    for coord in coords:
        if len(coord) != stride:
            raise ValueError(
                f"coordinate {tuple(coord)} has {len(coord)} values, "
                f"layout {layout.value} needs {stride}"
            )
        flat.extend(float(value) for value in coord)
    return flat


def _flatten_runs(
    runs: Sequence[Sequence[Sequence[float]]], layout: Layout, flat: List[float]
) -> List[int]:
    """Append each run to `flat` and return the resulting end offsets."""
    ends = []
    for run in runs:
        flat.extend(_flatten_coords(run, layout))
        ends.append(len(flat))
    return ends


def _unflatten(flat: np.ndarray, stride: int) -> List[Tuple[float, ...]]:
    if len(flat) == 0:
        return []
    return [tuple(row) for row in flat.reshape(-1, stride).tolist()]


# ============================================================
# Shared behaviour
# ============================================================

class _FlatGeometry:
    """Accessors shared by every geometry kind."""

    geometry_type: ClassVar[GeometryType]

    @property
    def stride(self) -> int:
        return self.layout.stride

    def num_coords(self) -> int:
        if self.stride == 0:
            return 0
        return len(self.flat_coords) // self.stride

    def is_empty(self) -> bool:
        return len(self.flat_coords) == 0

    def with_srid(self, srid: int):
        """Return a copy of this geometry tagged with `srid`."""
        return dataclasses.replace(self, srid=int(srid))

    def clone(self):
        """Return a deep copy that shares no coordinate storage."""
        return dataclasses.replace(self)

    def __eq__(self, other: Any) -> bool:
        if type(other) is not type(self):
            return NotImplemented
        for f in fields(self):
            mine, theirs = getattr(self, f.name), getattr(other, f.name)
            if isinstance(mine, np.ndarray):
                if not np.array_equal(mine, theirs, equal_nan=True):
                    return False
            elif mine != theirs:
                return False
        return True

    def __hash__(self) -> int:
        key: List[Any] = [type(self)]
        for f in fields(self):
            value = getattr(self, f.name)
            if isinstance(value, np.ndarray):
                # Consistent with __eq__: -0.0 == 0.0 and NaN == NaN
                canonical = value + 0.0
                canonical[np.isnan(canonical)] = EMPTY_COORD
                value = canonical.tobytes()
            key.append(value)
        return hash(tuple(key))

    def to_dict(self) -> Dict[str, Any]:
        """Serialize to JSON-compatible dict."""
        data: Dict[str, Any] = {
            'type': self.geometry_type.value,
            'layout': self.layout.value,
            'srid': self.srid,
        }
        for f in fields(self):
            if f.name in ('layout', 'srid'):
                continue
            value = getattr(self, f.name)
            if isinstance(value, np.ndarray):
                data[f.name] = value.tolist()
            elif f.name == 'endss':
                data[f.name] = [list(ends) for ends in value]
            elif f.name == 'geoms':
                data[f.name] = [g.to_dict() for g in value]
            else:
                data[f.name] = list(value)
        return data


# ============================================================
# Depth 0
# ============================================================

@dataclass(frozen=True, eq=False)
class Point(_FlatGeometry):
    """
    A single coordinate tuple.

    An empty Point keeps a full buffer with every slot set to the quiet-NaN
    sentinel; it is never a zero-length buffer.
    """

    geometry_type: ClassVar[GeometryType] = GeometryType.POINT

    layout: Layout
    flat_coords: np.ndarray
    srid: int = 0

    def __post_init__(self):
        layout = _check_layout(self.layout)
        flat = _freeze_coords(self.flat_coords, layout)
        if len(flat) != layout.stride:
            raise ValueError(
                f"Point needs exactly {layout.stride} values, got {len(flat)}"
            )
        object.__setattr__(self, 'layout', layout)
        object.__setattr__(self, 'flat_coords', flat)

    @classmethod
    def zero(cls, layout: Layout, srid: int = 0) -> 'Point':
        """Point with every coordinate set to zero."""
        return cls(layout, np.zeros(_check_layout(layout).stride), srid)

    @classmethod
    def empty(cls, layout: Layout, srid: int = 0) -> 'Point':
        """Point representing POINT EMPTY."""
        n = _check_layout(layout).stride
        return cls(layout, np.full(n, EMPTY_COORD_BITS, dtype=np.uint64).view(np.float64), srid)

    @classmethod
    def from_coords(cls, layout: Layout, coord: Sequence[float], srid: int = 0) -> 'Point':
        layout = _check_layout(layout)
        return cls(layout, _flatten_coords([coord], layout), srid)

    def is_empty(self) -> bool:
        return all(is_empty_sentinel(value) for value in self.flat_coords)

    def coords(self) -> Tuple[float, ...]:
        return tuple(self.flat_coords.tolist())

    @property
    def x(self) -> float:
        return float(self.flat_coords[0])

    @property
    def y(self) -> float:
        return float(self.flat_coords[1])

    @property
    def z(self) -> float:
        """Z value, or 0.0 when the layout has no Z axis."""
        index = self.layout.z_index
        if index is None:
            return 0.0
        return float(self.flat_coords[index])

    @property
    def m(self) -> float:
        """M value, or 0.0 when the layout has no M axis."""
        index = self.layout.m_index
        if index is None:
            return 0.0
        return float(self.flat_coords[index])


# ============================================================
# Depth 1
# ============================================================

class _Depth1(_FlatGeometry):

    def __post_init__(self):
        layout = _check_layout(self.layout)
        object.__setattr__(self, 'layout', layout)
        object.__setattr__(self, 'flat_coords', _freeze_coords(self.flat_coords, layout))

    @classmethod
    def from_coords(cls, layout: Layout, coords: Sequence[Sequence[float]], srid: int = 0):
        layout = _check_layout(layout)
        return cls(layout, _flatten_coords(coords, layout), srid)

    @classmethod
    def empty(cls, layout: Layout, srid: int = 0):
        return cls(layout, [], srid)

    def coords(self) -> List[Tuple[float, ...]]:
        return _unflatten(self.flat_coords, self.stride)


@dataclass(frozen=True, eq=False)
class LineString(_Depth1):
    geometry_type: ClassVar[GeometryType] = GeometryType.LINE_STRING

    layout: Layout
    flat_coords: np.ndarray
    srid: int = 0


@dataclass(frozen=True, eq=False)
class LinearRing(_Depth1):
    """Structurally a LineString; used for the rings of a Polygon."""

    geometry_type: ClassVar[GeometryType] = GeometryType.LINEAR_RING

    layout: Layout
    flat_coords: np.ndarray
    srid: int = 0


@dataclass(frozen=True, eq=False)
class MultiPoint(_Depth1):
    geometry_type: ClassVar[GeometryType] = GeometryType.MULTI_POINT

    layout: Layout
    flat_coords: np.ndarray
    srid: int = 0

    def num_points(self) -> int:
        return self.num_coords()

    def point(self, i: int) -> Point:
        stride = self.stride
        return Point(self.layout, self.flat_coords[i * stride:(i + 1) * stride], self.srid)


# ============================================================
# Depth 2
# ============================================================

class _Depth2(_FlatGeometry):

    def __post_init__(self):
        layout = _check_layout(self.layout)
        flat = _freeze_coords(self.flat_coords, layout)
        ends = _check_ends(self.ends, 0, layout.stride)
        _check_last_end(ends[-1] if ends else 0, len(flat))
        object.__setattr__(self, 'layout', layout)
        object.__setattr__(self, 'flat_coords', flat)
        object.__setattr__(self, 'ends', ends)

    @classmethod
    def from_coords(
        cls, layout: Layout, coords: Sequence[Sequence[Sequence[float]]], srid: int = 0
    ):
        layout = _check_layout(layout)
        flat: List[float] = []
        ends = _flatten_runs(coords, layout, flat)
        return cls(layout, flat, ends, srid)

    @classmethod
    def empty(cls, layout: Layout, srid: int = 0):
        return cls(layout, [], (), srid)

    def is_empty(self) -> bool:
        return len(self.ends) == 0

    def coords(self) -> List[List[Tuple[float, ...]]]:
        start = 0
        runs = []
        for end in self.ends:
            runs.append(_unflatten(self.flat_coords[start:end], self.stride))
            start = end
        return runs

    def _run(self, i: int) -> np.ndarray:
        start = self.ends[i - 1] if i > 0 else 0
        return self.flat_coords[start:self.ends[i]]


@dataclass(frozen=True, eq=False)
class Polygon(_Depth2):
    """Rings (outer first, then holes) split at `ends`."""

    geometry_type: ClassVar[GeometryType] = GeometryType.POLYGON

    layout: Layout
    flat_coords: np.ndarray
    ends: Tuple[int, ...] = ()
    srid: int = 0

    def num_linear_rings(self) -> int:
        return len(self.ends)

    def linear_ring(self, i: int) -> LinearRing:
        return LinearRing(self.layout, self._run(i), self.srid)


@dataclass(frozen=True, eq=False)
class MultiLineString(_Depth2):
    geometry_type: ClassVar[GeometryType] = GeometryType.MULTI_LINE_STRING

    layout: Layout
    flat_coords: np.ndarray
    ends: Tuple[int, ...] = ()
    srid: int = 0

    def num_line_strings(self) -> int:
        return len(self.ends)

    def line_string(self, i: int) -> LineString:
        return LineString(self.layout, self._run(i), self.srid)


# ============================================================
# Depth 3
# ============================================================

@dataclass(frozen=True, eq=False)
class MultiPolygon(_FlatGeometry):
    """
    Polygons sharing one buffer.

    Each entry of `endss` is one polygon's ends array, expressed as offsets
    into the shared buffer; polygon i starts where polygon i-1 ended.
    """

    geometry_type: ClassVar[GeometryType] = GeometryType.MULTI_POLYGON

    layout: Layout
    flat_coords: np.ndarray
    endss: Tuple[Tuple[int, ...], ...] = ()
    srid: int = 0

    def __post_init__(self):
        layout = _check_layout(self.layout)
        flat = _freeze_coords(self.flat_coords, layout)
        endss = []
        start = 0
        for ends in self.endss:
            checked = _check_ends(ends, start, layout.stride)
            if not checked:
                raise ValueError("MultiPolygon members must have at least one ring")
            endss.append(checked)
            start = checked[-1]
        _check_last_end(start, len(flat))
        object.__setattr__(self, 'layout', layout)
        object.__setattr__(self, 'flat_coords', flat)
        object.__setattr__(self, 'endss', tuple(endss))

    @classmethod
    def from_coords(
        cls,
        layout: Layout,
        coords: Sequence[Sequence[Sequence[Sequence[float]]]],
        srid: int = 0,
    ) -> 'MultiPolygon':
        layout = _check_layout(layout)
        flat: List[float] = []
        endss = [_flatten_runs(polygon, layout, flat) for polygon in coords]
        return cls(layout, flat, endss, srid)

    @classmethod
    def empty(cls, layout: Layout, srid: int = 0) -> 'MultiPolygon':
        return cls(layout, [], (), srid)

    def is_empty(self) -> bool:
        return len(self.endss) == 0

    def coords(self) -> List[List[List[Tuple[float, ...]]]]:
        return [self.polygon(i).coords() for i in range(len(self.endss))]

    def num_polygons(self) -> int:
        return len(self.endss)

    def polygon(self, i: int) -> Polygon:
        start = self.endss[i - 1][-1] if i > 0 else 0
        ends = self.endss[i]
        return Polygon(
            self.layout,
            self.flat_coords[start:ends[-1]],
            [end - start for end in ends],
            self.srid,
        )


# ============================================================
# Collections
# ============================================================

@dataclass(frozen=True, eq=False)
class GeometryCollection(_FlatGeometry):
    """
    Heterogeneous ordered sequence of geometries, nesting allowed.

    Layout NONE means "undetermined" and only survives while the collection
    has no members. Given members, a NONE collection takes the layout of
    its first member that has one (XY if every member is an undetermined
    empty collection). Members must match the collection's layout, except
    empty collections of layout NONE.
    """

    geometry_type: ClassVar[GeometryType] = GeometryType.GEOMETRY_COLLECTION

    layout: Layout = Layout.NONE
    geoms: Tuple['Geometry', ...] = ()
    srid: int = 0

    def __post_init__(self):
        layout = _check_layout(self.layout, allow_none=True)
        geoms = tuple(self.geoms)
        for g in geoms:
            if not isinstance(g, _FlatGeometry):
                raise TypeError(f"GeometryCollection members must be geometries, got {type(g)}")
        if layout is Layout.NONE and geoms:
            layout = next((g.layout for g in geoms if g.layout is not Layout.NONE), Layout.XY)
        for g in geoms:
            if g.layout is not layout and g.layout is not Layout.NONE:
                raise UnsupportedLayoutError(g.layout)
        object.__setattr__(self, 'layout', layout)
        object.__setattr__(self, 'geoms', geoms)

    @property
    def flat_coords(self) -> np.ndarray:
        return np.empty(0, dtype=np.float64)

    @classmethod
    def empty(cls, layout: Layout = Layout.NONE, srid: int = 0) -> 'GeometryCollection':
        return cls(layout, (), srid)

    def is_empty(self) -> bool:
        return len(self.geoms) == 0

    def num_geoms(self) -> int:
        return len(self.geoms)

    def geom(self, i: int) -> 'Geometry':
        return self.geoms[i]

    def clone(self) -> 'GeometryCollection':
        return GeometryCollection(self.layout, [g.clone() for g in self.geoms], self.srid)


Geometry = Union[
    Point,
    LineString,
    LinearRing,
    Polygon,
    MultiPoint,
    MultiLineString,
    MultiPolygon,
    GeometryCollection,
]

GEOMETRY_CLASSES = {
    cls.geometry_type: cls
    for cls in (
        Point,
        LineString,
        LinearRing,
        Polygon,
        MultiPoint,
        MultiLineString,
        MultiPolygon,
        GeometryCollection,
    )
}


def from_dict(data: Dict[str, Any]) -> Geometry:
    """Deserialize a geometry from the dict produced by `to_dict()`.

    Args:
        data: Dictionary with type, layout, srid and the kind's own fields

    Returns:
        Geometry instance

    Raises:
        UnsupportedTypeError: If the type tag is unknown
        ValueError: If required fields missing or invalid
    """
    try:
        kind = GeometryType(data['type'])
    except KeyError as e:
        raise ValueError(f"Missing required geometry field: {e}")
    except ValueError:
        raise UnsupportedTypeError(data['type']) from None
    cls = GEOMETRY_CLASSES[kind]
    try:
        layout = Layout(data['layout'])
        srid = int(data.get('srid', 0))
        if kind is GeometryType.GEOMETRY_COLLECTION:
            return cls(layout, [from_dict(g) for g in data.get('geoms', [])], srid)
        if kind is GeometryType.MULTI_POLYGON:
            return cls(layout, data['flat_coords'], data.get('endss', []), srid)
        if kind in (GeometryType.POLYGON, GeometryType.MULTI_LINE_STRING):
            return cls(layout, data['flat_coords'], data.get('ends', []), srid)
        return cls(layout, data['flat_coords'], srid)
    except KeyError as e:
        raise ValueError(f"Missing required {kind.value} field: {e}")
    except (TypeError, ValueError) as e:
        raise ValueError(f"Invalid {kind.value} data: {e}")
