"""Shared test fixtures for flatwkt tests."""
import pytest

from flatwkt_convert import ConverterConfig
from flatwkt_geom import (
    GeometryCollection, Layout, LineString, MultiLineString, MultiPoint,
    MultiPolygon, Point, Polygon,
)


@pytest.fixture
def square_with_hole():
    """Polygon: 4-point outer ring, 4-point inner ring (stride 2)."""
    return Polygon.from_coords(Layout.XY, [
        [(0, 0), (10, 0), (10, 10), (0, 0)],
        [(1, 1), (2, 1), (2, 2), (1, 1)],
    ])


@pytest.fixture
def two_polygons():
    """MultiPolygon: a triangle with a hole, then a plain triangle."""
    return MultiPolygon.from_coords(Layout.XY, [
        [[(0, 0), (4, 0), (0, 4), (0, 0)], [(1, 1), (2, 1), (1, 2), (1, 1)]],
        [[(10, 10), (14, 10), (10, 14), (10, 10)]],
    ])


@pytest.fixture
def sample_geometries(square_with_hole, two_polygons):
    """One geometry of every encodable kind, across layouts."""
    return [
        Point.from_coords(Layout.XY, (30, 10)),
        Point.from_coords(Layout.XYZ, (1, 2, 3)),
        Point.from_coords(Layout.XYM, (1, 2, 4)),
        Point.from_coords(Layout.XYZM, (1, 2, 3, 4)),
        Point.empty(Layout.XY),
        LineString.from_coords(Layout.XYZ, [(1, 1, 1), (2, 2, 2)]),
        LineString.empty(Layout.XYM),
        MultiPoint.from_coords(Layout.XY, [(0.5, -1.25), (1e-7, 123456789.5)]),
        square_with_hole,
        MultiLineString.from_coords(Layout.XYM, [[(0, 0, 1), (1, 1, 2)], [(2, 2, 3), (3, 3, 4)]]),
        two_polygons,
        MultiPolygon.empty(Layout.XYZM),
        GeometryCollection(Layout.XY, [
            Point.from_coords(Layout.XY, (1, 2)),
            LineString.from_coords(Layout.XY, [(0, 0), (0.1, 0.2)]),
            GeometryCollection(Layout.XY, [Point.empty(Layout.XY)]),
            GeometryCollection.empty(),
        ]),
        GeometryCollection.empty(),
        GeometryCollection.empty(Layout.XYZ),
    ]


@pytest.fixture
def make_config(tmp_path):
    """Build a ConverterConfig over a fresh input file."""
    def _make(lines=(), **overrides):
        input_path = tmp_path / "input.wkt"
        input_path.write_text("".join(f"{line}\n" for line in lines))
        values = dict(input_path=input_path, output_path=tmp_path / "out" / "output.wkt")
        values.update(overrides)
        return ConverterConfig(**values)
    return _make
