"""Tests for flatwkt_geom/shapes.py flat geometry model."""
import math

import numpy as np
import pytest

from flatwkt_geom import (
    EMPTY_COORD, GeometryCollection, GeometryType, Layout, LinearRing, LineString,
    MultiLineString, MultiPoint, MultiPolygon, Point, Polygon,
    UnsupportedLayoutError, UnsupportedTypeError, from_dict, is_empty_sentinel,
)


# --- Point ---

def test_point_accessors_xyzm():
    p = Point(Layout.XYZM, [1, 2, 3, 4])
    assert (p.x, p.y, p.z, p.m) == (1.0, 2.0, 3.0, 4.0)
    assert p.stride == 4
    assert p.coords() == (1.0, 2.0, 3.0, 4.0)


def test_point_m_uses_slot_two_for_xym():
    p = Point.from_coords(Layout.XYM, (1, 2, 9))
    assert p.m == 9.0
    assert p.z == 0.0


def test_point_zero():
    p = Point.zero(Layout.XYZ)
    assert p.coords() == (0.0, 0.0, 0.0)
    assert not p.is_empty()


def test_point_wrong_length_raises():
    with pytest.raises(ValueError, match="exactly 2"):
        Point(Layout.XY, [1, 2, 3, 4])


def test_empty_point_keeps_full_buffer_of_sentinels():
    p = Point.empty(Layout.XYZ)
    assert len(p.flat_coords) == 3
    assert p.is_empty()
    assert all(bits == 0x7FF8000000000000 for bits in p.flat_coords.view(np.uint64))


def test_empty_sentinel_predicate():
    assert is_empty_sentinel(EMPTY_COORD)
    assert not is_empty_sentinel(0.0)
    assert EMPTY_COORD != EMPTY_COORD


def test_point_with_one_nan_is_not_empty():
    assert not Point(Layout.XY, [math.nan, 1.0]).is_empty()


def test_empty_points_compare_equal():
    assert Point.empty(Layout.XY) == Point.empty(Layout.XY)
    assert Point.empty(Layout.XY) != Point.empty(Layout.XYM)


# --- Storage ---

def test_constructor_copies_input_buffer():
    source = np.array([0.0, 0.0, 1.0, 1.0])
    line = LineString(Layout.XY, source)
    source[0] = 99.0
    assert line.flat_coords[0] == 0.0


def test_flat_coords_are_read_only():
    line = LineString(Layout.XY, [0, 0, 1, 1])
    with pytest.raises(ValueError):
        line.flat_coords[0] = 5.0


def test_clone_does_not_alias(square_with_hole):
    copy = square_with_hole.clone()
    assert copy == square_with_hole
    assert copy is not square_with_hole
    assert not np.shares_memory(copy.flat_coords, square_with_hole.flat_coords)


def test_with_srid_returns_new_geometry():
    p = Point.from_coords(Layout.XY, (1, 2))
    tagged = p.with_srid(4326)
    assert tagged.srid == 4326
    assert p.srid == 0
    assert tagged != p


def test_geometries_are_frozen():
    p = Point.from_coords(Layout.XY, (1, 2))
    with pytest.raises(AttributeError):
        p.srid = 3857


def test_unknown_layout_raises():
    with pytest.raises(UnsupportedLayoutError):
        LineString("XYZQ", [])


@pytest.mark.parametrize("build", [
    lambda: Point.empty(Layout.NONE),
    lambda: Point.zero(Layout.NONE),
    lambda: LineString(Layout.NONE, []),
    lambda: MultiPoint.empty(Layout.NONE),
    lambda: Polygon(Layout.NONE, [], ()),
    lambda: MultiLineString.empty(Layout.NONE),
    lambda: MultiPolygon.empty(Layout.NONE),
])
def test_layout_none_is_reserved_for_collections(build):
    with pytest.raises(UnsupportedLayoutError):
        build()


# --- Depth 1 ---

def test_line_string_stride_mismatch_raises():
    with pytest.raises(ValueError, match="multiple of stride 2"):
        LineString(Layout.XY, [0, 0, 1])


def test_line_string_from_coords_roundtrip():
    coords = [(0.0, 0.0, 1.0), (2.0, 3.0, 4.0)]
    line = LineString.from_coords(Layout.XYZ, coords)
    assert line.flat_coords.tolist() == [0.0, 0.0, 1.0, 2.0, 3.0, 4.0]
    assert line.coords() == coords
    assert line.num_coords() == 2


def test_from_coords_rejects_wrong_tuple_width():
    with pytest.raises(ValueError, match="needs 2"):
        LineString.from_coords(Layout.XY, [(0, 0), (1, 1, 1)])


def test_empty_line_string():
    line = LineString.empty(Layout.XY)
    assert line.is_empty()
    assert line.coords() == []


def test_multi_point_point_accessor():
    mp = MultiPoint.from_coords(Layout.XY, [(1, 2), (3, 4)])
    assert mp.num_points() == 2
    assert mp.point(1) == Point.from_coords(Layout.XY, (3, 4))


def test_linear_ring_is_distinct_from_line_string():
    ring = LinearRing(Layout.XY, [0, 0, 1, 0, 0, 0])
    line = LineString(Layout.XY, [0, 0, 1, 0, 0, 0])
    assert ring.geometry_type is GeometryType.LINEAR_RING
    assert ring != line


# --- Depth 2 ---

def test_polygon_ends_for_two_four_point_rings(square_with_hole):
    assert square_with_hole.ends == (8, 16)
    assert square_with_hole.num_linear_rings() == 2


def test_polygon_linear_ring(square_with_hole):
    hole = square_with_hole.linear_ring(1)
    assert isinstance(hole, LinearRing)
    assert hole.coords() == [(1.0, 1.0), (2.0, 1.0), (2.0, 2.0), (1.0, 1.0)]


def test_polygon_coords_unflatten(square_with_hole):
    rings = square_with_hole.coords()
    assert len(rings) == 2
    assert rings[0][1] == (10.0, 0.0)


@pytest.mark.parametrize("ends, match", [
    ([3, 8], "multiple of stride"),
    ([8, 4], "strictly increasing"),
    ([4], "does not match"),
])
def test_polygon_bad_ends_raise(ends, match):
    with pytest.raises(ValueError, match=match):
        Polygon(Layout.XY, [0, 0, 1, 0, 1, 1, 0, 0], ends)


def test_polygon_without_ends_must_be_empty():
    with pytest.raises(ValueError, match="does not match"):
        Polygon(Layout.XY, [0, 0, 1, 1], ())


def test_multi_line_string_line_string():
    mls = MultiLineString.from_coords(Layout.XY, [[(0, 0), (1, 1)], [(2, 2), (3, 3), (4, 4)]])
    assert mls.ends == (4, 10)
    assert mls.line_string(1).coords() == [(2.0, 2.0), (3.0, 3.0), (4.0, 4.0)]


def test_empty_polygon():
    poly = Polygon.empty(Layout.XYZ)
    assert poly.is_empty()
    assert poly.ends == ()


# --- Depth 3 ---

def test_multi_polygon_endss(two_polygons):
    assert two_polygons.endss == ((8, 16), (24,))
    assert two_polygons.num_polygons() == 2


def test_multi_polygon_polygon_rebases_ends(two_polygons):
    second = two_polygons.polygon(1)
    assert second.ends == (8,)
    assert second.coords() == [[(10.0, 10.0), (14.0, 10.0), (10.0, 14.0), (10.0, 10.0)]]


def test_multi_polygon_member_without_rings_raises():
    with pytest.raises(ValueError, match="at least one ring"):
        MultiPolygon(Layout.XY, [0, 0, 1, 1], [[4], []])


def test_multi_polygon_members_continue_offsets():
    with pytest.raises(ValueError, match="strictly increasing"):
        MultiPolygon(Layout.XY, [0, 0, 1, 1, 2, 2], [[4], [2, 6]])


# --- GeometryCollection ---

def test_collection_rejects_mixed_layouts():
    with pytest.raises(UnsupportedLayoutError):
        GeometryCollection(Layout.XY, [Point.from_coords(Layout.XYZ, (1, 2, 3))])


def test_collection_accepts_empty_undetermined_member():
    gc = GeometryCollection(Layout.XYZ, [GeometryCollection.empty()])
    assert gc.num_geoms() == 1
    assert not gc.is_empty()


def test_collection_without_layout_takes_member_layout():
    gc = GeometryCollection(geoms=[Point.from_coords(Layout.XYZ, (1, 2, 3))])
    assert gc.layout is Layout.XYZ


def test_collection_of_undetermined_members_defaults_to_xy():
    gc = GeometryCollection(geoms=[GeometryCollection.empty()])
    assert gc.layout is Layout.XY


def test_collection_without_layout_rejects_mixed_members():
    with pytest.raises(UnsupportedLayoutError):
        GeometryCollection(geoms=[
            Point.from_coords(Layout.XY, (1, 2)),
            Point.from_coords(Layout.XYM, (1, 2, 3)),
        ])


def test_collection_rejects_non_geometry():
    with pytest.raises(TypeError):
        GeometryCollection(Layout.XY, ["POINT (1 2)"])


def test_collection_clone_is_deep():
    gc = GeometryCollection(Layout.XY, [Point.from_coords(Layout.XY, (1, 2))])
    copy = gc.clone()
    assert copy == gc
    assert copy.geom(0) is not gc.geom(0)


# --- Hashing ---

def test_equal_geometries_hash_equal(square_with_hole):
    assert hash(square_with_hole.clone()) == hash(square_with_hole)
    assert len({Point(Layout.XY, [1, 2]), Point(Layout.XY, [1, 2])}) == 1


def test_hash_agrees_with_equality_for_signed_zero_and_nan():
    assert Point(Layout.XY, [0.0, 1.0]) == Point(Layout.XY, [-0.0, 1.0])
    assert hash(Point(Layout.XY, [0.0, 1.0])) == hash(Point(Layout.XY, [-0.0, 1.0]))
    assert hash(Point(Layout.XY, [math.nan, math.nan])) == hash(Point.empty(Layout.XY))


def test_geometries_work_as_dict_keys(two_polygons):
    labels = {two_polygons: "parcels", GeometryCollection.empty(): "nothing"}
    assert labels[two_polygons.clone()] == "parcels"
    assert labels[GeometryCollection.empty()] == "nothing"


def test_hash_distinguishes_kind():
    coords = [0, 0, 1, 0, 0, 0]
    assert LineString(Layout.XY, coords) != LinearRing(Layout.XY, coords)
    assert len({LineString(Layout.XY, coords), LinearRing(Layout.XY, coords)}) == 2


# --- to_dict / from_dict ---

def test_to_dict_polygon(square_with_hole):
    data = square_with_hole.to_dict()
    assert data['type'] == "Polygon"
    assert data['layout'] == "XY"
    assert data['ends'] == [8, 16]
    assert len(data['flat_coords']) == 16


def test_from_dict_roundtrip(sample_geometries):
    for g in sample_geometries:
        assert from_dict(g.to_dict()) == g


def test_from_dict_unknown_type():
    with pytest.raises(UnsupportedTypeError):
        from_dict({'type': 'Circle', 'layout': 'XY'})


def test_from_dict_missing_field():
    with pytest.raises(ValueError, match="flat_coords"):
        from_dict({'type': 'LineString', 'layout': 'XY'})
