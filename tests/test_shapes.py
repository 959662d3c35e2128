import math

import pytest

from tebata.shapes import Kind, circle, disc, solid_cylinder, wire_cylinder


def test_circle_points_lie_on_radius():
    shape = circle(2.0, 8)
    (loop,) = shape.primitives
    assert loop.kind is Kind.LINE_LOOP
    assert len(loop.vertices) == 8
    for x, y, z in loop.vertices:
        assert y == 0.0
        assert math.isclose(math.hypot(x, z), 2.0)


def test_circle_starts_on_x_axis():
    (loop,) = circle(3.0, 6).primitives
    assert loop.vertices[0] == (3.0, 0.0, 0.0)


def test_disc_faces_up():
    shape = disc(1.0, 5)
    (poly,) = shape.primitives
    assert poly.kind is Kind.POLYGON
    assert len(poly.normals) == len(poly.vertices) == 5
    assert set(poly.normals) == {(0.0, 1.0, 0.0)}
    assert shape.normalize


def test_solid_cylinder_structure():
    shape = solid_cylinder(1.0, 4.0, 6)
    side, bottom, top = shape.primitives
    assert side.kind is Kind.QUAD_STRIP
    assert len(side.vertices) == 2 * (6 + 1)
    assert {v[1] for v in side.vertices} == {2.0, -2.0}
    assert all(v[1] == -2.0 for v in bottom.vertices)
    assert all(v[1] == 2.0 for v in top.vertices)
    assert set(bottom.normals) == {(0.0, -1.0, 0.0)}
    assert set(top.normals) == {(0.0, 1.0, 0.0)}


def test_solid_cylinder_side_closes():
    side = solid_cylinder(1.0, 1.0, 12).primitives[0]
    first, last = side.vertices[0], side.vertices[-2]
    assert all(math.isclose(a, b, abs_tol=1e-6) for a, b in zip(first, last))


def test_cylinder_rotation_is_half_a_segment():
    assert math.isclose(solid_cylinder(1.0, 1.0, 10).rotation, -180.0 / 10)
    assert math.isclose(wire_cylinder(1.0, 1.0, 10).rotation, -180.0 / 10)


def test_wire_cylinder_edges_and_loops():
    edges, upper, lower = wire_cylinder(0.5, 2.0, 4).primitives
    assert edges.kind is Kind.LINES
    assert len(edges.vertices) == 8
    for top_point, bottom_point in zip(edges.vertices[::2], edges.vertices[1::2]):
        assert top_point[1] == 1.0 and bottom_point[1] == -1.0
        assert (top_point[0], top_point[2]) == (bottom_point[0], bottom_point[2])
    assert upper.kind is lower.kind is Kind.LINE_LOOP
    assert len(upper.vertices) == len(lower.vertices) == 4


@pytest.mark.parametrize("build", [
    lambda: circle(1.0, 0),
    lambda: disc(1.0, -3),
    lambda: solid_cylinder(1.0, 1.0, 0),
    lambda: wire_cylinder(1.0, 1.0, 0),
])
def test_non_positive_segments_rejected(build):
    with pytest.raises(ValueError):
        build()