"""Vertex data for simple solids: circle, disc and cylinders."""

from __future__ import annotations

import math
from dataclasses import dataclass
from enum import Enum
from typing import Iterator, Tuple

from .signals import Point

PI2 = 2.0 * 3.1415926534


class Kind(Enum):
    """How a primitive's vertices are joined."""

    LINES = "lines"
    LINE_LOOP = "line_loop"
    POLYGON = "polygon"
    QUAD_STRIP = "quad_strip"


@dataclass(frozen=True)
class Primitive:
    """Vertices of one primitive, with a normal per vertex where lit."""

    kind: Kind
    vertices: Tuple[Point, ...]
    normals: Tuple[Point, ...] = ()


@dataclass(frozen=True)
class Shape:
    """Primitives drawn together, turned ``rotation`` degrees about Y."""

    primitives: Tuple[Primitive, ...]
    rotation: float = 0.0
    normalize: bool = False


def _step(segments: int) -> float:
    if segments < 1:
        raise ValueError(f"segments must be positive, got {segments}")
    return PI2 / float(segments)


def _ring(radius: float, segments: int, count: int) -> Iterator[Tuple[float, float]]:
    dq = _step(segments)
    for i in range(count):
        yield radius * math.cos(dq * i), radius * math.sin(dq * i)


def _loop(radius: float, segments: int, y: float) -> Tuple[Point, ...]:
    return tuple((x, y, z) for x, z in _ring(radius, segments, segments))


def circle(radius: float, segments: int) -> Shape:
    """Outline of a circle of ``radius`` in the XZ plane."""
    return Shape((Primitive(Kind.LINE_LOOP, _loop(radius, segments, 0.0)),))


def disc(radius: float, segments: int) -> Shape:
    """Filled disc in the XZ plane facing +Y."""
    vertices = _loop(radius, segments, 0.0)
    normals = ((0.0, 1.0, 0.0),) * len(vertices)
    return Shape((Primitive(Kind.POLYGON, vertices, normals),), normalize=True)


def solid_cylinder(radius: float, height: float, segments: int) -> Shape:
    """Closed cylinder of ``height`` centred on the origin along Y."""
    half = 0.5 * height
    side_vertices = []
    side_normals = []
    for x, z in _ring(radius, segments, segments + 1):
        side_vertices += [(x, half, z), (x, -half, z)]
        side_normals += [(x, 0.0, z), (x, 0.0, z)]
    bottom = _loop(radius, segments, -half)
    top = _loop(radius, segments, half)
    primitives = (
        Primitive(Kind.QUAD_STRIP, tuple(side_vertices), tuple(side_normals)),
        Primitive(Kind.POLYGON, bottom, ((0.0, -1.0, 0.0),) * len(bottom)),
        Primitive(Kind.POLYGON, top, ((0.0, 1.0, 0.0),) * len(top)),
    )
    rotation = -_step(segments) * 180.0 / PI2
    return Shape(primitives, rotation=rotation, normalize=True)


def wire_cylinder(radius: float, height: float, segments: int) -> Shape:
    """Wire-frame cylinder: vertical edges and the two end loops."""
    half = 0.5 * height
    edges = []
    for x, z in _ring(radius, segments, segments):
        edges += [(x, half, z), (x, -half, z)]
    primitives = (
        Primitive(Kind.LINES, tuple(edges)),
        Primitive(Kind.LINE_LOOP, _loop(radius, segments, half)),
        Primitive(Kind.LINE_LOOP, _loop(radius, segments, -half)),
    )
    rotation = -_step(segments) * 180.0 / PI2
    return Shape(primitives, rotation=rotation)