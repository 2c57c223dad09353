"""Procedural sample shapes.

Each builder is a pure function of its arguments and returns a fresh
:class:`~seamviz.mesh.Mesh`. Planar shapes (circle, disk, triangle, square)
lie in the XY plane as two faces offset by :data:`PLANAR_HALF_THICKNESS` in
Z, so both sides can be lit; the two faces are wound in opposite senses.
"""

from __future__ import annotations

import math
from typing import Callable, Dict, List

from seamviz.mesh import Mesh
from seamviz.vec import Vec3

PLANAR_HALF_THICKNESS = 0.005

SHAPE_IDS = ("circle", "disk", "triangle", "square", "sphere", "cube", "pyramid", "torus")


def _check_detail(detail: int, minimum: int = 1) -> int:
    if not isinstance(detail, int) or isinstance(detail, bool) or detail < minimum:
        raise ValueError(f"detail must be an integer >= {minimum}, got {detail!r}")
    return detail


def make_sphere(detail: int = 40) -> Mesh:
    """UV sphere of unit radius with ``detail`` bands in each angle.

    Vertices are unit length, so each doubles as its own normal.
    """

    _check_detail(detail)
    verts: List[Vec3] = []
    indices: List[int] = []
    for i in range(detail + 1):
        theta = math.pi * i / detail
        st, ct = math.sin(theta), math.cos(theta)
        for j in range(detail + 1):
            phi = 2.0 * math.pi * j / detail
            verts.append((st * math.cos(phi), st * math.sin(phi), ct))

    row = detail + 1
    for i in range(detail):
        for j in range(detail):
            a = i * row + j
            b = a + row
            indices += [a, b, a + 1,
                        b, b + 1, a + 1]
    return Mesh(vertices=tuple(verts), indices=tuple(indices), normals=tuple(verts))


def make_cube(half_size: float = 0.8) -> Mesh:
    s = half_size
    verts = ((-s, -s, -s), (s, -s, -s), (s, s, -s), (-s, s, -s),
             (-s, -s, s), (s, -s, s), (s, s, s), (-s, s, s))
    faces = ((0, 1, 2, 3), (4, 5, 6, 7), (0, 1, 5, 4),
             (1, 2, 6, 5), (2, 3, 7, 6), (3, 0, 4, 7))
    indices: List[int] = []
    for k, (a, b, c, d) in enumerate(faces):
        if k % 2 == 0:
            indices += [a, b, c, a, c, d]
        else:
            indices += [a, c, b, a, d, c]
    return Mesh(vertices=verts, indices=tuple(indices))


def make_pyramid() -> Mesh:
    """Square-based pyramid with its apex on +Z."""

    verts = ((0.0, 0.0, 1.2),
             (1.0, 1.0, -0.6), (1.0, -1.0, -0.6),
             (-1.0, -1.0, -0.6), (-1.0, 1.0, -0.6))
    indices = (0, 1, 2, 0, 2, 3, 0, 3, 4, 0, 4, 1,
               1, 3, 2, 1, 4, 3)
    return Mesh(vertices=verts, indices=indices)


def make_torus(detail: int = 40, major_radius: float = 1.0,
               minor_radius: float = 0.4, minor_detail: int = 24) -> Mesh:
    """Torus about the Z axis; ``detail`` steps around the ring, ``minor_detail`` around the tube."""

    _check_detail(detail)
    _check_detail(minor_detail)
    verts: List[Vec3] = []
    indices: List[int] = []
    for i in range(detail + 1):
        theta = 2.0 * math.pi * i / detail
        for j in range(minor_detail + 1):
            phi = 2.0 * math.pi * j / minor_detail
            ring = major_radius + minor_radius * math.cos(phi)
            verts.append((ring * math.cos(theta),
                          ring * math.sin(theta),
                          minor_radius * math.sin(phi)))

    row = minor_detail + 1
    for i in range(detail):
        for j in range(minor_detail):
            a = i * row + j
            b = (i + 1) * row + j
            indices += [a, b, a + 1, b, b + 1, a + 1]
    return Mesh(vertices=tuple(verts), indices=tuple(indices))


def make_disk(detail: int = 40) -> Mesh:
    """Unit disk; vertex 0 is an origin reference point outside both faces."""

    _check_detail(detail)
    z = PLANAR_HALF_THICKNESS
    verts: List[Vec3] = [(0.0, 0.0, 0.0)]
    indices: List[int] = []

    for side in (-1, 1):
        start = len(verts)
        verts.append((0.0, 0.0, side * z))
        for i in range(detail + 1):
            theta = 2.0 * math.pi * i / detail
            verts.append((math.cos(theta), math.sin(theta), side * z))
        for i in range(detail):
            a, b, c = start, start + 1 + i, start + 2 + i
            indices += [a, b, c] if side == 1 else [a, c, b]

    # band joining the z = -h rim to the z = +h rim
    lower = 2
    upper = detail + 4
    for i in range(detail):
        l1, l2 = lower + i, lower + i + 1
        u1, u2 = upper + i, upper + i + 1
        indices += [l1, u1, u2, l1, u2, l2]
    return Mesh(vertices=tuple(verts), indices=tuple(indices))


def make_circle(detail: int = 40, radius: float = 1.0, width: float = 0.08) -> Mesh:
    """Flat ring of the given ``width`` centred on a circle of ``radius``."""

    _check_detail(detail)
    z = PLANAR_HALF_THICKNESS
    inner = radius - width / 2.0
    outer = radius + width / 2.0
    verts: List[Vec3] = []
    indices: List[int] = []

    for side in (-1, 1):
        start = len(verts)
        for i in range(detail + 1):
            theta = 2.0 * math.pi * i / detail
            c, s = math.cos(theta), math.sin(theta)
            verts.append((inner * c, inner * s, side * z))
            verts.append((outer * c, outer * s, side * z))
        for i in range(detail):
            a = start + 2 * i
            b = a + 1
            c = start + 2 * (i + 1)
            d = c + 1
            if side == 1:
                indices += [a, b, d, a, d, c]
            else:
                indices += [a, d, b, a, c, d]

    # inner and outer walls between the two faces
    offset = 2 * (detail + 1)
    for i in range(detail):
        in_a, in_b = 2 * i, 2 * (i + 1)
        out_a, out_b = in_a + 1, in_b + 1
        indices += [in_a, offset + in_a, offset + in_b, in_a, offset + in_b, in_b]
        indices += [out_a, offset + out_b, offset + out_a, out_a, out_b, offset + out_b]
    return Mesh(vertices=tuple(verts), indices=tuple(indices))


def make_triangle(detail: int = 40, side_length: float = 1.8) -> Mesh:
    """Equilateral triangle centred on its centroid, subdivided ``detail`` times per edge."""

    _check_detail(detail)
    z = PLANAR_HALF_THICKNESS
    h = math.sqrt(3.0) / 2.0 * side_length
    p1 = (0.0, h * 2.0 / 3.0)
    p2 = (-side_length / 2.0, -h / 3.0)
    p3 = (side_length / 2.0, -h / 3.0)

    verts: List[Vec3] = []
    indices: List[int] = []
    for side in (-1, 1):
        start = len(verts)
        for i in range(detail + 1):
            for j in range(detail - i + 1):
                k = detail - i - j
                x = (i * p1[0] + j * p2[0] + k * p3[0]) / detail
                y = (i * p1[1] + j * p2[1] + k * p3[1]) / detail
                verts.append((x, y, side * z))

        row_start = start
        for i in range(detail):
            next_row = row_start + (detail - i + 1)
            for j in range(detail - i):
                a = row_start + j
                b = a + 1
                c = next_row + j
                d = c + 1
                last = j == detail - i - 1
                if side == 1:
                    indices += [a, b, c]
                    if not last:
                        indices += [b, d, c]
                else:
                    indices += [a, c, b]
                    if not last:
                        indices += [b, c, d]
            row_start = next_row
    return Mesh(vertices=tuple(verts), indices=tuple(indices))


def make_square(half_size: float = 0.9) -> Mesh:
    s = half_size
    z = PLANAR_HALF_THICKNESS
    verts: List[Vec3] = []
    indices: List[int] = []
    for side in (-1, 1):
        start = len(verts)
        verts += [(-s, -s, side * z), (s, -s, side * z),
                  (s, s, side * z), (-s, s, side * z)]
        if side == 1:
            indices += [start, start + 1, start + 2, start, start + 2, start + 3]
        else:
            indices += [start, start + 2, start + 1, start, start + 3, start + 2]
    for i in range(4):
        a, b = i, (i + 1) % 4
        c, d = a + 4, b + 4
        indices += [a, c, d, a, d, b]
    return Mesh(vertices=tuple(verts), indices=tuple(indices))


_BUILDERS: Dict[str, Callable[[int], Mesh]] = {
    "circle": make_circle,
    "disk": make_disk,
    "triangle": make_triangle,
    "square": lambda detail: make_square(),
    "sphere": make_sphere,
    "cube": lambda detail: make_cube(),
    "pyramid": lambda detail: make_pyramid(),
    "torus": make_torus,
}


def make_shape_mesh(shape_id: str, detail: int = 40) -> Mesh:
    """Build the sample shape named ``shape_id``.

    ``detail`` is ignored by the fixed polyhedra (square, cube, pyramid).
    Raises ``ValueError`` for an unknown id.
    """

    builder = _BUILDERS.get(shape_id)
    if builder is None:
        raise ValueError(f"Unknown shape: {shape_id!r}")
    return builder(detail)


__all__ = [
    "PLANAR_HALF_THICKNESS",
    "SHAPE_IDS",
    "make_sphere",
    "make_cube",
    "make_pyramid",
    "make_torus",
    "make_disk",
    "make_circle",
    "make_triangle",
    "make_square",
    "make_shape_mesh",
]
