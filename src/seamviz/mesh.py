"""Triangle meshes and the per-vertex cone test that consumes them.

Meshes are the only bulk data the engine handles. The engine never edits
one; it reads each vertex's direction from the origin and tests that
direction against a quotient cone.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Iterator, Optional, Tuple

import numpy as np

from seamviz.quotient import QuotientClass, quotient_cone_weight
from seamviz.vec import FALLBACK_DIRECTION, Vec3, normalize, to_vec3, triangle_normal

TriTuple = Tuple[Vec3, Vec3, Vec3, Vec3]


@dataclass(frozen=True)
class Mesh:
    """Immutable indexed triangle mesh.

    ``indices`` is a flat sequence, three entries per triangle. ``normals``
    is optional and, when present, parallel to ``vertices``.
    """

    vertices: Tuple[Vec3, ...]
    indices: Tuple[int, ...]
    normals: Optional[Tuple[Vec3, ...]] = None

    def __post_init__(self) -> None:
        object.__setattr__(self, "vertices", tuple(to_vec3(v) for v in self.vertices))
        object.__setattr__(self, "indices", tuple(int(i) for i in self.indices))
        if self.normals is not None:
            normals = tuple(to_vec3(n) for n in self.normals)
            if len(normals) != len(self.vertices):
                raise ValueError("normals must match vertices one to one")
            object.__setattr__(self, "normals", normals)

        if len(self.indices) % 3 != 0:
            raise ValueError("index count must be a multiple of three")
        count = len(self.vertices)
        for i in self.indices:
            if i < 0 or i >= count:
                raise ValueError(f"vertex index out of range: {i}")

    @property
    def triangle_count(self) -> int:
        return len(self.indices) // 3


def triangles(mesh: Mesh) -> Iterator[Tuple[int, int, int]]:
    """Yield the vertex index triples of ``mesh``."""

    idx = mesh.indices
    for k in range(0, len(idx), 3):
        yield idx[k], idx[k + 1], idx[k + 2]


def mesh_triangles(mesh: Mesh) -> Iterator[TriTuple]:
    """Yield triangles as ``(normal, v0, v1, v2)``.

    Normals are unit vectors from the winding order. Faces with zero area
    are skipped silently.
    """

    verts = mesh.vertices
    for i0, i1, i2 in triangles(mesh):
        v0, v1, v2 = verts[i0], verts[i1], verts[i2]
        n = triangle_normal(v0, v1, v2)
        if n is None:
            continue
        yield n, v0, v1, v2


def vertex_directions(mesh: Mesh) -> Tuple[Vec3, ...]:
    """Unit direction of every vertex, as seen from the origin."""

    return tuple(normalize(v) for v in mesh.vertices)


def vertex_direction_array(mesh: Mesh, eps: float = 1e-12) -> np.ndarray:
    """:func:`vertex_directions` as an ``(n, 3)`` float array.

    Vertices at the origin take the same fallback direction as
    :func:`seamviz.vec.normalize`.
    """

    verts = np.asarray(mesh.vertices, dtype=float).reshape(-1, 3)
    lengths = np.linalg.norm(verts, axis=1)
    degenerate = lengths < eps
    safe = np.where(degenerate, 1.0, lengths)
    dirs = verts / safe[:, np.newaxis]
    dirs[degenerate] = FALLBACK_DIRECTION
    return dirs


@dataclass(frozen=True)
class SpotlightHit:
    vertex_mask: Tuple[bool, ...]
    hit_count: int
    weights: Tuple[float, ...]


def compute_spotlight_hit(mesh: Mesh, center: QuotientClass, aperture: float) -> SpotlightHit:
    """Which vertices fall in the double cone around ``center``, and how strongly.

    Uses the same membership rule and linear falloff as
    :func:`seamviz.quotient.point_in_quotient_cone` and
    :func:`seamviz.quotient.quotient_cone_weight`, evaluated for all vertices
    at once.
    """

    dirs = vertex_direction_array(mesh)
    if len(dirs) == 0:
        return SpotlightHit(vertex_mask=(), hit_count=0, weights=())

    cosines = dirs @ np.asarray(center.canonical, dtype=float)
    to_u = np.arccos(np.clip(cosines, -1.0, 1.0))
    to_neg_u = np.arccos(np.clip(-cosines, -1.0, 1.0))
    min_angle = np.minimum(to_u, to_neg_u)

    mask = min_angle <= aperture
    weights = np.where(min_angle >= aperture, 0.0, 1.0 - min_angle / aperture)
    return SpotlightHit(vertex_mask=tuple(bool(m) for m in mask),
                        hit_count=int(mask.sum()),
                        weights=tuple(float(w) for w in weights))


def vertex_weights(mesh: Mesh, center: QuotientClass, aperture: float) -> Tuple[float, ...]:
    """Per-vertex cone weight computed one vertex at a time."""

    return tuple(quotient_cone_weight(d, center, aperture)
                 for d in vertex_directions(mesh))


__all__ = [
    "Mesh",
    "TriTuple",
    "triangles",
    "mesh_triangles",
    "vertex_directions",
    "vertex_direction_array",
    "SpotlightHit",
    "compute_spotlight_hit",
    "vertex_weights",
]
