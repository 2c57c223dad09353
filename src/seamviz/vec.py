"""Vector algebra on 3-tuples shared by every seamviz module."""

from __future__ import annotations

import math
from typing import Sequence, Tuple

Vec3 = Tuple[float, float, float]

#: returned by :func:`normalize` for vectors too short to normalise
FALLBACK_DIRECTION: Vec3 = (0.0, 0.0, 1.0)


def to_vec3(point_like: Sequence[float]) -> Vec3:
    """Return the XYZ components of a point-like sequence as a tuple."""

    if len(point_like) < 3:
        raise ValueError("value must have at least three components")
    return float(point_like[0]), float(point_like[1]), float(point_like[2])


def add(a: Vec3, b: Vec3) -> Vec3:
    return (a[0] + b[0], a[1] + b[1], a[2] + b[2])


def sub(a: Vec3, b: Vec3) -> Vec3:
    return (a[0] - b[0], a[1] - b[1], a[2] - b[2])


def scale(a: Vec3, s: float) -> Vec3:
    return (a[0] * s, a[1] * s, a[2] * s)


def dot(a: Vec3, b: Vec3) -> float:
    return a[0] * b[0] + a[1] * b[1] + a[2] * b[2]


def cross(a: Vec3, b: Vec3) -> Vec3:
    return (
        a[1] * b[2] - a[2] * b[1],
        a[2] * b[0] - a[0] * b[2],
        a[0] * b[1] - a[1] * b[0],
    )


def norm2(a: Vec3) -> float:
    """Squared length of ``a``."""

    return dot(a, a)


def norm(a: Vec3) -> float:
    return math.sqrt(norm2(a))


def normalize(a: Vec3, eps: float = 1e-12) -> Vec3:
    """Return ``a`` scaled to unit length.

    Vectors shorter than ``eps`` do not raise; they map to
    :data:`FALLBACK_DIRECTION`. Callers that can receive zero-length input
    must tolerate this substitution.
    """

    n = norm(a)
    if n < eps:
        return FALLBACK_DIRECTION
    return scale(a, 1.0 / n)


def neg(a: Vec3) -> Vec3:
    return (-a[0], -a[1], -a[2])


def antipode(u: Vec3) -> Vec3:
    """The point diametrically opposite ``u`` on the sphere."""

    return neg(u)


def clamp(x: float, lo: float, hi: float) -> float:
    return max(lo, min(hi, x))


def angle(a: Vec3, b: Vec3) -> float:
    """Angle in radians between unit vectors ``a`` and ``b``."""

    # float drift can push the cosine just outside [-1, 1]
    return math.acos(clamp(dot(a, b), -1.0, 1.0))


def approx_eq(a: Vec3, b: Vec3, eps: float = 1e-6) -> bool:
    """Per-component comparison; every coordinate must differ by less than ``eps``."""

    return (abs(a[0] - b[0]) < eps and
            abs(a[1] - b[1]) < eps and
            abs(a[2] - b[2]) < eps)


def triangle_normal(v0: Vec3, v1: Vec3, v2: Vec3, eps: float = 1e-12) -> Vec3 | None:
    """Return the unit normal of a triangle or ``None`` if degenerate."""

    n = cross(sub(v1, v0), sub(v2, v0))
    length = norm(n)
    if length <= eps:
        return None
    return (n[0] / length, n[1] / length, n[2] / length)


__all__ = [
    "Vec3",
    "FALLBACK_DIRECTION",
    "to_vec3",
    "add",
    "sub",
    "scale",
    "dot",
    "cross",
    "norm2",
    "norm",
    "normalize",
    "neg",
    "antipode",
    "clamp",
    "angle",
    "approx_eq",
    "triangle_normal",
]
