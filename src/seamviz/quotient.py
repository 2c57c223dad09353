"""Quotient-space operations on the real projective plane.

RP^2 is the unit sphere with antipodal points identified, ``u ~ -u``. A point
of RP^2 is a :class:`QuotientClass`, which always carries both members of
its pair. Anything acting on a class must act on both representatives alike.

Classes are built only through :func:`class_of`, which normalises its input
and picks the canonical representative by a lexicographic sign rule: the
first coordinate (x, then y, then z) whose magnitude exceeds ``1e-12`` is
made non-negative.
"""

from __future__ import annotations

import logging
import math
from dataclasses import InitVar, dataclass
from typing import Tuple

from seamviz.vec import Vec3, angle, antipode, approx_eq, clamp, dot, normalize

logger = logging.getLogger(__name__)

_FACTORY_KEY = object()


@dataclass(frozen=True, eq=False)
class QuotientClass:
    """The equivalence class ``[u] = {u, -u}``.

    ``representatives[0]`` is always ``canonical`` and ``representatives[1]``
    always its antipode. Instances are immutable and must be compared with
    :func:`class_equals`, not ``==``.
    """

    canonical: Vec3
    representatives: Tuple[Vec3, Vec3]
    _key: InitVar[object] = None

    def __post_init__(self, _key: object) -> None:
        if _key is not _FACTORY_KEY:
            raise TypeError("QuotientClass instances are created with class_of()")

    @property
    def u(self) -> Vec3:
        return self.representatives[0]

    @property
    def neg_u(self) -> Vec3:
        return self.representatives[1]


def _canonical_sign(u: Vec3, eps: float = 1e-12) -> int:
    for c in u:
        if abs(c) > eps:
            return 1 if c >= 0 else -1
    return 1


def class_of(v: Vec3) -> QuotientClass:
    """Build the class ``[v]`` of any vector ``v``.

    ``v`` is normalised first, so a zero vector lands on the fallback
    direction of :func:`seamviz.vec.normalize`.
    """

    u0 = normalize(v)
    canonical = u0 if _canonical_sign(u0) == 1 else antipode(u0)
    return QuotientClass(canonical, (canonical, antipode(canonical)), _FACTORY_KEY)


direction_to_class = class_of


def class_equals(a: QuotientClass, b: QuotientClass, eps: float = 1e-6) -> bool:
    """``True`` if ``a`` and ``b`` name the same point of RP^2."""

    u1 = a.representatives[0]
    u2, neg_u2 = b.representatives
    return approx_eq(u1, u2, eps) or approx_eq(u1, neg_u2, eps)


def quotient_distance(a: QuotientClass, b: QuotientClass) -> float:
    """Projective distance ``acos(|a . b|)``, in ``[0, pi/2]``.

    The absolute value makes the result independent of which representative
    of either class is used.
    """

    return math.acos(clamp(abs(dot(a.canonical, b.canonical)), 0.0, 1.0))


def _min_angle(point: Vec3, center: QuotientClass) -> float:
    u, neg_u = center.representatives
    return min(angle(point, u), angle(point, neg_u))


def point_in_quotient_cone(point: Vec3, center: QuotientClass, aperture: float) -> bool:
    """Is the unit vector ``point`` within ``aperture`` of either representative?"""

    return _min_angle(point, center) <= aperture


def quotient_cone_weight(point: Vec3, center: QuotientClass, aperture: float) -> float:
    """Linear falloff: 1 at a representative, 0 at or beyond ``aperture``."""

    min_angle = _min_angle(point, center)
    if min_angle >= aperture:
        return 0.0
    return 1.0 - min_angle / aperture


def get_both_representatives(qclass: QuotientClass) -> Tuple[Vec3, Vec3]:
    return qclass.representatives


def assert_commutativity(operation: str, qclass: QuotientClass) -> None:
    """Record that ``operation`` treats both representatives of ``qclass`` alike.

    Has no runtime effect beyond a debug log entry.
    """

    logger.debug("operation %r respects quotient symmetry for class %s",
                 operation, qclass.canonical)


__all__ = [
    "QuotientClass",
    "normalize",
    "antipode",
    "class_of",
    "direction_to_class",
    "class_equals",
    "quotient_distance",
    "point_in_quotient_cone",
    "quotient_cone_weight",
    "get_both_representatives",
    "assert_commutativity",
]
