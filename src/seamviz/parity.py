"""Orientation tracking with the cyclic group Z2.

RP^2 is non-orientable: a loop through the identification ``u ~ -u`` comes
back with its orientation reversed. ``Parity`` records how many such flips
have accumulated, modulo two, and paths carry one parity value alongside
their points.

Only the group algebra and the path bookkeeping are real here.
:func:`winding_parity`, :func:`parallel_transport` and
:func:`is_null_homotopic` are stubs returning fixed or trivial values; they
do no geometric analysis.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Sequence, Tuple

from seamviz.vec import Vec3, neg


class Parity(Enum):
    """Element of Z2. ``EVEN`` is the identity."""

    EVEN = 0
    ODD = 1


PARITY_EVEN = Parity.EVEN
PARITY_ODD = Parity.ODD


def compose_parity(a: Parity, b: Parity) -> Parity:
    """Group operation: addition modulo two (XOR)."""

    return Parity((a.value + b.value) % 2)


def invert_parity(p: Parity) -> Parity:
    # every element of Z2 is its own inverse
    return p


def is_flipped(p: Parity) -> bool:
    return p is Parity.ODD


def parity_to_string(p: Parity) -> str:
    return "even" if p is Parity.EVEN else "odd"


def antipodal_transition_parity(from_point: Vec3, to_point: Vec3) -> Parity:
    """Parity of a step between antipodal points; always ``ODD``.

    The arguments are not inspected. Moving from ``u`` to ``-u`` reverses
    orientation in this model, whatever ``u`` is.
    """

    return Parity.ODD


@dataclass(frozen=True)
class PathWithParity:
    points: Tuple[Vec3, ...]
    parity: Parity = Parity.EVEN


def create_path(points: Sequence[Vec3]) -> PathWithParity:
    return PathWithParity(points=tuple(points), parity=Parity.EVEN)


def append_to_path(path: PathWithParity, point: Vec3) -> PathWithParity:
    """Extend ``path`` by one point; the parity is carried over unchanged."""

    return PathWithParity(points=path.points + (point,), parity=path.parity)


def concatenate_paths(first: PathWithParity, second: PathWithParity) -> PathWithParity:
    return PathWithParity(points=first.points + second.points,
                          parity=compose_parity(first.parity, second.parity))


def reverse_path(path: PathWithParity) -> PathWithParity:
    return PathWithParity(points=tuple(reversed(path.points)), parity=path.parity)


def close_loop(path: PathWithParity) -> Parity:
    """Parity of the loop formed by joining the last point to the first.

    Paths with fewer than two points are trivial loops and return ``EVEN``.
    """

    if len(path.points) < 2:
        return Parity.EVEN
    return path.parity


def winding_parity(loop: PathWithParity, point: Vec3) -> Parity:
    """Stub: always ``EVEN``. No winding number is computed."""

    return Parity.EVEN


@dataclass(frozen=True)
class TransportResult:
    vector: Vec3
    parity: Parity


def parallel_transport(path: PathWithParity, initial_vector: Vec3) -> TransportResult:
    """Stub: returns ``initial_vector`` unchanged together with the path parity."""

    return TransportResult(vector=initial_vector, parity=path.parity)


def is_null_homotopic(path: PathWithParity) -> bool:
    """Stub: treats a path as contractible exactly when its parity is ``EVEN``."""

    return path.parity is Parity.EVEN


def apply_parity_to_vector(vector: Vec3, parity: Parity) -> Vec3:
    """Negate ``vector`` for ``ODD`` parity; leave it alone for ``EVEN``."""

    return neg(vector) if parity is Parity.ODD else vector


__all__ = [
    "Parity",
    "PARITY_EVEN",
    "PARITY_ODD",
    "compose_parity",
    "invert_parity",
    "is_flipped",
    "parity_to_string",
    "antipodal_transition_parity",
    "PathWithParity",
    "create_path",
    "append_to_path",
    "concatenate_paths",
    "reverse_path",
    "close_loop",
    "winding_parity",
    "TransportResult",
    "parallel_transport",
    "is_null_homotopic",
    "apply_parity_to_vector",
]
