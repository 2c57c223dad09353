"""Keyboard navigation over the unit sphere.

Positions are spherical coordinates with Y as the polar axis: ``phi`` is
measured from ``+Y`` and ``theta`` is the azimuth in the XZ plane, measured
from ``+Z`` toward ``+X``.
"""

from __future__ import annotations

import math
from dataclasses import dataclass
from typing import Tuple

from seamviz.vec import Vec3, clamp, normalize

POLE_MARGIN = 0.01
DEFAULT_SPEED = 2.0
_TWO_PI = 2.0 * math.pi


@dataclass(frozen=True)
class SphericalCoords:
    theta: float
    phi: float


@dataclass(frozen=True)
class WasdState:
    w: bool = False
    a: bool = False
    s: bool = False
    d: bool = False


def _wrap_theta(theta: float) -> float:
    theta = math.fmod(theta, _TWO_PI)
    if theta < 0.0:
        theta += _TWO_PI
    return theta


def cartesian_to_spherical(v: Vec3) -> SphericalCoords:
    x, y, z = normalize(v)
    phi = math.acos(clamp(y, -1.0, 1.0))
    return SphericalCoords(theta=_wrap_theta(math.atan2(x, z)), phi=phi)


def spherical_to_cartesian(coords: SphericalCoords) -> Vec3:
    sp = math.sin(coords.phi)
    return (sp * math.sin(coords.theta), math.cos(coords.phi), sp * math.cos(coords.theta))


def move_on_sphere(coords: SphericalCoords, delta_theta: float,
                   delta_phi: float) -> SphericalCoords:
    """Step by the given deltas, wrapping ``theta`` and keeping ``phi`` off the poles."""

    return SphericalCoords(theta=_wrap_theta(coords.theta + delta_theta),
                           phi=clamp(coords.phi + delta_phi, POLE_MARGIN, math.pi - POLE_MARGIN))


def compute_velocity(keys: WasdState, speed: float = DEFAULT_SPEED) -> Tuple[float, float]:
    """Angular velocity ``(d_theta, d_phi)`` for the pressed keys.

    ``a``/``d`` turn west/east, ``w``/``s`` move toward/away from ``+Y``.
    Opposing keys cancel.
    """

    d_theta = 0.0
    d_phi = 0.0
    if keys.a:
        d_theta -= speed
    if keys.d:
        d_theta += speed
    if keys.w:
        d_phi -= speed
    if keys.s:
        d_phi += speed
    return d_theta, d_phi


def update_position_from_wasd(current: Vec3, keys: WasdState, dt: float,
                              speed: float = DEFAULT_SPEED) -> Vec3:
    """Advance the point ``current`` by ``dt`` seconds of key input.

    Returns ``current`` itself when the step would be negligible.
    """

    d_theta, d_phi = compute_velocity(keys, speed)
    d_theta *= dt
    d_phi *= dt
    if abs(d_theta) < 1e-4 and abs(d_phi) < 1e-4:
        return current
    moved = move_on_sphere(cartesian_to_spherical(current), d_theta, d_phi)
    return spherical_to_cartesian(moved)


__all__ = [
    "POLE_MARGIN",
    "DEFAULT_SPEED",
    "SphericalCoords",
    "WasdState",
    "cartesian_to_spherical",
    "spherical_to_cartesian",
    "move_on_sphere",
    "compute_velocity",
    "update_position_from_wasd",
]
