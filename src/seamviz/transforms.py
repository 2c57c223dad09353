"""Rotations, camera orbit kinematics and ray picking.

Coordinate convention: right-handed, +X right, +Y up, +Z toward the
viewer. A 3x3 matrix is a tuple of three row tuples, and ``M v`` treats
``v`` as a column vector. Quaternions are ``(x, y, z, w)``.
"""

from __future__ import annotations

import math
from dataclasses import dataclass, replace
from typing import Optional, Tuple

from seamviz.quotient import QuotientClass, class_of
from seamviz.vec import Vec3, add, clamp, cross, dot, normalize, scale, sub

Mat3 = Tuple[Vec3, Vec3, Vec3]
Quaternion = Tuple[float, float, float, float]

IDENTITY_MAT3: Mat3 = ((1.0, 0.0, 0.0),
                       (0.0, 1.0, 0.0),
                       (0.0, 0.0, 1.0))

IDENTITY_QUAT: Quaternion = (0.0, 0.0, 0.0, 1.0)

#: polar angle is kept this far from either pole
POLAR_MARGIN = 0.1


## matrix operations

def mat_vec_mul(m: Mat3, v: Vec3) -> Vec3:
    return (dot(m[0], v), dot(m[1], v), dot(m[2], v))


def transpose(m: Mat3) -> Mat3:
    return ((m[0][0], m[1][0], m[2][0]),
            (m[0][1], m[1][1], m[2][1]),
            (m[0][2], m[1][2], m[2][2]))


def mat_mul(a: Mat3, b: Mat3) -> Mat3:
    """Matrix product ``a b``; applying it equals applying ``b`` then ``a``."""

    cols = transpose(b)
    return tuple(tuple(dot(row, col) for col in cols) for row in a)


## rotation matrices

def rotation_x(angle: float) -> Mat3:
    c, s = math.cos(angle), math.sin(angle)
    return ((1.0, 0.0, 0.0),
            (0.0, c, -s),
            (0.0, s, c))


def rotation_y(angle: float) -> Mat3:
    c, s = math.cos(angle), math.sin(angle)
    return ((c, 0.0, s),
            (0.0, 1.0, 0.0),
            (-s, 0.0, c))


def rotation_z(angle: float) -> Mat3:
    c, s = math.cos(angle), math.sin(angle)
    return ((c, -s, 0.0),
            (s, c, 0.0),
            (0.0, 0.0, 1.0))


def rotation_axis_angle(axis: Vec3, angle: float) -> Mat3:
    """Rodrigues rotation by ``angle`` radians about ``axis``.

    ``axis`` is normalised here, so any non-zero length is accepted.
    """

    ux, uy, uz = normalize(axis)
    cang = math.cos(angle)
    sang = math.sin(angle)
    cmin = 1.0 - cang

    return ((cang + ux*ux*cmin, ux*uy*cmin - uz*sang, ux*uz*cmin + uy*sang),
            (uy*ux*cmin + uz*sang, cang + uy*uy*cmin, uy*uz*cmin - ux*sang),
            (uz*ux*cmin - uy*sang, uz*uy*cmin + ux*sang, cang + uz*uz*cmin))


def rotation_between_vectors(from_vec: Vec3, to_vec: Vec3) -> Mat3:
    """Rotation taking the direction of ``from_vec`` onto that of ``to_vec``.

    Aligned inputs give the identity. Opposed inputs give a half turn about
    an axis perpendicular to ``from_vec``, built from +X unless ``from_vec``
    is close to +X, in which case +Y is used.
    """

    f = normalize(from_vec)
    t = normalize(to_vec)
    d = dot(f, t)

    if abs(d - 1.0) < 1e-6:
        return IDENTITY_MAT3
    if abs(d + 1.0) < 1e-6:
        perp = (1.0, 0.0, 0.0) if abs(f[0]) < 0.9 else (0.0, 1.0, 0.0)
        return rotation_axis_angle(normalize(cross(f, perp)), math.pi)

    axis = normalize(cross(f, t))
    return rotation_axis_angle(axis, math.acos(clamp(d, -1.0, 1.0)))


## quaternions

def quaternion_from_axis_angle(axis: Vec3, angle: float) -> Quaternion:
    x, y, z = normalize(axis)
    s = math.sin(angle / 2.0)
    return (x * s, y * s, z * s, math.cos(angle / 2.0))


def quaternion_to_matrix(q: Quaternion) -> Mat3:
    x, y, z, w = q
    xx, yy, zz = x * x, y * y, z * z
    xy, xz, xw = x * y, x * z, x * w
    yz, yw, zw = y * z, y * w, z * w

    return ((1 - 2*(yy + zz), 2*(xy - zw), 2*(xz + yw)),
            (2*(xy + zw), 1 - 2*(xx + zz), 2*(yz - xw)),
            (2*(xz - yw), 2*(yz + xw), 1 - 2*(xx + yy)))


def quaternion_multiply(a: Quaternion, b: Quaternion) -> Quaternion:
    """Hamilton product ``a b``: rotating by the result applies ``b`` first."""

    ax, ay, az, aw = a
    bx, by, bz, bw = b
    return (aw*bx + ax*bw + ay*bz - az*by,
            aw*by - ax*bz + ay*bw + az*bx,
            aw*bz + ax*by - ay*bx + az*bw,
            aw*bw - ax*bx - ay*by - az*bz)


def quaternion_conjugate(q: Quaternion) -> Quaternion:
    return (-q[0], -q[1], -q[2], q[3])


def quaternion_rotate(q: Quaternion, v: Vec3) -> Vec3:
    return mat_vec_mul(quaternion_to_matrix(q), v)


## camera orbit

@dataclass(frozen=True)
class OrbitState:
    """Spherical camera placement around ``target``.

    ``polar`` is measured from +Y and ``azimuth`` about +Y from +Z.
    """

    distance: float
    azimuth: float
    polar: float
    target: Vec3 = (0.0, 0.0, 0.0)


def create_orbit_state() -> OrbitState:
    return OrbitState(distance=4.0, azimuth=0.0, polar=math.pi / 3,
                      target=(0.0, 0.0, 0.0))


def orbit_to_position(orbit: OrbitState) -> Vec3:
    sin_polar = math.sin(orbit.polar)
    offset = (orbit.distance * sin_polar * math.sin(orbit.azimuth),
              orbit.distance * math.cos(orbit.polar),
              orbit.distance * sin_polar * math.cos(orbit.azimuth))
    return add(offset, orbit.target)


def orbit_forward(orbit: OrbitState) -> Vec3:
    """Unit view direction from the camera toward its target."""

    return normalize(sub(orbit.target, orbit_to_position(orbit)))


def apply_orbit_drag(orbit: OrbitState, delta_x: float, delta_y: float) -> OrbitState:
    """Return a new state turned by ``delta_x`` in azimuth and ``delta_y`` in polar angle.

    The polar angle is clamped to ``[0.1, pi - 0.1]`` so the camera never
    reaches a pole. Distance and target are carried over unchanged.
    """

    polar = clamp(orbit.polar + delta_y, POLAR_MARGIN, math.pi - POLAR_MARGIN)
    return replace(orbit, azimuth=orbit.azimuth + delta_x, polar=polar)


## picking

@dataclass(frozen=True)
class Ray:
    origin: Vec3
    direction: Vec3


def screen_to_ray(screen_x: float, screen_y: float, orbit: OrbitState) -> Ray:
    """Cast a ray through normalised screen coordinates in ``[-1, 1]``.

    This is a simplified projection: the offset along the camera's right
    and up vectors is added directly to the forward vector, without a field
    of view or aspect ratio.
    """

    forward = orbit_forward(orbit)
    right = normalize(cross(forward, (0.0, 1.0, 0.0)))
    up = cross(right, forward)
    direction = normalize(add(add(forward, scale(right, screen_x)),
                              scale(up, screen_y)))
    return Ray(origin=orbit_to_position(orbit), direction=direction)


def ray_sphere_intersection(ray: Ray) -> Optional[Vec3]:
    """Nearest forward hit of ``ray`` on the unit sphere, or ``None``."""

    a = dot(ray.direction, ray.direction)
    b = 2.0 * dot(ray.origin, ray.direction)
    c = dot(ray.origin, ray.origin) - 1.0

    disc = b * b - 4.0 * a * c
    if disc < 0:
        return None

    root = math.sqrt(disc)
    t1 = (-b - root) / (2.0 * a)
    t2 = (-b + root) / (2.0 * a)
    t = t1 if t1 > 0 else t2
    if t < 0:
        return None
    return normalize(add(ray.origin, scale(ray.direction, t)))


def pick_class(screen_x: float, screen_y: float, orbit: OrbitState) -> Optional[QuotientClass]:
    """Class of the sphere point under the cursor, or ``None`` on a miss."""

    hit = ray_sphere_intersection(screen_to_ray(screen_x, screen_y, orbit))
    if hit is None:
        return None
    return class_of(hit)


__all__ = [
    "Mat3",
    "Quaternion",
    "IDENTITY_MAT3",
    "IDENTITY_QUAT",
    "POLAR_MARGIN",
    "mat_vec_mul",
    "mat_mul",
    "transpose",
    "rotation_x",
    "rotation_y",
    "rotation_z",
    "rotation_axis_angle",
    "rotation_between_vectors",
    "quaternion_from_axis_angle",
    "quaternion_to_matrix",
    "quaternion_multiply",
    "quaternion_conjugate",
    "quaternion_rotate",
    "OrbitState",
    "create_orbit_state",
    "orbit_to_position",
    "orbit_forward",
    "apply_orbit_drag",
    "Ray",
    "screen_to_ray",
    "ray_sphere_intersection",
    "pick_class",
]
