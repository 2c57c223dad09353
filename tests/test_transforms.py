import math

import pytest

from seamviz.quotient import class_equals, class_of
from seamviz.transforms import (
    IDENTITY_MAT3,
    OrbitState,
    Ray,
    apply_orbit_drag,
    create_orbit_state,
    mat_mul,
    mat_vec_mul,
    orbit_forward,
    orbit_to_position,
    pick_class,
    quaternion_conjugate,
    quaternion_from_axis_angle,
    quaternion_multiply,
    quaternion_rotate,
    quaternion_to_matrix,
    ray_sphere_intersection,
    rotation_axis_angle,
    rotation_between_vectors,
    rotation_x,
    rotation_y,
    rotation_z,
    screen_to_ray,
    transpose,
)
from seamviz.vec import approx_eq, norm, normalize


def assert_mat_close(a, b, tol=1e-9):
    for row_a, row_b in zip(a, b):
        assert row_a == pytest.approx(row_b, abs=tol)


AXES = [
    (1.0, 0.0, 0.0),
    (0.0, 1.0, 0.0),
    (0.0, 0.0, 1.0),
    (1.0, 2.0, 3.0),
    (-0.4, 0.1, 0.9),
]
ANGLES = [0.0, 0.3, math.pi / 2, 2.5, -1.1]


@pytest.mark.parametrize("axis", AXES)
@pytest.mark.parametrize("theta", ANGLES)
def test_rotation_is_orthonormal(axis, theta):
    r = rotation_axis_angle(axis, theta)
    assert_mat_close(mat_mul(r, transpose(r)), IDENTITY_MAT3)


@pytest.mark.parametrize("axis", AXES)
@pytest.mark.parametrize("theta", ANGLES)
def test_quaternion_agrees_with_rodrigues(axis, theta):
    q = quaternion_from_axis_angle(axis, theta)
    assert_mat_close(quaternion_to_matrix(q), rotation_axis_angle(axis, theta))


def test_axis_rotations_match_axis_angle():
    assert_mat_close(rotation_x(0.7), rotation_axis_angle((1.0, 0.0, 0.0), 0.7))
    assert_mat_close(rotation_y(0.7), rotation_axis_angle((0.0, 1.0, 0.0), 0.7))
    assert_mat_close(rotation_z(0.7), rotation_axis_angle((0.0, 0.0, 1.0), 0.7))


def test_mat_mul_is_not_commutative():
    a, b = rotation_x(0.6), rotation_y(1.1)
    ab = mat_mul(a, b)
    ba = mat_mul(b, a)
    assert ab != ba
    assert max(abs(x - y) for ra, rb in zip(ab, ba) for x, y in zip(ra, rb)) > 0.1


def test_rotation_z_quarter_turn():
    v = mat_vec_mul(rotation_z(math.pi / 2), (1.0, 0.0, 0.0))
    assert approx_eq(v, (0.0, 1.0, 0.0))


def test_axis_is_normalised():
    assert_mat_close(rotation_axis_angle((0.0, 0.0, 5.0), 1.0), rotation_z(1.0))


@pytest.mark.parametrize("pair", [
    ((1.0, 0.0, 0.0), (0.0, 1.0, 0.0)),
    ((0.0, 0.0, 1.0), (1.0, 1.0, 1.0)),
    ((1.0, 2.0, -1.0), (-3.0, 0.5, 2.0)),
])
def test_rotation_between_vectors(pair):
    f, t = pair
    r = rotation_between_vectors(f, t)
    assert approx_eq(mat_vec_mul(r, normalize(f)), normalize(t))


def test_rotation_between_aligned_is_identity():
    assert rotation_between_vectors((0.0, 2.0, 0.0), (0.0, 1.0, 0.0)) == IDENTITY_MAT3


@pytest.mark.parametrize("f", [(1.0, 0.0, 0.0), (0.0, 1.0, 0.0), (0.3, -0.2, 0.9)])
def test_rotation_between_opposite_vectors(f):
    r = rotation_between_vectors(f, tuple(-c for c in f))
    assert approx_eq(mat_vec_mul(r, normalize(f)), normalize(tuple(-c for c in f)))
    assert_mat_close(mat_mul(r, transpose(r)), IDENTITY_MAT3)


def test_quaternion_multiply_composes_rotations():
    a = quaternion_from_axis_angle((0.0, 0.0, 1.0), 0.4)
    b = quaternion_from_axis_angle((1.0, 0.0, 0.0), 1.2)
    combined = quaternion_to_matrix(quaternion_multiply(a, b))
    expected = mat_mul(quaternion_to_matrix(a), quaternion_to_matrix(b))
    assert_mat_close(combined, expected)


def test_quaternion_conjugate_inverts():
    q = quaternion_from_axis_angle((1.0, 2.0, 3.0), 0.8)
    v = (0.2, -0.7, 0.4)
    back = quaternion_rotate(quaternion_conjugate(q), quaternion_rotate(q, v))
    assert approx_eq(back, v, 1e-9)


def test_default_orbit():
    orbit = create_orbit_state()
    assert orbit.distance == 4.0
    assert orbit.azimuth == 0.0
    assert math.isclose(orbit.polar, math.pi / 3)
    pos = orbit_to_position(orbit)
    assert math.isclose(norm(pos), 4.0)
    assert math.isclose(pos[1], 4.0 * math.cos(math.pi / 3))
    assert approx_eq(orbit_forward(orbit), normalize(tuple(-c for c in pos)))


def test_orbit_drag_clamps_polar():
    orbit = create_orbit_state()
    up = apply_orbit_drag(orbit, 0.5, -10.0)
    down = apply_orbit_drag(orbit, 0.0, 10.0)
    assert math.isclose(up.polar, 0.1)
    assert math.isclose(down.polar, math.pi - 0.1)
    assert math.isclose(up.azimuth, 0.5)
    assert up.distance == orbit.distance
    assert orbit.polar == pytest.approx(math.pi / 3)


def test_orbit_position_respects_target():
    orbit = OrbitState(distance=2.0, azimuth=0.0, polar=math.pi / 2, target=(1.0, 0.0, 0.0))
    assert approx_eq(orbit_to_position(orbit), (1.0, 0.0, 2.0))


def test_center_ray_hits_near_side():
    orbit = OrbitState(distance=4.0, azimuth=0.0, polar=math.pi / 2)
    ray = screen_to_ray(0.0, 0.0, orbit)
    assert approx_eq(ray.origin, (0.0, 0.0, 4.0))
    assert approx_eq(ray.direction, (0.0, 0.0, -1.0))
    hit = ray_sphere_intersection(ray)
    assert approx_eq(hit, (0.0, 0.0, 1.0))


def test_ray_miss_returns_none():
    assert ray_sphere_intersection(Ray(origin=(0.0, 5.0, 0.0), direction=(1.0, 0.0, 0.0))) is None
    # sphere entirely behind the origin
    assert ray_sphere_intersection(Ray(origin=(0.0, 0.0, 4.0), direction=(0.0, 0.0, 1.0))) is None


def test_ray_from_inside_hits_far_side():
    hit = ray_sphere_intersection(Ray(origin=(0.0, 0.0, 0.0), direction=(0.0, 1.0, 0.0)))
    assert approx_eq(hit, (0.0, 1.0, 0.0))


def test_pick_class():
    orbit = OrbitState(distance=4.0, azimuth=0.0, polar=math.pi / 2)
    picked = pick_class(0.0, 0.0, orbit)
    assert picked is not None
    assert class_equals(picked, class_of((0.0, 0.0, -1.0)))
    assert pick_class(0.9, 0.9, orbit) is None
