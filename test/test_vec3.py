################################################################################
#
#  Copyright (C) 2026 Garrett Brown
#  This file is part of OASIS - https://github.com/eigendude/OASIS
#
#  SPDX-License-Identifier: Apache-2.0
#  See DOCS/LICENSING.md for more information.
#
################################################################################
"""Tests for vec3 operations."""

from __future__ import annotations

import math

import numpy as np
import pytest
from numpy.typing import NDArray

from oasis_math.mat4_impl import Mat4Api
from oasis_math.mat4_impl import get_api as get_mat4_api
from oasis_math.math_types import NumberArray
from oasis_math.quat_impl import QuatApi
from oasis_math.quat_impl import get_api as get_quat_api
from oasis_math.vec3_impl import Vec3Api
from oasis_math.vec3_impl import get_api


vec3: Vec3Api = get_api("float64")
vec3n: Vec3Api = get_api("zero_array")
mat4: Mat4Api = get_mat4_api("float64")
quat: QuatApi = get_quat_api("float64")


def test_create_and_set() -> None:
    """Checks construction with default and explicit components."""
    assert list(vec3.create()) == [0.0, 0.0, 0.0]
    assert list(vec3.create(1.0, 2.0)) == [1.0, 2.0, 0.0]
    dst: NDArray[np.float64] = vec3.create()
    assert vec3.set(4.0, 5.0, 6.0, dst) is dst
    assert list(dst) == [4.0, 5.0, 6.0]


def test_cross_product() -> None:
    """Checks the right-handed cross product."""
    x: NumberArray = vec3n.create(1.0, 0.0, 0.0)
    y: NumberArray = vec3n.create(0.0, 1.0, 0.0)
    assert vec3n.cross(x, y) == [0.0, 0.0, 1.0]
    assert vec3n.cross(y, x) == [0.0, 0.0, -1.0]


def test_cross_aliasing_dst() -> None:
    """Checks cross reads both operands before writing dst."""
    a: NDArray[np.float64] = vec3.create(1.0, 2.0, 3.0)
    b: NDArray[np.float64] = vec3.create(4.0, 5.0, 6.0)
    expected: NDArray[np.float64] = vec3.cross(a, b)
    assert vec3.cross(a, b, a) is a
    assert np.array_equal(a, expected)
    assert np.allclose(expected, np.cross([1.0, 2.0, 3.0], [4.0, 5.0, 6.0]))


def test_normalize_round_trip() -> None:
    """Checks normalized vectors have unit length."""
    v: NDArray[np.float64] = vec3.create(3.0, -4.0, 12.0)
    assert vec3.length(vec3.normalize(v)) == pytest.approx(1.0)
    assert list(vec3.normalize(vec3.create())) == [0.0, 0.0, 0.0]


def test_distance_and_angle() -> None:
    """Checks distances and the angle between vectors."""
    a: NumberArray = vec3n.create(1.0, 2.0, 3.0)
    b: NumberArray = vec3n.create(4.0, 6.0, 3.0)
    assert vec3n.distance(a, b) == 5.0
    assert vec3n.distance_sq(a, b) == 25.0
    assert vec3n.angle(vec3n.create(1.0, 0.0, 0.0), vec3n.create(0.0, 0.0, 3.0)) == (
        pytest.approx(math.pi / 2.0)
    )


def test_transform_mat4_translation() -> None:
    """Checks points pick up matrix translation."""
    m: NDArray[np.float64] = mat4.translation(vec3.create(1.0, 2.0, 3.0))
    v: NDArray[np.float64] = vec3.transform_mat4(vec3.create(1.0, 1.0, 1.0), m)
    assert list(v) == [2.0, 3.0, 4.0]


def test_transform_mat4_zero_w_treated_as_one() -> None:
    """Checks a zero homogeneous w skips the perspective divide."""
    m: NDArray[np.float64] = mat4.identity()
    m[15] = 0.0
    v: NDArray[np.float64] = vec3.transform_mat4(vec3.create(1.0, 2.0, 3.0), m)
    assert list(v) == [1.0, 2.0, 3.0]


def test_transform_mat4_perspective_divide() -> None:
    """Checks points are divided by the transformed w."""
    m: NDArray[np.float64] = mat4.uniform_scaling(1.0)
    m[15] = 2.0
    v: NDArray[np.float64] = vec3.transform_mat4(vec3.create(2.0, 4.0, 6.0), m)
    assert list(v) == [1.0, 2.0, 3.0]


def test_transform_mat4_upper3x3_ignores_translation() -> None:
    """Checks directions are not translated."""
    m: NDArray[np.float64] = mat4.translation(vec3.create(5.0, 5.0, 5.0))
    mat4.scale(m, vec3.create(2.0, 3.0, 4.0), m)
    v: NDArray[np.float64] = vec3.transform_mat4_upper3x3(vec3.create(1.0, 1.0, 1.0), m)
    assert list(v) == [2.0, 3.0, 4.0]


def test_transform_mat3() -> None:
    """Checks a mat3 rotation about z."""
    m3: NumberArray = [0.0, 1.0, 0.0, 0.0, -1.0, 0.0, 0.0, 0.0, 0.0, 0.0, 1.0, 0.0]
    assert vec3n.transform_mat3(vec3n.create(1.0, 0.0, 5.0), m3) == [0.0, 1.0, 5.0]


def test_transform_quat_matches_matrix() -> None:
    """Checks quaternion rotation matches the equivalent matrix."""
    axis: NDArray[np.float64] = vec3.normalize(vec3.create(1.0, 2.0, 3.0))
    q: NDArray[np.float64] = quat.from_axis_angle(axis, 0.7)
    m: NDArray[np.float64] = mat4.from_quat(q)
    v: NDArray[np.float64] = vec3.create(-2.0, 0.5, 4.0)
    assert np.allclose(vec3.transform_quat(v, q), vec3.transform_mat4(v, m))


def test_rotate_axes_about_origin() -> None:
    """Checks rotations about each axis through a given origin."""
    origin: NumberArray = vec3n.create(0.0, 0.0, 0.0)
    assert vec3n.rotate_x(vec3n.create(0.0, 1.0, 0.0), origin, math.pi / 2.0) == (
        pytest.approx([0.0, 0.0, 1.0])
    )
    assert vec3n.rotate_y(vec3n.create(0.0, 0.0, 1.0), origin, math.pi / 2.0) == (
        pytest.approx([1.0, 0.0, 0.0])
    )
    assert vec3n.rotate_z(vec3n.create(1.0, 0.0, 0.0), origin, math.pi / 2.0) == (
        pytest.approx([0.0, 1.0, 0.0])
    )
    shifted: NumberArray = vec3n.rotate_z(
        vec3n.create(2.0, 1.0, 7.0), vec3n.create(1.0, 1.0, 0.0), math.pi
    )
    assert shifted == pytest.approx([0.0, 1.0, 7.0])


def test_matrix_readers() -> None:
    """Checks translation, axis and scaling extraction from a mat4."""
    m: NDArray[np.float64] = mat4.translation(vec3.create(1.0, 2.0, 3.0))
    mat4.scale(m, vec3.create(2.0, 3.0, 4.0), m)
    assert list(vec3.get_translation(m)) == [1.0, 2.0, 3.0]
    assert list(vec3.get_axis(m, 1)) == [0.0, 3.0, 0.0]
    assert np.allclose(vec3.get_scaling(m), [2.0, 3.0, 4.0])


def test_random_is_on_sphere() -> None:
    """Checks random vectors have the requested length."""
    for _ in range(10):
        assert vec3.length(vec3.random(3.0)) == pytest.approx(3.0)


def test_truncate_and_midpoint() -> None:
    """Checks length clamping and midpoints."""
    v: NumberArray = vec3n.create(0.0, 6.0, 8.0)
    assert vec3n.truncate(v, 5.0) == pytest.approx([0.0, 3.0, 4.0])
    assert vec3n.midpoint(v, vec3n.create(2.0, 0.0, 0.0)) == [1.0, 3.0, 4.0]
