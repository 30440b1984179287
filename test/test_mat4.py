################################################################################
#
#  Copyright (C) 2026 Garrett Brown
#  This file is part of OASIS - https://github.com/eigendude/OASIS
#
#  SPDX-License-Identifier: Apache-2.0
#  See DOCS/LICENSING.md for more information.
#
################################################################################
"""Tests for mat4 operations."""

from __future__ import annotations

import math

import numpy as np
import pytest
from numpy.typing import NDArray

from oasis_math.mat4_impl import Mat4Api
from oasis_math.mat4_impl import get_api
from oasis_math.math_types import NumberArray
from oasis_math.vec3_impl import Vec3Api
from oasis_math.vec3_impl import get_api as get_vec3_api
from oasis_math.vec4_impl import Vec4Api
from oasis_math.vec4_impl import get_api as get_vec4_api


mat4: Mat4Api = get_api("float64")
mat4n: Mat4Api = get_api("zero_array")
vec3: Vec3Api = get_vec3_api("float64")
vec4: Vec4Api = get_vec4_api("float64")


def _sample() -> NDArray[np.float64]:
    m: NDArray[np.float64] = mat4.axis_rotation([1.0, 2.0, -0.5], 0.8)
    mat4.scale(m, [2.0, 0.5, 3.0], m)
    return mat4.translate(m, [4.0, -1.0, 2.5], m)


def _as_matrix(m: NumberArray) -> NDArray[np.float64]:
    """Return the matrix as a row-major numpy array."""
    return np.array(m, dtype=np.float64).reshape(4, 4).T


def test_create_and_set() -> None:
    """Checks partial creation, the arity of set and its trailing dst."""
    assert mat4n.create(1.0, 2.0) == [1.0, 2.0] + [0.0] * 14
    with pytest.raises(ValueError):
        mat4n.create(*([0.0] * 17))

    values: list[float] = [float(i) for i in range(16)]
    dst: NumberArray = mat4n.create()
    assert mat4n.set(*values, dst) is dst
    assert dst == values
    assert mat4n.set(*values) == values

    keyword_dst: NumberArray = mat4n.identity()
    assert mat4n.set(*values, dst=keyword_dst) is keyword_dst
    assert keyword_dst == values
    with pytest.raises(TypeError):
        mat4n.set(1.0, 2.0, 3.0)


def test_identity() -> None:
    """Checks the identity layout."""
    assert list(mat4.identity()) == [
        1.0, 0.0, 0.0, 0.0,
        0.0, 1.0, 0.0, 0.0,
        0.0, 0.0, 1.0, 0.0,
        0.0, 0.0, 0.0, 1.0,
    ]  # fmt: skip


def test_multiply_matches_numpy() -> None:
    """Checks the product against numpy."""
    a: NDArray[np.float64] = _sample()
    b: NDArray[np.float64] = mat4.perspective(1.0, 1.5, 0.1, 100.0)
    expected: NDArray[np.float64] = _as_matrix(a) @ _as_matrix(b)
    assert np.allclose(_as_matrix(mat4.multiply(a, b)), expected)
    assert mat4.equals(mat4.mul(a, mat4.identity()), a)


def test_multiply_into_operand() -> None:
    """Checks dst may alias an operand."""
    a: NDArray[np.float64] = _sample()
    b: NDArray[np.float64] = mat4.rotation_y(0.25)
    expected: NDArray[np.float64] = mat4.multiply(a, b)
    assert mat4.multiply(a, b, a) is a
    assert mat4.equals(a, expected)


def test_inverse_round_trip() -> None:
    """Checks inverse against numpy and m * inverse(m)."""
    m: NDArray[np.float64] = _sample()
    inv: NDArray[np.float64] = mat4.invert(m)
    assert np.allclose(_as_matrix(inv), np.linalg.inv(_as_matrix(m)))
    assert mat4.equals_approximately(mat4.multiply(m, inv), mat4.identity())
    assert mat4.determinant(m) == pytest.approx(np.linalg.det(_as_matrix(m)))


def test_inverse_in_place() -> None:
    """Checks inverse may write over its input."""
    m: NDArray[np.float64] = _sample()
    expected: NDArray[np.float64] = mat4.inverse(m)
    assert mat4.inverse(m, m) is m
    assert mat4.equals(m, expected)


def test_inverse_of_singular_matrix() -> None:
    """Checks a singular matrix produces non-finite entries."""
    m: NDArray[np.float64] = mat4.scaling([1.0, 0.0, 1.0])
    assert mat4.determinant(m) == 0.0
    inv: NDArray[np.float64] = mat4.inverse(m)
    assert not np.all(np.isfinite(inv))


def test_transpose() -> None:
    """Checks allocating and in-place transpose agree."""
    m: NDArray[np.float64] = _sample()
    expected: NDArray[np.float64] = mat4.transpose(m)
    assert np.array_equal(_as_matrix(expected), _as_matrix(m).T)
    assert mat4.transpose(m, m) is m
    assert mat4.equals(m, expected)


def test_translation_accessors() -> None:
    """Checks translation and axis readers and writers."""
    m: NumberArray = mat4n.translation([1.0, 2.0, 3.0])
    assert mat4n.get_translation(m) == [1.0, 2.0, 3.0]
    moved: NumberArray = mat4n.set_translation(m, [4.0, 5.0, 6.0])
    assert mat4n.get_translation(moved) == [4.0, 5.0, 6.0]
    assert mat4n.get_translation(m) == [1.0, 2.0, 3.0]

    assert mat4n.set_axis(m, [0.0, 0.0, 2.0], 2, m) is m
    assert mat4n.get_axis(m, 2) == [0.0, 0.0, 2.0]
    assert mat4n.get_scaling(m) == [1.0, 1.0, 2.0]


def test_translate_matches_multiply() -> None:
    """Checks translate equals multiplying by a translation matrix."""
    m: NDArray[np.float64] = _sample()
    v: list[float] = [0.5, -2.0, 1.0]
    expected: NDArray[np.float64] = mat4.multiply(m, mat4.translation(v))
    assert mat4.equals_approximately(mat4.translate(m, v), expected)


@pytest.mark.parametrize(
    "builder,rotator",
    [
        ("rotation_x", "rotate_x"),
        ("rotation_y", "rotate_y"),
        ("rotation_z", "rotate_z"),
    ],
)
def test_rotate_matches_multiply(builder: str, rotator: str) -> None:
    """Checks each rotate equals multiplying by its rotation matrix."""
    m: NDArray[np.float64] = _sample()
    r: NDArray[np.float64] = getattr(mat4, builder)(0.7)
    expected: NDArray[np.float64] = mat4.multiply(m, r)
    assert mat4.equals_approximately(getattr(mat4, rotator)(m, 0.7), expected)
    assert getattr(mat4, rotator)(m, 0.7, m) is m
    assert mat4.equals_approximately(m, expected)


def test_axis_rotation_matches_principal_axes() -> None:
    """Checks axis_rotation about x equals rotation_x."""
    assert mat4.equals_approximately(
        mat4.axis_rotation([2.0, 0.0, 0.0], 0.3), mat4.rotation_x(0.3)
    )
    assert mat4.equals_approximately(
        mat4.rotation([0.0, 0.0, 1.0], -1.1), mat4.rotation_z(-1.1)
    )
    m: NDArray[np.float64] = _sample()
    expected: NDArray[np.float64] = mat4.multiply(
        m, mat4.axis_rotation([1.0, 1.0, 0.0], 0.6)
    )
    assert mat4.equals_approximately(mat4.rotate(m, [1.0, 1.0, 0.0], 0.6), expected)


def test_scale_matches_multiply() -> None:
    """Checks scale helpers equal multiplying by scaling matrices."""
    m: NDArray[np.float64] = _sample()
    assert mat4.equals_approximately(
        mat4.scale(m, [2.0, 3.0, 4.0]),
        mat4.multiply(m, mat4.scaling([2.0, 3.0, 4.0])),
    )
    assert mat4.equals_approximately(
        mat4.uniform_scale(m, 3.0), mat4.multiply(m, mat4.uniform_scaling(3.0))
    )


def test_perspective_maps_near_and_far() -> None:
    """Checks depth is 0 at the near plane and 1 at the far plane."""
    m: NDArray[np.float64] = mat4.perspective(math.pi / 2.0, 1.0, 1.0, 10.0)
    near: NDArray[np.float64] = vec3.transform_mat4([0.0, 0.0, -1.0], m)
    far: NDArray[np.float64] = vec3.transform_mat4([0.0, 0.0, -10.0], m)
    assert near[2] == pytest.approx(0.0, abs=1e-12)
    assert far[2] == pytest.approx(1.0)
    assert m[0] == pytest.approx(1.0)
    assert m[5] == pytest.approx(1.0)


def test_perspective_infinite_far() -> None:
    """Checks the limiting values for an infinite far plane."""
    m: NDArray[np.float64] = mat4.perspective(1.0, 2.0, 0.5, math.inf)
    assert m[10] == -1.0
    assert m[11] == -1.0
    assert m[14] == -0.5
    assert m[15] == 0.0


def test_perspective_reverse_z() -> None:
    """Checks reversed depth for finite and infinite far planes."""
    m: NDArray[np.float64] = mat4.perspective_reverse_z(math.pi / 2.0, 1.0, 1.0, 10.0)
    near: NDArray[np.float64] = vec3.transform_mat4([0.0, 0.0, -1.0], m)
    far: NDArray[np.float64] = vec3.transform_mat4([0.0, 0.0, -10.0], m)
    assert near[2] == pytest.approx(1.0)
    assert far[2] == pytest.approx(0.0, abs=1e-12)

    inf: NDArray[np.float64] = mat4.perspective_reverse_z(1.0, 1.0, 0.25)
    assert inf[10] == 0.0
    assert inf[14] == 0.25


def test_ortho_maps_box_to_clip_space() -> None:
    """Checks the corners of the box map to clip-space corners."""
    m: NDArray[np.float64] = mat4.ortho(-2.0, 2.0, -1.0, 1.0, 1.0, 5.0)
    low: NDArray[np.float64] = vec3.transform_mat4([-2.0, -1.0, -1.0], m)
    high: NDArray[np.float64] = vec3.transform_mat4([2.0, 1.0, -5.0], m)
    assert np.allclose(low, [-1.0, -1.0, 0.0])
    assert np.allclose(high, [1.0, 1.0, 1.0])


def test_frustum_matches_perspective() -> None:
    """Checks a symmetric frustum equals the matching perspective."""
    fov: float = math.pi / 3.0
    near: float = 0.5
    half: float = near * math.tan(fov / 2.0)
    frustum: NDArray[np.float64] = mat4.frustum(-half, half, -half, half, near, 20.0)
    perspective: NDArray[np.float64] = mat4.perspective(fov, 1.0, near, 20.0)
    assert mat4.equals_approximately(frustum, perspective)

    reverse: NDArray[np.float64] = mat4.frustum_reverse_z(
        -half, half, -half, half, near
    )
    assert mat4.equals_approximately(
        reverse, mat4.perspective_reverse_z(fov, 1.0, near)
    )


def test_projection_writes_every_slot() -> None:
    """Checks projections overwrite a dirty destination."""
    dst: NDArray[np.float64] = np.full(16, 7.0)
    clean: NDArray[np.float64] = mat4.perspective(1.0, 1.5, 0.1, 100.0)
    assert mat4.perspective(1.0, 1.5, 0.1, 100.0, dst) is dst
    assert mat4.equals(dst, clean)


def test_look_at_is_inverse_of_camera_aim() -> None:
    """Checks the view matrix inverts the camera world matrix."""
    eye: list[float] = [1.0, 2.0, 5.0]
    target: list[float] = [0.0, 0.0, 0.0]
    up: list[float] = [0.0, 1.0, 0.0]
    camera: NDArray[np.float64] = mat4.camera_aim(eye, target, up)
    view: NDArray[np.float64] = mat4.look_at(eye, target, up)
    assert mat4.equals_approximately(mat4.multiply(camera, view), mat4.identity())
    assert mat4.equals_approximately(mat4.inverse(camera), view)

    # Target ends up straight down the view's negative z axis
    in_view: NDArray[np.float64] = vec3.transform_mat4(target, view)
    assert in_view[0] == pytest.approx(0.0, abs=1e-12)
    assert in_view[1] == pytest.approx(0.0, abs=1e-12)
    assert in_view[2] == pytest.approx(-math.sqrt(30.0))


def test_aim_points_z_at_target() -> None:
    """Checks aim places the object and faces its z axis at the target."""
    m: NDArray[np.float64] = mat4.aim([1.0, 0.0, 0.0], [1.0, 0.0, 5.0], [0.0, 1.0, 0.0])
    assert np.allclose(vec3.get_axis(m, 2), [0.0, 0.0, 1.0])
    assert np.allclose(vec3.get_axis(m, 0), [1.0, 0.0, 0.0])
    assert np.allclose(vec3.get_translation(m), [1.0, 0.0, 0.0])

    cam: NDArray[np.float64] = mat4.camera_aim(
        [1.0, 0.0, 0.0], [1.0, 0.0, 5.0], [0.0, 1.0, 0.0]
    )
    assert np.allclose(vec3.get_axis(cam, 2), [0.0, 0.0, -1.0])


def test_from_mat3_and_from_quat() -> None:
    """Checks embedding a mat3 and building from a quaternion."""
    m3: list[float] = [1.0, 2.0, 3.0, 0.0, 4.0, 5.0, 6.0, 0.0, 7.0, 8.0, 9.0, 0.0]
    m: NumberArray = mat4n.from_mat3(m3)
    assert m == [
        1.0, 2.0, 3.0, 0.0,
        4.0, 5.0, 6.0, 0.0,
        7.0, 8.0, 9.0, 0.0,
        0.0, 0.0, 0.0, 1.0,
    ]  # fmt: skip

    half: float = math.sqrt(0.5)
    rotation: NDArray[np.float64] = mat4.from_quat([0.0, 0.0, half, half])
    assert mat4.equals_approximately(rotation, mat4.rotation_z(math.pi / 2.0))


def test_vec4_transform_uses_full_product() -> None:
    """Checks vec4 transforms carry the homogeneous coordinate."""
    m: NDArray[np.float64] = mat4.perspective(1.0, 1.0, 1.0, 10.0)
    clip: NDArray[np.float64] = vec4.transform_mat4([0.0, 0.0, -1.0, 1.0], m)
    assert clip[3] == pytest.approx(1.0)
    assert clip[2] == pytest.approx(0.0, abs=1e-12)


def test_negate_copy_and_equality() -> None:
    """Checks negate, copy and exact equality."""
    m: NDArray[np.float64] = _sample()
    assert mat4.equals(mat4.negate(mat4.negate(m)), m)
    assert mat4.clone(m) is not m
    assert mat4.equals(mat4.copy(m), m)
    assert not mat4.equals(mat4.negate(m), m)
    assert isinstance(mat4.equals_approximately(m, m), bool)
