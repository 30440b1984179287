################################################################################
#
#  Copyright (C) 2026 Garrett Brown
#  This file is part of OASIS - https://github.com/eigendude/OASIS
#
#  SPDX-License-Identifier: Apache-2.0
#  See DOCS/LICENSING.md for more information.
#
################################################################################
"""
4x4 matrix operations

Slot [c * 4 + r] holds column c, row r, which matches the buffer layout of
WebGPU and OpenGL. Translation lives in slots 12, 13 and 14. Projection
builders target a clip-space depth range of [0, 1].
"""

from __future__ import annotations

import math
from dataclasses import dataclass
from typing import Optional
from typing import Tuple

from oasis_math.api_cache import ApiCache
from oasis_math.math_types import Mat3Arg
from oasis_math.math_types import Mat4Arg
from oasis_math.math_types import NumberArray
from oasis_math.math_types import QuatArg
from oasis_math.math_types import Vec3Arg
from oasis_math.slot_utils import copy_slots
from oasis_math.slot_utils import write_basis_lengths
from oasis_math.storage import StorageLike
from oasis_math.storage import StoragePolicy
from oasis_math.utils import NORMALIZE_MIN_LENGTH
from oasis_math.utils import get_epsilon
from oasis_math.utils import ieee_div


Vec3Tuple = Tuple[float, float, float]


def _normalize3(x: float, y: float, z: float) -> Vec3Tuple:
    length: float = math.sqrt(x * x + y * y + z * z)
    if length > NORMALIZE_MIN_LENGTH:
        return (x / length, y / length, z / length)
    return (0.0, 0.0, 0.0)


def _cross3(a: Vec3Tuple, b: Vec3Tuple) -> Vec3Tuple:
    return (
        a[1] * b[2] - a[2] * b[1],
        a[2] * b[0] - a[0] * b[2],
        a[0] * b[1] - a[1] * b[0],
    )


def _camera_basis(
    from_point: Vec3Arg, to_point: Vec3Arg, up: Vec3Arg
) -> Tuple[Vec3Tuple, Vec3Tuple, Vec3Tuple]:
    """
    Build an orthonormal basis whose z axis points from from_point to to_point

    Returns:
        The x, y and z axes as tuples
    """
    z_axis: Vec3Tuple = _normalize3(
        to_point[0] - from_point[0],
        to_point[1] - from_point[1],
        to_point[2] - from_point[2],
    )
    x_axis: Vec3Tuple = _normalize3(*_cross3((up[0], up[1], up[2]), z_axis))
    y_axis: Vec3Tuple = _normalize3(*_cross3(z_axis, x_axis))
    return x_axis, y_axis, z_axis


@dataclass(frozen=True)
class Mat4Api:
    """Mat4 operations bound to one storage policy.

    Responsibility:
        Build and combine the 4x4 matrices of a 3D rendering pipeline:
        model transforms, camera matrices and projections.

    Data contract:
        - 16 slots, column groups of four, translation in slots 12..14.
        - Mat3 arguments use the 12 slot padded layout.
        - Vectors read out of a matrix are allocated from the same storage.

    Determinism and edge cases:
        - inverse() of a singular matrix yields inf or NaN entries.
        - Projection builders accept an infinite far plane and use the
          limiting values of the finite formulas.
        - Camera builders compute their basis with local scalars, so they
          are reentrant.
    """

    storage: StoragePolicy

    def _dst(self, dst: Optional[NumberArray], size: int = 16) -> NumberArray:
        return dst if dst is not None else self.storage.allocate(size)

    def create(self, *values: float) -> Mat4Arg:
        """
        Create a matrix from up to 16 values

        Slots without a value stay zero.
        """
        if len(values) > 16:
            raise ValueError("mat4 takes at most 16 values")
        dst: Mat4Arg = self.storage.allocate(16)
        for i, value in enumerate(values):
            dst[i] = value
        return dst

    def set(
        self,
        v0: float,
        v1: float,
        v2: float,
        v3: float,
        v4: float,
        v5: float,
        v6: float,
        v7: float,
        v8: float,
        v9: float,
        v10: float,
        v11: float,
        v12: float,
        v13: float,
        v14: float,
        v15: float,
        dst: Optional[Mat4Arg] = None,
    ) -> Mat4Arg:
        """Write 16 values into a matrix."""
        dst = self._dst(dst)
        dst[0] = v0
        dst[1] = v1
        dst[2] = v2
        dst[3] = v3
        dst[4] = v4
        dst[5] = v5
        dst[6] = v6
        dst[7] = v7
        dst[8] = v8
        dst[9] = v9
        dst[10] = v10
        dst[11] = v11
        dst[12] = v12
        dst[13] = v13
        dst[14] = v14
        dst[15] = v15
        return dst

    def from_mat3(self, m3: Mat3Arg, dst: Optional[Mat4Arg] = None) -> Mat4Arg:
        """Embed a mat3 in the upper left of an otherwise identity matrix."""
        dst = self._dst(dst)
        dst[0] = m3[0]
        dst[1] = m3[1]
        dst[2] = m3[2]
        dst[3] = 0.0
        dst[4] = m3[4]
        dst[5] = m3[5]
        dst[6] = m3[6]
        dst[7] = 0.0
        dst[8] = m3[8]
        dst[9] = m3[9]
        dst[10] = m3[10]
        dst[11] = 0.0
        dst[12] = 0.0
        dst[13] = 0.0
        dst[14] = 0.0
        dst[15] = 1.0
        return dst

    def from_quat(self, q: QuatArg, dst: Optional[Mat4Arg] = None) -> Mat4Arg:
        """Create a rotation matrix from a unit quaternion."""
        x: float = q[0]
        y: float = q[1]
        z: float = q[2]
        w: float = q[3]
        x2: float = x + x
        y2: float = y + y
        z2: float = z + z

        xx: float = x * x2
        yx: float = y * x2
        yy: float = y * y2
        zx: float = z * x2
        zy: float = z * y2
        zz: float = z * z2
        wx: float = w * x2
        wy: float = w * y2
        wz: float = w * z2

        dst = self._dst(dst)
        dst[0] = 1.0 - yy - zz
        dst[1] = yx + wz
        dst[2] = zx - wy
        dst[3] = 0.0
        dst[4] = yx - wz
        dst[5] = 1.0 - xx - zz
        dst[6] = zy + wx
        dst[7] = 0.0
        dst[8] = zx + wy
        dst[9] = zy - wx
        dst[10] = 1.0 - xx - yy
        dst[11] = 0.0
        dst[12] = 0.0
        dst[13] = 0.0
        dst[14] = 0.0
        dst[15] = 1.0
        return dst

    def negate(self, m: Mat4Arg, dst: Optional[Mat4Arg] = None) -> Mat4Arg:
        dst = self._dst(dst)
        for i in range(16):
            dst[i] = -m[i]
        return dst

    def copy(self, m: Mat4Arg, dst: Optional[Mat4Arg] = None) -> Mat4Arg:
        dst = self._dst(dst)
        copy_slots(m, dst, range(16))
        return dst

    def equals_approximately(self, a: Mat4Arg, b: Mat4Arg) -> bool:
        """Check whether every slot differs by less than epsilon."""
        eps: float = get_epsilon()
        return bool(all(abs(a[i] - b[i]) < eps for i in range(16)))

    def equals(self, a: Mat4Arg, b: Mat4Arg) -> bool:
        """Check whether every slot is exactly equal."""
        return bool(all(a[i] == b[i] for i in range(16)))

    def identity(self, dst: Optional[Mat4Arg] = None) -> Mat4Arg:
        """Return the identity matrix."""
        dst = self._dst(dst)
        for i in range(16):
            dst[i] = 1.0 if i % 5 == 0 else 0.0
        return dst

    def transpose(self, m: Mat4Arg, dst: Optional[Mat4Arg] = None) -> Mat4Arg:
        """Return the transpose of a matrix, swapping in place when dst is m."""
        if dst is m:
            for i, j in ((1, 4), (2, 8), (3, 12), (6, 9), (7, 13), (11, 14)):
                t: float = m[i]
                m[i] = m[j]
                m[j] = t
            return m

        values: list[float] = [m[i] for i in range(16)]
        dst = self._dst(dst)
        for r in range(4):
            for c in range(4):
                dst[r * 4 + c] = values[c * 4 + r]
        return dst

    def inverse(self, m: Mat4Arg, dst: Optional[Mat4Arg] = None) -> Mat4Arg:
        """
        Return the inverse of a matrix

        Uses cofactor expansion with one shared reciprocal of the
        determinant. A singular matrix is not detected and produces inf or
        NaN entries.
        """
        m00: float = m[0]
        m01: float = m[1]
        m02: float = m[2]
        m03: float = m[3]
        m10: float = m[4]
        m11: float = m[5]
        m12: float = m[6]
        m13: float = m[7]
        m20: float = m[8]
        m21: float = m[9]
        m22: float = m[10]
        m23: float = m[11]
        m30: float = m[12]
        m31: float = m[13]
        m32: float = m[14]
        m33: float = m[15]

        tmp0: float = m22 * m33
        tmp1: float = m32 * m23
        tmp2: float = m12 * m33
        tmp3: float = m32 * m13
        tmp4: float = m12 * m23
        tmp5: float = m22 * m13
        tmp6: float = m02 * m33
        tmp7: float = m32 * m03
        tmp8: float = m02 * m23
        tmp9: float = m22 * m03
        tmp10: float = m02 * m13
        tmp11: float = m12 * m03
        tmp12: float = m20 * m31
        tmp13: float = m30 * m21
        tmp14: float = m10 * m31
        tmp15: float = m30 * m11
        tmp16: float = m10 * m21
        tmp17: float = m20 * m11
        tmp18: float = m00 * m31
        tmp19: float = m30 * m01
        tmp20: float = m00 * m21
        tmp21: float = m20 * m01
        tmp22: float = m00 * m11
        tmp23: float = m10 * m01

        t0: float = (tmp0 * m11 + tmp3 * m21 + tmp4 * m31) - (
            tmp1 * m11 + tmp2 * m21 + tmp5 * m31
        )
        t1: float = (tmp1 * m01 + tmp6 * m21 + tmp9 * m31) - (
            tmp0 * m01 + tmp7 * m21 + tmp8 * m31
        )
        t2: float = (tmp2 * m01 + tmp7 * m11 + tmp10 * m31) - (
            tmp3 * m01 + tmp6 * m11 + tmp11 * m31
        )
        t3: float = (tmp5 * m01 + tmp8 * m11 + tmp11 * m21) - (
            tmp4 * m01 + tmp9 * m11 + tmp10 * m21
        )

        d: float = ieee_div(1.0, m00 * t0 + m10 * t1 + m20 * t2 + m30 * t3)

        dst = self._dst(dst)
        dst[0] = d * t0
        dst[1] = d * t1
        dst[2] = d * t2
        dst[3] = d * t3
        dst[4] = d * (
            (tmp1 * m10 + tmp2 * m20 + tmp5 * m30)
            - (tmp0 * m10 + tmp3 * m20 + tmp4 * m30)
        )
        dst[5] = d * (
            (tmp0 * m00 + tmp7 * m20 + tmp8 * m30)
            - (tmp1 * m00 + tmp6 * m20 + tmp9 * m30)
        )
        dst[6] = d * (
            (tmp3 * m00 + tmp6 * m10 + tmp11 * m30)
            - (tmp2 * m00 + tmp7 * m10 + tmp10 * m30)
        )
        dst[7] = d * (
            (tmp4 * m00 + tmp9 * m10 + tmp10 * m20)
            - (tmp5 * m00 + tmp8 * m10 + tmp11 * m20)
        )
        dst[8] = d * (
            (tmp12 * m13 + tmp15 * m23 + tmp16 * m33)
            - (tmp13 * m13 + tmp14 * m23 + tmp17 * m33)
        )
        dst[9] = d * (
            (tmp13 * m03 + tmp18 * m23 + tmp21 * m33)
            - (tmp12 * m03 + tmp19 * m23 + tmp20 * m33)
        )
        dst[10] = d * (
            (tmp14 * m03 + tmp19 * m13 + tmp22 * m33)
            - (tmp15 * m03 + tmp18 * m13 + tmp23 * m33)
        )
        dst[11] = d * (
            (tmp17 * m03 + tmp20 * m13 + tmp23 * m23)
            - (tmp16 * m03 + tmp21 * m13 + tmp22 * m23)
        )
        dst[12] = d * (
            (tmp14 * m22 + tmp17 * m32 + tmp13 * m12)
            - (tmp16 * m32 + tmp12 * m12 + tmp15 * m22)
        )
        dst[13] = d * (
            (tmp20 * m32 + tmp12 * m02 + tmp19 * m22)
            - (tmp18 * m22 + tmp21 * m32 + tmp13 * m02)
        )
        dst[14] = d * (
            (tmp18 * m12 + tmp23 * m32 + tmp15 * m02)
            - (tmp22 * m32 + tmp14 * m02 + tmp19 * m12)
        )
        dst[15] = d * (
            (tmp22 * m22 + tmp16 * m02 + tmp21 * m12)
            - (tmp20 * m12 + tmp23 * m22 + tmp17 * m02)
        )
        return dst

    def determinant(self, m: Mat4Arg) -> float:
        """Return the determinant of a matrix."""
        m00: float = m[0]
        m01: float = m[1]
        m02: float = m[2]
        m03: float = m[3]
        m10: float = m[4]
        m11: float = m[5]
        m12: float = m[6]
        m13: float = m[7]
        m20: float = m[8]
        m21: float = m[9]
        m22: float = m[10]
        m23: float = m[11]
        m30: float = m[12]
        m31: float = m[13]
        m32: float = m[14]
        m33: float = m[15]

        tmp0: float = m22 * m33
        tmp1: float = m32 * m23
        tmp2: float = m12 * m33
        tmp3: float = m32 * m13
        tmp4: float = m12 * m23
        tmp5: float = m22 * m13
        tmp6: float = m02 * m33
        tmp7: float = m32 * m03
        tmp8: float = m02 * m23
        tmp9: float = m22 * m03
        tmp10: float = m02 * m13
        tmp11: float = m12 * m03

        t0: float = (tmp0 * m11 + tmp3 * m21 + tmp4 * m31) - (
            tmp1 * m11 + tmp2 * m21 + tmp5 * m31
        )
        t1: float = (tmp1 * m01 + tmp6 * m21 + tmp9 * m31) - (
            tmp0 * m01 + tmp7 * m21 + tmp8 * m31
        )
        t2: float = (tmp2 * m01 + tmp7 * m11 + tmp10 * m31) - (
            tmp3 * m01 + tmp6 * m11 + tmp11 * m31
        )
        t3: float = (tmp5 * m01 + tmp8 * m11 + tmp11 * m21) - (
            tmp4 * m01 + tmp9 * m11 + tmp10 * m21
        )

        return m00 * t0 + m10 * t1 + m20 * t2 + m30 * t3

    def multiply(
        self, a: Mat4Arg, b: Mat4Arg, dst: Optional[Mat4Arg] = None
    ) -> Mat4Arg:
        """Return the product a * b."""
        av: list[float] = [a[i] for i in range(16)]
        bv: list[float] = [b[i] for i in range(16)]

        dst = self._dst(dst)
        for c in range(4):
            b0: float = bv[c * 4 + 0]
            b1: float = bv[c * 4 + 1]
            b2: float = bv[c * 4 + 2]
            b3: float = bv[c * 4 + 3]
            for r in range(4):
                dst[c * 4 + r] = (
                    av[r] * b0 + av[4 + r] * b1 + av[8 + r] * b2 + av[12 + r] * b3
                )
        return dst

    def set_translation(
        self, a: Mat4Arg, v: Vec3Arg, dst: Optional[Mat4Arg] = None
    ) -> Mat4Arg:
        """Replace the translation of a matrix."""
        dst = dst if dst is not None else self.identity()
        if a is not dst:
            copy_slots(a, dst, range(12))
        dst[12] = v[0]
        dst[13] = v[1]
        dst[14] = v[2]
        dst[15] = 1.0
        return dst

    def get_translation(self, m: Mat4Arg, dst: Optional[Vec3Arg] = None) -> Vec3Arg:
        """Read the translation of a matrix."""
        dst = self._dst(dst, 3)
        dst[0] = m[12]
        dst[1] = m[13]
        dst[2] = m[14]
        return dst

    def get_axis(
        self, m: Mat4Arg, axis: int, dst: Optional[Vec3Arg] = None
    ) -> Vec3Arg:
        """Read basis axis 0, 1 or 2 of a matrix."""
        off: int = axis * 4
        dst = self._dst(dst, 3)
        dst[0] = m[off + 0]
        dst[1] = m[off + 1]
        dst[2] = m[off + 2]
        return dst

    def set_axis(
        self, m: Mat4Arg, v: Vec3Arg, axis: int, dst: Optional[Mat4Arg] = None
    ) -> Mat4Arg:
        """Replace basis axis 0, 1 or 2 of a matrix."""
        v0: float = v[0]
        v1: float = v[1]
        v2: float = v[2]
        dst = m if dst is m else self.copy(m, dst)
        off: int = axis * 4
        dst[off + 0] = v0
        dst[off + 1] = v1
        dst[off + 2] = v2
        return dst

    def get_scaling(self, m: Mat4Arg, dst: Optional[Vec3Arg] = None) -> Vec3Arg:
        """Return the length of each basis axis."""
        return write_basis_lengths(m, self._dst(dst, 3))

    def _projection_frame(
        self, sx: float, sy: float, ox: float, oy: float, dst: Optional[Mat4Arg]
    ) -> Mat4Arg:
        dst = self._dst(dst)
        dst[0] = sx
        dst[1] = 0.0
        dst[2] = 0.0
        dst[3] = 0.0
        dst[4] = 0.0
        dst[5] = sy
        dst[6] = 0.0
        dst[7] = 0.0
        dst[8] = ox
        dst[9] = oy
        dst[11] = -1.0
        dst[12] = 0.0
        dst[13] = 0.0
        dst[15] = 0.0
        return dst

    def perspective(
        self,
        field_of_view_y_in_radians: float,
        aspect: float,
        z_near: float,
        z_far: float,
        dst: Optional[Mat4Arg] = None,
    ) -> Mat4Arg:
        """
        Create a perspective projection

        Maps the view frustum to clip space with depth from 0 at z_near to
        1 at z_far. z_far may be math.inf for an infinite far plane.
        """
        f: float = math.tan(math.pi * 0.5 - 0.5 * field_of_view_y_in_radians)

        dst = self._projection_frame(ieee_div(f, aspect), f, 0.0, 0.0, dst)
        if math.isfinite(z_far):
            range_inv: float = ieee_div(1.0, z_near - z_far)
            dst[10] = z_far * range_inv
            dst[14] = z_far * z_near * range_inv
        else:
            dst[10] = -1.0
            dst[14] = -z_near
        return dst

    def perspective_reverse_z(
        self,
        field_of_view_y_in_radians: float,
        aspect: float,
        z_near: float,
        z_far: float = math.inf,
        dst: Optional[Mat4Arg] = None,
    ) -> Mat4Arg:
        """
        Create a perspective projection with reversed depth

        Depth is 1 at z_near and 0 at z_far, which keeps precision for
        distant geometry. The far plane defaults to infinity.
        """
        f: float = ieee_div(1.0, math.tan(field_of_view_y_in_radians * 0.5))

        dst = self._projection_frame(ieee_div(f, aspect), f, 0.0, 0.0, dst)
        if z_far == math.inf:
            dst[10] = 0.0
            dst[14] = z_near
        else:
            range_inv: float = ieee_div(1.0, z_far - z_near)
            dst[10] = z_near * range_inv
            dst[14] = z_far * z_near * range_inv
        return dst

    def ortho(
        self,
        left: float,
        right: float,
        bottom: float,
        top: float,
        near: float,
        far: float,
        dst: Optional[Mat4Arg] = None,
    ) -> Mat4Arg:
        """Create an orthographic projection with depth range [0, 1]."""
        dst = self._dst(dst)
        dst[0] = ieee_div(2.0, right - left)
        dst[1] = 0.0
        dst[2] = 0.0
        dst[3] = 0.0
        dst[4] = 0.0
        dst[5] = ieee_div(2.0, top - bottom)
        dst[6] = 0.0
        dst[7] = 0.0
        dst[8] = 0.0
        dst[9] = 0.0
        dst[10] = ieee_div(1.0, near - far)
        dst[11] = 0.0
        dst[12] = ieee_div(right + left, left - right)
        dst[13] = ieee_div(top + bottom, bottom - top)
        dst[14] = ieee_div(near, near - far)
        dst[15] = 1.0
        return dst

    def frustum(
        self,
        left: float,
        right: float,
        bottom: float,
        top: float,
        near: float,
        far: float,
        dst: Optional[Mat4Arg] = None,
    ) -> Mat4Arg:
        """Create a perspective projection from the near plane rectangle."""
        dx: float = right - left
        dy: float = top - bottom
        dz: float = near - far

        dst = self._projection_frame(
            ieee_div(2.0 * near, dx),
            ieee_div(2.0 * near, dy),
            ieee_div(left + right, dx),
            ieee_div(top + bottom, dy),
            dst,
        )
        dst[10] = ieee_div(far, dz)
        dst[14] = ieee_div(near * far, dz)
        return dst

    def frustum_reverse_z(
        self,
        left: float,
        right: float,
        bottom: float,
        top: float,
        near: float,
        far: float = math.inf,
        dst: Optional[Mat4Arg] = None,
    ) -> Mat4Arg:
        """Create a reversed depth projection from the near plane rectangle."""
        dx: float = right - left
        dy: float = top - bottom

        dst = self._projection_frame(
            ieee_div(2.0 * near, dx),
            ieee_div(2.0 * near, dy),
            ieee_div(left + right, dx),
            ieee_div(top + bottom, dy),
            dst,
        )
        if far == math.inf:
            dst[10] = 0.0
            dst[14] = near
        else:
            range_inv: float = ieee_div(1.0, far - near)
            dst[10] = near * range_inv
            dst[14] = far * near * range_inv
        return dst

    def _write_frame(
        self,
        x_axis: Vec3Tuple,
        y_axis: Vec3Tuple,
        z_axis: Vec3Tuple,
        origin: Vec3Tuple,
        dst: Optional[Mat4Arg],
    ) -> Mat4Arg:
        dst = self._dst(dst)
        for c, column in enumerate((x_axis, y_axis, z_axis, origin)):
            dst[c * 4 + 0] = column[0]
            dst[c * 4 + 1] = column[1]
            dst[c * 4 + 2] = column[2]
            dst[c * 4 + 3] = 1.0 if c == 3 else 0.0
        return dst

    def aim(
        self,
        position: Vec3Arg,
        target: Vec3Arg,
        up: Vec3Arg,
        dst: Optional[Mat4Arg] = None,
    ) -> Mat4Arg:
        """
        Create a matrix that places an object at position facing target

        The object's positive z axis points at the target.
        """
        x_axis, y_axis, z_axis = _camera_basis(position, target, up)
        origin: Vec3Tuple = (position[0], position[1], position[2])
        return self._write_frame(x_axis, y_axis, z_axis, origin, dst)

    def camera_aim(
        self,
        eye: Vec3Arg,
        target: Vec3Arg,
        up: Vec3Arg,
        dst: Optional[Mat4Arg] = None,
    ) -> Mat4Arg:
        """
        Create a camera world matrix at eye looking at target

        The camera looks down its negative z axis.
        """
        x_axis, y_axis, z_axis = _camera_basis(target, eye, up)
        origin: Vec3Tuple = (eye[0], eye[1], eye[2])
        return self._write_frame(x_axis, y_axis, z_axis, origin, dst)

    def look_at(
        self,
        eye: Vec3Arg,
        target: Vec3Arg,
        up: Vec3Arg,
        dst: Optional[Mat4Arg] = None,
    ) -> Mat4Arg:
        """Create a view matrix, the inverse of camera_aim()."""
        x_axis, y_axis, z_axis = _camera_basis(target, eye, up)
        ex: float = eye[0]
        ey: float = eye[1]
        ez: float = eye[2]

        dst = self._dst(dst)
        dst[0] = x_axis[0]
        dst[1] = y_axis[0]
        dst[2] = z_axis[0]
        dst[3] = 0.0
        dst[4] = x_axis[1]
        dst[5] = y_axis[1]
        dst[6] = z_axis[1]
        dst[7] = 0.0
        dst[8] = x_axis[2]
        dst[9] = y_axis[2]
        dst[10] = z_axis[2]
        dst[11] = 0.0
        dst[12] = -(x_axis[0] * ex + x_axis[1] * ey + x_axis[2] * ez)
        dst[13] = -(y_axis[0] * ex + y_axis[1] * ey + y_axis[2] * ez)
        dst[14] = -(z_axis[0] * ex + z_axis[1] * ey + z_axis[2] * ez)
        dst[15] = 1.0
        return dst

    def translation(self, v: Vec3Arg, dst: Optional[Mat4Arg] = None) -> Mat4Arg:
        """Create a translation matrix."""
        v0: float = v[0]
        v1: float = v[1]
        v2: float = v[2]
        dst = self.identity(dst)
        dst[12] = v0
        dst[13] = v1
        dst[14] = v2
        return dst

    def translate(
        self, m: Mat4Arg, v: Vec3Arg, dst: Optional[Mat4Arg] = None
    ) -> Mat4Arg:
        """Post-multiply a matrix by a translation."""
        v0: float = v[0]
        v1: float = v[1]
        v2: float = v[2]
        mv: list[float] = [m[i] for i in range(16)]

        dst = self._dst(dst)
        if m is not dst:
            for i in range(12):
                dst[i] = mv[i]

        for r in range(4):
            dst[12 + r] = mv[r] * v0 + mv[4 + r] * v1 + mv[8 + r] * v2 + mv[12 + r]
        return dst

    def rotation_x(
        self, angle_in_radians: float, dst: Optional[Mat4Arg] = None
    ) -> Mat4Arg:
        """Create a rotation about the x axis."""
        c: float = math.cos(angle_in_radians)
        s: float = math.sin(angle_in_radians)

        dst = self.identity(dst)
        dst[5] = c
        dst[6] = s
        dst[9] = -s
        dst[10] = c
        return dst

    def rotation_y(
        self, angle_in_radians: float, dst: Optional[Mat4Arg] = None
    ) -> Mat4Arg:
        """Create a rotation about the y axis."""
        c: float = math.cos(angle_in_radians)
        s: float = math.sin(angle_in_radians)

        dst = self.identity(dst)
        dst[0] = c
        dst[2] = -s
        dst[8] = s
        dst[10] = c
        return dst

    def rotation_z(
        self, angle_in_radians: float, dst: Optional[Mat4Arg] = None
    ) -> Mat4Arg:
        """Create a rotation about the z axis."""
        c: float = math.cos(angle_in_radians)
        s: float = math.sin(angle_in_radians)

        dst = self.identity(dst)
        dst[0] = c
        dst[1] = s
        dst[4] = -s
        dst[5] = c
        return dst

    def _rotate_columns(
        self,
        m: Mat4Arg,
        first: int,
        second: int,
        angle_in_radians: float,
        dst: Optional[Mat4Arg],
    ) -> Mat4Arg:
        """
        Rotate two basis columns of m into each other

        Column first becomes c * first + s * second and column second
        becomes c * second - s * first. Remaining columns are copied when
        dst is not m.
        """
        c: float = math.cos(angle_in_radians)
        s: float = math.sin(angle_in_radians)
        a: list[float] = [m[first * 4 + r] for r in range(4)]
        b: list[float] = [m[second * 4 + r] for r in range(4)]

        dst = self._dst(dst)
        for r in range(4):
            dst[first * 4 + r] = c * a[r] + s * b[r]
            dst[second * 4 + r] = c * b[r] - s * a[r]

        if m is not dst:
            for column in range(4):
                if column not in (first, second):
                    copy_slots(m, dst, range(column * 4, column * 4 + 4))
        return dst

    def rotate_x(
        self, m: Mat4Arg, angle_in_radians: float, dst: Optional[Mat4Arg] = None
    ) -> Mat4Arg:
        """Post-multiply a matrix by a rotation about the x axis."""
        return self._rotate_columns(m, 1, 2, angle_in_radians, dst)

    def rotate_y(
        self, m: Mat4Arg, angle_in_radians: float, dst: Optional[Mat4Arg] = None
    ) -> Mat4Arg:
        """Post-multiply a matrix by a rotation about the y axis."""
        return self._rotate_columns(m, 2, 0, angle_in_radians, dst)

    def rotate_z(
        self, m: Mat4Arg, angle_in_radians: float, dst: Optional[Mat4Arg] = None
    ) -> Mat4Arg:
        """Post-multiply a matrix by a rotation about the z axis."""
        return self._rotate_columns(m, 0, 1, angle_in_radians, dst)

    @staticmethod
    def _axis_rotation_terms(
        axis: Vec3Arg, angle_in_radians: float
    ) -> Tuple[float, float, float, float, float, float, float, float, float]:
        x: float = axis[0]
        y: float = axis[1]
        z: float = axis[2]
        n: float = math.sqrt(x * x + y * y + z * z)
        x = ieee_div(x, n)
        y = ieee_div(y, n)
        z = ieee_div(z, n)
        xx: float = x * x
        yy: float = y * y
        zz: float = z * z
        c: float = math.cos(angle_in_radians)
        s: float = math.sin(angle_in_radians)
        one_minus_cosine: float = 1.0 - c

        return (
            xx + (1.0 - xx) * c,
            x * y * one_minus_cosine + z * s,
            x * z * one_minus_cosine - y * s,
            x * y * one_minus_cosine - z * s,
            yy + (1.0 - yy) * c,
            y * z * one_minus_cosine + x * s,
            x * z * one_minus_cosine + y * s,
            y * z * one_minus_cosine - x * s,
            zz + (1.0 - zz) * c,
        )

    def axis_rotation(
        self, axis: Vec3Arg, angle_in_radians: float, dst: Optional[Mat4Arg] = None
    ) -> Mat4Arg:
        """
        Create a rotation about an arbitrary axis

        The axis is normalized first; a zero axis yields NaN entries.
        """
        r: Tuple[float, ...] = self._axis_rotation_terms(axis, angle_in_radians)

        dst = self.identity(dst)
        dst[0] = r[0]
        dst[1] = r[1]
        dst[2] = r[2]
        dst[4] = r[3]
        dst[5] = r[4]
        dst[6] = r[5]
        dst[8] = r[6]
        dst[9] = r[7]
        dst[10] = r[8]
        return dst

    def axis_rotate(
        self,
        m: Mat4Arg,
        axis: Vec3Arg,
        angle_in_radians: float,
        dst: Optional[Mat4Arg] = None,
    ) -> Mat4Arg:
        """Post-multiply a matrix by a rotation about an arbitrary axis."""
        r: Tuple[float, ...] = self._axis_rotation_terms(axis, angle_in_radians)
        mv: list[float] = [m[i] for i in range(12)]

        dst = self._dst(dst)
        for c in range(3):
            r0: float = r[c * 3 + 0]
            r1: float = r[c * 3 + 1]
            r2: float = r[c * 3 + 2]
            for row in range(4):
                dst[c * 4 + row] = r0 * mv[row] + r1 * mv[4 + row] + r2 * mv[8 + row]

        if m is not dst:
            copy_slots(m, dst, (12, 13, 14, 15))
        return dst

    def scaling(self, v: Vec3Arg, dst: Optional[Mat4Arg] = None) -> Mat4Arg:
        """Create a scaling matrix."""
        v0: float = v[0]
        v1: float = v[1]
        v2: float = v[2]
        dst = self.identity(dst)
        dst[0] = v0
        dst[5] = v1
        dst[10] = v2
        return dst

    def scale(self, m: Mat4Arg, v: Vec3Arg, dst: Optional[Mat4Arg] = None) -> Mat4Arg:
        """Post-multiply a matrix by a scaling."""
        factors: Vec3Tuple = (v[0], v[1], v[2])

        dst = self._dst(dst)
        for c in range(3):
            for r in range(4):
                dst[c * 4 + r] = factors[c] * m[c * 4 + r]

        if m is not dst:
            copy_slots(m, dst, (12, 13, 14, 15))
        return dst

    def uniform_scaling(self, s: float, dst: Optional[Mat4Arg] = None) -> Mat4Arg:
        """Create a uniform scaling matrix."""
        dst = self.identity(dst)
        dst[0] = s
        dst[5] = s
        dst[10] = s
        return dst

    def uniform_scale(
        self, m: Mat4Arg, s: float, dst: Optional[Mat4Arg] = None
    ) -> Mat4Arg:
        """Post-multiply a matrix by a uniform scaling."""
        dst = self._dst(dst)
        for i in range(12):
            dst[i] = s * m[i]

        if m is not dst:
            copy_slots(m, dst, (12, 13, 14, 15))
        return dst

    clone = copy
    invert = inverse
    mul = multiply
    rotation = axis_rotation
    rotate = axis_rotate


_CACHE: ApiCache[Mat4Api] = ApiCache("mat4", Mat4Api)


def get_api(storage: Optional[StorageLike] = None) -> Mat4Api:
    """Return the cached mat4 API for a storage kind, or the default storage."""
    return _CACHE.get(storage)
