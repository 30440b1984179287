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
3x3 matrix operations

A mat3 is stored as 12 slots: three groups of four, where slots 3, 7 and 11
are homogeneous padding. Matrices built by this module keep the padding at
zero, and comparisons ignore it.

Slot [c * 4 + r] holds column c, row r. For 2D transforms the translation
lives in slots 8 and 9.
"""

from __future__ import annotations

import math
from dataclasses import dataclass
from typing import Optional

from oasis_math.api_cache import ApiCache
from oasis_math.math_types import Mat3Arg
from oasis_math.math_types import Mat4Arg
from oasis_math.math_types import NumberArray
from oasis_math.math_types import QuatArg
from oasis_math.math_types import Vec2Arg
from oasis_math.math_types import Vec3Arg
from oasis_math.slot_utils import copy_slots
from oasis_math.slot_utils import write_basis_lengths
from oasis_math.storage import StorageLike
from oasis_math.storage import StoragePolicy
from oasis_math.utils import get_epsilon
from oasis_math.utils import ieee_div


# Slots that carry matrix data, in row-major order of the 3x3 matrix
DATA_SLOTS: tuple[int, ...] = (0, 1, 2, 4, 5, 6, 8, 9, 10)

# Homogeneous padding slots
PADDING_SLOTS: tuple[int, ...] = (3, 7, 11)


@dataclass(frozen=True)
class Mat3Api:
    """Mat3 operations bound to one storage policy.

    Responsibility:
        Build, combine and decompose 3x3 matrices used for 2D affine
        transforms and 3D rotation and scale.

    Data contract:
        - 12 slots with padding in slots 3, 7 and 11.
        - Vectors read out of a matrix are allocated from the same storage.

    Determinism and edge cases:
        - inverse() of a singular matrix yields inf or NaN entries.
        - Operations that modify part of a matrix copy the untouched part
          only when dst is not the input matrix.
        - transpose() swaps in place when dst is the input matrix.
    """

    storage: StoragePolicy

    def _dst(self, dst: Optional[NumberArray], size: int = 12) -> NumberArray:
        return dst if dst is not None else self.storage.allocate(size)

    def create(self, *values: float) -> Mat3Arg:
        """
        Create a matrix from up to 9 values

        Values fill the data slots in order; slots without a value stay
        zero.
        """
        if len(values) > 9:
            raise ValueError("mat3 takes at most 9 values")
        dst: Mat3Arg = self.storage.allocate(12)
        for slot, value in zip(DATA_SLOTS, values):
            dst[slot] = value
        for slot in PADDING_SLOTS:
            dst[slot] = 0.0
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
        dst: Optional[Mat3Arg] = None,
    ) -> Mat3Arg:
        """Write 9 values into a matrix and zero its padding."""
        dst = self._dst(dst)
        dst[0] = v0
        dst[1] = v1
        dst[2] = v2
        dst[3] = 0.0
        dst[4] = v3
        dst[5] = v4
        dst[6] = v5
        dst[7] = 0.0
        dst[8] = v6
        dst[9] = v7
        dst[10] = v8
        dst[11] = 0.0
        return dst

    def from_mat4(self, m4: Mat4Arg, dst: Optional[Mat3Arg] = None) -> Mat3Arg:
        """Create a matrix from the upper left 3x3 part of a mat4."""
        dst = self._dst(dst)
        dst[0] = m4[0]
        dst[1] = m4[1]
        dst[2] = m4[2]
        dst[3] = 0.0
        dst[4] = m4[4]
        dst[5] = m4[5]
        dst[6] = m4[6]
        dst[7] = 0.0
        dst[8] = m4[8]
        dst[9] = m4[9]
        dst[10] = m4[10]
        dst[11] = 0.0
        return dst

    def from_quat(self, q: QuatArg, dst: Optional[Mat3Arg] = None) -> Mat3Arg:
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
        return dst

    def negate(self, m: Mat3Arg, dst: Optional[Mat3Arg] = None) -> Mat3Arg:
        """Negate every data slot."""
        dst = self._dst(dst)
        for i in DATA_SLOTS:
            dst[i] = -m[i]
        return dst

    def copy(self, m: Mat3Arg, dst: Optional[Mat3Arg] = None) -> Mat3Arg:
        """Copy the data slots of a matrix."""
        dst = self._dst(dst)
        copy_slots(m, dst, DATA_SLOTS)
        return dst

    def equals_approximately(self, a: Mat3Arg, b: Mat3Arg) -> bool:
        """Check whether every data slot differs by less than epsilon."""
        eps: float = get_epsilon()
        return bool(all(abs(a[i] - b[i]) < eps for i in DATA_SLOTS))

    def equals(self, a: Mat3Arg, b: Mat3Arg) -> bool:
        """Check whether every data slot is exactly equal."""
        return bool(all(a[i] == b[i] for i in DATA_SLOTS))

    def identity(self, dst: Optional[Mat3Arg] = None) -> Mat3Arg:
        """Return the identity matrix."""
        dst = self._dst(dst)
        dst[0] = 1.0
        dst[1] = 0.0
        dst[2] = 0.0
        dst[3] = 0.0
        dst[4] = 0.0
        dst[5] = 1.0
        dst[6] = 0.0
        dst[7] = 0.0
        dst[8] = 0.0
        dst[9] = 0.0
        dst[10] = 1.0
        dst[11] = 0.0
        return dst

    def transpose(self, m: Mat3Arg, dst: Optional[Mat3Arg] = None) -> Mat3Arg:
        """Return the transpose of a matrix."""
        if dst is m:
            for i, j in ((1, 4), (2, 8), (6, 9)):
                t: float = m[i]
                m[i] = m[j]
                m[j] = t
            return m

        m00: float = m[0]
        m01: float = m[1]
        m02: float = m[2]
        m10: float = m[4]
        m11: float = m[5]
        m12: float = m[6]
        m20: float = m[8]
        m21: float = m[9]
        m22: float = m[10]

        dst = self._dst(dst)
        dst[0] = m00
        dst[1] = m10
        dst[2] = m20
        dst[4] = m01
        dst[5] = m11
        dst[6] = m21
        dst[8] = m02
        dst[9] = m12
        dst[10] = m22
        return dst

    def inverse(self, m: Mat3Arg, dst: Optional[Mat3Arg] = None) -> Mat3Arg:
        """
        Return the inverse of a matrix

        The matrix is not checked for singularity; a zero determinant
        produces inf or NaN entries.
        """
        m00: float = m[0]
        m01: float = m[1]
        m02: float = m[2]
        m10: float = m[4]
        m11: float = m[5]
        m12: float = m[6]
        m20: float = m[8]
        m21: float = m[9]
        m22: float = m[10]

        b01: float = m22 * m11 - m12 * m21
        b11: float = -m22 * m10 + m12 * m20
        b21: float = m21 * m10 - m11 * m20

        inv_det: float = ieee_div(1.0, m00 * b01 + m01 * b11 + m02 * b21)

        dst = self._dst(dst)
        dst[0] = b01 * inv_det
        dst[1] = (-m22 * m01 + m02 * m21) * inv_det
        dst[2] = (m12 * m01 - m02 * m11) * inv_det
        dst[4] = b11 * inv_det
        dst[5] = (m22 * m00 - m02 * m20) * inv_det
        dst[6] = (-m12 * m00 + m02 * m10) * inv_det
        dst[8] = b21 * inv_det
        dst[9] = (-m21 * m00 + m01 * m20) * inv_det
        dst[10] = (m11 * m00 - m01 * m10) * inv_det
        return dst

    def determinant(self, m: Mat3Arg) -> float:
        """Return the determinant of a matrix."""
        m00: float = m[0]
        m01: float = m[1]
        m02: float = m[2]
        m10: float = m[4]
        m11: float = m[5]
        m12: float = m[6]
        m20: float = m[8]
        m21: float = m[9]
        m22: float = m[10]

        return (
            m00 * (m11 * m22 - m21 * m12)
            - m10 * (m01 * m22 - m21 * m02)
            + m20 * (m01 * m12 - m11 * m02)
        )

    def multiply(
        self, a: Mat3Arg, b: Mat3Arg, dst: Optional[Mat3Arg] = None
    ) -> Mat3Arg:
        """Return the product a * b."""
        a00: float = a[0]
        a01: float = a[1]
        a02: float = a[2]
        a10: float = a[4]
        a11: float = a[5]
        a12: float = a[6]
        a20: float = a[8]
        a21: float = a[9]
        a22: float = a[10]
        b00: float = b[0]
        b01: float = b[1]
        b02: float = b[2]
        b10: float = b[4]
        b11: float = b[5]
        b12: float = b[6]
        b20: float = b[8]
        b21: float = b[9]
        b22: float = b[10]

        dst = self._dst(dst)
        dst[0] = a00 * b00 + a10 * b01 + a20 * b02
        dst[1] = a01 * b00 + a11 * b01 + a21 * b02
        dst[2] = a02 * b00 + a12 * b01 + a22 * b02
        dst[4] = a00 * b10 + a10 * b11 + a20 * b12
        dst[5] = a01 * b10 + a11 * b11 + a21 * b12
        dst[6] = a02 * b10 + a12 * b11 + a22 * b12
        dst[8] = a00 * b20 + a10 * b21 + a20 * b22
        dst[9] = a01 * b20 + a11 * b21 + a21 * b22
        dst[10] = a02 * b20 + a12 * b21 + a22 * b22
        return dst

    def set_translation(
        self, a: Mat3Arg, v: Vec2Arg, dst: Optional[Mat3Arg] = None
    ) -> Mat3Arg:
        """Replace the 2D translation of a matrix."""
        dst = dst if dst is not None else self.identity()
        if a is not dst:
            copy_slots(a, dst, (0, 1, 2, 4, 5, 6))
        dst[8] = v[0]
        dst[9] = v[1]
        dst[10] = 1.0
        return dst

    def get_translation(self, m: Mat3Arg, dst: Optional[Vec2Arg] = None) -> Vec2Arg:
        """Read the 2D translation of a matrix."""
        dst = self._dst(dst, 2)
        dst[0] = m[8]
        dst[1] = m[9]
        return dst

    def get_axis(
        self, m: Mat3Arg, axis: int, dst: Optional[Vec2Arg] = None
    ) -> Vec2Arg:
        """Read the 2D basis axis 0 or 1 of a matrix."""
        off: int = axis * 4
        dst = self._dst(dst, 2)
        dst[0] = m[off + 0]
        dst[1] = m[off + 1]
        return dst

    def set_axis(
        self, m: Mat3Arg, v: Vec2Arg, axis: int, dst: Optional[Mat3Arg] = None
    ) -> Mat3Arg:
        """Replace the 2D basis axis 0 or 1 of a matrix."""
        v0: float = v[0]
        v1: float = v[1]
        dst = m if dst is m else self.copy(m, dst)
        off: int = axis * 4
        dst[off + 0] = v0
        dst[off + 1] = v1
        return dst

    def get_scaling(self, m: Mat3Arg, dst: Optional[Vec2Arg] = None) -> Vec2Arg:
        """Return the length of each 2D basis axis."""
        xx: float = m[0]
        xy: float = m[1]
        yx: float = m[4]
        yy: float = m[5]

        dst = self._dst(dst, 2)
        dst[0] = math.sqrt(xx * xx + xy * xy)
        dst[1] = math.sqrt(yx * yx + yy * yy)
        return dst

    def get_3d_scaling(self, m: Mat3Arg, dst: Optional[Vec3Arg] = None) -> Vec3Arg:
        """Return the length of each 3D basis axis."""
        return write_basis_lengths(m, self._dst(dst, 3))

    def translation(self, v: Vec2Arg, dst: Optional[Mat3Arg] = None) -> Mat3Arg:
        """Create a 2D translation matrix."""
        v0: float = v[0]
        v1: float = v[1]
        dst = self.identity(dst)
        dst[8] = v0
        dst[9] = v1
        return dst

    def translate(
        self, m: Mat3Arg, v: Vec2Arg, dst: Optional[Mat3Arg] = None
    ) -> Mat3Arg:
        """Post-multiply a matrix by a 2D translation."""
        v0: float = v[0]
        v1: float = v[1]

        m00: float = m[0]
        m01: float = m[1]
        m02: float = m[2]
        m10: float = m[4]
        m11: float = m[5]
        m12: float = m[6]
        m20: float = m[8]
        m21: float = m[9]
        m22: float = m[10]

        dst = self._dst(dst)
        if m is not dst:
            copy_slots(m, dst, (0, 1, 2, 4, 5, 6))

        dst[8] = m00 * v0 + m10 * v1 + m20
        dst[9] = m01 * v0 + m11 * v1 + m21
        dst[10] = m02 * v0 + m12 * v1 + m22
        return dst

    def rotation(
        self, angle_in_radians: float, dst: Optional[Mat3Arg] = None
    ) -> Mat3Arg:
        """Create a 2D rotation matrix, which is a rotation about z."""
        c: float = math.cos(angle_in_radians)
        s: float = math.sin(angle_in_radians)

        dst = self._dst(dst)
        dst[0] = c
        dst[1] = s
        dst[2] = 0.0
        dst[3] = 0.0
        dst[4] = -s
        dst[5] = c
        dst[6] = 0.0
        dst[7] = 0.0
        dst[8] = 0.0
        dst[9] = 0.0
        dst[10] = 1.0
        dst[11] = 0.0
        return dst

    def rotate(
        self, m: Mat3Arg, angle_in_radians: float, dst: Optional[Mat3Arg] = None
    ) -> Mat3Arg:
        """Post-multiply a matrix by a rotation about z."""
        m00: float = m[0]
        m01: float = m[1]
        m02: float = m[2]
        m10: float = m[4]
        m11: float = m[5]
        m12: float = m[6]
        c: float = math.cos(angle_in_radians)
        s: float = math.sin(angle_in_radians)

        dst = self._dst(dst)
        dst[0] = c * m00 + s * m10
        dst[1] = c * m01 + s * m11
        dst[2] = c * m02 + s * m12
        dst[4] = c * m10 - s * m00
        dst[5] = c * m11 - s * m01
        dst[6] = c * m12 - s * m02

        if m is not dst:
            copy_slots(m, dst, (8, 9, 10))
        return dst

    def rotation_x(
        self, angle_in_radians: float, dst: Optional[Mat3Arg] = None
    ) -> Mat3Arg:
        """Create a rotation about the x axis."""
        c: float = math.cos(angle_in_radians)
        s: float = math.sin(angle_in_radians)

        dst = self._dst(dst)
        dst[0] = 1.0
        dst[1] = 0.0
        dst[2] = 0.0
        dst[3] = 0.0
        dst[4] = 0.0
        dst[5] = c
        dst[6] = s
        dst[7] = 0.0
        dst[8] = 0.0
        dst[9] = -s
        dst[10] = c
        dst[11] = 0.0
        return dst

    def rotate_x(
        self, m: Mat3Arg, angle_in_radians: float, dst: Optional[Mat3Arg] = None
    ) -> Mat3Arg:
        """Post-multiply a matrix by a rotation about the x axis."""
        m10: float = m[4]
        m11: float = m[5]
        m12: float = m[6]
        m20: float = m[8]
        m21: float = m[9]
        m22: float = m[10]
        c: float = math.cos(angle_in_radians)
        s: float = math.sin(angle_in_radians)

        dst = self._dst(dst)
        dst[4] = c * m10 + s * m20
        dst[5] = c * m11 + s * m21
        dst[6] = c * m12 + s * m22
        dst[8] = c * m20 - s * m10
        dst[9] = c * m21 - s * m11
        dst[10] = c * m22 - s * m12

        if m is not dst:
            copy_slots(m, dst, (0, 1, 2))
        return dst

    def rotation_y(
        self, angle_in_radians: float, dst: Optional[Mat3Arg] = None
    ) -> Mat3Arg:
        """Create a rotation about the y axis."""
        c: float = math.cos(angle_in_radians)
        s: float = math.sin(angle_in_radians)

        dst = self._dst(dst)
        dst[0] = c
        dst[1] = 0.0
        dst[2] = -s
        dst[3] = 0.0
        dst[4] = 0.0
        dst[5] = 1.0
        dst[6] = 0.0
        dst[7] = 0.0
        dst[8] = s
        dst[9] = 0.0
        dst[10] = c
        dst[11] = 0.0
        return dst

    def rotate_y(
        self, m: Mat3Arg, angle_in_radians: float, dst: Optional[Mat3Arg] = None
    ) -> Mat3Arg:
        """Post-multiply a matrix by a rotation about the y axis."""
        m00: float = m[0]
        m01: float = m[1]
        m02: float = m[2]
        m20: float = m[8]
        m21: float = m[9]
        m22: float = m[10]
        c: float = math.cos(angle_in_radians)
        s: float = math.sin(angle_in_radians)

        dst = self._dst(dst)
        dst[0] = c * m00 - s * m20
        dst[1] = c * m01 - s * m21
        dst[2] = c * m02 - s * m22
        dst[8] = c * m20 + s * m00
        dst[9] = c * m21 + s * m01
        dst[10] = c * m22 + s * m02

        if m is not dst:
            copy_slots(m, dst, (4, 5, 6))
        return dst

    def scaling(self, v: Vec2Arg, dst: Optional[Mat3Arg] = None) -> Mat3Arg:
        """Create a 2D scaling matrix."""
        v0: float = v[0]
        v1: float = v[1]
        dst = self.identity(dst)
        dst[0] = v0
        dst[5] = v1
        return dst

    def scale(self, m: Mat3Arg, v: Vec2Arg, dst: Optional[Mat3Arg] = None) -> Mat3Arg:
        """Post-multiply a matrix by a 2D scaling."""
        v0: float = v[0]
        v1: float = v[1]

        dst = self._dst(dst)
        dst[0] = v0 * m[0]
        dst[1] = v0 * m[1]
        dst[2] = v0 * m[2]
        dst[4] = v1 * m[4]
        dst[5] = v1 * m[5]
        dst[6] = v1 * m[6]

        if m is not dst:
            copy_slots(m, dst, (8, 9, 10))
        return dst

    def scaling_3d(self, v: Vec3Arg, dst: Optional[Mat3Arg] = None) -> Mat3Arg:
        """Create a 3D scaling matrix."""
        v0: float = v[0]
        v1: float = v[1]
        v2: float = v[2]
        dst = self.identity(dst)
        dst[0] = v0
        dst[5] = v1
        dst[10] = v2
        return dst

    def scale_3d(
        self, m: Mat3Arg, v: Vec3Arg, dst: Optional[Mat3Arg] = None
    ) -> Mat3Arg:
        """Post-multiply a matrix by a 3D scaling."""
        v0: float = v[0]
        v1: float = v[1]
        v2: float = v[2]

        dst = self._dst(dst)
        dst[0] = v0 * m[0]
        dst[1] = v0 * m[1]
        dst[2] = v0 * m[2]
        dst[4] = v1 * m[4]
        dst[5] = v1 * m[5]
        dst[6] = v1 * m[6]
        dst[8] = v2 * m[8]
        dst[9] = v2 * m[9]
        dst[10] = v2 * m[10]
        return dst

    def uniform_scaling(self, s: float, dst: Optional[Mat3Arg] = None) -> Mat3Arg:
        """Create a 2D uniform scaling matrix."""
        dst = self.identity(dst)
        dst[0] = s
        dst[5] = s
        return dst

    def uniform_scale(
        self, m: Mat3Arg, s: float, dst: Optional[Mat3Arg] = None
    ) -> Mat3Arg:
        """Post-multiply a matrix by a 2D uniform scaling."""
        dst = self._dst(dst)
        for i in (0, 1, 2, 4, 5, 6):
            dst[i] = s * m[i]

        if m is not dst:
            copy_slots(m, dst, (8, 9, 10))
        return dst

    def uniform_scaling_3d(self, s: float, dst: Optional[Mat3Arg] = None) -> Mat3Arg:
        """Create a 3D uniform scaling matrix."""
        dst = self.identity(dst)
        dst[0] = s
        dst[5] = s
        dst[10] = s
        return dst

    def uniform_scale_3d(
        self, m: Mat3Arg, s: float, dst: Optional[Mat3Arg] = None
    ) -> Mat3Arg:
        """Post-multiply a matrix by a 3D uniform scaling."""
        dst = self._dst(dst)
        for i in DATA_SLOTS:
            dst[i] = s * m[i]
        return dst

    clone = copy
    invert = inverse
    mul = multiply
    rotation_z = rotation
    rotate_z = rotate


_CACHE: ApiCache[Mat3Api] = ApiCache("mat3", Mat3Api)


def get_api(storage: Optional[StorageLike] = None) -> Mat3Api:
    """Return the cached mat3 API for a storage kind, or the default storage."""
    return _CACHE.get(storage)
