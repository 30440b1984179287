################################################################################
#
#  Copyright (C) 2026 Garrett Brown
#  This file is part of OASIS - https://github.com/eigendude/OASIS
#
#  SPDX-License-Identifier: Apache-2.0
#  See DOCS/LICENSING.md for more information.
#
################################################################################
"""Quaternion operations using the xyzw convention."""

from __future__ import annotations

import enum
import math
from dataclasses import dataclass
from typing import NamedTuple
from typing import Optional
from typing import Union

from oasis_math.api_cache import ApiCache
from oasis_math.math_types import Mat3Arg
from oasis_math.math_types import Mat4Arg
from oasis_math.math_types import NumberArray
from oasis_math.math_types import QuatArg
from oasis_math.math_types import Vec3Arg
from oasis_math.storage import StorageLike
from oasis_math.storage import StoragePolicy
from oasis_math.utils import NORMALIZE_MIN_LENGTH
from oasis_math.utils import get_epsilon
from oasis_math.utils import ieee_div
from oasis_math.utils import ieee_sqrt
from oasis_math.utils import safe_acos


# Dot product thresholds at which two unit vectors count as parallel
PARALLEL_DOT: float = 0.999999

# Cross products shorter than this are too short to serve as an axis
MIN_AXIS_LENGTH: float = 0.000001


# Quaternion components held in local scalars
QuatTuple = tuple[float, float, float, float]

# Anything indexable as x, y, z, w
QuatLike = Union[NumberArray, QuatTuple]


def _slerp_components(a: QuatLike, b: QuatLike, t: float) -> QuatTuple:
    """Return the slerp of a and b at t as local scalars."""
    ax: float = a[0]
    ay: float = a[1]
    az: float = a[2]
    aw: float = a[3]
    bx: float = b[0]
    by: float = b[1]
    bz: float = b[2]
    bw: float = b[3]

    cos_omega: float = ax * bx + ay * by + az * bz + aw * bw
    if cos_omega < 0.0:
        cos_omega = -cos_omega
        bx = -bx
        by = -by
        bz = -bz
        bw = -bw

    scale0: float
    scale1: float
    if 1.0 - cos_omega > get_epsilon():
        omega: float = safe_acos(cos_omega)
        sin_omega: float = math.sin(omega)
        scale0 = math.sin((1.0 - t) * omega) / sin_omega
        scale1 = math.sin(t * omega) / sin_omega
    else:
        scale0 = 1.0 - t
        scale1 = t

    return (
        scale0 * ax + scale1 * bx,
        scale0 * ay + scale1 * by,
        scale0 * az + scale1 * bz,
        scale0 * aw + scale1 * bw,
    )


class RotationOrder(str, enum.Enum):
    """
    Order in which Euler angle rotations are applied

    Attributes:
        XYZ: Rotate about x, then y, then z
        XZY: Rotate about x, then z, then y
        YXZ: Rotate about y, then x, then z
        YZX: Rotate about y, then z, then x
        ZXY: Rotate about z, then x, then y
        ZYX: Rotate about z, then y, then x
    """

    XYZ = "xyz"
    XZY = "xzy"
    YXZ = "yxz"
    YZX = "yzx"
    ZXY = "zxy"
    ZYX = "zyx"

    @classmethod
    def parse(cls, value: Union[RotationOrder, str]) -> RotationOrder:
        """Resolve an order from an enum member or its lowercase name."""
        if isinstance(value, RotationOrder):
            return value
        try:
            return cls(value)
        except ValueError:
            raise ValueError(f"Unknown rotation order: {value}") from None


class AxisAngle(NamedTuple):
    """Rotation expressed as an angle in radians about a unit axis."""

    angle: float
    axis: Vec3Arg


@dataclass(frozen=True)
class QuatApi:
    """Quaternion operations bound to one storage policy.

    Responsibility:
        Build, compose and interpolate rotations stored as quaternions.

    Data contract:
        - Slots are x, y, z, w.
        - Rotations assume unit quaternions; callers normalize.
        - Matrix arguments to from_mat() may be mat3 (12 slot) or mat4; only
          the rotation slots shared by both layouts are read.

    Determinism and edge cases:
        - slerp() takes the shorter arc and falls back to linear
          interpolation when the inputs are within epsilon.
        - normalize() returns the zero quaternion for lengths at or below
          NORMALIZE_MIN_LENGTH.
        - inverse() of the zero quaternion is the zero quaternion.
        - from_euler() raises ValueError for an unknown order.
    """

    storage: StoragePolicy

    def _dst(self, dst: Optional[NumberArray], size: int = 4) -> NumberArray:
        return dst if dst is not None else self.storage.allocate(size)

    def create(
        self, x: float = 0.0, y: float = 0.0, z: float = 0.0, w: float = 0.0
    ) -> QuatArg:
        """Create a quaternion from components."""
        dst: QuatArg = self.storage.allocate(4)
        dst[0] = x
        dst[1] = y
        dst[2] = z
        dst[3] = w
        return dst

    def set(
        self, x: float, y: float, z: float, w: float, dst: Optional[QuatArg] = None
    ) -> QuatArg:
        """Write components into a quaternion."""
        dst = self._dst(dst)
        dst[0] = x
        dst[1] = y
        dst[2] = z
        dst[3] = w
        return dst

    def from_axis_angle(
        self, axis: Vec3Arg, angle_in_radians: float, dst: Optional[QuatArg] = None
    ) -> QuatArg:
        """Create a rotation about a unit axis."""
        half_angle: float = angle_in_radians * 0.5
        s: float = math.sin(half_angle)
        ax: float = axis[0]
        ay: float = axis[1]
        az: float = axis[2]

        dst = self._dst(dst)
        dst[0] = s * ax
        dst[1] = s * ay
        dst[2] = s * az
        dst[3] = math.cos(half_angle)
        return dst

    def to_axis_angle(self, q: QuatArg, dst: Optional[Vec3Arg] = None) -> AxisAngle:
        """
        Decompose a unit quaternion into an angle and an axis

        The identity rotation has no defined axis; the x axis is returned
        for it.
        """
        angle: float = safe_acos(q[3]) * 2.0
        s: float = math.sin(angle * 0.5)
        qx: float = q[0]
        qy: float = q[1]
        qz: float = q[2]

        axis: Vec3Arg = self._dst(dst, 3)
        if s > get_epsilon():
            axis[0] = qx / s
            axis[1] = qy / s
            axis[2] = qz / s
        else:
            axis[0] = 1.0
            axis[1] = 0.0
            axis[2] = 0.0
        return AxisAngle(angle=angle, axis=axis)

    def angle(self, a: QuatArg, b: QuatArg) -> float:
        """Return the rotation angle between two unit quaternions."""
        d: float = self.dot(a, b)
        return safe_acos(2.0 * d * d - 1.0)

    def multiply(
        self, a: QuatArg, b: QuatArg, dst: Optional[QuatArg] = None
    ) -> QuatArg:
        """Return the Hamilton product a * b."""
        ax: float = a[0]
        ay: float = a[1]
        az: float = a[2]
        aw: float = a[3]
        bx: float = b[0]
        by: float = b[1]
        bz: float = b[2]
        bw: float = b[3]

        dst = self._dst(dst)
        dst[0] = ax * bw + aw * bx + ay * bz - az * by
        dst[1] = ay * bw + aw * by + az * bx - ax * bz
        dst[2] = az * bw + aw * bz + ax * by - ay * bx
        dst[3] = aw * bw - ax * bx - ay * by - az * bz
        return dst

    def rotate_x(
        self, q: QuatArg, angle_in_radians: float, dst: Optional[QuatArg] = None
    ) -> QuatArg:
        """Rotate a quaternion about the x axis."""
        half_angle: float = angle_in_radians * 0.5
        qx: float = q[0]
        qy: float = q[1]
        qz: float = q[2]
        qw: float = q[3]
        bx: float = math.sin(half_angle)
        bw: float = math.cos(half_angle)

        dst = self._dst(dst)
        dst[0] = qx * bw + qw * bx
        dst[1] = qy * bw + qz * bx
        dst[2] = qz * bw - qy * bx
        dst[3] = qw * bw - qx * bx
        return dst

    def rotate_y(
        self, q: QuatArg, angle_in_radians: float, dst: Optional[QuatArg] = None
    ) -> QuatArg:
        """Rotate a quaternion about the y axis."""
        half_angle: float = angle_in_radians * 0.5
        qx: float = q[0]
        qy: float = q[1]
        qz: float = q[2]
        qw: float = q[3]
        by: float = math.sin(half_angle)
        bw: float = math.cos(half_angle)

        dst = self._dst(dst)
        dst[0] = qx * bw - qz * by
        dst[1] = qy * bw + qw * by
        dst[2] = qz * bw + qx * by
        dst[3] = qw * bw - qy * by
        return dst

    def rotate_z(
        self, q: QuatArg, angle_in_radians: float, dst: Optional[QuatArg] = None
    ) -> QuatArg:
        """Rotate a quaternion about the z axis."""
        half_angle: float = angle_in_radians * 0.5
        qx: float = q[0]
        qy: float = q[1]
        qz: float = q[2]
        qw: float = q[3]
        bz: float = math.sin(half_angle)
        bw: float = math.cos(half_angle)

        dst = self._dst(dst)
        dst[0] = qx * bw + qy * bz
        dst[1] = qy * bw - qx * bz
        dst[2] = qz * bw + qw * bz
        dst[3] = qw * bw - qz * bz
        return dst

    def slerp(
        self, a: QuatArg, b: QuatArg, t: float, dst: Optional[QuatArg] = None
    ) -> QuatArg:
        """
        Spherically interpolate between two unit quaternions

        b is negated when needed so the shorter arc is taken. When the
        quaternions are nearly equal the weights fall back to 1 - t and t.
        """
        x, y, z, w = _slerp_components(a, b, t)

        dst = self._dst(dst)
        dst[0] = x
        dst[1] = y
        dst[2] = z
        dst[3] = w
        return dst

    def inverse(self, q: QuatArg, dst: Optional[QuatArg] = None) -> QuatArg:
        """Return the multiplicative inverse of a quaternion."""
        a0: float = q[0]
        a1: float = q[1]
        a2: float = q[2]
        a3: float = q[3]
        dot: float = a0 * a0 + a1 * a1 + a2 * a2 + a3 * a3
        inv_dot: float = 1.0 / dot if dot else 0.0

        dst = self._dst(dst)
        dst[0] = -a0 * inv_dot
        dst[1] = -a1 * inv_dot
        dst[2] = -a2 * inv_dot
        dst[3] = a3 * inv_dot
        return dst

    def conjugate(self, q: QuatArg, dst: Optional[QuatArg] = None) -> QuatArg:
        """Negate the vector part of a quaternion."""
        dst = self._dst(dst)
        dst[0] = -q[0]
        dst[1] = -q[1]
        dst[2] = -q[2]
        dst[3] = q[3]
        return dst

    def from_mat(
        self, m: Union[Mat3Arg, Mat4Arg], dst: Optional[QuatArg] = None
    ) -> QuatArg:
        """
        Create a quaternion from a rotation matrix

        Uses the trace when it is positive and otherwise solves for the
        component with the largest diagonal entry first, which keeps the
        square root away from zero.
        """
        trace: float = m[0] + m[5] + m[10]

        dst = self._dst(dst)
        if trace > 0.0:
            root: float = math.sqrt(trace + 1.0)
            inv_root: float = 0.5 / root
            x: float = (m[6] - m[9]) * inv_root
            y: float = (m[8] - m[2]) * inv_root
            z: float = (m[1] - m[4]) * inv_root
            dst[0] = x
            dst[1] = y
            dst[2] = z
            dst[3] = 0.5 * root
            return dst

        i: int = 0
        if m[5] > m[0]:
            i = 1
        if m[10] > m[i * 4 + i]:
            i = 2
        j: int = (i + 1) % 3
        k: int = (i + 2) % 3

        root = ieee_sqrt(m[i * 4 + i] - m[j * 4 + j] - m[k * 4 + k] + 1.0)
        inv_root = ieee_div(0.5, root)
        qi: float = 0.5 * root
        qw: float = (m[j * 4 + k] - m[k * 4 + j]) * inv_root
        qj: float = (m[j * 4 + i] + m[i * 4 + j]) * inv_root
        qk: float = (m[k * 4 + i] + m[i * 4 + k]) * inv_root

        dst[i] = qi
        dst[j] = qj
        dst[k] = qk
        dst[3] = qw
        return dst

    def from_euler(
        self,
        x_angle_in_radians: float,
        y_angle_in_radians: float,
        z_angle_in_radians: float,
        order: Union[RotationOrder, str],
        dst: Optional[QuatArg] = None,
    ) -> QuatArg:
        """
        Create a quaternion from Euler angles applied in the given order

        Raises:
            ValueError: if the order is not one of the six axis orders
        """
        rotation_order: RotationOrder = RotationOrder.parse(order)

        sx: float = math.sin(x_angle_in_radians * 0.5)
        cx: float = math.cos(x_angle_in_radians * 0.5)
        sy: float = math.sin(y_angle_in_radians * 0.5)
        cy: float = math.cos(y_angle_in_radians * 0.5)
        sz: float = math.sin(z_angle_in_radians * 0.5)
        cz: float = math.cos(z_angle_in_radians * 0.5)

        # Terms shared by every order; orders differ only in the signs
        x_a: float = sx * cy * cz
        x_b: float = cx * sy * sz
        y_a: float = cx * sy * cz
        y_b: float = sx * cy * sz
        z_a: float = cx * cy * sz
        z_b: float = sx * sy * cz
        w_a: float = cx * cy * cz
        w_b: float = sx * sy * sz

        signs: tuple[float, float, float, float] = _EULER_SIGNS[rotation_order]

        dst = self._dst(dst)
        dst[0] = x_a + signs[0] * x_b
        dst[1] = y_a + signs[1] * y_b
        dst[2] = z_a + signs[2] * z_b
        dst[3] = w_a + signs[3] * w_b
        return dst

    def copy(self, q: QuatArg, dst: Optional[QuatArg] = None) -> QuatArg:
        dst = self._dst(dst)
        dst[0] = q[0]
        dst[1] = q[1]
        dst[2] = q[2]
        dst[3] = q[3]
        return dst

    def add(self, a: QuatArg, b: QuatArg, dst: Optional[QuatArg] = None) -> QuatArg:
        dst = self._dst(dst)
        for i in range(4):
            dst[i] = a[i] + b[i]
        return dst

    def subtract(
        self, a: QuatArg, b: QuatArg, dst: Optional[QuatArg] = None
    ) -> QuatArg:
        dst = self._dst(dst)
        for i in range(4):
            dst[i] = a[i] - b[i]
        return dst

    def mul_scalar(
        self, q: QuatArg, k: float, dst: Optional[QuatArg] = None
    ) -> QuatArg:
        """Multiply every component by a scalar."""
        dst = self._dst(dst)
        for i in range(4):
            dst[i] = q[i] * k
        return dst

    def div_scalar(
        self, q: QuatArg, k: float, dst: Optional[QuatArg] = None
    ) -> QuatArg:
        """Divide every component by a scalar."""
        dst = self._dst(dst)
        for i in range(4):
            dst[i] = ieee_div(q[i], k)
        return dst

    def dot(self, a: QuatArg, b: QuatArg) -> float:
        """Return the 4D dot product."""
        return a[0] * b[0] + a[1] * b[1] + a[2] * b[2] + a[3] * b[3]

    def lerp(
        self, a: QuatArg, b: QuatArg, t: float, dst: Optional[QuatArg] = None
    ) -> QuatArg:
        """Linearly interpolate components without renormalizing."""
        dst = self._dst(dst)
        for i in range(4):
            dst[i] = a[i] + t * (b[i] - a[i])
        return dst

    def length(self, q: QuatArg) -> float:
        return math.sqrt(self.length_sq(q))

    def length_sq(self, q: QuatArg) -> float:
        q0: float = q[0]
        q1: float = q[1]
        q2: float = q[2]
        q3: float = q[3]
        return q0 * q0 + q1 * q1 + q2 * q2 + q3 * q3

    def normalize(self, q: QuatArg, dst: Optional[QuatArg] = None) -> QuatArg:
        """Scale to unit length, or zero the quaternion when too short."""
        q0: float = q[0]
        q1: float = q[1]
        q2: float = q[2]
        q3: float = q[3]
        length: float = math.sqrt(q0 * q0 + q1 * q1 + q2 * q2 + q3 * q3)

        dst = self._dst(dst)
        if length > NORMALIZE_MIN_LENGTH:
            dst[0] = q0 / length
            dst[1] = q1 / length
            dst[2] = q2 / length
            dst[3] = q3 / length
        else:
            dst[0] = 0.0
            dst[1] = 0.0
            dst[2] = 0.0
            dst[3] = 0.0
        return dst

    def equals_approximately(self, a: QuatArg, b: QuatArg) -> bool:
        """Check whether every component differs by less than epsilon."""
        eps: float = get_epsilon()
        return bool(all(abs(a[i] - b[i]) < eps for i in range(4)))

    def equals(self, a: QuatArg, b: QuatArg) -> bool:
        """Check whether every component is exactly equal."""
        return bool(
            a[0] == b[0] and a[1] == b[1] and a[2] == b[2] and a[3] == b[3]
        )

    def identity(self, dst: Optional[QuatArg] = None) -> QuatArg:
        """Return the identity rotation."""
        dst = self._dst(dst)
        dst[0] = 0.0
        dst[1] = 0.0
        dst[2] = 0.0
        dst[3] = 1.0
        return dst

    def rotation_to(
        self, a_unit: Vec3Arg, b_unit: Vec3Arg, dst: Optional[QuatArg] = None
    ) -> QuatArg:
        """
        Return the shortest rotation taking unit vector a_unit to b_unit

        Opposite vectors rotate half a turn about any axis perpendicular to
        a_unit, chosen from the x axis or, failing that, the y axis.
        """
        ax: float = a_unit[0]
        ay: float = a_unit[1]
        az: float = a_unit[2]
        bx: float = b_unit[0]
        by: float = b_unit[1]
        bz: float = b_unit[2]
        dot: float = ax * bx + ay * by + az * bz

        dst = self._dst(dst)
        if dot < -PARALLEL_DOT:
            # x unit cross a
            cx: float = 0.0
            cy: float = -az
            cz: float = ay
            if math.sqrt(cy * cy + cz * cz) < MIN_AXIS_LENGTH:
                # y unit cross a
                cx = az
                cy = 0.0
                cz = -ax
            length: float = math.sqrt(cx * cx + cy * cy + cz * cz)
            if length > NORMALIZE_MIN_LENGTH:
                cx = cx / length
                cy = cy / length
                cz = cz / length
            else:
                cx = cy = cz = 0.0
            return self.from_axis_angle((cx, cy, cz), math.pi, dst)

        if dot > PARALLEL_DOT:
            return self.identity(dst)

        dst[0] = ay * bz - az * by
        dst[1] = az * bx - ax * bz
        dst[2] = ax * by - ay * bx
        dst[3] = 1.0 + dot
        return self.normalize(dst, dst)

    def sqlerp(
        self,
        a: QuatArg,
        b: QuatArg,
        c: QuatArg,
        d: QuatArg,
        t: float,
        dst: Optional[QuatArg] = None,
    ) -> QuatArg:
        """
        Spherical quadrangle interpolation

        Interpolates from a to d with b and c as control points. The two
        inner interpolations are kept in local scalars, so only dst is
        written.
        """
        outer: QuatTuple = _slerp_components(a, d, t)
        inner: QuatTuple = _slerp_components(b, c, t)
        x, y, z, w = _slerp_components(outer, inner, 2.0 * t * (1.0 - t))

        dst = self._dst(dst)
        dst[0] = x
        dst[1] = y
        dst[2] = z
        dst[3] = w
        return dst

    from_values = create
    mul = multiply
    clone = copy
    sub = subtract
    scale = mul_scalar
    len = length
    len_sq = length_sq


# Sign applied to the second term of x, y, z and w for each rotation order
_EULER_SIGNS: dict[RotationOrder, tuple[float, float, float, float]] = {
    RotationOrder.XYZ: (1.0, -1.0, 1.0, -1.0),
    RotationOrder.XZY: (-1.0, -1.0, 1.0, 1.0),
    RotationOrder.YXZ: (1.0, -1.0, -1.0, 1.0),
    RotationOrder.YZX: (1.0, 1.0, -1.0, -1.0),
    RotationOrder.ZXY: (-1.0, 1.0, 1.0, -1.0),
    RotationOrder.ZYX: (-1.0, 1.0, -1.0, 1.0),
}


_CACHE: ApiCache[QuatApi] = ApiCache("quat", QuatApi)


def get_api(storage: Optional[StorageLike] = None) -> QuatApi:
    """Return the cached quat API for a storage kind, or the default storage."""
    return _CACHE.get(storage)
