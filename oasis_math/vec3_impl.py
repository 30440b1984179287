################################################################################
#
#  Copyright (C) 2026 Garrett Brown
#  This file is part of OASIS - https://github.com/eigendude/OASIS
#
#  SPDX-License-Identifier: Apache-2.0
#  See DOCS/LICENSING.md for more information.
#
################################################################################
"""Three-component vector operations."""

from __future__ import annotations

import math
import random as _random
from dataclasses import dataclass
from typing import Optional

from oasis_math.api_cache import ApiCache
from oasis_math.math_types import Mat3Arg
from oasis_math.math_types import Mat4Arg
from oasis_math.math_types import NumberArray
from oasis_math.math_types import QuatArg
from oasis_math.math_types import Vec3Arg
from oasis_math.slot_utils import write_basis_lengths
from oasis_math.storage import StorageLike
from oasis_math.storage import StoragePolicy
from oasis_math.utils import NORMALIZE_MIN_LENGTH
from oasis_math.utils import get_epsilon
from oasis_math.utils import ieee_div
from oasis_math.utils import round_half_up
from oasis_math.utils import safe_acos


@dataclass(frozen=True)
class Vec3Api:
    """Vec3 operations bound to one storage policy.

    Responsibility:
        Create, combine and transform 3D vectors and read vectors out of
        4x4 matrices, allocating results from a single storage policy.

    Data contract:
        - Slots are x, y, z.
        - Mat4 arguments store translation in slots 12, 13 and 14.
        - Quaternion arguments are ordered x, y, z, w.

    Determinism and edge cases:
        - transform_mat4() divides by the transformed w, treating a w of 0
          or NaN as 1.
        - normalize() returns the zero vector for lengths at or below
          NORMALIZE_MIN_LENGTH.
    """

    storage: StoragePolicy

    def _dst(self, dst: Optional[NumberArray]) -> NumberArray:
        return dst if dst is not None else self.storage.allocate(3)

    def create(self, x: float = 0.0, y: float = 0.0, z: float = 0.0) -> Vec3Arg:
        """Create a vector from components."""
        dst: Vec3Arg = self.storage.allocate(3)
        dst[0] = x
        dst[1] = y
        dst[2] = z
        return dst

    def set(
        self, x: float, y: float, z: float, dst: Optional[Vec3Arg] = None
    ) -> Vec3Arg:
        """Write components into a vector."""
        dst = self._dst(dst)
        dst[0] = x
        dst[1] = y
        dst[2] = z
        return dst

    def ceil(self, v: Vec3Arg, dst: Optional[Vec3Arg] = None) -> Vec3Arg:
        """Round each component up."""
        dst = self._dst(dst)
        for i in range(3):
            dst[i] = float(math.ceil(v[i])) if math.isfinite(v[i]) else v[i]
        return dst

    def floor(self, v: Vec3Arg, dst: Optional[Vec3Arg] = None) -> Vec3Arg:
        """Round each component down."""
        dst = self._dst(dst)
        for i in range(3):
            dst[i] = float(math.floor(v[i])) if math.isfinite(v[i]) else v[i]
        return dst

    def round(self, v: Vec3Arg, dst: Optional[Vec3Arg] = None) -> Vec3Arg:
        """Round each component to the nearest integer, halves toward +inf."""
        dst = self._dst(dst)
        for i in range(3):
            dst[i] = round_half_up(v[i])
        return dst

    def clamp(
        self,
        v: Vec3Arg,
        min_value: float = 0.0,
        max_value: float = 1.0,
        dst: Optional[Vec3Arg] = None,
    ) -> Vec3Arg:
        """Clamp each component to [min_value, max_value]."""
        dst = self._dst(dst)
        for i in range(3):
            dst[i] = min(max_value, max(min_value, v[i]))
        return dst

    def add(self, a: Vec3Arg, b: Vec3Arg, dst: Optional[Vec3Arg] = None) -> Vec3Arg:
        """Add two vectors."""
        dst = self._dst(dst)
        dst[0] = a[0] + b[0]
        dst[1] = a[1] + b[1]
        dst[2] = a[2] + b[2]
        return dst

    def add_scaled(
        self, a: Vec3Arg, b: Vec3Arg, scale: float, dst: Optional[Vec3Arg] = None
    ) -> Vec3Arg:
        """Add b scaled by a factor to a."""
        dst = self._dst(dst)
        dst[0] = a[0] + b[0] * scale
        dst[1] = a[1] + b[1] * scale
        dst[2] = a[2] + b[2] * scale
        return dst

    def angle(self, a: Vec3Arg, b: Vec3Arg) -> float:
        """Return the angle between two vectors in radians."""
        ax: float = a[0]
        ay: float = a[1]
        az: float = a[2]
        bx: float = b[0]
        by: float = b[1]
        bz: float = b[2]
        mag1: float = math.sqrt(ax * ax + ay * ay + az * az)
        mag2: float = math.sqrt(bx * bx + by * by + bz * bz)
        mag: float = mag1 * mag2
        cosine: float = (ax * bx + ay * by + az * bz) / mag if mag else 0.0
        return safe_acos(cosine)

    def subtract(
        self, a: Vec3Arg, b: Vec3Arg, dst: Optional[Vec3Arg] = None
    ) -> Vec3Arg:
        """Subtract b from a."""
        dst = self._dst(dst)
        dst[0] = a[0] - b[0]
        dst[1] = a[1] - b[1]
        dst[2] = a[2] - b[2]
        return dst

    def equals_approximately(self, a: Vec3Arg, b: Vec3Arg) -> bool:
        """Check whether every component differs by less than epsilon."""
        eps: float = get_epsilon()
        return bool(
            abs(a[0] - b[0]) < eps
            and abs(a[1] - b[1]) < eps
            and abs(a[2] - b[2]) < eps
        )

    def equals(self, a: Vec3Arg, b: Vec3Arg) -> bool:
        """Check whether every component is exactly equal."""
        return bool(a[0] == b[0] and a[1] == b[1] and a[2] == b[2])

    def lerp(
        self, a: Vec3Arg, b: Vec3Arg, t: float, dst: Optional[Vec3Arg] = None
    ) -> Vec3Arg:
        """Linearly interpolate between two vectors without clamping t."""
        dst = self._dst(dst)
        dst[0] = a[0] + t * (b[0] - a[0])
        dst[1] = a[1] + t * (b[1] - a[1])
        dst[2] = a[2] + t * (b[2] - a[2])
        return dst

    def lerp_v(
        self, a: Vec3Arg, b: Vec3Arg, t: Vec3Arg, dst: Optional[Vec3Arg] = None
    ) -> Vec3Arg:
        """Interpolate with a separate factor per component."""
        dst = self._dst(dst)
        dst[0] = a[0] + t[0] * (b[0] - a[0])
        dst[1] = a[1] + t[1] * (b[1] - a[1])
        dst[2] = a[2] + t[2] * (b[2] - a[2])
        return dst

    def max(self, a: Vec3Arg, b: Vec3Arg, dst: Optional[Vec3Arg] = None) -> Vec3Arg:
        """Component-wise maximum."""
        dst = self._dst(dst)
        dst[0] = max(a[0], b[0])
        dst[1] = max(a[1], b[1])
        dst[2] = max(a[2], b[2])
        return dst

    def min(self, a: Vec3Arg, b: Vec3Arg, dst: Optional[Vec3Arg] = None) -> Vec3Arg:
        """Component-wise minimum."""
        dst = self._dst(dst)
        dst[0] = min(a[0], b[0])
        dst[1] = min(a[1], b[1])
        dst[2] = min(a[2], b[2])
        return dst

    def mul_scalar(
        self, v: Vec3Arg, k: float, dst: Optional[Vec3Arg] = None
    ) -> Vec3Arg:
        """Multiply a vector by a scalar."""
        dst = self._dst(dst)
        dst[0] = v[0] * k
        dst[1] = v[1] * k
        dst[2] = v[2] * k
        return dst

    def div_scalar(
        self, v: Vec3Arg, k: float, dst: Optional[Vec3Arg] = None
    ) -> Vec3Arg:
        """Divide a vector by a scalar."""
        dst = self._dst(dst)
        dst[0] = ieee_div(v[0], k)
        dst[1] = ieee_div(v[1], k)
        dst[2] = ieee_div(v[2], k)
        return dst

    def inverse(self, v: Vec3Arg, dst: Optional[Vec3Arg] = None) -> Vec3Arg:
        """Return the component-wise reciprocal."""
        dst = self._dst(dst)
        dst[0] = ieee_div(1.0, v[0])
        dst[1] = ieee_div(1.0, v[1])
        dst[2] = ieee_div(1.0, v[2])
        return dst

    def cross(self, a: Vec3Arg, b: Vec3Arg, dst: Optional[Vec3Arg] = None) -> Vec3Arg:
        """Compute the cross product a x b."""
        t1: float = a[2] * b[0] - a[0] * b[2]
        t2: float = a[0] * b[1] - a[1] * b[0]
        t0: float = a[1] * b[2] - a[2] * b[1]
        dst = self._dst(dst)
        dst[0] = t0
        dst[1] = t1
        dst[2] = t2
        return dst

    def dot(self, a: Vec3Arg, b: Vec3Arg) -> float:
        """Return the dot product."""
        return a[0] * b[0] + a[1] * b[1] + a[2] * b[2]

    def length(self, v: Vec3Arg) -> float:
        """Return the length of a vector."""
        v0: float = v[0]
        v1: float = v[1]
        v2: float = v[2]
        return math.sqrt(v0 * v0 + v1 * v1 + v2 * v2)

    def length_sq(self, v: Vec3Arg) -> float:
        """Return the squared length of a vector."""
        v0: float = v[0]
        v1: float = v[1]
        v2: float = v[2]
        return v0 * v0 + v1 * v1 + v2 * v2

    def distance(self, a: Vec3Arg, b: Vec3Arg) -> float:
        """Return the distance between two points."""
        return math.sqrt(self.distance_sq(a, b))

    def distance_sq(self, a: Vec3Arg, b: Vec3Arg) -> float:
        """Return the squared distance between two points."""
        dx: float = a[0] - b[0]
        dy: float = a[1] - b[1]
        dz: float = a[2] - b[2]
        return dx * dx + dy * dy + dz * dz

    def normalize(self, v: Vec3Arg, dst: Optional[Vec3Arg] = None) -> Vec3Arg:
        """Scale a vector to unit length, or zero it when too short."""
        v0: float = v[0]
        v1: float = v[1]
        v2: float = v[2]
        length: float = math.sqrt(v0 * v0 + v1 * v1 + v2 * v2)

        dst = self._dst(dst)
        if length > NORMALIZE_MIN_LENGTH:
            dst[0] = v0 / length
            dst[1] = v1 / length
            dst[2] = v2 / length
        else:
            dst[0] = 0.0
            dst[1] = 0.0
            dst[2] = 0.0
        return dst

    def negate(self, v: Vec3Arg, dst: Optional[Vec3Arg] = None) -> Vec3Arg:
        """Negate each component."""
        dst = self._dst(dst)
        dst[0] = -v[0]
        dst[1] = -v[1]
        dst[2] = -v[2]
        return dst

    def copy(self, v: Vec3Arg, dst: Optional[Vec3Arg] = None) -> Vec3Arg:
        """Copy a vector."""
        dst = self._dst(dst)
        dst[0] = v[0]
        dst[1] = v[1]
        dst[2] = v[2]
        return dst

    def multiply(
        self, a: Vec3Arg, b: Vec3Arg, dst: Optional[Vec3Arg] = None
    ) -> Vec3Arg:
        """Component-wise product."""
        dst = self._dst(dst)
        dst[0] = a[0] * b[0]
        dst[1] = a[1] * b[1]
        dst[2] = a[2] * b[2]
        return dst

    def divide(self, a: Vec3Arg, b: Vec3Arg, dst: Optional[Vec3Arg] = None) -> Vec3Arg:
        """Component-wise quotient."""
        dst = self._dst(dst)
        dst[0] = ieee_div(a[0], b[0])
        dst[1] = ieee_div(a[1], b[1])
        dst[2] = ieee_div(a[2], b[2])
        return dst

    def random(self, scale: float = 1.0, dst: Optional[Vec3Arg] = None) -> Vec3Arg:
        """Return a vector of the given length pointing in a random direction."""
        angle: float = _random.random() * 2.0 * math.pi
        z: float = _random.random() * 2.0 - 1.0
        z_scale: float = math.sqrt(1.0 - z * z) * scale

        dst = self._dst(dst)
        dst[0] = math.cos(angle) * z_scale
        dst[1] = math.sin(angle) * z_scale
        dst[2] = z * scale
        return dst

    def zero(self, dst: Optional[Vec3Arg] = None) -> Vec3Arg:
        """Set every component to zero."""
        dst = self._dst(dst)
        dst[0] = 0.0
        dst[1] = 0.0
        dst[2] = 0.0
        return dst

    def transform_mat4(
        self, v: Vec3Arg, m: Mat4Arg, dst: Optional[Vec3Arg] = None
    ) -> Vec3Arg:
        """
        Transform a point by a 4x4 matrix with perspective divide

        The point is extended with w = 1. The result is divided by the
        transformed w unless that w is 0 or NaN.
        """
        x: float = v[0]
        y: float = v[1]
        z: float = v[2]
        w: float = m[3] * x + m[7] * y + m[11] * z + m[15]
        if w == 0.0 or math.isnan(w):
            w = 1.0

        dst = self._dst(dst)
        dst[0] = (m[0] * x + m[4] * y + m[8] * z + m[12]) / w
        dst[1] = (m[1] * x + m[5] * y + m[9] * z + m[13]) / w
        dst[2] = (m[2] * x + m[6] * y + m[10] * z + m[14]) / w
        return dst

    def transform_mat4_upper3x3(
        self, v: Vec3Arg, m: Mat4Arg, dst: Optional[Vec3Arg] = None
    ) -> Vec3Arg:
        """Transform a direction by the rotation and scale part of a 4x4 matrix."""
        v0: float = v[0]
        v1: float = v[1]
        v2: float = v[2]

        dst = self._dst(dst)
        dst[0] = v0 * m[0] + v1 * m[4] + v2 * m[8]
        dst[1] = v0 * m[1] + v1 * m[5] + v2 * m[9]
        dst[2] = v0 * m[2] + v1 * m[6] + v2 * m[10]
        return dst

    def transform_mat3(
        self, v: Vec3Arg, m: Mat3Arg, dst: Optional[Vec3Arg] = None
    ) -> Vec3Arg:
        """Transform a vector by a 3x3 matrix."""
        x: float = v[0]
        y: float = v[1]
        z: float = v[2]

        dst = self._dst(dst)
        dst[0] = x * m[0] + y * m[4] + z * m[8]
        dst[1] = x * m[1] + y * m[5] + z * m[9]
        dst[2] = x * m[2] + y * m[6] + z * m[10]
        return dst

    def transform_quat(
        self, v: Vec3Arg, q: QuatArg, dst: Optional[Vec3Arg] = None
    ) -> Vec3Arg:
        """Rotate a vector by a unit quaternion."""
        qx: float = q[0]
        qy: float = q[1]
        qz: float = q[2]
        w2: float = q[3] * 2.0

        x: float = v[0]
        y: float = v[1]
        z: float = v[2]

        uv_x: float = qy * z - qz * y
        uv_y: float = qz * x - qx * z
        uv_z: float = qx * y - qy * x

        dst = self._dst(dst)
        dst[0] = x + uv_x * w2 + (qy * uv_z - qz * uv_y) * 2.0
        dst[1] = y + uv_y * w2 + (qz * uv_x - qx * uv_z) * 2.0
        dst[2] = z + uv_z * w2 + (qx * uv_y - qy * uv_x) * 2.0
        return dst

    def get_translation(self, m: Mat4Arg, dst: Optional[Vec3Arg] = None) -> Vec3Arg:
        """Read the translation out of a 4x4 matrix."""
        dst = self._dst(dst)
        dst[0] = m[12]
        dst[1] = m[13]
        dst[2] = m[14]
        return dst

    def get_axis(
        self, m: Mat4Arg, axis: int, dst: Optional[Vec3Arg] = None
    ) -> Vec3Arg:
        """Read basis axis 0, 1 or 2 out of a 4x4 matrix."""
        off: int = axis * 4
        dst = self._dst(dst)
        dst[0] = m[off + 0]
        dst[1] = m[off + 1]
        dst[2] = m[off + 2]
        return dst

    def get_scaling(self, m: Mat4Arg, dst: Optional[Vec3Arg] = None) -> Vec3Arg:
        """Return the length of each basis axis of a 4x4 matrix."""
        return write_basis_lengths(m, self._dst(dst))

    def rotate_x(
        self, a: Vec3Arg, b: Vec3Arg, rad: float, dst: Optional[Vec3Arg] = None
    ) -> Vec3Arg:
        """Rotate point a around the x axis through origin b."""
        p0: float = a[0] - b[0]
        p1: float = a[1] - b[1]
        p2: float = a[2] - b[2]
        sin_c: float = math.sin(rad)
        cos_c: float = math.cos(rad)

        r0: float = p0
        r1: float = p1 * cos_c - p2 * sin_c
        r2: float = p1 * sin_c + p2 * cos_c

        dst = self._dst(dst)
        dst[0] = r0 + b[0]
        dst[1] = r1 + b[1]
        dst[2] = r2 + b[2]
        return dst

    def rotate_y(
        self, a: Vec3Arg, b: Vec3Arg, rad: float, dst: Optional[Vec3Arg] = None
    ) -> Vec3Arg:
        """Rotate point a around the y axis through origin b."""
        p0: float = a[0] - b[0]
        p1: float = a[1] - b[1]
        p2: float = a[2] - b[2]
        sin_c: float = math.sin(rad)
        cos_c: float = math.cos(rad)

        r0: float = p2 * sin_c + p0 * cos_c
        r1: float = p1
        r2: float = p2 * cos_c - p0 * sin_c

        dst = self._dst(dst)
        dst[0] = r0 + b[0]
        dst[1] = r1 + b[1]
        dst[2] = r2 + b[2]
        return dst

    def rotate_z(
        self, a: Vec3Arg, b: Vec3Arg, rad: float, dst: Optional[Vec3Arg] = None
    ) -> Vec3Arg:
        """Rotate point a around the z axis through origin b."""
        p0: float = a[0] - b[0]
        p1: float = a[1] - b[1]
        p2: float = a[2] - b[2]
        sin_c: float = math.sin(rad)
        cos_c: float = math.cos(rad)

        r0: float = p0 * cos_c - p1 * sin_c
        r1: float = p0 * sin_c + p1 * cos_c
        r2: float = p2

        dst = self._dst(dst)
        dst[0] = r0 + b[0]
        dst[1] = r1 + b[1]
        dst[2] = r2 + b[2]
        return dst

    def set_length(
        self, a: Vec3Arg, length: float, dst: Optional[Vec3Arg] = None
    ) -> Vec3Arg:
        """Scale a vector to the given length."""
        dst = self.normalize(a, dst)
        return self.mul_scalar(dst, length, dst)

    def truncate(
        self, a: Vec3Arg, max_length: float, dst: Optional[Vec3Arg] = None
    ) -> Vec3Arg:
        """Shorten a vector to max_length if it is longer."""
        if self.length(a) > max_length:
            return self.set_length(a, max_length, dst)
        return self.copy(a, dst)

    def midpoint(
        self, a: Vec3Arg, b: Vec3Arg, dst: Optional[Vec3Arg] = None
    ) -> Vec3Arg:
        """Return the point halfway between a and b."""
        return self.lerp(a, b, 0.5, dst)

    from_values = create
    sub = subtract
    scale = mul_scalar
    invert = inverse
    len = length
    len_sq = length_sq
    dist = distance
    dist_sq = distance_sq
    clone = copy
    mul = multiply
    div = divide


_CACHE: ApiCache[Vec3Api] = ApiCache("vec3", Vec3Api)


def get_api(storage: Optional[StorageLike] = None) -> Vec3Api:
    """Return the cached vec3 API for a storage kind, or the default storage."""
    return _CACHE.get(storage)
