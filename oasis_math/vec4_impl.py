################################################################################
#
#  Copyright (C) 2026 Garrett Brown
#  This file is part of OASIS - https://github.com/eigendude/OASIS
#
#  SPDX-License-Identifier: Apache-2.0
#  See DOCS/LICENSING.md for more information.
#
################################################################################
"""Four-component vector operations."""

from __future__ import annotations

import math
from dataclasses import dataclass
from typing import Optional

from oasis_math.api_cache import ApiCache
from oasis_math.math_types import Mat4Arg
from oasis_math.math_types import NumberArray
from oasis_math.math_types import Vec4Arg
from oasis_math.storage import StorageLike
from oasis_math.storage import StoragePolicy
from oasis_math.utils import NORMALIZE_MIN_LENGTH
from oasis_math.utils import get_epsilon
from oasis_math.utils import ieee_div
from oasis_math.utils import round_half_up


@dataclass(frozen=True)
class Vec4Api:
    """Vec4 operations bound to one storage policy.

    Data contract:
        - Slots are x, y, z, w and are treated uniformly.

    Determinism and edge cases:
        - transform_mat4() is the full 4x4 product, with no divide by w.
        - normalize() returns the zero vector for lengths at or below
          NORMALIZE_MIN_LENGTH.
    """

    storage: StoragePolicy

    def _dst(self, dst: Optional[NumberArray]) -> NumberArray:
        return dst if dst is not None else self.storage.allocate(4)

    def create(
        self, x: float = 0.0, y: float = 0.0, z: float = 0.0, w: float = 0.0
    ) -> Vec4Arg:
        """Create a vector from components."""
        dst: Vec4Arg = self.storage.allocate(4)
        dst[0] = x
        dst[1] = y
        dst[2] = z
        dst[3] = w
        return dst

    def set(
        self, x: float, y: float, z: float, w: float, dst: Optional[Vec4Arg] = None
    ) -> Vec4Arg:
        """Write components into a vector."""
        dst = self._dst(dst)
        dst[0] = x
        dst[1] = y
        dst[2] = z
        dst[3] = w
        return dst

    def ceil(self, v: Vec4Arg, dst: Optional[Vec4Arg] = None) -> Vec4Arg:
        dst = self._dst(dst)
        for i in range(4):
            dst[i] = float(math.ceil(v[i])) if math.isfinite(v[i]) else v[i]
        return dst

    def floor(self, v: Vec4Arg, dst: Optional[Vec4Arg] = None) -> Vec4Arg:
        dst = self._dst(dst)
        for i in range(4):
            dst[i] = float(math.floor(v[i])) if math.isfinite(v[i]) else v[i]
        return dst

    def round(self, v: Vec4Arg, dst: Optional[Vec4Arg] = None) -> Vec4Arg:
        """Round each component to the nearest integer, halves toward +inf."""
        dst = self._dst(dst)
        for i in range(4):
            dst[i] = round_half_up(v[i])
        return dst

    def clamp(
        self,
        v: Vec4Arg,
        min_value: float = 0.0,
        max_value: float = 1.0,
        dst: Optional[Vec4Arg] = None,
    ) -> Vec4Arg:
        """Clamp each component to [min_value, max_value]."""
        dst = self._dst(dst)
        for i in range(4):
            dst[i] = min(max_value, max(min_value, v[i]))
        return dst

    def add(self, a: Vec4Arg, b: Vec4Arg, dst: Optional[Vec4Arg] = None) -> Vec4Arg:
        dst = self._dst(dst)
        for i in range(4):
            dst[i] = a[i] + b[i]
        return dst

    def add_scaled(
        self, a: Vec4Arg, b: Vec4Arg, scale: float, dst: Optional[Vec4Arg] = None
    ) -> Vec4Arg:
        """Add b scaled by a factor to a."""
        dst = self._dst(dst)
        for i in range(4):
            dst[i] = a[i] + b[i] * scale
        return dst

    def subtract(
        self, a: Vec4Arg, b: Vec4Arg, dst: Optional[Vec4Arg] = None
    ) -> Vec4Arg:
        dst = self._dst(dst)
        for i in range(4):
            dst[i] = a[i] - b[i]
        return dst

    def equals_approximately(self, a: Vec4Arg, b: Vec4Arg) -> bool:
        """Check whether every component differs by less than epsilon."""
        eps: float = get_epsilon()
        return bool(all(abs(a[i] - b[i]) < eps for i in range(4)))

    def equals(self, a: Vec4Arg, b: Vec4Arg) -> bool:
        """Check whether every component is exactly equal."""
        return bool(
            a[0] == b[0] and a[1] == b[1] and a[2] == b[2] and a[3] == b[3]
        )

    def lerp(
        self, a: Vec4Arg, b: Vec4Arg, t: float, dst: Optional[Vec4Arg] = None
    ) -> Vec4Arg:
        """Linearly interpolate between two vectors without clamping t."""
        dst = self._dst(dst)
        for i in range(4):
            dst[i] = a[i] + t * (b[i] - a[i])
        return dst

    def lerp_v(
        self, a: Vec4Arg, b: Vec4Arg, t: Vec4Arg, dst: Optional[Vec4Arg] = None
    ) -> Vec4Arg:
        """Interpolate with a separate factor per component."""
        dst = self._dst(dst)
        for i in range(4):
            dst[i] = a[i] + t[i] * (b[i] - a[i])
        return dst

    def max(self, a: Vec4Arg, b: Vec4Arg, dst: Optional[Vec4Arg] = None) -> Vec4Arg:
        dst = self._dst(dst)
        for i in range(4):
            dst[i] = max(a[i], b[i])
        return dst

    def min(self, a: Vec4Arg, b: Vec4Arg, dst: Optional[Vec4Arg] = None) -> Vec4Arg:
        dst = self._dst(dst)
        for i in range(4):
            dst[i] = min(a[i], b[i])
        return dst

    def mul_scalar(
        self, v: Vec4Arg, k: float, dst: Optional[Vec4Arg] = None
    ) -> Vec4Arg:
        """Multiply a vector by a scalar."""
        dst = self._dst(dst)
        for i in range(4):
            dst[i] = v[i] * k
        return dst

    def div_scalar(
        self, v: Vec4Arg, k: float, dst: Optional[Vec4Arg] = None
    ) -> Vec4Arg:
        """Divide a vector by a scalar."""
        dst = self._dst(dst)
        for i in range(4):
            dst[i] = ieee_div(v[i], k)
        return dst

    def inverse(self, v: Vec4Arg, dst: Optional[Vec4Arg] = None) -> Vec4Arg:
        """Return the component-wise reciprocal."""
        dst = self._dst(dst)
        for i in range(4):
            dst[i] = ieee_div(1.0, v[i])
        return dst

    def dot(self, a: Vec4Arg, b: Vec4Arg) -> float:
        """Return the dot product."""
        return a[0] * b[0] + a[1] * b[1] + a[2] * b[2] + a[3] * b[3]

    def length(self, v: Vec4Arg) -> float:
        """Return the length of a vector."""
        return math.sqrt(self.length_sq(v))

    def length_sq(self, v: Vec4Arg) -> float:
        """Return the squared length of a vector."""
        v0: float = v[0]
        v1: float = v[1]
        v2: float = v[2]
        v3: float = v[3]
        return v0 * v0 + v1 * v1 + v2 * v2 + v3 * v3

    def distance(self, a: Vec4Arg, b: Vec4Arg) -> float:
        """Return the distance between two points."""
        return math.sqrt(self.distance_sq(a, b))

    def distance_sq(self, a: Vec4Arg, b: Vec4Arg) -> float:
        """Return the squared distance between two points."""
        dx: float = a[0] - b[0]
        dy: float = a[1] - b[1]
        dz: float = a[2] - b[2]
        dw: float = a[3] - b[3]
        return dx * dx + dy * dy + dz * dz + dw * dw

    def normalize(self, v: Vec4Arg, dst: Optional[Vec4Arg] = None) -> Vec4Arg:
        """Scale a vector to unit length, or zero it when too short."""
        v0: float = v[0]
        v1: float = v[1]
        v2: float = v[2]
        v3: float = v[3]
        length: float = math.sqrt(v0 * v0 + v1 * v1 + v2 * v2 + v3 * v3)

        dst = self._dst(dst)
        if length > NORMALIZE_MIN_LENGTH:
            dst[0] = v0 / length
            dst[1] = v1 / length
            dst[2] = v2 / length
            dst[3] = v3 / length
        else:
            dst[0] = 0.0
            dst[1] = 0.0
            dst[2] = 0.0
            dst[3] = 0.0
        return dst

    def negate(self, v: Vec4Arg, dst: Optional[Vec4Arg] = None) -> Vec4Arg:
        dst = self._dst(dst)
        for i in range(4):
            dst[i] = -v[i]
        return dst

    def copy(self, v: Vec4Arg, dst: Optional[Vec4Arg] = None) -> Vec4Arg:
        dst = self._dst(dst)
        for i in range(4):
            dst[i] = v[i]
        return dst

    def multiply(
        self, a: Vec4Arg, b: Vec4Arg, dst: Optional[Vec4Arg] = None
    ) -> Vec4Arg:
        """Component-wise product."""
        dst = self._dst(dst)
        for i in range(4):
            dst[i] = a[i] * b[i]
        return dst

    def divide(self, a: Vec4Arg, b: Vec4Arg, dst: Optional[Vec4Arg] = None) -> Vec4Arg:
        """Component-wise quotient."""
        dst = self._dst(dst)
        for i in range(4):
            dst[i] = ieee_div(a[i], b[i])
        return dst

    def zero(self, dst: Optional[Vec4Arg] = None) -> Vec4Arg:
        dst = self._dst(dst)
        for i in range(4):
            dst[i] = 0.0
        return dst

    def transform_mat4(
        self, v: Vec4Arg, m: Mat4Arg, dst: Optional[Vec4Arg] = None
    ) -> Vec4Arg:
        """Multiply a vector by a 4x4 matrix."""
        x: float = v[0]
        y: float = v[1]
        z: float = v[2]
        w: float = v[3]

        dst = self._dst(dst)
        dst[0] = m[0] * x + m[4] * y + m[8] * z + m[12] * w
        dst[1] = m[1] * x + m[5] * y + m[9] * z + m[13] * w
        dst[2] = m[2] * x + m[6] * y + m[10] * z + m[14] * w
        dst[3] = m[3] * x + m[7] * y + m[11] * z + m[15] * w
        return dst

    def set_length(
        self, a: Vec4Arg, length: float, dst: Optional[Vec4Arg] = None
    ) -> Vec4Arg:
        """Scale a vector to the given length."""
        dst = self.normalize(a, dst)
        return self.mul_scalar(dst, length, dst)

    def truncate(
        self, a: Vec4Arg, max_length: float, dst: Optional[Vec4Arg] = None
    ) -> Vec4Arg:
        """Shorten a vector to max_length if it is longer."""
        if self.length(a) > max_length:
            return self.set_length(a, max_length, dst)
        return self.copy(a, dst)

    def midpoint(
        self, a: Vec4Arg, b: Vec4Arg, dst: Optional[Vec4Arg] = None
    ) -> Vec4Arg:
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


_CACHE: ApiCache[Vec4Api] = ApiCache("vec4", Vec4Api)


def get_api(storage: Optional[StorageLike] = None) -> Vec4Api:
    """Return the cached vec4 API for a storage kind, or the default storage."""
    return _CACHE.get(storage)
