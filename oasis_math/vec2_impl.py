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
Two-component vector operations

Vectors are flat containers of 2 slots. Every operation that produces a
vector takes an optional trailing dst; when dst is None a new vector is
allocated from the API's storage policy, otherwise the result is written
into dst and dst is returned. Any operand may also be passed as dst.
"""

from __future__ import annotations

import math
import random as _random
from dataclasses import dataclass
from typing import Optional

from oasis_math.api_cache import ApiCache
from oasis_math.math_types import Mat3Arg
from oasis_math.math_types import Mat4Arg
from oasis_math.math_types import NumberArray
from oasis_math.math_types import Vec2Arg
from oasis_math.math_types import Vec3Arg
from oasis_math.storage import StorageLike
from oasis_math.storage import StoragePolicy
from oasis_math.utils import NORMALIZE_MIN_LENGTH
from oasis_math.utils import get_epsilon
from oasis_math.utils import ieee_div
from oasis_math.utils import round_half_up
from oasis_math.utils import safe_acos


@dataclass(frozen=True)
class Vec2Api:
    """Vec2 operations bound to one storage policy.

    Responsibility:
        Create, combine and transform 2D vectors, allocating results from a
        single storage policy.

    Data contract:
        - Slot 0 is x, slot 1 is y.
        - Matrix arguments use the mat3 (12 slot) and mat4 (16 slot) layouts
          with translation in the last column group.

    Determinism and edge cases:
        - normalize() returns the zero vector for lengths at or below
          NORMALIZE_MIN_LENGTH.
        - Division by zero follows IEEE-754 and never raises.
        - cross() returns a 3 slot vector with only z populated.
    """

    storage: StoragePolicy

    def _dst(self, dst: Optional[NumberArray], size: int = 2) -> NumberArray:
        return dst if dst is not None else self.storage.allocate(size)

    def create(self, x: float = 0.0, y: float = 0.0) -> Vec2Arg:
        """Create a vector from components."""
        dst: Vec2Arg = self.storage.allocate(2)
        dst[0] = x
        dst[1] = y
        return dst

    def set(self, x: float, y: float, dst: Optional[Vec2Arg] = None) -> Vec2Arg:
        """Write components into a vector."""
        dst = self._dst(dst)
        dst[0] = x
        dst[1] = y
        return dst

    def ceil(self, v: Vec2Arg, dst: Optional[Vec2Arg] = None) -> Vec2Arg:
        """Round each component up."""
        dst = self._dst(dst)
        dst[0] = float(math.ceil(v[0])) if math.isfinite(v[0]) else v[0]
        dst[1] = float(math.ceil(v[1])) if math.isfinite(v[1]) else v[1]
        return dst

    def floor(self, v: Vec2Arg, dst: Optional[Vec2Arg] = None) -> Vec2Arg:
        """Round each component down."""
        dst = self._dst(dst)
        dst[0] = float(math.floor(v[0])) if math.isfinite(v[0]) else v[0]
        dst[1] = float(math.floor(v[1])) if math.isfinite(v[1]) else v[1]
        return dst

    def round(self, v: Vec2Arg, dst: Optional[Vec2Arg] = None) -> Vec2Arg:
        """Round each component to the nearest integer, halves toward +inf."""
        dst = self._dst(dst)
        dst[0] = round_half_up(v[0])
        dst[1] = round_half_up(v[1])
        return dst

    def clamp(
        self,
        v: Vec2Arg,
        min_value: float = 0.0,
        max_value: float = 1.0,
        dst: Optional[Vec2Arg] = None,
    ) -> Vec2Arg:
        """Clamp each component to [min_value, max_value]."""
        dst = self._dst(dst)
        dst[0] = min(max_value, max(min_value, v[0]))
        dst[1] = min(max_value, max(min_value, v[1]))
        return dst

    def add(self, a: Vec2Arg, b: Vec2Arg, dst: Optional[Vec2Arg] = None) -> Vec2Arg:
        """Add two vectors."""
        dst = self._dst(dst)
        dst[0] = a[0] + b[0]
        dst[1] = a[1] + b[1]
        return dst

    def add_scaled(
        self, a: Vec2Arg, b: Vec2Arg, scale: float, dst: Optional[Vec2Arg] = None
    ) -> Vec2Arg:
        """Add b scaled by a factor to a."""
        dst = self._dst(dst)
        dst[0] = a[0] + b[0] * scale
        dst[1] = a[1] + b[1] * scale
        return dst

    def angle(self, a: Vec2Arg, b: Vec2Arg) -> float:
        """Return the angle between two vectors in radians."""
        ax: float = a[0]
        ay: float = a[1]
        bx: float = b[0]
        by: float = b[1]
        mag1: float = math.sqrt(ax * ax + ay * ay)
        mag2: float = math.sqrt(bx * bx + by * by)
        mag: float = mag1 * mag2
        cosine: float = (ax * bx + ay * by) / mag if mag else 0.0
        return safe_acos(cosine)

    def subtract(
        self, a: Vec2Arg, b: Vec2Arg, dst: Optional[Vec2Arg] = None
    ) -> Vec2Arg:
        """Subtract b from a."""
        dst = self._dst(dst)
        dst[0] = a[0] - b[0]
        dst[1] = a[1] - b[1]
        return dst

    def equals_approximately(self, a: Vec2Arg, b: Vec2Arg) -> bool:
        """Check whether every component differs by less than epsilon."""
        eps: float = get_epsilon()
        return bool(abs(a[0] - b[0]) < eps and abs(a[1] - b[1]) < eps)

    def equals(self, a: Vec2Arg, b: Vec2Arg) -> bool:
        """Check whether every component is exactly equal."""
        return bool(a[0] == b[0] and a[1] == b[1])

    def lerp(
        self, a: Vec2Arg, b: Vec2Arg, t: float, dst: Optional[Vec2Arg] = None
    ) -> Vec2Arg:
        """
        Linearly interpolate between two vectors

        t is not clamped; t outside [0, 1] extrapolates.
        """
        dst = self._dst(dst)
        dst[0] = a[0] + t * (b[0] - a[0])
        dst[1] = a[1] + t * (b[1] - a[1])
        return dst

    def lerp_v(
        self, a: Vec2Arg, b: Vec2Arg, t: Vec2Arg, dst: Optional[Vec2Arg] = None
    ) -> Vec2Arg:
        """Interpolate with a separate factor per component."""
        dst = self._dst(dst)
        dst[0] = a[0] + t[0] * (b[0] - a[0])
        dst[1] = a[1] + t[1] * (b[1] - a[1])
        return dst

    def max(self, a: Vec2Arg, b: Vec2Arg, dst: Optional[Vec2Arg] = None) -> Vec2Arg:
        """Component-wise maximum."""
        dst = self._dst(dst)
        dst[0] = max(a[0], b[0])
        dst[1] = max(a[1], b[1])
        return dst

    def min(self, a: Vec2Arg, b: Vec2Arg, dst: Optional[Vec2Arg] = None) -> Vec2Arg:
        """Component-wise minimum."""
        dst = self._dst(dst)
        dst[0] = min(a[0], b[0])
        dst[1] = min(a[1], b[1])
        return dst

    def mul_scalar(
        self, v: Vec2Arg, k: float, dst: Optional[Vec2Arg] = None
    ) -> Vec2Arg:
        """Multiply a vector by a scalar."""
        dst = self._dst(dst)
        dst[0] = v[0] * k
        dst[1] = v[1] * k
        return dst

    def div_scalar(
        self, v: Vec2Arg, k: float, dst: Optional[Vec2Arg] = None
    ) -> Vec2Arg:
        """Divide a vector by a scalar."""
        dst = self._dst(dst)
        dst[0] = ieee_div(v[0], k)
        dst[1] = ieee_div(v[1], k)
        return dst

    def inverse(self, v: Vec2Arg, dst: Optional[Vec2Arg] = None) -> Vec2Arg:
        """Return the component-wise reciprocal."""
        dst = self._dst(dst)
        dst[0] = ieee_div(1.0, v[0])
        dst[1] = ieee_div(1.0, v[1])
        return dst

    def cross(self, a: Vec2Arg, b: Vec2Arg, dst: Optional[Vec3Arg] = None) -> Vec3Arg:
        """
        Compute the cross product of two 2D vectors

        The result is a 3D vector along z.
        """
        z: float = a[0] * b[1] - a[1] * b[0]
        dst = self._dst(dst, 3)
        dst[0] = 0.0
        dst[1] = 0.0
        dst[2] = z
        return dst

    def dot(self, a: Vec2Arg, b: Vec2Arg) -> float:
        """Return the dot product."""
        return a[0] * b[0] + a[1] * b[1]

    def length(self, v: Vec2Arg) -> float:
        """Return the length of a vector."""
        v0: float = v[0]
        v1: float = v[1]
        return math.sqrt(v0 * v0 + v1 * v1)

    def length_sq(self, v: Vec2Arg) -> float:
        """Return the squared length of a vector."""
        v0: float = v[0]
        v1: float = v[1]
        return v0 * v0 + v1 * v1

    def distance(self, a: Vec2Arg, b: Vec2Arg) -> float:
        """Return the distance between two points."""
        dx: float = a[0] - b[0]
        dy: float = a[1] - b[1]
        return math.sqrt(dx * dx + dy * dy)

    def distance_sq(self, a: Vec2Arg, b: Vec2Arg) -> float:
        """Return the squared distance between two points."""
        dx: float = a[0] - b[0]
        dy: float = a[1] - b[1]
        return dx * dx + dy * dy

    def normalize(self, v: Vec2Arg, dst: Optional[Vec2Arg] = None) -> Vec2Arg:
        """Scale a vector to unit length, or zero it when too short."""
        v0: float = v[0]
        v1: float = v[1]
        length: float = math.sqrt(v0 * v0 + v1 * v1)

        dst = self._dst(dst)
        if length > NORMALIZE_MIN_LENGTH:
            dst[0] = v0 / length
            dst[1] = v1 / length
        else:
            dst[0] = 0.0
            dst[1] = 0.0
        return dst

    def negate(self, v: Vec2Arg, dst: Optional[Vec2Arg] = None) -> Vec2Arg:
        """Negate each component."""
        dst = self._dst(dst)
        dst[0] = -v[0]
        dst[1] = -v[1]
        return dst

    def copy(self, v: Vec2Arg, dst: Optional[Vec2Arg] = None) -> Vec2Arg:
        """Copy a vector."""
        dst = self._dst(dst)
        dst[0] = v[0]
        dst[1] = v[1]
        return dst

    def multiply(
        self, a: Vec2Arg, b: Vec2Arg, dst: Optional[Vec2Arg] = None
    ) -> Vec2Arg:
        """Component-wise product."""
        dst = self._dst(dst)
        dst[0] = a[0] * b[0]
        dst[1] = a[1] * b[1]
        return dst

    def divide(self, a: Vec2Arg, b: Vec2Arg, dst: Optional[Vec2Arg] = None) -> Vec2Arg:
        """Component-wise quotient."""
        dst = self._dst(dst)
        dst[0] = ieee_div(a[0], b[0])
        dst[1] = ieee_div(a[1], b[1])
        return dst

    def random(self, scale: float = 1.0, dst: Optional[Vec2Arg] = None) -> Vec2Arg:
        """Return a vector of the given length pointing in a random direction."""
        angle: float = _random.random() * 2.0 * math.pi
        dst = self._dst(dst)
        dst[0] = math.cos(angle) * scale
        dst[1] = math.sin(angle) * scale
        return dst

    def zero(self, dst: Optional[Vec2Arg] = None) -> Vec2Arg:
        """Set every component to zero."""
        dst = self._dst(dst)
        dst[0] = 0.0
        dst[1] = 0.0
        return dst

    def transform_mat4(
        self, v: Vec2Arg, m: Mat4Arg, dst: Optional[Vec2Arg] = None
    ) -> Vec2Arg:
        """Transform a point by a 4x4 matrix, treating z as 0 and w as 1."""
        x: float = v[0]
        y: float = v[1]
        dst = self._dst(dst)
        dst[0] = x * m[0] + y * m[4] + m[12]
        dst[1] = x * m[1] + y * m[5] + m[13]
        return dst

    def transform_mat3(
        self, v: Vec2Arg, m: Mat3Arg, dst: Optional[Vec2Arg] = None
    ) -> Vec2Arg:
        """Transform a point by a 3x3 matrix, treating z as 1."""
        x: float = v[0]
        y: float = v[1]
        dst = self._dst(dst)
        dst[0] = m[0] * x + m[4] * y + m[8]
        dst[1] = m[1] * x + m[5] * y + m[9]
        return dst

    def rotate(
        self, a: Vec2Arg, b: Vec2Arg, rad: float, dst: Optional[Vec2Arg] = None
    ) -> Vec2Arg:
        """Rotate point a around origin b by an angle in radians."""
        p0: float = a[0] - b[0]
        p1: float = a[1] - b[1]
        sin_c: float = math.sin(rad)
        cos_c: float = math.cos(rad)
        b0: float = b[0]
        b1: float = b[1]

        dst = self._dst(dst)
        dst[0] = p0 * cos_c - p1 * sin_c + b0
        dst[1] = p0 * sin_c + p1 * cos_c + b1
        return dst

    def set_length(
        self, a: Vec2Arg, length: float, dst: Optional[Vec2Arg] = None
    ) -> Vec2Arg:
        """Scale a vector to the given length."""
        dst = self.normalize(a, dst)
        return self.mul_scalar(dst, length, dst)

    def truncate(
        self, a: Vec2Arg, max_length: float, dst: Optional[Vec2Arg] = None
    ) -> Vec2Arg:
        """Shorten a vector to max_length if it is longer."""
        if self.length(a) > max_length:
            return self.set_length(a, max_length, dst)
        return self.copy(a, dst)

    def midpoint(
        self, a: Vec2Arg, b: Vec2Arg, dst: Optional[Vec2Arg] = None
    ) -> Vec2Arg:
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


_CACHE: ApiCache[Vec2Api] = ApiCache("vec2", Vec2Api)


def get_api(storage: Optional[StorageLike] = None) -> Vec2Api:
    """Return the cached vec2 API for a storage kind, or the default storage."""
    return _CACHE.get(storage)
