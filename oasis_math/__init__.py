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
Vector, matrix and quaternion math for real-time graphics

The proxies vec2, vec3, vec4, mat3, mat4 and quat use the active default
storage, 32-bit float arrays unless changed with set_default_type(). The
names ending in "d" are bound to 64-bit float arrays and the names ending in
"n" to plain Python lists.
"""

from oasis_math import utils
from oasis_math.config.math_settings import get_default_type
from oasis_math.config.math_settings import get_epsilon
from oasis_math.config.math_settings import math_settings
from oasis_math.config.math_settings import set_default_type
from oasis_math.config.math_settings import set_epsilon
from oasis_math.default_api import DefaultApi
from oasis_math.mat3_impl import Mat3Api
from oasis_math.mat3_impl import get_api as get_mat3_api
from oasis_math.mat4_impl import Mat4Api
from oasis_math.mat4_impl import get_api as get_mat4_api
from oasis_math.quat_impl import AxisAngle
from oasis_math.quat_impl import QuatApi
from oasis_math.quat_impl import RotationOrder
from oasis_math.quat_impl import get_api as get_quat_api
from oasis_math.storage import StorageKind
from oasis_math.vec2_impl import Vec2Api
from oasis_math.vec2_impl import get_api as get_vec2_api
from oasis_math.vec3_impl import Vec3Api
from oasis_math.vec3_impl import get_api as get_vec3_api
from oasis_math.vec4_impl import Vec4Api
from oasis_math.vec4_impl import get_api as get_vec4_api


vec2: Vec2Api = DefaultApi("vec2", get_vec2_api)  # type: ignore[assignment]
vec3: Vec3Api = DefaultApi("vec3", get_vec3_api)  # type: ignore[assignment]
vec4: Vec4Api = DefaultApi("vec4", get_vec4_api)  # type: ignore[assignment]
mat3: Mat3Api = DefaultApi("mat3", get_mat3_api)  # type: ignore[assignment]
mat4: Mat4Api = DefaultApi("mat4", get_mat4_api)  # type: ignore[assignment]
quat: QuatApi = DefaultApi("quat", get_quat_api)  # type: ignore[assignment]

vec2d: Vec2Api = get_vec2_api(StorageKind.FLOAT64)
vec3d: Vec3Api = get_vec3_api(StorageKind.FLOAT64)
vec4d: Vec4Api = get_vec4_api(StorageKind.FLOAT64)
mat3d: Mat3Api = get_mat3_api(StorageKind.FLOAT64)
mat4d: Mat4Api = get_mat4_api(StorageKind.FLOAT64)
quatd: QuatApi = get_quat_api(StorageKind.FLOAT64)

vec2n: Vec2Api = get_vec2_api(StorageKind.ZERO_ARRAY)
vec3n: Vec3Api = get_vec3_api(StorageKind.ZERO_ARRAY)
vec4n: Vec4Api = get_vec4_api(StorageKind.ZERO_ARRAY)
mat3n: Mat3Api = get_mat3_api(StorageKind.ZERO_ARRAY)
mat4n: Mat4Api = get_mat4_api(StorageKind.ZERO_ARRAY)
quatn: QuatApi = get_quat_api(StorageKind.ZERO_ARRAY)


__all__ = [
    "AxisAngle",
    "RotationOrder",
    "StorageKind",
    "get_default_type",
    "get_epsilon",
    "get_mat3_api",
    "get_mat4_api",
    "get_quat_api",
    "get_vec2_api",
    "get_vec3_api",
    "get_vec4_api",
    "mat3",
    "mat3d",
    "mat3n",
    "mat4",
    "mat4d",
    "mat4n",
    "math_settings",
    "quat",
    "quatd",
    "quatn",
    "set_default_type",
    "set_epsilon",
    "utils",
    "vec2",
    "vec2d",
    "vec2n",
    "vec3",
    "vec3d",
    "vec3n",
    "vec4",
    "vec4d",
    "vec4n",
]
