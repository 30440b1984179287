################################################################################
#
#  Copyright (C) 2026 Garrett Brown
#  This file is part of OASIS - https://github.com/eigendude/OASIS
#
#  SPDX-License-Identifier: Apache-2.0
#  See DOCS/LICENSING.md for more information.
#
################################################################################
"""Configuration for library-wide numeric behavior."""

from oasis_math.config.math_params import DEFAULT_EPSILON
from oasis_math.config.math_params import MathParams
from oasis_math.config.math_settings import current_params
from oasis_math.config.math_settings import get_default_type
from oasis_math.config.math_settings import get_epsilon
from oasis_math.config.math_settings import math_settings
from oasis_math.config.math_settings import set_default_type
from oasis_math.config.math_settings import set_epsilon


__all__ = [
    "DEFAULT_EPSILON",
    "MathParams",
    "current_params",
    "get_default_type",
    "get_epsilon",
    "math_settings",
    "set_default_type",
    "set_epsilon",
]
