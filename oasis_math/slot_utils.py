################################################################################
#
#  Copyright (C) 2026 Garrett Brown
#  This file is part of OASIS - https://github.com/eigendude/OASIS
#
#  SPDX-License-Identifier: Apache-2.0
#  See DOCS/LICENSING.md for more information.
#
################################################################################
"""Slot-level helpers shared by the matrix and vector operation sets."""

from __future__ import annotations

import math
from typing import Iterable

from oasis_math.math_types import NumberArray


def copy_slots(src: NumberArray, dst: NumberArray, slots: Iterable[int]) -> None:
    """Copy the listed slots of src into dst."""
    for i in slots:
        dst[i] = src[i]


def write_basis_lengths(m: NumberArray, dst: NumberArray) -> NumberArray:
    """
    Write the lengths of the three basis axes of a matrix into dst

    Both the mat4 layout and the padded mat3 layout keep axis c in slots
    c * 4 .. c * 4 + 2, so this serves either.
    """
    xx: float = m[0]
    xy: float = m[1]
    xz: float = m[2]
    yx: float = m[4]
    yy: float = m[5]
    yz: float = m[6]
    zx: float = m[8]
    zy: float = m[9]
    zz: float = m[10]

    dst[0] = math.sqrt(xx * xx + xy * xy + xz * xz)
    dst[1] = math.sqrt(yx * yx + yy * yy + yz * yz)
    dst[2] = math.sqrt(zx * zx + zy * zy + zz * zz)
    return dst
