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
Container type aliases shared by the operation factories

Every math value is a flat, indexable container of numbers. Operations
accept any container of the right length, whichever storage produced it.
"""

from __future__ import annotations

from typing import MutableSequence
from typing import Union

import numpy as np
from numpy.typing import NDArray


# Any container an operation can read from or write into
NumberArray = Union[NDArray[np.float32], NDArray[np.float64], MutableSequence[float]]

# 2, 3 or 4 slots
Vec2Arg = NumberArray
Vec3Arg = NumberArray
Vec4Arg = NumberArray

# 12 slots: three groups of four, slots 3, 7 and 11 are padding
Mat3Arg = NumberArray

# 16 slots
Mat4Arg = NumberArray

# 4 slots ordered x, y, z, w
QuatArg = NumberArray
