################################################################################
#
#  Copyright (C) 2026 Garrett Brown
#  This file is part of OASIS - https://github.com/eigendude/OASIS
#
#  SPDX-License-Identifier: Apache-2.0
#  See DOCS/LICENSING.md for more information.
#
################################################################################
"""Storage policies backing vectors, matrices and quaternions."""

from __future__ import annotations

import enum
from dataclasses import dataclass
from typing import Optional
from typing import Union

import numpy as np

from oasis_math.math_types import NumberArray


class StorageKind(enum.Enum):
    """
    Enumerates the numeric containers the library can allocate

    Attributes:
        FLOAT32: Fixed-length numpy array of 32-bit floats
        FLOAT64: Fixed-length numpy array of 64-bit floats
        ZERO_ARRAY: Python list initialized with zeros
    """

    FLOAT32 = "float32"
    FLOAT64 = "float64"
    ZERO_ARRAY = "zero_array"

    @classmethod
    def parse(cls, value: StorageLike) -> StorageKind:
        """Resolve a storage kind from an enum, string or container type."""
        if isinstance(value, StorageKind):
            return value
        if isinstance(value, str):
            try:
                return cls(value.lower())
            except ValueError:
                raise ValueError(f"Unknown storage kind: {value}") from None
        if value is list:
            return cls.ZERO_ARRAY
        if value is np.float32:
            return cls.FLOAT32
        if value is np.float64 or value is float:
            return cls.FLOAT64
        raise ValueError(f"Unknown storage kind: {value!r}")


# Anything StorageKind.parse() accepts
StorageLike = Union[StorageKind, str, type]


@dataclass(frozen=True, slots=True)
class StoragePolicy:
    """Describes and allocates one family of numeric containers.

    Responsibility:
        Own the allocation of every value an operation factory creates, so
        each factory produces containers of exactly one kind.

    Data contract:
        - kind identifies the policy and is the cache key for factories.
        - dtype is the numpy element type, or None for list storage.
        - fixed_length is False only for list storage, which may grow.
        - zero_filled is True for all policies; fresh containers read as 0.

    Determinism and edge cases:
        - allocate() never fails for a positive size.
    """

    kind: StorageKind
    dtype: Optional[type]
    fixed_length: bool
    zero_filled: bool

    def allocate(self, size: int) -> NumberArray:
        """Return a new zero-filled container with the given number of slots."""
        if self.dtype is None:
            return [0.0] * size
        return np.zeros(size, dtype=self.dtype)


_POLICIES: dict[StorageKind, StoragePolicy] = {
    StorageKind.FLOAT32: StoragePolicy(
        kind=StorageKind.FLOAT32,
        dtype=np.float32,
        fixed_length=True,
        zero_filled=True,
    ),
    StorageKind.FLOAT64: StoragePolicy(
        kind=StorageKind.FLOAT64,
        dtype=np.float64,
        fixed_length=True,
        zero_filled=True,
    ),
    StorageKind.ZERO_ARRAY: StoragePolicy(
        kind=StorageKind.ZERO_ARRAY,
        dtype=None,
        fixed_length=False,
        zero_filled=True,
    ),
}


def get_storage_policy(storage: StorageLike) -> StoragePolicy:
    """Return the shared policy object for a storage kind."""
    return _POLICIES[StorageKind.parse(storage)]
