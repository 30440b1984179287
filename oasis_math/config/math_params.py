################################################################################
#
#  Copyright (C) 2026 Garrett Brown
#  This file is part of OASIS - https://github.com/eigendude/OASIS
#
#  SPDX-License-Identifier: Apache-2.0
#  See DOCS/LICENSING.md for more information.
#
################################################################################
"""Parameters that tune library-wide numeric behavior."""

from __future__ import annotations

import math
from dataclasses import dataclass
from typing import Mapping

from oasis_math.storage import StorageKind


# Tolerance used by approximate comparisons unless configured otherwise
DEFAULT_EPSILON: float = 1e-6


@dataclass(frozen=True, slots=True)
class MathParams:
    """Tunable parameters shared by every operation factory.

    Responsibility:
        Hold the values that change library-wide behavior: the tolerance
        used by approximate comparisons and the storage that the default
        APIs allocate.

    Inputs/outputs:
        - Inputs: keyword arguments or a configuration mapping.
        - Outputs: validated, immutable parameters.

    Public API:
        - defaults()
        - from_dict(params)
        - validate()
        - as_dict()

    Data contract:
        - epsilon: absolute tolerance, finite and >= 0.
        - default_storage: StorageKind used when callers do not pick one.

    Determinism and edge cases:
        - Parameters are immutable; changes produce a new instance.
        - from_dict() rejects unknown keys.
        - An epsilon of 0 is allowed and makes approximate comparisons
          always fail, since they require a strictly smaller difference.
    """

    epsilon: float
    default_storage: StorageKind

    @staticmethod
    def defaults() -> MathParams:
        """Return the stable default parameter set."""
        params: MathParams = MathParams(
            epsilon=DEFAULT_EPSILON,
            default_storage=StorageKind.FLOAT32,
        )
        params.validate()
        return params

    @classmethod
    def from_dict(cls, params: Mapping[str, object]) -> MathParams:
        """Construct parameters from a mapping, rejecting unknown keys."""
        if not isinstance(params, Mapping):
            raise ValueError("params must be a mapping")
        unknown_keys: list[str] = sorted(set(params.keys()) - set(cls._field_order()))
        if unknown_keys:
            raise ValueError(f"unknown parameter: {unknown_keys[0]}")
        defaults: MathParams = cls.defaults()
        result: MathParams = cls(
            epsilon=cls._as_float("epsilon", params.get("epsilon", defaults.epsilon)),
            default_storage=StorageKind.parse(
                params.get("default_storage", defaults.default_storage)  # type: ignore[arg-type]
            ),
        )
        result.validate()
        return result

    def validate(self) -> None:
        """Validate parameters and raise ValueError on failure."""
        if not isinstance(self.epsilon, (int, float)) or isinstance(self.epsilon, bool):
            raise ValueError("epsilon must be a number")
        if not math.isfinite(self.epsilon):
            raise ValueError("epsilon must be finite")
        if self.epsilon < 0.0:
            raise ValueError("epsilon must be non-negative")
        if not isinstance(self.default_storage, StorageKind):
            raise ValueError("default_storage must be a StorageKind")

    def as_dict(self) -> dict[str, object]:
        """Return a JSON-serializable dict representation."""
        return {
            "epsilon": self.epsilon,
            "default_storage": self.default_storage.value,
        }

    @staticmethod
    def _field_order() -> tuple[str, ...]:
        return ("epsilon", "default_storage")

    @staticmethod
    def _as_float(name: str, value: object) -> float:
        if isinstance(value, bool) or not isinstance(value, (int, float)):
            raise ValueError(f"{name} must be a number")
        return float(value)
