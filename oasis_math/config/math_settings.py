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
Active math parameters for the current execution context

The active MathParams live in a context variable, so a change made in one
thread or asyncio task does not leak into another. New threads start from
MathParams.defaults().
"""

from __future__ import annotations

import contextlib
import dataclasses
import logging
from contextvars import ContextVar
from typing import Iterator
from typing import Optional

from oasis_math.config.math_params import MathParams
from oasis_math.storage import StorageKind
from oasis_math.storage import StorageLike


_LOG: logging.Logger = logging.getLogger(__name__)


_ACTIVE_PARAMS: ContextVar[Optional[MathParams]] = ContextVar(
    "oasis_math_params", default=None
)

_DEFAULT_PARAMS: MathParams = MathParams.defaults()


def current_params() -> MathParams:
    """Return the parameters active in this context."""
    params: Optional[MathParams] = _ACTIVE_PARAMS.get()
    if params is None:
        return _DEFAULT_PARAMS
    return params


def _activate(params: MathParams) -> None:
    params.validate()
    _ACTIVE_PARAMS.set(params)


def get_epsilon() -> float:
    """Return the tolerance used by approximate comparisons."""
    return current_params().epsilon


def set_epsilon(value: float) -> float:
    """Set the comparison tolerance and return the previous value."""
    previous: MathParams = current_params()
    _activate(dataclasses.replace(previous, epsilon=float(value)))
    _LOG.debug("Epsilon changed from %g to %g", previous.epsilon, value)
    return previous.epsilon


def get_default_type() -> StorageKind:
    """Return the storage kind used by the default APIs."""
    return current_params().default_storage


def set_default_type(storage: StorageLike) -> StorageKind:
    """
    Switch the storage used by the default APIs

    Affects vec2, vec3, vec4, mat3, mat4 and quat together.

    Returns:
        The storage kind that was active before the call
    """
    previous: MathParams = current_params()
    kind: StorageKind = StorageKind.parse(storage)
    _activate(dataclasses.replace(previous, default_storage=kind))
    _LOG.debug(
        "Default storage changed from %s to %s",
        previous.default_storage.value,
        kind.value,
    )
    return previous.default_storage


@contextlib.contextmanager
def math_settings(
    epsilon: Optional[float] = None,
    default_storage: Optional[StorageLike] = None,
) -> Iterator[MathParams]:
    """
    Temporarily override parameters for the enclosed block

    The previous parameters are restored on exit, including when the
    block raises.
    """
    params: MathParams = current_params()
    if epsilon is not None:
        params = dataclasses.replace(params, epsilon=float(epsilon))
    if default_storage is not None:
        params = dataclasses.replace(
            params, default_storage=StorageKind.parse(default_storage)
        )
    params.validate()

    token = _ACTIVE_PARAMS.set(params)
    try:
        yield params
    finally:
        _ACTIVE_PARAMS.reset(token)
