################################################################################
#
#  Copyright (C) 2026 Garrett Brown
#  This file is part of OASIS - https://github.com/eigendude/OASIS
#
#  SPDX-License-Identifier: Apache-2.0
#  See DOCS/LICENSING.md for more information.
#
################################################################################
"""Proxies that follow the active default storage."""

from __future__ import annotations

from typing import Any
from typing import Callable

from oasis_math.config.math_settings import get_default_type


class DefaultApi:
    """
    Forwards attribute access to the API of the active default storage

    The target is resolved on every lookup, so set_default_type() and
    math_settings() take effect for proxies that were imported earlier.
    """

    __slots__ = ("_name", "_get_api")

    def __init__(self, name: str, get_api: Callable[..., Any]) -> None:
        self._name: str = name
        self._get_api: Callable[..., Any] = get_api

    def __getattr__(self, attr: str) -> Any:
        # Unset slots land here during copy and pickle
        if attr in DefaultApi.__slots__:
            raise AttributeError(attr)
        return getattr(self._get_api(None), attr)

    def __dir__(self) -> list[str]:
        return dir(self._get_api(None))

    def __repr__(self) -> str:
        return f"<{self._name} api ({get_default_type().value})>"
