################################################################################
#
#  Copyright (C) 2026 Garrett Brown
#  This file is part of OASIS - https://github.com/eigendude/OASIS
#
#  SPDX-License-Identifier: Apache-2.0
#  See DOCS/LICENSING.md for more information.
#
################################################################################
"""Shared pytest fixtures."""

from __future__ import annotations

from typing import Iterator

import pytest

from oasis_math.config.math_settings import math_settings


@pytest.fixture(autouse=True)
def restore_math_settings() -> Iterator[None]:
    """Undo epsilon and default storage changes made by a test."""
    with math_settings():
        yield
