################################################################################
#
#  Copyright (C) 2026 Garrett Brown
#  This file is part of OASIS - https://github.com/eigendude/OASIS
#
#  SPDX-License-Identifier: Apache-2.0
#  See DOCS/LICENSING.md for more information.
#
################################################################################
"""Process-wide registry of operation sets keyed by storage kind."""

from __future__ import annotations

import logging
import threading
from typing import Callable
from typing import Dict
from typing import Generic
from typing import Optional
from typing import TypeVar

from oasis_math.config.math_settings import get_default_type
from oasis_math.storage import StorageKind
from oasis_math.storage import StorageLike
from oasis_math.storage import StoragePolicy
from oasis_math.storage import get_storage_policy


_LOG: logging.Logger = logging.getLogger(__name__)


ApiT = TypeVar("ApiT")


class ApiCache(Generic[ApiT]):
    """Builds one operation set per storage kind and reuses it.

    Responsibility:
        Give every caller asking for the same math type and storage the
        identical API object.

    Inputs/outputs:
        - Inputs: a storage kind, or None for the active default storage.
        - Outputs: the cached API object for that storage.

    Determinism and edge cases:
        - Entries are never evicted.
        - Construction is serialized by a lock, so concurrent first
          requests observe a single instance.
    """

    def __init__(self, name: str, builder: Callable[[StoragePolicy], ApiT]) -> None:
        self._name: str = name
        self._builder: Callable[[StoragePolicy], ApiT] = builder
        self._apis: Dict[StorageKind, ApiT] = {}
        self._lock: threading.Lock = threading.Lock()

    def get(self, storage: Optional[StorageLike] = None) -> ApiT:
        """Return the API for a storage kind, building it on first use."""
        kind: StorageKind = (
            get_default_type() if storage is None else StorageKind.parse(storage)
        )

        api: Optional[ApiT] = self._apis.get(kind)
        if api is not None:
            return api

        with self._lock:
            api = self._apis.get(kind)
            if api is None:
                api = self._builder(get_storage_policy(kind))
                self._apis[kind] = api
                _LOG.debug("Built %s API for %s storage", self._name, kind.value)

        return api

    def cached_kinds(self) -> list[StorageKind]:
        """Return the storage kinds with a built API."""
        with self._lock:
            return list(self._apis.keys())
