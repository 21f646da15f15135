# SPDX-License-Identifier: Apache-2.0
# Copyright (c) 2025 Maurice Garcia

from __future__ import annotations

import logging
import threading
from collections.abc import Iterator
from contextlib import contextmanager

from pyonu.lib.types import GemPortId, IntfId, OnuId
from pyonu.omci.errors import OnuNotFoundError, OnuNotReadyError
from pyonu.omci.omci_defs import OnuOmciLifecycle
from pyonu.omci.onu_key import OnuKey
from pyonu.omci.onu_state import OnuOmciState, OnuOmciStateModel


class OnuOmciStateStore:
    """
    Owned registry of per-ONU OMCI state.

    Locking
    -------
    - ``_lock`` only guards the key -> state mapping and is held for lookups.
    - Each OnuOmciState carries its own re-entrant lock; ``locked()`` holds it
      for the duration of a request so one ONU is served by one request at a
      time while different ONUs proceed in parallel.
    """

    def __init__(self) -> None:
        self.logger = logging.getLogger(self.__class__.__name__)
        self._lock = threading.Lock()
        self._states: dict[OnuKey, OnuOmciState] = {}

    def __len__(self) -> int:
        with self._lock:
            return len(self._states)

    def __contains__(self, key: object) -> bool:
        with self._lock:
            return key in self._states

    def keys(self) -> list[OnuKey]:
        with self._lock:
            return list(self._states)

    def get_or_create(self, key: OnuKey) -> OnuOmciState:
        with self._lock:
            state = self._states.get(key)
            if state is None:
                state = OnuOmciState(key)
                self._states[key] = state
                self.logger.info("%s - Created OnuOmciState", key)
            return state

    def get(self, key: OnuKey) -> OnuOmciState | None:
        with self._lock:
            return self._states.get(key)

    def remove(self, key: OnuKey) -> bool:
        with self._lock:
            state = self._states.pop(key, None)
        if state is None:
            return False
        self.logger.info("%s - Removed OnuOmciState", key)
        return True

    @contextmanager
    def locked(self, key: OnuKey) -> Iterator[OnuOmciState]:
        """
        Yield the ONU's state while holding its lock.

        Raises
        ------
        OnuNotFoundError
            If no state exists for ``key``.
        """
        state = self.get(key)
        if state is None:
            raise OnuNotFoundError(key)
        with state.lock:
            yield state

    def reset(self, key: OnuKey, include_lifecycle: bool = False) -> bool:
        """Reset the ONU's counters in place; returns False when the ONU is unknown."""
        state = self.get(key)
        if state is None:
            return False
        with state.lock:
            state.reset(include_lifecycle=include_lifecycle)
        self.logger.info("%s - Reseting OnuOmciState", key)
        return True

    def snapshot(self, key: OnuKey) -> OnuOmciStateModel:
        with self.locked(key) as state:
            return state.to_model()

    def lifecycle(self, intf_id: IntfId | int, onu_id: OnuId | int) -> OnuOmciLifecycle:
        """Lifecycle of the ONU, INCOMPLETE when the ONU is unknown."""
        state = self.get(OnuKey(IntfId(intf_id), OnuId(onu_id)))
        if state is None:
            return OnuOmciLifecycle.INCOMPLETE
        with state.lock:
            return state.lifecycle

    def gem_port_id(self, intf_id: IntfId | int, onu_id: OnuId | int) -> GemPortId:
        """
        GEM port id assigned through OMCI Create.

        Raises
        ------
        OnuNotFoundError
            If the ONU is unknown.
        OnuNotReadyError
            If no GEM port network CTP has been created yet.
        """
        key = OnuKey(IntfId(intf_id), OnuId(onu_id))
        with self.locked(key) as state:
            if state.lifecycle != OnuOmciLifecycle.DONE:
                raise OnuNotReadyError(key)
            return state.gem_port_id
