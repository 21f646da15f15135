# SPDX-License-Identifier: Apache-2.0
# Copyright (c) 2025 Maurice Garcia

from __future__ import annotations

import logging
from collections.abc import Sequence

from pyonu.lib.types import MibUploadIndex, OmciFrameBytes
from pyonu.omci.errors import MibUploadIndexError
from pyonu.omci.frame import OmciResponseFrame
from pyonu.omci.mib_catalog import MIB_UPLOAD_CATALOG, CounterStamp, MibEntityDescriptor
from pyonu.omci.onu_state import OnuOmciState


class MibUploadSequencer:
    """
    Resolves MIB upload-next command numbers against the MIB catalog.

    The sequencer keeps no position of its own: every response is stamped from
    the counters held in OnuOmciState. Callers issue command numbers 0, 1, 2,
    ... in order; replaying a number re-stamps with the counters as they are
    now, so the response is not guaranteed to match the first one.
    """

    def __init__(self,
                 catalog: Sequence[MibEntityDescriptor] = MIB_UPLOAD_CATALOG,
                 restore_tcont_after_priority_queue: bool = False) -> None:
        self.logger = logging.getLogger(self.__class__.__name__)
        self._catalog: tuple[MibEntityDescriptor, ...] = tuple(catalog)
        self._restore = restore_tcont_after_priority_queue

    def __len__(self) -> int:
        return len(self._catalog)

    @property
    def catalog(self) -> tuple[MibEntityDescriptor, ...]:
        return self._catalog

    def descriptor(self, command_number: MibUploadIndex | int) -> MibEntityDescriptor | None:
        if 0 <= command_number < len(self._catalog):
            return self._catalog[command_number]
        return None

    def next(self, state: OnuOmciState, command_number: MibUploadIndex | int) -> OmciFrameBytes:
        """
        Build the response for one upload-next command.

        The caller must hold ``state.lock``.

        Raises
        ------
        MibUploadIndexError
            If ``command_number`` is outside the catalog. ``extra_mib_upload_ctr``
            is incremented; ``mib_upload_ctr`` is left unchanged.
        """
        descriptor = self.descriptor(command_number)
        if descriptor is None:
            state.count_extra_upload()
            raise MibUploadIndexError(state.key, int(command_number),
                                      state.mib_upload_ctr, state.extra_mib_upload_ctr)

        self.logger.debug("%s - MibUploadNext %d -> %s", state.key, command_number, descriptor.name)

        frame = descriptor.frame
        for stamp in descriptor.stamps:
            frame = self._apply(state, stamp, frame)

        state.count_upload()
        return frame.to_bytes()

    def _apply(self, state: OnuOmciState, stamp: CounterStamp, frame: OmciResponseFrame) -> OmciResponseFrame:
        if stamp.pre_step:
            state.advance(stamp.counter, stamp.pre_step)

        value = state.counter(stamp.counter)
        if stamp.instance:
            frame = frame.with_instance_number(value)
        for offset in stamp.attribute_offsets:
            frame = frame.with_attribute_byte(offset, value)

        if stamp.post_step:
            state.advance(stamp.counter, stamp.post_step)
        if stamp.restorable and self._restore and stamp.pre_step:
            state.advance(stamp.counter, -stamp.pre_step)
        return frame
