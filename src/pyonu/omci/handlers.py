# SPDX-License-Identifier: Apache-2.0
# Copyright (c) 2025 Maurice Garcia

from __future__ import annotations

import logging
from collections.abc import Callable
from struct import Struct
from typing import Final, TypeAlias

from pyonu.lib.constants import U16_CONTENT_LENGTH
from pyonu.lib.types import MibUploadIndex, OmciClassId, OmciContent, OmciFrameBytes
from pyonu.omci.errors import MalformedContentError, MibUploadIndexError, OmciError
from pyonu.omci.frame import OmciResponseFrame
from pyonu.omci.mib_upload import MibUploadSequencer
from pyonu.omci.omci_defs import OmciClass
from pyonu.omci.onu_key import OnuKey
from pyonu.omci.responder_config import OmciResponderSettings
from pyonu.omci.state_store import OnuOmciStateStore

OmciMsgHandler: TypeAlias = Callable[[OmciClassId, OmciContent, OnuKey], OmciFrameBytes]

U16_BE: Struct = Struct("!H")

# Fixed acknowledgement frames
MIB_RESET_ACK: Final[OmciResponseFrame]             = OmciResponseFrame()
MIB_UPLOAD_ACK: Final[OmciResponseFrame]            = OmciResponseFrame()
SET_ACK: Final[OmciResponseFrame]                   = OmciResponseFrame(flags=0x01, response_type=0x00)
CREATE_ACK: Final[OmciResponseFrame]                = OmciResponseFrame(flags=0x01, response_type=0x10, result=0x0001)
GET_ACK: Final[OmciResponseFrame]                   = OmciResponseFrame(response_type=0x2d, result=0x0201,
                                                                        class_id=0x0020, instance_id=0xc000)
GET_ALL_ALARMS_ACK: Final[OmciResponseFrame]        = OmciResponseFrame(class_id=0x0003)
GET_ALL_ALARMS_NEXT_ACK: Final[OmciResponseFrame]   = OmciResponseFrame.template(0x000b, 0x0102, "80")
SYNC_TIME_ACK: Final[OmciResponseFrame]             = OmciResponseFrame(flags=0x01, response_type=0x00)
DELETE_ACK: Final[OmciResponseFrame]                = OmciResponseFrame.template(0x000b, 0x0000, "80", response_type=0x00)
REBOOT_ACK: Final[OmciResponseFrame]                = OmciResponseFrame(response_type=0x00)


class OmciHandlers:
    """
    One handler per OMCI message type.

    Every handler has the signature ``(class_id, content, key) -> bytes`` and
    raises an OmciError subclass on failure. Only MIB reset, MIB upload-next
    and Create touch OnuOmciState; the rest return fixed acknowledgements.
    """

    def __init__(self, store: OnuOmciStateStore,
                 settings: OmciResponderSettings | None = None,
                 sequencer: MibUploadSequencer | None = None) -> None:
        self.logger = logging.getLogger(self.__class__.__name__)
        self.store = store
        self.settings = settings or OmciResponderSettings()
        self.sequencer = sequencer or MibUploadSequencer(
            restore_tcont_after_priority_queue=self.settings.restore_tcont_after_priority_queue)

        if self.settings.num_mib_uploads and self.settings.num_mib_uploads != len(self.sequencer):
            self.logger.warning(
                "Configured MIB upload count %d differs from MIB catalog length %d",
                self.settings.num_mib_uploads, len(self.sequencer))

    @property
    def mib_upload_count(self) -> int:
        """Upload-next commands advertised to the OLT."""
        return self.settings.num_mib_uploads or len(self.sequencer)

    @staticmethod
    def _decode_u16(key: OnuKey, content: OmciContent) -> int:
        if len(content) < U16_CONTENT_LENGTH:
            raise MalformedContentError(key, U16_CONTENT_LENGTH, len(content))
        return int(U16_BE.unpack_from(content)[0])

    def mib_reset(self, class_id: OmciClassId, content: OmciContent, key: OnuKey) -> OmciFrameBytes:
        self.logger.info("%s - Omci MibReset", key)
        self.store.reset(key, include_lifecycle=self.settings.reset_lifecycle)
        return MIB_RESET_ACK.to_bytes()

    def mib_upload(self, class_id: OmciClassId, content: OmciContent, key: OnuKey) -> OmciFrameBytes:
        self.logger.info("%s - Omci MibUpload", key)
        # Bytes 8-9 carry the number of subsequent MibUploadNext commands
        return MIB_UPLOAD_ACK.model_copy(update={"class_id": self.mib_upload_count}).to_bytes()

    def mib_upload_next(self, class_id: OmciClassId, content: OmciContent, key: OnuKey) -> OmciFrameBytes:
        try:
            with self.store.locked(key) as state:
                command_number = MibUploadIndex(self._decode_u16(key, content))
                self.logger.info("%s - Omci MibUploadNext %d", key, command_number)
                return self.sequencer.next(state, command_number)
        except MibUploadIndexError as err:
            self.logger.warning("%s", err)
            raise
        except OmciError as err:
            self.logger.error("%s", err)
            raise

    def create(self, class_id: OmciClassId, content: OmciContent, key: OnuKey) -> OmciFrameBytes:
        if class_id == OmciClass.GEM_PORT_NETWORK_CTP:
            try:
                with self.store.locked(key) as state:
                    gem_port_id = self._decode_u16(key, content)
                    state.assign_gem_port(gem_port_id)
            except OmciError as err:
                self.logger.error("%s", err)
                raise
            self.logger.info("%s - Gem Port Id %d", key, gem_port_id)

        self.logger.info("%s - Omci Create", key)
        return CREATE_ACK.to_bytes()

    def set(self, class_id: OmciClassId, content: OmciContent, key: OnuKey) -> OmciFrameBytes:
        self.logger.info("%s - Omci Set", key)
        return SET_ACK.to_bytes()

    def get(self, class_id: OmciClassId, content: OmciContent, key: OnuKey) -> OmciFrameBytes:
        self.logger.info("%s - Omci Get", key)
        return GET_ACK.to_bytes()

    def get_all_alarms(self, class_id: OmciClassId, content: OmciContent, key: OnuKey) -> OmciFrameBytes:
        self.logger.info("%s - Omci GetAllAlarms", key)
        return GET_ALL_ALARMS_ACK.to_bytes()

    def get_all_alarms_next(self, class_id: OmciClassId, content: OmciContent, key: OnuKey) -> OmciFrameBytes:
        self.logger.info("%s - Omci GetAllAlarmsNext", key)
        return GET_ALL_ALARMS_NEXT_ACK.to_bytes()

    def sync_time(self, class_id: OmciClassId, content: OmciContent, key: OnuKey) -> OmciFrameBytes:
        self.logger.info("%s - Omci syncTime", key)
        return SYNC_TIME_ACK.to_bytes()

    def delete(self, class_id: OmciClassId, content: OmciContent, key: OnuKey) -> OmciFrameBytes:
        self.logger.info("%s - Omci Delete", key)
        return DELETE_ACK.to_bytes()

    def reboot(self, class_id: OmciClassId, content: OmciContent, key: OnuKey) -> OmciFrameBytes:
        self.logger.info("%s - Omci Reboot", key)
        return REBOOT_ACK.to_bytes()
