# SPDX-License-Identifier: Apache-2.0
# Copyright (c) 2025 Maurice Garcia

from __future__ import annotations

import logging
from collections.abc import Mapping
from types import MappingProxyType

from pyonu.lib.types import OmciClassId, OmciContent, OmciFrameBytes
from pyonu.omci.errors import UnknownMessageTypeError
from pyonu.omci.handlers import OmciHandlers, OmciMsgHandler
from pyonu.omci.omci_defs import OmciMsgType
from pyonu.omci.onu_key import OnuKey
from pyonu.omci.responder_config import OmciResponderSettings
from pyonu.omci.state_store import OnuOmciStateStore


class OmciDispatcher:
    """
    Routes an OMCI request to the handler registered for its message type.

    The registry is built once in the constructor and exposed read-only.
    """

    def __init__(self, store: OnuOmciStateStore | None = None,
                 settings: OmciResponderSettings | None = None) -> None:
        self.logger = logging.getLogger(self.__class__.__name__)
        self.store = store if store is not None else OnuOmciStateStore()
        self.handlers = OmciHandlers(self.store, settings)
        self._registry: Mapping[OmciMsgType, OmciMsgHandler] = MappingProxyType({
            OmciMsgType.MIB_RESET:              self.handlers.mib_reset,
            OmciMsgType.MIB_UPLOAD:             self.handlers.mib_upload,
            OmciMsgType.MIB_UPLOAD_NEXT:        self.handlers.mib_upload_next,
            OmciMsgType.SET:                    self.handlers.set,
            OmciMsgType.CREATE:                 self.handlers.create,
            OmciMsgType.GET:                    self.handlers.get,
            OmciMsgType.GET_ALL_ALARMS:         self.handlers.get_all_alarms,
            OmciMsgType.GET_ALL_ALARMS_NEXT:    self.handlers.get_all_alarms_next,
            OmciMsgType.SYNCHRONIZE_TIME:       self.handlers.sync_time,
            OmciMsgType.DELETE:                 self.handlers.delete,
            OmciMsgType.REBOOT:                 self.handlers.reboot,
        })

    @property
    def registry(self) -> Mapping[OmciMsgType, OmciMsgHandler]:
        return self._registry

    def dispatch(self, message_type: OmciMsgType | int, class_id: OmciClassId | int,
                 content: OmciContent, key: OnuKey) -> OmciFrameBytes:
        """
        Answer one OMCI request.

        Raises
        ------
        UnknownMessageTypeError
            If no handler is registered for ``message_type``.
        OmciError
            Any failure raised by the handler.
        """
        try:
            handler = self._registry[OmciMsgType(message_type)]
        except (ValueError, KeyError):
            self.logger.error("%s - Unsupported OMCI message type %s", key, message_type)
            raise UnknownMessageTypeError(key, int(message_type)) from None
        return handler(OmciClassId(int(class_id)), bytes(content), key)
