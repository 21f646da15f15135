# SPDX-License-Identifier: Apache-2.0
# Copyright (c) 2025 Maurice Garcia

from __future__ import annotations

import logging

from pyonu.api.routes.common.status_codes import OmciStatusCode
from pyonu.api.routes.onu.schemas import GemPortResponse, OmciRequest, OmciResponse
from pyonu.lib.types import IntfId, OnuId
from pyonu.omci.dispatch import OmciDispatcher
from pyonu.omci.errors import (
    MalformedContentError,
    MibUploadIndexError,
    OmciError,
    OnuNotFoundError,
    OnuNotReadyError,
    UnknownMessageTypeError,
)
from pyonu.omci.frame import OmciResponseFrame
from pyonu.omci.onu_key import OnuKey
from pyonu.omci.onu_state import OnuOmciStateModel

_ERROR_STATUS: dict[type[OmciError], OmciStatusCode] = {
    OnuNotFoundError:           OmciStatusCode.ONU_NOT_FOUND,
    OnuNotReadyError:           OmciStatusCode.ONU_NOT_READY,
    MibUploadIndexError:        OmciStatusCode.MIB_UPLOAD_INDEX_OUT_OF_RANGE,
    MalformedContentError:      OmciStatusCode.MALFORMED_CONTENT,
    UnknownMessageTypeError:    OmciStatusCode.UNKNOWN_MESSAGE_TYPE,
}


class OnuOmciService:
    """
    Service layer between the ONU router and the OMCI dispatcher.
    """

    def __init__(self, dispatcher: OmciDispatcher) -> None:
        self.logger = logging.getLogger(self.__class__.__name__)
        self.dispatcher = dispatcher

    @staticmethod
    def key(intf_id: int, onu_id: int) -> OnuKey:
        return OnuKey(IntfId(intf_id), OnuId(onu_id))

    def register(self, intf_id: int, onu_id: int) -> OnuOmciStateModel:
        state = self.dispatcher.store.get_or_create(self.key(intf_id, onu_id))
        with state.lock:
            return state.to_model()

    def remove(self, intf_id: int, onu_id: int) -> bool:
        return self.dispatcher.store.remove(self.key(intf_id, onu_id))

    def state(self, intf_id: int, onu_id: int) -> OnuOmciStateModel:
        """Raises OnuNotFoundError for unknown ONUs."""
        return self.dispatcher.store.snapshot(self.key(intf_id, onu_id))

    def gem_port(self, intf_id: int, onu_id: int) -> GemPortResponse:
        """Raises OnuNotFoundError or OnuNotReadyError."""
        gem_port_id = self.dispatcher.store.gem_port_id(intf_id, onu_id)
        return GemPortResponse(intf_id=intf_id, onu_id=onu_id, gem_port_id=gem_port_id)

    def execute(self, intf_id: int, onu_id: int, request: OmciRequest) -> OmciResponse:
        """
        Dispatch ``request`` and wrap the outcome.

        OMCI errors are reported through ``status``/``message`` rather than raised.
        """
        key = self.key(intf_id, onu_id)
        try:
            raw = self.dispatcher.dispatch(request.message_type, request.class_id, request.content_bytes(), key)

        except OmciError as err:
            status = _ERROR_STATUS.get(type(err), OmciStatusCode.FAILURE)
            self.logger.info(f"{key} - {request.message_type.name} failed with {status.name}: {err}")
            return OmciResponse(intf_id=intf_id, onu_id=onu_id, message_type=request.message_type,
                                status=status, message=str(err))

        frame = OmciResponseFrame.from_bytes(raw)
        return OmciResponse(
            intf_id         = intf_id,
            onu_id          = onu_id,
            message_type    = request.message_type,
            frame           = raw.hex(),
            class_id        = frame.class_id,
            instance_id     = frame.instance_id,
        )
