# SPDX-License-Identifier: Apache-2.0
# Copyright (c) 2025 Maurice Garcia

from __future__ import annotations

import logging
from enum import Enum
from http import HTTPStatus
from typing import Annotated

from fastapi import APIRouter, HTTPException, Path

from pyonu.api.routes.onu.schemas import GemPortResponse, OmciRequest, OmciResponse
from pyonu.api.routes.onu.service import OnuOmciService
from pyonu.lib.fastapi_constants import FAST_API_RESPONSE
from pyonu.omci.dispatch import OmciDispatcher
from pyonu.omci.errors import OnuNotFoundError, OnuNotReadyError
from pyonu.omci.onu_state import OnuOmciStateModel

IntfIdPath = Annotated[int, Path(ge=0, description="OLT PON interface index")]
OnuIdPath = Annotated[int, Path(ge=0, description="ONU index on the interface")]


class OnuRouter:
    """
    FastAPI router for emulated ONU endpoints:
      - PUT    /onu/{intf_id}/{onu_id}          : Register an ONU
      - DELETE /onu/{intf_id}/{onu_id}          : Remove an ONU
      - GET    /onu/{intf_id}/{onu_id}/state    : OMCI state snapshot
      - GET    /onu/{intf_id}/{onu_id}/gem-port : Assigned GEM port id
      - POST   /onu/{intf_id}/{onu_id}/omci     : Answer one OMCI request
    """
    def __init__(
        self,
        dispatcher: OmciDispatcher,
        prefix: str = "/onu",
        tags: list[str | Enum] | None = None) -> None:
        if tags is None:
            tags = ["ONU OMCI"]
        self.router = APIRouter(prefix=prefix, tags=tags)
        self.logger = logging.getLogger(__name__)
        self.service = OnuOmciService(dispatcher)
        self._register_routes()

    def _register_routes(self) -> None:
        @self.router.put("/{intf_id}/{onu_id}",
                         response_model=OnuOmciStateModel,
                         summary="Register an emulated ONU",
                         responses=FAST_API_RESPONSE,)
        def register_onu(intf_id: IntfIdPath, onu_id: OnuIdPath) -> OnuOmciStateModel:
            """
            **Register an Emulated ONU**

            Creates OMCI state for the ONU if it does not exist yet and returns its snapshot.
            Registering an existing ONU leaves its state untouched.
            """
            self.logger.info(f"Registering ONU intf={intf_id} onu={onu_id}")
            return self.service.register(intf_id, onu_id)

        @self.router.delete("/{intf_id}/{onu_id}",
                            summary="Remove an emulated ONU",
                            responses=FAST_API_RESPONSE,)
        def remove_onu(intf_id: IntfIdPath, onu_id: OnuIdPath) -> dict[str, bool]:
            if not self.service.remove(intf_id, onu_id):
                raise HTTPException(status_code=HTTPStatus.NOT_FOUND,
                                    detail=f"ONU {{intfid:{intf_id}, onuid:{onu_id}}} not found")
            return {"removed": True}

        @self.router.get("/{intf_id}/{onu_id}/state",
                         response_model=OnuOmciStateModel,
                         summary="Retrieve ONU OMCI state",
                         responses=FAST_API_RESPONSE,)
        def get_state(intf_id: IntfIdPath, onu_id: OnuIdPath) -> OnuOmciStateModel:
            """
            **Retrieve ONU OMCI State**

            Returns the MIB upload counters, instance counters, GEM port id and lifecycle.
            """
            try:
                return self.service.state(intf_id, onu_id)
            except OnuNotFoundError as exc:
                raise HTTPException(status_code=HTTPStatus.NOT_FOUND, detail=str(exc)) from exc

        @self.router.get("/{intf_id}/{onu_id}/gem-port",
                         response_model=GemPortResponse,
                         summary="Retrieve the ONU GEM port id",
                         responses=FAST_API_RESPONSE,)
        def get_gem_port(intf_id: IntfIdPath, onu_id: OnuIdPath) -> GemPortResponse:
            """
            **Retrieve the ONU GEM Port Id**

            Available once the OLT has created a GEM port network CTP on the ONU.
            """
            try:
                return self.service.gem_port(intf_id, onu_id)
            except OnuNotFoundError as exc:
                raise HTTPException(status_code=HTTPStatus.NOT_FOUND, detail=str(exc)) from exc
            except OnuNotReadyError as exc:
                raise HTTPException(status_code=HTTPStatus.CONFLICT, detail=str(exc)) from exc

        @self.router.post("/{intf_id}/{onu_id}/omci",
                          response_model=OmciResponse,
                          summary="Answer an OMCI request",
                          responses=FAST_API_RESPONSE,)
        def omci_request(intf_id: IntfIdPath, onu_id: OnuIdPath,
                         request: OmciRequest) -> OmciResponse:
            """
            **Answer an OMCI Request**

            Runs the request through the OMCI responder and returns the 48-byte response
            frame as hex. OMCI failures are reported in `status` and `message`.
            """
            return self.service.execute(intf_id, onu_id, request)
