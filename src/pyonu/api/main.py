# SPDX-License-Identifier: Apache-2.0
# Copyright (c) 2025 Maurice Garcia

from __future__ import annotations

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from pyonu.api.routes.onu.router import OnuRouter
from pyonu.omci.dispatch import OmciDispatcher
from pyonu.omci.responder_config import OmciResponderSettings
from pyonu.startup.startup import StartUp
from pyonu.version import __version__

StartUp.initialize()

fast_api_description = """
**OMCI ONU Responder Emulator**

PyONU answers the OMCI requests an OLT sends while bringing up emulated ONUs,
so the OLT can run its MIB reset, MIB upload and GEM port provisioning
sequence without real hardware.

**Core capabilities include:**
- MIB reset, MIB upload and the full 67-entry MIB upload-next walk
- GEM port id capture from OMCI Create on the GEM port network CTP
- Fixed acknowledgements for Set, Get, Delete, Reboot, alarms and time sync
- Per-ONU OMCI state inspection (counters, GEM port id, lifecycle)
"""

app = FastAPI(
    title="PyONU REST API",
    version=__version__,
    description=fast_api_description,
    openapi_url="/openapi.json",
    docs_url="/docs",
    redoc_url="/redoc",
)


@app.get("/health", tags=["health"])
def health() -> dict[str, str]:
    """Lightweight health endpoint for probes."""
    return {"status": "ok", "version": __version__}

app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

# One dispatcher (and therefore one OnuOmciStateStore) per process
dispatcher = OmciDispatcher(settings=OmciResponderSettings.from_system_config())
app.include_router(OnuRouter(dispatcher).router)
