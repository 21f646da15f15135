# SPDX-License-Identifier: Apache-2.0
# Copyright (c) 2025 Maurice Garcia

from __future__ import annotations

import threading
from typing import cast

from pydantic import BaseModel, ConfigDict, Field

from pyonu.lib.constants import (
    INITIAL_GEM_PORT_ID,
    INITIAL_PPTP_INSTANCE,
    INITIAL_PRIOR_Q_INSTANCE,
    INITIAL_TCONT_INSTANCE,
    INITIAL_UNI_G_INSTANCE,
    U8_MASK,
    U16_MASK,
)
from pyonu.lib.types import GemPortId, IntfId, OnuId, StringEnum
from pyonu.omci.omci_defs import OnuOmciLifecycle
from pyonu.omci.onu_key import OnuKey


class OnuCounter(StringEnum):
    """Per-ONU 8-bit instance counters, named after their OnuOmciState attribute."""
    UNI_G       = "uni_g_instance"
    TCONT       = "tcont_instance"
    PPTP        = "pptp_instance"
    PRIOR_Q     = "prior_q_instance"


INITIAL_COUNTERS: dict[OnuCounter, int] = {
    OnuCounter.UNI_G:   INITIAL_UNI_G_INSTANCE,
    OnuCounter.TCONT:   INITIAL_TCONT_INSTANCE,
    OnuCounter.PPTP:    INITIAL_PPTP_INSTANCE,
    OnuCounter.PRIOR_Q: INITIAL_PRIOR_Q_INSTANCE,
}


class OnuOmciStateModel(BaseModel):
    """Point-in-time copy of one ONU's OMCI state."""
    model_config = ConfigDict(frozen=True)

    intf_id: int                = Field(..., ge=0, description="OLT PON interface index")
    onu_id: int                 = Field(..., ge=0, description="ONU index on the interface")
    gem_port_id: int            = Field(default=0, ge=0, le=U16_MASK, description="Assigned GEM port id")
    mib_upload_ctr: int         = Field(default=0, ge=0, le=U16_MASK, description="Successful MIB upload-next steps")
    extra_mib_upload_ctr: int   = Field(default=0, ge=0, le=U16_MASK, description="Out-of-range MIB upload-next steps")
    uni_g_instance: int         = Field(default=INITIAL_UNI_G_INSTANCE, ge=0, le=U8_MASK)
    tcont_instance: int         = Field(default=INITIAL_TCONT_INSTANCE, ge=0, le=U8_MASK)
    pptp_instance: int          = Field(default=INITIAL_PPTP_INSTANCE, ge=0, le=U8_MASK)
    prior_q_instance: int       = Field(default=INITIAL_PRIOR_Q_INSTANCE, ge=0, le=U8_MASK)
    lifecycle: OnuOmciLifecycle = Field(default=OnuOmciLifecycle.INCOMPLETE)


class OnuOmciState:
    """
    Mutable OMCI state of one emulated ONU.

    Every read-modify-write must happen while holding ``lock``; the
    OnuOmciStateStore hands the state out through ``locked()`` for that.
    """

    def __init__(self, key: OnuKey) -> None:
        self.key = key
        self.lock = threading.RLock()
        self.gem_port_id: GemPortId = INITIAL_GEM_PORT_ID
        self.mib_upload_ctr: int = 0
        self.extra_mib_upload_ctr: int = 0
        self.uni_g_instance: int = INITIAL_UNI_G_INSTANCE
        self.tcont_instance: int = INITIAL_TCONT_INSTANCE
        self.pptp_instance: int = INITIAL_PPTP_INSTANCE
        self.prior_q_instance: int = INITIAL_PRIOR_Q_INSTANCE
        self.lifecycle: OnuOmciLifecycle = OnuOmciLifecycle.INCOMPLETE

    def counter(self, counter: OnuCounter) -> int:
        return cast(int, getattr(self, counter.value))

    def advance(self, counter: OnuCounter, step: int = 1) -> int:
        """Add ``step`` (may be negative) to an 8-bit counter, wrapping, and return the new value."""
        value = (self.counter(counter) + step) & U8_MASK
        setattr(self, counter.value, value)
        return value

    def count_upload(self) -> None:
        self.mib_upload_ctr = (self.mib_upload_ctr + 1) & U16_MASK

    def count_extra_upload(self) -> None:
        self.extra_mib_upload_ctr = (self.extra_mib_upload_ctr + 1) & U16_MASK

    def assign_gem_port(self, gem_port_id: int) -> None:
        self.gem_port_id = cast(GemPortId, gem_port_id & U16_MASK)
        self.lifecycle = OnuOmciLifecycle.DONE

    def reset(self, include_lifecycle: bool = False) -> None:
        """
        Restore the upload counters and instance counters to their initial values.

        ``gem_port_id`` and ``lifecycle`` are only rolled back when
        ``include_lifecycle`` is set.
        """
        self.mib_upload_ctr = 0
        self.extra_mib_upload_ctr = 0
        for counter, initial in INITIAL_COUNTERS.items():
            setattr(self, counter.value, initial)
        if include_lifecycle:
            self.gem_port_id = INITIAL_GEM_PORT_ID
            self.lifecycle = OnuOmciLifecycle.INCOMPLETE

    def to_model(self) -> OnuOmciStateModel:
        return OnuOmciStateModel(
            intf_id                 = cast(IntfId, self.key.intf_id),
            onu_id                  = cast(OnuId, self.key.onu_id),
            gem_port_id             = self.gem_port_id,
            mib_upload_ctr          = self.mib_upload_ctr,
            extra_mib_upload_ctr    = self.extra_mib_upload_ctr,
            uni_g_instance          = self.uni_g_instance,
            tcont_instance          = self.tcont_instance,
            pptp_instance           = self.pptp_instance,
            prior_q_instance        = self.prior_q_instance,
            lifecycle               = self.lifecycle,
        )
