# SPDX-License-Identifier: Apache-2.0
# Copyright (c) 2025 Maurice Garcia

from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field

from pyonu.config.system_config_settings import SystemConfigSettings
from pyonu.lib.constants import U16_MASK


class OmciResponderSettings(BaseModel):
    """Behavior switches of the OMCI responder."""
    model_config = ConfigDict(frozen=True)

    num_mib_uploads: int                        = Field(default=0, ge=0, le=U16_MASK,
                                                        description="Upload-next count advertised by MIB upload; 0 derives it from the catalog")
    restore_tcont_after_priority_queue: bool    = Field(default=False,
                                                        description="Undo the T-CONT step-back after each downstream priority-queue entry")
    reset_lifecycle: bool                       = Field(default=False,
                                                        description="MIB reset also clears the GEM port id and lifecycle")

    @classmethod
    def from_system_config(cls) -> OmciResponderSettings:
        return cls(
            num_mib_uploads                     = SystemConfigSettings.num_mib_uploads(),
            restore_tcont_after_priority_queue  = SystemConfigSettings.restore_tcont_after_priority_queue(),
            reset_lifecycle                     = SystemConfigSettings.reset_lifecycle(),
        )
