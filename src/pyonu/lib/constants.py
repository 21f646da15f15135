# SPDX-License-Identifier: Apache-2.0
# Copyright (c) 2025 Maurice Garcia

from __future__ import annotations

from typing import Final, cast

from pyonu.lib.types import GemPortId, OmciInstanceId

# Fixed response frame size used by every handler
OMCI_FRAME_LENGTH: Final[int]           = 48
OMCI_FRAME_PREFIX_LENGTH: Final[int]    = 4
OMCI_ATTRIBUTE_LENGTH: Final[int]       = 36

U8_MASK: Final[int]  = 0xFF
U16_MASK: Final[int] = 0xFFFF

# Instance-id high byte distinguishing the two numbering spaces
DOWNSTREAM_INSTANCE_BASE: Final[OmciInstanceId] = cast(OmciInstanceId, 0x0000)
UPSTREAM_INSTANCE_BASE: Final[OmciInstanceId]   = cast(OmciInstanceId, 0x8000)

# Initial per-ONU counter values
INITIAL_GEM_PORT_ID: Final[GemPortId]   = cast(GemPortId, 0)
INITIAL_UNI_G_INSTANCE: Final[int]      = 1
INITIAL_PPTP_INSTANCE: Final[int]       = 1
INITIAL_TCONT_INSTANCE: Final[int]      = 0
INITIAL_PRIOR_Q_INSTANCE: Final[int]    = 0

# Bytes of "command number" / "GEM port id" decoded from request contents
U16_CONTENT_LENGTH: Final[int] = 2
