# SPDX-License-Identifier: Apache-2.0
# Copyright (c) 2025 Maurice Garcia

from __future__ import annotations

from dataclasses import dataclass

from pyonu.lib.types import IntfId, OnuId


@dataclass(frozen=True, slots=True)
class OnuKey:
    """
    Identity of one emulated ONU.

    Attributes
    ----------
    intf_id:
        OLT PON interface (line/port) index.
    onu_id:
        ONU index on that interface.
    """

    intf_id: IntfId
    onu_id: OnuId

    def __str__(self) -> str:
        return f"ONU {{intfid:{self.intf_id}, onuid:{self.onu_id}}}"
