# SPDX-License-Identifier: Apache-2.0
# Copyright (c) 2025 Maurice Garcia

from __future__ import annotations

from enum import Enum, IntEnum


class OmciMsgType(IntEnum):
    """
    OMCI message types (ITU-T G.988 action codes) answered by the responder.
    """
    CREATE              = 4
    DELETE              = 6
    SET                 = 8
    GET                 = 9
    GET_ALL_ALARMS      = 11
    GET_ALL_ALARMS_NEXT = 12
    MIB_UPLOAD          = 13
    MIB_UPLOAD_NEXT     = 14
    MIB_RESET           = 15
    SYNCHRONIZE_TIME    = 24
    REBOOT              = 25

    @classmethod
    def from_name(cls, name: str) -> OmciMsgType:
        """
        Lookup a message type by enum name, case-insensitive ('mib_upload_next', 'MIB_RESET').

        Raises:
            ValueError: If the name does not match any member.
        """
        key = name.strip().upper().replace("-", "_")
        try:
            return cls[key]
        except KeyError:
            raise ValueError(f"Unknown OMCI message type name: {name}") from None


class OmciClass(IntEnum):
    """
    Managed-entity class identifiers advertised or handled by the emulated ONU.
    """
    ONT_DATA                = 2
    CIRCUIT_PACK            = 6
    PPTP_ETHERNET_UNI       = 11
    ONT2_G                  = 257
    T_CONT                  = 262
    ANI_G                   = 263
    UNI_G                   = 264
    GEM_PORT_NETWORK_CTP    = 268
    PRIORITY_QUEUE          = 277
    TRAFFIC_SCHEDULER       = 278


class OnuOmciLifecycle(Enum):
    """
    Coarse OMCI provisioning state of an ONU.

    INCOMPLETE until a GEM port network CTP has been created, DONE afterwards.
    """
    INCOMPLETE  = 0
    DONE        = 1

    def __str__(self) -> str:
        return self.name.lower()
