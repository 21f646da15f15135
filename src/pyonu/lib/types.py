# SPDX-License-Identifier: Apache-2.0
# Copyright (c) 2025 Maurice Garcia

from __future__ import annotations

from enum import Enum
from pathlib import Path
from typing import NewType, TypeAlias


# Enum String Type
class StringEnum(str, Enum):
    """Py3.10-compatible StrEnum shim."""
    pass

# ────────────────────────────────────────────────────────────────────────────────
# Paths / filesystem
# ────────────────────────────────────────────────────────────────────────────────
PathLike    = str | Path
FileNameStr = NewType("FileNameStr", str)

# ────────────────────────────────────────────────────────────────────────────────
# PON identifiers
# ────────────────────────────────────────────────────────────────────────────────
IntfId          = NewType("IntfId", int)        # OLT PON port index
OnuId           = NewType("OnuId", int)         # ONU index on a PON port
GemPortId       = NewType("GemPortId", int)     # u16 data-plane port id

# ────────────────────────────────────────────────────────────────────────────────
# OMCI message pieces
# ────────────────────────────────────────────────────────────────────────────────
OmciClassId     = NewType("OmciClassId", int)   # managed-entity class, u16
OmciInstanceId  = NewType("OmciInstanceId", int)
OmciContent: TypeAlias  = bytes                 # opaque message contents
OmciFrameBytes: TypeAlias = bytes               # fixed-size response frame
MibUploadIndex  = NewType("MibUploadIndex", int)

# ────────────────────────────────────────────────────────────────────────────────
# HTTP return code type
# ────────────────────────────────────────────────────────────────────────────────
HttpRtnCode = NewType("HttpRtnCode", int)

# ────────────────────────────────────────────────────────────────────────────────
# Explicit public surface
# ────────────────────────────────────────────────────────────────────────────────
__all__ = [
    # enums
    "StringEnum",
    # paths
    "PathLike", "FileNameStr",
    # pon
    "IntfId", "OnuId", "GemPortId",
    # omci
    "OmciClassId", "OmciInstanceId", "OmciContent", "OmciFrameBytes", "MibUploadIndex",
    # http
    "HttpRtnCode",
]
