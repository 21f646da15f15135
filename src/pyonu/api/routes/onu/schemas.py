# SPDX-License-Identifier: Apache-2.0
# Copyright (c) 2025 Maurice Garcia

"""
Request and response models for the ONU OMCI endpoints.
"""

from __future__ import annotations

from typing import Any

from pydantic import BaseModel, Field, field_validator

from pyonu.api.routes.common.status_codes import OmciStatusCode
from pyonu.lib.constants import U16_MASK
from pyonu.omci.omci_defs import OmciMsgType


class OmciRequest(BaseModel):
    """
    One OMCI request addressed to the ONU in the path.

    ``message_type`` accepts the numeric action code (14) or the enum name
    ('MIB_UPLOAD_NEXT', 'mib_upload_next').
    """
    message_type: OmciMsgType   = Field(..., description="OMCI message type")
    class_id: int               = Field(default=0, ge=0, le=U16_MASK, description="Managed-entity class id")
    content: str                = Field(default="", description="Message contents as a hex string")

    @field_validator("message_type", mode="before")
    @classmethod
    def _message_type_by_name(cls, value: Any) -> Any:
        if isinstance(value, str) and not value.strip().isdigit():
            return OmciMsgType.from_name(value)
        return value

    @field_validator("content")
    @classmethod
    def _content_is_hex(cls, value: str) -> str:
        text = value.replace(" ", "").lower()
        try:
            bytes.fromhex(text)
        except ValueError:
            raise ValueError("content must be a hex string") from None
        return text

    def content_bytes(self) -> bytes:
        return bytes.fromhex(self.content)


class OmciResponse(BaseModel):
    """Response frame produced by the OMCI responder, or the reason it failed."""
    intf_id: int                = Field(..., description="OLT PON interface index")
    onu_id: int                 = Field(..., description="ONU index on the interface")
    message_type: OmciMsgType   = Field(..., description="OMCI message type answered")
    status: OmciStatusCode      = Field(default=OmciStatusCode.SUCCESS, description="Outcome")
    message: str                = Field(default="", description="Error text when status is not SUCCESS")
    frame: str | None           = Field(default=None, description="48-byte response frame as hex")
    class_id: int | None        = Field(default=None, description="Class id field of the response frame")
    instance_id: int | None     = Field(default=None, description="Instance id field of the response frame")


class GemPortResponse(BaseModel):
    intf_id: int        = Field(..., description="OLT PON interface index")
    onu_id: int         = Field(..., description="ONU index on the interface")
    gem_port_id: int    = Field(..., ge=0, le=U16_MASK, description="GEM port id assigned through OMCI Create")
