# SPDX-License-Identifier: Apache-2.0
# Copyright (c) 2025 Maurice Garcia

from __future__ import annotations

from struct import Struct

from pydantic import BaseModel, ConfigDict, Field

from pyonu.lib.constants import (
    OMCI_ATTRIBUTE_LENGTH,
    OMCI_FRAME_LENGTH,
    OMCI_FRAME_PREFIX_LENGTH,
    U8_MASK,
    U16_MASK,
)
from pyonu.lib.types import OmciFrameBytes

FRAME: Struct = Struct("!4sBBHHH36s")

# Response-type marker carried in byte 5 of MIB upload / alarm responses
RESPONSE_TYPE_MARKER: int = 0x02


class OmciResponseFrame(BaseModel):
    """
    Structured view of the fixed 48-byte OMCI response buffer.

    Layout
    ------
    - bytes 0-3   : prefix (zero except for vendor bytes some MIB templates carry)
    - byte  4     : flags
    - byte  5     : response-type marker
    - bytes 6-7   : result word
    - bytes 8-9   : managed-entity class id
    - bytes 10-11 : managed-entity instance id (0x00nn downstream, 0x80nn upstream)
    - bytes 12-47 : attribute mask followed by attribute values, zero padded
    """
    model_config = ConfigDict(frozen=True)

    prefix: bytes       = Field(default=bytes(OMCI_FRAME_PREFIX_LENGTH), min_length=OMCI_FRAME_PREFIX_LENGTH,
                                max_length=OMCI_FRAME_PREFIX_LENGTH, description="Bytes 0-3")
    flags: int          = Field(default=0, ge=0, le=U8_MASK, description="Byte 4")
    response_type: int  = Field(default=RESPONSE_TYPE_MARKER, ge=0, le=U8_MASK, description="Byte 5")
    result: int         = Field(default=0, ge=0, le=U16_MASK, description="Bytes 6-7")
    class_id: int       = Field(default=0, ge=0, le=U16_MASK, description="Managed-entity class id")
    instance_id: int    = Field(default=0, ge=0, le=U16_MASK, description="Managed-entity instance id")
    attributes: bytes   = Field(default=b"", max_length=OMCI_ATTRIBUTE_LENGTH,
                                description="Attribute mask and values")

    @classmethod
    def template(cls, class_id: int, instance_id: int = 0, attributes: str = "",
                 prefix: str = "00000000", flags: int = 0,
                 response_type: int = RESPONSE_TYPE_MARKER, result: int = 0) -> OmciResponseFrame:
        """Build a frame from hex-string attribute and prefix bytes."""
        return cls(
            prefix          = bytes.fromhex(prefix),
            flags           = flags,
            response_type   = response_type,
            result          = result,
            class_id        = class_id,
            instance_id     = instance_id,
            attributes      = bytes.fromhex(attributes),
        )

    @classmethod
    def from_bytes(cls, data: bytes) -> OmciResponseFrame:
        """
        Parse a 48-byte response buffer.

        Raises
        ------
        ValueError
            If ``data`` is not exactly one frame long.
        """
        if len(data) != OMCI_FRAME_LENGTH:
            raise ValueError(f"OMCI response frame must be {OMCI_FRAME_LENGTH} bytes, got {len(data)}")
        prefix, flags, response_type, result, class_id, instance_id, attributes = FRAME.unpack(data)
        return cls(prefix=prefix, flags=flags, response_type=response_type, result=result,
                   class_id=class_id, instance_id=instance_id, attributes=attributes.rstrip(b"\x00"))

    def with_instance_number(self, value: int) -> OmciResponseFrame:
        """Replace the low byte of the instance id, keeping the numbering-space high byte."""
        return self.model_copy(update={"instance_id": (self.instance_id & 0xFF00) | (value & U8_MASK)})

    def with_attribute_byte(self, offset: int, value: int) -> OmciResponseFrame:
        """Overwrite one attribute byte (offset relative to byte 12 of the frame)."""
        if not 0 <= offset < OMCI_ATTRIBUTE_LENGTH:
            raise ValueError(f"Attribute offset out of range: {offset}")
        attrs = bytearray(self.attributes.ljust(offset + 1, b"\x00"))
        attrs[offset] = value & U8_MASK
        return self.model_copy(update={"attributes": bytes(attrs)})

    def to_bytes(self) -> OmciFrameBytes:
        return FRAME.pack(self.prefix, self.flags, self.response_type, self.result,
                          self.class_id, self.instance_id, self.attributes)
