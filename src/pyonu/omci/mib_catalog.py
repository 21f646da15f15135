# SPDX-License-Identifier: Apache-2.0
# Copyright (c) 2025 Maurice Garcia

"""
Ordered catalog of the managed entities reported during an OMCI MIB upload.

Entry N of ``MIB_UPLOAD_CATALOG`` answers MIB upload-next command number N.
Counter-driven entries declare how per-ONU instance counters are stamped into
the response and how they advance; ``MibUploadSequencer`` applies them.
"""

from __future__ import annotations

from enum import Enum
from typing import Final

from pydantic import BaseModel, ConfigDict, Field, model_validator

from pyonu.lib.constants import (
    DOWNSTREAM_INSTANCE_BASE,
    OMCI_ATTRIBUTE_LENGTH,
    UPSTREAM_INSTANCE_BASE,
)
from pyonu.omci.frame import OmciResponseFrame
from pyonu.omci.omci_defs import OmciClass
from pyonu.omci.onu_state import OnuCounter


class InstanceRule(Enum):
    """How a catalog entry obtains its instance numbering."""
    STATIC              = "static"              # template sent as-is
    COUNTER_STAMPED     = "counter_stamped"     # stamp a counter (optionally pre-incremented)
    POST_INCREMENT      = "post_increment"      # stamp a counter, then advance it
    SHARED_REFERENCE    = "shared_reference"    # stamp own counter plus a related family's counter


class CounterStamp(BaseModel):
    """
    One counter written into a response frame.

    Order of operations: apply ``pre_step``, write the counter value into the
    instance number and/or attribute bytes, apply ``post_step``. When
    ``restorable`` is set and the responder is configured to restore, the
    ``pre_step`` is undone after writing.
    """
    model_config = ConfigDict(frozen=True)

    counter: OnuCounter
    instance: bool                      = Field(default=False, description="Write into the instance id low byte")
    attribute_offsets: tuple[int, ...]  = Field(default=(), description="Attribute byte offsets to write")
    pre_step: int                       = 0
    post_step: int                      = 0
    restorable: bool                    = False

    @model_validator(mode="after")
    def _check_targets(self) -> CounterStamp:
        if not self.instance and not self.attribute_offsets:
            raise ValueError(f"CounterStamp for {self.counter.value} has no target")
        for offset in self.attribute_offsets:
            if not 0 <= offset < OMCI_ATTRIBUTE_LENGTH:
                raise ValueError(f"Attribute offset out of range: {offset}")
        return self


class MibEntityDescriptor(BaseModel):
    """Catalog entry: a response frame template plus its instance-assignment rule."""
    model_config = ConfigDict(frozen=True)

    name: str
    frame: OmciResponseFrame
    rule: InstanceRule                  = InstanceRule.STATIC
    stamps: tuple[CounterStamp, ...]    = ()

    @model_validator(mode="after")
    def _check_rule(self) -> MibEntityDescriptor:
        if (self.rule == InstanceRule.STATIC) != (not self.stamps):
            raise ValueError(f"{self.name}: rule {self.rule.value} does not match {len(self.stamps)} stamp(s)")
        return self

    @property
    def class_id(self) -> int:
        return self.frame.class_id


# Priority-queue related-port bytes that point at the owning T-CONT
PRIOR_Q_RELATED_PORT_OFFSETS: Final[tuple[int, ...]] = (12, 16)
# Traffic-scheduler T-CONT pointer low byte
TRAFFIC_SCHEDULER_TCONT_OFFSET: Final[int] = 3

NUM_PPTP: Final[int]            = 4
NUM_TCONT: Final[int]           = 8
NUM_UNI_G: Final[int]           = 4
NUM_PRIOR_Q_GROUPS: Final[int]  = 8
NUM_TRAFFIC_SCHEDULER: Final[int] = 8

PRIOR_Q_MASK_ATTRIBUTES: Final[str] = "000fffffffffffffffffffff09"

_CIRCUIT_PACK_ATTRIBUTES: Final[tuple[str, ...]] = (
    "f0002f0449534b5471e80080000000000000000000000000000c",
    "0f004252434d",
    "00f82020202020202020202020202020202020202020000008",
    "0004",
    "f000ee0149534b5471e80080000000000000000000000000000c",
    "0f004252434d",
    "00f8202020202020202020202020202020202020202000084010",
    "0004",
)


def _static(name: str, frame: OmciResponseFrame) -> MibEntityDescriptor:
    return MibEntityDescriptor(name=name, frame=frame)


def _ont_data() -> list[MibEntityDescriptor]:
    return [_static("ONT Data", OmciResponseFrame.template(OmciClass.ONT_DATA, 0x0000, "80"))]


def _circuit_packs() -> list[MibEntityDescriptor]:
    entries: list[MibEntityDescriptor] = []
    for idx, attributes in enumerate(_CIRCUIT_PACK_ATTRIBUTES):
        # First four describe slot 0x01, the next four slot 0x80
        instance = 0x0101 if idx < 4 else 0x0180
        entries.append(_static(f"Circuit Pack #{idx + 1}",
                               OmciResponseFrame.template(OmciClass.CIRCUIT_PACK, instance, attributes)))
    return entries


def _pptp() -> list[MibEntityDescriptor]:
    frame = OmciResponseFrame.template(OmciClass.PPTP_ETHERNET_UNI, 0x0101, "fffe002f000000000305ee00000002")
    stamp = CounterStamp(counter=OnuCounter.PPTP, instance=True, post_step=1)
    return [MibEntityDescriptor(name="PPTP", frame=frame, rule=InstanceRule.POST_INCREMENT, stamps=(stamp,))
            for _ in range(NUM_PPTP)]


def _tconts() -> list[MibEntityDescriptor]:
    frame = OmciResponseFrame.template(OmciClass.T_CONT, 0x8000, "e000ffff0101")
    stamp = CounterStamp(counter=OnuCounter.TCONT, instance=True, post_step=1)
    return [MibEntityDescriptor(name="T-CONT", frame=frame, rule=InstanceRule.POST_INCREMENT, stamps=(stamp,))
            for _ in range(NUM_TCONT)]


def _ani_g() -> list[MibEntityDescriptor]:
    return [_static("ANI-G", OmciResponseFrame.template(
        OmciClass.ANI_G, 0x8001, "ffff0100080030000005090000e054ffff00000c638181"))]


def _uni_g() -> list[MibEntityDescriptor]:
    frame = OmciResponseFrame.template(OmciClass.UNI_G, 0x0101, "f8")
    stamp = CounterStamp(counter=OnuCounter.UNI_G, instance=True, post_step=1)
    return [MibEntityDescriptor(name="UNI-G", frame=frame, rule=InstanceRule.POST_INCREMENT, stamps=(stamp,))
            for _ in range(NUM_UNI_G)]


def _priority_queues() -> list[MibEntityDescriptor]:
    """
    Eight groups of four priority-queue entries.

    Downstream queues are numbered 0x00nn and upstream queues 0x80nn, where nn
    is the queue counter advanced once per group by the downstream mask entry.
    The attribute-list entries point their related port at a T-CONT; the
    downstream one steps the T-CONT counter back by one first.
    """
    own = CounterStamp(counter=OnuCounter.PRIOR_Q, instance=True)
    ds_mask = MibEntityDescriptor(
        name    = "Prior-Q downstream mask",
        frame   = OmciResponseFrame.template(OmciClass.PRIORITY_QUEUE, DOWNSTREAM_INSTANCE_BASE, PRIOR_Q_MASK_ATTRIBUTES, prefix="00422e0a"),
        rule    = InstanceRule.COUNTER_STAMPED,
        stamps  = (CounterStamp(counter=OnuCounter.PRIOR_Q, instance=True, pre_step=1),),
    )
    ds_attrs = MibEntityDescriptor(
        name    = "Prior-Q downstream attribute list",
        frame   = OmciResponseFrame.template(OmciClass.PRIORITY_QUEUE, DOWNSTREAM_INSTANCE_BASE,
                                             "fff0000100010000000000012000000120010001", prefix="00432e0a"),
        rule    = InstanceRule.SHARED_REFERENCE,
        stamps  = (own, CounterStamp(counter=OnuCounter.TCONT, attribute_offsets=PRIOR_Q_RELATED_PORT_OFFSETS,
                                     pre_step=-1, restorable=True)),
    )
    us_mask = MibEntityDescriptor(
        name    = "Prior-Q upstream mask",
        frame   = OmciResponseFrame.template(OmciClass.PRIORITY_QUEUE, UPSTREAM_INSTANCE_BASE, PRIOR_Q_MASK_ATTRIBUTES, prefix="00422e0a"),
        rule    = InstanceRule.COUNTER_STAMPED,
        stamps  = (own,),
    )
    us_attrs = MibEntityDescriptor(
        name    = "Prior-Q upstream attribute list",
        frame   = OmciResponseFrame.template(OmciClass.PRIORITY_QUEUE, UPSTREAM_INSTANCE_BASE,
                                             "fff0000100010000000000802000008020010001", prefix="00432e0a"),
        rule    = InstanceRule.SHARED_REFERENCE,
        stamps  = (own, CounterStamp(counter=OnuCounter.TCONT, attribute_offsets=PRIOR_Q_RELATED_PORT_OFFSETS)),
    )
    return [ds_mask, ds_attrs, us_mask, us_attrs] * NUM_PRIOR_Q_GROUPS


def _traffic_schedulers() -> list[MibEntityDescriptor]:
    frame = OmciResponseFrame.template(OmciClass.TRAFFIC_SCHEDULER, 0x8000, "f0008000000002", prefix="02a42e0a")
    stamp = CounterStamp(counter=OnuCounter.TCONT, attribute_offsets=(TRAFFIC_SCHEDULER_TCONT_OFFSET,), post_step=1)
    return [MibEntityDescriptor(name="Traffic Scheduler", frame=frame, rule=InstanceRule.POST_INCREMENT, stamps=(stamp,))
            for _ in range(NUM_TRAFFIC_SCHEDULER)]


def _ont2_g() -> list[MibEntityDescriptor]:
    return [_static("ONT2-G", OmciResponseFrame.template(
        OmciClass.ONT2_G, 0x0000, "07fc00400801000800000000007f00003f0001", prefix="00162e0a"))]


def build_mib_catalog() -> tuple[MibEntityDescriptor, ...]:
    """Assemble the catalog in MIB upload order."""
    return tuple(
        _ont_data()
        + _circuit_packs()
        + _pptp()
        + _tconts()
        + _ani_g()
        + _uni_g()
        + _priority_queues()
        + _traffic_schedulers()
        + _ont2_g()
    )


MIB_UPLOAD_CATALOG: Final[tuple[MibEntityDescriptor, ...]] = build_mib_catalog()
