# SPDX-License-Identifier: Apache-2.0
# Copyright (c) 2025 Maurice Garcia

from __future__ import annotations

import logging
import threading

import pytest

from pyonu.lib.types import IntfId, OmciClassId, OnuId
from pyonu.omci.errors import (
    MalformedContentError,
    MibUploadIndexError,
    OnuNotFoundError,
    OnuNotReadyError,
)
from pyonu.omci.frame import OmciResponseFrame
from pyonu.omci.handlers import (
    CREATE_ACK,
    DELETE_ACK,
    GET_ACK,
    GET_ALL_ALARMS_ACK,
    GET_ALL_ALARMS_NEXT_ACK,
    MIB_RESET_ACK,
    REBOOT_ACK,
    SET_ACK,
    SYNC_TIME_ACK,
    OmciHandlers,
)
from pyonu.omci.omci_defs import OmciClass, OnuOmciLifecycle
from pyonu.omci.onu_key import OnuKey
from pyonu.omci.responder_config import OmciResponderSettings
from pyonu.omci.state_store import OnuOmciStateStore

KEY = OnuKey(IntfId(0), OnuId(1))
GEM_CTP = OmciClassId(OmciClass.GEM_PORT_NETWORK_CTP)


@pytest.fixture()
def store() -> OnuOmciStateStore:
    store = OnuOmciStateStore()
    store.get_or_create(KEY)
    return store


@pytest.fixture()
def handlers(store: OnuOmciStateStore) -> OmciHandlers:
    return OmciHandlers(store)


def test_mib_upload_advertises_catalog_length(handlers: OmciHandlers) -> None:
    """
    Verify Bytes 8-9 Of The MIB Upload Ack Carry 67 When Not Configured.
    """
    raw = handlers.mib_upload(OmciClassId(OmciClass.ONT_DATA), b"", KEY)

    assert len(raw) == 48
    assert raw[8:10] == (67).to_bytes(2, "big")
    assert handlers.mib_upload_count == 67


def test_mib_upload_honours_configured_count_and_warns(
    store: OnuOmciStateStore, caplog: pytest.LogCaptureFixture
) -> None:
    """
    Verify A Configured Count That Differs From The Catalog Is Used And Logged.
    """
    with caplog.at_level(logging.WARNING, logger="OmciHandlers"):
        handlers = OmciHandlers(store, OmciResponderSettings(num_mib_uploads=68))

    raw = handlers.mib_upload(OmciClassId(OmciClass.ONT_DATA), b"", KEY)

    assert raw[8:10] == (68).to_bytes(2, "big")
    assert "Configured MIB upload count 68 differs from MIB catalog length 67" in caplog.text


def test_matching_configured_count_does_not_warn(
    store: OnuOmciStateStore, caplog: pytest.LogCaptureFixture
) -> None:
    with caplog.at_level(logging.WARNING, logger="OmciHandlers"):
        OmciHandlers(store, OmciResponderSettings(num_mib_uploads=67))

    assert "differs from MIB catalog length" not in caplog.text


def test_mib_upload_next_decodes_big_endian_index(handlers: OmciHandlers, store: OnuOmciStateStore) -> None:
    raw = handlers.mib_upload_next(OmciClassId(OmciClass.ONT_DATA), b"\x00\x15", KEY)

    frame = OmciResponseFrame.from_bytes(raw)
    assert frame.class_id == OmciClass.ANI_G
    assert store.snapshot(KEY).mib_upload_ctr == 1


def test_mib_upload_next_unknown_onu(handlers: OmciHandlers, caplog: pytest.LogCaptureFixture) -> None:
    with caplog.at_level(logging.ERROR, logger="OmciHandlers"):
        with pytest.raises(OnuNotFoundError):
            handlers.mib_upload_next(OmciClassId(0), b"\x00\x00", OnuKey(IntfId(5), OnuId(5)))

    assert "Failed to find a key in OnuOmciStateStore" in caplog.text


def test_mib_upload_next_malformed_content(handlers: OmciHandlers, store: OnuOmciStateStore) -> None:
    with pytest.raises(MalformedContentError) as exc_info:
        handlers.mib_upload_next(OmciClassId(0), b"\x01", KEY)

    assert exc_info.value.required == 2
    assert exc_info.value.actual == 1
    assert store.snapshot(KEY).mib_upload_ctr == 0


def test_mib_upload_next_out_of_range_logs_warning(
    handlers: OmciHandlers, caplog: pytest.LogCaptureFixture
) -> None:
    with caplog.at_level(logging.WARNING, logger="OmciHandlers"):
        with pytest.raises(MibUploadIndexError):
            handlers.mib_upload_next(OmciClassId(0), b"\x00\x43", KEY)

    records = [r for r in caplog.records if "Invalid MibUpload request" in r.getMessage()]
    assert records and records[0].levelno == logging.WARNING


def test_mib_reset_clears_counters(handlers: OmciHandlers, store: OnuOmciStateStore) -> None:
    for n in range(13):
        handlers.mib_upload_next(OmciClassId(0), n.to_bytes(2, "big"), KEY)

    raw = handlers.mib_reset(OmciClassId(OmciClass.ONT_DATA), b"", KEY)

    snap = store.snapshot(KEY)
    assert raw == MIB_RESET_ACK.to_bytes()
    assert snap.mib_upload_ctr == 0
    assert snap.pptp_instance == 1


def test_mib_reset_unknown_onu_still_acks(handlers: OmciHandlers, store: OnuOmciStateStore) -> None:
    raw = handlers.mib_reset(OmciClassId(0), b"", OnuKey(IntfId(9), OnuId(9)))

    assert raw == MIB_RESET_ACK.to_bytes()
    assert OnuKey(IntfId(9), OnuId(9)) not in store


def test_mib_reset_with_lifecycle_setting(store: OnuOmciStateStore) -> None:
    handlers = OmciHandlers(store, OmciResponderSettings(reset_lifecycle=True))
    handlers.create(GEM_CTP, b"\x00\x0b", KEY)

    handlers.mib_reset(OmciClassId(0), b"", KEY)

    assert store.lifecycle(0, 1) is OnuOmciLifecycle.INCOMPLETE
    assert store.snapshot(KEY).gem_port_id == 0


def test_create_gem_port_ctp_assigns_gem_port(handlers: OmciHandlers, store: OnuOmciStateStore) -> None:
    """
    Verify Creating A GEM Port Network CTP Records The Id And Marks The ONU DONE.
    """
    with pytest.raises(OnuNotReadyError):
        store.gem_port_id(0, 1)

    raw = handlers.create(GEM_CTP, b"\x00\x0b\xff\xff", KEY)

    assert raw == CREATE_ACK.to_bytes()
    assert store.gem_port_id(0, 1) == 11
    assert store.lifecycle(0, 1) is OnuOmciLifecycle.DONE


def test_create_other_class_mutates_nothing(handlers: OmciHandlers, store: OnuOmciStateStore) -> None:
    raw = handlers.create(OmciClassId(OmciClass.T_CONT), b"\x00\x0b", KEY)

    assert raw == CREATE_ACK.to_bytes()
    assert store.lifecycle(0, 1) is OnuOmciLifecycle.INCOMPLETE


def test_create_gem_port_ctp_errors(handlers: OmciHandlers) -> None:
    with pytest.raises(OnuNotFoundError):
        handlers.create(GEM_CTP, b"\x00\x0b", OnuKey(IntfId(1), OnuId(1)))

    with pytest.raises(MalformedContentError):
        handlers.create(GEM_CTP, b"", KEY)


def test_create_ack_bytes() -> None:
    raw = CREATE_ACK.to_bytes()

    assert raw[4:8] == bytes.fromhex("01100001")
    assert raw[8:] == bytes(40)


@pytest.mark.parametrize("method, ack", [
    ("set", SET_ACK),
    ("get", GET_ACK),
    ("get_all_alarms", GET_ALL_ALARMS_ACK),
    ("get_all_alarms_next", GET_ALL_ALARMS_NEXT_ACK),
    ("sync_time", SYNC_TIME_ACK),
    ("delete", DELETE_ACK),
    ("reboot", REBOOT_ACK),
])
def test_fixed_acks_do_not_touch_state(
    handlers: OmciHandlers, store: OnuOmciStateStore, method: str, ack: OmciResponseFrame
) -> None:
    before = store.snapshot(KEY)

    raw = getattr(handlers, method)(OmciClassId(0), b"\x00\x01", KEY)

    assert raw == ack.to_bytes()
    assert len(raw) == 48
    assert store.snapshot(KEY) == before


def test_fixed_ack_layouts() -> None:
    assert GET_ACK.to_bytes()[4:12] == bytes.fromhex("002d02010020c000")
    assert GET_ALL_ALARMS_NEXT_ACK.to_bytes()[8:13] == bytes.fromhex("000b010280")
    assert DELETE_ACK.to_bytes()[5] == 0x00
    assert DELETE_ACK.to_bytes()[12] == 0x80
    assert GET_ALL_ALARMS_ACK.to_bytes()[8:10] == b"\x00\x03"


def _walk(handlers: OmciHandlers, key: OnuKey, indices: range) -> list[bytes]:
    return [handlers.mib_upload_next(OmciClassId(0), n.to_bytes(2, "big"), key) for n in indices]


def test_two_onus_walked_concurrently_keep_independent_counters(
    handlers: OmciHandlers, store: OnuOmciStateStore
) -> None:
    """
    Verify Two ONUs Walked From Separate Threads Each See A Fresh Counter Trajectory.
    """
    other = OnuKey(IntfId(0), OnuId(2))
    store.get_or_create(other)
    barrier = threading.Barrier(2)
    results: dict[OnuKey, list[bytes]] = {}

    def walk(key: OnuKey) -> None:
        barrier.wait()
        results[key] = _walk(handlers, key, range(67))

    threads = [threading.Thread(target=walk, args=(k,)) for k in (KEY, other)]
    for t in threads:
        t.start()
    for t in threads:
        t.join()

    assert results[KEY] == results[other]
    pptp = [OmciResponseFrame.from_bytes(raw).instance_id for raw in results[KEY][9:13]]
    assert pptp == [0x0101, 0x0102, 0x0103, 0x0104]
    for key in (KEY, other):
        snap = store.snapshot(key)
        assert snap.pptp_instance == 5
        assert snap.mib_upload_ctr == 67


def test_walking_one_onu_leaves_another_untouched(
    handlers: OmciHandlers, store: OnuOmciStateStore
) -> None:
    other = OnuKey(IntfId(0), OnuId(2))
    store.get_or_create(other)

    frames = _walk(handlers, KEY, range(9, 13))

    assert [OmciResponseFrame.from_bytes(raw).instance_id for raw in frames] == [0x0101, 0x0102, 0x0103, 0x0104]
    assert store.snapshot(KEY).pptp_instance == 5
    assert store.snapshot(other).pptp_instance == 1
    assert store.snapshot(other).mib_upload_ctr == 0
