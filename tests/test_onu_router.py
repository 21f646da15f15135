# SPDX-License-Identifier: Apache-2.0
# Copyright (c) 2025 Maurice Garcia

from __future__ import annotations

import pytest
from fastapi import FastAPI
from fastapi.testclient import TestClient

from pyonu.api.routes.common.status_codes import OmciStatusCode
from pyonu.api.routes.onu.router import OnuRouter
from pyonu.omci.dispatch import OmciDispatcher
from pyonu.omci.omci_defs import OmciClass, OmciMsgType


@pytest.fixture()
def client() -> TestClient:
    app = FastAPI()
    app.include_router(OnuRouter(OmciDispatcher()).router)
    return TestClient(app)


def test_register_returns_initial_snapshot(client: TestClient) -> None:
    response = client.put("/onu/0/1")

    assert response.status_code == 200
    body = response.json()
    assert body["intf_id"] == 0
    assert body["onu_id"] == 1
    assert body["pptp_instance"] == 1
    assert body["uni_g_instance"] == 1
    assert body["mib_upload_ctr"] == 0


def test_state_of_unknown_onu_is_404(client: TestClient) -> None:
    assert client.get("/onu/0/1/state").status_code == 404


def test_gem_port_before_and_after_create(client: TestClient) -> None:
    """
    Verify The GEM Port Endpoint Moves From 404 To 409 To 200.
    """
    assert client.get("/onu/0/1/gem-port").status_code == 404

    client.put("/onu/0/1")
    assert client.get("/onu/0/1/gem-port").status_code == 409

    response = client.post("/onu/0/1/omci", json={
        "message_type": "CREATE",
        "class_id": int(OmciClass.GEM_PORT_NETWORK_CTP),
        "content": "000b",
    })
    assert response.status_code == 200
    assert response.json()["status"] == OmciStatusCode.SUCCESS

    gem = client.get("/onu/0/1/gem-port")
    assert gem.status_code == 200
    assert gem.json()["gem_port_id"] == 11


def test_omci_mib_upload_returns_frame(client: TestClient) -> None:
    client.put("/onu/0/1")

    response = client.post("/onu/0/1/omci", json={"message_type": int(OmciMsgType.MIB_UPLOAD)})

    body = response.json()
    frame = bytes.fromhex(body["frame"])
    assert body["status"] == OmciStatusCode.SUCCESS
    assert len(frame) == 48
    assert body["class_id"] == 67


def test_omci_upload_next_walk_updates_state(client: TestClient) -> None:
    client.put("/onu/0/1")

    for n in range(13):
        response = client.post("/onu/0/1/omci",
                               json={"message_type": "mib_upload_next", "content": f"{n:04x}"})
        assert response.json()["status"] == OmciStatusCode.SUCCESS

    last = response.json()
    assert last["class_id"] == int(OmciClass.PPTP_ETHERNET_UNI)
    assert last["instance_id"] == 0x0104

    state = client.get("/onu/0/1/state").json()
    assert state["mib_upload_ctr"] == 13
    assert state["pptp_instance"] == 5


def test_omci_errors_are_reported_in_status(client: TestClient) -> None:
    not_found = client.post("/onu/3/3/omci", json={"message_type": "MIB_UPLOAD_NEXT", "content": "0000"})
    assert not_found.status_code == 200
    assert not_found.json()["status"] == OmciStatusCode.ONU_NOT_FOUND
    assert not_found.json()["frame"] is None

    client.put("/onu/0/1")
    out_of_range = client.post("/onu/0/1/omci", json={"message_type": "MIB_UPLOAD_NEXT", "content": "0043"})
    assert out_of_range.json()["status"] == OmciStatusCode.MIB_UPLOAD_INDEX_OUT_OF_RANGE

    malformed = client.post("/onu/0/1/omci", json={"message_type": "MIB_UPLOAD_NEXT", "content": "00"})
    assert malformed.json()["status"] == OmciStatusCode.MALFORMED_CONTENT


def test_omci_request_validation(client: TestClient) -> None:
    client.put("/onu/0/1")

    assert client.post("/onu/0/1/omci", json={"message_type": "NOT_A_TYPE"}).status_code == 422
    assert client.post("/onu/0/1/omci", json={"message_type": 99}).status_code == 422
    assert client.post("/onu/0/1/omci", json={"message_type": "SET", "content": "zz"}).status_code == 422


def test_delete_onu(client: TestClient) -> None:
    client.put("/onu/0/1")

    assert client.delete("/onu/0/1").json() == {"removed": True}
    assert client.delete("/onu/0/1").status_code == 404
    assert client.get("/onu/0/1/state").status_code == 404
