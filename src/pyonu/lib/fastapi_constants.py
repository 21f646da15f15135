# SPDX-License-Identifier: Apache-2.0
# Copyright (c) 2025 Maurice Garcia

from __future__ import annotations

from typing import Any, cast

from pyonu.lib.types import HttpRtnCode

FAST_API_RESPONSE: dict[int | str, dict[str, Any]] = {
    cast(HttpRtnCode, 200): {
        "description": "JSON payload describing the ONU or the OMCI response frame",
        "content": {
            "application/json": {},
        },
    },
    cast(HttpRtnCode, 404): {
        "description": "ONU not found (no OMCI state registered for the interface/ONU pair)",
    },
    cast(HttpRtnCode, 409): {
        "description": "ONU not ready (no GEM port network CTP created yet)",
    },
    cast(HttpRtnCode, 422): {
        "description": "Validation error (malformed request body or path parameters)",
    },
    cast(HttpRtnCode, 500): {
        "description": "Internal server error",
    },
}
