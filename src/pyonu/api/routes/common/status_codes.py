# SPDX-License-Identifier: Apache-2.0
# Copyright (c) 2025 Maurice Garcia

from __future__ import annotations

from enum import IntEnum


class OmciStatusCode(IntEnum):
    '''
    Outcome of an OMCI request submitted through the REST API.
    '''
    UNKNOWN                         = -1
    SUCCESS                         =  0
    ONU_NOT_FOUND                   =  1
    ONU_NOT_READY                   =  2
    MIB_UPLOAD_INDEX_OUT_OF_RANGE   =  3
    MALFORMED_CONTENT               =  4
    UNKNOWN_MESSAGE_TYPE            =  5
    FAILURE                         = 17
