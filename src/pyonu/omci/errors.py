# SPDX-License-Identifier: Apache-2.0
# Copyright (c) 2025 Maurice Garcia

from __future__ import annotations

from pyonu.omci.onu_key import OnuKey


class OmciError(Exception):
    """
    Base class for every failure raised while answering an OMCI request.

    Errors are scoped to a single request; state held for other ONUs is never
    affected.
    """


class OnuNotFoundError(OmciError):
    """Request referenced an ONU that has no OMCI state."""

    def __init__(self, key: OnuKey) -> None:
        self.key = key
        super().__init__(f"{key} - Failed to find a key in OnuOmciStateStore")


class OnuNotReadyError(OmciError):
    """GEM port id was requested before the ONU reached the DONE state."""

    def __init__(self, key: OnuKey) -> None:
        self.key = key
        super().__init__(f"{key} - Not DONE (GemportID is not set)")


class MibUploadIndexError(OmciError):
    """
    MIB upload-next command number is beyond the MIB catalog.

    Expected and recoverable; ``extra_mib_upload_ctr`` tracks how often it happens.
    """

    def __init__(self, key: OnuKey, command_number: int,
                 mib_upload_ctr: int, extra_mib_upload_ctr: int) -> None:
        self.key = key
        self.command_number = command_number
        self.mib_upload_ctr = mib_upload_ctr
        self.extra_mib_upload_ctr = extra_mib_upload_ctr
        super().__init__(
            f"{key} - Invalid MibUpload request: {mib_upload_ctr}, "
            f"extras: {extra_mib_upload_ctr} (command number {command_number})")


class MalformedContentError(OmciError):
    """Request contents are shorter than the fields the handler decodes."""

    def __init__(self, key: OnuKey, required: int, actual: int) -> None:
        self.key = key
        self.required = required
        self.actual = actual
        super().__init__(f"{key} - Malformed OMCI content: need {required} bytes, got {actual}")


class UnknownMessageTypeError(OmciError):
    """No handler is registered for the message type."""

    def __init__(self, key: OnuKey, message_type: int) -> None:
        self.key = key
        self.message_type = message_type
        super().__init__(f"{key} - No OMCI handler registered for message type {message_type}")
