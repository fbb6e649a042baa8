"""Error taxonomy for sync operations.

Every failure an operation can surface is a SyncError subclass carrying
the HTTP status and the message shown to the client. Server-side
(500-class) errors keep their internal detail in ``detail`` for logging;
clients only ever see ``message``.
"""

from __future__ import annotations

INTERNAL_SERVER_ERROR = "INTERNAL_SERVER_ERROR"


class SyncError(Exception):
    """Base class for errors raised by sync operations."""

    status_code: int = 500

    def __init__(self, message: str = INTERNAL_SERVER_ERROR, detail: str = ""):
        self.message = message
        self.detail = detail or message
        super().__init__(self.detail)

    @property
    def is_server_error(self) -> bool:
        return self.status_code >= 500


class InvalidFieldError(SyncError):
    """A request field failed its validation rule."""

    status_code = 400

    def __init__(self, field: str):
        self.field = field
        super().__init__(f"INVALID_FIELD: {field}")


class UserExistsError(SyncError):
    """Account creation on a taken username."""

    status_code = 409

    def __init__(self, username: str):
        self.username = username
        super().__init__(f"USER_EXISTS: {username}")


class UnauthorizedError(SyncError):
    """Missing, malformed or incorrect credentials."""

    status_code = 401

    def __init__(self, reason: str = ""):
        super().__init__("UNAUTHORIZED", detail=reason)


class StoreError(SyncError):
    """The underlying store call failed."""

    status_code = 500

    def __init__(self, detail: str):
        super().__init__(INTERNAL_SERVER_ERROR, detail=detail)


class UnknownSyncError(SyncError):
    """A write reported failure without a specific store error."""

    status_code = 500

    def __init__(self, reason: str):
        super().__init__(INTERNAL_SERVER_ERROR, detail=reason)
