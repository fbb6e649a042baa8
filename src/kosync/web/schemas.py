"""Pydantic schemas for Web API.

Request and response models for accounts, authorization and progress.
"""

from __future__ import annotations

from pydantic import BaseModel, Field

from kosync.core.progress import ProgressRecord


# =============================================================================
# USER SCHEMAS
# =============================================================================


class CreateUserRequest(BaseModel):
    """Request body for creating an account.

    Emptiness and separator rules are checked by the sync service so that
    failures name the offending field.
    """

    username: str
    password: str


class CreateUserResponse(BaseModel):
    """Response for a created account."""

    username: str


class AuthResponse(BaseModel):
    """Response for a successful credential check."""

    authorized: str = "OK"


# =============================================================================
# PROGRESS SCHEMAS
# =============================================================================


class ProgressUpdate(BaseModel):
    """Request body for a progress update.

    A client timestamp is accepted but ignored; the server assigns its own.
    """

    document: str
    progress: str
    percentage: float
    device: str
    device_id: str = ""
    timestamp: int | None = None

    def to_record(self) -> ProgressRecord:
        return ProgressRecord(
            document=self.document,
            progress=self.progress,
            percentage=self.percentage,
            device=self.device,
            device_id=self.device_id,
            timestamp=self.timestamp or 0,
        )


class ProgressResponse(BaseModel):
    """Response for a progress record."""

    document: str
    progress: str
    percentage: float
    device: str
    device_id: str
    timestamp: int = Field(ge=0)

    @classmethod
    def from_record(cls, record: ProgressRecord) -> ProgressResponse:
        return cls(**record.to_dict())


# =============================================================================
# HEALTH SCHEMAS
# =============================================================================


class HealthResponse(BaseModel):
    """Health check response."""

    state: str = "OK"
