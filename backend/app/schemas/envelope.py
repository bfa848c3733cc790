"""
LabRecords Backend — Response Envelopes
========================================

What:  The fixed JSON shapes every endpoint returns.
Why:   Clients branch on `success` and always find the payload under `data`
       and the failure under `error` (plus `details` when there is more).

Shapes:
    list      200  {success, count, data: [...]}
    get       200  {success, data}
    create    201  {success, message, data}
    update    200  {success, message, data}
    delete    200  {success, message}
    failure   4xx/5xx  {success: false, error, details?}
"""

from typing import Generic, List, Optional, TypeVar, Union

from pydantic import BaseModel, Field

T = TypeVar("T")


class ListResponse(BaseModel, Generic[T]):
    success: bool = True
    count: int = Field(description="Number of records in `data`")
    data: List[T]


class ItemResponse(BaseModel, Generic[T]):
    success: bool = True
    data: T


class MutationResponse(BaseModel, Generic[T]):
    success: bool = True
    message: str
    data: T


class MessageResponse(BaseModel):
    success: bool = True
    message: str


class ErrorResponse(BaseModel):
    """
    Failure envelope.

    `details` is a list of per-field messages for validation failures and the
    raw underlying error message for server errors; absent otherwise.
    """
    success: bool = False
    error: str = Field(description="Human-readable summary of the failure")
    details: Optional[Union[List[str], str]] = Field(default=None)


class HealthResponse(BaseModel):
    """Health check response showing service and store status."""
    status: str = Field(description="Overall service status: healthy, unhealthy")
    version: str = Field(description="Application version")
    database: str = Field(description="Database connectivity: connected, disconnected")
    uptime_seconds: float = Field(description="Seconds since service started")
