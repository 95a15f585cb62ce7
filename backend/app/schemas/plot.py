"""
PlotRegistry Backend — Pydantic Request/Response Schemas
========================================================

What:  Pydantic models defining the API contract for the /plots endpoints.
How:   FastAPI uses these models to parse request bodies, serialize responses,
       and generate the OpenAPI documentation.

Naming:
    The wire format is camelCase (`blockId`, `plotNumber`, ...). Every field
    declares its camelCase alias; `populate_by_name` lets callers (and the
    service layer) use the snake_case attribute names too.

Request bodies are deliberately lenient: every field is optional and enum
fields are plain strings. Missing fields and disallowed values are rejected
by PlotService with the API's own messages, not by schema validation.
"""

import uuid
from datetime import datetime
from typing import List, Optional, Union

from pydantic import AliasChoices, BaseModel, ConfigDict, Field


# ══════════════════════════════════════════════════════════════════════════
# Request Models — What the client sends
# ══════════════════════════════════════════════════════════════════════════


class PlotCreateRequest(BaseModel):
    """
    Body of POST /plots.

    Required by the service: blockId, plotNumber, plotType, area, areaUnit, category.
    Optional: isCornered.
    """
    block_id: Optional[str] = Field(default=None, alias="blockId")
    plot_number: Optional[Union[str, int]] = Field(default=None, alias="plotNumber")
    plot_type: Optional[str] = Field(default=None, alias="plotType")
    area_unit: Optional[str] = Field(default=None, alias="areaUnit")
    area: Optional[float] = Field(default=None, description="Magnitude in areaUnit")
    category: Optional[str] = Field(default=None)
    is_cornered: Optional[bool] = Field(default=None, alias="isCornered")

    model_config = ConfigDict(populate_by_name=True)


class PlotUpdateRequest(PlotCreateRequest):
    """
    Body of PATCH /plots.

    Carries the target plot id (`id`, or `_id` for older clients) and the
    full set of plot fields; the update replaces all of them.
    """
    id: Optional[str] = Field(
        default=None,
        validation_alias=AliasChoices("id", "_id"),
        description="Identifier of the plot to update",
    )


class PlotDeleteRequest(BaseModel):
    """Body of DELETE /plots."""
    id: Optional[str] = Field(
        default=None,
        validation_alias=AliasChoices("id", "_id"),
        description="Identifier of the plot to delete",
    )


# ══════════════════════════════════════════════════════════════════════════
# Response Models — What the API returns to clients
# ══════════════════════════════════════════════════════════════════════════


class BlockResponse(BaseModel):
    id: uuid.UUID
    name: str
    created_at: datetime = Field(alias="createdAt")

    model_config = ConfigDict(from_attributes=True, populate_by_name=True)


class CustomerResponse(BaseModel):
    id: uuid.UUID
    name: str
    phone: Optional[str] = None
    created_at: datetime = Field(alias="createdAt")

    model_config = ConfigDict(from_attributes=True, populate_by_name=True)


class _PlotFields(BaseModel):
    id: uuid.UUID = Field(description="Unique plot identifier (UUID)")
    plot_number: str = Field(alias="plotNumber")
    plot_type: str = Field(alias="plotType")
    area_unit: str = Field(alias="areaUnit")
    area: float
    category: str
    is_cornered: Optional[bool] = Field(default=None, alias="isCornered")
    created_at: datetime = Field(alias="createdAt")
    updated_at: datetime = Field(alias="updatedAt")

    model_config = ConfigDict(from_attributes=True, populate_by_name=True)


class PlotResponse(_PlotFields):
    """
    A plot as stored: references are bare identifiers.
    Returned by create and update.
    """
    block_id: uuid.UUID = Field(alias="blockId")
    customer_id: Optional[uuid.UUID] = Field(default=None, alias="customerId")


class PlotDetail(_PlotFields):
    """
    A plot with its references populated.

    `blockId` and `customerId` hold the full referenced record, or null when
    the reference is unset or points at a record that no longer exists.
    Returned by list and get.
    """
    block_id: Optional[BlockResponse] = Field(default=None, alias="blockId")
    customer_id: Optional[CustomerResponse] = Field(default=None, alias="customerId")


# ── Envelopes ─────────────────────────────────────────────────────────────
# Every success response is {"message": ..., "data"?: ...}


class MessageResponse(BaseModel):
    message: str = Field(description="Human-readable result message")


class PlotListResponse(MessageResponse):
    data: List[PlotDetail]


class PlotDetailResponse(MessageResponse):
    data: PlotDetail


class PlotMutationResponse(MessageResponse):
    data: PlotResponse


# ══════════════════════════════════════════════════════════════════════════
# Error / Health Models
# ══════════════════════════════════════════════════════════════════════════


class ErrorResponse(BaseModel):
    """
    Standardized error response format for all API errors.

    Example:
        {
            "error": "conflict",
            "message": "Duplicate plot number",
            "details": {"plot_number": "P-100"},
            "request_id": "a1b2c3d4"
        }
    """
    error: str = Field(description="Machine-readable error code")
    message: str = Field(description="Human-readable error description")
    details: Optional[dict] = Field(default=None, description="Additional error context")
    request_id: Optional[str] = Field(default=None, description="Request correlation ID")


class HealthResponse(BaseModel):
    """Health check response showing service and database status."""
    status: str = Field(description="Overall service status: healthy, unhealthy")
    version: str = Field(description="Application version")
    database: str = Field(description="Database connectivity: connected, disconnected")
    uptime_seconds: float = Field(description="Seconds since service started")
