"""Pydantic models for API requests and responses."""

from __future__ import annotations

from datetime import datetime

from pydantic import BaseModel, Field

# === Parse / Decide Models ===


class ParseRequest(BaseModel):
    """Request body for POST /parse."""

    text: str = Field(..., description="Shared list text, one item per line")


class ParseResponse(BaseModel):
    """Response for POST /parse."""

    title: str | None = None
    items: list[str]
    count: int


class DecideRequest(BaseModel):
    """Request body for POST /decide."""

    text: str = Field(..., description="Shared list text, one item per line")
    save: bool = Field(default=True, description="Record the decision in history")
    seed: int | None = Field(default=None, description="Seed for a reproducible pick")


class DecisionDetail(BaseModel):
    """API representation of a decision."""

    id: str
    timestamp: datetime
    selected_item: str
    total_items: int
    title: str | None = None


class ErrorResponse(BaseModel):
    """Body of a domain error response."""

    detail: str
    code: str


# === History Models ===


class HistoryResponse(BaseModel):
    """Response for GET /history."""

    decisions: list[DecisionDetail]
    total: int


class ClearHistoryResponse(BaseModel):
    """Response for DELETE /history."""

    success: bool
    removed: int


class TopItem(BaseModel):
    """A frequently picked item."""

    item: str
    count: int


class HistoryStatsResponse(BaseModel):
    """Response for GET /history/stats."""

    total_decisions: int
    distinct_items: int
    top_items: list[TopItem] = Field(default_factory=list)
    average_list_size: float
    last_decided_at: datetime | None = None
