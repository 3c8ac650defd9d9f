"""History endpoints for past decisions and their statistics."""

from __future__ import annotations

from fastapi import APIRouter, HTTPException, Query

from decider.api.routes.decide import to_detail
from decider.api.schemas import (
    ClearHistoryResponse,
    DecisionDetail,
    HistoryResponse,
    HistoryStatsResponse,
    TopItem,
)
from decider.db.database import get_database
from decider.history import clear_history, get_decision, get_history, summarize_history

router = APIRouter()


@router.get("/history", response_model=HistoryResponse)
def list_history(
    limit: int | None = Query(None, ge=1, le=500, description="Maximum results"),
) -> HistoryResponse:
    """List past decisions, most recent first."""
    history = get_history(limit=limit, db=get_database())
    return HistoryResponse(
        decisions=[to_detail(d) for d in history],
        total=len(history),
    )


@router.delete("/history", response_model=ClearHistoryResponse)
def delete_history() -> ClearHistoryResponse:
    """Delete every past decision."""
    removed = clear_history(db=get_database())
    return ClearHistoryResponse(success=True, removed=removed)


@router.get("/history/stats", response_model=HistoryStatsResponse)
def history_stats(
    top: int = Query(5, ge=0, le=50, description="Number of most-picked items"),
) -> HistoryStatsResponse:
    """Summarize past decisions."""
    stats = summarize_history(get_history(db=get_database()), top=top)
    return HistoryStatsResponse(
        total_decisions=stats.total_decisions,
        distinct_items=stats.distinct_items,
        top_items=[TopItem(item=item, count=count) for item, count in stats.top_items],
        average_list_size=stats.average_list_size,
        last_decided_at=stats.last_decided_at,
    )


@router.get("/history/{decision_id}", response_model=DecisionDetail)
def get_history_entry(decision_id: str) -> DecisionDetail:
    """Get a single past decision.

    Raises:
        HTTPException: 404 if the decision is not in history.
    """
    decision = get_decision(decision_id, db=get_database())
    if not decision:
        raise HTTPException(status_code=404, detail="Decision not found")
    return to_detail(decision)
