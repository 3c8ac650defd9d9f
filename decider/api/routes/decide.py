"""Parse and decide endpoints: shared text in, one item out."""

from __future__ import annotations

import random

from fastapi import APIRouter

from decider.api.schemas import (
    DecideRequest,
    DecisionDetail,
    ErrorResponse,
    ParseRequest,
    ParseResponse,
)
from decider.config import get_config
from decider.db.database import get_database
from decider.history import Decision, record_decision
from decider.parse import parse_list
from decider.selection import decide

router = APIRouter()


def to_detail(decision: Decision) -> DecisionDetail:
    """Convert a Decision to the API DecisionDetail."""
    return DecisionDetail(
        id=decision.id,
        timestamp=decision.timestamp,
        selected_item=decision.selected_item,
        total_items=decision.total_items,
        title=decision.title,
    )


@router.post("/parse", response_model=ParseResponse)
def parse_text(request: ParseRequest) -> ParseResponse:
    """Show the items a decision would be made from."""
    parsed = parse_list(request.text)
    return ParseResponse(title=parsed.title, items=list(parsed.items), count=len(parsed))


@router.post(
    "/decide",
    response_model=DecisionDetail,
    responses={400: {"model": ErrorResponse, "description": "Too few items to decide"}},
)
def decide_text(request: DecideRequest) -> DecisionDetail:
    """Pick one item at random from shared text.

    Lists with no items or a single item are rejected with a 400 whose
    ``code`` is ``empty_input`` or ``insufficient_items``.
    """
    config = get_config()
    rng = random.Random(request.seed) if request.seed is not None else None
    decision = decide(request.text, rng=rng, min_items=config.selection.min_items)

    if request.save and config.history.enabled:
        record_decision(decision, db=get_database())

    return to_detail(decision)
