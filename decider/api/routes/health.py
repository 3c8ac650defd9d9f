"""Health check endpoint."""

from __future__ import annotations

from fastapi import APIRouter

from decider import __version__
from decider.db.database import get_database

router = APIRouter()


@router.get("/health")
def health_check() -> dict[str, str | int]:
    """Health check endpoint.

    Returns server status, version, and history size.
    """
    try:
        db = get_database()
        history_size = db.count_decisions()
        db_status = "connected"
    except Exception:
        db_status = "error"
        history_size = 0

    return {
        "status": "healthy",
        "version": __version__,
        "database": db_status,
        "history_size": history_size,
    }
