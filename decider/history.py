"""Decision history.

A decision is an immutable record of one pick. The history is ordered
most-recent-first and holds at most ``history.max_entries`` decisions
(50 by default); recording one more evicts the oldest.
"""

from __future__ import annotations

import logging
import uuid
from collections import Counter
from collections.abc import Iterable, Iterator
from dataclasses import dataclass, field, replace
from datetime import UTC, datetime
from typing import Any

from decider.config import get_config
from decider.db import Database, get_database

logger = logging.getLogger(__name__)

HISTORY_LIMIT = 50


@dataclass(frozen=True)
class Decision:
    """A single recorded pick."""

    id: str
    timestamp: datetime
    selected_item: str
    total_items: int
    title: str | None = None

    @classmethod
    def create(
        cls,
        selected_item: str,
        total_items: int,
        title: str | None = None,
    ) -> Decision:
        """Create a new decision stamped with the current UTC time."""
        return cls(
            id=uuid.uuid4().hex,
            timestamp=datetime.now(UTC),
            selected_item=selected_item,
            total_items=total_items,
            title=title,
        )

    def to_dict(self) -> dict[str, Any]:
        """Serialize the decision for storage."""
        return {
            "id": self.id,
            "timestamp": self.timestamp.isoformat(),
            "selected_item": self.selected_item,
            "total_items": self.total_items,
            "title": self.title,
        }

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> Decision:
        """Rebuild a decision from its stored form."""
        timestamp = data["timestamp"]
        if isinstance(timestamp, str):
            timestamp = datetime.fromisoformat(timestamp)
        return cls(
            id=str(data["id"]),
            timestamp=timestamp,
            selected_item=data["selected_item"],
            total_items=int(data["total_items"]),
            title=data.get("title"),
        )


@dataclass(frozen=True)
class HistoryLog:
    """Bounded, most-recent-first sequence of decisions."""

    decisions: tuple[Decision, ...] = ()
    max_entries: int = HISTORY_LIMIT

    def __post_init__(self) -> None:
        if self.max_entries < 1:
            raise ValueError(f"max_entries must be positive, got {self.max_entries}")
        if len(self.decisions) > self.max_entries:
            object.__setattr__(self, "decisions", self.decisions[: self.max_entries])

    def __len__(self) -> int:
        return len(self.decisions)

    def __iter__(self) -> Iterator[Decision]:
        return iter(self.decisions)

    @property
    def latest(self) -> Decision | None:
        return self.decisions[0] if self.decisions else None

    def append(self, decision: Decision) -> HistoryLog:
        """Return a new log with ``decision`` first, evicting the oldest if full."""
        kept = self.decisions[: self.max_entries - 1]
        return replace(self, decisions=(decision, *kept))

    def clear(self) -> HistoryLog:
        return replace(self, decisions=())

    def to_list(self) -> list[dict[str, Any]]:
        return [decision.to_dict() for decision in self.decisions]

    @classmethod
    def from_list(
        cls, data: Iterable[dict[str, Any]], max_entries: int = HISTORY_LIMIT
    ) -> HistoryLog:
        """Load a log from stored dicts, skipping malformed entries."""
        decisions: list[Decision] = []
        for item in data:
            if not isinstance(item, dict):
                continue
            try:
                decisions.append(Decision.from_dict(item))
            except (KeyError, TypeError, ValueError):
                logger.warning("Skipping malformed history entry: %r", item)
        return cls(decisions=tuple(decisions), max_entries=max_entries)


# Persistent history


def record_decision(decision: Decision, db: Database | None = None) -> int:
    """Persist a decision, evicting the oldest beyond the configured cap.

    Returns:
        Number of decisions evicted.
    """
    database = db or get_database()
    return database.insert_decision(
        decision_id=decision.id,
        decided_at=decision.timestamp.isoformat(),
        selected_item=decision.selected_item,
        total_items=decision.total_items,
        title=decision.title,
        max_entries=get_config().history.max_entries,
    )


def _row_to_decision(row: dict[str, Any]) -> Decision:
    return Decision(
        id=row["id"],
        timestamp=datetime.fromisoformat(row["decided_at"]),
        selected_item=row["selected_item"],
        total_items=int(row["total_items"]),
        title=row["title"],
    )


def get_history(limit: int | None = None, db: Database | None = None) -> HistoryLog:
    """Load the stored history, most recent first."""
    database = db or get_database()
    rows = database.get_decisions(limit=limit)
    return HistoryLog(
        decisions=tuple(_row_to_decision(row) for row in rows),
        max_entries=get_config().history.max_entries,
    )


def get_decision(decision_id: str, db: Database | None = None) -> Decision | None:
    """Get a stored decision by id."""
    database = db or get_database()
    row = database.get_decision(decision_id)
    return _row_to_decision(row) if row else None


def clear_history(db: Database | None = None) -> int:
    """Delete all stored decisions. Returns the number removed."""
    database = db or get_database()
    return database.clear_decisions()


# Statistics


@dataclass
class HistoryStats:
    """Summary of a decision history."""

    total_decisions: int = 0
    distinct_items: int = 0
    top_items: list[tuple[str, int]] = field(default_factory=list)
    average_list_size: float = 0.0
    last_decided_at: datetime | None = None

    def to_dict(self) -> dict[str, Any]:
        return {
            "total_decisions": self.total_decisions,
            "distinct_items": self.distinct_items,
            "top_items": [{"item": item, "count": count} for item, count in self.top_items],
            "average_list_size": round(self.average_list_size, 2),
            "last_decided_at": self.last_decided_at.isoformat() if self.last_decided_at else None,
        }


def summarize_history(decisions: Iterable[Decision], top: int = 5) -> HistoryStats:
    """Summarize how often each item has been picked.

    Args:
        decisions: Decisions, most recent first.
        top: Number of most frequent picks to report.

    Returns:
        HistoryStats for the given decisions.
    """
    decision_list = list(decisions)
    if not decision_list:
        return HistoryStats()

    counts = Counter(d.selected_item for d in decision_list)
    return HistoryStats(
        total_decisions=len(decision_list),
        distinct_items=len(counts),
        top_items=counts.most_common(max(top, 0)),
        average_list_size=sum(d.total_items for d in decision_list) / len(decision_list),
        last_decided_at=max(d.timestamp for d in decision_list),
    )
