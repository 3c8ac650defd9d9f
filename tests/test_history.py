"""Tests for decision records, the bounded history log, and statistics."""

from __future__ import annotations

from datetime import UTC, datetime, timedelta

import pytest

from decider.history import (
    HISTORY_LIMIT,
    Decision,
    HistoryLog,
    summarize_history,
)


def make_decision(index: int, item: str | None = None, total: int = 3) -> Decision:
    return Decision(
        id=f"decision-{index}",
        timestamp=datetime(2025, 2, 17, tzinfo=UTC) + timedelta(minutes=index),
        selected_item=item or f"Item {index}",
        total_items=total,
    )


class TestDecision:
    """Tests for the decision record."""

    def test_create_stamps_id_and_time(self):
        decision = Decision.create(selected_item="Pizza", total_items=3, title="Dinner")
        assert len(decision.id) == 32
        assert decision.timestamp.tzinfo is not None
        assert decision.title == "Dinner"

    def test_is_immutable(self):
        decision = Decision.create(selected_item="Pizza", total_items=3)
        with pytest.raises(AttributeError):
            decision.selected_item = "Sushi"  # type: ignore[misc]

    def test_dict_round_trip(self):
        decision = Decision.create(selected_item="Bread", total_items=2, title="Shopping List")
        assert Decision.from_dict(decision.to_dict()) == decision

    def test_to_dict_keeps_missing_title(self):
        data = Decision.create(selected_item="Pizza", total_items=3).to_dict()
        assert data["title"] is None
        assert Decision.from_dict(data).title is None


class TestHistoryLog:
    """Tests for the 50-entry, most-recent-first log."""

    def test_append_puts_newest_first(self):
        log = HistoryLog().append(make_decision(1)).append(make_decision(2))
        assert [d.id for d in log] == ["decision-2", "decision-1"]
        assert log.latest.id == "decision-2"

    def test_append_returns_new_log(self):
        empty = HistoryLog()
        updated = empty.append(make_decision(1))
        assert len(empty) == 0
        assert len(updated) == 1

    def test_fifty_first_entry_evicts_oldest(self):
        log = HistoryLog()
        for index in range(1, 52):
            log = log.append(make_decision(index))

        assert len(log) == HISTORY_LIMIT == 50
        assert log.latest.id == "decision-51"
        ids = {d.id for d in log}
        assert "decision-1" not in ids
        assert "decision-2" in ids
        assert log.decisions[-1].id == "decision-2"

    def test_custom_capacity(self):
        log = HistoryLog(max_entries=2)
        for index in range(5):
            log = log.append(make_decision(index))
        assert [d.id for d in log] == ["decision-4", "decision-3"]

    def test_invalid_capacity(self):
        with pytest.raises(ValueError):
            HistoryLog(max_entries=0)

    def test_oversized_input_is_truncated(self):
        decisions = tuple(make_decision(i) for i in range(5))
        log = HistoryLog(decisions=decisions, max_entries=3)
        assert len(log) == 3
        assert log.decisions == decisions[:3]

    def test_clear(self):
        log = HistoryLog().append(make_decision(1)).clear()
        assert len(log) == 0
        assert log.latest is None

    def test_list_round_trip(self):
        log = HistoryLog().append(make_decision(1)).append(make_decision(2))
        restored = HistoryLog.from_list(log.to_list())
        assert restored == log

    def test_from_list_skips_malformed_entries(self):
        data = [
            make_decision(1).to_dict(),
            {"id": "broken"},
            "not a dict",
            {**make_decision(2).to_dict(), "timestamp": "yesterday"},
        ]
        log = HistoryLog.from_list(data)
        assert [d.id for d in log] == ["decision-1"]


class TestSummarizeHistory:
    """Tests for history statistics."""

    def test_empty_history(self):
        stats = summarize_history([])
        assert stats.total_decisions == 0
        assert stats.top_items == []
        assert stats.last_decided_at is None

    def test_counts_and_averages(self):
        decisions = [
            make_decision(3, "Pizza", total=4),
            make_decision(2, "Sushi", total=2),
            make_decision(1, "Pizza", total=3),
        ]
        stats = summarize_history(decisions)

        assert stats.total_decisions == 3
        assert stats.distinct_items == 2
        assert stats.top_items[0] == ("Pizza", 2)
        assert stats.average_list_size == pytest.approx(3.0)
        assert stats.last_decided_at == decisions[0].timestamp

    def test_top_limit(self):
        decisions = [make_decision(i) for i in range(10)]
        assert len(summarize_history(decisions, top=3).top_items) == 3
        assert summarize_history(decisions, top=0).top_items == []

    def test_to_dict(self):
        data = summarize_history([make_decision(1, "Pizza")]).to_dict()
        assert data["top_items"] == [{"item": "Pizza", "count": 1}]
        assert data["last_decided_at"].startswith("2025-02-17")
