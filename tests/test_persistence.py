# SPDX-License-Identifier: BSL-1.1
# Copyright (c) 2026 MuVeraAI Corporation
"""Tests for the state snapshot codec and storage backends."""

from __future__ import annotations

import datetime as dt
import json
from decimal import Decimal
from pathlib import Path
from typing import Any

import pytest

from spend_sense.engine import SpendSenseEngine
from spend_sense.errors import PersistenceCorruptError
from spend_sense.ledger import build_record
from spend_sense.persistence import dump_state, dumps_state, load_state, loads_state
from spend_sense.storage.file import JsonFileStorage
from spend_sense.storage.memory import MemoryStorage
from spend_sense.types import AppState, BudgetState, Streak


@pytest.fixture
def state() -> AppState:
    return AppState(
        theme="light",
        budget=BudgetState(
            total_budget=Decimal("1500"),
            selected_plan_id="saver",
            is_budget_locked=True,
        ),
        expenses=[
            build_record("45.50", "Travel", "2026-10-01", note="taxi"),
            build_record(300, "Food", "2026-10-03"),
        ],
        streak=Streak(count=4, last_visit=dt.date(2026, 10, 18)),
    )


# ---------------------------------------------------------------------------
# TestSnapshotCodec
# ---------------------------------------------------------------------------


class TestSnapshotCodec:
    def test_dump_is_flat_and_json_compatible(self, state: AppState) -> None:
        payload = dump_state(state)
        assert payload["budget"] == "1500"
        assert payload["selectedPlan"] == "saver"
        assert payload["isBudgetLocked"] is True
        assert payload["expenses"][0] == {
            "amount": "45.50",
            "category": "Travel",
            "date": "2026-10-01",
            "note": "taxi",
        }
        assert payload["streak"] == {"count": 4, "lastVisit": "2026-10-18"}
        json.dumps(payload)

    def test_text_round_trip_preserves_state(self, state: AppState) -> None:
        assert loads_state(dumps_state(state)) == state

    def test_empty_object_loads_default_state(self) -> None:
        assert load_state({}) == AppState()

    def test_web_app_snapshot_is_accepted(self) -> None:
        payload = {
            "theme": "light",
            "budget": 5000,
            "isBudgetLocked": True,
            "isExpenseLocked": False,
            "expenses": [
                {"amount": 120.5, "category": "Food", "date": "2026-10-01", "note": ""},
            ],
            "selectedPlan": None,
            "streak": {"count": 3, "lastVisit": "2026-10-18T08:00:00.000Z"},
        }
        loaded = load_state(payload)
        assert loaded.budget.total_budget == Decimal("5000")
        assert loaded.expenses[0].amount == Decimal("120.5")
        assert loaded.expenses[0].note is None
        assert loaded.streak.last_visit == dt.date(2026, 10, 18)

    @pytest.mark.parametrize(
        "payload",
        [
            [],
            "state",
            {"version": 2},
            {"budget": -5},
            {"theme": "neon"},
            {"streak": "hot"},
            {"expenses": [{"amount": -1, "category": "Food", "date": "2026-10-01"}]},
            {"expenses": [{"amount": 1, "category": "Pets", "date": "2026-10-01"}]},
        ],
    )
    def test_malformed_payload_raises_persistence_corrupt(self, payload: Any) -> None:
        with pytest.raises(PersistenceCorruptError) as info:
            load_state(payload)
        assert info.value.code == "PERSISTENCE_CORRUPT"

    @pytest.mark.parametrize(
        "text",
        [
            '{"budget": ',
            "[" * 200_000,
            '{"budget": ' + "1" * 5000 + "}",
            '{"budget": "1e30"}',
        ],
        ids=["truncated", "deeply-nested", "oversized-integer", "budget-above-maximum"],
    )
    def test_unreadable_text_raises_persistence_corrupt(self, text: str) -> None:
        with pytest.raises(PersistenceCorruptError):
            loads_state(text)


# ---------------------------------------------------------------------------
# TestMemoryStorage
# ---------------------------------------------------------------------------


class TestMemoryStorage:
    def test_load_returns_none_before_first_save(self) -> None:
        assert MemoryStorage().load() is None

    def test_saved_copy_is_detached_from_live_state(self, state: AppState) -> None:
        storage = MemoryStorage()
        storage.save(state)
        state.expenses.clear()
        loaded = storage.load()
        assert loaded is not None
        assert len(loaded.expenses) == 2


# ---------------------------------------------------------------------------
# TestJsonFileStorage
# ---------------------------------------------------------------------------


class TestJsonFileStorage:
    def test_missing_file_loads_none(self, tmp_path: Path) -> None:
        assert JsonFileStorage(tmp_path / "state.json").load() is None

    def test_save_and_load_round_trip(self, tmp_path: Path, state: AppState) -> None:
        storage = JsonFileStorage(tmp_path / "nested" / "state.json")
        storage.save(state)
        assert storage.load() == state
        assert not (tmp_path / "nested" / "state.json.tmp").exists()

    def test_corrupt_file_raises(self, tmp_path: Path) -> None:
        path = tmp_path / "state.json"
        path.write_text("garbage", encoding="utf-8")
        with pytest.raises(PersistenceCorruptError):
            JsonFileStorage(path).load()

    def test_non_utf8_file_raises(self, tmp_path: Path) -> None:
        path = tmp_path / "state.json"
        path.write_bytes(b"\xff\xfe\x00garbage")
        with pytest.raises(PersistenceCorruptError):
            JsonFileStorage(path).load()

    def test_directory_in_place_of_file_raises_os_error(self, tmp_path: Path) -> None:
        with pytest.raises(OSError):
            JsonFileStorage(tmp_path).load()

    def test_engine_starts_fresh_from_corrupt_file(self, tmp_path: Path) -> None:
        path = tmp_path / "state.json"
        path.write_text('{"expenses": "oops"}', encoding="utf-8")
        engine = SpendSenseEngine(storage=JsonFileStorage(path))
        assert engine.snapshot().expenses == []

        engine.add_expense(10, "Food", date="2026-10-01")
        reloaded = JsonFileStorage(path).load()
        assert reloaded is not None
        assert len(reloaded.expenses) == 1
