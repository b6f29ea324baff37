# SPDX-License-Identifier: BSL-1.1
# Copyright (c) 2026 MuVeraAI Corporation
"""Shared fixtures for spend-sense tests."""

from __future__ import annotations

import datetime as dt

import pytest

from spend_sense.engine import SpendSenseEngine
from spend_sense.ledger import Ledger, build_record
from spend_sense.storage.memory import MemoryStorage

TODAY = dt.date(2026, 10, 19)


@pytest.fixture
def today() -> dt.date:
    return TODAY


@pytest.fixture
def storage() -> MemoryStorage:
    return MemoryStorage()


@pytest.fixture
def engine(storage: MemoryStorage) -> SpendSenseEngine:
    """A fresh engine with a fixed clock and in-memory storage."""
    return SpendSenseEngine(storage=storage, clock=lambda: TODAY)


@pytest.fixture
def budgeted_engine(engine: SpendSenseEngine) -> SpendSenseEngine:
    """An engine with a 1000 budget and the 'balanced' plan selected."""
    engine.set_budget(1000)
    engine.select_plan("balanced")
    return engine


@pytest.fixture
def ledger() -> Ledger:
    """A ledger holding three expenses, two of them in the current month."""
    ledger = Ledger()
    ledger.add(build_record(100, "Food", "2026-10-01", note="groceries"))
    ledger.add(build_record("45.50", "Travel", "2026-09-12"))
    ledger.add(build_record(200, "Entertainment", "2026-10-18"))
    return ledger
