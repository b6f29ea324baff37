# SPDX-License-Identifier: BSL-1.1
# Copyright (c) 2026 MuVeraAI Corporation

"""
State snapshot codec.

The snapshot is a flat JSON object whose top-level keys match what the web
app keeps in local storage (``budget``, ``isBudgetLocked``, ``selectedPlan``,
...). Money is written as decimal strings and dates as ISO ``YYYY-MM-DD``.
Snapshots written by the web app itself (numeric amounts, no ``version``
key) load unchanged.
"""

from __future__ import annotations

import json
from collections.abc import Mapping
from typing import Any

from pydantic import ValidationError

from spend_sense.errors import PersistenceCorruptError
from spend_sense.types import AppState

SNAPSHOT_VERSION = 1


def dump_state(state: AppState) -> dict[str, Any]:
    """Serialise ``state`` into a JSON-compatible snapshot."""
    budget = state.budget
    return {
        "version": SNAPSHOT_VERSION,
        "theme": state.theme,
        "budget": str(budget.total_budget),
        "selectedPlan": budget.selected_plan_id,
        "isBudgetLocked": budget.is_budget_locked,
        "isExpenseLocked": budget.is_expense_locked,
        "isPlanLocked": budget.is_plan_locked,
        "expenses": [record.model_dump(mode="json") for record in state.expenses],
        "streak": {
            "count": state.streak.count,
            "lastVisit": (
                state.streak.last_visit.isoformat() if state.streak.last_visit else None
            ),
        },
    }


def load_state(payload: Any) -> AppState:
    """
    Rebuild an AppState from a snapshot.

    Missing keys fall back to defaults. Anything structurally wrong raises.

    Raises:
        PersistenceCorruptError: If the payload is not a snapshot object, has
            an unsupported version, or contains invalid values.
    """
    if not isinstance(payload, Mapping):
        raise PersistenceCorruptError(f"expected a JSON object, got {type(payload).__name__}")

    version = payload.get("version", SNAPSHOT_VERSION)
    if version != SNAPSHOT_VERSION:
        raise PersistenceCorruptError(f"unsupported snapshot version {version!r}")

    streak = payload.get("streak") or {}
    if not isinstance(streak, Mapping):
        raise PersistenceCorruptError("streak must be an object")

    candidate = {
        "theme": payload.get("theme", "dark"),
        "budget": {
            "total_budget": payload.get("budget") or 0,
            "selected_plan_id": payload.get("selectedPlan"),
            "is_budget_locked": payload.get("isBudgetLocked", False),
            "is_expense_locked": payload.get("isExpenseLocked", False),
            "is_plan_locked": payload.get("isPlanLocked", False),
        },
        "expenses": payload.get("expenses") or [],
        "streak": {
            "count": streak.get("count", 0),
            "last_visit": streak.get("lastVisit"),
        },
    }

    try:
        return AppState.model_validate(candidate)
    except ValidationError as exc:
        first = exc.errors()[0]
        location = ".".join(str(part) for part in first["loc"])
        raise PersistenceCorruptError(f"{location}: {first['msg']}") from None


def dumps_state(state: AppState) -> str:
    """Serialise ``state`` to JSON text."""
    return json.dumps(dump_state(state), ensure_ascii=False)


def loads_state(text: str) -> AppState:
    """
    Parse JSON text produced by :func:`dumps_state` (or by the web app).

    Raises:
        PersistenceCorruptError: If the text is not valid JSON or not a valid
            snapshot.
    """
    try:
        payload = json.loads(text)
    except json.JSONDecodeError as exc:
        raise PersistenceCorruptError(f"invalid JSON ({exc.msg})") from None
    except (ValueError, RecursionError) as exc:
        # Oversized integer literals and pathologically deep nesting.
        raise PersistenceCorruptError(f"unreadable JSON ({type(exc).__name__})") from None
    return load_state(payload)
