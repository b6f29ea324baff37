# SPDX-License-Identifier: BSL-1.1
# Copyright (c) 2026 MuVeraAI Corporation

"""
Typed commands accepted by :class:`~spend_sense.engine.SpendSenseEngine`.

Every user action is one command. Commands carry raw input; validation happens
inside the engine so that a malformed command produces an error result rather
than an exception at the call site.
"""

from __future__ import annotations

import datetime as dt
from collections.abc import Mapping
from typing import Annotated, Any, Literal, Optional, Union

from pydantic import BaseModel, Field, TypeAdapter, ValidationError

from spend_sense.errors import InvalidCommandError
from spend_sense.types import AnalysisSnapshot, LockTarget

# ─── Commands ─────────────────────────────────────────────────────────────────


class AddExpense(BaseModel, frozen=True):
    """Log an expense. A missing date means today."""

    type: Literal["add_expense"] = "add_expense"
    amount: Any
    category: Any
    date: Optional[Union[dt.date, str]] = None
    note: Optional[str] = None


class RemoveExpense(BaseModel, frozen=True):
    """Remove the expense at ``index`` in the current ledger order."""

    type: Literal["remove_expense"] = "remove_expense"
    index: int


class SelectPlan(BaseModel, frozen=True):
    """Select a plan, or clear it when it is already selected."""

    type: Literal["select_plan"] = "select_plan"
    plan_id: str


class SetBudget(BaseModel, frozen=True):
    type: Literal["set_budget"] = "set_budget"
    amount: Any


class ToggleLock(BaseModel, frozen=True):
    type: Literal["toggle_lock"] = "toggle_lock"
    target: LockTarget


class ToggleTheme(BaseModel, frozen=True):
    type: Literal["toggle_theme"] = "toggle_theme"


class RecordVisit(BaseModel, frozen=True):
    """Register a visit for the daily streak. A missing date means today."""

    type: Literal["record_visit"] = "record_visit"
    today: Optional[dt.date] = None


Command = Annotated[
    Union[AddExpense, RemoveExpense, SelectPlan, SetBudget, ToggleLock, ToggleTheme, RecordVisit],
    Field(discriminator="type"),
]

_command_adapter: TypeAdapter[Command] = TypeAdapter(Command)


def parse_command(payload: Mapping[str, Any]) -> Command:
    """
    Build a typed command from a raw mapping such as a decoded JSON message.

    Raises:
        InvalidCommandError: If ``type`` is unknown or a field is malformed.
    """
    try:
        return _command_adapter.validate_python(dict(payload))
    except ValidationError as exc:
        first = exc.errors()[0]
        location = ".".join(str(part) for part in first["loc"])
        reason = f"{location}: {first['msg']}" if location else first["msg"]
        raise InvalidCommandError(reason) from None


# ─── Results ──────────────────────────────────────────────────────────────────


class CommandError(BaseModel, frozen=True):
    """A recoverable failure, reported instead of raised."""

    code: str
    message: str


class CommandResult(BaseModel, frozen=True):
    """
    Outcome of dispatching a single command.

    Attributes:
        ok: True when the command was applied.
        command: The command ``type`` that was dispatched.
        status: Extra outcome detail, e.g. ``'selected'`` or ``'cleared'``
            for plan selection.
        error: Populated when ``ok`` is False.
        snapshot: Freshly recomputed analysis of the state after the command.
    """

    ok: bool
    command: str
    status: Optional[str] = None
    error: Optional[CommandError] = None
    snapshot: AnalysisSnapshot
