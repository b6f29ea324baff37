# SPDX-License-Identifier: BSL-1.1
# Copyright (c) 2026 MuVeraAI Corporation

from __future__ import annotations

import datetime as dt
import logging
from collections.abc import Mapping
from typing import Any, Callable, Optional

from spend_sense.allocator import select_plan
from spend_sense.analysis import build_snapshot
from spend_sense.commands import (
    AddExpense,
    Command,
    CommandError,
    CommandResult,
    RecordVisit,
    RemoveExpense,
    SelectPlan,
    SetBudget,
    ToggleLock,
    ToggleTheme,
    parse_command,
)
from spend_sense.config import EngineConfig
from spend_sense.errors import (
    BudgetRequiredError,
    IndexOutOfRangeError,
    InvalidBudgetError,
    InvalidCommandError,
    InvalidRecordError,
    LockedError,
    PersistenceCorruptError,
    SpendSenseError,
    UnknownPlanError,
)
from spend_sense.ledger import Ledger
from spend_sense.money import MAX_AMOUNT, to_decimal
from spend_sense.storage.interface import StateStorage
from spend_sense.storage.memory import MemoryStorage
from spend_sense.types import AnalysisSnapshot, AppState, LockTarget

logger = logging.getLogger("spend_sense.engine")

# Reported back to the caller as a failed CommandResult instead of raised.
RECOVERABLE_ERRORS: tuple[type[SpendSenseError], ...] = (
    InvalidRecordError,
    IndexOutOfRangeError,
    UnknownPlanError,
    BudgetRequiredError,
    InvalidBudgetError,
    LockedError,
)

_LOCK_FIELDS: dict[str, str] = {
    "budget": "is_budget_locked",
    "expenses": "is_expense_locked",
    "plan": "is_plan_locked",
}


class SpendSenseEngine:
    """
    Single entry point for every state change and every analysis.

    Design contract
    ---------------
    - Each command applies exactly one mutation, then the full analysis is
      recomputed from scratch and the state is saved.
    - Bad input never raises. Validation failures and locked mutations come
      back as ``CommandResult(ok=False, error=...)`` with state untouched.
    - The snapshot is computed before the state is saved. If either step
      fails, the command is rolled back in memory and the exception (for
      example an ``OSError`` from storage) propagates; nothing half-applied
      is saved.
    - A corrupt saved snapshot is discarded and the engine starts from the
      default state. A storage that cannot be read at all (``OSError``)
      fails construction instead, so an existing file is never overwritten
      with defaults.
    - "Today" is read from ``clock`` on every call, never cached.

    Usage
    -----
    ::

        engine = SpendSenseEngine(storage=JsonFileStorage("state.json"))
        engine.dispatch(SetBudget(amount=1000))
        engine.dispatch(SelectPlan(plan_id="balanced"))
        result = engine.dispatch(AddExpense(amount=420, category="Food"))
        for warning in result.snapshot.warnings:
            print(warning.category, warning.status, warning.percentage)
    """

    def __init__(
        self,
        config: EngineConfig | None = None,
        storage: StateStorage | None = None,
        clock: Callable[[], dt.date] = dt.date.today,
    ) -> None:
        self._config = config or EngineConfig()
        self._storage: StateStorage = storage if storage is not None else MemoryStorage()
        self._clock = clock
        self._plans = self._config.plan_table()
        self._state = self._load_state()

        self._handlers: dict[str, Callable[[Any], Optional[str]]] = {
            "add_expense": self._add_expense,
            "remove_expense": self._remove_expense,
            "select_plan": self._select_plan,
            "set_budget": self._set_budget,
            "toggle_lock": self._toggle_lock,
            "toggle_theme": self._toggle_theme,
            "record_visit": self._record_visit,
        }

    @property
    def config(self) -> EngineConfig:
        return self._config

    @property
    def state(self) -> AppState:
        """A deep copy of the current state — mutation has no effect."""
        return self._state.model_copy(deep=True)

    # ─── Dispatch ─────────────────────────────────────────────────────────────

    def dispatch(self, command: Command | Mapping[str, Any]) -> CommandResult:
        """
        Apply one command and return the recomputed analysis.

        ``command`` may be a typed command or a raw mapping with a ``type``
        key, e.g. ``{"type": "remove_expense", "index": 0}``.
        """
        if isinstance(command, Mapping):
            try:
                command = parse_command(command)
            except InvalidCommandError as exc:
                return self._rejected(str(command.get("type", "unknown")), exc)

        handler = self._handlers.get(getattr(command, "type", None))
        if handler is None:
            raise TypeError(f"Not a spend-sense command: {command!r}")

        previous = self._state.model_copy(deep=True)
        try:
            status = handler(command)
            snapshot = self.snapshot()
            self._storage.save(self._state)
        except RECOVERABLE_ERRORS as exc:
            self._state = previous
            return self._rejected(command.type, exc)
        except Exception:
            # Neither the live nor the saved state may keep a half-applied command.
            self._state = previous
            logger.warning("command_rolled_back", extra={"command": command.type})
            raise

        logger.info(
            "command_applied",
            extra={
                "command": command.type,
                "status": status,
                "expense_count": len(self._state.expenses),
            },
        )
        return CommandResult(ok=True, command=command.type, status=status, snapshot=snapshot)

    def snapshot(self) -> AnalysisSnapshot:
        """Recompute the analysis for the current state without changing it."""
        return build_snapshot(self._state, self._config, today=self._clock())

    # ─── Convenience wrappers ─────────────────────────────────────────────────

    def add_expense(
        self,
        amount: object,
        category: str,
        date: dt.date | str | None = None,
        note: str | None = None,
    ) -> CommandResult:
        return self.dispatch(AddExpense(amount=amount, category=category, date=date, note=note))

    def remove_expense(self, index: int) -> CommandResult:
        return self.dispatch(RemoveExpense(index=index))

    def set_budget(self, amount: object) -> CommandResult:
        return self.dispatch(SetBudget(amount=amount))

    def select_plan(self, plan_id: str) -> CommandResult:
        return self.dispatch(SelectPlan(plan_id=plan_id))

    def toggle_lock(self, target: LockTarget) -> CommandResult:
        return self.dispatch(ToggleLock(target=target))

    # ─── Handlers ─────────────────────────────────────────────────────────────

    def _add_expense(self, command: AddExpense) -> Optional[str]:
        ledger = Ledger(self._state.expenses)
        ledger.add(
            {
                "amount": command.amount,
                "category": command.category,
                "date": command.date if command.date is not None else self._clock(),
                "note": command.note,
            }
        )
        return None

    def _remove_expense(self, command: RemoveExpense) -> Optional[str]:
        if self._state.budget.is_expense_locked:
            raise LockedError("expenses")
        Ledger(self._state.expenses).remove_at(command.index)
        return None

    def _select_plan(self, command: SelectPlan) -> Optional[str]:
        selection = select_plan(self._state.budget, command.plan_id, self._plans)
        if selection.status == "locked":
            raise LockedError("plan")
        return selection.status

    def _set_budget(self, command: SetBudget) -> Optional[str]:
        if self._state.budget.is_budget_locked:
            raise LockedError("budget")
        try:
            amount = to_decimal(command.amount)
        except ValueError:
            raise InvalidBudgetError(command.amount) from None
        if amount <= 0 or amount > MAX_AMOUNT:
            raise InvalidBudgetError(command.amount)
        self._state.budget.total_budget = amount
        return None

    def _toggle_lock(self, command: ToggleLock) -> Optional[str]:
        field = _LOCK_FIELDS[command.target]
        locked = not getattr(self._state.budget, field)
        setattr(self._state.budget, field, locked)
        return "locked" if locked else "unlocked"

    def _toggle_theme(self, command: ToggleTheme) -> Optional[str]:
        self._state.theme = "light" if self._state.theme == "dark" else "dark"
        return self._state.theme

    def _record_visit(self, command: RecordVisit) -> Optional[str]:
        today = command.today if command.today is not None else self._clock()
        streak = self._state.streak
        last_visit = streak.last_visit

        if last_visit == today:
            return "unchanged"
        if last_visit is not None and today - last_visit == dt.timedelta(days=1):
            streak.count += 1
            streak.last_visit = today
            return "extended"

        streak.count = 1
        streak.last_visit = today
        return "started"

    # ─── Private helpers ──────────────────────────────────────────────────────

    def _rejected(self, command_type: str, exc: SpendSenseError) -> CommandResult:
        logger.warning(
            "command_rejected",
            extra={"command": command_type, "code": exc.code, "reason": exc.message},
        )
        return CommandResult(
            ok=False,
            command=command_type,
            status="locked" if isinstance(exc, LockedError) else "rejected",
            error=CommandError(code=exc.code, message=exc.message),
            snapshot=self.snapshot(),
        )

    def _load_state(self) -> AppState:
        """
        Load the saved state, falling back to defaults when there is none or
        it cannot be read. A selected plan that no longer exists is cleared.
        """
        try:
            state = self._storage.load()
        except PersistenceCorruptError as exc:
            logger.warning("snapshot_discarded", extra={"reason": exc.reason})
            return AppState()

        if state is None:
            return AppState()

        plan_id = state.budget.selected_plan_id
        if plan_id is not None and plan_id not in self._plans:
            logger.warning("unknown_plan_cleared", extra={"plan_id": plan_id})
            state.budget.selected_plan_id = None
        return state
