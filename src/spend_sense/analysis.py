# SPDX-License-Identifier: BSL-1.1
# Copyright (c) 2026 MuVeraAI Corporation

from __future__ import annotations

import datetime as dt
from decimal import Decimal

from spend_sense.alerts import classify
from spend_sense.allocator import category_limits
from spend_sense.chart import build_slices
from spend_sense.config import EngineConfig
from spend_sense.ledger import Ledger
from spend_sense.money import ZERO
from spend_sense.types import AnalysisSnapshot, AppState


def progress_shares(budget: Decimal, total_spent: Decimal) -> tuple[float, float]:
    """
    Return ``(spent_percent, remaining_percent)`` for the budget progress bar.

    Both are clamped to ``[0, 100]`` and are zero when no budget is set.
    """
    if budget <= 0:
        return 0.0, 0.0
    spent_percent = min(float(total_spent / budget * 100), 100.0)
    remaining_percent = max(100.0 - spent_percent, 0.0)
    return spent_percent, remaining_percent


def build_snapshot(
    state: AppState,
    config: EngineConfig,
    today: dt.date | None = None,
) -> AnalysisSnapshot:
    """
    Recompute every derived view from ``state``.

    This is the only place derived values are produced. It reads state and
    never modifies it; ``today`` defaults to the current date at call time.

    Raises:
        UnknownPlanError: If the selected plan is missing from the config.
    """
    reference = today if today is not None else dt.date.today()
    ledger = Ledger(state.expenses)
    budget = state.budget.total_budget

    total_spent = ledger.total_spent()
    remaining = max(budget - total_spent, ZERO)
    spent_percent, remaining_percent = progress_shares(budget, total_spent)

    monthly_totals = ledger.monthly_totals(reference)
    overall_totals = ledger.overall_totals()

    limits = category_limits(state.budget, config.plan_table())
    spending = monthly_totals if config.warning_window == "current_month" else overall_totals
    warnings = classify(limits, spending, config.warning_threshold)

    return AnalysisSnapshot(
        expenses=list(ledger.records),
        expense_count=len(ledger),
        budget=budget,
        total_spent=total_spent,
        remaining=remaining,
        spent_percent=spent_percent,
        remaining_percent=remaining_percent,
        selected_plan_id=state.budget.selected_plan_id,
        category_limits=limits,
        warnings=warnings,
        monthly_totals=monthly_totals,
        overall_totals=overall_totals,
        monthly_chart=build_slices(monthly_totals, config.palette),
        overall_chart=build_slices(overall_totals, config.palette),
        is_budget_locked=state.budget.is_budget_locked,
        is_expense_locked=state.budget.is_expense_locked,
        is_plan_locked=state.budget.is_plan_locked,
        theme=state.theme,
        streak=state.streak.model_copy(),
    )
