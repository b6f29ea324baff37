# SPDX-License-Identifier: BSL-1.1
# Copyright (c) 2026 MuVeraAI Corporation

"""
Plan allocation for the spend-sense engine.

Resolves the selected spending plan and the total budget into absolute
per-category limits. Limits are derived on every call and never stored, so
they cannot drift from the budget or plan they came from.
"""

from __future__ import annotations

from collections.abc import Iterable, Mapping
from decimal import Decimal

from spend_sense.errors import BudgetRequiredError, ConfigurationError, UnknownPlanError
from spend_sense.money import round_half_up
from spend_sense.types import BudgetState, Category, PlanSelection, SpendingPlan

PlanTable = Mapping[str, SpendingPlan]


def build_plan_table(plans: Iterable[SpendingPlan]) -> dict[str, SpendingPlan]:
    """
    Index plans by id, preserving their order.

    Raises:
        ConfigurationError: If two plans share an id.
    """
    table: dict[str, SpendingPlan] = {}
    for plan in plans:
        if plan.id in table:
            raise ConfigurationError(f"Duplicate spending plan id: {plan.id!r}")
        table[plan.id] = plan
    return table


def category_limits(
    budget_state: BudgetState,
    plans: PlanTable,
) -> dict[Category, int] | None:
    """
    Compute the absolute spending limit for each category of the active plan.

    Each limit is ``budget * ratio`` rounded half-up to a whole currency unit,
    computed independently per category.

    Args:
        budget_state: Current budget and plan selection.
        plans:        Plan table keyed by plan id.

    Returns:
        A mapping covering exactly the plan's breakdown categories, in the
        plan's declaration order, or ``None`` when no plan is selected or the
        budget is not positive.

    Raises:
        UnknownPlanError: If the selected plan id is not in ``plans``.
    """
    plan_id = budget_state.selected_plan_id
    if plan_id is None or budget_state.total_budget <= 0:
        return None

    plan = plans.get(plan_id)
    if plan is None:
        raise UnknownPlanError(plan_id)

    budget = budget_state.total_budget
    return {
        category: round_half_up(budget * Decimal(str(ratio)))
        for category, ratio in plan.breakdown.items()
    }


def select_plan(
    budget_state: BudgetState,
    plan_id: str,
    plans: PlanTable,
) -> PlanSelection:
    """
    Select ``plan_id`` as the active plan, mutating ``budget_state``.

    Selecting the plan that is already active clears the selection instead.
    While ``budget_state.is_plan_locked`` is set nothing changes and a
    ``'locked'`` selection is returned.

    Raises:
        BudgetRequiredError: If the total budget is zero.
        UnknownPlanError:    If ``plan_id`` is not in ``plans``.
    """
    if budget_state.is_plan_locked:
        return PlanSelection(status="locked", selected_plan_id=budget_state.selected_plan_id)

    if budget_state.total_budget <= 0:
        raise BudgetRequiredError(plan_id)

    if plan_id not in plans:
        raise UnknownPlanError(plan_id)

    if budget_state.selected_plan_id == plan_id:
        budget_state.selected_plan_id = None
        return PlanSelection(status="cleared", selected_plan_id=None)

    budget_state.selected_plan_id = plan_id
    return PlanSelection(status="selected", selected_plan_id=plan_id)
