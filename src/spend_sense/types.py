# SPDX-License-Identifier: BSL-1.1
# Copyright (c) 2026 MuVeraAI Corporation

from __future__ import annotations

import datetime as dt
import math
from decimal import Decimal
from typing import Annotated, Literal, Optional, Union

from pydantic import BaseModel, Field, field_validator

from spend_sense.money import MAX_AMOUNT, ZERO, to_decimal

# ─── Categories ───────────────────────────────────────────────────────────────

Category = Literal["Food", "Travel", "Self Improvement", "Entertainment", "Other"]

# Declaration order. Charts are always drawn in this order.
CATEGORIES: tuple[Category, ...] = (
    "Food",
    "Travel",
    "Self Improvement",
    "Entertainment",
    "Other",
)

Theme = Literal["dark", "light"]

LockTarget = Literal["budget", "expenses", "plan"]

# ─── Expenses ─────────────────────────────────────────────────────────────────


class ExpenseRecord(BaseModel, frozen=True):
    """A single logged expense. Identified only by its position in the ledger."""

    amount: Decimal = Field(
        ..., gt=0, le=MAX_AMOUNT, description="Amount spent, in whole or fractional units"
    )
    category: Category
    date: dt.date
    note: Optional[str] = None

    @field_validator("amount", mode="before")
    @classmethod
    def amount_must_be_finite(cls, value: object) -> Decimal:
        return to_decimal(value)

    @field_validator("date", mode="before")
    @classmethod
    def date_from_datetime(cls, value: object) -> object:
        if isinstance(value, dt.datetime):
            return value.date()
        return value

    @field_validator("note")
    @classmethod
    def blank_note_is_none(cls, value: Optional[str]) -> Optional[str]:
        if value is None:
            return None
        stripped = value.strip()
        return stripped or None


# ─── Plans & budget ───────────────────────────────────────────────────────────


class SpendingPlan(BaseModel, frozen=True):
    """
    A named allocation template mapping categories to budget-share ratios.

    Ratios are not normalised: a plan may under- or over-allocate the budget.
    """

    id: str = Field(..., min_length=1)
    display_name: str = Field(..., min_length=1)
    breakdown: dict[Category, float] = Field(..., min_length=1)

    @field_validator("breakdown")
    @classmethod
    def ratios_must_be_fractions(cls, value: dict[Category, float]) -> dict[Category, float]:
        for category, ratio in value.items():
            if not math.isfinite(ratio) or ratio <= 0 or ratio > 1:
                raise ValueError(
                    f"ratio for {category!r} must be in (0, 1], got {ratio!r}"
                )
        return value


class BudgetState(BaseModel):
    """Budget, active plan and the caller-owned lock flags."""

    total_budget: Decimal = Field(default=ZERO, ge=0, le=MAX_AMOUNT)
    selected_plan_id: Optional[str] = None
    is_budget_locked: bool = False
    is_expense_locked: bool = False
    is_plan_locked: bool = False

    model_config = {"validate_assignment": True}

    @field_validator("total_budget", mode="before")
    @classmethod
    def budget_must_be_finite(cls, value: object) -> Decimal:
        return to_decimal(value)


class PlanSelection(BaseModel, frozen=True):
    """Outcome of a plan selection request."""

    status: Literal["selected", "cleared", "locked"]
    selected_plan_id: Optional[str]


# ─── Warnings ─────────────────────────────────────────────────────────────────

WarningStatus = Literal["nearing", "exceeded"]


class WarningEntry(BaseModel, frozen=True):
    """
    A category whose spend has reached the warning threshold of its limit.

    ``percentage`` is ``None`` only when the limit is zero.
    """

    category: Category
    spent: Decimal
    limit: int
    status: WarningStatus
    percentage: Optional[int]


# ─── Chart geometry ───────────────────────────────────────────────────────────


class ChartSlice(BaseModel, frozen=True):
    """One arc of a donut chart. Angles are in radians."""

    category: Category
    value: Decimal
    start_angle: float
    sweep_angle: float
    color: str

    @property
    def end_angle(self) -> float:
        return self.start_angle + self.sweep_angle


class DonutChart(BaseModel, frozen=True):
    """Slices covering the full circle, clockwise from 12 o'clock."""

    kind: Literal["donut"] = "donut"
    total: Decimal
    slices: list[ChartSlice]


class EmptyChart(BaseModel, frozen=True):
    """Placeholder ring drawn when there is nothing to chart."""

    kind: Literal["empty"] = "empty"
    ring_color: str = "#2a2a2a"
    label: str = "No data"


ChartGeometry = Annotated[Union[DonutChart, EmptyChart], Field(discriminator="kind")]

# ─── Application state ────────────────────────────────────────────────────────


class Streak(BaseModel):
    """Consecutive-day visit streak."""

    count: int = Field(default=0, ge=0)
    last_visit: Optional[dt.date] = None

    @field_validator("last_visit", mode="before")
    @classmethod
    def last_visit_from_timestamp(cls, value: object) -> object:
        # Older snapshots stored a full ISO timestamp.
        if isinstance(value, str) and "T" in value:
            return value.split("T", 1)[0]
        if isinstance(value, dt.datetime):
            return value.date()
        return value


class AppState(BaseModel):
    """Everything that is persisted between sessions."""

    theme: Theme = "dark"
    budget: BudgetState = Field(default_factory=BudgetState)
    expenses: list[ExpenseRecord] = Field(default_factory=list)
    streak: Streak = Field(default_factory=Streak)


# ─── Analysis snapshot ────────────────────────────────────────────────────────


class AnalysisSnapshot(BaseModel, frozen=True):
    """
    Everything a renderer needs after a state change.

    Derived values are recomputed from scratch for every snapshot; nothing
    in here is patched incrementally.
    """

    expenses: list[ExpenseRecord]
    expense_count: int
    budget: Decimal
    total_spent: Decimal
    remaining: Decimal
    spent_percent: float
    remaining_percent: float
    selected_plan_id: Optional[str]
    category_limits: Optional[dict[Category, int]]
    warnings: list[WarningEntry]
    monthly_totals: dict[Category, Decimal]
    overall_totals: dict[Category, Decimal]
    monthly_chart: ChartGeometry
    overall_chart: ChartGeometry
    is_budget_locked: bool
    is_expense_locked: bool
    is_plan_locked: bool
    theme: Theme
    streak: Streak
