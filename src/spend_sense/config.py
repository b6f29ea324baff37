# SPDX-License-Identifier: BSL-1.1
# Copyright (c) 2026 MuVeraAI Corporation
from __future__ import annotations

from decimal import Decimal
from typing import Annotated, Literal

from pydantic import BaseModel, Field, model_validator

from spend_sense.alerts import DEFAULT_WARNING_THRESHOLD
from spend_sense.allocator import build_plan_table
from spend_sense.chart import CATEGORY_COLORS, check_palette_coverage
from spend_sense.money import format_amount
from spend_sense.types import Category, SpendingPlan

DEFAULT_PLANS: tuple[SpendingPlan, ...] = (
    SpendingPlan(
        id="balanced",
        display_name="Balanced",
        breakdown={
            "Food": 0.35,
            "Travel": 0.2,
            "Self Improvement": 0.15,
            "Entertainment": 0.15,
            "Other": 0.15,
        },
    ),
    SpendingPlan(
        id="saver",
        display_name="Saver",
        breakdown={
            "Food": 0.4,
            "Travel": 0.1,
            "Self Improvement": 0.2,
            "Entertainment": 0.05,
            "Other": 0.1,
        },
    ),
    SpendingPlan(
        id="explorer",
        display_name="Explorer",
        breakdown={
            "Food": 0.25,
            "Travel": 0.4,
            "Self Improvement": 0.1,
            "Entertainment": 0.15,
            "Other": 0.1,
        },
    ),
)


class EngineConfig(BaseModel, frozen=True):
    """
    Configuration for the SpendSenseEngine.

    All fields are optional; defaults reproduce the stock web app.

    Attributes:
        warning_threshold: Fraction of a category limit at which a
            ``'nearing'`` warning is raised.
        warning_window: Which category totals are compared against limits:
            the whole ledger (``'all_time'``) or only the current calendar
            month (``'current_month'``).
        palette: Chart color per category. Must cover every category.
        plans: Available spending plans. Ids must be unique.
        currency_symbol: Prefix used by :meth:`format_amount`.

    Example::

        config = EngineConfig(warning_threshold=0.9, warning_window="current_month")
        engine = SpendSenseEngine(config=config)
    """

    warning_threshold: Annotated[float, Field(gt=0, le=1)] = DEFAULT_WARNING_THRESHOLD
    warning_window: Literal["all_time", "current_month"] = "all_time"
    palette: dict[Category, str] = Field(default_factory=lambda: dict(CATEGORY_COLORS))
    plans: list[SpendingPlan] = Field(default_factory=lambda: list(DEFAULT_PLANS))
    currency_symbol: str = "₹"

    @model_validator(mode="after")
    def tables_cover_categories(self) -> "EngineConfig":
        # ConfigurationError is not a ValueError, so it escapes pydantic unwrapped.
        check_palette_coverage(self.palette)
        build_plan_table(self.plans)
        return self

    def plan_table(self) -> dict[str, SpendingPlan]:
        """Plans keyed by id, in configuration order."""
        return build_plan_table(self.plans)

    def format_amount(self, amount: Decimal | int) -> str:
        """Format ``amount`` with the configured currency symbol."""
        return format_amount(amount, symbol=self.currency_symbol)
