# SPDX-License-Identifier: BSL-1.1
# Copyright (c) 2026 MuVeraAI Corporation

"""
spend-sense — budget allocation and spend analysis for personal expenses.

Quick start::

    from spend_sense import AddExpense, SelectPlan, SetBudget, SpendSenseEngine

    engine = SpendSenseEngine()
    engine.dispatch(SetBudget(amount=1000))
    engine.dispatch(SelectPlan(plan_id="balanced"))

    result = engine.dispatch(AddExpense(amount=320, category="Food"))
    if result.ok:
        for warning in result.snapshot.warnings:
            print(warning.category, warning.status, warning.percentage)
"""

from spend_sense.alerts import DEFAULT_WARNING_THRESHOLD, classify, spend_percentage
from spend_sense.allocator import build_plan_table, category_limits, select_plan
from spend_sense.analysis import build_snapshot, progress_shares
from spend_sense.chart import (
    CATEGORY_COLORS,
    EMPTY_CHART,
    END_ANGLE,
    FULL_TURN,
    START_ANGLE,
    build_slices,
    check_palette_coverage,
)
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
from spend_sense.config import DEFAULT_PLANS, EngineConfig
from spend_sense.engine import SpendSenseEngine
from spend_sense.errors import (
    BudgetRequiredError,
    ConfigurationError,
    IndexOutOfRangeError,
    InvalidBudgetError,
    InvalidCommandError,
    InvalidRecordError,
    LockedError,
    PersistenceCorruptError,
    SpendSenseError,
    UnknownCategoryColorError,
    UnknownPlanError,
)
from spend_sense.ledger import Ledger, build_record, in_current_month
from spend_sense.money import MAX_AMOUNT, format_amount, round_half_up, to_decimal
from spend_sense.persistence import dump_state, dumps_state, load_state, loads_state
from spend_sense.storage import JsonFileStorage, MemoryStorage, StateStorage
from spend_sense.types import (
    CATEGORIES,
    AnalysisSnapshot,
    AppState,
    BudgetState,
    Category,
    ChartGeometry,
    ChartSlice,
    DonutChart,
    EmptyChart,
    ExpenseRecord,
    PlanSelection,
    SpendingPlan,
    Streak,
    WarningEntry,
)

__all__ = [
    # Core class
    "SpendSenseEngine",
    "EngineConfig",
    "DEFAULT_PLANS",
    # Types
    "Category",
    "CATEGORIES",
    "ExpenseRecord",
    "SpendingPlan",
    "BudgetState",
    "PlanSelection",
    "WarningEntry",
    "ChartSlice",
    "DonutChart",
    "EmptyChart",
    "ChartGeometry",
    "Streak",
    "AppState",
    "AnalysisSnapshot",
    # Commands
    "Command",
    "AddExpense",
    "RemoveExpense",
    "SelectPlan",
    "SetBudget",
    "ToggleLock",
    "ToggleTheme",
    "RecordVisit",
    "CommandError",
    "CommandResult",
    "parse_command",
    # Errors
    "SpendSenseError",
    "InvalidRecordError",
    "IndexOutOfRangeError",
    "UnknownPlanError",
    "BudgetRequiredError",
    "InvalidBudgetError",
    "LockedError",
    "UnknownCategoryColorError",
    "PersistenceCorruptError",
    "InvalidCommandError",
    "ConfigurationError",
    # Storage
    "StateStorage",
    "MemoryStorage",
    "JsonFileStorage",
    # Utilities
    "Ledger",
    "build_record",
    "in_current_month",
    "build_plan_table",
    "category_limits",
    "select_plan",
    "classify",
    "spend_percentage",
    "DEFAULT_WARNING_THRESHOLD",
    "build_slices",
    "check_palette_coverage",
    "CATEGORY_COLORS",
    "EMPTY_CHART",
    "START_ANGLE",
    "END_ANGLE",
    "FULL_TURN",
    "build_snapshot",
    "progress_shares",
    "dump_state",
    "load_state",
    "dumps_state",
    "loads_state",
    "MAX_AMOUNT",
    "to_decimal",
    "round_half_up",
    "format_amount",
]
