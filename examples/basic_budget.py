# SPDX-License-Identifier: BSL-1.1
# Copyright (c) 2026 MuVeraAI Corporation

"""
basic_budget.py

Demonstrates the minimal spend-sense loop:
  1. Set a budget and pick a plan.
  2. Log a few expenses.
  3. Print limits, warnings and chart slices from the final snapshot.

Run with:  python examples/basic_budget.py
(from the project root with spend-sense installed)
"""

import math

from spend_sense import (
    AddExpense,
    DonutChart,
    EngineConfig,
    SelectPlan,
    SetBudget,
    SpendSenseEngine,
)

# ─── Setup ────────────────────────────────────────────────────────────────────

engine = SpendSenseEngine()
config: EngineConfig = engine.config

engine.dispatch(SetBudget(amount=5000))
engine.dispatch(SelectPlan(plan_id="balanced"))

# ─── Log expenses ─────────────────────────────────────────────────────────────

expenses = [
    (1200, "Food", "weekly groceries"),
    (450, "Travel", "metro card"),
    (600, "Food", "dinner out"),
    (900, "Entertainment", "concert"),
    (-20, "Other", "bad input"),
]

for amount, category, note in expenses:
    result = engine.dispatch(AddExpense(amount=amount, category=category, note=note))
    if not result.ok:
        assert result.error is not None
        print(f"REJECTED {amount:>6}  {category:<14} {result.error.code}: {result.error.message}")
        continue
    print(f"LOGGED   {config.format_amount(amount):>6}  {category}")

snapshot = engine.snapshot()

# ─── Budget summary ───────────────────────────────────────────────────────────

print("\n── Budget summary ────────────────────────────────────")
print(f"  Budget    : {config.format_amount(snapshot.budget)}")
print(f"  Spent     : {config.format_amount(snapshot.total_spent)}")
print(f"  Remaining : {config.format_amount(snapshot.remaining)}")
print(f"  Progress  : {snapshot.spent_percent:.1f}% spent")

print("\n── Category limits ───────────────────────────────────")
for category, limit in (snapshot.category_limits or {}).items():
    spent = snapshot.overall_totals.get(category, 0)
    print(f"  {category:<17} {config.format_amount(spent):>8} / {config.format_amount(limit)}")

print("\n── Warnings ──────────────────────────────────────────")
if not snapshot.warnings:
    print("  none")
for warning in snapshot.warnings:
    print(f"  {warning.category:<17} {warning.status:<9} {warning.percentage}%")

print("\n── Monthly chart ─────────────────────────────────────")
chart = snapshot.monthly_chart
if isinstance(chart, DonutChart):
    for chart_slice in chart.slices:
        degrees = math.degrees(chart_slice.sweep_angle)
        print(f"  {chart_slice.category:<17} {chart_slice.color}  {degrees:6.1f}°")
else:
    print(f"  {chart.label}")
