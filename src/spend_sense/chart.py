# SPDX-License-Identifier: BSL-1.1
# Copyright (c) 2026 MuVeraAI Corporation

from __future__ import annotations

import math
from collections.abc import Mapping
from decimal import Decimal

from spend_sense.errors import ConfigurationError, UnknownCategoryColorError
from spend_sense.money import ZERO, to_decimal
from spend_sense.types import CATEGORIES, Category, ChartSlice, DonutChart, EmptyChart

# 12 o'clock, then clockwise for one full turn.
START_ANGLE = -math.pi / 2
FULL_TURN = 2 * math.pi
END_ANGLE = START_ANGLE + FULL_TURN

CATEGORY_COLORS: dict[Category, str] = {
    "Food": "#2ecc71",
    "Travel": "#3498db",
    "Self Improvement": "#1abc9c",
    "Entertainment": "#9b59b6",
    "Other": "#e74c3c",
}

EMPTY_CHART = EmptyChart()


def check_palette_coverage(palette: Mapping[str, str]) -> None:
    """
    Verify that ``palette`` assigns a color to exactly the known categories.

    Raises ConfigurationError listing any missing or unexpected entries.
    """
    missing = [category for category in CATEGORIES if category not in palette]
    unexpected = sorted(set(palette) - set(CATEGORIES))
    if missing or unexpected:
        raise ConfigurationError(
            f"Chart palette must cover {list(CATEGORIES)}; "
            f"missing={missing}, unexpected={unexpected}"
        )


def build_slices(
    category_totals: Mapping[Category, Decimal],
    palette: Mapping[str, str] = CATEGORY_COLORS,
) -> DonutChart | EmptyChart:
    """
    Convert sparse category totals into donut-chart slices.

    Slices follow CATEGORIES declaration order regardless of the order of
    ``category_totals``, starting at 12 o'clock. The last slice is closed onto
    the starting angle so accumulated float error never leaves a gap.

    Returns EMPTY_CHART when the totals sum to zero.

    Raises:
        UnknownCategoryColorError: If a category with spend has no palette color.
        ValueError:                If any total is negative or keyed by an
                                   unknown category.
    """
    values: dict[str, Decimal] = {}
    for category, amount in category_totals.items():
        value = to_decimal(amount)
        if value < 0:
            raise ValueError(f"Chart value for {category!r} is negative: {value}")
        if category not in CATEGORIES:
            raise ValueError(f"Unknown chart category: {category!r}")
        if value == 0:
            continue
        if category not in palette:
            raise UnknownCategoryColorError(category)
        values[category] = value

    total = sum(values.values(), ZERO)
    if total == 0:
        return EMPTY_CHART

    ordered = [category for category in CATEGORIES if category in values]

    slices: list[ChartSlice] = []
    start_angle = START_ANGLE
    last_index = len(ordered) - 1

    for index, category in enumerate(ordered):
        value = values[category]
        if index == last_index:
            sweep_angle = END_ANGLE - start_angle
        else:
            sweep_angle = FULL_TURN * float(value / total)

        slices.append(
            ChartSlice(
                category=category,
                value=value,
                start_angle=start_angle,
                sweep_angle=sweep_angle,
                color=palette[category],
            )
        )
        start_angle += sweep_angle

    return DonutChart(total=total, slices=slices)
