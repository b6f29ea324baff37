# SPDX-License-Identifier: BSL-1.1
# Copyright (c) 2026 MuVeraAI Corporation

"""
Overspend warnings for the spend-sense engine.

Compares per-category spend against plan limits using a single static
threshold. A category at or above the threshold is ``'nearing'``; at or above
its limit it is ``'exceeded'``. Categories below the threshold produce no
entry at all.
"""

from __future__ import annotations

from collections.abc import Mapping
from decimal import Decimal

from spend_sense.money import ZERO, round_half_up, to_decimal
from spend_sense.types import Category, WarningEntry

# Fraction of a limit at which a category starts to warn.
DEFAULT_WARNING_THRESHOLD = 0.8


def spend_percentage(spent: Decimal, limit: int) -> int | None:
    """Spend as a whole percentage of ``limit``; ``None`` for a zero limit."""
    if limit == 0:
        return None
    return round_half_up(spent * 100 / Decimal(limit))


def classify(
    limits: Mapping[Category, int] | None,
    spending: Mapping[Category, Decimal],
    threshold: float = DEFAULT_WARNING_THRESHOLD,
) -> list[WarningEntry]:
    """
    Build warning entries for every category that has reached the threshold.

    Both boundaries are inclusive: ``spent == limit`` is exceeded and
    ``spent == limit * threshold`` is nearing. A zero limit is exceeded
    immediately with ``percentage=None``.

    Args:
        limits:    Category limits from the allocator, or ``None`` when no
                   plan is active.
        spending:  Sparse category totals; missing categories count as zero.
        threshold: Warning ratio in ``(0, 1]``.

    Returns:
        Entries in the iteration order of ``limits``. Not sorted by severity.
        Empty when ``limits`` is ``None``.

    Raises:
        ValueError: If ``threshold`` is outside ``(0, 1]``.
    """
    if not 0 < threshold <= 1:
        raise ValueError(f"threshold must be in (0, 1], got {threshold!r}")
    if limits is None:
        return []

    ratio = Decimal(str(threshold))
    entries: list[WarningEntry] = []

    for category, limit in limits.items():
        spent = to_decimal(spending.get(category, ZERO))

        if spent >= limit:
            status = "exceeded"
        elif spent >= limit * ratio:
            status = "nearing"
        else:
            continue

        entries.append(
            WarningEntry(
                category=category,
                spent=spent,
                limit=limit,
                status=status,
                percentage=spend_percentage(spent, limit),
            )
        )

    return entries
