# SPDX-License-Identifier: BSL-1.1
# Copyright (c) 2026 MuVeraAI Corporation

from __future__ import annotations

from decimal import ROUND_HALF_UP, Decimal, InvalidOperation

ZERO = Decimal("0")

# Largest budget or single expense accepted. Keeps every derived sum and
# limit well inside the default 28-digit decimal context.
MAX_AMOUNT = Decimal("1e15")


def to_decimal(value: object) -> Decimal:
    """
    Convert a user-supplied amount into a finite Decimal.

    Floats go through ``str()`` so that ``0.1`` becomes ``Decimal("0.1")``
    rather than its binary expansion. Booleans, NaN and infinities are rejected.

    Raises ValueError for anything that is not a finite number.
    """
    if isinstance(value, bool):
        raise ValueError(f"Expected a number, got {value!r}")
    if isinstance(value, Decimal):
        result = value
    elif isinstance(value, (int, float)):
        result = Decimal(str(value))
    elif isinstance(value, str):
        try:
            result = Decimal(value.strip())
        except InvalidOperation:
            raise ValueError(f"Not a number: {value!r}") from None
    else:
        raise ValueError(f"Expected a number, got {type(value).__name__}")

    if not result.is_finite():
        raise ValueError(f"Amount must be finite, got {value!r}")
    return result


def round_half_up(value: Decimal) -> int:
    """Round to the nearest whole currency unit, ties away from zero."""
    return int(value.to_integral_value(rounding=ROUND_HALF_UP))


def format_amount(amount: Decimal | int, symbol: str = "₹") -> str:
    """
    Format an amount for display, e.g. ``'₹1,250'`` or ``'₹99.50'``.

    Whole amounts are shown without a fractional part.
    """
    value = to_decimal(amount)
    if value == value.to_integral_value():
        return f"{symbol}{int(value):,}"
    return f"{symbol}{value:,.2f}"
