# SPDX-License-Identifier: BSL-1.1
# Copyright (c) 2026 MuVeraAI Corporation

from __future__ import annotations

import datetime as dt
from collections.abc import Iterator, Mapping
from decimal import Decimal
from typing import Any, Callable, Optional

from pydantic import ValidationError

from spend_sense.errors import IndexOutOfRangeError, InvalidRecordError
from spend_sense.money import ZERO
from spend_sense.types import Category, ExpenseRecord

RecordPredicate = Callable[[ExpenseRecord], bool]


def build_record(
    amount: object,
    category: object,
    date: object,
    note: Optional[str] = None,
) -> ExpenseRecord:
    """
    Build a validated ExpenseRecord from raw form input.

    Raises InvalidRecordError if the amount is not a finite value above zero,
    the category is not one of CATEGORIES, or the date is not a calendar date.
    """
    try:
        return ExpenseRecord(amount=amount, category=category, date=date, note=note)
    except ValidationError as exc:
        first = exc.errors()[0]
        field = ".".join(str(part) for part in first["loc"]) or None
        raise InvalidRecordError(first["msg"], field=field) from None


def in_current_month(today: dt.date | None = None) -> RecordPredicate:
    """
    Return a predicate matching records dated in the same calendar month as
    ``today``. The date is read when this function is called, never cached.
    """
    reference = today if today is not None else dt.date.today()

    def predicate(record: ExpenseRecord) -> bool:
        return record.date.year == reference.year and record.date.month == reference.month

    return predicate


class Ledger:
    """
    Ordered collection of expense records.

    Insertion order is both the display order and the removal-index order.
    The ledger operates on the list it is given, so wrapping
    ``AppState.expenses`` mutates that state directly.

    Usage::

        ledger = Ledger()
        ledger.add(build_record(350, "Food", "2026-10-02", note="groceries"))
        ledger.total_spent()          # Decimal('350')
        ledger.category_totals()      # {'Food': Decimal('350')}
    """

    def __init__(self, records: list[ExpenseRecord] | None = None) -> None:
        self._records: list[ExpenseRecord] = records if records is not None else []

    def __len__(self) -> int:
        return len(self._records)

    def __iter__(self) -> Iterator[ExpenseRecord]:
        # Iterate over a copy so a mutation mid-loop cannot skip entries.
        return iter(tuple(self._records))

    @property
    def records(self) -> tuple[ExpenseRecord, ...]:
        return tuple(self._records)

    # ─── Mutation ─────────────────────────────────────────────────────────────

    def add(self, record: ExpenseRecord | Mapping[str, Any]) -> ExpenseRecord:
        """
        Append a record at the tail.

        The record is validated again even when it is already an
        ExpenseRecord, since ``model_construct`` can bypass validation.
        Raises InvalidRecordError on bad input; the ledger is left unchanged.
        """
        if isinstance(record, ExpenseRecord):
            validated = build_record(record.amount, record.category, record.date, record.note)
        elif isinstance(record, Mapping):
            validated = build_record(
                record.get("amount"),
                record.get("category"),
                record.get("date"),
                record.get("note"),
            )
        else:
            raise InvalidRecordError(f"expected an expense record, got {type(record).__name__}")

        self._records.append(validated)
        return validated

    def remove_at(self, index: int) -> ExpenseRecord:
        """
        Remove and return the record at ``index``.

        Later records shift down by one; callers must not reuse indices
        across mutations. Negative indices are rejected.
        """
        if isinstance(index, bool) or not isinstance(index, int):
            raise IndexOutOfRangeError(index, len(self._records))
        if not 0 <= index < len(self._records):
            raise IndexOutOfRangeError(index, len(self._records))
        return self._records.pop(index)

    # ─── Queries ──────────────────────────────────────────────────────────────

    def total_spent(self) -> Decimal:
        """Exact sum of every amount in the ledger."""
        return sum((record.amount for record in self._records), ZERO)

    def category_totals(
        self,
        predicate: RecordPredicate | None = None,
    ) -> dict[Category, Decimal]:
        """
        Sum amounts per category for records matching ``predicate``.

        The result is sparse: categories without spend are absent rather than
        mapped to zero.
        """
        totals: dict[Category, Decimal] = {}
        for record in tuple(self._records):
            if predicate is not None and not predicate(record):
                continue
            totals[record.category] = totals.get(record.category, ZERO) + record.amount
        return totals

    def monthly_totals(self, today: dt.date | None = None) -> dict[Category, Decimal]:
        """Category totals for the calendar month containing ``today``."""
        return self.category_totals(in_current_month(today))

    def overall_totals(self) -> dict[Category, Decimal]:
        """Category totals across the whole ledger."""
        return self.category_totals()
