# SPDX-License-Identifier: BSL-1.1
# Copyright (c) 2026 MuVeraAI Corporation
from __future__ import annotations


class SpendSenseError(Exception):
    """Base class for all spend-sense errors."""

    def __init__(self, message: str, code: str = "SPEND_SENSE_ERROR") -> None:
        super().__init__(message)
        self.code = code
        self.message = message

    def __repr__(self) -> str:
        return f"{type(self).__name__}(code={self.code!r}, message={self.message!r})"


class InvalidRecordError(SpendSenseError):
    """
    Raised when an expense record fails validation.

    Attributes:
        field: The offending input field, when it can be identified.
        reason: Validation message for that field.
    """

    def __init__(self, reason: str, field: str | None = None) -> None:
        field_text = f" ({field})" if field else ""
        super().__init__(
            f"Invalid expense record{field_text}: {reason}",
            code="INVALID_RECORD",
        )
        self.field = field
        self.reason = reason


class IndexOutOfRangeError(SpendSenseError):
    """
    Raised when a removal index does not address a ledger entry.

    Attributes:
        index: The requested index.
        length: Ledger length at the time of the request.
    """

    def __init__(self, index: object, length: int) -> None:
        super().__init__(
            f"Expense index {index!r} is out of range for a ledger of {length} entries.",
            code="INDEX_OUT_OF_RANGE",
        )
        self.index = index
        self.length = length


class UnknownPlanError(SpendSenseError):
    """Raised when a plan id is not present in the plan table."""

    def __init__(self, plan_id: str) -> None:
        super().__init__(
            f"Spending plan '{plan_id}' does not exist.",
            code="UNKNOWN_PLAN",
        )
        self.plan_id = plan_id


class BudgetRequiredError(SpendSenseError):
    """Raised when a plan is selected before a positive budget has been set."""

    def __init__(self, plan_id: str) -> None:
        super().__init__(
            f"Set a budget greater than zero before selecting plan '{plan_id}'.",
            code="BUDGET_REQUIRED",
        )
        self.plan_id = plan_id


class InvalidBudgetError(SpendSenseError):
    """Raised when a budget amount is not a finite positive number."""

    def __init__(self, value: object) -> None:
        super().__init__(
            f"Budget must be a positive amount; got {value!r}.",
            code="INVALID_BUDGET",
        )
        self.value = value


class LockedError(SpendSenseError):
    """
    Raised when a mutation is attempted while its lock flag is set.

    Attributes:
        target: Which lock blocked the mutation (``'budget'``, ``'expenses'``
            or ``'plan'``).
    """

    def __init__(self, target: str) -> None:
        super().__init__(
            f"The {target} lock is on; unlock it before making changes.",
            code="LOCKED",
        )
        self.target = target


class UnknownCategoryColorError(SpendSenseError):
    """Raised when a charted category has no entry in the color palette."""

    def __init__(self, category: str) -> None:
        super().__init__(
            f"No chart color configured for category '{category}'.",
            code="UNKNOWN_CATEGORY_COLOR",
        )
        self.category = category


class PersistenceCorruptError(SpendSenseError):
    """Raised when a saved state snapshot cannot be parsed."""

    def __init__(self, reason: str) -> None:
        super().__init__(
            f"Saved state is unreadable: {reason}",
            code="PERSISTENCE_CORRUPT",
        )
        self.reason = reason


class InvalidCommandError(SpendSenseError):
    """Raised when a raw command payload does not match any known command."""

    def __init__(self, reason: str) -> None:
        super().__init__(f"Invalid command: {reason}", code="INVALID_COMMAND")
        self.reason = reason


class ConfigurationError(SpendSenseError):
    """Raised when palette or plan configuration is inconsistent."""

    def __init__(self, message: str) -> None:
        super().__init__(message, code="CONFIGURATION_ERROR")
