"""Domain models and engine for budgetsheet.

This package contains the functional core:
- Pure functions with no side effects
- No I/O operations
- Easy to test
- Business logic separated from infrastructure
"""

from budgetsheet.domain.models import (
    BudgetSheet,
    Frequency,
    ItemField,
    ItemHandle,
    ItemKind,
    LineItem,
    SheetName,
    UserId,
)
from budgetsheet.domain.summary import BalanceSign, BudgetSummary, compute_summary, monthly_equivalent

__all__ = [
    "BalanceSign",
    "BudgetSheet",
    "BudgetSummary",
    "Frequency",
    "ItemField",
    "ItemHandle",
    "ItemKind",
    "LineItem",
    "SheetName",
    "UserId",
    "compute_summary",
    "monthly_equivalent",
]
