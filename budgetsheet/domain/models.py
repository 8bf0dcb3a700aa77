"""Domain type definitions for budgetsheet.

These types describe the data the engine works with:
- Frequency: recurrence period of a line item (codes 1-4)
- ItemKind: which side of the sheet an item lives on
- LineItem: one recurring income or expense entry
- BudgetSheet: a named pair of income and expense collections
"""

from dataclasses import dataclass, field
from decimal import Decimal
from enum import Enum, IntEnum
from typing import NewType

# Stable reference to an item inside a LineItemStore, never reused
ItemHandle = NewType("ItemHandle", int)

# Sheet name, unique per user
SheetName = NewType("SheetName", str)

# Row id of a user in the persistence store
UserId = NewType("UserId", int)


class Frequency(IntEnum):
    """Recurrence period of a line item."""

    WEEKLY = 1
    BIWEEKLY = 2
    EVERY_THREE_WEEKS = 3
    MONTHLY = 4

    @property
    def label(self) -> str:
        return _FREQUENCY_LABELS[self]


_FREQUENCY_LABELS = {
    Frequency.WEEKLY: "Weekly",
    Frequency.BIWEEKLY: "Every 2 weeks",
    Frequency.EVERY_THREE_WEEKS: "Every 3 weeks",
    Frequency.MONTHLY: "Monthly",
}


class ItemKind(str, Enum):
    """Side of the budget sheet an item belongs to."""

    INCOME = "income"
    EXPENSE = "expense"


class ItemField(str, Enum):
    """Editable fields of a line item."""

    DESCRIPTION = "description"
    AMOUNT = "amount"
    FREQUENCY = "frequency"


@dataclass
class LineItem:
    """A recurring income or expense entry.

    Mutable: the store edits items in place.
    """

    description: str = ""
    amount: Decimal = Decimal("0")
    frequency: Frequency = Frequency.MONTHLY

    def is_blank(self) -> bool:
        """Check whether the row carries no data (empty description and zero amount)."""
        return not self.description and self.amount == 0

    def copy(self) -> "LineItem":
        return LineItem(self.description, self.amount, self.frequency)


@dataclass
class BudgetSheet:
    """Named pair of ordered income and expense collections."""

    name: SheetName
    income_items: list[LineItem] = field(default_factory=list)
    expense_items: list[LineItem] = field(default_factory=list)
