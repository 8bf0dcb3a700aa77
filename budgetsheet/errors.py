"""Exceptions raised by budgetsheet.

Malformed amounts and frequencies are never errors; they are normalized to
defaults by budgetsheet.domain.normalize.
"""


class BudgetSheetError(Exception):
    """Base class for all budgetsheet errors."""


class NotFoundError(BudgetSheetError):
    """A referenced item or sheet does not exist."""


class ItemNotFoundError(NotFoundError):
    """An item handle is not (or no longer) in the store."""

    def __init__(self, handle: int, message: str | None = None) -> None:
        super().__init__(message or f"No line item with handle {handle}")
        self.handle = handle


class SheetNotFoundError(NotFoundError):
    """No sheet with this name exists for the user."""

    def __init__(self, name: str) -> None:
        super().__init__(f"No budget named '{name}'")
        self.name = name


class InvalidNameError(BudgetSheetError):
    """A budget name is blank."""


class PersistenceFailure(BudgetSheetError):
    """The storage layer failed while loading, saving, listing or deleting."""


class AuthError(BudgetSheetError):
    """Authentication failed or a logged-in user is required."""


class DocumentError(BudgetSheetError):
    """A budget document could not be read."""
