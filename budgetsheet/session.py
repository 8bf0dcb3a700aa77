"""Editing session controller.

Owns the line item store of the sheet being edited. Every mutation is
followed by a full recompute of the summary, which is pushed to the
subscribed listeners. Listeners never write back into the store.
"""

import logging
from collections.abc import Callable
from enum import Enum
from typing import Any

from budgetsheet.domain.items import LineItemStore
from budgetsheet.domain.models import BudgetSheet, ItemField, ItemHandle, ItemKind, LineItem, SheetName
from budgetsheet.domain.summary import BudgetSummary, compute_summary
from budgetsheet.errors import ItemNotFoundError

logger = logging.getLogger(__name__)

Listener = Callable[["EditingSession", BudgetSummary], None]


class LoadState(str, Enum):
    """Whether the session holds any rows."""

    EMPTY = "empty"
    POPULATED = "populated"


class EditingSession:
    """The sheet being edited, with its always-fresh summary."""

    def __init__(self, name: str = "", store: LineItemStore | None = None) -> None:
        self.name = SheetName(name)
        self.store = store if store is not None else LineItemStore()
        self._listeners: list[Listener] = []
        self._summary = self._compute()

    @property
    def state(self) -> LoadState:
        return LoadState.EMPTY if self.store.is_empty else LoadState.POPULATED

    @property
    def summary(self) -> BudgetSummary:
        """Summary as of the last mutation."""
        return self._summary

    def subscribe(self, listener: Listener) -> Callable[[], None]:
        """Register a listener called with (session, summary) after each change.

        Returns:
            Function that unsubscribes the listener.
        """
        self._listeners.append(listener)

        def unsubscribe() -> None:
            if listener in self._listeners:
                self._listeners.remove(listener)

        return unsubscribe

    def add(self, kind: ItemKind, initial: LineItem | None = None) -> ItemHandle:
        handle = self.store.add_item(kind, initial)
        self._changed()
        return handle

    def remove(self, handle: ItemHandle) -> bool:
        """Remove an item.

        Returns:
            True if removed, False if the handle was unknown (nothing changes).
        """
        try:
            self.store.remove_item(handle)
        except ItemNotFoundError:
            return False
        self._changed()
        return True

    def update(self, handle: ItemHandle, field: ItemField | str, value: Any) -> LineItem:
        """Edit one field of an item.

        Raises:
            ItemNotFoundError: If the handle is unknown.
        """
        item = self.store.update_field(handle, field, value)
        self._changed()
        return item

    def load(self, sheet: BudgetSheet) -> None:
        """Replace all rows with the contents of a sheet and adopt its name."""
        self.store.replace_all(sheet.income_items, sheet.expense_items)
        if sheet.name:
            self.name = sheet.name
        logger.info("Loaded sheet %r", self.name)
        self._changed()

    def clear(self) -> None:
        self.store.clear()
        self._changed()

    def handle_at(self, kind: ItemKind, row: int) -> ItemHandle:
        """Handle of the 1-based row shown for a collection.

        Raises:
            ItemNotFoundError: If the row does not exist.
        """
        return self.store.handle_at(kind, row)

    def to_sheet(self, for_export: bool = False) -> BudgetSheet:
        """Snapshot the session as a sheet.

        Args:
            for_export: Drop blank rows.
        """
        income, expenses = self.store.snapshot(for_export=for_export)
        return BudgetSheet(name=self.name, income_items=income, expense_items=expenses)

    def _compute(self) -> BudgetSummary:
        return compute_summary(self.store.items(ItemKind.INCOME), self.store.items(ItemKind.EXPENSE))

    def _changed(self) -> None:
        self._summary = self._compute()
        for listener in list(self._listeners):
            listener(self, self._summary)
