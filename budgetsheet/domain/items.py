"""In-memory line item store.

Holds the ordered income and expense collections of the sheet being edited.
Items are addressed by stable handles that are never reused, so a handle
held by a caller can never silently point at a different row.
"""

import itertools
import logging
from collections.abc import Iterable
from typing import Any

from budgetsheet.domain.models import ItemField, ItemHandle, ItemKind, LineItem
from budgetsheet.domain.normalize import parse_amount, parse_frequency
from budgetsheet.errors import ItemNotFoundError

logger = logging.getLogger(__name__)


class LineItemStore:
    """Ordered income and expense items keyed by handle."""

    def __init__(self) -> None:
        self._handles = itertools.count(1)
        self._items: dict[ItemKind, dict[ItemHandle, LineItem]] = {kind: {} for kind in ItemKind}

    def __len__(self) -> int:
        return sum(len(items) for items in self._items.values())

    @property
    def is_empty(self) -> bool:
        return len(self) == 0

    def add_item(self, kind: ItemKind, initial: LineItem | None = None) -> ItemHandle:
        """Append an item to one side of the sheet.

        Args:
            kind: Income or expense.
            initial: Data to start from. Fields are normalized; when omitted
                the item is blank (empty description, amount 0, monthly).

        Returns:
            Handle of the new item.
        """
        kind = ItemKind(kind)
        item = LineItem()
        if initial is not None:
            item = LineItem(
                description=initial.description or "",
                amount=parse_amount(initial.amount),
                frequency=parse_frequency(initial.frequency),
            )

        handle = ItemHandle(next(self._handles))
        self._items[kind][handle] = item
        logger.debug("Added %s item %d: %r", kind.value, handle, item)
        return handle

    def remove_item(self, handle: ItemHandle) -> LineItem:
        """Remove an item.

        Args:
            handle: Handle returned by add_item.

        Returns:
            The removed item.

        Raises:
            ItemNotFoundError: If no item has this handle. Nothing is changed.
        """
        for kind, items in self._items.items():
            if handle in items:
                item = items.pop(handle)
                logger.debug("Removed %s item %d", kind.value, handle)
                return item

        logger.warning("Cannot remove item %d: not found", handle)
        raise ItemNotFoundError(handle)

    def update_field(self, handle: ItemHandle, field: ItemField | str, value: Any) -> LineItem:
        """Set one field of an item in place.

        Amounts that fail to parse become 0 and unknown frequencies become
        monthly.

        Args:
            handle: Handle of the item.
            field: "description", "amount" or "frequency".
            value: Raw new value.

        Returns:
            The updated item.

        Raises:
            ItemNotFoundError: If no item has this handle.
            ValueError: If field is not an editable field name.
        """
        field = ItemField(field)
        item = self.get(handle)

        if field is ItemField.DESCRIPTION:
            item.description = "" if value is None else str(value)
        elif field is ItemField.AMOUNT:
            item.amount = parse_amount(value)
        else:
            item.frequency = parse_frequency(value)

        logger.debug("Updated item %d %s -> %r", handle, field.value, getattr(item, field.value))
        return item

    def replace_all(self, income_items: Iterable[LineItem], expense_items: Iterable[LineItem]) -> None:
        """Clear the store, then load both collections in order."""
        self.clear()
        for item in income_items:
            self.add_item(ItemKind.INCOME, item)
        for item in expense_items:
            self.add_item(ItemKind.EXPENSE, item)
        logger.debug("Replaced store contents (%d items)", len(self))

    def clear(self) -> None:
        for items in self._items.values():
            items.clear()

    def get(self, handle: ItemHandle) -> LineItem:
        """Look up an item by handle.

        Raises:
            ItemNotFoundError: If no item has this handle.
        """
        for items in self._items.values():
            if handle in items:
                return items[handle]
        raise ItemNotFoundError(handle)

    def kind_of(self, handle: ItemHandle) -> ItemKind:
        for kind, items in self._items.items():
            if handle in items:
                return kind
        raise ItemNotFoundError(handle)

    def handles(self, kind: ItemKind) -> list[ItemHandle]:
        """Handles of one collection in insertion order."""
        return list(self._items[ItemKind(kind)])

    def handle_at(self, kind: ItemKind, position: int) -> ItemHandle:
        """Resolve a 1-based row position to a handle.

        Raises:
            ItemNotFoundError: If the position is out of range.
        """
        handles = self.handles(kind)
        if position < 1 or position > len(handles):
            raise ItemNotFoundError(position, f"No {ItemKind(kind).value} row {position}")
        return handles[position - 1]

    def items(self, kind: ItemKind) -> list[LineItem]:
        """Live items of one collection in insertion order."""
        return list(self._items[ItemKind(kind)].values())

    def snapshot(self, for_export: bool = False) -> tuple[list[LineItem], list[LineItem]]:
        """Copy both collections.

        Args:
            for_export: Drop blank rows (empty description and amount 0).
                The store itself is never modified.

        Returns:
            Tuple of (income_items, expense_items).
        """
        income = [item.copy() for item in self.items(ItemKind.INCOME)]
        expenses = [item.copy() for item in self.items(ItemKind.EXPENSE)]
        if for_export:
            income = [item for item in income if not item.is_blank()]
            expenses = [item for item in expenses if not item.is_blank()]
        return income, expenses
