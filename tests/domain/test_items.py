"""Tests for the in-memory LineItemStore."""

import logging
from decimal import Decimal

import pytest

from budgetsheet.domain.items import LineItemStore
from budgetsheet.domain.models import Frequency, ItemField, ItemHandle, ItemKind, LineItem
from budgetsheet.domain.summary import compute_summary
from budgetsheet.errors import ItemNotFoundError, NotFoundError


@pytest.fixture
def store() -> LineItemStore:
    store = LineItemStore()
    store.add_item(ItemKind.INCOME, LineItem("Salary", Decimal("2000"), Frequency.MONTHLY))
    store.add_item(ItemKind.EXPENSE, LineItem("Rent", Decimal("500"), Frequency.WEEKLY))
    store.add_item(ItemKind.EXPENSE, LineItem("Phone", Decimal("45"), Frequency.MONTHLY))
    return store


class TestAddItem:
    """Tests for add_item."""

    def test_blank_item_defaults(self) -> None:
        """Without initial data an item is blank and monthly."""
        store = LineItemStore()

        handle = store.add_item(ItemKind.EXPENSE)

        assert store.get(handle) == LineItem("", Decimal("0"), Frequency.MONTHLY)
        assert store.kind_of(handle) is ItemKind.EXPENSE

    def test_initial_data_is_normalized(self) -> None:
        """Imported raw values are normalized on the way in."""
        store = LineItemStore()
        raw = LineItem("Bonus", "abc", "9")  # type: ignore[arg-type]

        handle = store.add_item(ItemKind.INCOME, raw)

        assert store.get(handle) == LineItem("Bonus", Decimal("0"), Frequency.MONTHLY)

    def test_initial_item_is_copied(self) -> None:
        """Editing the stored item does not alias the caller's object."""
        store = LineItemStore()
        initial = LineItem("Gym", Decimal("30"), Frequency.MONTHLY)

        handle = store.add_item(ItemKind.EXPENSE, initial)
        store.update_field(handle, ItemField.AMOUNT, "40")

        assert initial.amount == Decimal("30")

    def test_handles_are_unique_and_not_reused(self) -> None:
        """A removed handle is never handed out again."""
        store = LineItemStore()
        first = store.add_item(ItemKind.INCOME)
        store.remove_item(first)

        second = store.add_item(ItemKind.INCOME)

        assert second != first

    def test_kind_accepts_string(self) -> None:
        store = LineItemStore()

        handle = store.add_item("income")  # type: ignore[arg-type]

        assert store.kind_of(handle) is ItemKind.INCOME


class TestRemoveItem:
    """Tests for remove_item."""

    def test_remove_existing(self, store: LineItemStore) -> None:
        rent = store.handle_at(ItemKind.EXPENSE, 1)

        removed = store.remove_item(rent)

        assert removed.description == "Rent"
        assert [item.description for item in store.items(ItemKind.EXPENSE)] == ["Phone"]

    def test_remove_missing_reports_not_found(self, store: LineItemStore, caplog: pytest.LogCaptureFixture) -> None:
        """An unknown handle raises NotFoundError, logs a warning and changes nothing."""
        before = store.snapshot()

        with caplog.at_level(logging.WARNING, logger="budgetsheet"):
            with pytest.raises(NotFoundError):
                store.remove_item(ItemHandle(999))

        assert store.snapshot() == before
        assert "999" in caplog.text

    def test_remove_twice(self, store: LineItemStore) -> None:
        """The second delete of the same row is not found."""
        salary = store.handle_at(ItemKind.INCOME, 1)
        store.remove_item(salary)

        with pytest.raises(ItemNotFoundError):
            store.remove_item(salary)


class TestUpdateField:
    """Tests for update_field."""

    def test_update_description(self, store: LineItemStore) -> None:
        handle = store.handle_at(ItemKind.EXPENSE, 2)

        store.update_field(handle, "description", "Mobile")

        assert store.get(handle).description == "Mobile"

    def test_update_frequency(self, store: LineItemStore) -> None:
        handle = store.handle_at(ItemKind.EXPENSE, 2)

        store.update_field(handle, ItemField.FREQUENCY, "2")

        assert store.get(handle).frequency is Frequency.BIWEEKLY

    def test_bad_frequency_becomes_monthly(self, store: LineItemStore) -> None:
        handle = store.handle_at(ItemKind.EXPENSE, 1)

        store.update_field(handle, ItemField.FREQUENCY, "12")

        assert store.get(handle).frequency is Frequency.MONTHLY

    def test_bad_amount_becomes_zero_and_contributes_nothing(self, store: LineItemStore) -> None:
        """An amount of "abc" is stored as 0 and drops out of the totals."""
        rent = store.handle_at(ItemKind.EXPENSE, 1)

        store.update_field(rent, ItemField.AMOUNT, "abc")

        assert store.get(rent).amount == 0
        summary = compute_summary(store.items(ItemKind.INCOME), store.items(ItemKind.EXPENSE))
        assert summary.monthly_expense_total == Decimal("45")

    def test_missing_handle(self, store: LineItemStore) -> None:
        with pytest.raises(ItemNotFoundError):
            store.update_field(ItemHandle(404), ItemField.AMOUNT, "1")

    def test_unknown_field(self, store: LineItemStore) -> None:
        handle = store.handle_at(ItemKind.INCOME, 1)

        with pytest.raises(ValueError):
            store.update_field(handle, "category", "x")


class TestReplaceAllAndSnapshot:
    """Tests for replace_all, clear and snapshot."""

    def test_replace_all_clears_first(self, store: LineItemStore) -> None:
        store.replace_all([LineItem("Pension", Decimal("800"), Frequency.MONTHLY)], [])

        income, expenses = store.snapshot()

        assert [item.description for item in income] == ["Pension"]
        assert expenses == []

    def test_snapshot_keeps_blank_rows(self) -> None:
        """The live store never drops rows the user created."""
        store = LineItemStore()
        store.add_item(ItemKind.INCOME)
        store.add_item(ItemKind.EXPENSE, LineItem("Food", Decimal("0"), Frequency.WEEKLY))

        income, expenses = store.snapshot()

        assert len(income) == 1
        assert len(expenses) == 1
        assert len(store) == 2

    def test_export_snapshot_drops_blank_rows(self) -> None:
        """Only rows with no description and a zero amount are filtered for export."""
        store = LineItemStore()
        store.add_item(ItemKind.INCOME)
        store.add_item(ItemKind.INCOME, LineItem("", Decimal("10"), Frequency.MONTHLY))
        store.add_item(ItemKind.EXPENSE, LineItem("Food", Decimal("0"), Frequency.WEEKLY))
        store.add_item(ItemKind.EXPENSE)

        income, expenses = store.snapshot(for_export=True)

        assert income == [LineItem("", Decimal("10"), Frequency.MONTHLY)]
        assert expenses == [LineItem("Food", Decimal("0"), Frequency.WEEKLY)]
        assert len(store) == 4

    def test_snapshot_is_a_copy(self, store: LineItemStore) -> None:
        income, _ = store.snapshot()
        income[0].amount = Decimal("1")

        assert store.items(ItemKind.INCOME)[0].amount == Decimal("2000")

    def test_clear(self, store: LineItemStore) -> None:
        store.clear()

        assert store.is_empty
        assert store.snapshot() == ([], [])


class TestHandleAt:
    """Tests for handle_at."""

    def test_positions_follow_insertion_order(self, store: LineItemStore) -> None:
        assert store.get(store.handle_at(ItemKind.EXPENSE, 2)).description == "Phone"

    @pytest.mark.parametrize("row", [0, 3, -1])
    def test_out_of_range(self, store: LineItemStore, row: int) -> None:
        with pytest.raises(ItemNotFoundError, match="expense row"):
            store.handle_at(ItemKind.EXPENSE, row)
