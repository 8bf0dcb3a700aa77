"""Budget document format.

Pure conversion between line items and the JSON budget document:

    {
      "name": "Default Budget",
      "revenus": [{"description": "Salary", "montant": "2000", "frequence": "4"}],
      "depenses": [{"description": "Rent", "montant": "500", "frequence": "1"}]
    }

The same item shape is used for exported files, drafts and the item columns
of the sheet database.
"""

import json
from collections.abc import Iterable
from typing import Any, TypedDict

from budgetsheet.domain.models import BudgetSheet, LineItem, SheetName
from budgetsheet.domain.normalize import parse_amount, parse_frequency
from budgetsheet.errors import DocumentError

INCOME_KEY = "revenus"
EXPENSE_KEY = "depenses"


class ItemRecord(TypedDict):
    """Serialized line item."""

    description: str
    montant: str
    frequence: str


def item_to_record(item: LineItem) -> ItemRecord:
    return {
        "description": item.description,
        "montant": format(item.amount, "f"),
        "frequence": str(int(item.frequency)),
    }


def item_from_record(record: dict[str, Any]) -> LineItem:
    """Build a line item from a serialized record, applying defaults.

    Args:
        record: Mapping with optional description, montant and frequence keys.

    Returns:
        LineItem with normalized amount and frequency.
    """
    description = record.get("description")
    return LineItem(
        description="" if description is None else str(description),
        amount=parse_amount(record.get("montant")),
        frequency=parse_frequency(record.get("frequence")),
    )


def items_to_records(items: Iterable[LineItem]) -> list[ItemRecord]:
    return [item_to_record(item) for item in items]


def items_from_records(records: Any) -> list[LineItem]:
    """Parse a list of records, skipping entries that are not objects."""
    if not isinstance(records, list):
        return []
    return [item_from_record(record) for record in records if isinstance(record, dict)]


def to_document(
    income_items: Iterable[LineItem],
    expense_items: Iterable[LineItem],
    name: str | None = None,
) -> dict[str, Any]:
    """Build the budget document for a pair of collections.

    Args:
        income_items: Income items, in order.
        expense_items: Expense items, in order.
        name: Optional sheet name stored alongside the items.

    Returns:
        JSON-serializable document.
    """
    document: dict[str, Any] = {}
    if name:
        document["name"] = name
    document[INCOME_KEY] = items_to_records(income_items)
    document[EXPENSE_KEY] = items_to_records(expense_items)
    return document


def from_document(document: Any, default_name: str = "") -> BudgetSheet:
    """Read a budget document into a sheet.

    Missing collections are empty and missing item fields take their defaults.

    Args:
        document: Decoded JSON value.
        default_name: Name used when the document carries none.

    Returns:
        BudgetSheet with the document's items.

    Raises:
        DocumentError: If the document is not a JSON object.
    """
    if not isinstance(document, dict):
        raise DocumentError("Budget document must be a JSON object")

    name = document.get("name")
    return BudgetSheet(
        name=SheetName(name if isinstance(name, str) and name.strip() else default_name),
        income_items=items_from_records(document.get(INCOME_KEY)),
        expense_items=items_from_records(document.get(EXPENSE_KEY)),
    )


def dumps_document(document: dict[str, Any]) -> str:
    return json.dumps(document, indent=2, ensure_ascii=False)


def loads_document(text: str, default_name: str = "") -> BudgetSheet:
    """Parse document text into a sheet.

    Raises:
        DocumentError: If the text is not valid JSON or not an object.
    """
    try:
        document = json.loads(text)
    except json.JSONDecodeError as e:
        raise DocumentError(f"Invalid budget document: {e}") from e
    return from_document(document, default_name)
