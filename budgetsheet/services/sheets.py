"""Named budget sheets stored per user.

Wraps the store queries: storage exceptions become PersistenceFailure and
missing sheets become SheetNotFoundError.
"""

import json
import logging
from pathlib import Path

from budgetsheet.domain.document import items_from_records, items_to_records
from budgetsheet.domain.models import BudgetSheet, SheetName, UserId
from budgetsheet.errors import InvalidNameError, PersistenceFailure, SheetNotFoundError
from budgetsheet.services._errors import storage_errors
from budgetsheet.store.queries import delete_budget, get_budget, get_budget_names, upsert_budget

logger = logging.getLogger(__name__)


def _check_name(name: str) -> SheetName:
    name = name.strip()
    if not name:
        raise InvalidNameError("Budget name is required")
    return SheetName(name)


def list_sheet_names(user_id: UserId, db_path: Path | None = None) -> list[SheetName]:
    """List the names of a user's saved sheets.

    Raises:
        PersistenceFailure: If the database fails.
    """
    with storage_errors("listing budgets"):
        names = get_budget_names(user_id, db_path)
    return [SheetName(name) for name in names]


def load_sheet(user_id: UserId, name: str, db_path: Path | None = None) -> BudgetSheet:
    """Load a saved sheet.

    Args:
        user_id: Owner.
        name: Sheet name.
        db_path: Path to the database file. If None, uses default location.

    Returns:
        The saved sheet.

    Raises:
        SheetNotFoundError: If the user has no sheet with this name.
        PersistenceFailure: If the database fails or the stored items are corrupt.
    """
    name = _check_name(name)
    with storage_errors("loading budget"):
        row = get_budget(user_id, name, db_path)

    if row is None:
        raise SheetNotFoundError(name)

    try:
        revenus = json.loads(row["revenus"])
        depenses = json.loads(row["depenses"])
    except json.JSONDecodeError as e:
        logger.error("Stored budget %r is corrupt: %s", name, e)
        raise PersistenceFailure(f"Stored budget '{name}' is corrupt: {e}") from e

    logger.debug("Loaded budget %r for user %d", name, user_id)
    return BudgetSheet(
        name=SheetName(row["name"]),
        income_items=items_from_records(revenus),
        expense_items=items_from_records(depenses),
    )


def save_sheet(user_id: UserId, sheet: BudgetSheet, db_path: Path | None = None) -> None:
    """Insert or overwrite a sheet under its name.

    Raises:
        InvalidNameError: If the sheet name is blank.
        PersistenceFailure: If the database fails.
    """
    name = _check_name(sheet.name)
    revenus = json.dumps(items_to_records(sheet.income_items), ensure_ascii=False)
    depenses = json.dumps(items_to_records(sheet.expense_items), ensure_ascii=False)

    with storage_errors("saving budget"):
        upsert_budget(user_id, name, revenus, depenses, db_path)
    logger.info("Saved budget %r for user %d", name, user_id)


def delete_sheet(user_id: UserId, name: str, db_path: Path | None = None) -> None:
    """Delete a saved sheet.

    Raises:
        SheetNotFoundError: If the user has no sheet with this name.
        PersistenceFailure: If the database fails.
    """
    name = _check_name(name)
    with storage_errors("deleting budget"):
        deleted = delete_budget(user_id, name, db_path)

    if not deleted:
        raise SheetNotFoundError(name)
    logger.info("Deleted budget %r for user %d", name, user_id)
