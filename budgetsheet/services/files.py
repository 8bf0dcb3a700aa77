"""Budget documents on disk: exported files and the working draft.

Exports drop blank rows. The draft is the editing session between CLI
invocations, so it keeps every row the user created.
"""

import logging
from pathlib import Path

from budgetsheet.domain.document import dumps_document, loads_document, to_document
from budgetsheet.domain.models import BudgetSheet
from budgetsheet.errors import DocumentError, PersistenceFailure
from budgetsheet.services._errors import storage_errors
from budgetsheet.session import EditingSession
from budgetsheet.store.schema import get_data_dir

logger = logging.getLogger(__name__)


def get_draft_path() -> Path:
    """Get the draft file path (XDG compliant)."""
    return get_data_dir() / "draft.json"


def write_sheet(path: Path, sheet: BudgetSheet) -> None:
    """Write a sheet as a budget document.

    Raises:
        PersistenceFailure: If the file cannot be written.
    """
    text = dumps_document(to_document(sheet.income_items, sheet.expense_items, sheet.name))
    with storage_errors(f"writing {path}"):
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(text + "\n", encoding="utf-8")


def read_sheet(path: Path, default_name: str = "") -> BudgetSheet:
    """Read a budget document.

    Args:
        path: Document file.
        default_name: Name used when the document has none.

    Raises:
        PersistenceFailure: If the file cannot be read.
        DocumentError: If the file is not a budget document.
    """
    with storage_errors(f"reading {path}"):
        data = path.read_bytes()
    try:
        text = data.decode("utf-8")
    except UnicodeDecodeError as e:
        raise DocumentError(f"Invalid budget document: {e}") from e
    return loads_document(text, default_name)


def export_document(path: Path, session: EditingSession) -> BudgetSheet:
    """Export the session to a file, without blank rows.

    Returns:
        The exported sheet.
    """
    sheet = session.to_sheet(for_export=True)
    write_sheet(path, sheet)
    logger.info(
        "Exported %d income and %d expense items to %s",
        len(sheet.income_items),
        len(sheet.expense_items),
        path,
    )
    return sheet


def import_document(path: Path, default_name: str = "") -> BudgetSheet:
    """Read an exported file.

    Falls back to the file's stem when neither the document nor the caller
    provide a name.
    """
    sheet = read_sheet(path, default_name or path.stem)
    logger.info(
        "Imported %d income and %d expense items from %s",
        len(sheet.income_items),
        len(sheet.expense_items),
        path,
    )
    return sheet


def save_draft(session: EditingSession, draft_path: Path | None = None) -> None:
    """Persist the editing session, blank rows included."""
    if draft_path is None:
        draft_path = get_draft_path()
    write_sheet(draft_path, session.to_sheet())


def load_draft(default_name: str, draft_path: Path | None = None) -> EditingSession:
    """Restore the editing session saved by save_draft.

    A missing or unreadable draft gives an empty session named default_name.
    """
    if draft_path is None:
        draft_path = get_draft_path()

    session = EditingSession(default_name)
    if not draft_path.exists():
        return session

    try:
        sheet = read_sheet(draft_path, default_name)
    except (PersistenceFailure, DocumentError) as e:
        logger.warning("Starting from an empty sheet, draft unreadable: %s", e)
        return session

    session.load(sheet)
    return session
