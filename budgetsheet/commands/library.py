"""Commands moving sheets in and out of the working draft.

save/load/budgets/delete talk to the per-user sheet store and need a
logged-in user. export/import work on plain JSON files.
"""

from pathlib import Path

from rich.markup import escape
from rich.table import Table

from budgetsheet.commands.common import console, draft_session, load_settings, reported_errors, require_database
from budgetsheet.commands.sheet import show_sheet
from budgetsheet.domain.models import SheetName
from budgetsheet.services.auth import require_user
from budgetsheet.services.files import export_document, import_document, load_draft
from budgetsheet.services.sheets import delete_sheet, list_sheet_names, load_sheet, save_sheet


def save_command(name: str | None = None) -> None:
    """Save the working sheet under a name (upsert)."""
    require_database()
    settings = load_settings()

    with reported_errors():
        user_id = require_user()
        with draft_session(settings) as session:
            sheet = session.to_sheet(for_export=True)
            if name:
                sheet.name = SheetName(name.strip())
            save_sheet(user_id, sheet)
            session.name = sheet.name
            console.print(f"[green]✓[/green] Saved budget: {escape(sheet.name)}")


def load_command(name: str) -> None:
    """Replace the working sheet with a saved one."""
    require_database()
    settings = load_settings()

    with reported_errors():
        user_id = require_user()
        # Fetch first so a failure leaves the draft untouched
        sheet = load_sheet(user_id, name)
        with draft_session(settings) as session:
            session.load(sheet)
            console.print(f"[green]✓[/green] Loaded budget: {escape(sheet.name)}\n")
            show_sheet(session, settings.currency)


def budgets_command() -> None:
    """List saved sheets."""
    require_database()
    with reported_errors():
        user_id = require_user()
        names = list_sheet_names(user_id)

    if not names:
        console.print("[yellow]No saved budgets[/yellow]")
        return

    table = Table(title=f"Saved budgets ({len(names)})")
    table.add_column("Name", style="cyan")
    for name in names:
        table.add_row(escape(name))
    console.print(table)


def delete_command(name: str) -> None:
    """Delete a saved sheet."""
    require_database()
    with reported_errors():
        user_id = require_user()
        delete_sheet(user_id, name)
    console.print(f"[green]✓[/green] Deleted budget: {escape(name)}")


def export_command(path: str) -> None:
    """Write the working sheet to a JSON file, without blank rows."""
    settings = load_settings()
    target = Path(path).expanduser()

    with reported_errors():
        sheet = export_document(target, load_draft(settings.default_sheet_name))

    console.print(
        f"[green]✓[/green] Exported {len(sheet.income_items)} income and "
        f"{len(sheet.expense_items)} expense items to {target}"
    )


def import_command(path: str) -> None:
    """Replace the working sheet with a JSON file."""
    settings = load_settings()
    source = Path(path).expanduser()

    with reported_errors():
        sheet = import_document(source)
        with draft_session(settings) as session:
            session.load(sheet)
            console.print(f"[green]✓[/green] Imported {source}\n")
            show_sheet(session, settings.currency)
