"""Commands editing the working sheet: add, edit, remove, show and clear."""

from rich.markup import escape

from budgetsheet.commands.common import (
    console,
    draft_session,
    load_settings,
    print_balance_update,
    render_items,
    render_summary,
    reported_errors,
)
from budgetsheet.domain.models import ItemField, ItemKind, LineItem
from budgetsheet.domain.normalize import parse_amount, parse_frequency
from budgetsheet.services.files import load_draft
from budgetsheet.session import EditingSession, LoadState


def show_sheet(session: EditingSession, currency: str) -> None:
    """Print both item tables and the summary."""
    console.print(f"[bold cyan]{escape(session.name)}[/bold cyan]\n")

    if session.state is LoadState.EMPTY:
        console.print("[dim]No income or expenses yet[/dim]")
        console.print("[dim]Use 'budgetsheet add income' or 'budgetsheet add expense' to start[/dim]\n")
    else:
        console.print(render_items(session, ItemKind.INCOME, currency))
        console.print(render_items(session, ItemKind.EXPENSE, currency))

    console.print(render_summary(session.summary, currency))


def add_command(kind: ItemKind, description: str, amount: str, frequency: str) -> None:
    """Append a line item to the working sheet."""
    settings = load_settings()

    with reported_errors(), draft_session(settings) as session:
        session.subscribe(print_balance_update(settings.currency))
        initial = LineItem(description, parse_amount(amount), parse_frequency(frequency))
        session.add(kind, initial)
        row = len(session.store.handles(kind))
        console.print(f"[green]✓[/green] Added {kind.value} row {row}")


def edit_command(kind: ItemKind, row: int, field: ItemField, value: str) -> None:
    """Change one field of a row."""
    settings = load_settings()

    with reported_errors(), draft_session(settings) as session:
        session.subscribe(print_balance_update(settings.currency))
        handle = session.handle_at(kind, row)
        item = session.update(handle, field, value)
        shown = item.frequency.label if field is ItemField.FREQUENCY else str(getattr(item, field.value))
        console.print(f"[green]✓[/green] {kind.value.capitalize()} row {row} {field.value} set to {escape(shown)}")


def remove_command(kind: ItemKind, row: int) -> None:
    """Delete a row; a missing row is reported without changing anything."""
    settings = load_settings()

    with reported_errors(), draft_session(settings) as session:
        session.subscribe(print_balance_update(settings.currency))
        handle = session.handle_at(kind, row)
        if session.remove(handle):
            console.print(f"[green]✓[/green] Removed {kind.value} row {row}")


def show_command() -> None:
    """Show the working sheet and its summary."""
    settings = load_settings()

    session = load_draft(settings.default_sheet_name)
    show_sheet(session, settings.currency)


def clear_command(name: str | None = None) -> None:
    """Empty the working sheet, optionally starting a new name."""
    settings = load_settings()

    with reported_errors(), draft_session(settings) as session:
        session.clear()
        session.name = name or settings.default_sheet_name
        console.print(f"[green]✓[/green] Started an empty sheet: {escape(session.name)}")
