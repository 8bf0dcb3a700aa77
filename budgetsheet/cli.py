"""CLI entry point for budgetsheet."""

import typer

from budgetsheet.commands.account import login_command, logout_command, signup_command, whoami_command
from budgetsheet.commands.admin import init_command
from budgetsheet.commands.common import load_settings
from budgetsheet.commands.library import (
    budgets_command,
    delete_command,
    export_command,
    import_command,
    load_command,
    save_command,
)
from budgetsheet.commands.sheet import add_command, clear_command, edit_command, remove_command, show_command
from budgetsheet.debug import configure_logging, write_history
from budgetsheet.domain.models import ItemField, ItemKind
from budgetsheet.store.schema import get_data_dir

app = typer.Typer(
    name="budgetsheet",
    help="Recurring income and expenses, normalized to monthly and weekly totals",
    add_completion=False,
)


@app.callback()
def main(
    ctx: typer.Context,
    debug: bool = typer.Option(False, "--debug", help="Show debug logging and append it to debug.log"),
) -> None:
    """Recurring income and expenses, normalized to monthly and weekly totals."""
    settings = load_settings()
    debug = debug or settings.debug
    history = configure_logging(debug=debug, history_size=settings.history_size)
    if debug:
        ctx.call_on_close(lambda: write_history(history, get_data_dir() / "debug.log"))


@app.command(name="init")
def init(
    force: bool = typer.Option(False, "--force", "-f", help="Overwrite existing config"),
    migrate: bool = typer.Option(False, "--migrate", help="Only update the database schema"),
) -> None:
    """Initialize budgetsheet database and configuration."""
    init_command(force, migrate)


@app.command()
def signup(
    username: str,
    password: str = typer.Option(..., prompt=True, hide_input=True, confirmation_prompt=True),
) -> None:
    """Create an account."""
    signup_command(username, password)


@app.command()
def login(
    username: str,
    password: str = typer.Option(..., prompt=True, hide_input=True),
) -> None:
    """Log in so budgets can be saved and loaded."""
    login_command(username, password)


@app.command()
def logout() -> None:
    """Log out."""
    logout_command()


@app.command()
def whoami() -> None:
    """Show who is logged in."""
    whoami_command()


@app.command()
def add(
    kind: ItemKind,
    description: str = typer.Option("", "--description", "-d", help="What the money is for"),
    amount: str = typer.Option("0", "--amount", "-a", help="Amount per period"),
    frequency: str = typer.Option(
        "4", "--frequency", "-f", help="1/weekly, 2/biweekly, 3/every-3-weeks or 4/monthly"
    ),
) -> None:
    """Add an income or expense row to the working budget."""
    add_command(kind, description, amount, frequency)


@app.command()
def edit(kind: ItemKind, row: int, field: ItemField, value: str) -> None:
    """Change the description, amount or frequency of a row."""
    edit_command(kind, row, field, value)


@app.command()
def remove(kind: ItemKind, row: int) -> None:
    """Remove a row from the working budget."""
    remove_command(kind, row)


@app.command()
def show() -> None:
    """Show the working budget with weekly and monthly totals."""
    show_command()


@app.command()
def clear(
    name: str = typer.Option(None, "--name", "-n", help="Name for the new budget"),
) -> None:
    """Start over with an empty working budget."""
    clear_command(name)


@app.command()
def save(name: str = typer.Argument(None, help="Budget name (default: current name)")) -> None:
    """Save the working budget to your account."""
    save_command(name)


@app.command()
def load(name: str) -> None:
    """Load a saved budget into the working budget."""
    load_command(name)


@app.command()
def budgets() -> None:
    """List your saved budgets."""
    budgets_command()


@app.command()
def delete(name: str) -> None:
    """Delete a saved budget."""
    delete_command(name)


@app.command(name="export")
def export(path: str) -> None:
    """Export the working budget to a JSON file."""
    export_command(path)


@app.command(name="import")
def import_(path: str) -> None:
    """Import a JSON budget file as the working budget."""
    import_command(path)


if __name__ == "__main__":
    app()
