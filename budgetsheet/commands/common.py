"""Helpers shared by the commands: settings, the draft session and rendering."""

import sys
import tomllib
from collections.abc import Iterator
from contextlib import contextmanager
from dataclasses import dataclass
from decimal import Decimal
from typing import Any, NoReturn

from rich.console import Console
from rich.markup import escape
from rich.table import Table

from budgetsheet.config import get_config_path, load_config
from budgetsheet.domain.models import ItemKind
from budgetsheet.domain.summary import BalanceSign, BudgetSummary, format_amount, monthly_equivalent
from budgetsheet.errors import BudgetSheetError
from budgetsheet.services.files import load_draft, save_draft
from budgetsheet.session import EditingSession, Listener
from budgetsheet.store.schema import database_exists

console = Console()

KIND_TITLES = {
    ItemKind.INCOME: "Income",
    ItemKind.EXPENSE: "Expenses",
}


@dataclass(frozen=True)
class Settings:
    """Config values the commands use."""

    currency: str
    default_sheet_name: str
    debug: bool
    history_size: int


def load_settings() -> Settings:
    """Read settings from the config file, exiting on a broken file."""
    try:
        config: dict[str, Any] = load_config()
    except tomllib.TOMLDecodeError as e:
        fail(f"Invalid config file {get_config_path()}: {e}")
    except OSError as e:
        fail(f"Cannot read config file: {e}")

    return Settings(
        currency=str(config["currency"]),
        default_sheet_name=str(config["default_sheet_name"]),
        debug=bool(config["debug"]),
        history_size=int(config["history_size"]),
    )


def fail(message: str) -> NoReturn:
    """Print an error and exit with status 1."""
    console.print(f"[red]{escape(message)}[/red]", style="bold")
    sys.exit(1)


@contextmanager
def reported_errors() -> Iterator[None]:
    """Turn budgetsheet errors into a red message and exit status 1."""
    try:
        yield
    except BudgetSheetError as e:
        fail(str(e))


@contextmanager
def draft_session(settings: Settings) -> Iterator[EditingSession]:
    """Open the draft, yield it and save it back if the block succeeds."""
    session = load_draft(settings.default_sheet_name)
    yield session
    save_draft(session)


def print_balance_update(currency: str) -> Listener:
    """Listener printing the monthly balance after each change."""

    def listener(session: EditingSession, summary: BudgetSummary) -> None:
        balance = _balance_markup(summary.monthly_balance, summary.balance_sign, currency)
        console.print(f"[dim]Monthly balance:[/dim] {balance}")

    return listener


def render_items(session: EditingSession, kind: ItemKind, currency: str) -> Table:
    """Build the table of one collection, with 1-based row numbers."""
    table = Table(title=KIND_TITLES[kind], title_justify="left")
    table.add_column("#", style="dim", justify="right")
    table.add_column("Description", style="white")
    table.add_column("Amount", justify="right")
    table.add_column("Frequency", style="cyan")
    table.add_column("Monthly", justify="right")

    for row, item in enumerate(session.store.items(kind), 1):
        table.add_row(
            str(row),
            escape(item.description) or "[dim]-[/dim]",
            format_amount(item.amount, currency),
            item.frequency.label,
            format_amount(monthly_equivalent(item.amount, item.frequency), currency),
        )

    return table


def render_summary(summary: BudgetSummary, currency: str) -> Table:
    """Build the weekly/monthly summary table."""
    table = Table(title="Summary", title_justify="left")
    table.add_column("", style="bold")
    table.add_column("Weekly", justify="right")
    table.add_column("Monthly", justify="right")

    table.add_row(
        "Income",
        format_amount(summary.weekly_income_total, currency),
        format_amount(summary.monthly_income_total, currency),
    )
    table.add_row(
        "Expenses",
        format_amount(summary.weekly_expense_total, currency),
        format_amount(summary.monthly_expense_total, currency),
    )
    table.add_row(
        "Balance",
        _balance_markup(summary.weekly_balance, summary.weekly_balance_sign, currency),
        _balance_markup(summary.monthly_balance, summary.balance_sign, currency),
    )
    return table


def _balance_markup(amount: Decimal, sign: BalanceSign, currency: str) -> str:
    colour = "green" if sign is BalanceSign.POSITIVE else "red"
    return f"[{colour}]{format_amount(amount, currency)}[/{colour}]"


def require_database() -> None:
    """Exit with a hint when 'budgetsheet init' has not been run."""
    if not database_exists():
        fail("Database not found. Run 'budgetsheet init' first.")
