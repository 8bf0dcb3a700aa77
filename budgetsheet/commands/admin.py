"""Admin commands: create or upgrade the database and write the config."""

import sqlite3
import sys
from pathlib import Path

from rich.markup import escape

from budgetsheet.commands.common import console, fail
from budgetsheet.config import create_default_config, get_config_path
from budgetsheet.store.schema import get_db_path, init_database


def migrate_database(db_path: Path) -> None:
    """Bring an existing database up to the current schema."""
    if not db_path.exists():
        fail(f"No database to migrate at {db_path}")

    init_database(db_path)
    console.print(f"[green]✓[/green] Migrations complete ({escape(str(db_path))})")


def initialize(db_path: Path, config_path: Path, force: bool = False) -> None:
    """Create the user/budget tables and write a default config.

    Without force, any existing database or config stops the command. With
    force the config is rewritten; saved users and budgets are kept since the
    schema is only created where missing.
    """
    existing = [path for path in (db_path, config_path) if path.exists()]
    if existing and not force:
        console.print("[red]Initialization failed, files already exist:[/red]", style="bold")
        for path in existing:
            console.print(f"  {escape(str(path))}")
        console.print("[yellow]'budgetsheet init --force' resets the config[/yellow]")
        console.print("[yellow]'budgetsheet init --migrate' only updates the database schema[/yellow]")
        sys.exit(1)

    init_database(db_path)
    create_default_config(config_path)

    console.print("[green]✓[/green] budgetsheet is ready", style="bold")
    console.print(f"[dim]Budgets and users: {escape(str(db_path))}[/dim]")
    console.print(f"[dim]Settings (mode 600): {escape(str(config_path))}[/dim]")


def init_command(force: bool = False, migrate: bool = False) -> None:
    """Initialize or migrate budgetsheet's storage."""
    db_path = get_db_path()

    try:
        if migrate:
            migrate_database(db_path)
        else:
            initialize(db_path, get_config_path(), force)
    except sqlite3.Error as e:
        fail(f"Database error: {e}")
    except OSError as e:
        fail(f"Filesystem error: {e}")
