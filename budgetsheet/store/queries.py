"""Database query functions."""

import sqlite3
from pathlib import Path
from typing import Any

from budgetsheet.domain.models import UserId
from budgetsheet.store.schema import get_db_path


def _connect(db_path: Path | None = None) -> sqlite3.Connection:
    """Create a database connection with row factory.

    Args:
        db_path: Path to the database file. If None, uses default location.

    Returns:
        Database connection with row_factory configured.
    """
    if db_path is None:
        db_path = get_db_path()
    conn = sqlite3.connect(db_path)
    conn.row_factory = sqlite3.Row
    conn.execute("PRAGMA foreign_keys = ON")
    return conn


def insert_user(username: str, password_hash: str, db_path: Path | None = None) -> UserId | None:
    """Insert a user.

    Args:
        username: Unique username.
        password_hash: Hashed password.
        db_path: Path to the database file. If None, uses default location.

    Returns:
        New user id, or None if the username is taken.

    Raises:
        sqlite3.Error: If database operation fails.
    """
    with _connect(db_path) as conn:
        cursor = conn.cursor()
        try:
            cursor.execute(
                "INSERT INTO users (username, password_hash) VALUES (?, ?)",
                (username, password_hash),
            )
            conn.commit()
            return UserId(cursor.lastrowid)
        except sqlite3.IntegrityError:
            conn.rollback()
            return None
        except sqlite3.Error:
            conn.rollback()
            raise


def get_user_by_username(username: str, db_path: Path | None = None) -> dict[str, Any] | None:
    """Get a user row by username.

    Returns:
        Dictionary with id, username and password_hash, or None.

    Raises:
        sqlite3.Error: If database operation fails.
    """
    with _connect(db_path) as conn:
        cursor = conn.cursor()
        cursor.execute("SELECT id, username, password_hash FROM users WHERE username = ?", (username,))
        row = cursor.fetchone()
        return dict(row) if row else None


def get_username(user_id: UserId, db_path: Path | None = None) -> str | None:
    """Get the username for a user id.

    Raises:
        sqlite3.Error: If database operation fails.
    """
    with _connect(db_path) as conn:
        cursor = conn.cursor()
        cursor.execute("SELECT username FROM users WHERE id = ?", (user_id,))
        row = cursor.fetchone()
        return row[0] if row else None


def get_budget_names(user_id: UserId, db_path: Path | None = None) -> list[str]:
    """Get the names of a user's saved budgets, alphabetically.

    Raises:
        sqlite3.Error: If database operation fails.
    """
    with _connect(db_path) as conn:
        cursor = conn.cursor()
        cursor.execute("SELECT name FROM budgets WHERE user_id = ? ORDER BY name COLLATE NOCASE", (user_id,))
        return [row[0] for row in cursor.fetchall()]


def get_budget(user_id: UserId, name: str, db_path: Path | None = None) -> dict[str, Any] | None:
    """Get a saved budget.

    Returns:
        Dictionary with name, revenus and depenses (JSON text) and updated_at,
        or None if there is no such budget.

    Raises:
        sqlite3.Error: If database operation fails.
    """
    with _connect(db_path) as conn:
        cursor = conn.cursor()
        cursor.execute(
            "SELECT name, revenus, depenses, updated_at FROM budgets WHERE user_id = ? AND name = ?",
            (user_id, name),
        )
        row = cursor.fetchone()
        return dict(row) if row else None


def upsert_budget(user_id: UserId, name: str, revenus: str, depenses: str, db_path: Path | None = None) -> None:
    """Insert or replace a saved budget.

    Args:
        user_id: Owner.
        name: Budget name, unique per user.
        revenus: Income items as JSON text.
        depenses: Expense items as JSON text.
        db_path: Path to the database file. If None, uses default location.

    Raises:
        sqlite3.Error: If database operation fails.
    """
    with _connect(db_path) as conn:
        cursor = conn.cursor()
        try:
            cursor.execute(
                """
                INSERT INTO budgets (user_id, name, revenus, depenses, updated_at)
                VALUES (?, ?, ?, ?, datetime('now'))
                ON CONFLICT(user_id, name) DO UPDATE SET
                    revenus = excluded.revenus,
                    depenses = excluded.depenses,
                    updated_at = excluded.updated_at
                """,
                (user_id, name, revenus, depenses),
            )
            conn.commit()
        except sqlite3.Error:
            conn.rollback()
            raise


def delete_budget(user_id: UserId, name: str, db_path: Path | None = None) -> bool:
    """Delete a saved budget.

    Returns:
        True if a budget was deleted, False if none matched.

    Raises:
        sqlite3.Error: If database operation fails.
    """
    with _connect(db_path) as conn:
        cursor = conn.cursor()
        try:
            cursor.execute("DELETE FROM budgets WHERE user_id = ? AND name = ?", (user_id, name))
            conn.commit()
            return cursor.rowcount > 0
        except sqlite3.Error:
            conn.rollback()
            raise
