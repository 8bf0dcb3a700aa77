"""Database store layer - provides persistence for the application.

This module re-exports all public database functions for easy importing.
"""

from budgetsheet.store.queries import (
    delete_budget,
    get_budget,
    get_budget_names,
    get_user_by_username,
    get_username,
    insert_user,
    upsert_budget,
)
from budgetsheet.store.schema import database_exists, get_data_dir, get_db_path, init_database

__all__ = [
    # Schema
    "database_exists",
    "get_data_dir",
    "get_db_path",
    "init_database",
    # Queries
    "delete_budget",
    "get_budget",
    "get_budget_names",
    "get_user_by_username",
    "get_username",
    "insert_user",
    "upsert_budget",
]
