"""User accounts and the login session.

Passwords are stored as bcrypt hashes. The logged-in user is recorded in a
small TOML session file so that it survives between CLI invocations.
"""

import logging
import os
import tomllib
from pathlib import Path

import bcrypt
import tomli_w

from budgetsheet.domain.models import UserId
from budgetsheet.errors import AuthError
from budgetsheet.services._errors import storage_errors
from budgetsheet.store.queries import get_user_by_username, get_username, insert_user
from budgetsheet.store.schema import get_data_dir

logger = logging.getLogger(__name__)


def get_session_path() -> Path:
    """Get the session file path (XDG compliant)."""
    return get_data_dir() / "session.toml"


def hash_password(password: str) -> str:
    return bcrypt.hashpw(password.encode("utf-8"), bcrypt.gensalt()).decode("utf-8")


def verify_password(password: str, hashed_password: str) -> bool:
    return bcrypt.checkpw(password.encode("utf-8"), hashed_password.encode("utf-8"))


def signup(username: str, password: str, db_path: Path | None = None) -> UserId:
    """Create a user account.

    Args:
        username: Unique username (surrounding whitespace is ignored).
        password: Plain password, hashed before storage.
        db_path: Path to the database file. If None, uses default location.

    Returns:
        New user id.

    Raises:
        AuthError: If username or password is blank, or the username is taken.
        PersistenceFailure: If the database fails.
    """
    username = username.strip()
    if not username or not password:
        raise AuthError("Username and password are required")

    with storage_errors("creating account"):
        user_id = insert_user(username, hash_password(password), db_path)

    if user_id is None:
        logger.info("Signup refused: username %r already exists", username)
        raise AuthError(f"Username '{username}' is already taken")

    logger.info("Signed up user %r (id %d)", username, user_id)
    return user_id


def login(
    username: str,
    password: str,
    db_path: Path | None = None,
    session_path: Path | None = None,
) -> UserId:
    """Check credentials and start a session.

    Args:
        username: Username.
        password: Plain password.
        db_path: Path to the database file. If None, uses default location.
        session_path: Path to the session file. If None, uses default location.

    Returns:
        Id of the logged-in user.

    Raises:
        AuthError: If the credentials are blank or wrong.
        PersistenceFailure: If the database or session file cannot be accessed.
    """
    username = username.strip()
    if not username or not password:
        raise AuthError("Username and password are required")

    with storage_errors("logging in"):
        user = get_user_by_username(username, db_path)

    if user is None or not verify_password(password, user["password_hash"]):
        logger.info("Login failed for %r", username)
        raise AuthError("Invalid username or password")

    user_id = UserId(user["id"])
    with storage_errors("saving session"):
        _write_session({"user_id": user_id, "username": user["username"]}, session_path)

    logger.info("Logged in as %r", username)
    return user_id


def logout(session_path: Path | None = None) -> bool:
    """End the current session.

    Returns:
        True if a session was ended, False if nobody was logged in.

    Raises:
        PersistenceFailure: If the session file cannot be removed.
    """
    if session_path is None:
        session_path = get_session_path()

    if not session_path.exists():
        return False

    with storage_errors("ending session"):
        session_path.unlink()
    logger.info("Logged out")
    return True


def current_user(session_path: Path | None = None) -> UserId | None:
    """Get the logged-in user id, or None."""
    session = _read_session(session_path)
    user_id = session.get("user_id")
    if not isinstance(user_id, int):
        return None
    return UserId(user_id)


def current_username(db_path: Path | None = None, session_path: Path | None = None) -> str | None:
    """Get the logged-in username, or None.

    Raises:
        PersistenceFailure: If the database fails.
    """
    user_id = current_user(session_path)
    if user_id is None:
        return None
    with storage_errors("looking up user"):
        return get_username(user_id, db_path)


def require_user(session_path: Path | None = None) -> UserId:
    """Get the logged-in user id.

    Raises:
        AuthError: If nobody is logged in.
    """
    user_id = current_user(session_path)
    if user_id is None:
        raise AuthError("Not logged in. Run 'budgetsheet login' first.")
    return user_id


def _read_session(session_path: Path | None = None) -> dict:
    if session_path is None:
        session_path = get_session_path()

    if not session_path.exists():
        return {}

    try:
        with open(session_path, "rb") as f:
            return tomllib.load(f)
    except (OSError, tomllib.TOMLDecodeError) as e:
        logger.warning("Ignoring unreadable session file %s: %s", session_path, e)
        return {}


def _write_session(session: dict, session_path: Path | None = None) -> None:
    if session_path is None:
        session_path = get_session_path()

    session_path.parent.mkdir(parents=True, exist_ok=True)

    with open(session_path, "wb") as f:
        tomli_w.dump(session, f)

    os.chmod(session_path, 0o600)
