"""Account commands: signup, login, logout and whoami."""

from rich.markup import escape

from budgetsheet.commands.common import console, reported_errors, require_database
from budgetsheet.services import auth


def signup_command(username: str, password: str) -> None:
    """Create an account."""
    require_database()
    with reported_errors():
        auth.signup(username, password)
    console.print(f"[green]✓[/green] Account created for {escape(username.strip())}")
    console.print("[dim]Use 'budgetsheet login' to sign in[/dim]")


def login_command(username: str, password: str) -> None:
    """Sign in."""
    require_database()
    with reported_errors():
        auth.login(username, password)
    console.print(f"[green]✓[/green] Logged in as {escape(username.strip())}")


def logout_command() -> None:
    """Sign out; always succeeds."""
    with reported_errors():
        ended = auth.logout()
    if ended:
        console.print("[green]✓[/green] Logged out")
    else:
        console.print("[dim]Not logged in[/dim]")


def whoami_command() -> None:
    """Show the logged-in user."""
    require_database()
    with reported_errors():
        username = auth.current_username()
    if username is None:
        console.print("[yellow]Not logged in[/yellow]")
        return
    console.print(f"Logged in as [cyan]{escape(username)}[/cyan]")
