import typer

from .session import load_session


def validate_password(password: str) -> bool:
    """
    Validates password strength: at least 8 characters with a letter and a number.
    """
    if len(password) < 8:
        typer.echo("Password must be at least 8 characters long.")
        return False

    if not any(c.isalpha() for c in password):
        typer.echo("Password must contain at least one letter.")
        return False

    if not any(c.isdigit() for c in password):
        typer.echo("Password must contain at least one number.")
        return False

    return True


def require_session(role: str | None = None) -> dict:
    """
    Returns the active session or exits when there is none (or it has the wrong role).
    """
    session = load_session()
    if session is None:
        typer.echo("Not logged in. Run 'auth login' first.")
        raise typer.Exit(code=1)
    if role and session.get("role") != role:
        typer.echo(f"This command requires a {role} session.")
        raise typer.Exit(code=1)
    return session


def print_consultations(consultations: list[dict]) -> None:
    if not consultations:
        typer.echo("No consultations found.")
        return
    for c in consultations:
        typer.echo(
            f"#{c['id']}  {c['date']} {c['time']}  doctor={c['doctor_id']} "
            f"patient={c['user_id']}  [{c['status']}]  {c['reason']}"
        )
