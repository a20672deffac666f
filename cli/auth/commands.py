import getpass
import re
import typer

from cli.core.session import save_session, load_session, load_token, clear_session, is_logged_in
from cli.core.api import ApiError, api_signup, api_login, api_logout
from cli.core.utils import validate_password


app = typer.Typer(help="Authentication commands (signup, login, logout)")

EMAIL_REGEX = re.compile(r"^[^@\s]+@[^@\s]+\.[^@\s]+$")


def _role(doctor: bool) -> str:
    return "doctor" if doctor else "patient"


@app.command("signup")
def signup(
    doctor: bool = typer.Option(False, "--doctor", help="Register a doctor account"),
):
    """
    Register a new patient (default) or doctor account.
    """
    name = typer.prompt("Name")
    email = typer.prompt("Email")
    if not EMAIL_REGEX.match(email):
        typer.echo("Invalid email address.")
        raise typer.Exit(code=1)

    password = getpass.getpass("Password: ")
    password_confirm = getpass.getpass("Confirm password: ")
    if password != password_confirm:
        typer.echo("Passwords do not match.")
        raise typer.Exit(code=1)
    if not validate_password(password):
        raise typer.Exit(code=1)

    data = {"name": name, "email": email, "password": password}
    if doctor:
        data["center"] = typer.prompt("Center")
        data["specialization"] = typer.prompt("Specialization")
    else:
        data["age"] = typer.prompt("Age", type=int)
        data["contact"] = typer.prompt("Contact")
        data["gender"] = typer.prompt("Gender")

    try:
        message = api_signup(_role(doctor), data)
    except ApiError as e:
        typer.echo(f"Signup failed: {e}")
        raise typer.Exit(code=1)
    typer.echo(message)


@app.command("login")
def login(
    email: str = typer.Option(None, "--email", "-e", help="Account email"),
    doctor: bool = typer.Option(False, "--doctor", help="Login as a doctor"),
):
    """
    Login to the system. Only allowed if no session is active.
    """
    if is_logged_in():
        typer.echo("Session already active. Logout first to remove current session token.")
        raise typer.Exit(code=1)

    if email is None:
        email = typer.prompt("Email")

    password = getpass.getpass("Password: ")

    result = api_login(_role(doctor), email, password)
    if result is None:
        typer.echo("Login failed (invalid credentials or API error).")
        raise typer.Exit(code=1)

    save_session(result["token"], _role(doctor), result["account"]["id"])
    typer.echo(f"Login successful as '{result['account']['name']}'.")


@app.command("logout")
def logout():
    """
    End session and delete local token.
    """
    token = load_token()
    if token:
        if api_logout(token):
            typer.echo("Logged out from backend.")
        else:
            typer.echo("Warning: Failed to logout from backend. The token may have had already expired.")

    clear_session()
    typer.echo("Session ended.")


@app.command("whoami")
def whoami():
    """
    Show the account of the current session.
    """
    session = load_session()
    if session is None:
        typer.echo("Not logged in.")
        raise typer.Exit(code=1)
    typer.echo(f"{session['role']} #{session['id']}")
