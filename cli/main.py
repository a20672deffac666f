# cli/main.py


import typer
from cli.auth.commands import app as auth_app
from cli.consultations.commands import app as consultations_app

app = typer.Typer(help="PrakritiPath command line client")
app.add_typer(auth_app, name="auth")
app.add_typer(consultations_app, name="consultations")

if __name__ == "__main__":
    app()
