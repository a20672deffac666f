import typer

from cli.core.api import (
    ApiError,
    api_book,
    api_doctor_schedule,
    api_history,
    api_lab_reports,
    api_list_doctors,
    api_reschedule,
)
from cli.core.utils import print_consultations, require_session


app = typer.Typer(help="Consultation commands (book, history, reschedule, ...)")


@app.command("doctors")
def doctors():
    """
    List the doctors available for booking.
    """
    try:
        result = api_list_doctors()
    except ApiError as e:
        typer.echo(f"Error: {e}")
        raise typer.Exit(code=1)
    for d in result:
        typer.echo(f"#{d['id']}  {d['name']}  {d['specialization']} ({d['center']})")


@app.command("book")
def book(
    doctor_id: int = typer.Option(..., "--doctor-id", "-d", help="Doctor to consult"),
    date: str = typer.Option(..., "--date", help="YYYY-MM-DD"),
    time: str = typer.Option(..., "--time", help="HH:MM"),
    reason: str = typer.Option(..., "--reason", "-r", help="Reason for the consultation"),
):
    """
    Book a consultation (patient session).
    """
    session = require_session("patient")
    try:
        consultation_id = api_book(session["token"], doctor_id, date, time, reason)
    except ApiError as e:
        typer.echo(f"Booking failed: {e}")
        raise typer.Exit(code=1)
    typer.echo(f"Consultation booked (#{consultation_id}).")


@app.command("history")
def history():
    """
    Show the consultation history of the logged in patient.
    """
    session = require_session("patient")
    try:
        consultations = api_history(session["token"], session["id"])
    except ApiError as e:
        typer.echo(f"Error: {e}")
        raise typer.Exit(code=1)
    print_consultations(consultations)


@app.command("reports")
def reports():
    session = require_session("patient")
    try:
        result = api_lab_reports(session["token"], session["id"])
    except ApiError as e:
        typer.echo(f"Error: {e}")
        raise typer.Exit(code=1)
    for r in result:
        typer.echo(f"#{r['id']}  {r['date']}  {r['test']}  [{r['status']}]")


@app.command("schedule")
def schedule():
    """
    Show the consultations assigned to the logged in doctor.
    """
    session = require_session("doctor")
    try:
        consultations = api_doctor_schedule(session["token"], session["id"])
    except ApiError as e:
        typer.echo(f"Error: {e}")
        raise typer.Exit(code=1)
    print_consultations(consultations)


@app.command("reschedule")
def reschedule(
    consultation_id: int = typer.Argument(..., help="Consultation to move"),
    date: str = typer.Option(..., "--date", help="YYYY-MM-DD"),
    time: str = typer.Option(..., "--time", help="HH:MM"),
):
    """
    Move one of your consultations to a new slot (doctor session).
    """
    session = require_session("doctor")
    try:
        consultation = api_reschedule(session["token"], consultation_id, date, time)
    except ApiError as e:
        typer.echo(f"Reschedule failed: {e}")
        raise typer.Exit(code=1)
    typer.echo(f"Consultation #{consultation['id']} moved to {consultation['date']} {consultation['time']}.")
