import asyncio
from pathlib import Path
from typing import Optional

import duckdb
import pandas as pd
import typer

from lightbnb.backend.error_handling import categorize_error
from lightbnb.config.settings import Settings
from lightbnb.core.dependencies import DependencyContainer
from lightbnb.data.queries import PropertySearchFilters

app = typer.Typer(
    name="lightbnb",
    help="CLI tool to query the LightBnB rental database.",
    add_completion=False
)

DB_PATH_OPTION = typer.Option(
    None,
    "--db",
    help="Path to the DuckDB database file. Defaults to LIGHTBNB_DB_PATH or data/lightbnb.duckdb."
)


def _container(db_path: Optional[Path]) -> DependencyContainer:
    return DependencyContainer(db_path=db_path, logger_name="lightbnb_cli")


def _fail(error: Exception) -> None:
    if isinstance(error, duckdb.Error):
        category = categorize_error(error).value
        typer.secho(f"Store error ({category}): {error}", fg=typer.colors.RED, err=True)
    else:
        typer.secho(f"Error: {error}", fg=typer.colors.RED, err=True)
    raise typer.Exit(code=1)


def _echo_rows(rows) -> None:
    if not rows:
        typer.echo("No results.")
        return
    typer.echo(pd.DataFrame(rows).to_string(index=False))


@app.command("init-db")
def init_db(db: Optional[Path] = DB_PATH_OPTION):
    """
    Create the LightBnB tables if they don't exist.
    """
    container = _container(db)
    try:
        asyncio.run(container.rental_data_service.create_schema())
    except duckdb.Error as e:
        _fail(e)
    typer.secho(f"Schema ready at {container.db_path}", fg=typer.colors.GREEN)


@app.command()
def search(
    city: Optional[str] = typer.Option(None, "--city", help="Substring of the city name."),
    owner_id: Optional[int] = typer.Option(None, "--owner-id", help="Only properties of this owner."),
    minimum_price_per_night: Optional[float] = typer.Option(None, "--min-price", help="Minimum nightly price in dollars."),
    maximum_price_per_night: Optional[float] = typer.Option(None, "--max-price", help="Maximum nightly price in dollars."),
    minimum_rating: Optional[float] = typer.Option(None, "--min-rating", help="Minimum average review rating."),
    limit: int = typer.Option(Settings.DEFAULT_RESULT_LIMIT, "--limit", "-n", help="Maximum number of properties."),
    db: Optional[Path] = DB_PATH_OPTION,
):
    """
    Search properties, cheapest first, with their average rating.
    """
    filters = PropertySearchFilters(
        city=city,
        owner_id=owner_id,
        minimum_price_per_night=minimum_price_per_night,
        maximum_price_per_night=maximum_price_per_night,
        minimum_rating=minimum_rating,
    )
    service = _container(db).rental_data_service
    try:
        rows = asyncio.run(service.get_all_properties(filters, limit=limit))
    except duckdb.Error as e:
        _fail(e)
    _echo_rows(rows)


@app.command()
def user(
    email: Optional[str] = typer.Option(None, "--email", "-e", help="Look the user up by email."),
    user_id: Optional[int] = typer.Option(None, "--id", help="Look the user up by id."),
    db: Optional[Path] = DB_PATH_OPTION,
):
    """
    Show a single user by email or id.
    """
    if (email is None) == (user_id is None):
        typer.secho("Provide exactly one of --email or --id.", fg=typer.colors.RED, err=True)
        raise typer.Exit(code=2)

    service = _container(db).rental_data_service
    try:
        if email is not None:
            record = asyncio.run(service.get_user_with_email(email))
        else:
            record = asyncio.run(service.get_user_with_id(user_id))
    except duckdb.Error as e:
        _fail(e)

    if record is None:
        typer.echo("User not found.")
        raise typer.Exit(code=1)
    for key, value in record.items():
        if key != "password":
            typer.echo(f"{key}: {value}")


@app.command()
def reservations(
    guest_id: int = typer.Argument(..., help="Id of the guest."),
    limit: int = typer.Option(Settings.DEFAULT_RESULT_LIMIT, "--limit", "-n", help="Maximum number of reservations."),
    db: Optional[Path] = DB_PATH_OPTION,
):
    """
    List reservations with property details and average rating.
    """
    service = _container(db).rental_data_service
    try:
        rows = asyncio.run(service.get_all_reservations(guest_id, limit=limit))
    except duckdb.Error as e:
        _fail(e)
    _echo_rows(rows)


if __name__ == "__main__":
    app()
