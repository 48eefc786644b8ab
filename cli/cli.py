"""Developer CLI for Jai Metro.

Runs the API server and inspects the chart, clock and cell helpers locally
without going through HTTP.
"""

import os
from datetime import timedelta

import typer
import uvicorn
from loguru import logger
from rich.console import Console
from rich.panel import Panel
from rich.table import Table
from rich.text import Text

from jaimetro.charts.panel import normalize_cell, parse, sanitize_cell
from jaimetro.charts.weeks import build_year_rows, parse_range
from jaimetro.config.settings import settings
from jaimetro.core.logger import setup_logger
from jaimetro.daily.clock import current_business_date
from jaimetro.db.session import Database

console = Console()

app = typer.Typer(
    name="jaimetro-cli",
    help="Jai Metro CLI - local server and chart tooling",
    add_completion=False,
)

DEFAULT_HOST = os.getenv("SERVER_HOST", "127.0.0.1")


@app.callback()
def main(debug: bool = typer.Option(False, "--debug", help="Enable debug logging")) -> None:
    setup_logger(
        level="DEBUG" if debug else settings.log_level,
        log_file=settings.log_file,
        rotation=settings.log_rotation,
        retention=settings.log_retention,
    )


@app.command()
def server(
    host: str = typer.Option(DEFAULT_HOST, "--host", "-h", help="Host to bind to"),
    port: int = typer.Option(8000, "--port", "-p", help="Port to bind to"),
    reload: bool = typer.Option(False, "--reload", help="Enable auto-reload"),
) -> None:
    """Run the FastAPI server."""
    logger.info(f"Starting FastAPI server on {host}:{port} (reload={reload})")
    uvicorn.run("jaimetro.main:app", host=host, port=port, reload=reload)


@app.command()
def init_db() -> None:
    """Create the database tables and check the connection."""
    database = Database(settings.database_url)
    database.connect()
    ok = database.ping()
    database.dispose()

    if not ok:
        console.print(Panel(Text("Database is NOT reachable", style="bold red"), subtitle=settings.database_url, border_style="red"))
        raise typer.Exit(1)
    console.print(Panel(Text("Database ready", style="bold green"), subtitle=settings.database_url, border_style="green"))


@app.command()
def weeks(year: int = typer.Argument(..., help="Calendar year")) -> None:
    """Print the week buckets of a year."""
    try:
        rows = build_year_rows(year)
    except ValueError as e:
        console.print(f"[red]{e}[/red]")
        raise typer.Exit(1) from e

    table = Table(title=f"Weeks of {year}")
    table.add_column("#", justify="right")
    table.add_column("Range")
    table.add_column("Days", justify="right")
    for i, row in enumerate(rows):
        start, end = parse_range(row["range"])
        table.add_row(str(i), row["range"], str((end - start).days + 1))
    console.print(table)


@app.command()
def business_date() -> None:
    """Print the current business date key."""
    key = current_business_date(
        utc_offset=timedelta(minutes=settings.business_day_utc_offset_minutes),
        rollover_hour=settings.business_day_rollover_hour,
    )
    console.print(key)


@app.command()
def panel(raw: str = typer.Argument(..., help="Cell text, use \\n between lines")) -> None:
    """Show how a cell value is parsed and stored."""
    raw = raw.replace("\\n", "\n")
    table = Table(title="Panel")
    table.add_column("Slot")
    table.add_column("Value")
    for slot, value in parse(raw).as_dict().items():
        table.add_row(slot, value)
    console.print(table)
    console.print(Panel(Text(sanitize_cell(raw) or "(empty)"), title="Stored as"))
    console.print(Panel(Text(normalize_cell(raw) or "(empty)"), title="Canonical"))


if __name__ == "__main__":
    app()
