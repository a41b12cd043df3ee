"""Database management CLI commands."""

import typer
from rich.markup import escape
from rich.panel import Panel
from rich.table import Table

from src.garage.core.errors import GarageError
from src.garage.core.seeders import seed_database
from src.garage.core.services import DbManageService, DbSessionService

from .utils import console

db_app = typer.Typer(help="🗄️  Database commands")


@db_app.command()
def init() -> None:
    """Create the tables of every discovered module."""
    tables = DbManageService().create_all()
    console.print(f"[green]✅ Created tables: {', '.join(tables) or '(none)'}[/green]")


@db_app.command()
def seed(
    module: str | None = typer.Option(
        None, "--module", "-m", help="Seed only this module"
    ),
) -> None:
    """🌱 Populate the database with sample rows from module seeders."""
    console.print(Panel.fit("[bold green]Seeding database[/bold green]", border_style="green"))

    session_service = DbSessionService()
    DbManageService(session_service).create_all()
    try:
        results = seed_database(session_service, module=module)
    except GarageError as e:
        console.print(f"[red]❌ {escape(str(e))}[/red]")
        raise typer.Exit(1) from e

    table = Table(title="Seeded rows")
    table.add_column("Module", style="cyan")
    table.add_column("Rows", justify="right", style="green")
    for name, rows in results.items():
        table.add_row(name, str(rows))
    console.print(table)
