"""Module inspection CLI commands."""

import typer
from rich.markup import escape
from rich.table import Table

from src.garage.core.errors import GarageError
from src.garage.core.module_registry import (
    discover_modules,
    find_module,
    guess_factory_name,
)

from .utils import console

module_app = typer.Typer(help="🧩 Module commands")


def _mark(present: bool) -> str:
    return "[green]✓[/green]" if present else "[dim]-[/dim]"


@module_app.command("list")
def list_modules() -> None:
    """List discovered modules and the conventional files each one ships."""
    modules = discover_modules()
    if not modules:
        console.print("[yellow]⚠️ No modules found[/yellow]")
        return

    table = Table(title="Modules")
    table.add_column("Module", style="cyan")
    table.add_column("Model")
    table.add_column("Routes", justify="center")
    table.add_column("Factory", justify="center")
    table.add_column("Seeder", justify="center")
    for info in modules:
        table.add_row(
            info.name,
            info.model_name,
            _mark(info.routes_file is not None),
            _mark(info.has_factory),
            _mark(info.has_seeder),
        )
    console.print(table)


@module_app.command()
def show(
    name: str = typer.Argument(..., help="Module directory name"),
) -> None:
    """Show where a module's conventional files live."""
    try:
        info = find_module(name)
    except GarageError as e:
        console.print(f"[red]❌ {escape(str(e))}[/red]")
        raise typer.Exit(1) from e

    console.print(f"[bold cyan]{info.name}[/bold cyan] ({info.package})")
    console.print(f"  Model:   {info.model_path}")
    console.print(f"  Routes:  {info.routes_file or '-'}")
    console.print(f"  Factory: {guess_factory_name(info.model_path)}")
    console.print(f"  Seeder:  {info.model_name + 'Seeder' if info.has_seeder else '-'}")
