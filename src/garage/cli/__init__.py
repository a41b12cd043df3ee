"""Main CLI application module."""

import typer

from src.garage.api.utils.app_startup import configure_logging
from src.garage.runtime.context import get_config

from .db_commands import db_app
from .module_commands import module_app

app = typer.Typer(
    help="🚗 Garage CLI - database and module management",
    no_args_is_help=True,
    rich_markup_mode="rich",
)

app.add_typer(db_app, name="db")
app.add_typer(module_app, name="modules")


@app.command()
def serve(
    host: str | None = typer.Option(None, help="Bind host (defaults to config)"),
    port: int | None = typer.Option(None, help="Bind port (defaults to config)"),
) -> None:
    """🚀 Run the API server."""
    import uvicorn

    config = get_config()
    uvicorn.run(
        "src.garage.api.http.app:app",
        host=host or config.app.host,
        port=port or config.app.port,
        access_log=False,
    )


def main() -> None:
    """Main entry point for the CLI."""
    configure_logging()
    app()


if __name__ == "__main__":
    main()
