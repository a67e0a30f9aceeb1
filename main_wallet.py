"""Mini README: Entry point CLI for the MyWallet backend.

This script exposes a Typer CLI with two commands: ``run`` starts the FastAPI
application under uvicorn, and ``init-db`` creates the database tables ahead
of the first start. Both read their defaults from ``MYWALLET_*`` settings.
"""

from __future__ import annotations

import typer
import uvicorn

from mywallet.configuration import get_settings
from mywallet.logging_utils import configure_root_logger
from mywallet.storage import Database

cli = typer.Typer(help="Run and manage the MyWallet ledger service.")


@cli.command()
def run(
    host: str = typer.Option(None, help="Host interface to bind."),
    port: int = typer.Option(None, help="Port to listen on."),
    production: bool = typer.Option(
        False, help="Use production server settings (disable auto-reload)."
    ),
) -> None:
    """Start the FastAPI application using uvicorn."""

    settings = get_settings()
    effective_host = host or settings.interface_host
    effective_port = port or settings.interface_port
    configure_root_logger(settings.log_level)

    # 0.0.0.0 cannot be typed into a browser; point at localhost instead.
    browser_host = "127.0.0.1" if effective_host in {"0.0.0.0", "::"} else effective_host
    typer.echo(
        f"Starting MyWallet on {effective_host}:{effective_port}.\n"
        f"API available at http://{browser_host}:{effective_port}/docs"
    )
    uvicorn.run(
        "mywallet.interface.web_app:create_application",
        host=effective_host,
        port=effective_port,
        factory=True,
        reload=not production,
    )


@cli.command("init-db")
def init_db() -> None:
    """Create the users, sessions and entries tables."""

    settings = get_settings()
    configure_root_logger(settings.log_level)
    database = Database(settings.database_url)
    try:
        database.create_schema()
    finally:
        database.dispose()
    typer.echo(f"Schema ready at {database.engine.url.render_as_string()}")


if __name__ == "__main__":
    cli()
