"""Command-line interface for storelink."""

import logging
from typing import Annotated

import typer
from aiohttp import web
from rich.console import Console
from rich.logging import RichHandler
from rich.table import Table

from storelink import __version__
from storelink.settings import Settings, get_settings
from storelink.web.app import create_app


def _setup_logging(verbose: bool = False) -> None:
    """Configure logging with Rich handler."""
    level = logging.DEBUG if verbose else logging.INFO
    logging.basicConfig(
        level=level,
        format="%(message)s",
        datefmt="[%X]",
        handlers=[RichHandler(rich_tracebacks=True, show_path=False)],
    )
    # Quiet noisy libraries
    logging.getLogger("httpx").setLevel(logging.WARNING)
    logging.getLogger("httpcore").setLevel(logging.WARNING)
    if not verbose:
        logging.getLogger("aiohttp.access").setLevel(logging.WARNING)


def _mask(value: str | None) -> str:
    if not value:
        return "-"
    return f"{value[:4]}…" if len(value) > 8 else "****"


def _settings_table(settings: Settings) -> Table:
    """Build a table of effective settings with secrets masked."""
    table = Table(title="storelink settings")
    table.add_column("Setting", style="cyan")
    table.add_column("Value", style="green")

    table.add_row("Etsy API key", _mask(settings.etsy_api_key))
    table.add_row("Redirect URI", settings.oauth_redirect_uri)
    table.add_row("Scopes", settings.etsy_scopes)
    table.add_row("Listen", f"{settings.host}:{settings.port}")
    if settings.redis_url:
        backend = "redis"
    elif settings.session_dir:
        backend = f"files ({settings.session_dir})"
    else:
        backend = "memory (development only)"
    table.add_row("Session backend", backend)
    table.add_row("Session cookie", settings.session_cookie_name)
    table.add_row("Session max age", f"{settings.session_max_age}s")
    table.add_row("Secure cookie", str(settings.cookie_secure))
    table.add_row("HTTP timeout", f"{settings.http_timeout}s")
    return table


app = typer.Typer(
    name="storelink",
    help="Delegated Etsy API access for browser sessions.",
)


@app.command()
def serve(
    host: Annotated[
        str | None,
        typer.Option("--host", help="Interface to bind. Defaults to HOST setting."),
    ] = None,
    port: Annotated[
        int | None,
        typer.Option("--port", "-p", help="Port to bind. Defaults to PORT setting."),
    ] = None,
    verbose: Annotated[
        bool,
        typer.Option("--verbose", "-v", help="Enable verbose logging."),
    ] = False,
) -> None:
    """Run the web server."""
    _setup_logging(verbose)
    settings = get_settings()
    if not settings.etsy_api_key:
        raise typer.BadParameter("ETSY_API_KEY is not set")

    web.run_app(
        create_app(settings),
        host=host or settings.host,
        port=port or settings.port,
        print=None,
    )


@app.command()
def config() -> None:
    """Show effective settings."""
    Console().print(_settings_table(get_settings()))


@app.command()
def version() -> None:
    """Show version."""
    Console().print(f"storelink {__version__}")


if __name__ == "__main__":
    app()
