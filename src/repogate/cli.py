"""repogate command line."""

import typer
from rich.console import Console
from rich.table import Table

from repogate import __version__
from repogate.config import get_settings


console = Console()

app = typer.Typer(
    name="repogate",
    help="Sign in with GitHub and list your repositories.",
    no_args_is_help=True,
    rich_markup_mode="rich",
)

SECRET_FIELDS = {"client_secret", "session_secret"}


@app.callback(invoke_without_command=True)
def version_callback(
    version: bool = typer.Option(
        False, "--version", "-v", help="Show version and exit."
    ),
) -> None:
    """repogate - sign in with GitHub and list your repositories."""
    if version:
        console.print(f"[bold cyan]repogate[/bold cyan] version {__version__}")
        raise typer.Exit()


@app.command()
def serve(
    host: str | None = typer.Option(None, "--host", help="Bind address (default: HOST)."),
    port: int | None = typer.Option(None, "--port", "-p", help="Port (default: PORT)."),
    reload: bool = typer.Option(False, "--reload", help="Reload on code changes."),
) -> None:
    """Run the web server."""
    import uvicorn

    settings = get_settings()
    uvicorn.run(
        "repogate.main:create_app",
        factory=True,
        host=host or settings.host,
        port=port or settings.port,
        reload=reload,
    )


@app.command(name="config")
def show_config() -> None:
    """Show the effective settings. Secrets are masked."""
    settings = get_settings()

    table = Table(title="repogate settings", show_header=True)
    table.add_column("Setting", style="cyan", no_wrap=True)
    table.add_column("Value")

    for name in type(settings).model_fields:
        value = getattr(settings, name)
        if name in SECRET_FIELDS and value:
            shown = "[dim]********[/dim]"
        elif value is None:
            shown = "[dim]unset[/dim]"
        else:
            shown = str(value)
        table.add_row(name.upper(), shown)

    console.print(table)

    if not settings.oauth_configured:
        console.print(
            "[yellow]Warning:[/yellow] CLIENT_ID and CLIENT_SECRET are not set; "
            "sign-in will not work."
        )


def main() -> None:
    """Entry point for the CLI."""
    app()


if __name__ == "__main__":
    main()
