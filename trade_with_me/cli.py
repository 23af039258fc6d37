"""CLI interface for the trade database tooling."""

from typing import Optional

import typer
from rich.console import Console
from rich.markup import escape

from trade_with_me.config.constants import (
    DEFAULT_DOWNGRADE_TARGET,
    DEFAULT_INITIATOR_ADDRESS,
    DEFAULT_UPGRADE_TARGET,
)

app = typer.Typer(
    name="trade-with-me",
    help="Schema migrations and smoke tests for the trade service",
    add_completion=False,
)
console = Console()


def _init(verbose: bool) -> None:
    from trade_with_me.config.settings import get_settings
    from trade_with_me.main import setup_logging

    setup_logging("DEBUG" if verbose else get_settings().log_level)


@app.command()
def migrate(
    revision: str = typer.Option(
        DEFAULT_UPGRADE_TARGET,
        "--revision",
        "-r",
        help="Target revision",
    ),
    schema_file: Optional[str] = typer.Option(
        None,
        "--schema-file",
        "-s",
        help="Where to write the schema after migrating (default: SCHEMA_FILE)",
    ),
    verbose: bool = typer.Option(
        False,
        "--verbose",
        "-v",
        help="Enable verbose logging",
    ),
) -> None:
    """Run pending migrations and regenerate the schema file."""
    _init(verbose)

    from trade_with_me.config.settings import get_settings
    from trade_with_me.db.migrator import MigrationError, MigrationRunner
    from trade_with_me.db.schema_dump import SchemaDumpError

    settings = get_settings()
    runner = MigrationRunner(settings)

    try:
        path = runner.run(schema_file=schema_file, revision=revision)
    except MigrationError as e:
        console.print("[red]An error occurred while running migrations.[/red]")
        console.print(f"[dim]{escape(str(e.cause))}[/dim]", highlight=False)
        raise typer.Exit(code=1)
    except SchemaDumpError as e:
        console.print(f"[red]Migrations applied but the schema was not written: {escape(str(e))}[/red]")
        raise typer.Exit(code=1)

    console.print("[green]Migrations ran successfully.[/green]")
    console.print(f"Schema written to {path}")


@app.command()
def revert(
    revision: str = typer.Option(
        DEFAULT_DOWNGRADE_TARGET,
        "--revision",
        "-r",
        help="Revision to downgrade to",
    ),
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Enable verbose logging"),
) -> None:
    """Revert the most recent migration."""
    _init(verbose)

    from trade_with_me.config.settings import get_settings
    from trade_with_me.db.migrator import MigrationError, MigrationRunner

    runner = MigrationRunner(get_settings())
    runner.export_database_url()

    try:
        runner.downgrade(revision)
    except MigrationError as e:
        console.print("[red]An error occurred while reverting migrations.[/red]")
        console.print(f"[dim]{escape(str(e.cause))}[/dim]", highlight=False)
        raise typer.Exit(code=1)

    console.print("[green]Migrations reverted successfully.[/green]")


@app.command("print-schema")
def print_schema(
    output: Optional[str] = typer.Option(
        None,
        "--output",
        "-o",
        help="Write to this file instead of stdout",
    ),
) -> None:
    """Print the schema of the live database."""
    _init(False)

    from trade_with_me.config.settings import get_settings
    from trade_with_me.db.migrator import MigrationRunner
    from trade_with_me.db.schema_dump import SchemaDumpError, render_schema

    runner = MigrationRunner(get_settings())

    try:
        if output:
            path = runner.print_schema(output)
            console.print(f"Schema written to {path}")
            return

        engine = runner.create_engine()
        try:
            schema = render_schema(engine)
        finally:
            engine.dispose()
    except SchemaDumpError as e:
        console.print(f"[red]{escape(str(e))}[/red]")
        raise typer.Exit(code=1)

    typer.echo(schema, nl=False)


@app.command("smoke-test")
def smoke_test(
    base_url: Optional[str] = typer.Option(
        None,
        "--base-url",
        "-u",
        help="Trade service URL (default: API_BASE_URL)",
    ),
    initiator: str = typer.Option(
        DEFAULT_INITIATOR_ADDRESS,
        "--initiator",
        "-i",
        help="initiator_address sent in the request body",
    ),
) -> None:
    """Send one create-trade request and print the response."""
    _init(False)

    from trade_with_me.config.settings import get_settings
    from trade_with_me.smoke.create_trade import format_result, send_create_trade

    settings = get_settings()
    result = send_create_trade(
        base_url=base_url or settings.api_base_url,
        initiator_address=initiator,
        timeout=settings.request_timeout_seconds,
    )
    typer.echo(format_result(result))


@app.command()
def status() -> None:
    """Show database configuration and the applied revision."""
    from rich.table import Table

    from trade_with_me.config.settings import get_settings
    from trade_with_me.db.migrator import MigrationRunner

    try:
        settings = get_settings()
    except Exception as e:
        console.print(f"[red]Error loading settings: {e}[/red]")
        console.print("\nMake sure you have a valid .env file configured.")
        raise typer.Exit(code=1)

    console.print("[bold]Database Configuration[/bold]\n")

    table = Table(show_header=False)
    table.add_column("Setting", style="dim")
    table.add_column("Value")

    table.add_row("Environment", settings.environment)
    table.add_row("DATABASE_URL", settings.masked_connection_url)
    table.add_row("Schema file", settings.schema_file)
    table.add_row("Trade service", settings.api_base_url)

    try:
        revision = MigrationRunner(settings).current_revision()
        table.add_row("Revision", revision or "[yellow]none applied[/yellow]")
    except Exception as e:
        table.add_row("Revision", f"[red]unavailable ({e.__class__.__name__})[/red]")

    console.print(table)
