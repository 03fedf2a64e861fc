"""rowmodel CLI: read and write table rows through the Model lifecycle."""

import logging
import sys
from typing import Annotated

import typer

import rowmodel
from rowmodel.cli.context import CLIContext, get_database_url, get_log_level

app = typer.Typer(
    name="rowmodel",
    help="Query, count, save and delete table rows with rowmodel",
    no_args_is_help=True,
)


@app.callback()
def main_callback(
    ctx: typer.Context,
    database: Annotated[
        str | None,
        typer.Option(
            "--database",
            "-d",
            envvar="ROWMODEL_URL",
            help="Database URL (PostgreSQL or SQLite); default sqlite:///./rowmodel.db",
        ),
    ] = None,
    echo: Annotated[
        bool,
        typer.Option(
            "--echo",
            "-e",
            help="Echo SQL statements to console",
        ),
    ] = False,
    json_output: Annotated[
        bool,
        typer.Option(
            "--json",
            "-j",
            help="Output as JSON (machine-readable)",
        ),
    ] = False,
    log_level: Annotated[
        str | None,
        typer.Option(
            "--log-level",
            envvar="ROWMODEL_LOG_LEVEL",
            help="Logging level (DEBUG, INFO, WARNING, ERROR)",
        ),
    ] = None,
) -> None:
    """Configure logging and open the database lazily for the chosen command.

    Every command builds an ad hoc Model for its table, so failures are
    reported the same way the library reports them.
    """
    logging.basicConfig(level=get_log_level(log_level), stream=sys.stderr)

    cli_ctx = CLIContext(
        database_url=get_database_url(database),
        echo=echo,
        json_output=json_output,
    )

    ctx.obj = cli_ctx


@app.command()
def version() -> None:
    """Show version information."""
    typer.echo(f"rowmodel v{rowmodel.__version__}")


from rowmodel.cli.commands import records

app.command(name="find")(records.find_command)
app.command(name="count")(records.count_command)
app.command(name="get")(records.get_command)
app.command(name="save")(records.save_command)
app.command(name="delete")(records.delete_command)


def main() -> None:
    """Main entry point for the CLI."""
    app()


if __name__ == "__main__":
    main()
