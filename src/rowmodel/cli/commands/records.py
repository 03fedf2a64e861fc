"""Record commands: find, count, get, save and delete rows of a table."""

from typing import Annotated

import typer

from rowmodel import Model
from rowmodel.cli.context import CLIContext
from rowmodel.cli.output import OutputFormatter
from rowmodel.cli.parsing import parse_assignment, parse_column_list, parse_value

TableArg = Annotated[str, typer.Argument(help="Table name")]
WhereOpt = Annotated[
    str | None,
    typer.Option("--where", "-w", help="Filter expression, e.g. 'price > :p'"),
]
ParamsOpt = Annotated[
    str | None,
    typer.Option("--params", "-p", help="Bind values as key=value&key2=value2"),
]
PrimaryOpt = Annotated[str, typer.Option("--primary", help="Primary key column")]


def _report_failure(formatter: OutputFormatter, model: Model, fallback: str) -> None:
    formatter.print_error(model.fail or model.message.text or fallback)
    raise typer.Exit(code=1)


def find_command(
    ctx: typer.Context,
    table: TableArg,
    where: WhereOpt = None,
    params: ParamsOpt = None,
    columns: Annotated[str, typer.Option("--columns", "-c", help="Projection")] = "*",
    group: Annotated[str | None, typer.Option("--group", help="GROUP BY column")] = None,
    order: Annotated[str | None, typer.Option("--order", "-o", help="ORDER BY expression")] = None,
    limit: Annotated[int | None, typer.Option("--limit", "-l", help="Maximum rows")] = None,
    offset: Annotated[int | None, typer.Option("--offset", help="Rows to skip")] = None,
    first: Annotated[bool, typer.Option("--first", help="Return only the first row")] = False,
) -> None:
    """Query rows of a table.

    Examples:

        rowmodel find products --order "price DESC" --limit 5
        rowmodel find products -w "price > :p" -p "p=10"
    """
    cli_ctx: CLIContext = ctx.obj
    formatter = OutputFormatter(cli_ctx.json_output)

    try:
        model = cli_ctx.model(table)
        if group:
            model.group(group)
        if order:
            model.order(order)
        if limit is not None:
            model.limit(limit)
        if offset is not None:
            model.offset(offset)
        model.find(where, params, columns)

        result = model.fetch_result(all=not first)
        if result.failed:
            _report_failure(formatter, model, "Query failed")

        rows = [record.to_dict() for record in result.records]
        formatter.print_table(table, rows)
    except typer.Exit:
        raise
    except Exception as e:
        formatter.print_error(e)
        raise typer.Exit(code=1)
    finally:
        cli_ctx.close()


def count_command(
    ctx: typer.Context,
    table: TableArg,
    where: WhereOpt = None,
    params: ParamsOpt = None,
) -> None:
    """Count rows matching a filter."""
    cli_ctx: CLIContext = ctx.obj
    formatter = OutputFormatter(cli_ctx.json_output)

    try:
        model = cli_ctx.model(table).find(where, params)
        total = model.count()
        if model.fail is not None:
            _report_failure(formatter, model, "Count failed")
        if cli_ctx.json_output:
            formatter.print_data({"table": table, "count": total})
        else:
            typer.echo(str(total))
    except typer.Exit:
        raise
    except Exception as e:
        formatter.print_error(e)
        raise typer.Exit(code=1)
    finally:
        cli_ctx.close()


def get_command(
    ctx: typer.Context,
    table: TableArg,
    record_id: Annotated[str, typer.Argument(help="Primary key value")],
    primary: PrimaryOpt = "id",
) -> None:
    """Show a single row by primary key."""
    cli_ctx: CLIContext = ctx.obj
    formatter = OutputFormatter(cli_ctx.json_output)

    try:
        model = cli_ctx.model(table, primary_key=primary)
        record = model.find_by_id(parse_value(record_id))
        if record is None:
            if model.fail is not None:
                _report_failure(formatter, model, "Query failed")
            formatter.print_error(f"Record '{record_id}' not found in '{table}'")
            raise typer.Exit(code=1)
        formatter.print_data(record.to_dict())
    except typer.Exit:
        raise
    except Exception as e:
        formatter.print_error(e)
        raise typer.Exit(code=1)
    finally:
        cli_ctx.close()


def save_command(
    ctx: typer.Context,
    table: TableArg,
    assignments: Annotated[
        list[str],
        typer.Option("--set", "-s", help="Column assignment column=value (repeatable)"),
    ],
    required: Annotated[
        str | None,
        typer.Option("--required", "-r", help="Comma-separated required columns"),
    ] = None,
    primary: PrimaryOpt = "id",
    timestamps: Annotated[
        bool,
        typer.Option("--timestamps/--no-timestamps", help="Maintain created_at/updated_at"),
    ] = True,
) -> None:
    """Insert a row, or update it when the primary key is given.

    Examples:

        rowmodel save products -s name=Pen -s price=1.5 -r name,price
        rowmodel save products -s id=3 -s price=2
    """
    cli_ctx: CLIContext = ctx.obj
    formatter = OutputFormatter(cli_ctx.json_output)

    try:
        values = dict(parse_assignment(a) for a in assignments)
    except ValueError as e:
        cli_ctx.close()
        raise typer.BadParameter(str(e)) from e

    try:
        model = cli_ctx.model(
            table,
            required=parse_column_list(required),
            primary_key=primary,
            timestamps=timestamps,
        )
        for column, value in values.items():
            model.set(column, value)

        if not model.save():
            _report_failure(formatter, model, "Save failed")

        formatter.print_success(f"Saved record in '{table}'", {"record": model.to_dict()})
    except typer.Exit:
        raise
    except Exception as e:
        formatter.print_error(e)
        raise typer.Exit(code=1)
    finally:
        cli_ctx.close()


def delete_command(
    ctx: typer.Context,
    table: TableArg,
    record_id: Annotated[str, typer.Argument(help="Primary key value")],
    primary: PrimaryOpt = "id",
) -> None:
    """Delete a row by primary key."""
    cli_ctx: CLIContext = ctx.obj
    formatter = OutputFormatter(cli_ctx.json_output)

    try:
        model = cli_ctx.model(table, primary_key=primary)
        model.set(primary, parse_value(record_id))
        if not model.destroy():
            if model.fail is not None:
                _report_failure(formatter, model, "Delete failed")
            formatter.print_error(f"Record '{record_id}' not found in '{table}'")
            raise typer.Exit(code=1)
        formatter.print_success(f"Deleted record '{record_id}' from '{table}'")
    except typer.Exit:
        raise
    except Exception as e:
        formatter.print_error(e)
        raise typer.Exit(code=1)
    finally:
        cli_ctx.close()
