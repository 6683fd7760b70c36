"""Output formatting for CLI commands.

Decoded payloads and metrics snapshots are printed either as indented JSON
or as a rich table.
"""

import json
from io import StringIO
from typing import Any

import click
from rich.console import Console
from rich.table import Table


def format_output(data: Any, fmt: str = "json", no_color: bool = False) -> None:
    """Format ``data`` and write it to stdout.

    Handles pydantic models (via ``model_dump()``), lists, dicts and
    primitives.

    Args:
        data: Data to format
        fmt: Output format (json, table)
        no_color: Disable colored output for table format
    """
    if hasattr(data, "model_dump"):
        data = data.model_dump()
    elif isinstance(data, list) and len(data) > 0 and hasattr(data[0], "model_dump"):
        data = [item.model_dump() for item in data]

    if fmt == "table":
        text = _format_table(data, no_color=no_color)
    else:
        text = _format_json(data)

    click.echo(text)


def _format_json(data: Any) -> str:
    return json.dumps(data, indent=2, default=str, ensure_ascii=False)


def _format_table(data: Any, no_color: bool = False) -> str:
    """Format data as a table, one row per item and one column per key.

    Columns are the union of the keys of all items, in first-seen order.
    Items that are not objects land in a ``value`` column.
    """
    items = data if isinstance(data, list) else [data]
    if not items:
        return "No results"

    rows = [item if isinstance(item, dict) else {"value": item} for item in items]
    columns = list(dict.fromkeys(key for row in rows for key in row))

    table = Table(show_header=True, header_style="bold")
    for col in columns:
        table.add_column(col)

    for row in rows:
        table.add_row(*[_cell(row.get(col, "")) for col in columns])

    buffer = StringIO()
    console = Console(file=buffer, force_terminal=not no_color, no_color=no_color)
    console.print(table)

    return buffer.getvalue()


def _cell(value: Any) -> str:
    if isinstance(value, (dict, list)):
        return json.dumps(value, default=str)
    return str(value)
