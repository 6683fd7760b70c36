from pathlib import Path
from typing import Optional

import click

from .._api_client import APIClient
from ..models.errors import APIClientError
from ._utils._formatters import format_output


def _parse_parameters(values: tuple[str, ...]) -> Optional[dict[str, str]]:
    if not values:
        return None
    parameters = {}
    for value in values:
        key, sep, item = value.partition("=")
        if not sep or not key:
            raise click.BadParameter(
                f"expected KEY=VALUE, got {value!r}", param_hint="--param"
            )
        parameters[key] = item
    return parameters


def _parse_headers(values: tuple[str, ...]) -> Optional[dict[str, str]]:
    if not values:
        return None
    headers = {}
    for value in values:
        name, sep, item = value.partition(":")
        if not sep or not name.strip():
            raise click.BadParameter(
                f"expected 'Name: value', got {value!r}", param_hint="--header"
            )
        headers[name.strip()] = item.strip()
    return headers


def _read_body(data: Optional[str]) -> Optional[bytes]:
    if data is None:
        return None
    if data.startswith("@"):
        path = Path(data[1:])
        if not path.is_file():
            raise click.BadParameter(f"file not found: {path}", param_hint="--data")
        return path.read_bytes()
    return data.encode("utf-8")


@click.command()
@click.argument("url")
@click.option("-X", "--method", default="GET", show_default=True, help="HTTP method")
@click.option(
    "-p",
    "--param",
    "params",
    multiple=True,
    help="Request parameter as KEY=VALUE (query for GET, JSON body otherwise)",
)
@click.option(
    "-H", "--header", "headers", multiple=True, help="Request header as 'Name: value'"
)
@click.option(
    "-d", "--data", help="Raw request body, or @path to read it from a file"
)
@click.option(
    "--timeout",
    type=click.FloatRange(min=0, min_open=True),
    help="Request timeout in seconds",
)
@click.option("--token", help="Bearer token sent in the Authorization header")
@click.option(
    "--print-response",
    is_flag=True,
    help="Log the status and the pretty-printed response payload",
)
@click.option(
    "--format",
    "fmt",
    type=click.Choice(["json", "table"]),
    default="json",
    show_default=True,
    help="Output format",
)
@click.option("--no-color", is_flag=True, help="Disable colored table output")
@click.option(
    "--metrics", "show_metrics", is_flag=True, help="Print call metrics afterwards"
)
@click.option("--verbose", "-v", is_flag=True, help="Enable verbose logging")
def fetch(
    url,
    method,
    params,
    headers,
    data,
    timeout,
    token,
    print_response,
    fmt,
    no_color,
    show_metrics,
    verbose,
):
    r"""Fetch URL and print the decoded JSON response.

    \b
    Examples:
        apiclient fetch https://api.example.com/items -p q=shoes -p limit=10
        apiclient fetch https://api.example.com/items -X POST -p name=shoe
        apiclient fetch https://api.example.com/items -X PUT -d @item.json
    """
    parameters = _parse_parameters(params)
    header_map = _parse_headers(headers)
    body = _read_body(data)

    error: Optional[APIClientError] = None
    with APIClient(
        timeout=timeout,
        token=token,
        print_response=print_response or None,
        debug=verbose or None,
    ) as client:
        try:
            result = client.fetch(
                url,
                method=method,
                parameters=parameters,
                headers=header_map,
                body=body,
            )
        except APIClientError as e:
            error = e
        else:
            format_output(result, fmt, no_color=no_color)

        if show_metrics:
            format_output(client.metrics.snapshot(), fmt, no_color=no_color)

    if error is not None:
        raise click.ClickException(error.message)
