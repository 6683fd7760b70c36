import click

from .cli_fetch import fetch


@click.group()
@click.version_option(package_name="apiclient")
def cli() -> None:
    """Issue HTTP requests and decode their JSON responses."""
    pass


cli.add_command(fetch)
