"""Tracemark CLI - tmk command."""

import click

from tracemark.cli.scan import scan_command
from tracemark.core.logging import configure_logging


@click.group()
@click.version_option(version="0.1.0", prog_name="tmk")
@click.option("-v", "--verbose", is_flag=True, help="Enable debug logging")
@click.pass_context
def cli(ctx: click.Context, verbose: bool) -> None:
    """Tracemark - requirement marker context extraction for source trees."""
    ctx.ensure_object(dict)
    ctx.obj["verbose"] = verbose
    configure_logging(level="DEBUG" if verbose else "WARNING")


cli.add_command(scan_command, name="scan")


if __name__ == "__main__":
    cli()
