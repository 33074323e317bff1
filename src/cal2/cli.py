"""cal2 CLI - calendar with holidays."""

import logging
import sys
from datetime import date

import click

from . import __version__
from .config import DISPLAY_MODES, LIST_FORMATS, load_config
from .core.holidays import resolve_provider
from .core.render import DisplayMode
from .errors import CalError
from .workflows import add_custom_holiday, delete_holiday, show_calendar, show_holidays


def _fail(e: Exception) -> None:
    click.echo(f"Error: {e}", err=True)
    sys.exit(1)


def _setup(ctx: click.Context):
    """Load config and resolve the provider before any I/O."""
    config = ctx.obj["config"]
    country = ctx.obj["country"]
    if country is None:
        country = config.country
    try:
        provider = resolve_provider(country)
    except CalError as e:
        _fail(e)
    return config, provider


@click.group(invoke_without_command=True)
@click.version_option(__version__)
@click.option("--country", default=None, help="ISO country code (default: AR)")
@click.option("-v", "--verbose", is_flag=True, help="Log cache and network activity")
@click.pass_context
def main(ctx, country: str | None, verbose: bool):
    """cal2 - Calendar with public and custom holidays."""
    logging.basicConfig(
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
        level=logging.INFO if verbose else logging.WARNING,
    )
    ctx.ensure_object(dict)
    ctx.obj["config"] = load_config()
    ctx.obj["country"] = country

    if ctx.invoked_subcommand is None:
        ctx.invoke(display)


@main.command()
@click.option(
    "--mode",
    type=click.Choice(DISPLAY_MODES, case_sensitive=False),
    default=None,
    help="q (previous, current, next month), month or year",
)
@click.pass_context
def display(ctx, mode: str | None = None):
    """Show the calendar."""
    config, provider = _setup(ctx)
    display_mode = DisplayMode((mode or config.display_mode).lower())
    try:
        output = show_calendar(config, provider, display_mode, date.today())
    except CalError as e:
        _fail(e)
    click.echo(output)


@main.command("list")
@click.option(
    "--format",
    "fmt",
    type=click.Choice(LIST_FORMATS, case_sensitive=False),
    default=None,
    help="Output format (json prints [] when there are no holidays)",
)
@click.pass_context
def list_cmd(ctx, fmt: str | None = None):
    """List this year's holidays."""
    config, provider = _setup(ctx)
    try:
        output = show_holidays(config, provider, (fmt or config.list_format).lower(), date.today())
    except CalError as e:
        _fail(e)
    click.echo(output)


@main.command()
@click.argument("day", type=int)
@click.argument("month", type=int)
@click.pass_context
def add(ctx, day: int, month: int):
    """Add a custom holiday on DAY/MONTH of this year."""
    config, provider = _setup(ctx)
    try:
        output = add_custom_holiday(config, provider, day, month, date.today())
    except CalError as e:
        _fail(e)
    click.echo(output)


@main.command()
@click.argument("day", type=int)
@click.argument("month", type=int)
@click.pass_context
def delete(ctx, day: int, month: int):
    """Delete the holiday on DAY/MONTH of this year."""
    config, provider = _setup(ctx)
    try:
        output = delete_holiday(config, provider, day, month, date.today())
    except CalError as e:
        _fail(e)
    click.echo(output)


if __name__ == "__main__":
    main()
