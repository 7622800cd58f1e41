"""
Command-line interface for Burndown Sync.

This module provides the main CLI entry point for the burndown-sync tool.
"""

import json
import logging
import sys
from typing import Optional, Tuple

import click

from burndown_sync import __version__
from burndown_sync.burndown import initialize, record_actual, show_summary
from burndown_sync.config import Config
from burndown_sync.logging_config import setup_logger
from burndown_sync.notion_client import NotionClient
from burndown_sync.sheet import BurndownSheet, open_worksheet

logger = logging.getLogger(__name__)


def load_config(ctx: click.Context) -> Config:
    config_path = ctx.obj.get("config_path")
    if config_path:
        return Config.from_file(config_path)
    return Config.load()


def build_context(ctx: click.Context) -> Tuple[BurndownSheet, NotionClient, Config]:
    """Open the worksheet and the Notion client for a command."""
    config = load_config(ctx)
    config.validate()
    backend = open_worksheet(config, ctx.obj.get("worksheet"))
    return BurndownSheet(backend), NotionClient(config), config


def fail(e: Exception) -> None:
    logger.debug("Command failed", exc_info=True)
    click.echo(f"Error: {e}", err=True)
    sys.exit(1)


@click.group()
@click.version_option(version=__version__)
@click.option(
    "--config",
    "-c",
    "config_path",
    type=click.Path(exists=True, dir_okay=False),
    help="Path to configuration file",
)
@click.option(
    "--worksheet",
    "-w",
    type=str,
    help="Worksheet title (defaults to GOOGLE_WORKSHEET or the first sheet)",
)
@click.pass_context
def main(ctx: click.Context, config_path: Optional[str], worksheet: Optional[str]) -> None:
    """
    Burndown Sync - Notion sprint burndown in Google Sheets.

    Reads the sprint or epic named in the worksheet, totals the team's
    story points and writes the ideal and actual burndown lines.
    """
    setup_logger("burndown_sync")
    ctx.ensure_object(dict)
    ctx.obj["config_path"] = config_path
    ctx.obj["worksheet"] = worksheet


@main.command()
@click.pass_context
def configure(ctx: click.Context) -> None:
    """Create the default configuration file and show the settings."""
    config_path = ctx.obj.get("config_path")
    if config_path:
        click.echo(f"Using configuration from: {config_path}")
        cfg = Config.from_file(config_path)
    else:
        click.echo("Creating default configuration...")
        cfg = Config.create_default()

    click.echo(f"Configuration file: {cfg.config_path}")
    click.echo(f"Notion database: {cfg.database_id or 'Not configured'}")
    click.echo(f"Spreadsheet: {cfg.sheet_id or 'Not configured'}")
    click.echo(f"Members: {', '.join(cfg.members) or 'Not configured'}")


@main.command()
@click.pass_context
def init(ctx: click.Context) -> None:
    """Write the starting points and the ideal burndown line."""
    try:
        sheet, client, config = build_context(ctx)
        values = initialize(sheet, client, config)
        click.echo(f"✓ Ideal line written: {values[0]} points over {len(values) - 1} days")
    except Exception as e:
        fail(e)


@main.command()
@click.pass_context
def record(ctx: click.Context) -> None:
    """Record today's remaining points in the actual column."""
    try:
        sheet, client, config = build_context(ctx)
        row, remaining = record_actual(sheet, client, config)
        click.echo(f"✓ Recorded {remaining} remaining points in row {row}")
    except Exception as e:
        fail(e)


@main.command()
@click.pass_context
def show(ctx: click.Context) -> None:
    """Show total and completed points of the sprint or epic."""
    try:
        sheet, client, config = build_context(ctx)
        summary = show_summary(sheet, client, config)
        click.echo(json.dumps(summary.to_dict()))
    except Exception as e:
        fail(e)


@main.command()
@click.pass_context
def status(ctx: click.Context) -> None:
    """Show current burndown-sync configuration and test connections."""
    click.echo("Burndown Sync Status\n" + "=" * 40)

    try:
        config = load_config(ctx)
        click.echo(f"Version: {__version__}")
        click.echo(f"Configuration: {config.config_path}")
        click.echo(f"\nNotion:")
        click.echo(f"  Database: {config.database_id or 'Not configured'}")
        click.echo(f"  Filter: {config.filter_property}")
        click.echo(f"  Done statuses: {', '.join(config.done_statuses)}")
        click.echo(f"\nGoogle Sheets:")
        click.echo(f"  Spreadsheet: {config.sheet_id or 'Not configured'}")
        click.echo(f"  Worksheet: {ctx.obj.get('worksheet') or config.worksheet or 'First sheet'}")

        click.echo("\nTesting connections...")

        try:
            NotionClient(config).test_connection()
            click.echo("  ✓ Notion: Connected")
        except Exception as e:
            click.echo(f"  ✗ Notion: Failed ({e})")

        try:
            backend = open_worksheet(config, ctx.obj.get("worksheet"))
            click.echo(f"  ✓ Google Sheets: Connected ({backend.title})")
        except Exception as e:
            click.echo(f"  ✗ Google Sheets: Failed ({e})")

    except Exception as e:
        fail(e)


if __name__ == "__main__":
    main()
