"""dmc config commands."""

from pathlib import Path
from typing import Optional

import click
from rich.console import Console
from rich.markup import escape
from rich.table import Table

from dmc.config.loader import (
    apply_env_overrides,
    get_config_path,
    load_config,
    save_config,
    set_config_value,
)
from dmc.config.models import DMCConfig
from dmc.core.exceptions import DMCError
from dmc.core.prompts import language_label

console = Console()

NOT_SET = "<not set>"


def mask_api_key(key: str) -> str:
    """Mask an API key for display, keeping the first and last 4 characters."""
    if not key:
        return NOT_SET
    if len(key) < 8:
        return "***"
    return key[:4] + "****" + key[-4:]


@click.group()
def config_group() -> None:
    """View and manage dmc configuration settings.

    Examples:
        dmc config show                         # Show current settings
        dmc config set author you@example.com   # Set default author
        dmc config set default_type transcript  # Set default template
        dmc config path                         # Show config file location
    """
    pass


@config_group.command("show")
@click.pass_context
def show_command(ctx: click.Context) -> None:
    """Show current configuration."""
    try:
        config = apply_env_overrides(load_config(_config_path(ctx)))
    except DMCError as e:
        raise click.ClickException(str(e)) from e

    _display_settings(config)
    _display_intervals(config)
    _display_templates(config)


@config_group.command("set")
@click.argument("key")
@click.argument("value")
@click.pass_context
def set_command(ctx: click.Context, key: str, value: str) -> None:
    """Set configuration value.

    KEY is one of author, default_type or api_key.
    """
    path = _config_path(ctx)
    try:
        # Stored values only, the environment override must not be persisted
        config = load_config(path)
        config = set_config_value(config, key, value)
        save_config(config, path)
    except DMCError as e:
        raise click.ClickException(str(e)) from e

    shown = mask_api_key(value) if key == "api_key" else value
    console.print(f"[green]✓[/green] Set {key} = {shown}", highlight=False)


@config_group.command("path")
@click.pass_context
def path_command(ctx: click.Context) -> None:
    """Show the configuration file location."""
    click.echo(str(_config_path(ctx) or get_config_path()))


def _config_path(ctx: click.Context) -> Optional[Path]:
    """Config file given with the global --config option, if any."""
    return (ctx.obj or {}).get("config")


def _display_settings(config: DMCConfig) -> None:
    """Show scalar settings."""
    console.print(
        f"[bold]Author:[/bold] {escape(config.author or NOT_SET)}", highlight=False
    )
    console.print(f"[bold]Default Template:[/bold] {escape(config.default_type)}")
    console.print(
        f"[bold]Language:[/bold] {config.language} ({language_label(config.language)})"
    )
    console.print(
        f"[bold]API Key:[/bold] {escape(mask_api_key(config.api_key or ''))}",
        highlight=False,
    )


def _display_intervals(config: DMCConfig) -> None:
    """Show configured intervals."""
    table = Table(title="Available Intervals", title_justify="left")
    table.add_column("Key", style="cyan")
    table.add_column("Name")
    table.add_column("Since")
    table.add_column("Until")

    for key, interval in config.intervals.items():
        table.add_row(key, interval.name, interval.since, interval.until)

    console.print()
    console.print(table)


def _display_templates(config: DMCConfig) -> None:
    """Show configured templates."""
    table = Table(title="Available Templates", title_justify="left")
    table.add_column("Key", style="cyan")
    table.add_column("Name")
    table.add_column("Description")

    for key, template in config.templates.items():
        table.add_row(key, template.name, template.description)

    console.print()
    console.print(table)
