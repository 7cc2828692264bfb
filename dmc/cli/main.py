"""Main CLI entry point for dmc."""

import logging
import sys
from pathlib import Path
from typing import Optional

import click
from rich.console import Console

from dmc import __version__
from dmc.cli.commands.config import config_group
from dmc.cli.commands.generate import generate_command
from dmc.core.exceptions import DMCError

console = Console(stderr=True)


@click.group()
@click.version_option(__version__, prog_name="dmc")
@click.option("--verbose", "-v", is_flag=True, help="Enable verbose output")
@click.option(
    "--config",
    "-c",
    type=click.Path(dir_okay=False, path_type=Path),
    help="Path to configuration file",
)
@click.pass_context
def cli(ctx: click.Context, verbose: bool, config: Optional[Path]) -> None:
    """dmc: Daily Message Creator.

    Generates status reports, standup transcripts and work summaries from
    your git commits using Gemini. Run it from inside a git repository.

    \b
    Examples:
        dmc config set author you@example.com   # Set your git author email
        dmc config set api_key YOUR_KEY         # Or export GEMINI_API_KEY
        dmc generate                            # Daily report
        dmc generate -i weekly -t transcript    # Weekly standup transcript
        dmc generate -i monthly -t summary -l tr
        dmc config show                         # Show current settings
    """
    # Ensure context object exists
    ctx.ensure_object(dict)

    # Store global options in context
    ctx.obj["verbose"] = verbose
    ctx.obj["config"] = config

    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    )


# Add command groups and commands
cli.add_command(generate_command, name="generate")
cli.add_command(config_group, name="config")


def main() -> None:
    """Main entry point for the CLI."""
    try:
        cli()
    except DMCError as e:
        console.print(f"[red]Error:[/red] {e}")
        sys.exit(1)
    except KeyboardInterrupt:
        console.print("\n[yellow]Operation cancelled by user[/yellow]")
        sys.exit(130)
    except Exception as e:
        console.print(f"[red]Unexpected error:[/red] {e}")
        if "--verbose" in sys.argv or "-v" in sys.argv:
            console.print_exception()
        sys.exit(1)


if __name__ == "__main__":
    main()
