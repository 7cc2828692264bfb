"""dmc generate command."""

from typing import Optional

import click
from rich.console import Console
from rich.markup import escape

from dmc.config.loader import apply_env_overrides, load_config
from dmc.core.exceptions import DMCError
from dmc.core.git_utils import CommitBatch
from dmc.core.pipeline import GenerateOptions, GeneratePipeline, ResolvedOptions
from dmc.core.prompts import language_label

console = Console()

BANNER_WIDTH = 50


@click.command()
@click.option("--author", "-a", help="Git author email")
@click.option("--interval", "-i", help="Time interval (daily, weekly, monthly)")
@click.option(
    "--template", "-t", help="Message template (report, transcript, summary)"
)
@click.option("--api-key", help="Gemini API key")
@click.option("--language", "-l", help="Output language (en, tr, ...)")
@click.pass_context
def generate_command(
    ctx: click.Context,
    author: Optional[str],
    interval: Optional[str],
    template: Optional[str],
    api_key: Optional[str],
    language: Optional[str],
) -> None:
    """Generate a message from your git commits.

    Collects your commits for the chosen interval in the current
    repository and asks Gemini to turn them into the chosen template.

    Examples:
        dmc generate                          # Daily status report
        dmc generate -i weekly -t transcript  # Weekly standup update
        dmc generate -a me@example.com -l tr  # Report in Turkish
    """
    config_path = (ctx.obj or {}).get("config")
    options = GenerateOptions(
        author=author,
        interval=interval,
        template=template,
        api_key=api_key,
        language=language,
    )

    try:
        config = apply_env_overrides(load_config(config_path))
        pipeline = GeneratePipeline(config, options)

        with console.status("[dim]Collecting commits...[/dim]") as status:

            def on_fetched(resolved: ResolvedOptions, batch: CommitBatch) -> None:
                _display_fetch_summary(resolved, batch)
                if not batch.is_empty:
                    status.update("[dim]Generating message with Gemini...[/dim]")

            result = pipeline.run(on_fetched=on_fetched)

    except DMCError as e:
        raise click.ClickException(str(e)) from e

    if not result.has_commits:
        console.print(
            f"[yellow]No commits found for {escape(result.options.author)} in "
            f"{result.options.interval_key} period.[/yellow]"
        )
        return

    _display_message(result.options, result.message)


def _display_fetch_summary(resolved: ResolvedOptions, batch: CommitBatch) -> None:
    """Show where the commits came from; counts only when there are any."""
    if batch.repository:
        console.print(
            f"[dim]Repository:[/dim] {escape(batch.repository)}",
            highlight=False,
            soft_wrap=True,
        )
    else:
        console.print("[yellow]Warning:[/yellow] Could not get repository info")

    if batch.is_empty:
        return

    console.print(
        f"Found {batch.commit_count} commits for {resolved.interval_key} period "
        f"[dim]({escape(resolved.interval.since)} to {escape(resolved.interval.until)})[/dim]",
        highlight=False,
    )
    console.print(f"Language: {language_label(resolved.language)}")


def _display_message(resolved: ResolvedOptions, message: str) -> None:
    """Print the generated message under its banner."""
    console.print(
        f"\n[bold]{escape(resolved.template.name)} ({escape(resolved.interval.name)})[/bold]"
    )
    console.print("=" * BANNER_WIDTH)
    console.print(message, markup=False, emoji=False, highlight=False, soft_wrap=True)
