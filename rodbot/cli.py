"""CLI interface for rodbot."""

import logging
import sys
from pathlib import Path
from typing import Any, NoReturn

import click
from rich.console import Console
from rich.logging import RichHandler
from rich.markup import escape
from rich.table import Table

from rodbot.config import BotSettings, GitHubSettings, RunnerSettings, set_settings
from rodbot.errors import RodbotError
from rodbot.pipeline.pipeline import run_bot
from rodbot.rules import RuleFile, load_rule_file

console = Console()


def setup_logging(log_level: str) -> None:
    """Configure logging with rich handler."""
    logging.basicConfig(
        level=log_level,
        format="%(message)s",
        handlers=[RichHandler(console=console, rich_tracebacks=True)],
        force=True,
    )


def _configure_settings(
    config: Path,
    log_level: str,
    event_name: str | None = None,
    event_path: Path | None = None,
) -> BotSettings:
    """Configure bot settings, command line values override the environment."""
    github_overrides: dict[str, Any] = {}
    if event_name is not None:
        github_overrides["event_name"] = event_name
    if event_path is not None:
        github_overrides["event_path"] = event_path

    settings = BotSettings(
        config=config,
        log_level=log_level,
        github=GitHubSettings(**github_overrides),
        runner=RunnerSettings(),
    )
    set_settings(settings)
    return settings


def _fail(error: RodbotError) -> NoReturn:
    """Report an error and exit with status 1."""
    console.print(f"[bold red]Error:[/bold red] {escape(str(error))}")
    sys.exit(1)


def display_rule_file(rule_file: RuleFile, path: Path) -> None:
    """Display a summary table of the rule blocks."""
    console.print(f"\n[bold blue]Rules: {path}[/bold blue]\n")

    if not rule_file.issue_comment:
        console.print("  [dim]No issue_comment rules configured[/dim]\n")
        return

    table = Table(title="[bold cyan]issue_comment[/bold cyan]", show_header=True, header_style="bold")
    table.add_column("#", justify="right")
    table.add_column("Conditions", style="cyan")
    table.add_column("Steps", justify="right")

    for index, rule in enumerate(rule_file.issue_comment):
        conditions = "\n".join(str(c) for c in rule.conditions) or "[yellow](never matches)[/yellow]"
        table.add_row(str(index), conditions, str(len(rule.steps)))

    console.print(table)


@click.group(invoke_without_command=True)
@click.pass_context
@click.option(
    "--config",
    "-C",
    type=click.Path(path_type=Path),
    envvar="RODBOT_CONFIG",
    default="rodbot.yaml",
    show_default=True,
    help="Path to the YAML rule file",
)
@click.option(
    "--log-level",
    type=click.Choice(["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"], case_sensitive=False),
    envvar="RODBOT_LOG_LEVEL",
    default="DEBUG",
    help="Set the logging level",
)
def main(ctx: click.Context, config: Path, log_level: str) -> None:
    """Run shell commands in response to GitHub issue comments."""
    setup_logging(log_level.upper())

    ctx.ensure_object(dict)
    ctx.obj["config"] = config
    ctx.obj["log_level"] = log_level.upper()

    # No subcommand: run the bot
    if ctx.invoked_subcommand is None:
        ctx.invoke(run)


@main.command()
@click.pass_context
@click.option(
    "--event-name",
    type=str,
    default=None,
    help="Event name (default: $GITHUB_EVENT_NAME)",
)
@click.option(
    "--event-path",
    type=click.Path(path_type=Path),
    default=None,
    help="Path to the event payload (default: $GITHUB_EVENT_PATH)",
)
def run(ctx: click.Context, event_name: str | None, event_path: Path | None) -> None:
    """Evaluate the rules against the current event and run matching steps (default command)."""
    _configure_settings(ctx.obj["config"], ctx.obj["log_level"], event_name, event_path)
    try:
        run_bot()
    except RodbotError as e:
        _fail(e)


@main.command()
@click.pass_context
def check(ctx: click.Context) -> None:
    """Validate the rule file and show its rule blocks without running anything."""
    config = ctx.obj["config"]
    try:
        rule_file = load_rule_file(config)
    except RodbotError as e:
        _fail(e)
    display_rule_file(rule_file, config)


if __name__ == "__main__":
    main()
