"""CLI interface for foldline."""

import logging
import sys
from pathlib import Path
from typing import NoReturn

import click
from pydantic import ValidationError
from pydantic_settings import SettingsError
from rich.console import Console
from rich.logging import RichHandler
from rich.markup import escape
from rich.table import Table

from foldline.config import PatternSettings, PipelineSettings, get_settings, set_settings
from foldline.formatters import format_as_json
from foldline.models.profile import Classification, ProfileResult, disposition
from foldline.pipeline.normalize import normalize_selector_text
from foldline.pipeline.patterns import Pattern, PatternParseError, parse_patterns
from foldline.pipeline.pipeline import resolve_patterns, run_pipeline

console = Console()

DISPOSITION_STYLES = {
    "keep": "green",
    "drop": "red",
    "test": "cyan",
}


def setup_logging(log_level: str) -> None:
    """Configure logging with rich handler."""
    logging.basicConfig(
        level=log_level,
        format="%(message)s",
        handlers=[RichHandler(console=console, rich_tracebacks=True)],
    )


def _fail(message: str) -> NoReturn:
    console.print(f"[bold red]Error:[/bold red] {escape(message)}")
    sys.exit(1)


def _format_classification(classification: Classification) -> str:
    """Format a classification for display."""
    label = disposition(classification)
    if label == "test":
        return str(classification)
    return label


def _parse_cli_patterns(entries: tuple[str, ...]) -> list[Pattern]:
    """Parse pattern options, exiting on malformed entries."""
    try:
        return parse_patterns(list(entries))
    except PatternParseError as e:
        _fail(str(e))


def _configure_settings(
    force_include: tuple[str, ...],
    force_exclude: tuple[str, ...],
    patterns_file: Path | None,
) -> None:
    """Configure pipeline settings from command line options."""
    try:
        base = PatternSettings()
        patterns = PatternSettings(
            force_include=[*base.force_include, *_parse_cli_patterns(force_include)],
            force_exclude=[*base.force_exclude, *_parse_cli_patterns(force_exclude)],
            file=patterns_file or base.file,
        )
    except (ValidationError, SettingsError) as e:
        _fail(f"Invalid pattern settings: {e}")
    set_settings(PipelineSettings(patterns=patterns))


def display_profile_table(result: ProfileResult) -> None:
    """Display every profiled selector with its disposition."""
    profile = result.profile

    table = Table(title="\n[bold cyan]Selectors[/bold cyan]", show_header=True, header_style="bold")
    table.add_column("Line", justify="right", style="dim")
    table.add_column("Selector")
    table.add_column("Disposition")
    table.add_column("Test for")

    for rule in result.stylesheet.rules:
        nodes = [rule.selector_list] if rule.selector_list is not None else []
        nodes += rule.selectors
        for node in nodes:
            classification = profile.classification_for(node)
            if classification is None:
                continue
            label = disposition(classification)
            style = DISPOSITION_STYLES[label]
            table.add_row(
                str(node.line),
                escape(node.text),
                f"[{style}]{label}[/{style}]",
                escape(classification) if isinstance(classification, str) else "",
            )

    console.print(table)


def display_summary(result: ProfileResult) -> None:
    """Display summary counts for a profile."""
    profile = result.profile
    console.print(
        f"\n[bold green]{profile.testable_count}[/bold green] selector(s) to test, "
        f"[green]{len(profile.force_kept)}[/green] always kept, "
        f"[red]{len(profile.force_dropped)}[/red] always dropped, "
        f"[dim]{profile.skipped_rules} rule(s) skipped[/dim]"
    )
    if result.stylesheet.has_errors:
        console.print("[yellow]Stylesheet contains syntax errors; affected rules were skipped[/yellow]")


def _write_output(text: str, output_path: Path | None) -> None:
    """Write output text to file or stdout."""
    if output_path:
        output_path.write_text(text)
    else:
        print(text)


def _handle_output(result: ProfileResult, output_format: str, output_path: Path | None) -> None:
    """Handle formatting and outputting results."""
    if output_format.lower() == "json":
        _write_output(format_as_json(result, pretty=True), output_path)
    else:  # console
        display_profile_table(result)
        display_summary(result)
        console.print()


def _run_pipeline_with_ui(path: Path, output_format: str) -> ProfileResult:
    """Run the pipeline, reporting failures as errors."""
    try:
        if output_format.lower() == "console":
            console.print(f"\nProfiling: [cyan]{escape(str(path))}[/cyan]")
            with console.status("[bold green]Running pipeline..."):
                return run_pipeline(path)
        return run_pipeline(path)
    except (ValueError, RuntimeError, FileNotFoundError, PatternParseError) as e:
        _fail(str(e))


@click.group()
@click.pass_context
@click.option(
    "--log-level",
    type=click.Choice(["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"], case_sensitive=False),
    default="WARNING",
    help="Set the logging level",
)
def main(ctx: click.Context, log_level: str) -> None:
    """Classify stylesheet selectors for critical CSS extraction."""
    setup_logging(log_level.upper())

    ctx.ensure_object(dict)
    ctx.obj["log_level"] = log_level


force_include_option = click.option(
    "--force-include",
    "force_include",
    multiple=True,
    help="Always keep selectors matching this pattern ('/regexp/flags' or exact text)",
)
force_exclude_option = click.option(
    "--force-exclude",
    "force_exclude",
    multiple=True,
    help="Always drop selectors matching this pattern ('/regexp/flags' or exact text)",
)


@main.command()
@click.argument("path", type=click.Path(exists=True, dir_okay=False, path_type=Path))
@force_include_option
@force_exclude_option
@click.option(
    "--patterns",
    "patterns_file",
    type=click.Path(exists=True, dir_okay=False, path_type=Path),
    default=None,
    help="YAML file with force_include / force_exclude lists",
)
@click.option(
    "--format",
    "output_format",
    type=click.Choice(["console", "json"], case_sensitive=False),
    default="console",
    help="Output format (default: console)",
)
@click.option(
    "--output",
    "-o",
    type=click.Path(path_type=Path),
    default=None,
    help="Output file path (default: stdout)",
)
def profile(
    path: Path,
    force_include: tuple[str, ...],
    force_exclude: tuple[str, ...],
    patterns_file: Path | None,
    output_format: str,
    output: Path | None,
) -> None:
    """Build the selector profile of a stylesheet."""
    _configure_settings(force_include, force_exclude, patterns_file)
    result = _run_pipeline_with_ui(path, output_format)
    _handle_output(result, output_format, output)


@main.command()
@click.argument("selector")
@force_include_option
@force_exclude_option
def normalize(selector: str, force_include: tuple[str, ...], force_exclude: tuple[str, ...]) -> None:
    """Show how a single selector is classified."""
    _configure_settings(force_include, force_exclude, None)
    try:
        include, exclude = resolve_patterns(get_settings().patterns)
    except (FileNotFoundError, PatternParseError) as e:
        _fail(str(e))
    click.echo(_format_classification(normalize_selector_text(selector, include, exclude)))


if __name__ == "__main__":
    main()
