"""Convert command implementation."""

import logging
from pathlib import Path
from typing import Optional

from pydantic import ValidationError
from rich.console import Console
from rich.markup import escape
from rich.syntax import Syntax
from rich.table import Table

from slncmake.runtime.config_loader import load_converter_config
from slncmake.runtime.pipeline import ConversionResult, convert

logger = logging.getLogger("slncmake.cli.convert")


def convert_command(args, console: Optional[Console] = None) -> int:
    """Execute convert command.

    Args:
        args: Parsed command-line arguments containing:
            - snapshot: Snapshot file of the solution
            - platform: Target platform (optional)
            - configurations: Requested configurations (optional)
            - output_dir: Output root directory (optional)
            - config: Converter configuration source (optional)
            - newline: Line ending of written files (optional)
            - dry_run: Print descriptors instead of writing them
        console: Rich console used for the report (optional).

    Returns:
        int: Exit code (0 for success, non-zero for failure).
    """
    logger.info("=== slncmake Convert ===")
    console = console or Console()

    snapshot = Path(args.snapshot)
    dry_run = getattr(args, "dry_run", False)

    try:
        config = load_converter_config(getattr(args, "config", None))
        config = config.merged(
            platform=getattr(args, "platform", None),
            configurations=getattr(args, "configurations", None),
            output_dir=getattr(args, "output_dir", None),
            newline=getattr(args, "newline", None),
        )
    except (ValidationError, ValueError, OSError) as e:
        logger.error("Invalid configuration: %s", e)
        return 1

    logger.info("Snapshot: %s", snapshot)
    logger.info("Platform: %s", config.platform)
    logger.info("Configurations: %s", ", ".join(config.configurations or ["<all>"]))
    logger.info("Dry run: %s", dry_run)

    output_root = Path(config.output_dir).expanduser().resolve() if config.output_dir else None
    result = convert(snapshot, config=config, output_root=output_root, dry_run=dry_run)

    if dry_run and result.success:
        for descriptor in result.descriptors:
            console.rule(str(descriptor.path))
            console.print(Syntax(descriptor.text, "cmake", word_wrap=False))

    _print_report(console, result, dry_run)
    return 0 if result.success else 1


def _print_report(console: Console, result: ConversionResult, dry_run: bool) -> None:
    """Print a summary table of the run, then its warnings and errors."""
    if result.descriptors:
        title = "Descriptors (dry run)" if dry_run else "Written descriptors"
        table = Table(title=title)
        table.add_column("Target", style="cyan")
        table.add_column("Kind")
        table.add_column("Configurations")
        table.add_column("Path", style="green")
        for descriptor in result.descriptors:
            table.add_row(
                descriptor.name,
                descriptor.kind,
                ", ".join(descriptor.configurations),
                str(descriptor.path),
            )
        console.print(table)

    if result.links:
        links = Table(title="Target links")
        links.add_column("Target", style="cyan")
        links.add_column("Links against", style="cyan")
        links.add_column("Configurations")
        for source, dependency, configurations in result.links:
            links.add_row(source, dependency, ", ".join(configurations))
        console.print(links)

    for warning in result.warnings:
        console.print(f"[yellow]warning:[/yellow] {escape(warning)}", highlight=False)

    for error in result.errors:
        console.print(f"[red]error:[/red] {escape(error.message)}", highlight=False)
        for detail in error.details:
            console.print(f"  - {detail}", highlight=False, markup=False)

    if result.success:
        verb = "Rendered" if dry_run else "Wrote"
        count = len(result.descriptors) if dry_run else len(result.written)
        console.print(f"[green]{verb} {count} descriptor(s)[/green]")
    else:
        console.print("[red]Conversion failed; no descriptors were written[/red]")
