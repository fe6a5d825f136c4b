"""pydeadcode CLI - find functions and classes that are never referenced."""
import json
import logging
from dataclasses import asdict
from pathlib import Path
from typing import List, Optional

import typer
from rich.markup import escape
from rich.table import Table

from pydeadcode.analyzer.collector import NameUsageCollector
from pydeadcode.analyzer.extractor import Finding
from pydeadcode.analyzer.parser import AnalysisError
from pydeadcode.config import __version__, get_config, split_patterns
from pydeadcode.utils.logger import setup_logging
from pydeadcode.utils.safe_console import SafeConsole

app = typer.Typer(
    name="pydeadcode",
    help="Fast Python dead code finder",
    add_completion=False
)
# Use SafeConsole for Windows Unicode compatibility
console = SafeConsole()

logger = logging.getLogger('pydeadcode.main')


def sort_findings(findings: List[Finding], by_size: bool = False) -> List[Finding]:
    """Order findings for display: largest first, or by file then line."""
    if by_size:
        return sorted(findings, key=lambda f: f.size, reverse=True)
    return sorted(findings, key=lambda f: (f.file, f.line))


def render_table(findings: List[Finding], show_size: bool = False) -> Table:
    """Build the rich table of findings."""
    table = Table(title="Dead Code Found")
    table.add_column("File", style="bright_blue", no_wrap=False)
    table.add_column("Line", style="cyan", justify="right")
    table.add_column("Name", style="red")
    table.add_column("Type", style="dim")
    table.add_column("Confidence", justify="right")
    if show_size:
        table.add_column("Size", justify="right", style="yellow")

    for finding in findings:
        row = [
            escape(finding.file),
            str(finding.line),
            escape(finding.name),
            finding.code_type,
            f"{finding.confidence}%",
        ]
        if show_size:
            row.append(str(finding.size))
        table.add_row(*row)

    return table


def _version_callback(value: bool):
    if value:
        console.print(f"pydeadcode {__version__}")
        raise typer.Exit()


@app.command()
def scan(
    paths: Optional[List[Path]] = typer.Argument(None, help="Python files or directories to scan"),
    min_confidence: Optional[int] = typer.Option(None, "--min-confidence", "-m", min=0, max=100, help="Minimum confidence level (default 60)"),
    sort_by_size: bool = typer.Option(False, "--sort-by-size", "-s", help="Sort results by size, largest first"),
    json_output: bool = typer.Option(False, "--json", "-j", help="Output as JSON"),
    exclude: Optional[str] = typer.Option(None, "--exclude", "-e", help="Exclude patterns (comma-separated globs)"),
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Log every analyzed file"),
    version: bool = typer.Option(False, "--version", callback=_version_callback, is_eager=True, help="Show version and exit"),
):
    """Scan Python sources and list functions and classes that are never referenced."""
    if not paths:
        console.print_error("No paths specified")
        raise typer.Exit(1)

    try:
        config = get_config()
        setup_logging(logging.DEBUG if verbose else config.log_level)
        if min_confidence is None:
            min_confidence = config.min_confidence
        exclude_patterns = split_patterns(exclude) if exclude is not None else config.exclude_patterns
    except ValueError as e:
        console.print_error(str(e))
        raise typer.Exit(1)

    collector = NameUsageCollector(min_confidence, exclude_patterns)

    try:
        collector.analyze(paths)
    except AnalysisError as e:
        console.print_error(str(e))
        raise typer.Exit(1)

    logger.debug("Scanned %d files: %s", collector.files_analyzed, collector.tracker.get_stats())

    findings = sort_findings(collector.collect_findings(), by_size=sort_by_size)

    if json_output:
        typer.echo(json.dumps([asdict(f) for f in findings], indent=2))
        return

    if not findings:
        console.print("[green]✓ No dead code found![/green]")
        return

    console.print()
    console.print(render_table(findings, show_size=sort_by_size))
    console.print(f"\n[yellow]{len(findings)}[/yellow] dead code items found")


if __name__ == "__main__":
    app()
