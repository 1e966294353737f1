"""CLI command: archlint scan <directory> — architecture lint."""

from __future__ import annotations

import json
import sys
import threading

import click
from rich.console import Console
from rich.table import Table

from archlint.config import ArchLintConfig
from archlint.plugin import finding_to_wire
from archlint.scanner.engine import ScanEngine
from archlint.scanner.errors import ScanError
from archlint.scanner.models import ScanResult, Severity

console = Console(stderr=True)

_SEVERITY_COLORS = {
    Severity.LOW: "blue",
    Severity.MEDIUM: "yellow",
    Severity.HIGH: "red",
}


@click.command()
@click.argument("directory", type=click.Path(exists=True, file_okay=False))
@click.option("--json", "as_json", is_flag=True, help="Print findings as JSON.")
@click.option(
    "--timeout",
    type=float,
    default=None,
    help="Stop starting new files after this many seconds.",
)
@click.option("--workers", "-w", type=int, default=None, help="Parallel parse workers.")
def scan(
    directory: str,
    as_json: bool,
    timeout: float | None,
    workers: int | None,
) -> None:
    """Scan source code for architecture risks."""
    config = ArchLintConfig.load()
    if workers is not None:
        config.workers = workers
    if timeout is not None:
        config.scan_timeout = timeout

    if not as_json:
        console.print(f"[bold]archlint[/bold] scanning [cyan]{directory}[/cyan]\n")

    cancel = threading.Event()
    timer = None
    if config.scan_timeout:
        timer = threading.Timer(config.scan_timeout, cancel.set)
        timer.daemon = True
        timer.start()

    engine = ScanEngine(workers=config.workers)
    try:
        result = engine.scan(directory, cancel_event=cancel)
    except ScanError as e:
        console.print(f"[red]Scan failed:[/red] {e}")
        sys.exit(2)
    finally:
        if timer:
            timer.cancel()

    if as_json:
        click.echo(json.dumps([finding_to_wire(f) for f in result.findings], indent=2))
    else:
        _print_findings(result)

    high_count = sum(1 for f in result.findings if f.severity == Severity.HIGH)
    if high_count > 0:
        if not as_json:
            console.print(f"\n[red]{high_count} high severity finding(s)[/red]")
        sys.exit(1)


def _print_findings(result: ScanResult) -> None:
    if not result.findings:
        console.print("[green]No findings.[/green]")
        _print_summary(result)
        return

    # High first, then file, then line
    severity_order = {
        Severity.HIGH: 0,
        Severity.MEDIUM: 1,
        Severity.LOW: 2,
    }
    findings = sorted(
        result.findings,
        key=lambda f: (severity_order.get(f.severity, 9), f.file_path, f.start_line),
    )

    table = Table(title="Findings", show_lines=False)
    table.add_column("Severity", style="bold", width=8)
    table.add_column("Rule")
    table.add_column("File", style="cyan")
    table.add_column("Line", justify="right")
    table.add_column("Message", max_width=70)

    for finding in findings:
        color = _SEVERITY_COLORS.get(finding.severity, "white")
        table.add_row(
            f"[{color}]{finding.severity.value}[/{color}]",
            finding.rule_id,
            _shorten_path(finding.file_path, result.directory),
            str(finding.start_line),
            finding.message,
        )

    console.print(table)
    _print_summary(result)


def _print_summary(result: ScanResult) -> None:
    console.print(
        f"\nScanned {result.files_scanned} files "
        f"({result.files_skipped} skipped) "
        f"in {result.duration:.2f}s"
    )
    if result.cancelled:
        console.print("[yellow]Scan stopped early; results are partial.[/yellow]")
    console.print(f"Total findings: {len(result.findings)}")


def _shorten_path(file_path: str, base_dir: str) -> str:
    """Shorten file path relative to scan directory."""
    if base_dir and file_path.startswith(base_dir):
        return file_path[len(base_dir) :].lstrip("/")
    return file_path
