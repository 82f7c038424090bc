"""deprecation-audit CLI - report deprecations that only fire in debug builds."""
from contextlib import nullcontext
from pathlib import Path
from typing import Callable, List, Optional

import typer
from rich.markup import escape
from rich.progress import BarColumn, Progress, SpinnerColumn, TaskProgressColumn, TextColumn, TimeElapsedColumn
from rich.table import Table

from .analyzer.call_sites import DeprecationEntry
from .analyzer.discovery import discover_source_files
from .analyzer.errors import AuditError
from .analyzer.scanner import DeprecationScanner
from .config import get_config
from .report.builder import RepositoryLinks, build_report, write_report
from .utils.console import SafeConsole, print_failure

app = typer.Typer(
    name="deprecation-audit",
    help="Find deprecate() calls that are only reachable behind a DEBUG guard",
    add_completion=False
)
# Use SafeConsole for Windows Unicode compatibility
console = SafeConsole()


def scan_files(files: List[Path], root: Optional[Path], scanner: DeprecationScanner,
               on_file: Optional[Callable[[Path], None]] = None) -> List[DeprecationEntry]:
    """Scan files in order and accumulate their entries.

    Stops at the first fatal error: a partial report is worse than none.
    Unexpected exceptions are re-raised as ``AuditError`` so the offending
    file is always reported.

    Raises:
        AuditError: From the first file that fails to scan
    """
    entries: List[DeprecationEntry] = []
    for file_path in files:
        try:
            entries.extend(scanner.scan_file(file_path, root))
        except AuditError:
            raise
        except Exception as e:
            raise AuditError(f"{type(e).__name__}: {e}", file_path) from e
        if on_file:
            on_file(file_path)
    return entries


def links_from_config() -> RepositoryLinks:
    config = get_config()
    return RepositoryLinks(
        host=config.link_host,
        org=config.link_org,
        repo=config.link_repo,
        ref=config.link_ref,
        base_dir=config.link_base_dir,
    )


def _print_summary(files: List[Path], entries: List[DeprecationEntry], report_path: Path):
    debug_entries = [e for e in entries if e.debug]

    table = Table(title="Deprecation Audit", show_header=True, header_style="bold cyan")
    table.add_column("Metric", style="cyan")
    table.add_column("Count", justify="right", style="green")

    table.add_row("Files scanned", str(len(files)))
    table.add_row("Deprecation calls", str(len(entries)))
    table.add_row("Debug-only calls", str(len(debug_entries)))
    table.add_row("Reported ids", str(len({e.id for e in debug_entries})))

    console.print(table)
    console.print(f"[bold green]✓ Report written to {escape(str(report_path))}[/bold green]")


@app.command()
def scan(
    source_root: Optional[str] = typer.Argument(None, help="Directory to scan (default: DEPRECATION_AUDIT_SOURCE_ROOT)"),
    output: Optional[str] = typer.Option(None, "--output", "-o", help="Report file to write"),
    sentinel: Optional[str] = typer.Option(None, "--sentinel", help="Identifier that marks debug-only branches"),
    function: Optional[str] = typer.Option(None, "--function", help="Name of the deprecation function"),
    no_progress: bool = typer.Option(False, "--no-progress", help="Disable the progress bar"),
):
    """Scan a source tree and write the debug-only deprecation report."""
    config = get_config()
    root = Path(source_root or config.source_root)
    report_path = Path(output or config.report_path)

    if not root.is_dir():
        console.print(f"[bold red]Error:[/bold red] Source root does not exist: {escape(str(root))}")
        raise typer.Exit(1)

    scanner = DeprecationScanner(
        sentinel=sentinel or config.sentinel_name,
        function_name=function or config.function_name,
    )

    files = discover_source_files(root)
    console.print(f"[bold blue]🔍 Scanning {len(files)} files under:[/bold blue] {escape(str(root))}")

    if no_progress:
        progress_ctx = nullcontext()
    else:
        progress_ctx = Progress(
            SpinnerColumn(),
            TextColumn("[bold blue]{task.description}"),
            BarColumn(),
            TaskProgressColumn(),
            TimeElapsedColumn(),
            console=console,
            transient=True
        )

    with progress_ctx as progress:
        on_file = None
        if progress is not None:
            task = progress.add_task("[cyan]Scanning...", total=len(files))
            on_file = lambda _path: progress.advance(task)

        try:
            entries = scan_files(files, root, scanner, on_file)
        except AuditError as e:
            if progress is not None:
                progress.stop()
            print_failure(console, e.path, e)
            raise typer.Exit(1)

    report = build_report(entries, links_from_config())
    write_report(report, report_path)
    _print_summary(files, entries, report_path)


@app.command()
def check(
    file_path: str = typer.Argument(..., help="Source file to scan"),
    root: Optional[str] = typer.Option(None, "--root", help="Directory filenames are relative to"),
    sentinel: Optional[str] = typer.Option(None, "--sentinel", help="Identifier that marks debug-only branches"),
    function: Optional[str] = typer.Option(None, "--function", help="Name of the deprecation function"),
):
    """Scan a single file and list its deprecation call sites."""
    config = get_config()
    scanner = DeprecationScanner(
        sentinel=sentinel or config.sentinel_name,
        function_name=function or config.function_name,
    )

    try:
        entries = scan_files([Path(file_path)], root, scanner)
    except AuditError as e:
        print_failure(console, file_path, e)
        raise typer.Exit(1)

    if not entries:
        console.print("[bold green]No deprecation calls found.[/bold green]")
        return

    table = Table(title=f"Deprecations in {escape(file_path)}", show_header=True, header_style="bold cyan")
    table.add_column("Line", justify="right", style="cyan")
    table.add_column("Id", style="magenta", no_wrap=True)
    table.add_column("Debug", justify="center")
    table.add_column("Code", style="dim")

    for entry in entries:
        table.add_row(
            str(entry.line) if entry.line is not None else "",
            escape(entry.id),
            "[green]yes[/green]" if entry.debug else "no",
            escape(entry.code.splitlines()[0] if entry.code else ""),
        )

    console.print(table)


@app.callback()
def main():
    """deprecation-audit - debug-only deprecation report builder."""
    pass


if __name__ == "__main__":
    app()
