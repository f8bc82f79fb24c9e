"""Tautology Guard CLI - Flag tests that never touch production code."""
import json
from typing import List, NoReturn, Optional

import typer
from rich.markup import escape
from rich.table import Table

from .analyzer.file_analyzer import analyze_batch
from .analyzer.models import RunResult
from .config import __version__, get_config
from .discovery import (
    GitDiffError,
    collect_test_files,
    get_changed_test_files,
    read_test_files,
)
from .reporter import Verdict, render_report, results_to_json, verdict
from .utils.safe_console import SafeConsole

app = typer.Typer(
    name="tautology-guard",
    help="Detect tautological tests that assert only on local values",
    add_completion=False
)
# stdout carries the report; stderr carries diagnostics
console = SafeConsole()
err_console = SafeConsole(stderr=True)

EXIT_OK = 0
EXIT_BLOCKING = 1
EXIT_ERROR = 2


def _fail(message: str) -> NoReturn:
    err_console.print(f"[bold red]Error:[/bold red] {escape(message)}", soft_wrap=True)
    raise typer.Exit(EXIT_ERROR)


def _print_file_table(results: RunResult) -> None:
    """Per-file breakdown for --verbose (stderr)."""
    table = Table(title="Tautology Check by File")
    table.add_column("File", style="cyan", no_wrap=False)
    table.add_column("Tests", justify="right")
    table.add_column("Tautological", justify="right", style="yellow")
    table.add_column("%", justify="right")
    table.add_column("Parsed", style="green")

    for file_result in results.file_results:
        parsed = "yes" if file_result.parse_success else f"[red]no[/red] ({escape(file_result.parse_error or '')})"
        table.add_row(
            escape(file_result.file_path),
            str(file_result.total_tests),
            str(file_result.tautological_count),
            f"{file_result.tautological_percentage:.1f}",
            parsed,
        )

    err_console.print(table)


@app.command()
def scan(
    paths: Optional[List[str]] = typer.Argument(None, help="Test files or directories (default: files changed vs. --base)"),
    base: Optional[str] = typer.Option(None, "--base", "-b", help="Git ref to diff against (default: TAUTOLOGY_BASE_REF or 'main')"),
    as_json: bool = typer.Option(False, "--json", help="Output results as JSON"),
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Show per-file details and skipped files on stderr"),
):
    """Scan test files and report tautological test blocks.

    Exit codes: 0 no blocking issues, 1 more than 50% of tests are
    tautological, 2 the detector could not run.
    """
    try:
        config = get_config()
    except ValueError as e:
        _fail(str(e))

    try:
        if paths:
            test_files = collect_test_files(paths, config.test_file_pattern)
        else:
            test_files = get_changed_test_files(base or config.base_ref, config.test_file_pattern)
    except GitDiffError as e:
        _fail(str(e))

    if not test_files:
        if as_json:
            console.print_plain(json.dumps({
                "status": "skip",
                "message": "No test files in diff",
                "summary": {"totalFiles": 0, "totalTests": 0, "totalTautological": 0},
            }))
        else:
            console.print_plain("No test files changed in diff")
        raise typer.Exit(EXIT_OK)

    files, skipped = read_test_files(test_files, config.max_file_bytes)
    if verbose:
        for path, reason in skipped:
            err_console.print(f"[bold yellow]Warning:[/bold yellow] Could not read {escape(path)}: {escape(reason)}", soft_wrap=True)

    results = analyze_batch(files)

    if verbose:
        _print_file_table(results)

    if as_json:
        console.print_plain(json.dumps(results_to_json(results)))
    else:
        console.print_plain(render_report(results))

    if verdict(results) is Verdict.BLOCKING:
        raise typer.Exit(EXIT_BLOCKING)


@app.command()
def version():
    """Print the installed version."""
    console.print(f"tautology-guard {__version__}")


@app.callback()
def main():
    """Tautology Guard - Flag tests that never call production code."""
    pass


if __name__ == "__main__":
    app()
