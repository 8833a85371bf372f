"""Rich terminal reporter for analysis, fix, interface and batch results."""

from __future__ import annotations

from typing import Optional

from rich.console import Console
from rich.markup import escape
from rich.syntax import Syntax
from rich.table import Table

from tsnarrow.analysis.models import AnalysisResult, FixResult
from tsnarrow.batch.models import BatchResult
from tsnarrow.props.models import InterfaceResult

_SOURCE_STYLE = {
    "rule": "cyan",
    "inference": "green",
    "initializer": "green",
    "name": "yellow",
    "default": "dim",
}


def _console(console: Optional[Console]) -> Console:
    return console or Console(stderr=True)


def _print_error(console: Console, path: str, error: Optional[dict]) -> None:
    kind = (error or {}).get("kind", "error")
    message = (error or {}).get("message", "unknown error")
    console.print(f"[bold red]✗ {escape(path)}[/bold red] [dim]({kind})[/dim] {escape(message)}")


def render_analysis(result: AnalysisResult, *, console: Optional[Console] = None) -> None:
    console = _console(console)

    if not result.success:
        _print_error(console, result.file_path, result.error)
        return

    console.print()
    if not result.occurrences:
        console.print(f"[bold green]✅ No 'any' annotations in {escape(result.file_path)}[/bold green]")
        return

    table = Table(
        title=f"'any' annotations in {escape(result.file_path)}",
        title_style="bold",
        border_style="dim",
    )
    table.add_column("Line", justify="right", style="green")
    table.add_column("Col", justify="right", style="green")
    table.add_column("Pattern", style="magenta")
    table.add_column("Context")
    table.add_column("Suggested type", style="bold")
    table.add_column("Source")

    for occ in result.occurrences:
        style = _SOURCE_STYLE.get(occ.source, "")
        table.add_row(
            str(occ.line),
            str(occ.column),
            escape(occ.pattern),
            occ.context,
            escape(occ.replacement),
            f"[{style}]{occ.rule_id or occ.source}[/{style}]" if style else occ.source,
        )

    console.print(table)
    cached = " [dim](cached)[/dim]" if result.from_cache else ""
    console.print(f"[dim]Occurrences:[/dim] {result.total}{cached}")


def render_fix(result: FixResult, *, console: Optional[Console] = None) -> None:
    console = _console(console)

    if not result.success:
        _print_error(console, result.file_path, result.error)
        return

    if not result.changes:
        console.print(f"[bold green]✅ Nothing to fix in {escape(result.file_path)}[/bold green]")
        return

    table = Table(title=f"Changes for {escape(result.file_path)}", title_style="bold", border_style="dim")
    table.add_column("Line", justify="right", style="green")
    table.add_column("Pattern", style="magenta")
    table.add_column("Replacement", style="bold")

    for change in sorted(result.changes, key=lambda c: c.start):
        table.add_row(str(change.line), escape(change.pattern), escape(change.replacement))

    console.print()
    console.print(table)

    if result.dry_run:
        console.print(f"[bold yellow]Dry run: {result.total} change(s) not written.[/bold yellow]")
    else:
        console.print(f"[green]✓[/green] Applied {result.total} change(s)")
        if result.backup_path:
            console.print(f"[dim]Backup:[/dim] {escape(result.backup_path)}")


def render_interface(result: InterfaceResult, *, console: Optional[Console] = None) -> None:
    console = _console(console)

    if not result.success:
        _print_error(console, result.file_path, result.error)
        return

    console.print(
        f"[dim]{result.component} ({result.component_kind} component), "
        f"{len(result.props)} prop(s)[/dim]"
    )
    console.print(Syntax(result.interface_text, "typescript", theme="ansi_dark"))
    if result.output_path:
        console.print(f"[green]✓[/green] Written to {escape(result.output_path)}")


def render_batch(result: BatchResult, *, console: Optional[Console] = None) -> None:
    console = _console(console)

    console.print()
    if result.errors:
        table = Table(title="Failed files", title_style="bold red", border_style="dim")
        table.add_column("File", style="magenta")
        table.add_column("Error")
        for error in result.errors:
            table.add_row(escape(error["file_path"]), escape(error["error"]))
        console.print(table)

    console.print(f"[dim]Operation:[/dim]  {result.operation}")
    console.print(f"[dim]Files:[/dim]      {result.total}")
    console.print(f"[dim]Succeeded:[/dim]  {result.succeeded}")
    console.print(f"[dim]Failed:[/dim]     {result.failed}")
    total = sum(r.total for r in result.results if getattr(r, "success", False))
    label = "Changes" if result.operation == "fix" else "Occurrences"
    console.print(f"[dim]{label}:[/dim] {total}")

    console.print()
    if result.success:
        console.print("[bold green]✅ Batch completed.[/bold green]")
    else:
        console.print(f"[bold red]❌ Batch completed with {result.failed} failure(s).[/bold red]")
