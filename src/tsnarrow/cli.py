"""tsnarrow CLI — Typer application with analyze, fix, interface, batch and cache commands."""

from __future__ import annotations

from pathlib import Path
from typing import Optional

import typer
from rich.console import Console

from tsnarrow import __version__

app = typer.Typer(
    name="tsnarrow",
    help="Find TypeScript 'any' annotations and replace them with narrower types.",
    add_completion=False,
    no_args_is_help=True,
)

console = Console(stderr=True)

FORMATS = ("terminal", "json")


def _check_format(format: str) -> None:
    if format not in FORMATS:
        console.print(f"[bold red]Invalid format:[/bold red] {format}")
        raise typer.Exit(code=2)


def _build_analyzer(config: Optional[str]):
    """Load config, set up logging and build an Analyzer. Exits 2 on bad config."""
    from tsnarrow.config.loader import ConfigError, load_config
    from tsnarrow.errors import RuleError
    from tsnarrow.logging import configure_logging
    from tsnarrow.service import Analyzer

    project_root = Path.cwd()
    try:
        cfg = load_config(project_root, config)
    except ConfigError as exc:
        console.print(f"[bold red]Config error:[/bold red] {exc}")
        raise typer.Exit(code=2) from exc

    configure_logging(cfg.logging)

    try:
        return Analyzer(cfg, project_root=project_root)
    except RuleError as exc:
        console.print(f"[bold red]Rule error:[/bold red] {exc}")
        raise typer.Exit(code=2) from exc


# ── analyze ───────────────────────────────────────────────────────────────────


@app.command()
def analyze(
    path: Path = typer.Argument(..., help="TypeScript file to analyze"),
    format: str = typer.Option("terminal", "--format", "-f", help="Output format: terminal | json"),
    no_cache: bool = typer.Option(False, "--no-cache", help="Ignore cached results"),
    config: Optional[str] = typer.Option(None, "--config", "-c", help="Path to .tsnarrow.toml"),
) -> None:
    """Report every 'any' annotation in a file with a suggested type."""
    from tsnarrow.output import json_report, terminal

    _check_format(format)
    analyzer = _build_analyzer(config)
    result = analyzer.analyze(path, use_cache=not no_cache)

    if format == "json":
        print(json_report.render(result))
    else:
        terminal.render_analysis(result, console=console)

    raise typer.Exit(code=0 if result.success else 1)


# ── fix ───────────────────────────────────────────────────────────────────────


@app.command()
def fix(
    path: Path = typer.Argument(..., help="TypeScript file to rewrite"),
    replacement: Optional[str] = typer.Option(
        None, "--replacement", "-r", help="Fallback type: unknown | Record<string, unknown> | object"
    ),
    dry_run: bool = typer.Option(False, "--dry-run", help="Show changes without writing"),
    no_backup: bool = typer.Option(False, "--no-backup", help="Do not back up the file first"),
    format: str = typer.Option("terminal", "--format", "-f", help="Output format: terminal | json"),
    config: Optional[str] = typer.Option(None, "--config", "-c", help="Path to .tsnarrow.toml"),
) -> None:
    """Replace every 'any' annotation in a file."""
    from tsnarrow.config.schema import REPLACEMENT_CHOICES
    from tsnarrow.output import json_report, terminal

    _check_format(format)
    if replacement is not None and replacement not in REPLACEMENT_CHOICES:
        console.print(f"[bold red]Invalid replacement:[/bold red] {replacement}")
        raise typer.Exit(code=2)

    analyzer = _build_analyzer(config)
    result = analyzer.fix(
        path,
        replacement_default=replacement,
        dry_run=dry_run,
        backup=False if no_backup else None,
    )

    if format == "json":
        print(json_report.render(result))
    else:
        terminal.render_fix(result, console=console)

    raise typer.Exit(code=0 if result.success else 1)


# ── interface ─────────────────────────────────────────────────────────────────


@app.command()
def interface(
    path: Path = typer.Argument(..., help="File containing the component"),
    component: str = typer.Argument(..., help="Component name"),
    output: Optional[Path] = typer.Option(None, "--output", "-o", help="Write the interface to a file"),
    format: str = typer.Option("terminal", "--format", "-f", help="Output format: terminal | json"),
    config: Optional[str] = typer.Option(None, "--config", "-c", help="Path to .tsnarrow.toml"),
) -> None:
    """Generate a props interface for a React component."""
    from tsnarrow.output import json_report, terminal

    _check_format(format)
    analyzer = _build_analyzer(config)
    result = analyzer.generate_interface(path, component, output)

    if format == "json":
        print(json_report.render(result))
    else:
        terminal.render_interface(result, console=console)

    raise typer.Exit(code=0 if result.success else 1)


# ── batch ─────────────────────────────────────────────────────────────────────


@app.command()
def batch(
    directory: Path = typer.Argument(..., help="Directory to process"),
    pattern: str = typer.Option("**/*.{ts,tsx}", "--pattern", "-p", help="Glob pattern for files"),
    operation: str = typer.Option("analyze", "--operation", help="analyze | fix"),
    replacement: Optional[str] = typer.Option(None, "--replacement", "-r", help="Fallback type for fix"),
    dry_run: bool = typer.Option(False, "--dry-run", help="Show changes without writing"),
    concurrency: Optional[int] = typer.Option(None, "--concurrency", "-j", min=1, help="Files in flight"),
    format: str = typer.Option("terminal", "--format", "-f", help="Output format: terminal | json"),
    config: Optional[str] = typer.Option(None, "--config", "-c", help="Path to .tsnarrow.toml"),
) -> None:
    """Analyze or fix every matching file under a directory."""
    from tsnarrow.batch.driver import OPERATIONS, run_batch
    from tsnarrow.batch.progress import progress_message
    from tsnarrow.config.schema import REPLACEMENT_CHOICES
    from tsnarrow.files.discovery import discover_files
    from tsnarrow.output import json_report, terminal

    _check_format(format)
    if operation not in OPERATIONS:
        console.print(f"[bold red]Invalid operation:[/bold red] {operation}")
        raise typer.Exit(code=2)
    if replacement is not None and replacement not in REPLACEMENT_CHOICES:
        console.print(f"[bold red]Invalid replacement:[/bold red] {replacement}")
        raise typer.Exit(code=2)
    if not directory.is_dir():
        console.print(f"[bold red]Not a directory:[/bold red] {directory}")
        raise typer.Exit(code=2)

    analyzer = _build_analyzer(config)
    files = discover_files(directory, pattern, analyzer.config.analysis.ignore_patterns)
    if not files:
        console.print(f"[dim]No files matching {pattern} in {directory}[/dim]")

    def _on_progress(processed: int, total: int, path: str) -> None:
        console.print(f"[dim]{progress_message(processed, total, path)}[/dim]")

    result = run_batch(
        analyzer,
        files,
        operation,
        replacement_default=replacement,
        dry_run=dry_run,
        concurrency=concurrency,
        on_progress=_on_progress if format == "terminal" else None,
    )

    if format == "json":
        print(json_report.render(result))
    else:
        terminal.render_batch(result, console=console)

    raise typer.Exit(code=0 if result.success else 1)


# ── clear-cache ───────────────────────────────────────────────────────────────


@app.command("clear-cache")
def clear_cache(
    config: Optional[str] = typer.Option(None, "--config", "-c", help="Path to .tsnarrow.toml"),
) -> None:
    """Delete every cached analysis result."""
    analyzer = _build_analyzer(config)
    removed = analyzer.clear_cache()
    console.print(f"[green]✓[/green] Removed {removed} cache entr{'y' if removed == 1 else 'ies'}")


# ── init ──────────────────────────────────────────────────────────────────────


@app.command()
def init() -> None:
    """Generate a starter .tsnarrow.toml in the current directory."""
    from tsnarrow.config.defaults import DEFAULT_TOML
    from tsnarrow.config.loader import CONFIG_FILENAME

    config_path = Path.cwd() / CONFIG_FILENAME

    if config_path.exists():
        console.print(f"[yellow]⚠[/yellow]  {CONFIG_FILENAME} already exists at {config_path}")
        raise typer.Exit(code=1)

    config_path.write_text(DEFAULT_TOML, encoding="utf-8")
    console.print(f"[green]✓[/green] Created {config_path}")


# ── version ───────────────────────────────────────────────────────────────────


def _version_callback(value: bool) -> None:
    if value:
        print(f"tsnarrow {__version__}")
        raise typer.Exit()


@app.callback()
def main(
    version: bool = typer.Option(
        False, "--version", "-V", callback=_version_callback,
        is_eager=True, help="Show version and exit",
    ),
) -> None:
    """tsnarrow — narrow TypeScript 'any' annotations to real types."""
