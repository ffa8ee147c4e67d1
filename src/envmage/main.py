"""
env-mage CLI - .env file toolkit

Main entry point for the env-mage command-line tool.
"""

import sys

import click
from rich import box
from rich.console import Console
from rich.table import Table

from . import __version__
from .commands import (
    diff_command,
    envjson_command,
    init_command,
    lint_command,
    resolve_example_file,
    scan_command,
    sync_command,
    typegen_command,
    validate_command,
)
from .core import config
from .core.keyset import SyncStrategy
from .core.typegen import TypeFormat
from .core.validator import Severity


console = Console()


def section(title: str):
    console.print()
    console.print(f"[bold cyan]{title}[/bold cyan]")


def stats_table(title: str, stats: dict) -> Table:
    """Build a two-column summary table."""
    table = Table(title=title, box=box.ROUNDED, show_header=False)
    table.add_column("Metric", style="cyan", no_wrap=True)
    table.add_column("Count", style="bold", justify="right")
    for name, value in stats.items():
        table.add_row(name, str(value))
    return table


def fail(message: str):
    """Print an error and exit with status 1."""
    console.print(f"[red]✗ {message}[/red]")
    sys.exit(1)


def print_keys(keys, marker: str, style: str):
    for key in keys:
        console.print(f"  [{style}]{marker} {key}[/{style}]")


@click.group(context_settings={"help_option_names": ["-h", "--help"]})
@click.version_option(__version__, prog_name="env-mage")
def cli():
    """
    env-mage - init, validate, sync, diff, lint, typegen and scan .env files

    \b
    Examples:
      env-mage init                       Generate .env.example from .env
      env-mage validate                   Check .env against .env.example
      env-mage init -e .env.production    Use a custom .env file
      env-mage validate --strict          Fail on any mismatch
    """


@cli.command()
@click.option('-e', '--env', 'env_file', default=config.ENV_FILE, show_default=True, help='Path to .env file')
@click.option('-o', '--output', default=config.ENV_EXAMPLE_FILE, show_default=True, help='Template file to write')
@click.option('--backup/--no-backup', default=config.default_backup, help='Back up an existing template')
def init(env_file, output, backup):
    """
    Generate .env.example from .env.

    Keeps every key and blanks every value.
    """
    section("Initialize .env.example")
    console.print(f"[dim]Reading from: {env_file}[/dim]")

    result = init_command(env_file, output, backup)
    if not result.success:
        fail(result.message)

    console.print(f"[green]✓ {result.message}[/green]")
    if result.data.backup_path:
        console.print(f"[dim]Backup created: {result.data.backup_path}[/dim]")


@cli.command()
@click.option('-e', '--env', 'env_file', default=config.ENV_FILE, show_default=True, help='Path to .env file')
@click.option('-x', '--example', 'example_file', default=None,
              help='Template to check against [default: <env>.example or .env.example]')
@click.option('-s', '--strict', is_flag=True, help='Fail on extra keys too')
def validate(env_file, example_file, strict):
    """
    Validate .env against .env.example.

    Reports keys missing from .env and keys the template does not know.
    """
    section("Validate Environment Files")
    console.print(f"[dim]Checking: {env_file} against {resolve_example_file(env_file, example_file)}[/dim]")

    result = validate_command(env_file, example_file, strict)
    data = result.data
    if data is None:
        fail(result.message)

    console.print(stats_table("Validation Results", {
        'matched': data.matched,
        'missing': data.missing_count,
        'extra': data.extra_count,
    }))

    if data.missing:
        console.print(f"[yellow]Missing keys ({data.missing_count}):[/yellow]")
        print_keys(data.missing, "•", "red")

    if data.extra:
        console.print(f"[yellow]Extra keys ({data.extra_count}):[/yellow]")
        print_keys(data.extra, "•", "yellow")

    if not result.success:
        fail(result.message)

    console.print(f"[green]✓ All {data.matched} keys validated successfully[/green]")


@cli.command()
@click.option('-s', '--source', default=config.ENV_FILE, show_default=True, help='Source .env file')
@click.option('-t', '--target', default=config.ENV_EXAMPLE_FILE, show_default=True, help='Target .env file')
@click.option('-S', '--strategy', type=click.Choice([s.value for s in SyncStrategy]),
              default=SyncStrategy.MERGE.value, show_default=True, help='Sync strategy')
@click.option('--backup/--no-backup', default=config.default_backup, help='Back up the target first')
def sync(source, target, strategy, backup):
    """
    Sync keys between .env files.

    \b
    merge:     source values win, target-only keys are kept
    overwrite: target becomes a copy of source
    preserve:  target values win, missing keys are added
    """
    section("Syncing .env Files")
    console.print(f"[dim]Source: {source}[/dim]")
    console.print(f"[dim]Target: {target}[/dim]")
    console.print(f"[dim]Strategy: {strategy}[/dim]")

    result = sync_command(source, target, strategy, backup)
    if not result.success:
        fail(result.message)

    console.print(f"[green]✓ {result.message}[/green]")
    if result.data.backup_path:
        console.print(f"[dim]Backup created: {result.data.backup_path}[/dim]")


@cli.command()
@click.option('-f', '--from', 'from_file', default=config.ENV_FILE, show_default=True, help='First file to compare')
@click.option('-t', '--to', 'to_file', default=config.ENV_EXAMPLE_FILE, show_default=True, help='Second file to compare')
def diff(from_file, to_file):
    """Show differences between .env files."""
    section("Comparing .env Files")

    result = diff_command(from_file, to_file)
    data = result.data
    if data is None:
        fail(result.message)

    console.print(f"[dim]From: {data.from_file}[/dim]")
    console.print(f"[dim]To: {data.to_file}[/dim]")
    console.print(stats_table("Diff Results", data.summary))

    if data.added:
        console.print(f"[green]Added ({len(data.added)}):[/green]")
        print_keys(data.added, "+", "green")

    if data.removed:
        console.print(f"[red]Removed ({len(data.removed)}):[/red]")
        print_keys(data.removed, "-", "red")

    if data.changed:
        console.print(f"[yellow]Changed ({len(data.changed)}):[/yellow]")
        print_keys(data.changed, "~", "yellow")

    if not (data.added or data.removed or data.changed):
        console.print(f"[green]✓ {result.message}[/green]")


@cli.command()
@click.option('-f', '--file', 'env_file', default=config.ENV_FILE, show_default=True, help='File to lint')
@click.option('-S', '--strict', is_flag=True, help='Treat warnings as errors')
@click.option('-w', '--warnings', 'show_warnings', is_flag=True, help='Show warnings in addition to errors')
def lint(env_file, strict, show_warnings):
    """Lint a .env file for syntax issues."""
    section("Linting .env File")
    console.print(f"[dim]File: {env_file}[/dim]")
    console.print(f"[dim]Strict mode: {'enabled' if strict else 'disabled'}[/dim]")

    result = lint_command(env_file, strict, show_warnings)
    data = result.data
    if data is None:
        fail(result.message)

    if result.success:
        console.print(f"[green]✓ {result.message}[/green]")
    else:
        console.print(f"[red]✗ {result.message}[/red]")

    if data.issues:
        section("Issues")
        for issue in data.issues:
            if issue.severity == Severity.ERROR:
                console.print(f"  [red]✗ Line {issue.line}: {issue.message}[/red]")
            else:
                console.print(f"  [yellow]⚠ Line {issue.line}: {issue.message}[/yellow]")

    console.print(stats_table("Lint Summary", {
        'keys': data.key_count,
        'errors': data.error_count,
        'warnings': data.warning_count,
    }))

    if not result.success:
        sys.exit(1)


@cli.command()
@click.option('-e', '--env', 'env_file', default=config.ENV_FILE, show_default=True, help='Path to .env file')
@click.option('-o', '--output', default=config.TYPES_FILE, show_default=True, help='Output file path')
@click.option('-f', '--format', 'fmt', type=click.Choice([f.value for f in TypeFormat]),
              default=TypeFormat.INTERFACE.value, show_default=True, help='Declaration style')
@click.option('--strict', is_flag=True, help='Strict typing (no optional properties)')
def typegen(env_file, output, fmt, strict):
    """Generate TypeScript types from .env."""
    section("Generating TypeScript Types")

    result = typegen_command(env_file, output, fmt, strict)
    if not result.success:
        fail(result.message)

    console.print(f"[green]✓ {result.message}[/green]")
    console.print(f"[dim]{result.data.key_count} keys, format: {result.data.format}[/dim]")


@cli.command()
@click.option('-e', '--env', 'env_file', default=config.ENV_FILE, show_default=True, help='Path to .env file')
@click.option('-o', '--output', default=config.JSON_FILE, show_default=True, help='Output JSON file')
@click.option('--values', 'include_values', is_flag=True, help='Include actual values instead of null')
def envjson(env_file, output, include_values):
    """Export the keys of a .env file as JSON."""
    result = envjson_command(env_file, output, include_values)
    if not result.success:
        fail(result.message)

    console.print(f"[green]✓ {result.message}[/green]")


@cli.command()
@click.option('-p', '--path', 'scan_path', default=config.SCAN_PATH, show_default=True, help='Directory to scan')
@click.option('-e', '--extensions', default=None,
              help='Comma-separated file extensions [default: .ts,.tsx,.js,.jsx]')
@click.option('-x', '--exclude', default=None,
              help='Comma-separated names to skip [default: node_modules,.git,dist,build,.next]')
@click.option('--env', 'env_file', default=None, help='Cross-check usage against this .env file')
def scan(scan_path, extensions, exclude, env_file):
    """Scan the codebase for process.env usage."""
    extension_list = config.split_list(extensions) if extensions else None
    exclude_list = config.split_list(exclude) if exclude else None

    section("Scanning Codebase")
    console.print(f"[dim]Path: {scan_path}[/dim]")

    result = scan_command(scan_path, extension_list, exclude_list, env_file)
    data = result.data
    if data is None:
        fail(result.message)

    console.print(f"[green]✓ {result.message}[/green]")
    console.print(stats_table("Scan Summary", {
        'files scanned': data.files_scanned,
        'files with variables': len(data.file_results),
        'unique variables': len(data.variables),
    }))

    if data.variables:
        section(f"Variables Found ({len(data.variables)})")
        print_keys(data.variables, "•", "cyan")

    if data.env_file:
        if data.missing:
            console.print(f"[yellow]Used in code but missing from {data.env_file} ({len(data.missing)}):[/yellow]")
            print_keys(data.missing, "•", "red")
        if data.unused:
            console.print(f"[yellow]Defined in {data.env_file} but never used ({len(data.unused)}):[/yellow]")
            print_keys(data.unused, "•", "dim")


def main():
    """Main entry point."""
    cli()


if __name__ == '__main__':
    main()
