"""CLI entry point for license-auditor."""

from __future__ import annotations

import logging
import sys
from pathlib import Path
from typing import Literal, Optional, cast

import click
from rich.console import Console

from license_auditor import __version__
from license_auditor.cache.scan_cache import FileScanCache, NullScanCache, ScanCache
from license_auditor.config import load_config
from license_auditor.constants import EXIT_ERROR, EXIT_ISSUES, EXIT_SUCCESS
from license_auditor.disclaimer import (
    DEFAULT_DISCLAIMER_PATH,
    add_disclaimer,
    verify_disclaimer,
)
from license_auditor.exceptions import ConfigurationError, LicenseAuditorError
from license_auditor.log import configure_logging
from license_auditor.models.scan import ScanOptions, ScanResult, Verbosity
from license_auditor.notices import generate_notices
from license_auditor.output.scan_json import ScanJsonFormatter
from license_auditor.output.terminal import TerminalFormatter
from license_auditor.scanner import scan as run_scan

# Module-level console for consistent output
_console = Console()
# Separate console for error output (writes to stderr)
_error_console = Console(stderr=True)

_root_option = click.option(
    "--root",
    "root",
    type=click.Path(file_okay=False, path_type=Path),
    default=Path("."),
    show_default=True,
    help="Project root containing package.json and node_modules.",
)


def _verbosity(verbose_flag: bool, quiet_flag: bool) -> Verbosity:
    if verbose_flag and quiet_flag:
        raise click.UsageError("--verbose and --quiet are mutually exclusive.")
    if quiet_flag:
        return Verbosity.QUIET
    if verbose_flag:
        return Verbosity.VERBOSE
    return Verbosity.NORMAL


def _configure_logging(verbosity: Verbosity) -> None:
    levels = {
        Verbosity.QUIET: logging.ERROR,
        Verbosity.NORMAL: logging.WARNING,
        Verbosity.VERBOSE: logging.DEBUG,
    }
    configure_logging(levels[verbosity], console=_error_console)


@click.group()
@click.version_option(version=__version__)
def main() -> None:
    """License Auditor - Audit the licenses of installed npm dependencies.

    Normalizes the license declared by every package under node_modules,
    summarizes them and flags packages whose license is unknown or not
    allowed by the project configuration.

    \b
    Examples:
        license-auditor scan
        license-auditor scan --root ../webapp --format json
        license-auditor notices generate --pt-br
        license-auditor disclaimer verify
    """
    pass


@main.command()
@_root_option
@click.option(
    "--format",
    "output_format",
    type=click.Choice(["terminal", "json"], case_sensitive=False),
    default="terminal",
    help="Output format for scan results (default: terminal).",
)
@click.option(
    "--output",
    "-o",
    "output_path",
    type=click.Path(dir_okay=False),
    default=None,
    help="Write the JSON report to a file instead of stdout.",
)
@click.option(
    "--config",
    "-c",
    "config_path",
    type=click.Path(exists=True, dir_okay=False),
    default=None,
    help="Path to configuration file.",
)
@click.option(
    "--no-cache",
    "no_cache",
    is_flag=True,
    default=False,
    help="Ignore and do not refresh the cached scan.",
)
@click.option(
    "--include-texts",
    is_flag=True,
    default=False,
    help="Include license and NOTICE texts in JSON output.",
)
@click.option(
    "--verbose",
    "-v",
    "verbose_flag",
    is_flag=True,
    default=False,
    help="Show every package and debug logging.",
)
@click.option(
    "--quiet",
    "-q",
    "quiet_flag",
    is_flag=True,
    default=False,
    help="Show only the status line and problematic packages.",
)
def scan(
    root: Path,
    output_format: str,
    output_path: Optional[str],
    config_path: Optional[str],
    no_cache: bool,
    include_texts: bool,
    verbose_flag: bool,
    quiet_flag: bool,
) -> None:
    """Scan installed dependencies for license information.

    Exits with 1 when problematic packages are found and 2 on errors.

    \b
    Examples:
        license-auditor scan
        license-auditor scan --format json --output licenses.json
        license-auditor scan --config strict.yaml --no-cache
        license-auditor scan --verbose
    """
    verbosity = _verbosity(verbose_flag, quiet_flag)
    format_value = cast(Literal["terminal", "json"], output_format.lower())
    options = ScanOptions(format=format_value, verbosity=verbosity, use_cache=not no_cache)
    _configure_logging(verbosity)

    try:
        config = load_config(config_path, project_root=root)
        cache: ScanCache = FileScanCache(root) if options.use_cache else NullScanCache()
        show_progress = options.format == "terminal" and verbosity != Verbosity.QUIET
        result = run_scan(
            root,
            config=config,
            cache=cache,
            console=_console if show_progress else None,
            show_progress=show_progress,
        )
        _display_result(result, options, output_path, include_texts)

        if result.has_issues:
            sys.exit(EXIT_ISSUES)
        sys.exit(EXIT_SUCCESS)

    except LicenseAuditorError as e:
        _display_error(e)
        sys.exit(EXIT_ERROR)


@main.group()
def notices() -> None:
    """Generate third-party attribution notices."""
    pass


@notices.command("generate")
@_root_option
@click.option(
    "--pt-br",
    "pt_br",
    is_flag=True,
    default=False,
    help="Write the Brazilian Portuguese notices.",
)
@click.option(
    "--output",
    "-o",
    "output_path",
    type=click.Path(dir_okay=False),
    default=None,
    help="Output file (default: THIRD-PARTY-NOTICES.txt).",
)
def notices_generate(root: Path, pt_br: bool, output_path: Optional[str]) -> None:
    """Write a plain-text file with the license and NOTICE texts of dependencies.

    \b
    Examples:
        license-auditor notices generate
        license-auditor notices generate --pt-br
        license-auditor notices generate --output NOTICES.txt
    """
    _configure_logging(Verbosity.NORMAL)
    try:
        report = generate_notices(root, pt_br=pt_br, output=output_path)
    except LicenseAuditorError as e:
        _display_error(e)
        sys.exit(EXIT_ERROR)

    _console.print(
        f"[green]Notices for {report.packages} packages written to {report.output}[/green]"
    )
    sys.exit(EXIT_SUCCESS)


@main.group()
def disclaimer() -> None:
    """Insert or verify the provenance disclaimer in Markdown files."""
    pass


_disclaimer_path_option = click.option(
    "--disclaimer-path",
    default=DEFAULT_DISCLAIMER_PATH,
    show_default=True,
    help="Disclaimer file, relative to the project root.",
)


@disclaimer.command("add")
@_root_option
@_disclaimer_path_option
@click.option(
    "--dry-run",
    is_flag=True,
    default=False,
    help="List files without modifying them.",
)
def disclaimer_add(root: Path, disclaimer_path: str, dry_run: bool) -> None:
    """Prepend the disclaimer to Markdown files that lack it."""
    _configure_logging(Verbosity.NORMAL)
    try:
        report = add_disclaimer(root, disclaimer_path=disclaimer_path, dry_run=dry_run)
    except LicenseAuditorError as e:
        _display_error(e)
        sys.exit(EXIT_ERROR)

    action = "would be inserted into" if dry_run else "inserted into"
    _console.print(f"Disclaimer {action} {len(report.updated_files)} file(s)")
    for rel in report.updated_files:
        _console.print(f"  - {rel}")
    sys.exit(EXIT_SUCCESS)


@disclaimer.command("verify")
@_root_option
@_disclaimer_path_option
def disclaimer_verify(root: Path, disclaimer_path: str) -> None:
    """Check that every Markdown file carries the disclaimer.

    Exits with 1 when files are missing it.
    """
    _configure_logging(Verbosity.NORMAL)
    report = verify_disclaimer(root, disclaimer_path=disclaimer_path)
    if report.missing:
        _error_console.print("[red]Missing disclaimer in files:[/red]")
        for rel in report.missing:
            _error_console.print(f"  - {rel}")
        sys.exit(EXIT_ISSUES)

    _console.print("[green]All Markdown files include the disclaimer.[/green]")
    sys.exit(EXIT_SUCCESS)


def _write_output_to_file(content: str, path: str) -> None:
    """Write report content to file.

    Raises:
        ConfigurationError: If file cannot be written.
    """
    file_path = Path(path)
    try:
        if file_path.exists():
            _console.print(
                f"[yellow]Warning: Overwriting existing file: {path}[/yellow]"
            )
        file_path.write_text(content, encoding="utf-8")
    except OSError as e:
        raise ConfigurationError(f"Cannot write to file '{path}': {e}") from e

    _console.print(f"[green]Report written to {path}[/green]")


def _display_result(
    result: ScanResult,
    options: ScanOptions,
    output_path: Optional[str] = None,
    include_texts: bool = False,
) -> None:
    """Display scan results in the requested format.

    Terminal format written to a file falls back to JSON.
    """
    if options.format == "terminal" and not output_path:
        TerminalFormatter(console=_console, verbosity=options.verbosity).format_scan_result(
            result
        )
        return

    content = ScanJsonFormatter(include_texts=include_texts).format_scan_result(result)
    if output_path:
        _write_output_to_file(content, output_path)
    else:
        click.echo(content)


def _display_error(error: LicenseAuditorError) -> None:
    """Write an error message to stderr."""
    _error_console.print(f"[red bold]Error: {type(error).__name__}: {error}[/red bold]")


if __name__ == "__main__":
    main()
