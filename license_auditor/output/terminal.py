"""Terminal output formatter using Rich."""
from typing import Optional

from rich.console import Console
from rich.panel import Panel
from rich.table import Table

from license_auditor.constants import LEGAL_DISCLAIMER_SHORT, UNKNOWN_LICENSE
from license_auditor.models.scan import ScanResult, Verbosity


class TerminalFormatter:
    """Format scan results for terminal display using Rich.

    Shows a summary panel, the per-license counts, the package table and the
    packages flagged by the classification policy.
    """

    def __init__(
        self,
        console: Optional[Console] = None,
        verbosity: Verbosity = Verbosity.NORMAL,
    ) -> None:
        """Initialize the formatter with a Rich console.

        Args:
            console: Optional Rich Console instance. If not provided,
                a new Console will be created.
            verbosity: Output verbosity level.
        """
        self._console = console if console is not None else Console()
        self._verbosity = verbosity

    def format_scan_result(self, result: ScanResult) -> None:
        """Display a scan result.

        Args:
            result: The scan result to display.
        """
        if self._verbosity == Verbosity.QUIET:
            self._print_quiet_output(result)
            return

        if result.total_packages == 0:
            self._print_disclaimer()
            self._console.print("[yellow]No packages found[/yellow]")
            return

        self._print_summary(result)
        self._print_disclaimer()
        self._print_license_counts(result)

        if self._verbosity == Verbosity.VERBOSE:
            self._print_package_table(result)

        if result.policy_violations:
            self._print_problematic(result)

    def _print_quiet_output(self, result: ScanResult) -> None:
        if result.total_packages == 0:
            self._console.print("[yellow]No packages found[/yellow]")
            return

        if not result.has_issues:
            self._console.print(
                f"[green]PASS[/green] - {result.total_packages} packages scanned"
            )
            return

        self._console.print(
            f"[red]ISSUES FOUND[/red] - "
            f"{len(result.problematic)} problematic package(s)"
        )
        for violation in result.policy_violations:
            self._console.print(
                f"  - {violation.package_name}@{violation.package_version}: "
                f"[red]{violation.reason}[/red]"
            )

    def _print_disclaimer(self) -> None:
        panel = Panel(
            LEGAL_DISCLAIMER_SHORT,
            title="[bold yellow]NOT LEGAL ADVICE[/bold yellow]",
            border_style="yellow",
        )
        self._console.print(panel)
        self._console.print("")

    def _print_summary(self, result: ScanResult) -> None:
        if result.has_issues:
            status, color = "ISSUES FOUND", "red"
            message = f"{len(result.problematic)} package(s) require attention"
        else:
            status, color = "PASS", "green"
            message = "No problematic packages"

        lines = [
            f"Total Packages: {result.total_packages}",
            f"Counted Packages: {result.total_filtered}",
            f"Distinct Licenses: {len(result.license_counts)}",
            f"Problematic: {len(result.problematic)}",
        ]

        ignored = result.ignored_packages_summary
        if ignored and ignored.ignored_count > 0:
            names = ignored.ignored_names or []
            shown = ", ".join(names[:3])
            if len(names) > 3:
                shown += f", ... (+{len(names) - 3} more)"
            lines.append(f"Packages Ignored: {ignored.ignored_count} ({shown})")

        overrides = sum(1 for pkg in result.packages if pkg.is_overridden)
        if overrides:
            lines.append(f"Overrides Applied: {overrides}")

        lines += ["", f"Status: [{color}]{status}[/{color}]", f"[{color}]{message}[/{color}]"]
        self._console.print(
            Panel("\n".join(lines), title="[bold]SCAN SUMMARY[/bold]", border_style=color)
        )
        self._console.print("")

    def _print_license_counts(self, result: ScanResult) -> None:
        table = Table(title="Licenses")
        table.add_column("License", style="green")
        table.add_column("Packages", justify="right")

        ordered = sorted(result.license_counts.items(), key=lambda item: (-item[1], item[0]))
        for license_expr, count in ordered:
            label = (
                f"[yellow]{license_expr}[/yellow]"
                if license_expr == UNKNOWN_LICENSE
                else license_expr
            )
            table.add_row(label, str(count))
        self._console.print(table)

    def _print_package_table(self, result: ScanResult) -> None:
        table = Table(title="License Scan Results")
        table.add_column("Package", style="cyan", no_wrap=True)
        table.add_column("Version", style="magenta")
        table.add_column("License", style="green")
        table.add_column("License File")

        for pkg in sorted(result.packages, key=lambda p: p.name.lower()):
            license_display = pkg.license
            if pkg.license == UNKNOWN_LICENSE:
                license_display = f"[yellow]{pkg.license}[/yellow]"
            if pkg.is_overridden:
                original = pkg.original_license or UNKNOWN_LICENSE
                license_display += (
                    f" [blue]\\[override: was {original}, "
                    f"reason: {pkg.override_reason}][/blue]"
                )
            table.add_row(
                pkg.name,
                pkg.version,
                license_display,
                "yes" if pkg.license_file_path else "-",
            )
        self._console.print(table)

    def _print_problematic(self, result: ScanResult) -> None:
        self._console.print("")
        self._console.print(
            f"[bold red]Problematic Packages ({len(result.policy_violations)})[/bold red]"
        )
        for violation in result.policy_violations:
            self._console.print(
                f"  [red]![/red] {violation.package_name}@{violation.package_version} "
                f"([yellow]{violation.detected_license}[/yellow]): {violation.reason}"
            )
