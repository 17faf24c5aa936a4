"""Output formatters for license-auditor."""

from license_auditor.output.scan_json import ScanJsonFormatter
from license_auditor.output.terminal import TerminalFormatter

__all__ = [
    "ScanJsonFormatter",
    "TerminalFormatter",
]
