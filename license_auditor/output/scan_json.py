"""JSON output formatter for license scan results."""
import json
from typing import Any

from license_auditor import __version__
from license_auditor.constants import LEGAL_DISCLAIMER
from license_auditor.models.scan import ScanResult


class ScanJsonFormatter:
    """Format scan results as JSON.

    The body is the camelCase ScanResult shape (``generatedAt``,
    ``totalPackages``, ``licenseCounts``, ...) plus a ``scanMetadata`` block.
    License and notice texts are left out unless requested, since they make
    the report very large.
    """

    def __init__(self, include_texts: bool = False) -> None:
        self._include_texts = include_texts

    def format_scan_result(self, result: ScanResult) -> str:
        """Format a scan result as a JSON string.

        Args:
            result: The scan result to format.

        Returns:
            Indented JSON document.
        """
        return json.dumps(self._build_output(result), indent=2)

    def _build_output(self, result: ScanResult) -> dict[str, Any]:
        output: dict[str, Any] = {"scanMetadata": self._build_scan_metadata()}
        output.update(result.to_json_dict())
        if not self._include_texts:
            for key in ("packages", "problematic"):
                output[key] = [self._strip_texts(pkg) for pkg in output[key]]
        return output

    def _build_scan_metadata(self) -> dict[str, Any]:
        return {
            "toolVersion": __version__,
            "disclaimer": LEGAL_DISCLAIMER,
            "disclaimerType": "informational",
        }

    @staticmethod
    def _strip_texts(package: dict[str, Any]) -> dict[str, Any]:
        return {
            key: value
            for key, value in package.items()
            if key not in ("licenseFileText", "noticeFileText")
        }
