"""Scan-related Pydantic models.

Field names are snake_case in Python and camelCase on the wire, so a cached
scan round-trips through the same JSON shape the CLI prints.
"""

from __future__ import annotations

from datetime import datetime, timezone
from enum import Enum
from typing import Literal, Optional

from pydantic import BaseModel, Field
from pydantic.alias_generators import to_camel

from license_auditor.constants import TYPES_SCOPE_PREFIX, UNKNOWN_LICENSE
from license_auditor.models.policy import PolicyViolation

_CAMEL_CONFIG = {
    "extra": "forbid",
    "alias_generator": to_camel,
    "populate_by_name": True,
}


def _utc_timestamp() -> str:
    return datetime.now(timezone.utc).strftime("%Y-%m-%dT%H:%M:%SZ")


class Verbosity(Enum):
    """Output verbosity levels."""

    QUIET = "quiet"
    NORMAL = "normal"
    VERBOSE = "verbose"


class ScanOptions(BaseModel):
    """Options for a license scan operation."""

    model_config = {"extra": "forbid"}

    format: Literal["terminal", "json"] = Field(
        default="terminal",
        description="Output format for scan results",
    )
    verbosity: Verbosity = Field(
        default=Verbosity.NORMAL,
        description="Output verbosity level (quiet, normal, verbose)",
    )
    use_cache: bool = Field(
        default=True,
        description="Reuse and refresh the on-disk scan cache",
    )


class IgnoredPackagesSummary(BaseModel):
    """Summary of packages that were ignored during scanning."""

    model_config = _CAMEL_CONFIG

    ignored_count: int = Field(
        default=0,
        description="Number of packages that were ignored",
    )
    ignored_names: Optional[list[str]] = Field(
        default=None,
        description="Names of packages that were ignored",
    )


class PackageRecord(BaseModel):
    """One resolved dependency found under the install directory.

    Records are immutable; overrides produce a new record via model_copy.
    """

    model_config = {**_CAMEL_CONFIG, "frozen": True}

    name: str = Field(description="Package name, including its scope")
    version: str = Field(default="0.0.0", description="Package version")
    license: str = Field(
        default=UNKNOWN_LICENSE,
        description="Canonical license expression",
    )
    repository_url: Optional[str] = Field(
        default=None, description="Source repository URL from the manifest"
    )
    is_private: bool = Field(
        default=False, description="Whether the manifest marks the package private"
    )
    license_file_path: Optional[str] = Field(
        default=None, description="Path of the located license file"
    )
    license_file_text: Optional[str] = Field(
        default=None, description="Text of the located license file"
    )
    notice_file_text: Optional[str] = Field(
        default=None, description="Text of the located NOTICE file"
    )
    directory_path: str = Field(description="Package directory on disk")
    original_license: Optional[str] = Field(
        default=None, description="Normalized license before a manual override"
    )
    override_reason: Optional[str] = Field(
        default=None, description="Reason for a manual license override"
    )

    @property
    def is_type_declaration(self) -> bool:
        """Check if this package only ships type declarations.

        Returns:
            True for packages published under the @types scope.
        """
        return self.name.startswith(TYPES_SCOPE_PREFIX)

    @property
    def is_overridden(self) -> bool:
        """Check if this package has a manual override applied.

        Returns:
            True if override_reason is set, False otherwise.
        """
        return self.override_reason is not None

    @property
    def package_id(self) -> str:
        """Identifier in ``name@version`` form."""
        return f"{self.name}@{self.version}"


class ScanResult(BaseModel):
    """Aggregated result of a license scan."""

    model_config = _CAMEL_CONFIG

    generated_at: str = Field(
        default_factory=_utc_timestamp,
        description="UTC timestamp of the scan",
    )
    total_packages: int = Field(default=0, description="All packages found")
    total_filtered: int = Field(
        default=0,
        description="Packages counted in license statistics",
    )
    license_counts: dict[str, int] = Field(
        default_factory=dict,
        description="Number of counted packages per canonical license",
    )
    packages: list[PackageRecord] = Field(
        default_factory=list,
        description="Resolved packages in discovery order",
    )
    problematic: list[PackageRecord] = Field(
        default_factory=list,
        description="Packages flagged by the classification policy",
    )
    policy_violations: list[PolicyViolation] = Field(
        default_factory=list,
        description="Reason attached to each problematic package",
    )
    ignored_packages_summary: Optional[IgnoredPackagesSummary] = Field(
        default=None,
        description="Summary of packages ignored during scanning",
    )

    @property
    def has_issues(self) -> bool:
        """Check if the scan flagged any package.

        Returns:
            True if at least one package is problematic.
        """
        return len(self.problematic) > 0

    def to_json_dict(self) -> dict:
        """Dump the result in its camelCase wire shape."""
        return self.model_dump(mode="json", by_alias=True)
