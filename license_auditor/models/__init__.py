"""Pydantic data models for license-auditor."""

from license_auditor.models.config import AuditorConfig, LicenseOverride
from license_auditor.models.policy import PolicyViolation
from license_auditor.models.scan import (
    IgnoredPackagesSummary,
    PackageRecord,
    ScanOptions,
    ScanResult,
    Verbosity,
)

__all__ = [
    "AuditorConfig",
    "IgnoredPackagesSummary",
    "LicenseOverride",
    "PackageRecord",
    "PolicyViolation",
    "ScanOptions",
    "ScanResult",
    "Verbosity",
]
