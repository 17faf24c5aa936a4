"""Folding of package records into a scan result."""
from __future__ import annotations

from collections import Counter
from typing import Iterable, Optional

from license_auditor.analysis.policy import ClassificationPolicy, UnknownLicensePolicy
from license_auditor.models.policy import PolicyViolation
from license_auditor.models.scan import IgnoredPackagesSummary, PackageRecord, ScanResult


def aggregate(
    records: Iterable[PackageRecord],
    policy: Optional[ClassificationPolicy] = None,
    include_types: bool = False,
    ignored_summary: Optional[IgnoredPackagesSummary] = None,
) -> ScanResult:
    """Fold completed package records into summary statistics.

    Must run after every record of the scan has been resolved.

    Args:
        records: Resolved records in discovery order.
        policy: Classification policy. Defaults to flagging UNKNOWN licenses.
        include_types: Count @types/* packages in the license statistics.
        ignored_summary: Summary of packages dropped by configuration.

    Returns:
        ScanResult with counts, packages and problematic packages.
    """
    packages = list(records)
    active_policy = policy if policy is not None else UnknownLicensePolicy()

    counted = [
        record
        for record in packages
        if include_types or not record.is_type_declaration
    ]
    license_counts = Counter(record.license for record in counted)

    problematic: list[PackageRecord] = []
    violations: list[PolicyViolation] = []
    for record in packages:
        reason = active_policy.evaluate(record)
        if reason is None:
            continue
        problematic.append(record)
        violations.append(
            PolicyViolation(
                package_name=record.name,
                package_version=record.version,
                detected_license=record.license,
                reason=reason,
            )
        )

    return ScanResult(
        total_packages=len(packages),
        total_filtered=len(counted),
        license_counts=dict(license_counts),
        packages=packages,
        problematic=problematic,
        policy_violations=violations,
        ignored_packages_summary=ignored_summary,
    )
