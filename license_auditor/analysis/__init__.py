"""Scan aggregation and license classification."""
from license_auditor.analysis.aggregate import aggregate
from license_auditor.analysis.filtering import FilterResult, filter_ignored_packages
from license_auditor.analysis.overrides import apply_license_overrides
from license_auditor.analysis.policy import (
    AllowListPolicy,
    ClassificationPolicy,
    UnknownLicensePolicy,
    policy_from_config,
)

__all__ = [
    "AllowListPolicy",
    "ClassificationPolicy",
    "FilterResult",
    "UnknownLicensePolicy",
    "aggregate",
    "apply_license_overrides",
    "filter_ignored_packages",
    "policy_from_config",
]
