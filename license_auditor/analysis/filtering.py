"""Package filtering for ignored packages configuration."""

from __future__ import annotations

from typing import NamedTuple

from license_auditor.models.config import AuditorConfig
from license_auditor.models.scan import PackageRecord


class FilterResult(NamedTuple):
    """Result of filtering packages.

    Attributes:
        packages: Records kept after filtering.
        ignored_names: Names of the records that were dropped.
    """

    packages: list[PackageRecord]
    ignored_names: list[str]

    @property
    def ignored_count(self) -> int:
        return len(self.ignored_names)


def filter_ignored_packages(
    packages: list[PackageRecord],
    config: AuditorConfig,
) -> FilterResult:
    """Drop packages listed in ``ignored_packages``.

    Matching is case-sensitive on the full name, scope included
    (``@babel/core``).

    Args:
        packages: Resolved records.
        config: Configuration with the ignored_packages list.

    Returns:
        FilterResult with the kept records and the dropped names.
    """
    if not config.ignored_packages:
        return FilterResult(packages=list(packages), ignored_names=[])

    ignored = set(config.ignored_packages)
    kept = [pkg for pkg in packages if pkg.name not in ignored]
    dropped = [pkg.name for pkg in packages if pkg.name in ignored]
    return FilterResult(packages=kept, ignored_names=dropped)
