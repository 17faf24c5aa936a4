"""Manual license overrides from configuration."""
from __future__ import annotations

from license_auditor.models.config import AuditorConfig
from license_auditor.models.scan import PackageRecord


def apply_license_overrides(
    packages: list[PackageRecord],
    config: AuditorConfig,
) -> list[PackageRecord]:
    """Replace the license of packages named in ``overrides``.

    Records are immutable, so overridden packages are copies carrying the
    normalized license in ``original_license``. Matching is case-sensitive.

    Args:
        packages: Resolved records.
        config: Configuration with the overrides mapping.

    Returns:
        Records with overrides applied, in the same order.
    """
    if not config.overrides:
        return list(packages)

    result: list[PackageRecord] = []
    for pkg in packages:
        override = config.overrides.get(pkg.name)
        if override is None:
            result.append(pkg)
            continue
        result.append(
            pkg.model_copy(
                update={
                    "license": override.license,
                    "original_license": pkg.license,
                    "override_reason": override.reason,
                }
            )
        )
    return result
