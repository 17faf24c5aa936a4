"""Tests for license override functionality."""

from license_auditor.analysis.overrides import apply_license_overrides
from license_auditor.constants import UNKNOWN_LICENSE
from license_auditor.models.config import AuditorConfig, LicenseOverride
from license_auditor.models.scan import PackageRecord


def _record(name: str, license_expr: str = UNKNOWN_LICENSE) -> PackageRecord:
    return PackageRecord(
        name=name,
        version="2.0.0",
        license=license_expr,
        directory_path=f"node_modules/{name}",
    )


class TestApplyLicenseOverrides:
    """Tests for apply_license_overrides function."""

    def test_no_overrides_returns_same_packages(self) -> None:
        """Test that no configured overrides leaves packages alone."""
        packages = [_record("a"), _record("b", "MIT")]

        result = apply_license_overrides(packages, AuditorConfig())

        assert result == packages

    def test_override_replaces_license(self) -> None:
        """Test that the override license is used."""
        packages = [_record("legacy-lib")]
        config = AuditorConfig(
            overrides={
                "legacy-lib": LicenseOverride(license="MIT", reason="Verified upstream")
            }
        )

        result = apply_license_overrides(packages, config)

        assert result[0].license == "MIT"
        assert result[0].original_license == UNKNOWN_LICENSE
        assert result[0].override_reason == "Verified upstream"
        assert result[0].is_overridden is True

    def test_original_record_unchanged(self) -> None:
        """Test that overriding copies rather than mutates."""
        original = _record("legacy-lib")
        config = AuditorConfig(
            overrides={"legacy-lib": LicenseOverride(license="MIT", reason="Checked")}
        )

        apply_license_overrides([original], config)

        assert original.license == UNKNOWN_LICENSE
        assert original.is_overridden is False

    def test_order_preserved(self) -> None:
        """Test that records keep their order."""
        packages = [_record("c", "MIT"), _record("a"), _record("b", "ISC")]
        config = AuditorConfig(
            overrides={"a": LicenseOverride(license="0BSD", reason="Checked")}
        )

        result = apply_license_overrides(packages, config)

        assert [p.name for p in result] == ["c", "a", "b"]
        assert [p.license for p in result] == ["MIT", "0BSD", "ISC"]
