"""Tests for package filtering functionality."""

from license_auditor.analysis.filtering import FilterResult, filter_ignored_packages
from license_auditor.models.config import AuditorConfig
from license_auditor.models.scan import PackageRecord


def _record(name: str, license_expr: str = "MIT") -> PackageRecord:
    return PackageRecord(
        name=name,
        version="1.0.0",
        license=license_expr,
        directory_path=f"node_modules/{name}",
    )


class TestFilterIgnoredPackages:
    """Tests for filter_ignored_packages function."""

    def test_none_ignored_returns_all(self) -> None:
        """Test that None ignored_packages returns all packages."""
        packages = [_record("react"), _record("lodash")]
        config = AuditorConfig(ignored_packages=None)

        result = filter_ignored_packages(packages, config)

        assert result.packages == packages
        assert result.ignored_count == 0
        assert result.ignored_names == []

    def test_empty_ignored_returns_all(self) -> None:
        """Test that empty ignored_packages list returns all packages."""
        packages = [_record("react")]
        config = AuditorConfig(ignored_packages=[])

        result = filter_ignored_packages(packages, config)

        assert result.packages == packages
        assert result.ignored_count == 0

    def test_single_package_ignored(self) -> None:
        """Test filtering a single package."""
        packages = [_record("react"), _record("lodash")]
        config = AuditorConfig(ignored_packages=["react"])

        result = filter_ignored_packages(packages, config)

        assert [p.name for p in result.packages] == ["lodash"]
        assert result.ignored_count == 1
        assert result.ignored_names == ["react"]

    def test_scoped_name_matched_whole(self) -> None:
        """Test that scoped packages are matched on their full name."""
        packages = [_record("@babel/core"), _record("core")]
        config = AuditorConfig(ignored_packages=["@babel/core"])

        result = filter_ignored_packages(packages, config)

        assert [p.name for p in result.packages] == ["core"]

    def test_matching_is_case_sensitive(self) -> None:
        """Test that names differing in case are kept."""
        packages = [_record("React")]
        config = AuditorConfig(ignored_packages=["react"])

        result = filter_ignored_packages(packages, config)

        assert result.ignored_count == 0

    def test_unmatched_names_not_reported(self) -> None:
        """Test that ignored names absent from the scan are not counted."""
        packages = [_record("react")]
        config = AuditorConfig(ignored_packages=["not-installed"])

        result = filter_ignored_packages(packages, config)

        assert result == FilterResult(packages=packages, ignored_names=[])
