"""Tests for the scan result cache."""
from __future__ import annotations

import json
import os
import shutil
from pathlib import Path

from license_auditor.cache import FileScanCache, NullScanCache
from license_auditor.models.scan import PackageRecord, ScanResult


def _result() -> ScanResult:
    record = PackageRecord(
        name="@babel/core",
        version="7.24.0",
        license="MIT",
        repository_url="https://github.com/babel/babel.git",
        license_file_text="MIT License",
        directory_path="node_modules/@babel/core",
    )
    return ScanResult(
        total_packages=1,
        total_filtered=1,
        license_counts={"MIT": 1},
        packages=[record],
    )


class TestNullScanCache:
    """Tests for NullScanCache."""

    def test_never_hits(self) -> None:
        """Test that saved results are not returned."""
        cache = NullScanCache()
        cache.save(_result())

        assert cache.load() is None


class TestFileScanCache:
    """Tests for FileScanCache."""

    def test_default_location(self, project_root: Path) -> None:
        """Test the conventional cache path."""
        cache = FileScanCache(project_root)

        assert cache.path == project_root / ".license-auditor" / "licenses.json"

    def test_miss_without_file(self, project_root: Path) -> None:
        """Test that a missing cache file is a miss."""
        assert FileScanCache(project_root).load() is None

    def test_save_then_load(self, project_root: Path) -> None:
        """Test that a saved result loads back unchanged."""
        cache = FileScanCache(project_root)
        original = _result()

        cache.save(original)
        loaded = cache.load()

        assert loaded is not None
        assert loaded.to_json_dict() == original.to_json_dict()

    def test_saved_file_uses_camel_case(self, project_root: Path) -> None:
        """Test that the cache file is in the JSON report shape."""
        cache = FileScanCache(project_root)
        cache.save(_result())

        data = json.loads(cache.path.read_text(encoding="utf-8"))
        assert data["totalPackages"] == 1
        assert data["licenseCounts"] == {"MIT": 1}
        assert data["packages"][0]["repositoryUrl"] == "https://github.com/babel/babel.git"

    def test_corrupt_file_is_miss(self, project_root: Path) -> None:
        """Test that unreadable JSON is a miss."""
        cache = FileScanCache(project_root)
        cache.path.parent.mkdir(parents=True)
        cache.path.write_text("{broken", encoding="utf-8")

        assert cache.load() is None

    def test_invalid_shape_is_miss(self, project_root: Path) -> None:
        """Test that JSON of the wrong shape is a miss."""
        cache = FileScanCache(project_root)
        cache.path.parent.mkdir(parents=True)
        cache.path.write_text(json.dumps({"totalPackages": "many"}), encoding="utf-8")

        assert cache.load() is None

    def test_stale_cache_is_miss(self, project_root: Path) -> None:
        """Test that a cache older than node_modules is ignored."""
        cache = FileScanCache(project_root)
        cache.save(_result())
        old = cache.path.stat().st_mtime - 100
        os.utime(cache.path, (old, old))

        assert cache.load() is None

    def test_without_install_dir_is_miss(self, tmp_path: Path) -> None:
        """Test that a cache is a miss when node_modules is missing."""
        cache = FileScanCache(tmp_path)
        cache.save(_result())

        assert cache.load() is None

    def test_removed_install_dir_is_miss(self, project_root: Path) -> None:
        """Test that deleting node_modules after saving invalidates the cache."""
        cache = FileScanCache(project_root)
        cache.save(_result())
        assert cache.load() is not None

        shutil.rmtree(project_root / "node_modules")

        assert cache.load() is None

    def test_unwritable_location_ignored(self, tmp_path: Path) -> None:
        """Test that save failures are swallowed."""
        blocker = tmp_path / "blocker"
        blocker.write_text("file", encoding="utf-8")
        cache = FileScanCache(tmp_path, path=blocker / "licenses.json")

        cache.save(_result())

        assert cache.load() is None
