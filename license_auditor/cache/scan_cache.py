"""On-disk cache of raw scan results.

The cache is a convenience for offline runs and repeated notice generation.
Loading and saving are best-effort: any failure behaves like a cache miss.
"""
from __future__ import annotations

import json
from abc import ABC, abstractmethod
from pathlib import Path
from typing import Optional

from pydantic import ValidationError

from license_auditor.constants import CACHE_DIR_NAME, CACHE_FILE_NAME, INSTALL_DIR_NAME
from license_auditor.log import get_logger
from license_auditor.models.scan import ScanResult

logger = get_logger(__name__)


class ScanCache(ABC):
    """Port for persisting raw scan results between runs."""

    @abstractmethod
    def load(self) -> Optional[ScanResult]:
        """Return the cached result, or None on a miss."""

    @abstractmethod
    def save(self, result: ScanResult) -> None:
        """Store a result. Failures are logged, never raised."""


class NullScanCache(ScanCache):
    """Cache that never hits and never stores."""

    def load(self) -> Optional[ScanResult]:
        return None

    def save(self, result: ScanResult) -> None:
        return None


class FileScanCache(ScanCache):
    """JSON file cache under ``<root>/.license-auditor/licenses.json``.

    A cache file older than the install directory, or one left behind after
    the install directory was removed, is treated as stale.
    """

    def __init__(self, root: Path, path: Optional[Path] = None) -> None:
        """Initialize the cache for a project.

        Args:
            root: Project root containing the install directory.
            path: Cache file location. Defaults to the conventional path
                under ``root``.
        """
        self._root = root
        self._path = path or root / CACHE_DIR_NAME / CACHE_FILE_NAME

    @property
    def path(self) -> Path:
        return self._path

    def _is_stale(self) -> bool:
        # a removed install directory invalidates whatever was cached for it
        install_dir = self._root / INSTALL_DIR_NAME
        try:
            return install_dir.stat().st_mtime > self._path.stat().st_mtime
        except OSError:
            return True

    def load(self) -> Optional[ScanResult]:
        if not self._path.is_file():
            return None
        if self._is_stale():
            logger.debug("Ignoring stale scan cache %s", self._path)
            return None
        try:
            data = json.loads(self._path.read_text(encoding="utf-8"))
            result = ScanResult.model_validate(data)
        except (OSError, json.JSONDecodeError, ValidationError) as e:
            logger.debug("Ignoring unusable scan cache %s: %s", self._path, e)
            return None
        logger.debug("Loaded %d packages from %s", result.total_packages, self._path)
        return result

    def save(self, result: ScanResult) -> None:
        try:
            self._path.parent.mkdir(parents=True, exist_ok=True)
            self._path.write_text(
                json.dumps(result.to_json_dict(), indent=2), encoding="utf-8"
            )
        except OSError as e:
            logger.debug("Cannot write scan cache %s: %s", self._path, e)
            return
        logger.debug("Wrote scan cache %s", self._path)
