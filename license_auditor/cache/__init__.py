"""Scan result caching."""

from license_auditor.cache.scan_cache import FileScanCache, NullScanCache, ScanCache

__all__ = ["FileScanCache", "NullScanCache", "ScanCache"]
