"""Resolver for installed npm package directories."""
from __future__ import annotations

from pathlib import Path
from typing import Any, Optional

from license_auditor.constants import UNKNOWN_LICENSE
from license_auditor.log import get_logger
from license_auditor.models.scan import PackageRecord
from license_auditor.normalizer import LicenseGrammarService, normalize_license
from license_auditor.resolvers.base import BaseResolver
from license_auditor.resolvers.manifest import (
    extract_repository_url,
    find_license_file,
    find_notice_file,
    read_manifest,
)

logger = get_logger(__name__)

DEFAULT_VERSION = "0.0.0"


def _non_empty_str(value: Any) -> Optional[str]:
    if isinstance(value, str) and value.strip():
        return value.strip()
    return None


class PackageResolver(BaseResolver):
    """Build a PackageRecord from a package directory's manifest and files.

    The resolver only reads from its own package directory, so separate
    directories can be resolved concurrently.
    """

    def __init__(self, grammar: Optional[LicenseGrammarService] = None) -> None:
        """Initialize the resolver.

        Args:
            grammar: Grammar service passed to the normalizer. Defaults to the
                process-wide service.
        """
        self._grammar = grammar

    def resolve(self, package_dir: Path) -> Optional[PackageRecord]:
        """Resolve license information for one package directory.

        Args:
            package_dir: Directory of an installed package.

        Returns:
            The package record, or None when the directory has no usable
            manifest.
        """
        manifest = read_manifest(package_dir)
        if manifest is None:
            logger.debug("Skipping %s: no package manifest", package_dir)
            return None

        raw_license = manifest.get("license") or manifest.get("licenses")
        license_file = find_license_file(package_dir)
        notice_file = find_notice_file(package_dir)

        return PackageRecord(
            name=_non_empty_str(manifest.get("name")) or package_dir.name,
            version=_non_empty_str(manifest.get("version")) or DEFAULT_VERSION,
            license=normalize_license(raw_license or UNKNOWN_LICENSE, self._grammar),
            repository_url=extract_repository_url(manifest),
            is_private=bool(manifest.get("private")),
            license_file_path=str(license_file.path) if license_file else None,
            license_file_text=license_file.text if license_file else None,
            notice_file_text=notice_file.text if notice_file else None,
            directory_path=str(package_dir),
        )
