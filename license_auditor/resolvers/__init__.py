"""Package resolvers."""

from license_auditor.resolvers.base import BaseResolver
from license_auditor.resolvers.manifest import (
    LocatedFile,
    extract_repository_url,
    find_license_file,
    find_notice_file,
    read_manifest,
)
from license_auditor.resolvers.package import PackageResolver

__all__ = [
    "BaseResolver",
    "LocatedFile",
    "PackageResolver",
    "extract_repository_url",
    "find_license_file",
    "find_notice_file",
    "read_manifest",
]
