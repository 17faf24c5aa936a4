"""Package manifest reader and license/notice file locators.

Every function here treats "not there" and "not readable" the same way: the
caller gets None and the scan carries on.
"""
from __future__ import annotations

import json
from pathlib import Path
from typing import Any, NamedTuple, Optional, Sequence

from license_auditor.constants import (
    LICENSE_FILE_NAMES,
    MANIFEST_FILE_NAME,
    NOTICE_FILE_NAMES,
)
from license_auditor.log import get_logger

logger = get_logger(__name__)


class LocatedFile(NamedTuple):
    """A conventional file found in a package directory.

    Attributes:
        path: Path of the file.
        text: Decoded file contents.
    """

    path: Path
    text: str


def read_manifest(package_dir: Path) -> Optional[dict[str, Any]]:
    """Read and parse ``package.json`` from a package directory.

    Args:
        package_dir: Directory that may contain a manifest.

    Returns:
        The parsed manifest, or None if it is missing, unreadable, malformed,
        or not a JSON object.
    """
    manifest_path = package_dir / MANIFEST_FILE_NAME
    try:
        content = manifest_path.read_text(encoding="utf-8")
    except FileNotFoundError:
        return None
    except (OSError, UnicodeDecodeError) as e:
        logger.debug("Cannot read %s: %s", manifest_path, e)
        return None

    try:
        data = json.loads(content)
    except json.JSONDecodeError as e:
        logger.debug("Malformed manifest %s: %s", manifest_path, e)
        return None

    if not isinstance(data, dict):
        logger.debug("Manifest %s is not a JSON object", manifest_path)
        return None
    return data


def _locate(package_dir: Path, names: Sequence[str]) -> Optional[LocatedFile]:
    for name in names:
        candidate = package_dir / name
        if not candidate.is_file():
            continue
        try:
            text = candidate.read_text(encoding="utf-8", errors="replace")
        except OSError as e:
            logger.debug("Cannot read %s: %s", candidate, e)
            return None
        return LocatedFile(path=candidate, text=text)
    return None


def find_license_file(package_dir: Path) -> Optional[LocatedFile]:
    """Locate the first conventional license file of a package.

    Args:
        package_dir: Package directory to probe.

    Returns:
        The located file, or None if none exists or it cannot be read.
    """
    return _locate(package_dir, LICENSE_FILE_NAMES)


def find_notice_file(package_dir: Path) -> Optional[LocatedFile]:
    """Locate the first conventional NOTICE file of a package."""
    return _locate(package_dir, NOTICE_FILE_NAMES)


def extract_repository_url(manifest: dict[str, Any]) -> Optional[str]:
    """Get the repository URL from a manifest.

    ``repository`` may be a plain string or an object with a ``url`` key.
    """
    repository = manifest.get("repository")
    if isinstance(repository, str):
        return repository or None
    if isinstance(repository, dict):
        url = repository.get("url")
        if isinstance(url, str) and url:
            return url
    return None
