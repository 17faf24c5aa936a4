"""Base resolver interface."""

from abc import ABC, abstractmethod
from pathlib import Path
from typing import Optional

from license_auditor.models.scan import PackageRecord


class BaseResolver(ABC):
    """Abstract base class for package resolvers.

    A resolver turns one installed package directory into a PackageRecord.
    """

    @abstractmethod
    def resolve(self, package_dir: Path) -> Optional[PackageRecord]:
        """Resolve one package directory.

        Args:
            package_dir: Directory of an installed package.

        Returns:
            The package record, or None if the directory is not a package.
        """
