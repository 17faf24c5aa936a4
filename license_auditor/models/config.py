"""Configuration Pydantic models for license-auditor."""
from __future__ import annotations

from typing import Dict, List, Optional

from pydantic import BaseModel, Field


class LicenseOverride(BaseModel):
    """Manual license override for a package.

    Used when the declared license is missing or wrong in the package manifest.
    """

    model_config = {"extra": "forbid"}

    license: str = Field(description="Canonical license expression to use")
    reason: str = Field(description="Reason for the override")


class AuditorConfig(BaseModel):
    """Configuration for license-auditor.

    All policy fields are optional with None defaults to allow partial
    configuration.
    """

    model_config = {"extra": "forbid"}

    allowed_licenses: Optional[List[str]] = Field(
        default=None,
        description="Canonical license expressions considered acceptable. "
        "When set, packages with other licenses are flagged as problematic.",
    )
    ignored_packages: Optional[List[str]] = Field(
        default=None,
        description="Package names to leave out of the scan result.",
    )
    overrides: Optional[Dict[str, LicenseOverride]] = Field(
        default=None,
        description="Manual license overrides by package name.",
    )
    include_types: bool = Field(
        default=False,
        description="Count @types/* packages in license statistics.",
    )
