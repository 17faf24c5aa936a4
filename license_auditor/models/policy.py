"""Policy-related Pydantic models for license-auditor."""

from __future__ import annotations

from pydantic import BaseModel, Field
from pydantic.alias_generators import to_camel


class PolicyViolation(BaseModel):
    """Why a package was flagged by the active classification policy."""

    model_config = {
        "extra": "forbid",
        "alias_generator": to_camel,
        "populate_by_name": True,
    }

    package_name: str = Field(description="Name of the flagged package")
    package_version: str = Field(description="Version of the package")
    detected_license: str = Field(
        description="Canonical license expression of the package",
    )
    reason: str = Field(description="Why this package was flagged")
