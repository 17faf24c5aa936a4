"""Default configuration values for license-auditor."""

from __future__ import annotations

from license_auditor.models.config import AuditorConfig

# Configuration file names searched for in the project root
DEFAULT_CONFIG_NAMES = [".license-auditor.yaml", ".license-auditor.yml"]


def get_default_config() -> AuditorConfig:
    """Get the default configuration.

    Returns:
        AuditorConfig with no policy fields set.
    """
    return AuditorConfig()
