"""Configuration file discovery and loading for license-auditor."""
from __future__ import annotations

from pathlib import Path
from typing import Any, Optional

import yaml
from pydantic import ValidationError

from license_auditor.config.defaults import DEFAULT_CONFIG_NAMES, get_default_config
from license_auditor.exceptions import ConfigurationError
from license_auditor.log import get_logger
from license_auditor.models.config import AuditorConfig

logger = get_logger(__name__)


def find_config_file(project_root: Optional[Path] = None) -> Optional[Path]:
    """Find the configuration file of a project.

    `.license-auditor.yaml` wins over `.license-auditor.yml`.

    Args:
        project_root: Directory to search. Defaults to the working directory.

    Returns:
        Path to the configuration file, or None if there is none.
    """
    root = project_root or Path.cwd()
    for name in DEFAULT_CONFIG_NAMES:
        candidate = root / name
        if candidate.is_file():
            return candidate
    return None


def load_config_file(path: Path) -> AuditorConfig:
    """Load and validate configuration from a YAML file.

    Args:
        path: Path to the configuration file.

    Returns:
        Validated AuditorConfig instance.

    Raises:
        ConfigurationError: If the file cannot be read, is not valid YAML,
            is not a mapping, or fails validation.
    """
    try:
        content = path.read_text(encoding="utf-8")
    except OSError as e:
        raise ConfigurationError(
            f"Cannot read configuration file '{path}': {e}"
        ) from e

    try:
        data: Any = yaml.safe_load(content)
    except yaml.YAMLError as e:
        raise ConfigurationError(f"Invalid YAML syntax in '{path}': {e}") from e

    # Empty file or only comments
    if data is None:
        return get_default_config()

    if not isinstance(data, dict):
        raise ConfigurationError(
            f"Invalid configuration in '{path}': "
            f"expected a mapping at root level, got {type(data).__name__}"
        )

    try:
        config = AuditorConfig.model_validate(data)
    except ValidationError as e:
        raise ConfigurationError(
            f"Invalid configuration in '{path}': {_format_validation_errors(e)}"
        ) from e

    logger.debug("Loaded configuration from %s", path)
    return config


def _format_validation_errors(error: ValidationError) -> str:
    parts = []
    for err in error.errors():
        loc = ".".join(str(x) for x in err["loc"]) if err["loc"] else "root"
        parts.append(f"{loc}: {err['msg']}")
    return "; ".join(parts)


def load_config(
    config_path: Optional[str] = None,
    project_root: Optional[Path] = None,
) -> AuditorConfig:
    """Load configuration from an explicit file, the project root, or defaults.

    Args:
        config_path: Explicit configuration file. Must exist and be valid.
        project_root: Directory searched when no explicit path is given.

    Returns:
        AuditorConfig with loaded or default values.

    Raises:
        ConfigurationError: If the chosen configuration file is invalid.
    """
    if config_path is not None:
        return load_config_file(Path(config_path))

    discovered = find_config_file(project_root)
    if discovered is not None:
        return load_config_file(discovered)

    return get_default_config()
