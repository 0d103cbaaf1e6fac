"""
Configuration loader — builds a ResolverConfig from file and environment.

This is the only place environment variables are read for resolution.
Sources are layered, later wins:

    defaults  <  toolspec.yml  <  environment  <  explicit overrides (CLI)
"""

from __future__ import annotations

import logging
import os
from pathlib import Path
from typing import Any, Mapping

import yaml
from pydantic import ValidationError

from toolspec.core.models.config import ResolverConfig

logger = logging.getLogger(__name__)

# Default config filename
CONFIG_FILE = "toolspec.yml"

# Environment variable → ResolverConfig field
ENV_FIELDS: dict[str, str] = {
    "DOTNET_HOST_PATH": "host_path",
    "DOTNET_ROOT": "sdk_root",
    "NUGET_PACKAGES": "global_packages_folder",
    "TOOLSPEC_HOST_FRAMEWORK": "host_framework",
    "TOOLSPEC_RUNTIME_VERSION": "runtime_version",
    "TOOLSPEC_LOCALE": "locale",
}
FALLBACK_FOLDERS_ENV = "NUGET_FALLBACK_PACKAGES"


class ConfigError(Exception):
    """Raised when resolver configuration is invalid."""


def find_config_file(start_dir: Path | None = None) -> Path | None:
    """Search for toolspec.yml starting from the given directory, walking up.

    Args:
        start_dir: Directory to start searching from (default: cwd).

    Returns:
        Path to toolspec.yml, or None if not found.
    """
    current = (start_dir or Path.cwd()).resolve()

    for _ in range(20):  # safety limit
        candidate = current / CONFIG_FILE
        if candidate.is_file():
            return candidate
        parent = current.parent
        if parent == current:
            break  # filesystem root
        current = parent

    return None


def read_config_file(path: Path) -> dict[str, Any]:
    """Read a toolspec.yml mapping.

    Raises:
        ConfigError: If the file is missing, unreadable, or not a mapping.
    """
    if not path.is_file():
        raise ConfigError(f"Config file not found: {path}")

    logger.debug("Loading resolver config from %s", path)

    try:
        raw = path.read_text(encoding="utf-8")
    except OSError as e:
        raise ConfigError(f"Cannot read {path}: {e}") from e

    try:
        data = yaml.safe_load(raw)
    except yaml.YAMLError as e:
        raise ConfigError(f"Invalid YAML in {path}: {e}") from e

    if data is None:
        return {}
    if not isinstance(data, dict):
        raise ConfigError(f"Expected a YAML mapping in {path}, got {type(data).__name__}")

    # The file may wrap everything under a "toolspec" key or be flat
    section = data.get("toolspec", data)
    if not isinstance(section, dict):
        raise ConfigError(f"Expected 'toolspec' to be a mapping in {path}")
    return dict(section)


def config_from_environ(environ: Mapping[str, str]) -> dict[str, Any]:
    """Extract config values from environment variables. Empty values are ignored."""
    values: dict[str, Any] = {}
    for var, field in ENV_FIELDS.items():
        value = environ.get(var)
        if value:
            values[field] = value

    fallback = environ.get(FALLBACK_FOLDERS_ENV)
    if fallback:
        values["fallback_folders"] = [p for p in fallback.split(os.pathsep) if p]

    return values


def load_config(
    path: Path | None = None,
    start_dir: Path | None = None,
    environ: Mapping[str, str] | None = None,
    overrides: Mapping[str, Any] | None = None,
) -> ResolverConfig:
    """Load and validate resolver configuration.

    Args:
        path: Explicit path to toolspec.yml. If None, searches upward from
            ``start_dir``; a missing file is fine.
        start_dir: Where the upward search starts (default: cwd).
        environ: Environment mapping (pass ``os.environ`` at the boundary).
            None means the environment is not consulted.
        overrides: Highest-precedence values (CLI flags). None values skip.

    Raises:
        ConfigError: If the file or the merged values are invalid.
    """
    values: dict[str, Any] = {}

    if path is None:
        path = find_config_file(start_dir)
    if path is not None:
        values.update(read_config_file(path))

    if environ is not None:
        values.update(config_from_environ(environ))

    if overrides:
        values.update({k: v for k, v in overrides.items() if v is not None})

    try:
        config = ResolverConfig.model_validate(values)
    except ValidationError as e:
        raise ConfigError(f"Invalid resolver configuration: {e}") from e

    logger.debug(
        "Resolver config: host=%s framework=%s roots=%s",
        config.host_path or "(auto)", config.host_framework, config.package_roots(),
    )
    return config
