"""
Tool path calculation — where a tool's files live on disk.

Pure function of (package id, version, framework): same inputs, same
paths, no filesystem access. The runtime manifest sits next to the
per-package lock data the restore step writes under ``.tools`` so that
cache cleanup finds both by the same convention.

    <packages>/.tools/<id>/<version>/<framework>/project.assets.json
    <packages>/.tools/<id>/<version>/<framework>/<id>.deps.json
"""

from __future__ import annotations

from pathlib import Path

from toolspec.core.models.tool import ToolPaths
from toolspec.core.services.frameworks import to_short_name

TOOLS_DIR = ".tools"
LOCK_FILE_NAME = "project.assets.json"
MANIFEST_SUFFIX = ".deps.json"


class ToolPathCalculator:
    """Compute deterministic tool locations under a packages root."""

    def __init__(self, packages_root: str | Path):
        self._packages_root = Path(packages_root)

    @property
    def packages_root(self) -> Path:
        return self._packages_root

    def get_tool_directory(self, package_id: str, version: str, framework: str) -> Path:
        return (
            self._packages_root
            / TOOLS_DIR
            / package_id.lower()
            / version.lower()
            / to_short_name(framework)
        )

    def get_lock_file_path(self, package_id: str, version: str, framework: str) -> Path:
        return self.get_tool_directory(package_id, version, framework) / LOCK_FILE_NAME

    def get_manifest_path(self, package_id: str, version: str, framework: str) -> Path:
        return (
            self.get_tool_directory(package_id, version, framework)
            / f"{package_id.lower()}{MANIFEST_SUFFIX}"
        )

    @staticmethod
    def get_package_directory(root: str | Path, package_id: str, version: str) -> Path:
        """Package directory inside one root (lowercase id and version)."""
        return Path(root) / package_id.lower() / version.lower()

    def get_paths(
        self,
        package_id: str,
        version: str,
        framework: str,
        package_roots: list[str] | tuple[str, ...] = (),
    ) -> ToolPaths:
        """All locations for a tool, package directories in root order."""
        return ToolPaths(
            package_directories=tuple(
                str(self.get_package_directory(root, package_id, version))
                for root in package_roots
            ),
            lock_file_path=str(self.get_lock_file_path(package_id, version, framework)),
            manifest_path=str(self.get_manifest_path(package_id, version, framework)),
        )
