"""
Resolver configuration — everything the core needs from the outside world.

Core services never read environment variables. The CLI (or any other
entry point) builds a ResolverConfig once and passes it in.
"""

from __future__ import annotations

import shutil
from pathlib import Path

from pydantic import BaseModel, Field, field_validator

from toolspec.core.services.frameworks import parse_framework

HOST_EXECUTABLE = "dotnet"


class ResolverConfig(BaseModel):
    """Explicit configuration for project tool resolution."""

    host_path: str | None = None        # shared host launcher; derived when unset
    sdk_root: str | None = None
    host_framework: str = "netcoreapp2.2"
    runtime_version: str | None = None  # passed as --fx-version when a tool asks for it

    global_packages_folder: str = Field(
        default_factory=lambda: str(Path.home() / ".nuget" / "packages")
    )
    fallback_folders: list[str] = Field(default_factory=list)

    tool_prefix: str = "dotnet-"
    project_patterns: list[str] = Field(default_factory=lambda: ["*.*proj"])
    restore_output_dir: str = "obj"
    lock_file_name: str = "project.assets.json"

    locale: str | None = None

    @field_validator("host_framework")
    @classmethod
    def validate_host_framework(cls, v: str) -> str:
        """Reject monikers the framework parser does not recognise."""
        if parse_framework(v) is None:
            raise ValueError(f"unrecognised target framework {v!r}")
        return v

    @field_validator("global_packages_folder")
    @classmethod
    def expand_packages_folder(cls, v: str) -> str:
        return str(Path(v).expanduser())

    @field_validator("fallback_folders")
    @classmethod
    def expand_fallback_folders(cls, v: list[str]) -> list[str]:
        return [str(Path(folder).expanduser()) for folder in v]

    def package_roots(self) -> list[str]:
        """Configured package roots in search order."""
        roots = [self.global_packages_folder]
        for folder in self.fallback_folders:
            if folder not in roots:
                roots.append(folder)
        return roots

    def resolved_host_path(self) -> str:
        """Host launcher path: explicit, then under sdk_root, then PATH."""
        if self.host_path:
            return self.host_path
        if self.sdk_root:
            return str(Path(self.sdk_root) / HOST_EXECUTABLE)
        return shutil.which(HOST_EXECUTABLE) or HOST_EXECUTABLE

    def lock_file_path(self, project_directory: Path) -> Path:
        return project_directory / self.restore_output_dir / self.lock_file_name
