"""
Tool models — what the restore graph says, and what was found on disk.

A RestoredToolReference is produced once from the lock artifact and
never mutated. A ResolvedToolAssembly is the locator's answer to
"where does that package physically live?".
"""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field


class RestoredToolReference(BaseModel):
    """A tool package pinned by the restore step."""

    model_config = ConfigDict(frozen=True)

    package_id: str                 # casing as recorded in the lock artifact
    version: str                    # exact pinned version
    framework: str                  # selected TFM short name, e.g. netcoreapp2.2
    entry_path: str                 # entry assembly, relative to the package dir
    library_key: str                # "<id>/<version>" key in the lock artifact
    target_name: str = ""           # target key in the lock artifact, as written
    package_roots: tuple[str, ...] = ()  # priority order: global cache first

    @property
    def entry_assembly_name(self) -> str:
        return self.entry_path.rsplit("/", 1)[-1]


class ResolvedToolAssembly(BaseModel):
    """The physical entry assembly of a tool package."""

    assembly_path: str
    package_root: str
    package_directory: str
    prefers_host_runtime: bool = False


class ToolPaths(BaseModel):
    """Deterministic on-disk locations for one (package, version, framework)."""

    model_config = ConfigDict(frozen=True)

    package_directories: tuple[str, ...] = Field(default_factory=tuple)
    lock_file_path: str
    manifest_path: str
