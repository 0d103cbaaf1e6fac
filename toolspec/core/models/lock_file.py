"""
Lock file models — a typed view of the restore lock artifact.

Only the parts the resolver reads are modelled. Unknown keys are
ignored so newer restore outputs still load.

Layout (NuGet assets format)::

    {
      "version": 3,
      "targets": {
        ".NETCoreApp,Version=v2.2": {
          "dotnet-portable/1.0.0": {
            "type": "package",
            "dependencies": {"Newtonsoft.Json": "11.0.2"},
            "runtime": {"lib/netcoreapp2.2/dotnet-portable.dll": {}},
            "resource": {"lib/netcoreapp2.2/de/dotnet-portable.resources.dll": {"locale": "de"}}
          }
        }
      },
      "libraries": {"dotnet-portable/1.0.0": {"sha512": "…", "type": "package", "path": "dotnet-portable/1.0.0"}},
      "packageFolders": {"/home/me/.nuget/packages/": {}}
    }
"""

from __future__ import annotations

from typing import Any

from pydantic import BaseModel, ConfigDict, Field


class LockTargetLibrary(BaseModel):
    """One library's assets within one target framework."""

    type: str = "package"
    dependencies: dict[str, str] = Field(default_factory=dict)
    runtime: dict[str, dict[str, Any]] = Field(default_factory=dict)
    resource: dict[str, dict[str, Any]] = Field(default_factory=dict)
    native: dict[str, dict[str, Any]] = Field(default_factory=dict)

    def runtime_paths(self) -> list[str]:
        """Runtime assembly paths, skipping the ``_._`` placeholder."""
        return [p for p in self.runtime if not p.endswith("/_._")]


class LockLibrary(BaseModel):
    """Framework-independent metadata about a restored library."""

    type: str = "package"
    sha512: str = ""
    path: str = ""
    serviceable: bool = False
    files: list[str] = Field(default_factory=list)


class LockFile(BaseModel):
    """The restore lock artifact for one project."""

    model_config = ConfigDict(populate_by_name=True)

    version: int = 3
    targets: dict[str, dict[str, LockTargetLibrary]] = Field(default_factory=dict)
    libraries: dict[str, LockLibrary] = Field(default_factory=dict)
    package_folders: dict[str, dict[str, Any]] = Field(
        default_factory=dict, alias="packageFolders"
    )

    def find_library_key(self, package_id: str) -> str | None:
        """Find the ``<id>/<version>`` key for a package, ignoring case."""
        wanted = package_id.lower()
        for key in self.libraries:
            name, _, _ = key.partition("/")
            if name.lower() == wanted:
                return key
        for target in self.targets.values():
            for key in target:
                name, _, _ = key.partition("/")
                if name.lower() == wanted:
                    return key
        return None

    def target_names_for(self, library_key: str) -> list[str]:
        """Target names (RID-less) in which the library appears."""
        return [
            name
            for name, libs in self.targets.items()
            if "/" not in name and library_key in libs
        ]

    def get_target(self, target_name: str) -> dict[str, LockTargetLibrary]:
        return self.targets.get(target_name, {})

    def ordered_package_folders(self) -> list[str]:
        return list(self.package_folders.keys())
