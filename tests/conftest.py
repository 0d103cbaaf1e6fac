"""
Shared test fixtures — a restored project on disk.

``restored_project`` lays out:

    <tmp>/app/App.csproj
    <tmp>/app/obj/project.assets.json      lock file naming every tool below
    <tmp>/packages/...                     global packages cache
    <tmp>/fallback/...                     one fallback folder

Tools in the lock file:
    dotnet-portable/1.0.0            in the cache, with a German resource assembly
    dotnet-PreferCliRuntime/1.0.0    in the cache, ships the prefercliruntime marker
    dotnet-fallbackfoldertool/1.0.0  only in the fallback folder
    dotnet-broken/1.0.0              restored but missing from every root
"""

from __future__ import annotations

import json
from dataclasses import dataclass
from pathlib import Path

import pytest

from toolspec.core.models.config import ResolverConfig

TARGET = ".NETCoreApp,Version=v2.2"
HOST_PATH = "/usr/share/dotnet/dotnet"


def _tool_target(name: str, dependencies: dict[str, str] | None = None) -> dict:
    return {
        "type": "package",
        "dependencies": dependencies or {},
        "runtime": {f"lib/netcoreapp2.2/{name}.dll": {}},
    }


def build_lock_data(packages_root: Path, fallback_root: Path) -> dict:
    """Lock file content describing the fixture tools."""
    portable = _tool_target("dotnet-portable", {"Newtonsoft.Json": "11.0.2"})
    portable["resource"] = {
        "lib/netcoreapp2.2/de/dotnet-portable.resources.dll": {"locale": "de"},
    }
    return {
        "version": 3,
        "targets": {
            TARGET: {
                "dotnet-portable/1.0.0": portable,
                "Newtonsoft.Json/11.0.2": {
                    "type": "package",
                    "runtime": {"lib/netstandard2.0/Newtonsoft.Json.dll": {}},
                },
                "dotnet-PreferCliRuntime/1.0.0": _tool_target("dotnet-prefercliruntime"),
                "dotnet-fallbackfoldertool/1.0.0": _tool_target("dotnet-fallbackfoldertool"),
                "dotnet-broken/1.0.0": _tool_target("dotnet-broken"),
                "Some.Library/2.0.0": {
                    "type": "package",
                    "runtime": {"lib/netstandard2.0/Some.Library.dll": {}},
                },
            },
        },
        "libraries": {
            "dotnet-portable/1.0.0": {
                "sha512": "cG9ydGFibGU=",
                "type": "package",
                "path": "dotnet-portable/1.0.0",
            },
            "Newtonsoft.Json/11.0.2": {
                "sha512": "bmV3dG9uc29mdA==",
                "type": "package",
                "path": "newtonsoft.json/11.0.2",
            },
            "dotnet-PreferCliRuntime/1.0.0": {"type": "package", "path": "dotnet-prefercliruntime/1.0.0"},
            "dotnet-fallbackfoldertool/1.0.0": {"type": "package", "path": "dotnet-fallbackfoldertool/1.0.0"},
            "dotnet-broken/1.0.0": {"type": "package", "path": "dotnet-broken/1.0.0"},
            "Some.Library/2.0.0": {"type": "package", "path": "some.library/2.0.0"},
        },
        "packageFolders": {
            f"{packages_root}/": {},
            f"{fallback_root}/": {},
        },
    }


def install_package(root: Path, package_id: str, version: str, files: list[str]) -> Path:
    """Create a package directory with empty files under a packages root."""
    package_dir = root / package_id.lower() / version.lower()
    for relative in files:
        path = package_dir / relative
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_bytes(b"MZ")
    return package_dir


@dataclass
class RestoredProject:
    """Paths and config for a restored fixture project."""

    project_dir: Path
    packages_root: Path
    fallback_root: Path
    lock_file: Path
    config: ResolverConfig


@pytest.fixture
def restored_project(tmp_path: Path) -> RestoredProject:
    """A project with restored tools and a populated package cache."""
    project_dir = tmp_path / "app"
    packages_root = tmp_path / "packages"
    fallback_root = tmp_path / "fallback"
    for d in (project_dir, packages_root, fallback_root):
        d.mkdir()

    (project_dir / "App.csproj").write_text("<Project Sdk=\"Microsoft.NET.Sdk\" />\n")

    lock_file = project_dir / "obj" / "project.assets.json"
    lock_file.parent.mkdir()
    lock_file.write_text(json.dumps(build_lock_data(packages_root, fallback_root), indent=2))

    install_package(packages_root, "dotnet-portable", "1.0.0", [
        "lib/netcoreapp2.2/dotnet-portable.dll",
        "lib/netcoreapp2.2/de/dotnet-portable.resources.dll",
    ])
    install_package(packages_root, "Newtonsoft.Json", "11.0.2", [
        "lib/netstandard2.0/Newtonsoft.Json.dll",
    ])
    prefer = install_package(packages_root, "dotnet-PreferCliRuntime", "1.0.0", [
        "lib/netcoreapp2.2/dotnet-prefercliruntime.dll",
    ])
    (prefer / "prefercliruntime").write_text("")
    install_package(fallback_root, "dotnet-fallbackfoldertool", "1.0.0", [
        "lib/netcoreapp2.2/dotnet-fallbackfoldertool.dll",
    ])

    config = ResolverConfig(
        host_path=HOST_PATH,
        global_packages_folder=str(packages_root),
        fallback_folders=[str(fallback_root)],
        host_framework="netcoreapp2.2",
        runtime_version="2.2.0",
    )
    return RestoredProject(
        project_dir=project_dir,
        packages_root=packages_root,
        fallback_root=fallback_root,
        lock_file=lock_file,
        config=config,
    )
