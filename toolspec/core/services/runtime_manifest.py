"""
Runtime manifest generation — the deps file the host needs to load a tool.

The shared host runtime will not load a tool assembly without a
dependency manifest describing every library in its closure. This
module synthesizes that manifest from the restore lock artifact and
writes it exactly once.

Idempotence rule: if *anything* exists at the output path, nothing is
done. The existing file is not opened, parsed or validated, even if it
is stale or unrelated. Write failures propagate: a tool cannot launch
without its manifest.
"""

from __future__ import annotations

import logging
from collections import deque
from pathlib import Path
from typing import Any, Callable

from toolspec.core.models.lock_file import LockFile, LockTargetLibrary
from toolspec.core.models.manifest import SingleProjectInfo
from toolspec.core.persistence.manifest_file import write_json_exclusive
from toolspec.core.services.frameworks import to_full_name

logger = logging.getLogger(__name__)

# (lock_file, library_key, target_name, project_info) -> manifest document
ManifestBuilder = Callable[[LockFile, str, str, SingleProjectInfo | None], dict[str, Any]]


def _find_key(target: dict[str, LockTargetLibrary], name: str) -> str | None:
    wanted = name.lower()
    for key in target:
        if key.partition("/")[0].lower() == wanted:
            return key
    return None


def collect_closure(lock_file: LockFile, library_key: str, target_name: str) -> list[str]:
    """Library keys reachable from ``library_key`` in one target, root first.

    Dependencies the target does not list are skipped with a warning.
    """
    target = lock_file.get_target(target_name)
    if library_key not in target:
        return []

    ordered: list[str] = []
    seen = {library_key}
    queue = deque([library_key])
    while queue:
        key = queue.popleft()
        ordered.append(key)
        for dep_name in target[key].dependencies:
            dep_key = _find_key(target, dep_name)
            if dep_key is None:
                logger.warning("Dependency %s of %s missing from %s", dep_name, key, target_name)
                continue
            if dep_key not in seen:
                seen.add(dep_key)
                queue.append(dep_key)
    return ordered


def _target_entry(library: LockTargetLibrary) -> dict[str, Any]:
    entry: dict[str, Any] = {}
    if library.dependencies:
        entry["dependencies"] = dict(library.dependencies)
    runtime = library.runtime_paths()
    if runtime:
        entry["runtime"] = {path: {} for path in runtime}
    if library.native:
        entry["native"] = {path: {} for path in library.native}
    if library.resource:
        entry["resources"] = {
            path: {"locale": meta.get("locale", "")}
            for path, meta in library.resource.items()
        }
    return entry


def _library_entry(lock_file: LockFile, key: str, library_type: str) -> dict[str, Any]:
    if library_type == "project":
        return {"type": "project", "serviceable": False, "sha512": ""}

    name, _, version = key.partition("/")
    library = lock_file.libraries.get(key)
    return {
        "type": "package",
        "serviceable": True,
        "sha512": f"sha512-{library.sha512}" if library and library.sha512 else "",
        "path": (library.path if library and library.path else f"{name}/{version}").lower(),
        "hashPath": f"{name.lower()}.{version.lower()}.nupkg.sha512",
    }


def build_deps_manifest(
    lock_file: LockFile,
    library_key: str,
    target_name: str,
    project_info: SingleProjectInfo | None = None,
) -> dict[str, Any]:
    """Build the runtime dependency manifest for one tool package.

    Args:
        lock_file: Restore lock artifact containing the tool.
        library_key: ``<id>/<version>`` of the tool package.
        target_name: Target key in the lock file the tool was selected for.
        project_info: Optional project wrapping the tool. When its key
            matches the tool package, its resource assemblies are merged
            into the tool's entry; otherwise it becomes a project entry
            depending on the tool.

    Returns:
        The manifest document (JSON-serializable dict).
    """
    target = lock_file.get_target(target_name)
    runtime_target = to_full_name(target_name)

    target_entries: dict[str, Any] = {}
    library_entries: dict[str, Any] = {}

    tool_name, _, tool_version = library_key.partition("/")

    if project_info is not None and project_info.library_key.lower() != library_key.lower():
        project_entry: dict[str, Any] = {"dependencies": {tool_name: tool_version}}
        if project_info.resource_assemblies:
            project_entry["resources"] = {
                r.relative_path: {"locale": r.culture} for r in project_info.resource_assemblies
            }
        target_entries[project_info.library_key] = project_entry
        library_entries[project_info.library_key] = _library_entry(
            lock_file, project_info.library_key, "project"
        )

    for key in collect_closure(lock_file, library_key, target_name):
        library = target[key]
        entry = _target_entry(library)
        if (
            key == library_key
            and project_info is not None
            and project_info.library_key.lower() == library_key.lower()
        ):
            for resource in project_info.resource_assemblies:
                entry.setdefault("resources", {})[resource.relative_path] = {
                    "locale": resource.culture
                }
        target_entries[key] = entry
        library_entries[key] = _library_entry(lock_file, key, library.type)

    return {
        "runtimeTarget": {"name": runtime_target, "signature": ""},
        "compilationOptions": {},
        "targets": {runtime_target: target_entries},
        "libraries": library_entries,
    }


class RuntimeManifestGenerator:
    """Ensure a runtime manifest exists, generating it only on true absence.

    Args:
        builder: Default manifest builder. The build orchestration layer
            may substitute its own; ``build_deps_manifest`` otherwise.
    """

    def __init__(self, builder: ManifestBuilder | None = None):
        self._builder = builder or build_deps_manifest

    def generate(
        self,
        lock_file: LockFile,
        library_key: str,
        target_name: str,
        output_path: Path,
        project_info: SingleProjectInfo | None = None,
        builder: ManifestBuilder | None = None,
    ) -> bool:
        """Write the manifest to ``output_path`` unless something is there.

        Returns:
            True if a manifest was written by this call, False if a file
            already occupied the path (before or during the call).

        Raises:
            OSError: If the manifest cannot be written.
        """
        if output_path.exists():
            logger.debug("Manifest %s already exists — leaving it alone", output_path)
            return False

        build = builder or self._builder
        document = build(lock_file, library_key, target_name, project_info)
        created = write_json_exclusive(output_path, document)
        if created:
            logger.info("Generated runtime manifest %s", output_path)
        return created
