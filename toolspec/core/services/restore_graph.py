"""
Restore graph reader — adapter over the restore lock artifact.

The restore step (external) pins every package to an exact version and
records which frameworks each package supports. This module reads that
record and answers one question: "is this package a restored tool, and
if so which version/framework/entry assembly?".

Absence is not an error — it yields None so another resolver can try.
A present-but-broken lock file is an error (LockFileError).
"""

from __future__ import annotations

import json
import logging
from pathlib import Path

from pydantic import ValidationError

from toolspec.core.exceptions import LockFileError
from toolspec.core.models.lock_file import LockFile
from toolspec.core.models.tool import RestoredToolReference
from toolspec.core.services.frameworks import get_nearest, to_short_name

logger = logging.getLogger(__name__)

ASSEMBLY_SUFFIXES = (".dll", ".exe")


def load_lock_file(path: Path) -> LockFile | None:
    """Load the restore lock artifact.

    Returns:
        The parsed LockFile, or None if the project has not been restored.

    Raises:
        LockFileError: If the file exists but cannot be read or parsed.
    """
    if not path.is_file():
        logger.info("No lock file at %s — project not restored", path)
        return None

    try:
        raw = path.read_text(encoding="utf-8-sig")
    except (OSError, UnicodeDecodeError) as e:
        raise LockFileError(f"Cannot read {path}: {e}") from e

    try:
        data = json.loads(raw)
    except json.JSONDecodeError as e:
        raise LockFileError(f"Invalid JSON in {path}: {e}") from e

    if not isinstance(data, dict):
        raise LockFileError(f"Expected a JSON object in {path}, got {type(data).__name__}")

    try:
        lock_file = LockFile.model_validate(data)
    except ValidationError as e:
        raise LockFileError(f"Invalid lock file {path}: {e}") from e

    logger.debug(
        "Loaded lock file %s (%d targets, %d libraries)",
        path, len(lock_file.targets), len(lock_file.libraries),
    )
    return lock_file


def _is_entry_assembly(relative_path: str, package_name: str) -> bool:
    file_name = relative_path.rsplit("/", 1)[-1]
    stem, dot, suffix = file_name.rpartition(".")
    return bool(dot) and f".{suffix.lower()}" in ASSEMBLY_SUFFIXES and stem.lower() == package_name.lower()


class RestoreGraphReader:
    """Look up restored tool packages in one project's lock file.

    Args:
        lock_file: The parsed restore lock artifact.
        host_framework: Framework the host runtime executes (short or full name).
        package_roots: Configured package roots, global cache first. Package
            folders recorded in the lock file are appended after them.
    """

    def __init__(
        self,
        lock_file: LockFile,
        host_framework: str,
        package_roots: list[str] | None = None,
    ):
        self._lock_file = lock_file
        self._host_framework = host_framework
        self._package_roots = list(package_roots or [])

    def package_roots(self) -> list[str]:
        """Candidate package roots in priority order, without duplicates."""
        roots: list[str] = []
        seen: set[str] = set()
        for root in self._package_roots + self._lock_file.ordered_package_folders():
            normalized = str(Path(root))
            if normalized not in seen:
                seen.add(normalized)
                roots.append(normalized)
        return roots

    def find_tool(self, package_id: str) -> RestoredToolReference | None:
        """Find a restored tool package by identity (case-insensitive)."""
        library_key = self._lock_file.find_library_key(package_id)
        if library_key is None:
            logger.debug("Package %s is not in the restore graph", package_id)
            return None

        name, _, version = library_key.partition("/")

        target_name = get_nearest(
            self._host_framework, self._lock_file.target_names_for(library_key)
        )
        if target_name is None:
            logger.debug(
                "Package %s has no framework compatible with %s",
                library_key, self._host_framework,
            )
            return None

        target_library = self._lock_file.get_target(target_name)[library_key]
        entry_path = next(
            (p for p in target_library.runtime_paths() if _is_entry_assembly(p, name)),
            None,
        )
        if entry_path is None:
            logger.debug("Package %s has no entry assembly named after it", library_key)
            return None

        reference = RestoredToolReference(
            package_id=name,
            version=version,
            framework=to_short_name(target_name),
            entry_path=entry_path,
            library_key=library_key,
            target_name=target_name,
            package_roots=tuple(self.package_roots()),
        )
        logger.debug(
            "Restored tool %s %s (%s) → %s",
            reference.package_id, reference.version, reference.framework, entry_path,
        )
        return reference
