"""
Tool package locator — find the physical entry assembly.

Candidate roots are searched in priority order (global packages cache,
then fallback folders in configured order); the first root whose package
directory holds the entry assembly wins.

If the restore graph says the package exists but no root contains it,
that is a broken install, not "not a tool": the locator raises
CommandAssembliesNotFoundError with a localized, user-facing message.
"""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Sequence

from toolspec.core.exceptions import CommandAssembliesNotFoundError
from toolspec.core.models.tool import ResolvedToolAssembly, RestoredToolReference
from toolspec.core.services.messages import COMMAND_ASSEMBLIES_NOT_FOUND, get_message
from toolspec.core.services.tool_paths import ToolPathCalculator

logger = logging.getLogger(__name__)

# Marker file a tool package ships to ask for the host's own runtime version
PREFER_HOST_RUNTIME_MARKER = "prefercliruntime"


class ToolPackageLocator:
    """Search package roots for a restored tool's entry assembly."""

    def __init__(self, locale: str | None = None):
        self._locale = locale

    def locate(
        self,
        reference: RestoredToolReference,
        package_directories: Sequence[str] | None = None,
    ) -> ResolvedToolAssembly:
        """Return the first root holding the tool's entry assembly.

        Args:
            reference: The restored tool to find.
            package_directories: Package directory inside each of
                ``reference.package_roots``, same order (``ToolPaths``).
                Derived from the roots when omitted.

        Raises:
            CommandAssembliesNotFoundError: If no candidate root has it.
        """
        if package_directories is None:
            package_directories = [
                str(ToolPathCalculator.get_package_directory(root, reference.package_id, reference.version))
                for root in reference.package_roots
            ]

        searched: list[str] = []

        for root, directory in zip(reference.package_roots, package_directories):
            package_dir = Path(directory)
            assembly = package_dir / Path(reference.entry_path)
            searched.append(str(assembly))

            if not assembly.is_file():
                logger.debug("Not in %s", package_dir)
                continue

            prefers_host_runtime = (package_dir / PREFER_HOST_RUNTIME_MARKER).is_file()
            logger.debug(
                "Found %s in %s (prefer host runtime: %s)",
                reference.entry_assembly_name, root, prefers_host_runtime,
            )
            return ResolvedToolAssembly(
                assembly_path=str(assembly.resolve()),
                package_root=root,
                package_directory=str(package_dir),
                prefers_host_runtime=prefers_host_runtime,
            )

        message = get_message(
            COMMAND_ASSEMBLIES_NOT_FOUND, self._locale, package_id=reference.package_id
        )
        logger.debug("%s Searched: %s", message, ", ".join(searched) or "(no package roots)")
        raise CommandAssembliesNotFoundError(reference.package_id, message, searched)
