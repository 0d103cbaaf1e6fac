"""
Project tools resolver — the façade over the resolution pipeline.

    request
      → match_command_name        (NoMatch if name/dir/project file missing)
      → RestoreGraphReader        (NoMatch if package not restored)
      → ToolPathCalculator
      → ToolPackageLocator        (AssemblyMissing → CommandAssembliesNotFoundError)
      → RuntimeManifestGenerator  (no-op if the manifest slot is occupied)
      → build_command_spec        (SpecReady)
"""

from __future__ import annotations

import logging
from pathlib import Path

from toolspec.core.models.command_spec import CommandSpec
from toolspec.core.models.config import ResolverConfig
from toolspec.core.models.manifest import SingleProjectInfo
from toolspec.core.models.request import ToolCommandRequest
from toolspec.core.services.command_name import match_command_name
from toolspec.core.services.command_spec import build_command_spec
from toolspec.core.services.package_locator import ToolPackageLocator
from toolspec.core.services.restore_graph import RestoreGraphReader, load_lock_file
from toolspec.core.services.runtime_manifest import ManifestBuilder, RuntimeManifestGenerator
from toolspec.core.services.tool_paths import ToolPathCalculator

logger = logging.getLogger(__name__)


class ProjectToolsCommandResolver:
    """Resolve commands provided by a project's restored tool packages.

    Args:
        config: Explicit resolver configuration.
        manifest_builder: Optional replacement for the default manifest
            builder (supplied by build orchestration).
    """

    name = "project-tools"

    def __init__(
        self,
        config: ResolverConfig,
        manifest_builder: ManifestBuilder | None = None,
    ):
        self._config = config
        self._locator = ToolPackageLocator(locale=config.locale)
        self._manifests = RuntimeManifestGenerator(manifest_builder)
        self._paths = ToolPathCalculator(config.global_packages_folder)

    @property
    def config(self) -> ResolverConfig:
        return self._config

    def resolve(self, request: ToolCommandRequest) -> CommandSpec | None:
        """Resolve a request to a CommandSpec, or None if it is not a project tool.

        Raises:
            CommandAssembliesNotFoundError: The tool is restored but its
                assembly is missing from every package root.
            LockFileError: The project's lock file is unreadable.
            OSError: The runtime manifest could not be written.
        """
        package_id = match_command_name(
            request, self._config.project_patterns, self._config.tool_prefix
        )
        if package_id is None:
            return None
        assert request.command_name is not None
        assert request.project_directory is not None

        lock_file = load_lock_file(self._config.lock_file_path(Path(request.project_directory)))
        if lock_file is None:
            return None

        reader = RestoreGraphReader(
            lock_file,
            host_framework=self._config.host_framework,
            package_roots=self._config.package_roots(),
        )
        reference = reader.find_tool(package_id)
        if reference is None:
            return None

        paths = self._paths.get_paths(
            reference.package_id,
            reference.version,
            reference.framework,
            reference.package_roots,
        )

        assembly = self._locator.locate(reference, paths.package_directories)

        manifest_path = Path(paths.manifest_path)
        self._manifests.generate(
            lock_file,
            reference.library_key,
            reference.target_name,
            manifest_path,
            project_info=SingleProjectInfo(name=reference.package_id, version=reference.version),
        )

        spec = build_command_spec(
            self._config.resolved_host_path(),
            assembly,
            request.command_name,
            request.command_arguments,
            manifest_path=str(manifest_path),
            probing_paths=reference.package_roots,
            runtime_version=self._config.runtime_version,
        )
        spec.resolver = self.name
        logger.info(
            "Resolved %s → %s %s (%s)",
            request.command_name, reference.package_id, reference.version, reference.framework,
        )
        return spec
