"""
PATH resolver — fall back to an executable of the same name on PATH.

Tried after project tools, so a restored tool always shadows a global
install of the same command.
"""

from __future__ import annotations

import logging
import shutil

from toolspec.core.models.command_spec import CommandSpec
from toolspec.core.models.request import ToolCommandRequest
from toolspec.core.services.command_spec import escape_arguments

logger = logging.getLogger(__name__)


class PathCommandResolver:
    """Resolve a bare command name through ``shutil.which``."""

    name = "path"

    def __init__(self, search_path: str | None = None):
        self._search_path = search_path

    def resolve(self, request: ToolCommandRequest) -> CommandSpec | None:
        if not request.command_name:
            return None

        executable = shutil.which(request.command_name, path=self._search_path)
        if executable is None:
            logger.debug("%s not found on PATH", request.command_name)
            return None

        return CommandSpec(
            path=executable,
            args=escape_arguments(request.command_arguments),
            resolver=self.name,
        )
