"""
Command name matching — the single entry gate of project tool resolution.

Decides whether a request can possibly refer to a project tool and, if
so, which package identity to look for. Fails closed: anything missing
yields None, never an exception.
"""

from __future__ import annotations

import logging
from pathlib import Path

from toolspec.core.models.request import ToolCommandRequest

logger = logging.getLogger(__name__)


def has_project_descriptor(directory: Path, patterns: list[str]) -> bool:
    """Whether the directory directly contains a project file."""
    if not directory.is_dir():
        return False
    return any(
        candidate.is_file()
        for pattern in patterns
        for candidate in directory.glob(pattern)
    )


def package_id_for_command(command_name: str, tool_prefix: str) -> str:
    """Tool package identity for a command: ``portable`` → ``dotnet-portable``."""
    if tool_prefix and not command_name.lower().startswith(tool_prefix.lower()):
        return f"{tool_prefix}{command_name}"
    return command_name


def match_command_name(
    request: ToolCommandRequest,
    project_patterns: list[str],
    tool_prefix: str,
) -> str | None:
    """Derive the candidate tool package identity for a request.

    Returns:
        The package identity to look up in the restore graph, or None
        when the request cannot refer to a project tool.
    """
    if not request.command_name:
        logger.debug("No command name — not a project tool")
        return None

    if not request.project_directory:
        logger.debug("No project directory — not a project tool")
        return None

    project_dir = Path(request.project_directory)
    if not has_project_descriptor(project_dir, project_patterns):
        logger.debug("No project file in %s", project_dir)
        return None

    return package_id_for_command(request.command_name, tool_prefix)
