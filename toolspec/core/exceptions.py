"""
Resolution errors.

Non-applicability ("this command is not a project tool") is never an
exception: resolvers return None so the next resolver in a chain can try.
The exceptions here are structural failures that must stop the command.
"""

from __future__ import annotations


class ToolResolutionError(Exception):
    """Base class for failures that abort command resolution."""


class CommandAssembliesNotFoundError(ToolResolutionError):
    """The restore graph references the tool but no package root holds its assembly."""

    def __init__(self, package_id: str, message: str, searched: list[str] | None = None):
        super().__init__(message)
        self.package_id = package_id
        self.searched = searched or []


class LockFileError(ToolResolutionError):
    """The restore lock artifact exists but cannot be read or parsed."""
