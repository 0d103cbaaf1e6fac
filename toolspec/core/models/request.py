"""
Request model — what the user typed and where.
"""

from __future__ import annotations

from pydantic import BaseModel


class ToolCommandRequest(BaseModel):
    """A command invocation to resolve.

    Every field may be missing: the host CLI hands over whatever it
    parsed, and resolvers decide whether the request applies to them.
    """

    command_name: str | None = None
    command_arguments: list[str] | None = None
    project_directory: str | None = None
