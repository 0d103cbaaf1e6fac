"""
Resolve use case — turn a typed command into a CommandSpec for the CLI.

Wraps the resolver chain and converts its outcomes into a result the UI
can print: a spec, "no match", or a structural failure message. Never
raises for expected failures.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from pathlib import Path

from toolspec.core.exceptions import ToolResolutionError
from toolspec.core.models.command_spec import CommandSpec
from toolspec.core.models.config import ResolverConfig
from toolspec.core.models.request import ToolCommandRequest
from toolspec.core.resolvers import default_resolver
from toolspec.core.services.messages import NO_TOOL_FOUND, get_message

logger = logging.getLogger(__name__)


@dataclass
class ResolveResult:
    """Result of resolving one command."""

    command_name: str = ""
    spec: CommandSpec | None = None
    error: str | None = None
    error_kind: str | None = None   # "no_match" | "resolution" | "io"

    @property
    def ok(self) -> bool:
        return self.spec is not None

    def to_dict(self) -> dict:
        result: dict = {"command": self.command_name}
        if self.error:
            result["error"] = self.error
            result["error_kind"] = self.error_kind
            return result
        if self.spec:
            result["spec"] = self.spec.to_dict()
        return result


def resolve_command(
    command_name: str | None,
    arguments: list[str] | None,
    project_directory: Path | None,
    config: ResolverConfig,
    include_path: bool = True,
) -> ResolveResult:
    """Resolve a command inside a project directory.

    Args:
        command_name: Command as typed by the user.
        arguments: User arguments for the tool.
        project_directory: Directory holding the project (default: cwd).
        config: Resolver configuration.
        include_path: Also try executables on PATH after project tools.
    """
    result = ResolveResult(command_name=command_name or "")

    request = ToolCommandRequest(
        command_name=command_name,
        command_arguments=list(arguments) if arguments is not None else None,
        project_directory=str(project_directory or Path.cwd()),
    )

    try:
        spec = default_resolver(config, include_path=include_path).resolve(request)
    except ToolResolutionError as e:
        result.error = str(e)
        result.error_kind = "resolution"
        return result
    except OSError as e:
        logger.error("I/O failure resolving %s: %s", command_name, e)
        result.error = f"Cannot prepare {command_name}: {e}"
        result.error_kind = "io"
        return result

    if spec is None:
        result.error = get_message(NO_TOOL_FOUND, config.locale, command=command_name or "")
        result.error_kind = "no_match"
        return result

    result.spec = spec
    return result
