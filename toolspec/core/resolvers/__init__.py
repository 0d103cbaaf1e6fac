"""
Command resolvers — ordered chain, first match wins.

    from toolspec.core.resolvers import default_resolver

    spec = default_resolver(config).resolve(request)
"""

from __future__ import annotations

from toolspec.core.models.config import ResolverConfig
from toolspec.core.resolvers.base import CommandResolver, CompositeCommandResolver
from toolspec.core.resolvers.path import PathCommandResolver
from toolspec.core.resolvers.project_tools import ProjectToolsCommandResolver


def default_resolver(
    config: ResolverConfig,
    include_path: bool = True,
) -> CompositeCommandResolver:
    """Project tools first, then (optionally) executables on PATH."""
    resolvers: list[CommandResolver] = [ProjectToolsCommandResolver(config)]
    if include_path:
        resolvers.append(PathCommandResolver())
    return CompositeCommandResolver(resolvers)


__all__ = [
    "CommandResolver",
    "CompositeCommandResolver",
    "PathCommandResolver",
    "ProjectToolsCommandResolver",
    "default_resolver",
]
