"""
Resolver protocol — the contract every command resolver honours.

A resolver looks at a request and either produces a CommandSpec or
returns None ("not mine"). Resolvers are tried in order; the first
non-None answer wins. Structural failures (ToolResolutionError) are
raised and stop the chain: a referenced-but-broken tool must not fall
through to some other executable with the same name.
"""

from __future__ import annotations

import logging
from typing import Protocol, runtime_checkable

from toolspec.core.models.command_spec import CommandSpec
from toolspec.core.models.request import ToolCommandRequest

logger = logging.getLogger(__name__)


@runtime_checkable
class CommandResolver(Protocol):
    """Anything with ``resolve(request) -> CommandSpec | None``."""

    name: str

    def resolve(self, request: ToolCommandRequest) -> CommandSpec | None: ...


class CompositeCommandResolver:
    """Try resolvers in order; first non-None result wins."""

    name = "composite"

    def __init__(self, resolvers: list[CommandResolver]):
        self._resolvers = list(resolvers)

    @property
    def resolvers(self) -> list[CommandResolver]:
        return list(self._resolvers)

    def resolve(self, request: ToolCommandRequest) -> CommandSpec | None:
        for resolver in self._resolvers:
            spec = resolver.resolve(request)
            if spec is not None:
                logger.debug("%s resolved %r", resolver.name, request.command_name)
                if not spec.resolver:
                    spec.resolver = resolver.name
                return spec
        logger.debug("No resolver matched %r", request.command_name)
        return None

    def __repr__(self) -> str:
        names = ", ".join(r.name for r in self._resolvers)
        return f"<{self.__class__.__name__} [{names}]>"
