"""
Domain models — Pydantic types for tool resolution.

All models are re-exported here for convenient access:

    from toolspec.core.models import ToolCommandRequest, CommandSpec, ResolverConfig
"""

from toolspec.core.models.command_spec import CommandSpec
from toolspec.core.models.config import ResolverConfig
from toolspec.core.models.lock_file import LockFile, LockLibrary, LockTargetLibrary
from toolspec.core.models.manifest import ResourceAssemblyInfo, SingleProjectInfo
from toolspec.core.models.request import ToolCommandRequest
from toolspec.core.models.tool import ResolvedToolAssembly, RestoredToolReference, ToolPaths

__all__ = [
    # command_spec.py
    "CommandSpec",
    # config.py
    "ResolverConfig",
    # lock_file.py
    "LockFile",
    "LockLibrary",
    "LockTargetLibrary",
    # manifest.py
    "ResourceAssemblyInfo",
    "SingleProjectInfo",
    # request.py
    "ToolCommandRequest",
    # tool.py
    "ResolvedToolAssembly",
    "RestoredToolReference",
    "ToolPaths",
]
