"""
Manifest inputs — the project description fed to manifest generation.
"""

from __future__ import annotations

from pydantic import BaseModel, Field


class ResourceAssemblyInfo(BaseModel):
    """A localized satellite assembly shipped with the project."""

    culture: str
    relative_path: str


class SingleProjectInfo(BaseModel):
    """The project a runtime manifest is generated for."""

    name: str
    version: str
    resource_assemblies: list[ResourceAssemblyInfo] = Field(default_factory=list)

    @property
    def library_key(self) -> str:
        return f"{self.name}/{self.version}"
