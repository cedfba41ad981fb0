"""Podfile dependency declarations (read-only input to the installer)."""

from pydantic import BaseModel
from pydantic import ConfigDict
from pydantic import Field

from .schema import SourceOptions


class Dependency(BaseModel):
    """A dependency declared by the user."""

    model_config = ConfigDict(frozen=True)

    name: str
    requirement: str | None = None

    # e.g. {"podspec": "https://..."} or {"path": "../MyLib"}; None for registry lookups
    external_source: SourceOptions | None = None

    @property
    def is_external(self) -> bool:
        """Whether the specification comes from a direct reference instead of a registry."""
        return bool(self.external_source)


class Podfile(BaseModel):
    """Ordered collection of dependency declarations."""

    model_config = ConfigDict(frozen=True)

    dependencies: list[Dependency] = Field(default_factory=list)

    def external_dependency_names(self) -> set[str]:
        """Names of dependencies declared with an external source."""
        return {dependency.name for dependency in self.dependencies if dependency.is_external}
