"""Pod specification schema - the resolved metadata the installer consumes.

The resolver produces these; the installer only reads them. Parsing the podspec
DSL is out of scope, but the JSON form stored in the sandbox round-trips here.
"""

import json
from pathlib import Path

from pydantic import BaseModel
from pydantic import ConfigDict
from pydantic import Field
from pydantic import field_validator

SourceOptions = dict[str, str | bool]


class Specification(BaseModel):
    """
    A resolved pod specification (root spec or subspec variant).

    Subspecs point at their parent and are named ``Root/Sub``. All variants of a
    pod share the same root, which carries the declared source.
    """

    model_config = ConfigDict(frozen=True)

    name: str
    version: str

    # Protocol tag -> value, e.g. {"git": "https://...", "tag": "1.0.0"}
    source: SourceOptions | None = None

    # Glob patterns relative to the pod directory
    source_files: list[str] = Field(default_factory=list)

    parent: "Specification | None" = None

    @field_validator("source_files", mode="before")
    @classmethod
    def _coerce_source_files(cls, value: object) -> object:
        # podspec.json allows a single pattern string
        if isinstance(value, str):
            return [value]
        return value

    @property
    def root(self) -> "Specification":
        """Root specification of this variant (itself for a root spec)."""
        if self.parent is None:
            return self
        return self.parent.root

    def subspec(self, name: str, source_files: list[str] | None = None) -> "Specification":
        """Create a subspec variant of this specification.

        Args:
            name: Subspec name without the parent prefix (e.g. "Core")
            source_files: Glob patterns for the subspec's own source files

        Returns:
            Specification named ``<parent>/<name>`` whose root is this spec's root
        """
        return Specification(
            name=f"{self.name}/{name}",
            version=self.version,
            source_files=source_files or [],
            parent=self,
        )

    def to_json(self) -> str:
        """Serialize for storage in the sandbox."""
        return self.model_dump_json(indent=2, exclude_none=True)

    @classmethod
    def from_json_file(cls, spec_path: Path) -> "Specification":
        """
        Load a specification from a podspec.json file.

        Args:
            spec_path: Path to the JSON file

        Returns:
            Specification instance

        Raises:
            FileNotFoundError: If the file doesn't exist
            json.JSONDecodeError: If the file is not valid JSON
            pydantic.ValidationError: If required fields are missing
        """
        if not spec_path.exists():
            raise FileNotFoundError(f"podspec not found: {spec_path}")

        with open(spec_path) as f:
            data = json.load(f)

        return cls.model_validate(data)


class InstallerOptions(BaseModel):
    """Installer policy knobs injected by the driving app."""

    model_config = ConfigDict(frozen=True)

    # Whether the downloader may serve or populate its cache
    can_cache: bool = True

    # Transport schemes that send the source in clear text
    unencrypted_schemes: frozenset[str] = frozenset({"http", "git"})

    # Hosts exempt from the unencrypted transport warning
    trusted_hosts: frozenset[str] = frozenset({"localhost"})
