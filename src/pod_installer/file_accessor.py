"""Glob-based file accessor for specification variants.

Convention: a variant's ``source_files`` are glob patterns relative to the pod
directory (``Classes/**/*.{h,m}`` style braces are expanded).
"""

import re
from pathlib import Path

from .schema import Specification

_BRACES = re.compile(r"\{([^{}]*)\}")


def _expand_braces(pattern: str) -> list[str]:
    """Expand one level of ``{a,b}`` alternatives at a time until none are left."""
    match = _BRACES.search(pattern)
    if not match:
        return [pattern]

    expanded = []
    for option in match.group(1).split(","):
        expanded.extend(_expand_braces(pattern[: match.start()] + option + pattern[match.end() :]))
    return expanded


class GlobFileAccessor:
    """Enumerates the files of one specification variant inside a pod directory."""

    def __init__(self, pod_root: Path, spec: Specification):
        self.pod_root = pod_root
        self.spec = spec

    def __repr__(self) -> str:
        return f"<{type(self).__name__} spec={self.spec.name} root={self.pod_root}>"

    @property
    def source_files(self) -> list[Path]:
        """
        Existing files matching the variant's source_files patterns.

        Returns:
            Sorted, de-duplicated list of file paths (directories excluded)

        Example:
            >>> accessor = GlobFileAccessor(Path("Pods/Foo"), spec)
            >>> [p.name for p in accessor.source_files]
            ['Foo.h', 'Foo.m']
        """
        files: set[Path] = set()
        for pattern in self.spec.source_files:
            for expanded in _expand_braces(pattern):
                files.update(f for f in self.pod_root.glob(expanded) if f.is_file())
        return sorted(files)
