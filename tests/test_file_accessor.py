"""Tests for GlobFileAccessor."""

import tempfile
from pathlib import Path

from pod_installer import FileAccessorProtocol
from pod_installer import GlobFileAccessor
from pod_installer import Specification


def create_pod(pod_dir: Path) -> None:
    for relative in ["Classes/Foo.h", "Classes/Foo.m", "Classes/Private/Bar.m", "Resources/icon.png", "README.md"]:
        path = pod_dir / relative
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text("")


def test_source_files_expand_braces_and_recursion():
    with tempfile.TemporaryDirectory() as tmpdir:
        pod_dir = Path(tmpdir)
        create_pod(pod_dir)
        spec = Specification(name="Foo", version="1.0.0", source_files=["Classes/**/*.{h,m}"])

        accessor = GlobFileAccessor(pod_dir, spec)

        assert accessor.source_files == [
            pod_dir / "Classes" / "Foo.h",
            pod_dir / "Classes" / "Foo.m",
            pod_dir / "Classes" / "Private" / "Bar.m",
        ]


def test_source_files_deduplicated_and_files_only():
    with tempfile.TemporaryDirectory() as tmpdir:
        pod_dir = Path(tmpdir)
        create_pod(pod_dir)
        spec = Specification(name="Foo", version="1.0.0", source_files=["Classes/*", "Classes/*.h"])

        accessor = GlobFileAccessor(pod_dir, spec)

        assert accessor.source_files == [pod_dir / "Classes" / "Foo.h", pod_dir / "Classes" / "Foo.m"]


def test_no_patterns_no_files():
    with tempfile.TemporaryDirectory() as tmpdir:
        accessor = GlobFileAccessor(Path(tmpdir), Specification(name="Foo", version="1.0.0"))

        assert accessor.source_files == []
        assert isinstance(accessor, FileAccessorProtocol)
