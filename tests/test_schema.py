"""Tests for specification, podfile and request models."""

import tempfile
from pathlib import Path

import pytest
from pod_installer import Dependency
from pod_installer import DownloadRequest
from pod_installer import InstallerOptions
from pod_installer import Podfile
from pod_installer import Specification
from pydantic import ValidationError


def test_subspec_root():
    root = Specification(name="Foo", version="1.0.0", source={"git": "https://github.com/org/foo.git"})
    core = root.subspec("Core", source_files=["Core/*.m"])
    nested = core.subspec("Extras")

    assert core.name == "Foo/Core"
    assert nested.name == "Foo/Core/Extras"
    assert nested.root == root
    assert root.root is root


def test_specification_is_frozen():
    spec = Specification(name="Foo", version="1.0.0")

    with pytest.raises(ValidationError):
        spec.version = "2.0.0"  # type: ignore[misc]


def test_from_json_file():
    """Test loading a podspec.json, including a single source_files string."""
    with tempfile.TemporaryDirectory() as tmpdir:
        spec_path = Path(tmpdir) / "Foo.podspec.json"
        spec_path.write_text(
            '{"name": "Foo", "version": "1.2.0", '
            '"source": {"git": "https://github.com/org/foo.git", "tag": "1.2.0", "submodules": true}, '
            '"source_files": "Classes/*.{h,m}"}'
        )

        spec = Specification.from_json_file(spec_path)

        assert spec.name == "Foo"
        assert spec.source == {"git": "https://github.com/org/foo.git", "tag": "1.2.0", "submodules": True}
        assert spec.source_files == ["Classes/*.{h,m}"]


def test_from_json_file_missing():
    with pytest.raises(FileNotFoundError):
        Specification.from_json_file(Path("/nonexistent/Foo.podspec.json"))


def test_json_round_trip_preserves_equality():
    with tempfile.TemporaryDirectory() as tmpdir:
        spec = Specification(name="Foo", version="1.0.0", source_files=["*.m"])
        spec_path = Path(tmpdir) / "Foo.podspec.json"
        spec_path.write_text(spec.to_json())

        assert Specification.from_json_file(spec_path) == spec


def test_podfile_external_dependencies():
    podfile = Podfile(
        dependencies=[
            Dependency(name="Alamofire", requirement="~> 5.0"),
            Dependency(name="Foo", external_source={"podspec": "https://example.com/Foo.podspec"}),
            Dependency(name="Bar/Core", external_source={"path": "../Bar"}),
            Dependency(name="Baz", external_source={}),
        ]
    )

    assert podfile.external_dependency_names() == {"Foo", "Bar/Core"}


def test_installer_options_defaults():
    options = InstallerOptions()

    assert options.can_cache is True
    assert options.unencrypted_schemes == frozenset({"http", "git"})
    assert options.trusted_hosts == frozenset({"localhost"})


def test_download_request():
    spec = Specification(name="Foo", version="1.0.0")
    request = DownloadRequest(spec=spec, released=True)

    assert request.spec == spec
    assert request.released is True
    with pytest.raises(ValidationError):
        request.released = False  # type: ignore[misc]
