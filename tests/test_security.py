"""Tests for the unencrypted source transport check."""

import logging

import pytest
from pod_installer import Specification
from pod_installer import verify_source_is_secure


def check(source: dict | None) -> list[str]:
    warnings: list[str] = []
    spec = Specification(name="Foo", version="1.0.0", source=source)
    emitted = verify_source_is_secure(spec, warn=warnings.append)
    assert emitted is bool(warnings)
    return warnings


def test_http_source_warns_once():
    warnings = check({"http": "http://example.com/x.zip"})

    assert len(warnings) == 1
    assert "'Foo'" in warnings[0]
    assert "unencrypted 'http' protocol" in warnings[0]


def test_git_protocol_warns():
    warnings = check({"git": "git://github.com/org/foo.git", "tag": "1.0.0"})

    assert len(warnings) == 1
    assert "'git'" in warnings[0]


@pytest.mark.parametrize(
    "source",
    [
        {"http": "https://example.com/x.zip"},
        {"git": "https://github.com/org/foo.git"},
        {"git": "ssh://git@github.com/org/foo.git"},
        {"http": "http://localhost/x.zip"},
        {"http": "http://localhost:8080/x.zip"},
        {"git": "git://localhost/foo.git"},
    ],
)
def test_secure_or_local_sources_do_not_warn(source: dict):
    assert check(source) == []


@pytest.mark.parametrize(
    "source",
    [
        None,
        {},
        {"svn": "http://svn.example.com/foo/trunk"},
        {"path": "../Foo"},
        {"git": "git@github.com:org/foo.git"},
        {"git": "/Users/me/src/foo"},
        {"git": "../foo"},
    ],
)
def test_not_applicable_sources_are_skipped(source: dict | None):
    """Test sources the check cannot judge are skipped silently."""
    assert check(source) == []


def test_http_takes_precedence_over_git():
    warnings = check({"http": "https://example.com/x.zip", "git": "git://github.com/org/foo.git"})

    assert warnings == []


def test_scheme_is_case_insensitive():
    assert len(check({"http": "HTTP://example.com/x.zip"})) == 1


def test_custom_schemes_and_hosts():
    spec = Specification(name="Foo", version="1.0.0", source={"http": "http://mirror.internal/x.zip"})
    warnings: list[str] = []

    verify_source_is_secure(
        spec,
        warn=warnings.append,
        trusted_hosts=frozenset({"mirror.internal"}),
    )

    assert warnings == []


def test_default_sink_logs_warning(caplog: pytest.LogCaptureFixture):
    spec = Specification(name="Foo", version="1.0.0", source={"http": "http://example.com/x.zip"})

    with caplog.at_level(logging.WARNING, logger="pod_installer.security"):
        assert verify_source_is_secure(spec) is True

    assert "unencrypted 'http' protocol" in caplog.text
