"""Tests for oavinstall.platforms."""

from __future__ import annotations

import pytest

from oavinstall import platforms
from oavinstall.errors import UnsupportedPlatformError
from oavinstall.platforms import SUPPORTED_TARGETS, TargetTriple, detect_target


@pytest.mark.parametrize(
    ("system", "machine", "expected"),
    [
        ("Darwin", "x86_64", "x86_64-apple-darwin"),
        ("Darwin", "arm64", "aarch64-apple-darwin"),
        ("Darwin", "aarch64", "aarch64-apple-darwin"),
        ("Linux", "x86_64", "x86_64-unknown-linux-gnu"),
    ],
)
def test_supported_targets(system: str, machine: str, expected: str) -> None:
    """Every supported kernel/machine pair maps to its documented triple."""
    target = detect_target(system, machine)
    assert str(target) == expected
    assert str(target) in SUPPORTED_TARGETS


@pytest.mark.parametrize(
    ("system", "machine", "match"),
    [
        ("Windows", "x86_64", "Unsupported OS: Windows"),
        ("FreeBSD", "amd64", "Unsupported OS: FreeBSD"),
        ("linux", "x86_64", "Unsupported OS: linux"),
        ("Linux", "mips", "Unsupported architecture: mips"),
        ("Darwin", "i386", "Unsupported architecture: i386"),
        ("Linux", "amd64", "Unsupported architecture: amd64"),
        ("Linux", "aarch64", "No prebuilt binary for aarch64-unknown-linux-gnu"),
        ("Linux", "arm64", "No prebuilt binary for aarch64-unknown-linux-gnu"),
    ],
)
def test_unsupported_targets(system: str, machine: str, match: str) -> None:
    """Unknown OSes, architectures and combinations are rejected."""
    with pytest.raises(UnsupportedPlatformError, match=match):
        detect_target(system, machine)


def test_target_triple_fields() -> None:
    target = TargetTriple("aarch64", "apple-darwin")
    assert target.arch == "aarch64"
    assert target.platform == "apple-darwin"
    assert f"{target}" == "aarch64-apple-darwin"


def test_current_target_uses_host(monkeypatch: pytest.MonkeyPatch) -> None:
    """current_target() reads the kernel name and machine from the host."""
    monkeypatch.setattr(platforms.platform, "system", lambda: "Darwin")
    monkeypatch.setattr(platforms.platform, "machine", lambda: "arm64")
    assert platforms.current_target() == TargetTriple("aarch64", "apple-darwin")
