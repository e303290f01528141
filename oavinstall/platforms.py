"""Map the running OS and CPU to a release target triple."""

from __future__ import annotations

import platform
from typing import NamedTuple

from .errors import UnsupportedPlatformError

PLATFORM_MAP = {
    "Darwin": "apple-darwin",
    "Linux": "unknown-linux-gnu",
}

ARCH_MAP = {
    "x86_64": "x86_64",
    "arm64": "aarch64",
    "aarch64": "aarch64",
}

# Triples with a prebuilt archive attached to each release
SUPPORTED_TARGETS = frozenset(
    {
        "x86_64-apple-darwin",
        "aarch64-apple-darwin",
        "x86_64-unknown-linux-gnu",
    },
)


class TargetTriple(NamedTuple):
    """An ``{arch}-{platform}`` pair, as used in asset filenames."""

    arch: str
    platform: str

    def __str__(self) -> str:
        """Return the triple as it appears in asset names."""
        return f"{self.arch}-{self.platform}"


def detect_target(system: str, machine: str) -> TargetTriple:
    """Return the target triple for a kernel name and machine string.

    Raises UnsupportedPlatformError for an unknown OS, an unknown
    architecture, or a combination that has no published archive.
    """
    if system not in PLATFORM_MAP:
        msg = f"Unsupported OS: {system}"
        raise UnsupportedPlatformError(msg)
    if machine not in ARCH_MAP:
        msg = f"Unsupported architecture: {machine}"
        raise UnsupportedPlatformError(msg)

    target = TargetTriple(ARCH_MAP[machine], PLATFORM_MAP[system])
    if str(target) not in SUPPORTED_TARGETS:
        msg = f"No prebuilt binary for {target}"
        raise UnsupportedPlatformError(msg)
    return target


def current_target() -> TargetTriple:
    """Detect the target triple of the running host."""
    return detect_target(platform.system(), platform.machine())
