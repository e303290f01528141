"""oavinstall - install the oav binary from GitHub releases.

Resolves a release of the OpenAPI Validator CLI, downloads the prebuilt
archive for the running macOS or Linux host, verifies it against its
published SHA-256 checksum and installs the executable onto your PATH.
"""

from __future__ import annotations

__version__ = "0.1.0"

from . import assets, cli, config, download, errors, install, platforms, release, utils, verify
from .assets import AssetPair, locate_assets
from .cli import main, run_install
from .config import InstallConfig, build_config
from .errors import InstallerError
from .platforms import TargetTriple, current_target, detect_target
from .release import Release, resolve_release
from .verify import verify_checksum

__all__ = [
    "AssetPair",
    "InstallConfig",
    "InstallerError",
    "Release",
    "TargetTriple",
    "assets",
    "build_config",
    "cli",
    "config",
    "current_target",
    "detect_target",
    "download",
    "errors",
    "install",
    "locate_assets",
    "main",
    "platforms",
    "release",
    "resolve_release",
    "run_install",
    "utils",
    "verify",
    "verify_checksum",
]
