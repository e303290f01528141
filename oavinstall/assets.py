"""Work out the release asset names and URLs for a target."""

from __future__ import annotations

from typing import TYPE_CHECKING, NamedTuple

if TYPE_CHECKING:
    from .config import InstallConfig
    from .platforms import TargetTriple
    from .release import Release

ARCHIVE_SUFFIX = ".tar.gz"
CHECKSUM_SUFFIX = ".sha256"


class AssetPair(NamedTuple):
    """A release archive, its checksum file, and where both live."""

    archive_name: str
    checksum_name: str
    base_url: str

    @property
    def archive_url(self) -> str:
        return f"{self.base_url}/{self.archive_name}"

    @property
    def checksum_url(self) -> str:
        return f"{self.base_url}/{self.checksum_name}"


def release_download_url(config: InstallConfig, version: str) -> str:
    """Return the download base URL for ``version`` of the configured repo."""
    return f"https://{config.host}/{config.repo}/releases/download/v{version}"


def archive_name(binary_name: str, version: str, target: TargetTriple) -> str:
    """Return e.g. ``oav-0.2.0-x86_64-unknown-linux-gnu.tar.gz``."""
    return f"{binary_name}-{version}-{target}{ARCHIVE_SUFFIX}"


def locate_assets(
    release: Release,
    target: TargetTriple,
    config: InstallConfig,
) -> AssetPair:
    """Return the asset pair for a release and target. Does no I/O."""
    name = archive_name(config.binary_name, release.version, target)
    return AssetPair(
        archive_name=name,
        checksum_name=name + CHECKSUM_SUFFIX,
        base_url=release_download_url(config, release.version),
    )
