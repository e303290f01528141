"""Exceptions raised by the install pipeline."""

from __future__ import annotations


class InstallerError(Exception):
    """Base class for every terminal install failure."""

    stage = "install"

    def __init__(self, message: str) -> None:
        """Initialize the InstallerError."""
        self.message = message
        super().__init__(message)


class ConfigurationError(InstallerError):
    """Invalid repository identifier, config file or option."""

    stage = "config"


class UnsupportedPlatformError(InstallerError):
    """The running OS or architecture has no prebuilt binary."""

    stage = "platform"


class ReleaseResolutionError(InstallerError):
    """The latest release tag could not be determined."""

    stage = "release"


class DownloadError(InstallerError):
    """An asset or its checksum file could not be downloaded."""

    stage = "download"

    def __init__(self, message: str, url: str | None = None) -> None:
        """Initialize the DownloadError."""
        self.url = url
        super().__init__(message)


class ChecksumError(InstallerError):
    """The downloaded archive does not match its published digest."""

    stage = "checksum"


class InstallError(InstallerError):
    """Extraction or copying into the install directory failed."""

    stage = "install"
