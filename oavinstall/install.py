"""Extraction and installation functions for oavinstall."""

from __future__ import annotations

import logging
import os
import shutil
import tarfile
import tempfile
from pathlib import Path, PurePosixPath
from typing import TYPE_CHECKING

from .errors import InstallError
from .utils import log

if TYPE_CHECKING:
    from .config import InstallConfig

logger = logging.getLogger(__name__)

SYSTEM_BIN_DIR = Path("/usr/local/bin")
EXECUTABLE_MODE = 0o755


def _member_path(member: tarfile.TarInfo) -> PurePosixPath:
    """Return the member's relative path, refusing anything unsafe."""
    path = PurePosixPath(member.name)
    if path.is_absolute() or ".." in path.parts:
        msg = f"Refusing to extract {member.name!r}: path escapes the archive root"
        raise InstallError(msg)
    if not (member.isfile() or member.isdir()):
        msg = f"Refusing to extract {member.name!r}: not a regular file or directory"
        raise InstallError(msg)
    return path


def _write_file(data: bytes, path: Path, mode: int) -> None:
    """Write data to a file with specified permissions."""
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_bytes(data)
    path.chmod(mode)


def extract_archive(archive_path: str | Path, dest_dir: str | Path) -> list[Path]:
    """Extract a ``.tar.gz`` archive into ``dest_dir``.

    Only regular files and directories are written. Returns the paths of
    the extracted files.
    """
    dest_dir = Path(dest_dir)
    extracted = []
    try:
        with tarfile.open(archive_path, mode="r:gz") as tar:
            for member in tar.getmembers():
                target = dest_dir.joinpath(*_member_path(member).parts)
                if member.isdir():
                    target.mkdir(parents=True, exist_ok=True)
                    continue
                file_obj = tar.extractfile(member)
                if file_obj is None:
                    continue
                with file_obj:
                    _write_file(file_obj.read(), target, member.mode & 0o777)
                extracted.append(target)
    except (tarfile.TarError, OSError, EOFError) as e:
        msg = f"Extraction of {Path(archive_path).name} failed: {e}"
        raise InstallError(msg) from e

    for path in extracted:
        logger.debug("Extracted %s", path.relative_to(dest_dir))
    return extracted


def default_install_dir(home: Path) -> Path:
    """Return /usr/local/bin if writable, else ~/.local/bin."""
    if os.access(SYSTEM_BIN_DIR, os.W_OK):
        return SYSTEM_BIN_DIR
    return home / ".local" / "bin"


def resolve_install_dir(config: InstallConfig) -> Path:
    """Return the install directory, honouring an explicit override."""
    if config.install_dir is not None:
        return config.install_dir
    return default_install_dir(config.home)


def install_binary(source: Path, install_dir: Path, binary_name: str) -> Path:
    """Copy an executable into ``install_dir`` with mode 0755.

    The file is staged next to its destination and renamed into place,
    so an existing binary is replaced in one step.
    """
    if not source.is_file():
        msg = f"{binary_name} not found in archive (expected {source.name} at the archive root)"
        raise InstallError(msg)

    dest_path = install_dir / binary_name
    tmp_name = None
    try:
        install_dir.mkdir(parents=True, exist_ok=True)
        fd, tmp_name = tempfile.mkstemp(prefix=f".{binary_name}.", dir=install_dir)
        os.close(fd)
        shutil.copyfile(source, tmp_name)
        os.chmod(tmp_name, EXECUTABLE_MODE)
        os.replace(tmp_name, dest_path)
    except OSError as e:
        if tmp_name is not None and os.path.exists(tmp_name):
            os.unlink(tmp_name)
        msg = f"Could not install {binary_name} to {install_dir}: {e}"
        raise InstallError(msg) from e

    log(f"Copied {binary_name} to {dest_path}", "success")
    return dest_path


def install_from_workspace(
    workspace: Path,
    install_dir: Path,
    config: InstallConfig,
) -> list[Path]:
    """Install the main binary and any companion binaries found in ``workspace``.

    The main binary is required; companions are installed only if the
    archive ships them.
    """
    installed = [install_binary(workspace / config.binary_name, install_dir, config.binary_name)]
    for companion in config.companion_binaries:
        source = workspace / companion
        if source.is_file():
            installed.append(install_binary(source, install_dir, companion))
        else:
            logger.debug("Companion binary %s not in archive, skipping", companion)
    return installed


def path_advisory(install_dir: Path, search_path: str) -> str | None:
    """Return a hint if ``install_dir`` is not on the search path."""
    target = os.path.normpath(install_dir)
    entries = [os.path.normpath(entry) for entry in search_path.split(os.pathsep) if entry]
    if target in entries:
        return None
    return f"Add {install_dir} to your PATH."
