"""Command-line interface for oavinstall."""

from __future__ import annotations

import argparse
import contextlib
import logging
import shutil
import signal
import sys
import tempfile
from pathlib import Path
from typing import TYPE_CHECKING

from . import __version__
from .assets import locate_assets
from .config import build_config
from .download import fetch_assets
from .errors import InstallError, InstallerError
from .install import (
    extract_archive,
    install_from_workspace,
    path_advisory,
    resolve_install_dir,
)
from .platforms import current_target
from .release import resolve_release
from .utils import log, setup_logging
from .verify import verify_checksum

if TYPE_CHECKING:
    from collections.abc import Iterator, Sequence

    from .config import InstallConfig
    from .platforms import TargetTriple

logger = logging.getLogger(__name__)


@contextlib.contextmanager
def scoped_workspace() -> Iterator[Path]:
    """Yield a fresh temporary directory, removed on every exit path."""
    try:
        workspace = Path(tempfile.mkdtemp(prefix="oavinstall-"))
    except OSError as e:
        msg = f"Could not create a temporary directory: {e}"
        raise InstallError(msg) from e
    logger.debug("Created workspace %s", workspace)
    try:
        yield workspace
    finally:
        shutil.rmtree(workspace, ignore_errors=True)
        logger.debug("Removed workspace %s", workspace)


def run_install(config: InstallConfig, target: TargetTriple | None = None) -> Path:
    """Resolve, download, verify and install the binary. Returns its path."""
    if target is None:
        target = current_target()
    log(f"Target platform: {target}", "debug")

    release = resolve_release(config)
    assets = locate_assets(release, target, config)

    with scoped_workspace() as workspace:
        fetched = fetch_assets(assets, workspace, config)
        verify_checksum(fetched.archive, fetched.checksum)
        extract_archive(fetched.archive, workspace)
        install_dir = resolve_install_dir(config)
        installed = install_from_workspace(workspace, install_dir, config)

    return installed[0]


def create_parser() -> argparse.ArgumentParser:
    """Create command-line argument parser."""
    parser = argparse.ArgumentParser(
        prog="oav-install",
        description="Install the oav binary from a GitHub release",
        epilog=(
            "Environment: OAV_REPO, OAV_VERSION, OAV_INSTALL_DIR, OAV_GITHUB_TOKEN "
            "(or GITHUB_TOKEN), OAV_GITHUB_HOST, OAV_GITHUB_API"
        ),
    )
    parser.add_argument(
        "version",
        nargs="?",
        help="Version to install, e.g. 0.2.0 (latest release if omitted)",
    )
    parser.add_argument("--repo", help="GitHub repository in the format 'owner/repo'")
    parser.add_argument("--install-dir", help="Directory to install into")
    parser.add_argument("--host", help="GitHub host, e.g. github.company.com")
    parser.add_argument("--api-url", help="GitHub API base URL")
    parser.add_argument("--config-file", help="Path to a YAML configuration file")
    parser.add_argument(
        "--timeout",
        type=float,
        help="Per-request network timeout in seconds",
    )
    parser.add_argument(
        "-v",
        "--verbose",
        action="store_true",
        help="Enable verbose output",
    )
    parser.add_argument(
        "-V",
        "--installer-version",
        action="version",
        version=f"oavinstall {__version__}",
    )
    return parser


def _raise_on_sigterm(signum: int, _frame: object) -> None:
    # SystemExit unwinds through scoped_workspace's finally
    raise SystemExit(128 + signum)


def main(argv: Sequence[str] | None = None) -> int:
    """Parse arguments, run the install and return the exit code."""
    parser = create_parser()
    args = parser.parse_args(argv)
    setup_logging(args.verbose)
    signal.signal(signal.SIGTERM, _raise_on_sigterm)

    try:
        config = build_config(
            config_file=args.config_file,
            version=args.version,
            repo=args.repo,
            install_dir=args.install_dir,
            host=args.host,
            api_url=args.api_url,
            timeout=args.timeout,
        )
        installed = run_install(config)
    except InstallerError as e:
        log(f"Error [{e.stage}]: {e.message}", "error", print_exception=args.verbose)
        return 1
    except KeyboardInterrupt:
        log("Interrupted", "error")
        return 130

    log(f"Installed {installed.name} to {installed}", "success")
    advisory = path_advisory(installed.parent, config.search_path)
    if advisory:
        log(advisory, "warning")
    return 0


def entry_point() -> None:
    """Console script entry point."""
    sys.exit(main())


if __name__ == "__main__":
    entry_point()
