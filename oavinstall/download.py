"""Download functions for oavinstall."""

from __future__ import annotations

import logging
from pathlib import Path
from typing import TYPE_CHECKING, NamedTuple

import requests

from .errors import DownloadError
from .utils import log

if TYPE_CHECKING:
    from .assets import AssetPair
    from .config import InstallConfig

logger = logging.getLogger(__name__)

CHUNK_SIZE = 8192


def github_token_header(token: str | None) -> dict[str, str]:
    """Return the authorization header for ``token``, if any."""
    if not token:
        return {}
    return {"Authorization": f"token {token}"}


def download_file(
    url: str,
    destination: str | Path,
    headers: dict[str, str] | None = None,
    timeout: float = 30,
) -> Path:
    """Download a file from a URL to a destination path."""
    destination = Path(destination)
    log(f"Downloading from {url}", "info")
    try:
        with requests.get(url, headers=headers, stream=True, timeout=timeout) as response:
            response.raise_for_status()
            with open(destination, "wb") as f:
                for chunk in response.iter_content(chunk_size=CHUNK_SIZE):
                    f.write(chunk)
    except requests.RequestException as e:
        msg = f"Failed to download {destination.name} from {url}: {e}"
        raise DownloadError(msg, url=url) from e
    except OSError as e:
        msg = f"Could not write {destination.name} to {destination.parent}: {e}"
        raise DownloadError(msg, url=url) from e
    logger.debug("Wrote %s (%d bytes)", destination, destination.stat().st_size)
    return destination


class FetchedAssets(NamedTuple):
    """Local copies of a release archive and its checksum file."""

    archive: Path
    checksum: Path


def fetch_assets(
    assets: AssetPair,
    workspace: Path,
    config: InstallConfig,
) -> FetchedAssets:
    """Download the archive and its checksum file into ``workspace``.

    The first failure aborts; nothing is retried.
    """
    headers = github_token_header(config.token)
    archive = download_file(
        assets.archive_url,
        workspace / assets.archive_name,
        headers=headers,
        timeout=config.timeout,
    )
    checksum = download_file(
        assets.checksum_url,
        workspace / assets.checksum_name,
        headers=headers,
        timeout=config.timeout,
    )
    return FetchedAssets(archive, checksum)
