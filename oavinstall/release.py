"""Resolve which release of the tool to install."""

from __future__ import annotations

import logging
import re
from typing import TYPE_CHECKING, NamedTuple

import requests

from .download import github_token_header
from .errors import ReleaseResolutionError
from .utils import log

if TYPE_CHECKING:
    from .config import InstallConfig

logger = logging.getLogger(__name__)

# Only the first tag_name in the body matters; assets can carry their own.
_TAG_NAME_RE = re.compile(r'"tag_name"\s*:\s*"([^"]*)"')


class Release(NamedTuple):
    """A version string and the git tag it was published under."""

    version: str
    tag: str


def latest_release_url(config: InstallConfig) -> str:
    """Return the release-index URL for the latest release of the repo."""
    return f"{config.api_base_url}/repos/{config.repo}/releases/latest"


def parse_tag_name(body: str) -> str:
    """Return the first ``tag_name`` value found in a release-index body."""
    match = _TAG_NAME_RE.search(body)
    if not match or not match.group(1):
        msg = "Unable to determine latest release tag"
        raise ReleaseResolutionError(msg)
    return match.group(1)


def version_from_tag(tag: str) -> str:
    """Strip a single leading ``v`` from a tag."""
    return tag[1:] if tag.startswith("v") else tag


def fetch_latest_release(config: InstallConfig) -> str:
    """Get the raw latest release body from the release index."""
    url = latest_release_url(config)
    log(f"Fetching latest release from {url}", "info")
    try:
        response = requests.get(
            url,
            headers=github_token_header(config.token),
            timeout=config.timeout,
        )
        response.raise_for_status()
    except requests.RequestException as e:
        msg = f"Failed to fetch latest release from {url}: {e}"
        raise ReleaseResolutionError(msg) from e
    return response.text


def resolve_release(config: InstallConfig) -> Release:
    """Determine the release to install.

    An explicit version is trusted as given and never checked against
    the release index.
    """
    if config.version:
        logger.debug("Using requested version %s", config.version)
        return Release(config.version, f"v{config.version}")

    tag = parse_tag_name(fetch_latest_release(config))
    version = version_from_tag(tag)
    if not version:
        msg = f"Unable to determine latest release tag (got {tag!r})"
        raise ReleaseResolutionError(msg)
    log(f"Latest release is {tag}", "success")
    return Release(version, tag)
