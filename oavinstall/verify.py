"""Checksum verification for downloaded archives."""

from __future__ import annotations

import hashlib
import re
from pathlib import Path

from .errors import ChecksumError
from .utils import log

# "<digest>  <name>" as written by sha256sum; "*" marks binary mode
_CHECKSUM_LINE_RE = re.compile(r"^([0-9a-fA-F]{64})\s+\*?(.+)$")


def sha256_file(path: str | Path) -> str:
    """Return the hex SHA-256 digest of a file."""
    sha256 = hashlib.sha256()
    with open(path, "rb") as f:
        for chunk in iter(lambda: f.read(8192), b""):
            sha256.update(chunk)
    return sha256.hexdigest()


def parse_checksum_file(text: str) -> dict[str, str]:
    """Parse ``sha256sum`` output into ``{filename: digest}``."""
    checksums: dict[str, str] = {}
    for lineno, raw_line in enumerate(text.splitlines(), start=1):
        line = raw_line.strip()
        if not line:
            continue
        match = _CHECKSUM_LINE_RE.match(line)
        if not match:
            msg = f"Improperly formatted checksum line {lineno}: {line!r}"
            raise ChecksumError(msg)
        digest, filename = match.groups()
        filename = filename.strip()
        digest = digest.lower()
        if checksums.get(filename, digest) != digest:
            msg = f"Conflicting checksums for {filename} on line {lineno}"
            raise ChecksumError(msg)
        checksums[filename] = digest
    return checksums


def verify_checksum(archive_path: str | Path, checksum_path: str | Path) -> str:
    """Check an archive against the digest recorded for its filename.

    Returns the verified digest. Raises ChecksumError when the checksum
    file has no entry for the archive or the digests differ.
    """
    archive_path = Path(archive_path)
    checksum_path = Path(checksum_path)
    try:
        text = checksum_path.read_text(encoding="utf-8")
    except (OSError, UnicodeDecodeError) as e:
        msg = f"Could not read checksum file {checksum_path.name}: {e}"
        raise ChecksumError(msg) from e

    checksums = parse_checksum_file(text)
    expected = checksums.get(archive_path.name)
    if expected is None:
        msg = f"No checksum for {archive_path.name} in {checksum_path.name}"
        raise ChecksumError(msg)

    actual = sha256_file(archive_path)
    if actual != expected:
        msg = (
            f"Checksum mismatch for {archive_path.name}:\n"
            f"  Expected: {expected}\n"
            f"  Actual:   {actual}"
        )
        raise ChecksumError(msg)

    log(f"Checksum verified: {archive_path.name}", "success")
    return actual
