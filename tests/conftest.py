"""Configuration for pytest fixtures used in oavinstall tests."""

from __future__ import annotations

import hashlib
import tarfile
import tempfile
from pathlib import Path
from typing import Any, Callable

import pytest
import requests

from oavinstall.config import InstallConfig


class FakeResponse:
    """Just enough of requests.Response for the download code."""

    def __init__(self, url: str, status_code: int, content: bytes) -> None:
        self.url = url
        self.status_code = status_code
        self.content = content

    @property
    def text(self) -> str:
        return self.content.decode("utf-8")

    def raise_for_status(self) -> None:
        if self.status_code >= 400:  # noqa: PLR2004
            msg = f"{self.status_code} Client Error for url: {self.url}"
            raise requests.HTTPError(msg, response=self)  # type: ignore[arg-type]

    def iter_content(self, chunk_size: int = 1) -> Any:
        for i in range(0, len(self.content), chunk_size):
            yield self.content[i : i + chunk_size]

    def __enter__(self) -> FakeResponse:
        return self

    def __exit__(self, *args: object) -> None:
        return None


class FakeGitHub:
    """Serves canned bodies for URLs and records every request."""

    def __init__(self) -> None:
        self.routes: dict[str, tuple[int, bytes]] = {}
        self.calls: list[tuple[str, dict[str, str]]] = []

    def add(self, url: str, body: bytes | str, status: int = 200) -> None:
        if isinstance(body, str):
            body = body.encode()
        self.routes[url] = (status, body)

    def get(self, url: str, headers: dict | None = None, **_kwargs: Any) -> FakeResponse:
        self.calls.append((url, dict(headers or {})))
        if url not in self.routes:
            msg = f"Failed to resolve {url}"
            raise requests.ConnectionError(msg)
        status, body = self.routes[url]
        return FakeResponse(url, status, body)

    @property
    def urls(self) -> list[str]:
        return [url for url, _ in self.calls]


@pytest.fixture
def fake_github(monkeypatch: pytest.MonkeyPatch) -> FakeGitHub:
    """Replace requests.get with an in-memory GitHub."""
    github = FakeGitHub()
    monkeypatch.setattr(requests, "get", github.get)
    return github


@pytest.fixture
def isolated_tmp(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> Path:
    """Point tempfile at an empty directory so leftovers can be detected."""
    tmp_root = tmp_path / "tmp"
    tmp_root.mkdir()
    monkeypatch.setattr(tempfile, "tempdir", str(tmp_root))
    return tmp_root


@pytest.fixture
def make_config(tmp_path: Path) -> Callable[..., InstallConfig]:
    """Return a factory for configs that install below ``tmp_path``."""

    def _make_config(**kwargs: Any) -> InstallConfig:
        kwargs.setdefault("install_dir", tmp_path / "bin")
        kwargs.setdefault("home", tmp_path / "home")
        kwargs.setdefault("search_path", "/usr/bin:/bin")
        return InstallConfig(**kwargs)

    return _make_config


@pytest.fixture
def create_dummy_archive() -> Callable:
    r"""Create a .tar.gz archive with binary files for testing.

    Usage:
        archive_path = create_dummy_archive(
            dest_path=tmp_path / "oav-0.2.0-x86_64-unknown-linux-gnu.tar.gz",
            binary_names=["oav"],
            binary_content="#!/bin/sh\necho test",
        )
    """

    def _create_archive(
        dest_path: Path,
        binary_names: str | list[str],
        binary_content: str = "#!/usr/bin/env echo\n",
        nested_dir: str | None = None,
    ) -> Path:
        if isinstance(binary_names, str):
            binary_names = [binary_names]

        with tempfile.TemporaryDirectory() as tmp_dir:
            tmp_path = Path(tmp_dir)
            bin_dir = tmp_path / nested_dir if nested_dir else tmp_path
            bin_dir.mkdir(exist_ok=True, parents=True)

            created_files = []
            for binary in binary_names:
                bin_file = bin_dir / binary
                bin_file.write_text(binary_content)
                bin_file.chmod(0o755)
                created_files.append(bin_file)

            with tarfile.open(dest_path, "w:gz") as tar:
                for file_path in created_files:
                    tar.add(file_path, arcname=str(file_path.relative_to(tmp_path)))

        return dest_path

    return _create_archive


def sha256_line(path: Path, name: str | None = None) -> str:
    """Return a ``sha256sum`` style line for ``path``."""
    digest = hashlib.sha256(path.read_bytes()).hexdigest()
    return f"{digest}  {name or path.name}\n"
