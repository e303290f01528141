"""Configuration management for oavinstall."""

from __future__ import annotations

import dataclasses
import os
from dataclasses import dataclass, field
from pathlib import Path
from typing import TYPE_CHECKING, Any

import yaml

from .errors import ConfigurationError
from .utils import log

if TYPE_CHECKING:
    from collections.abc import Mapping

DEFAULT_REPO = "entur/openapi-validator-cli"
DEFAULT_HOST = "github.com"
DEFAULT_API_URL = "https://api.github.com"
DEFAULT_TIMEOUT = 30.0

# Environment variable -> InstallConfig field
ENV_VARS = {
    "OAV_REPO": "repo",
    "OAV_VERSION": "version",
    "OAV_INSTALL_DIR": "install_dir",
    "OAV_GITHUB_HOST": "host",
    "OAV_GITHUB_API": "api_url",
}

FILE_KEYS = (
    "repo",
    "version",
    "install_dir",
    "host",
    "api_url",
    "token",
    "binary_name",
    "companion_binaries",
    "timeout",
)

STRING_KEYS = (
    "repo",
    "version",
    "install_dir",
    "host",
    "api_url",
    "token",
    "binary_name",
)


@dataclass(frozen=True)
class InstallConfig:
    """Where to install from and to. Built once, never mutated."""

    repo: str = DEFAULT_REPO
    host: str = DEFAULT_HOST
    api_url: str | None = None
    token: str | None = field(default=None, repr=False)
    version: str | None = None
    install_dir: Path | None = None
    binary_name: str = "oav"
    companion_binaries: tuple[str, ...] = ("openapi-validator",)
    search_path: str = ""
    home: Path = field(default_factory=Path.home)
    timeout: float = DEFAULT_TIMEOUT

    @property
    def api_base_url(self) -> str:
        """Return the API base URL, derived from the host unless set."""
        if self.api_url:
            return self.api_url.rstrip("/")
        if self.host != DEFAULT_HOST:
            return f"https://{self.host}/api/v3"
        return DEFAULT_API_URL

    def validate(self) -> None:
        """Validate the configuration."""
        owner, sep, name = self.repo.partition("/")
        if not sep or not owner or not name or "/" in name:
            msg = f"Repository must be in org/repo format, got {self.repo!r}"
            raise ConfigurationError(msg)
        if not self.host:
            msg = "GitHub host must not be empty"
            raise ConfigurationError(msg)
        if not self.binary_name:
            msg = "Binary name must not be empty"
            raise ConfigurationError(msg)
        if self.timeout <= 0:
            msg = f"Timeout must be positive, got {self.timeout}"
            raise ConfigurationError(msg)

    def replace(self, **changes: Any) -> InstallConfig:
        """Return a copy with the non-None ``changes`` applied."""
        changes = {k: v for k, v in changes.items() if v is not None}
        if "install_dir" in changes:
            changes["install_dir"] = _expand_path(changes["install_dir"])
        return dataclasses.replace(self, **changes)

    @classmethod
    def from_env(
        cls,
        environ: Mapping[str, str] | None = None,
        base: InstallConfig | None = None,
    ) -> InstallConfig:
        """Overlay the ``OAV_*`` environment variables on ``base``.

        Empty variables count as unset. The token falls back from
        ``OAV_GITHUB_TOKEN`` to ``GITHUB_TOKEN``.
        """
        if environ is None:
            environ = os.environ
        base = base or cls()
        changes: dict[str, Any] = {
            attr: environ[var] for var, attr in ENV_VARS.items() if environ.get(var)
        }
        token = environ.get("OAV_GITHUB_TOKEN") or environ.get("GITHUB_TOKEN")
        if token:
            changes["token"] = token
        if environ.get("HOME"):
            changes["home"] = Path(environ["HOME"])
        changes["search_path"] = environ.get("PATH", "")
        return base.replace(**changes)

    @classmethod
    def load_from_file(cls, config_path: str | Path) -> InstallConfig:
        """Load configuration from YAML file."""
        try:
            with open(config_path) as file:
                config_data = yaml.safe_load(file) or {}
        except FileNotFoundError as e:
            msg = f"Configuration file not found: {config_path}"
            raise ConfigurationError(msg) from e
        except yaml.YAMLError as e:
            msg = f"Invalid YAML in configuration file {config_path}: {e}"
            raise ConfigurationError(msg) from e

        if not isinstance(config_data, dict):
            msg = f"Configuration file {config_path} must contain a mapping"
            raise ConfigurationError(msg)
        unknown = sorted(set(config_data) - set(FILE_KEYS))
        if unknown:
            msg = f"Unknown keys in {config_path}: {', '.join(unknown)}"
            raise ConfigurationError(msg)

        for key in STRING_KEYS:
            value = config_data.get(key)
            if value is not None and not isinstance(value, str):
                msg = f"{key} in {config_path} must be a string, got {value!r}"
                if key == "version":
                    # YAML has already turned 1.10 into 1.1
                    msg += "; quote it so YAML keeps it as text"
                raise ConfigurationError(msg)

        if "companion_binaries" in config_data:
            companions = config_data["companion_binaries"] or []
            if isinstance(companions, str):
                companions = [companions]
            if not isinstance(companions, list) or not all(
                isinstance(name, str) for name in companions
            ):
                msg = f"companion_binaries in {config_path} must be a name or a list of names"
                raise ConfigurationError(msg)
            config_data["companion_binaries"] = tuple(companions)
        if "timeout" in config_data:
            try:
                config_data["timeout"] = float(config_data["timeout"])
            except (TypeError, ValueError) as e:
                msg = f"Invalid timeout in {config_path}: {config_data['timeout']!r}"
                raise ConfigurationError(msg) from e

        log(f"Loaded configuration from {config_path}", "debug")
        return cls().replace(**config_data)


def _expand_path(path: str | Path) -> Path:
    return Path(os.path.expanduser(str(path)))


def build_config(
    environ: Mapping[str, str] | None = None,
    config_file: str | Path | None = None,
    **overrides: Any,
) -> InstallConfig:
    """Build the configuration: defaults < file < environment < ``overrides``."""
    base = InstallConfig.load_from_file(config_file) if config_file else None
    config = InstallConfig.from_env(environ, base=base).replace(**overrides)
    config.validate()
    return config
