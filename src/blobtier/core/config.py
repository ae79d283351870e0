"""Centralized configuration for blobtier."""

import configparser
import os
from dataclasses import dataclass, field
from pathlib import Path

from .errors import ConfigError

DEFAULT_ASSET_DIR = "~/.blobtier"
DEFAULT_REGION = "ap-northeast-1"
CONFIG_FILE_NAME = "blobtier.ini"


@dataclass(slots=True)
class BlobTierConfig:
    """All blobtier configuration in one place.

    Environment variables (all optional, CLI options take precedence):
        BLOBTIER_ASSET_DIR:  Asset directory. Default "~/.blobtier".
        BLOBTIER_SECTION:    Profile section in the config file. Default "default".
        BLOBTIER_LOG_LEVEL:  Logging level. Default "INFO".
    """

    section: str = "default"
    asset_dir: Path = field(default_factory=lambda: Path(DEFAULT_ASSET_DIR).expanduser())
    local_mode: bool = False
    parallel: int = 1
    log_level: str = "INFO"

    @property
    def data_dir(self) -> Path:
        return self.asset_dir / "data"

    @property
    def config_file(self) -> Path:
        return self.asset_dir / CONFIG_FILE_NAME

    @classmethod
    def from_env(
        cls,
        *,
        section: str | None = None,
        asset_dir: str | Path | None = None,
        local_mode: bool = False,
        parallel: int = 1,
        log_level: str | None = None,
    ) -> "BlobTierConfig":
        """Build config from environment variables + explicit overrides."""
        raw_dir = asset_dir or os.environ.get("BLOBTIER_ASSET_DIR", DEFAULT_ASSET_DIR)
        return cls(
            section=section or os.environ.get("BLOBTIER_SECTION", "default"),
            asset_dir=Path(raw_dir).expanduser(),
            local_mode=local_mode,
            parallel=parallel,
            log_level=log_level or os.environ.get("BLOBTIER_LOG_LEVEL", "INFO"),
        )


@dataclass(slots=True)
class RemoteProfile:
    """Remote store credentials and bucket for one config section."""

    bucket: str
    access_key: str
    secret_key: str = field(repr=False)
    region: str = DEFAULT_REGION
    endpoint_url: str | None = None


def parse_credentials(awskey: str) -> tuple[str, str]:
    """Split a ``key:secret`` pair."""
    parts = awskey.split(":")
    if len(parts) != 2 or not all(parts):
        raise ConfigError(f"Bad awskey: expected 'key:secret', got {len(parts)} field(s)")
    return parts[0], parts[1]


def load_profile(config: BlobTierConfig) -> RemoteProfile:
    """Read the remote profile named by ``config.section``.

    Raises:
        ConfigError: If the file, section or a required key is missing,
            or the credential pair is malformed.
    """
    path = config.config_file
    parser = configparser.ConfigParser(interpolation=None)
    try:
        with open(path, encoding="utf-8") as f:
            parser.read_file(f)
    except FileNotFoundError as e:
        raise ConfigError(f"Config file not found: {path}") from e
    except (OSError, configparser.Error) as e:
        raise ConfigError(f"Cannot read config file {path}: {e}") from e

    if not parser.has_section(config.section):
        raise ConfigError(f"Section '{config.section}' not found in {path}")
    section = parser[config.section]

    for required in ("awskey", "bucket"):
        if not section.get(required, "").strip():
            raise ConfigError(f"Missing '{required}' in section '{config.section}' of {path}")

    access_key, secret_key = parse_credentials(section["awskey"].strip())
    return RemoteProfile(
        bucket=section["bucket"].strip(),
        access_key=access_key,
        secret_key=secret_key,
        region=section.get("region", DEFAULT_REGION).strip() or DEFAULT_REGION,
        endpoint_url=section.get("endpoint", "").strip() or None,
    )
