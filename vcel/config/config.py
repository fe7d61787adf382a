"""Configuration management for vcel.

Connection settings come from command-line flags that default to
environment variables. Tuning knobs (poll interval, batch size, fetch
retries, logging) come from an optional YAML file.
"""

import os
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Dict, Optional
from urllib.parse import unquote, urlsplit

import yaml
from pydantic import ValidationError

from ..core.exceptions import ConfigurationError
from ..io.directories import get_default_config_path
from ..io.logger import get_logger
from .schema import Settings, VcelConfig

logger = get_logger("config")

ENV_URL = "VCEL_URL"
ENV_INSECURE = "VCEL_INSECURE"
ENV_DATACENTER = "VCEL_DATACENTER"
ENV_LOG_LEVEL = "VCEL_LOG_LEVEL"

DEFAULT_SDK_PATH = "/sdk"
DEFAULT_PORTS = {"https": 443, "http": 80}


def get_env_string(key: str, default: str = "") -> str:
    """Return the variable's value, or ``default`` when unset or empty."""
    value = os.environ.get(key, "")
    return value if value else default


def get_env_bool(key: str, default: bool = False) -> bool:
    """``"1"`` is true, any other non-empty value is false."""
    value = os.environ.get(key, "")
    if not value:
        return default
    return value == "1"


@dataclass(frozen=True)
class EndpointURL:
    """Connection parameters extracted from the endpoint URL."""

    protocol: str
    host: str
    port: int
    path: str
    username: str = ""
    password: str = ""

    def __str__(self) -> str:
        return f"{self.protocol}://{self.host}:{self.port}{self.path}"


def parse_endpoint_url(url: str) -> EndpointURL:
    """Parse ``[scheme://][user[:password]@]host[:port][/path]``.

    A missing scheme means https and a missing path means ``/sdk``.
    """
    if not url:
        raise ConfigurationError(f"no endpoint URL given (use --url or {ENV_URL})")

    if "://" not in url:
        url = "https://" + url

    try:
        parts = urlsplit(url)
        port = parts.port
    except ValueError as e:
        raise ConfigurationError(f"parse {url!r}: {e}") from e

    protocol = parts.scheme.lower()
    if protocol not in DEFAULT_PORTS:
        raise ConfigurationError(f"parse {url!r}: unsupported scheme {parts.scheme!r}")
    if not parts.hostname:
        raise ConfigurationError(f"parse {url!r}: missing host")

    return EndpointURL(
        protocol=protocol,
        host=parts.hostname,
        port=port or DEFAULT_PORTS[protocol],
        path=parts.path or DEFAULT_SDK_PATH,
        username=unquote(parts.username or ""),
        password=unquote(parts.password or ""),
    )


class Config:
    """Loads and validates the tuning file."""

    def __init__(self, config_path: Optional[Path] = None):
        self.config: Dict[str, Any] = VcelConfig().model_dump()
        self.config_path: Optional[Path] = None

        if config_path:
            self.load_from_file(Path(config_path))
        else:
            default_path = get_default_config_path()
            if default_path.exists():
                logger.debug(f"Loading config from: {default_path}")
                self.load_from_file(default_path)

    def load_from_file(self, path: Path):
        """Load configuration from YAML file."""
        if not path.exists():
            raise ConfigurationError(f"config file not found: {path}")

        try:
            with open(path) as f:
                user_config = yaml.safe_load(f)
        except yaml.YAMLError as e:
            raise ConfigurationError(f"invalid YAML in {path}: {e}") from e

        if not user_config:
            return
        if not isinstance(user_config, dict):
            raise ConfigurationError(f"invalid configuration in {path}: not a mapping")

        merged_config = self._deep_merge(self.config, user_config)
        try:
            validated = VcelConfig(**merged_config)
        except ValidationError as e:
            problems = "; ".join(
                f"{'.'.join(str(loc) for loc in err['loc'])}: {err['msg']}"
                for err in e.errors()
            )
            raise ConfigurationError(f"invalid configuration in {path}: {problems}") from e

        self.config = validated.model_dump()
        self.config_path = path

    def _deep_merge(self, base: Dict, update: Dict) -> Dict:
        """Deep merge two dictionaries."""
        result = base.copy()

        for key, value in update.items():
            if (
                key in result
                and isinstance(result[key], dict)
                and isinstance(value, dict)
            ):
                result[key] = self._deep_merge(result[key], value)
            else:
                result[key] = value

        return result

    @property
    def tuning(self) -> VcelConfig:
        return VcelConfig(**self.config)

    def settings(
        self, url: str = "", insecure: bool = False, datacenter: str = ""
    ) -> Settings:
        """Combine connection settings with the loaded tuning values."""
        return Settings(
            url=url, insecure=insecure, datacenter=datacenter, tuning=self.tuning
        )
