"""Configuration for vcel."""

from .config import (
    ENV_DATACENTER,
    ENV_INSECURE,
    ENV_LOG_LEVEL,
    ENV_URL,
    Config,
    EndpointURL,
    get_env_bool,
    get_env_string,
    parse_endpoint_url,
)
from .schema import LoggingConfig, PollingConfig, RetryConfig, Settings, VcelConfig

__all__ = [
    "Config",
    "ENV_DATACENTER",
    "ENV_INSECURE",
    "ENV_LOG_LEVEL",
    "ENV_URL",
    "EndpointURL",
    "LoggingConfig",
    "PollingConfig",
    "RetryConfig",
    "Settings",
    "VcelConfig",
    "get_env_bool",
    "get_env_string",
    "parse_endpoint_url",
]
