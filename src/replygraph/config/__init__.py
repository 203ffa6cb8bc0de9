"""Application configuration helpers."""

from __future__ import annotations

from .env import env_float, env_int, env_value
from .errors import ConfigurationError, InvalidConfigurationError
from .jetstream import (
    JETSTREAM_URL,
    POST_COLLECTION,
    JetstreamConfig,
    ReconnectPolicy,
    get_jetstream_config,
)
from .logging import configure_logging

__all__ = [
    "JETSTREAM_URL",
    "POST_COLLECTION",
    "ConfigurationError",
    "InvalidConfigurationError",
    "JetstreamConfig",
    "ReconnectPolicy",
    "configure_logging",
    "env_float",
    "env_int",
    "env_value",
    "get_jetstream_config",
]
