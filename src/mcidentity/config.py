"""Configuration for the mcidentity resolver and gateway.

Reads from config/mcidentity.ini if present, environment variables override.
"""

from __future__ import annotations

import configparser
import os
from dataclasses import dataclass
from pathlib import Path

_CONFIG_FILE = Path(__file__).resolve().parent.parent.parent / "config" / "mcidentity.ini"

# (section, ini key, config field, type)
_INI_FIELDS = [
    ("mojang", "api_base", "api_base", str),
    ("mojang", "timeout", "http_timeout", float),
    ("cache", "ttl", "cache_ttl", float),
    ("cache", "cleanup_interval", "cleanup_interval", float),
    ("gateway", "api_key", "api_key", str),
    ("gateway", "host", "host", str),
    ("gateway", "port", "port", int),
]

_ENV_FIELDS = {
    "MCIDENTITY_API_BASE": ("api_base", str),
    "MCIDENTITY_HTTP_TIMEOUT": ("http_timeout", float),
    "MCIDENTITY_CACHE_TTL": ("cache_ttl", float),
    "MCIDENTITY_CLEANUP_INTERVAL": ("cleanup_interval", float),
    "MCIDENTITY_API_KEY": ("api_key", str),
    "MCIDENTITY_HOST": ("host", str),
    "MCIDENTITY_PORT": ("port", int),
}


@dataclass(frozen=True)
class IdentityConfig:
    """Resolver and gateway configuration. Immutable once loaded.

    cache_ttl and cleanup_interval are in seconds. Short TTLs make the
    Mojang rate limit much easier to hit.
    """

    api_base: str = "https://api.mojang.com"
    http_timeout: float = 5.0
    cache_ttl: float = 12 * 60 * 60.0
    cleanup_interval: float = 60.0
    api_key: str = ""
    host: str = "127.0.0.1"
    port: int = 8000


def load_config(config_path: Path | None = None) -> IdentityConfig:
    """Load config from INI file, then override with environment variables."""
    path = config_path or _CONFIG_FILE
    kwargs: dict = {}

    if path.exists():
        parser = configparser.ConfigParser()
        parser.read(path)
        for section, ini_key, config_key, cast in _INI_FIELDS:
            val = parser.get(section, ini_key, fallback=None)
            if val is not None:
                kwargs[config_key] = cast(val)

    for env_key, (config_key, cast) in _ENV_FIELDS.items():
        val = os.getenv(env_key)
        if val is not None:
            kwargs[config_key] = cast(val)

    return IdentityConfig(**kwargs)
