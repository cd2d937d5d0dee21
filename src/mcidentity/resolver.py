"""Identity resolver: Mojang account lookups backed by the lookup cache.

Three operations:
- get_names: full name history for a UUID (never cached)
- get_name: current name for a UUID
- get_uuid: UUID and canonical name for a username

No retries and no request coalescing. Two concurrent misses on the same
key both reach the service; the last put wins.
"""

from __future__ import annotations

import logging

import httpx

from mcidentity.cache import LookupCache
from mcidentity.decoder import (
    decode_name_search,
    decode_names,
    is_bare_uuid,
    normalize_uuid,
)
from mcidentity.errors import DecodeError, NotFoundError, TransportError
from mcidentity.models import PlayerRecord

logger = logging.getLogger("mcidentity.resolver")

DEFAULT_API_BASE = "https://api.mojang.com"
DEFAULT_CACHE_TTL = 12 * 60 * 60.0


class IdentityResolver:
    """Resolves player names and UUIDs through an injected HTTP client.

    cache_ttl applies to future insertions only; entries already stored
    keep the expiry they were given.
    """

    def __init__(
        self,
        client: httpx.Client,
        cache: LookupCache,
        api_base: str = DEFAULT_API_BASE,
        cache_ttl: float = DEFAULT_CACHE_TTL,
    ) -> None:
        self.client = client
        self.cache = cache
        self.api_base = api_base.rstrip("/")
        self.cache_ttl = cache_ttl

    def get_names(self, uuid: str) -> list[str]:
        """Every name the account has owned, in the order the service returns."""
        uuid = normalize_uuid(uuid)
        response = self._send("GET", f"{self.api_base}/user/profiles/{uuid}/names")
        # Unknown UUIDs come back as 204 with an empty body.
        if response.status_code == 204:
            raise NotFoundError()
        names = decode_names(response.content)
        if not names:
            raise NotFoundError()
        return names

    def get_name(self, uuid: str) -> str:
        """Current name for uuid, from cache or the first history entry."""
        uuid = normalize_uuid(uuid)
        record = self.cache.get(uuid)
        if record is not None:
            logger.debug("Cache hit for UUID %s", uuid)
            return record.username

        names = self.get_names(uuid)
        record = PlayerRecord(uuid=uuid, username=names[0])
        self._remember(record)
        return record.username

    def get_uuid(self, name: str) -> tuple[str, str]:
        """Return (uuid, canonical name) for a case-insensitive username."""
        key = name.lower()
        # Names share the cache with UUID keys and are at most 16 characters.
        if is_bare_uuid(key):
            raise NotFoundError(f"player not found: {name!r} is a UUID, not a name")
        record = self.cache.get(key)
        if record is not None:
            logger.debug("Cache hit for name %s", key)
            return record.uuid, record.username

        response = self._send(
            "POST",
            f"{self.api_base}/profiles/page/1",
            json={"name": key, "agent": "minecraft"},
        )
        result = decode_name_search(response.content)
        if result.size < 1:
            raise NotFoundError()
        if not result.profiles:
            raise DecodeError(f"name search reported {result.size} matches but listed none")

        profile = result.profiles[0]
        uuid = profile.id.replace("-", "").lower()
        if not is_bare_uuid(uuid):
            raise DecodeError(f"name search returned a malformed id: {profile.id!r}")
        record = PlayerRecord(uuid=uuid, username=profile.name)
        self._remember(record)
        if key != record.username.lower():
            self.cache.put(key, record, self.cache_ttl)
        return record.uuid, profile.name

    def _remember(self, record: PlayerRecord) -> None:
        self.cache.put(record.uuid, record, self.cache_ttl)
        self.cache.put(record.username.lower(), record, self.cache_ttl)

    def _send(self, method: str, url: str, **kwargs) -> httpx.Response:
        try:
            response = self.client.request(method, url, **kwargs)
            response.raise_for_status()
        except httpx.HTTPError as exc:
            logger.warning("%s %s failed: %s", method, url, exc)
            raise TransportError(str(exc)) from exc
        return response
