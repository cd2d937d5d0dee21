"""The decoder: UUID normalization and response decoding.

Sits between the HTTP transport and the resolver. Raw bodies from the
identity service go in, domain values come out. Anything that does not
match the documented shapes becomes a DecodeError.
"""

from __future__ import annotations

import re

from pydantic import TypeAdapter, ValidationError

from mcidentity.errors import DecodeError, NotFoundError
from mcidentity.models import NameSearchResponse

_names_adapter = TypeAdapter(list[str])
_BARE_UUID = re.compile(r"[0-9a-f]{32}")


def is_bare_uuid(value: str) -> bool:
    """True for 32 lowercase hex characters with no separators."""
    return _BARE_UUID.fullmatch(value) is not None


def normalize_uuid(uuid: str) -> str:
    """Strip hyphens and lowercase. Idempotent.

    Anything that is not 32 hex digits afterwards cannot name a player,
    so it is rejected before it reaches a cache key or a request URL.
    """
    bare = uuid.replace("-", "").lower()
    if not is_bare_uuid(bare):
        raise NotFoundError(f"player not found: {uuid!r} is not a UUID")
    return bare


def decode_names(body: bytes) -> list[str]:
    """Decode a name history body: a JSON array of usernames."""
    try:
        return _names_adapter.validate_json(body)
    except ValidationError as exc:
        raise DecodeError(f"malformed name history response: {exc}") from exc


def decode_name_search(body: bytes) -> NameSearchResponse:
    """Decode a name search body: {"profiles": [{"name", "id"}], "size": int}."""
    try:
        return NameSearchResponse.model_validate_json(body)
    except ValidationError as exc:
        raise DecodeError(f"malformed name search response: {exc}") from exc
