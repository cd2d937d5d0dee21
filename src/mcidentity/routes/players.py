"""Player endpoints — name history, current name, UUID by name.

Resolver errors are mapped to status codes by the app's exception
handlers: unknown player -> 404, service trouble -> 502.
"""

from __future__ import annotations

from fastapi import APIRouter, Depends

from mcidentity.decoder import normalize_uuid
from mcidentity.deps import get_resolver
from mcidentity.resolver import IdentityResolver

router = APIRouter(prefix="/api/v1/players", tags=["players"])


@router.get("/by-name/{name}")
def uuid_by_name(name: str, resolver: IdentityResolver = Depends(get_resolver)):
    uuid, canonical = resolver.get_uuid(name)
    return {"uuid": uuid, "name": canonical}


@router.get("/{uuid}/names")
def name_history(uuid: str, resolver: IdentityResolver = Depends(get_resolver)):
    return {"uuid": normalize_uuid(uuid), "names": resolver.get_names(uuid)}


@router.get("/{uuid}/name")
def current_name(uuid: str, resolver: IdentityResolver = Depends(get_resolver)):
    return {"uuid": normalize_uuid(uuid), "name": resolver.get_name(uuid)}
