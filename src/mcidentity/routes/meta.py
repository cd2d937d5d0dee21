"""Meta endpoints — health, version, cache size."""

from __future__ import annotations

from fastapi import APIRouter, Depends

from mcidentity.deps import get_resolver
from mcidentity.resolver import IdentityResolver

router = APIRouter(prefix="/api/v1", tags=["meta"])


@router.get("/health")
def health():
    return {"status": "ok", "service": "mcidentity"}


@router.get("/version")
def version():
    return {"gateway": "0.1.0"}


@router.get("/cache")
def cache_stats(resolver: IdentityResolver = Depends(get_resolver)):
    return {"entries": len(resolver.cache), "ttl": resolver.cache_ttl}
