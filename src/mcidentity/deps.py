"""FastAPI dependencies for gateway routes."""

from __future__ import annotations

from fastapi import Request

from mcidentity.resolver import IdentityResolver


def get_resolver(request: Request) -> IdentityResolver:
    """Get the identity resolver from app state."""
    return request.app.state.resolver
