"""Error taxonomy for identity lookups.

Callers special-case NotFoundError ("unknown player") and treat the
other two as "service unavailable".
"""

from __future__ import annotations


class IdentityError(Exception):
    """Base for every failure raised by the resolver."""


class TransportError(IdentityError):
    """Network failure or HTTP error status from the identity service."""


class DecodeError(IdentityError):
    """The service answered with malformed JSON or an unexpected shape."""


class NotFoundError(IdentityError):
    """A well-formed response that matched no player."""

    def __init__(self, message: str = "player not found") -> None:
        super().__init__(message)
