"""Domain values for resolved players and decoded service responses."""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict


class PlayerRecord(BaseModel):
    """A resolved identity. UUID is de-hyphenated lowercase hex."""

    model_config = ConfigDict(frozen=True)

    uuid: str
    username: str


class NameSearchProfile(BaseModel):
    name: str
    id: str


class NameSearchResponse(BaseModel):
    profiles: list[NameSearchProfile] = []
    size: int
