from __future__ import annotations

from pydantic import BaseModel, Field


class ChallengeResponse(BaseModel):
    version: int
    bits: int = Field(ge=0)
    expiry_seconds: int
    future_seconds: int


class VerifyRequest(BaseModel):
    stamp: str = Field(min_length=1, max_length=4096)
    resource: str | None = None


class VerifyResponse(BaseModel):
    accepted: bool
    fingerprint: str
