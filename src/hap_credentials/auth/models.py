"""Pydantic models for snapshots of stored credentials."""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field


class IdentityRecord(BaseModel):
    """Long-term identity of the accessory."""

    model_config = ConfigDict(frozen=True, extra="forbid")

    device_id: str = Field(..., description="MAC-like device identifier")
    salt: int = Field(..., ge=0, description="SRP salt")
    private_key: bytes = Field(..., description="Raw long-term private key")


class PairingRecord(BaseModel):
    """A paired client and its long-term public key."""

    model_config = ConfigDict(frozen=True, extra="forbid")

    username: str = Field(..., description="Pairing identifier of the client")
    public_key: bytes = Field(..., description="Raw long-term public key of the client")
