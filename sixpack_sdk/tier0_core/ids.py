"""
sixpack_sdk.tier0_core.ids
───────────────────────────
Client identity helpers. The Sixpack server keys every assignment on the
client id, so it must be stable for the lifetime of a Session.
"""
from __future__ import annotations

import uuid


def new_client_id() -> str:
    """Generate a random UUID v4 client id."""
    return str(uuid.uuid4())


def normalize_client_id(client_id: str | uuid.UUID | None) -> str:
    """
    Return the string form of a caller-supplied client id, or a fresh one
    when none was given. Blank strings are rejected.
    """
    if client_id is None:
        return new_client_id()
    if isinstance(client_id, uuid.UUID):
        return str(client_id)
    if not isinstance(client_id, str) or not client_id.strip():
        raise ValueError(f"client_id must be a UUID or a non-empty string, got {client_id!r}")
    return client_id


__all__ = ["new_client_id", "normalize_client_id"]
