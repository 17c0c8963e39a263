"""
sixpack_sdk.tier0_core.http
────────────────────────────
HTTP primitives shared by the dispatcher and the session: the status codes
the client branches on and the Sixpack endpoint names.
"""
from __future__ import annotations


# ── Status code constants ──────────────────────────────────────────────────

class HTTP:
    """HTTP status codes the client classifies responses by."""

    # Sixpack answers 500 with a plain-text body
    INTERNAL_SERVER_ERROR = 500


# ── Sixpack endpoints ──────────────────────────────────────────────────────

class Endpoint:
    """Operation names appended to the base URL."""

    PARTICIPATE = "participate"
    CONVERT = "convert"


__all__ = ["HTTP", "Endpoint"]
