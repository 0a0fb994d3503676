from __future__ import annotations

import secrets
import uuid


def new_id() -> str:
    """Generate a new row ID (32 lowercase hex chars).

    Project IDs appear in URLs (`/<project_id>`), so they stay path-safe.
    """

    return uuid.uuid4().hex


def new_anon_id() -> str:
    """Generate an opaque anonymous visitor ID for the uigen-anon cookie."""

    return secrets.token_urlsafe(24)
