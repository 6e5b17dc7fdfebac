"""Authenticated principal resolution.

Tokens are validated by the upstream gateway, which forwards the caller's
user id in the ``X-User-Id`` header.
"""

from __future__ import annotations

from uuid import UUID

from fastapi import Header, HTTPException, status


async def current_user_id(x_user_id: UUID | None = Header(default=None)) -> UUID:
    """Return the authenticated user's id or reject the request."""
    if x_user_id is None:
        raise HTTPException(status_code=status.HTTP_401_UNAUTHORIZED)
    return x_user_id
