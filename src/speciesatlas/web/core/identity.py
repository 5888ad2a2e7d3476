"""Caller identity as supplied by the client.

This is an opaque identifier compared for equality with a record's author;
nothing here authenticates it.
"""

from fastapi import Request

SESSION_HEADER = "X-Session-Id"
SESSION_COOKIE = "session_id"


def get_session_id(request: Request) -> str | None:
    """Session id from the request header, falling back to the cookie."""
    return request.headers.get(SESSION_HEADER) or request.cookies.get(SESSION_COOKIE) or None
