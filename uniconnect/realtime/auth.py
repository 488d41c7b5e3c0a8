"""Handshake authentication for Socket.IO connections.

Frontend convention:
- `auth: { token }` on `io(url, ...)` (JWT access token)
- `?token=` query string accepted as fallback
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING
from typing import Any
from urllib.parse import parse_qs

from rest_framework_simplejwt.authentication import JWTAuthentication
from rest_framework_simplejwt.exceptions import InvalidToken
from rest_framework_simplejwt.settings import api_settings
from socketio.exceptions import ConnectionRefusedError as SocketConnectionRefusedError

if TYPE_CHECKING:  # import for type checking only
    from .identity import Identity

logger = logging.getLogger(__name__)

MISSING_CREDENTIAL = "missing credential"
INVALID_CREDENTIAL = "invalid credential"
IDENTITY_NOT_FOUND = "identity not found"
IDENTITY_LOOKUP_FAILED = "identity lookup failed"


class AuthError(SocketConnectionRefusedError):
    """Handshake refused; the reason string is sent to the client."""

    def __init__(self, reason: str) -> None:
        super().__init__(reason)
        self.reason = reason


def extract_token(environ: dict[str, Any], auth: Any | None) -> str | None:
    """Extract the JWT from the Socket.IO auth payload or query string.

    Handles python-socketio environ shapes across ASGI/WSGI servers.
    """

    if isinstance(auth, dict):
        auth_token = auth.get("token")
        if isinstance(auth_token, str) and auth_token:
            return auth_token

    scope: Any = environ
    if isinstance(environ, dict) and "asgi.scope" in environ:
        inner = environ.get("asgi.scope")
        if isinstance(inner, dict):
            scope = inner

    query_string: str | bytes = ""
    if isinstance(scope, dict) and "query_string" in scope:
        query_string = scope.get("query_string", b"")
    elif isinstance(scope, dict) and "QUERY_STRING" in scope:
        query_string = scope.get("QUERY_STRING", "")

    if isinstance(query_string, (bytes, bytearray)):
        query_string = query_string.decode(errors="ignore")

    token = parse_qs(str(query_string)).get("token", [None])[0]
    if isinstance(token, str) and token:
        return token
    return None


def read_identity_claim(token: str) -> Any:
    """Verify signature and expiry, return the embedded user id claim."""

    validated = JWTAuthentication().get_validated_token(token)
    claim = validated.get(api_settings.USER_ID_CLAIM)
    if claim is None:
        msg = "Token contained no recognizable user identification"
        raise InvalidToken(msg)
    return claim


async def authenticate(
    environ: dict[str, Any],
    auth: Any | None,
    identity_store,
) -> Identity:
    token = extract_token(environ, auth)
    if not token:
        raise AuthError(MISSING_CREDENTIAL)

    try:
        claim = read_identity_claim(token)
    except InvalidToken as exc:
        logger.debug("Rejected socket credential: %s", exc)
        raise AuthError(INVALID_CREDENTIAL) from exc

    try:
        identity = await identity_store.resolve(claim)
    except Exception as exc:
        logger.exception("Identity lookup failed for claim %s", claim)
        raise AuthError(IDENTITY_LOOKUP_FAILED) from exc

    if identity is None:
        raise AuthError(IDENTITY_NOT_FOUND)
    return identity
