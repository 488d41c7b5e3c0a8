"""Global Socket.IO server for the frontend.

Every realtime feature (questions, answers, AMA chat, presence, private
messages) shares this one server instance and its gateway.

Current frontend convention:
- URL base: http://<host>:8000
- Socket.IO path: /socket.io/ (``SOCKETIO_PATH``)
- Auth: `auth.token` (JWT access token), `query.token` as fallback
"""

from __future__ import annotations

from typing import TYPE_CHECKING
from typing import Any

import socketio
from asgiref.sync import async_to_sync
from django.conf import settings

from .gateway import RealtimeGateway

if TYPE_CHECKING:  # import for type checking only
    from .registry import ConnectionRecord


sio = socketio.AsyncServer(
    async_mode="asgi",
    cors_allowed_origins=getattr(settings, "SOCKETIO_CORS_ALLOWED_ORIGINS", "*"),
    logger=getattr(settings, "SOCKETIO_LOGGER", False),
    engineio_logger=getattr(settings, "SOCKETIO_LOGGER", False),
)

gateway = RealtimeGateway(sio)


def emit_event_to_room(room: str, event: str, payload: dict[str, Any]) -> None:
    """Emit an event to a room from sync Django code."""

    async_to_sync(gateway.send_to_room)(room, event, payload)


def emit_event_to_user(user_id: Any, event: str, payload: dict[str, Any]) -> bool:
    """Emit to the user's current connection. No-op when they are offline."""

    return async_to_sync(gateway.send_to_user)(user_id, event, payload)


def emit_event_to_scope(scope_tag: str, event: str, payload: dict[str, Any]) -> None:
    async_to_sync(gateway.send_to_scope)(scope_tag, event, payload)


def emit_event_to_all(event: str, payload: dict[str, Any]) -> None:
    async_to_sync(gateway.broadcast_all)(event, payload)


def list_connections() -> list[ConnectionRecord]:
    return gateway.list_connections()


def connection_count() -> int:
    return gateway.connection_count()
