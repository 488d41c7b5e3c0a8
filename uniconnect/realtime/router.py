"""Socket.IO namespace routing inbound events to rooms and users.

Every room send skips the sender's own sid, so clients never receive their own
events back. Targeted sends resolve the recipient through the registry and are
dropped silently when the user is not connected.
"""

from __future__ import annotations

import logging
from collections.abc import Mapping
from dataclasses import asdict
from typing import TYPE_CHECKING
from typing import Any

import socketio
from django.utils import timezone

from .auth import authenticate
from .identity import Identity
from .lifecycle import LifecycleHooks
from .rooms import GLOBAL_ROOM
from .rooms import RoomMembership
from .rooms import room_for_question
from .rooms import room_for_scope
from .rooms import room_for_session

if TYPE_CHECKING:  # import for type checking only
    from .registry import ConnectionRegistry

logger = logging.getLogger(__name__)

# Events whose failures must reach python-socketio (handshake refusal).
_UNGUARDED_EVENTS = {"connect"}


def _as_mapping(data: Any) -> dict[str, Any]:
    return dict(data) if isinstance(data, Mapping) else {}


def _timestamp() -> str:
    return timezone.now().isoformat()


class CampusNamespace(socketio.AsyncNamespace):
    def __init__(
        self,
        namespace: str | None,
        *,
        registry: ConnectionRegistry,
        identity_store,
    ) -> None:
        super().__init__(namespace)
        self.registry = registry
        self.identity_store = identity_store
        self.rooms = RoomMembership(self)
        self.hooks = LifecycleHooks(self, registry, self.rooms, identity_store)

    async def trigger_event(self, event: str, *args):
        if event in _UNGUARDED_EVENTS:
            return await super().trigger_event(event, *args)
        try:
            return await super().trigger_event(event, *args)
        except Exception:
            sid = args[0] if args else None
            logger.exception("Error handling realtime event %s from %s", event, sid)
            return None

    async def _identity(self, sid: str) -> Identity | None:
        session = await self.get_session(sid)
        if not isinstance(session, dict) or "user_id" not in session:
            logger.warning("Event from %s without an authenticated session", sid)
            return None
        return Identity(**session)

    # Lifecycle

    async def on_connect(self, sid: str, environ: dict[str, Any], auth: Any = None):
        identity = await authenticate(environ, auth, self.identity_store)
        await self.save_session(sid, asdict(identity))
        await self.hooks.admit(sid, identity)

    async def on_disconnect(self, sid: str, reason: Any = None):
        identity = await self._identity(sid)
        if identity is None:
            return
        await self.hooks.release(sid, identity, reason)

    async def on_error(self, sid: str, error: Any = None):
        logger.error("Socket error from %s: %s", sid, error)

    # Questions and answers

    async def on_new_question(self, sid: str, data: Any = None):
        user = await self._identity(sid)
        if user is None:
            return
        data = _as_mapping(data)
        logger.info("New question posted by %s: %s", user.user_id, data.get("title"))

        await self.emit(
            "new_question",
            {
                **data,
                "author": user.display_name,
                "authorInitial": user.initials,
                "university": user.scope_tag,
                "timestamp": _timestamp(),
            },
            room=room_for_scope(user.scope_tag),
            skip_sid=sid,
        )
        await self.emit(
            "question_trending",
            {
                "questionId": data.get("id"),
                "title": data.get("title"),
                "university": user.scope_tag,
            },
            room=GLOBAL_ROOM,
            skip_sid=sid,
        )

    async def on_new_answer(self, sid: str, data: Any = None):
        user = await self._identity(sid)
        if user is None:
            return
        data = _as_mapping(data)
        logger.info("New answer posted for question %s", data.get("questionId"))

        await self.emit(
            "new_answer",
            {
                **data,
                "author": user.display_name,
                "authorInitial": user.initials,
                "timestamp": _timestamp(),
            },
            room=room_for_question(data.get("questionId")),
            skip_sid=sid,
        )

    async def on_live_chat(self, sid: str, data: Any = None):
        user = await self._identity(sid)
        if user is None:
            return
        data = _as_mapping(data)
        logger.debug("Live chat message in session %s", data.get("sessionId"))

        await self.emit(
            "live_chat",
            {
                **data,
                "author": user.display_name,
                "authorInitial": user.initials,
                "timestamp": _timestamp(),
            },
            room=room_for_session(data.get("sessionId")),
            skip_sid=sid,
        )

    async def on_typing_start(self, sid: str, data: Any = None):
        user = await self._identity(sid)
        if user is None:
            return
        data = _as_mapping(data)
        await self.emit(
            "user_typing",
            {"userId": user.user_id, "userName": user.display_name},
            room=room_for_question(data.get("questionId")),
            skip_sid=sid,
        )

    async def on_typing_stop(self, sid: str, data: Any = None):
        user = await self._identity(sid)
        if user is None:
            return
        data = _as_mapping(data)
        await self.emit(
            "user_stopped_typing",
            {"userId": user.user_id},
            room=room_for_question(data.get("questionId")),
            skip_sid=sid,
        )

    async def on_question_liked(self, sid: str, data: Any = None):
        user = await self._identity(sid)
        if user is None:
            return
        data = _as_mapping(data)
        logger.info("Question liked: %s", data.get("questionId"))

        # likeCount is taken as supplied by the client.
        await self.emit(
            "question_like_updated",
            {
                "questionId": data.get("questionId"),
                "likedBy": user.display_name,
                "likeCount": data.get("likeCount"),
            },
            room=room_for_question(data.get("questionId")),
            skip_sid=sid,
        )

    # Targeted delivery

    async def _send_to_target(self, event: str, sender: Identity, data: dict) -> bool:
        target_user_id = data.get("targetUserId")
        target = (
            self.registry.lookup(target_user_id) if target_user_id is not None else None
        )
        if target is None:
            logger.debug(
                "Dropping %s from %s: user %s is not connected",
                event,
                sender.user_id,
                target_user_id,
            )
            return False
        await self.emit(
            event,
            {
                "from": sender.display_name,
                "fromId": sender.user_id,
                "message": data.get("message"),
                "timestamp": _timestamp(),
            },
            to=target.connection_id,
        )
        return True

    async def on_new_connection(self, sid: str, data: Any = None):
        user = await self._identity(sid)
        if user is None:
            return
        data = _as_mapping(data)
        logger.info("New connection request for %s", data.get("targetUserId"))
        await self._send_to_target("connection_request", user, data)

    async def on_private_message(self, sid: str, data: Any = None):
        user = await self._identity(sid)
        if user is None:
            return
        await self._send_to_target("private_message", user, _as_mapping(data))

    # Rooms and presence

    async def on_join_room(self, sid: str, room: Any = None):
        if await self.rooms.join(sid, room):
            logger.info("sid %s joined room: %s", sid, room)

    async def on_leave_room(self, sid: str, room: Any = None):
        if await self.rooms.leave(sid, room):
            logger.info("sid %s left room: %s", sid, room)

    async def on_status_update(self, sid: str, status: Any = None):
        user = await self._identity(sid)
        if user is None:
            return
        record = self.registry.lookup(user.user_id)
        if record is not None and record.connection_id == sid:
            self.registry.update_status(user.user_id, status)

        await self.emit(
            "user_status_changed",
            {
                "userId": user.user_id,
                "userName": user.display_name,
                "status": status,
            },
            room=room_for_scope(user.scope_tag),
            skip_sid=sid,
        )
