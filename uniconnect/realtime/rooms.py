from __future__ import annotations

import logging
from typing import Any

logger = logging.getLogger(__name__)

GLOBAL_ROOM = "global"


def room_for_scope(scope_tag: Any) -> str:
    return f"university:{scope_tag}"


def room_for_question(question_id: Any) -> str:
    return f"question:{question_id}"


def room_for_session(session_id: Any) -> str:
    return f"ama:{session_id}"


class RoomMembership:
    """Thin wrapper over the transport's room primitives.

    Any room name a client sends is accepted; there is no namespace or
    capability check on ``join``.
    """

    def __init__(self, transport) -> None:
        self.transport = transport

    async def join_global_room(self, sid: str) -> None:
        await self.transport.enter_room(sid, GLOBAL_ROOM)

    async def join_scope_room(self, sid: str, scope_tag: Any) -> None:
        await self.transport.enter_room(sid, room_for_scope(scope_tag))

    async def join(self, sid: str, room: Any) -> bool:
        if not isinstance(room, str) or not room:
            logger.warning("Ignoring join of invalid room %r from %s", room, sid)
            return False
        await self.transport.enter_room(sid, room)
        return True

    async def leave(self, sid: str, room: Any) -> bool:
        if not isinstance(room, str) or not room:
            logger.warning("Ignoring leave of invalid room %r from %s", room, sid)
            return False
        await self.transport.leave_room(sid, room)
        return True
