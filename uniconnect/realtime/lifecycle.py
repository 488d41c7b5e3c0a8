from __future__ import annotations

import logging
from typing import TYPE_CHECKING
from typing import Any

from .registry import ConnectionRecord
from .rooms import room_for_scope

if TYPE_CHECKING:  # import for type checking only
    from .identity import Identity
    from .registry import ConnectionRegistry
    from .rooms import RoomMembership

logger = logging.getLogger(__name__)


async def touch_last_seen(identity_store, user_id: Any) -> None:
    """Best-effort ``last_seen`` update, run as a detached background task."""

    try:
        await identity_store.touch(user_id)
    except Exception:
        logger.exception("Failed to update last_seen for user %s", user_id)


class LifecycleHooks:
    """Side effects of a connection being admitted or going away."""

    def __init__(
        self,
        transport,
        registry: ConnectionRegistry,
        rooms: RoomMembership,
        identity_store,
    ) -> None:
        self.transport = transport
        self.registry = registry
        self.rooms = rooms
        self.identity_store = identity_store

    def _spawn_touch(self, user_id: Any) -> None:
        self.transport.server.start_background_task(
            touch_last_seen,
            self.identity_store,
            user_id,
        )

    async def admit(self, sid: str, identity: Identity) -> ConnectionRecord:
        record = ConnectionRecord(
            connection_id=sid,
            user_id=identity.user_id,
            display_name=identity.display_name,
            initials=identity.initials,
            scope_tag=identity.scope_tag,
        )
        previous = self.registry.lookup(identity.user_id)
        self.registry.register(identity.user_id, record)

        try:
            await self.rooms.join_scope_room(sid, identity.scope_tag)
            await self.rooms.join_global_room(sid)
            await self.transport.emit(
                "user_online",
                {"userId": identity.user_id, "userName": identity.display_name},
                room=room_for_scope(identity.scope_tag),
                skip_sid=sid,
            )
        except Exception:
            # The handshake fails, so no disconnect will follow for this sid.
            self.registry.unregister(identity.user_id, connection_id=sid)
            if previous is not None:
                self.registry.register(identity.user_id, previous)
            raise

        self._spawn_touch(identity.user_id)
        logger.info(
            "User connected: %s (%s) sid=%s",
            identity.display_name,
            identity.user_id,
            sid,
        )
        return record

    async def release(self, sid: str, identity: Identity, reason: Any = None) -> None:
        removed = self.registry.unregister(identity.user_id, connection_id=sid)
        self._spawn_touch(identity.user_id)
        if removed is None:
            # Superseded by a newer connection; the user is still online.
            logger.info("Stale connection closed for user %s sid=%s", identity.user_id, sid)
            return

        await self.transport.emit(
            "user_offline",
            {"userId": identity.user_id, "userName": identity.display_name},
            room=room_for_scope(identity.scope_tag),
            skip_sid=sid,
        )
        logger.info(
            "User disconnected: %s (%s) sid=%s reason=%s",
            identity.display_name,
            identity.user_id,
            sid,
            reason,
        )
