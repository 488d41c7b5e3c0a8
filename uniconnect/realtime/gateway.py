from __future__ import annotations

import logging
from typing import TYPE_CHECKING
from typing import Any

from .identity import UserIdentityStore
from .registry import ConnectionRegistry
from .rooms import room_for_scope
from .router import CampusNamespace

if TYPE_CHECKING:  # import for type checking only
    from .registry import ConnectionRecord

logger = logging.getLogger(__name__)


class RealtimeGateway:
    """Owns the connection registry and the namespace bound to a server.

    Created once per server; the registry is handed to the router and the
    lifecycle hooks by reference. The accessors below are what the HTTP layer
    uses to push live updates after a successful write.
    """

    def __init__(
        self,
        server,
        *,
        identity_store=None,
        namespace: str = "/",
    ) -> None:
        self.server = server
        self.namespace = namespace
        self.registry = ConnectionRegistry()
        self.router = CampusNamespace(
            namespace,
            registry=self.registry,
            identity_store=identity_store or UserIdentityStore(),
        )
        server.register_namespace(self.router)

    async def send_to_user(self, user_id: Any, event: str, payload: Any) -> bool:
        record = self.registry.lookup(user_id)
        if record is None:
            logger.debug("Not delivering %s: user %s is not connected", event, user_id)
            return False
        await self.server.emit(
            event,
            payload,
            to=record.connection_id,
            namespace=self.namespace,
        )
        return True

    async def send_to_scope(self, scope_tag: Any, event: str, payload: Any) -> None:
        await self.send_to_room(room_for_scope(scope_tag), event, payload)

    async def send_to_room(self, room: str, event: str, payload: Any) -> None:
        await self.server.emit(event, payload, room=room, namespace=self.namespace)

    async def broadcast_all(self, event: str, payload: Any) -> None:
        await self.server.emit(event, payload, namespace=self.namespace)

    def list_connections(self) -> list[ConnectionRecord]:
        return self.registry.all()

    def connection_count(self) -> int:
        return self.registry.count()

    async def shutdown(self) -> None:
        logger.info("Realtime gateway stopping with %s live connections", self.connection_count())
        self.registry.clear()
