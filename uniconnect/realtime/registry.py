"""In-process registry of live Socket.IO connections.

One entry per user: the most recent connection wins. All access happens on the
server's event loop, so there is no locking.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from dataclasses import field
from typing import TYPE_CHECKING

from django.utils import timezone

if TYPE_CHECKING:  # import for type checking only
    from datetime import datetime

logger = logging.getLogger(__name__)


@dataclass
class ConnectionRecord:
    connection_id: str
    user_id: int | str
    display_name: str
    initials: str
    scope_tag: str
    connected_at: datetime = field(default_factory=timezone.now)
    status: str | None = None


def _key(user_id: int | str) -> str:
    return str(user_id)


class ConnectionRegistry:
    """Maps ``user_id`` to the user's current :class:`ConnectionRecord`."""

    def __init__(self) -> None:
        self._records: dict[str, ConnectionRecord] = {}

    def register(self, user_id: int | str, record: ConnectionRecord) -> None:
        previous = self._records.get(_key(user_id))
        if previous is not None and previous.connection_id != record.connection_id:
            logger.info(
                "User %s reconnected; replacing connection %s with %s",
                user_id,
                previous.connection_id,
                record.connection_id,
            )
        self._records[_key(user_id)] = record

    def unregister(
        self,
        user_id: int | str,
        connection_id: str | None = None,
    ) -> ConnectionRecord | None:
        """Remove the entry for ``user_id``.

        When ``connection_id`` is given, the entry is only removed if it still
        belongs to that connection, so a stale socket closing does not evict
        the user's newer session.
        """

        record = self._records.get(_key(user_id))
        if record is None:
            return None
        if connection_id is not None and record.connection_id != connection_id:
            return None
        return self._records.pop(_key(user_id))

    def lookup(self, user_id: int | str) -> ConnectionRecord | None:
        return self._records.get(_key(user_id))

    def update_status(
        self,
        user_id: int | str,
        status: str | None,
    ) -> ConnectionRecord | None:
        record = self._records.get(_key(user_id))
        if record is not None:
            record.status = status
        return record

    def all(self) -> list[ConnectionRecord]:
        return list(self._records.values())

    def count(self) -> int:
        return len(self._records)

    def clear(self) -> None:
        self._records.clear()
