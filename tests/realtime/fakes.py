"""In-memory stand-ins for the Socket.IO server and the identity store.

``FakeServer`` implements the subset of ``socketio.AsyncServer`` the realtime
namespace uses and keeps room membership like the real manager does: every
sid is in a room named after itself, ``skip_sid`` excludes the sender and an
emit without ``to``/``room`` reaches every connected sid.
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import timedelta
from typing import Any

from asgiref.sync import async_to_sync
from rest_framework_simplejwt.settings import api_settings
from rest_framework_simplejwt.tokens import AccessToken

from uniconnect.realtime.identity import Identity


@dataclass
class Delivery:
    sid: str
    event: str
    data: Any


def make_token(user_id: Any, *, expired: bool = False) -> str:
    token = AccessToken()
    token[api_settings.USER_ID_CLAIM] = user_id
    if expired:
        token.set_exp(lifetime=-timedelta(minutes=1))
    return str(token)


def make_identity(user_id: int, name: str, university: str) -> Identity:
    return Identity(
        user_id=user_id,
        display_name=name,
        initials="".join(part[0] for part in name.split()).upper(),
        scope_tag=university,
    )


class FakeIdentityStore:
    def __init__(self, *identities: Identity) -> None:
        self.identities = {str(i.user_id): i for i in identities}
        self.touched: list[Any] = []
        self.resolve_error: Exception | None = None
        self.touch_error: Exception | None = None

    def add(self, identity: Identity) -> Identity:
        self.identities[str(identity.user_id)] = identity
        return identity

    async def resolve(self, claim: Any) -> Identity | None:
        if self.resolve_error is not None:
            raise self.resolve_error
        return self.identities.get(str(claim))

    async def touch(self, user_id: Any) -> None:
        if self.touch_error is not None:
            raise self.touch_error
        self.touched.append(user_id)


class FakeServer:
    def __init__(self) -> None:
        self.handlers: dict[str, Any] = {}
        self.connected: set[str] = set()
        self.rooms: dict[str, set[str]] = {}
        self.sessions: dict[str, dict] = {}
        self.deliveries: list[Delivery] = []
        self.background_tasks: list[tuple[Any, tuple, dict]] = []

    # AsyncServer surface

    def register_namespace(self, namespace_handler) -> None:
        namespace_handler._set_server(self)  # noqa: SLF001
        self.handlers[namespace_handler.namespace] = namespace_handler

    async def emit(  # noqa: PLR0913
        self,
        event,
        data=None,
        to=None,
        room=None,
        skip_sid=None,
        namespace=None,
        callback=None,
        ignore_queue=False,  # noqa: FBT002
        **kwargs,
    ):
        target = room or to
        if target is None:
            recipients = set(self.connected)
        else:
            recipients = self.rooms.get(target, set()) & self.connected
        skipped = skip_sid if isinstance(skip_sid, (list, set, tuple)) else [skip_sid]
        for sid in sorted(recipients):
            if sid in skipped:
                continue
            self.deliveries.append(Delivery(sid, event, data))

    async def enter_room(self, sid, room, namespace=None):
        self.rooms.setdefault(room, set()).add(sid)

    async def leave_room(self, sid, room, namespace=None):
        self.rooms.get(room, set()).discard(sid)

    async def save_session(self, sid, session, namespace=None):
        self.sessions[sid] = session

    async def get_session(self, sid, namespace=None):
        return self.sessions.setdefault(sid, {})

    def start_background_task(self, target, *args, **kwargs):
        self.background_tasks.append((target, args, kwargs))

    # Test driving helpers

    @property
    def namespace(self):
        return self.handlers["/"]

    def connect(self, sid: str, token: str | None = None, environ: dict | None = None):
        """Run the handshake for ``sid``; re-raises the refusal on failure."""

        self.connected.add(sid)
        self.rooms.setdefault(sid, set()).add(sid)
        auth = {"token": token} if token is not None else None
        try:
            async_to_sync(self.namespace.trigger_event)(
                "connect",
                sid,
                environ or {},
                auth,
            )
        except Exception:
            self._forget(sid)
            raise

    def send(self, sid: str, event: str, data: Any = None):
        return async_to_sync(self.namespace.trigger_event)(event, sid, data)

    def disconnect(self, sid: str, reason: str = "client disconnect"):
        async_to_sync(self.namespace.trigger_event)("disconnect", sid, reason)
        self._forget(sid)

    def run_background_tasks(self) -> None:
        tasks, self.background_tasks = self.background_tasks, []
        for target, args, kwargs in tasks:
            async_to_sync(target)(*args, **kwargs)

    def _forget(self, sid: str) -> None:
        self.connected.discard(sid)
        self.sessions.pop(sid, None)
        for members in self.rooms.values():
            members.discard(sid)

    def received(self, sid: str, event: str | None = None) -> list[Delivery]:
        return [
            d
            for d in self.deliveries
            if d.sid == sid and (event is None or d.event == event)
        ]

    def members(self, room: str) -> set[str]:
        return self.rooms.get(room, set()) & self.connected
