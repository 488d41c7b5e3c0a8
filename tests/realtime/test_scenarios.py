"""Multi-client walkthroughs over one namespace and one registry."""

import pytest

from tests.realtime.fakes import make_identity
from tests.realtime.fakes import make_token


@pytest.fixture
def campus(server, identity_store, gateway):
    identity_store.add(make_identity(1, "Ada Lovelace", "MIT"))
    identity_store.add(make_identity(2, "Bob Stone", "MIT"))
    identity_store.add(make_identity(3, "Carl Gauss", "ETH"))
    return server


def test_question_reaches_campus_peer_and_trending_reaches_everyone(campus, gateway):
    campus.connect("sid-a", make_token(1))
    campus.connect("sid-b", make_token(2))
    campus.connect("sid-c", make_token(3))
    campus.deliveries.clear()

    campus.send("sid-a", "new_question", {"id": "q1", "title": "Best hostel?"})

    assert [d.event for d in campus.received("sid-b")] == [
        "new_question",
        "question_trending",
    ]
    assert [d.event for d in campus.received("sid-c")] == ["question_trending"]
    assert campus.received("sid-a") == []


def test_status_change_is_scoped_to_university(campus, gateway):
    campus.connect("sid-a", make_token(1))
    campus.connect("sid-b", make_token(2))
    campus.connect("sid-c", make_token(3))
    campus.deliveries.clear()

    campus.send("sid-a", "status_update", "busy")

    assert [d.data["status"] for d in campus.received("sid-b")] == ["busy"]
    assert campus.received("sid-c") == []
    assert gateway.registry.lookup(1).status == "busy"


def test_reconnect_then_private_message_then_disconnect(campus, gateway):
    campus.connect("sid-a1", make_token(1))
    campus.connect("sid-b", make_token(2))
    campus.connect("sid-a2", make_token(1))
    assert gateway.connection_count() == 2  # noqa: PLR2004

    campus.deliveries.clear()
    campus.send("sid-b", "private_message", {"targetUserId": 1, "message": "hi"})
    assert [d.sid for d in campus.deliveries] == ["sid-a2"]

    # The superseded socket going away must not evict the live one.
    campus.disconnect("sid-a1")
    assert gateway.registry.lookup(1).connection_id == "sid-a2"
    assert gateway.connection_count() == 2  # noqa: PLR2004

    campus.disconnect("sid-a2")
    assert gateway.registry.lookup(1) is None
    assert gateway.connection_count() == 1


def test_ama_session_chat(campus, gateway):
    for sid, user_id in (("sid-a", 1), ("sid-b", 2), ("sid-c", 3)):
        campus.connect(sid, make_token(user_id))
        campus.send(sid, "join_room", "ama:42")
    campus.deliveries.clear()

    campus.send("sid-c", "live_chat", {"sessionId": 42, "message": "Ask me anything"})

    recipients = sorted(d.sid for d in campus.deliveries if d.event == "live_chat")
    assert recipients == ["sid-a", "sid-b"]
