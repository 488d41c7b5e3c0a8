import pytest
from django.contrib.auth import get_user_model

from tests.realtime.fakes import FakeIdentityStore
from tests.realtime.fakes import FakeServer
from uniconnect.realtime.gateway import RealtimeGateway

TEST_PASSWORD = "TestPass123!"  # noqa: S105


@pytest.fixture
def user(db):
    return get_user_model().objects.create_user(
        username="ada",
        email="ada@example.com",
        password=TEST_PASSWORD,
        name="Ada Lovelace",
        university="MIT",
    )


@pytest.fixture
def identity_store() -> FakeIdentityStore:
    return FakeIdentityStore()


@pytest.fixture
def server() -> FakeServer:
    return FakeServer()


@pytest.fixture
def gateway(server, identity_store) -> RealtimeGateway:
    return RealtimeGateway(server, identity_store=identity_store)


@pytest.fixture
def process_gateway(monkeypatch, server, identity_store) -> RealtimeGateway:
    """Replace the process-wide gateway used by the sync helpers."""

    gw = RealtimeGateway(server, identity_store=identity_store)
    monkeypatch.setattr("uniconnect.realtime.socketio.gateway", gw)
    return gw
