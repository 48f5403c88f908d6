"""Pytest configuration and shared fixtures."""

import pytest
from fastapi.testclient import TestClient
from app.api.realtime import RealtimeGateway
from app.config import Settings
from app.main import create_app
from app.services.room_registry import RoomRegistry

FRONTEND_URL = "http://app.test"


class FakeSocketServer:
    """Records the Socket.IO calls the gateway makes."""

    def __init__(self):
        self.handlers = {}
        self.entered = []
        self.left = []
        self.emitted = []

    def on(self, event, handler=None, namespace=None):
        self.handlers[event] = handler

    async def enter_room(self, sid, room, namespace=None):
        self.entered.append((sid, room))

    async def leave_room(self, sid, room, namespace=None):
        self.left.append((sid, room))

    async def emit(self, event, data=None, to=None, room=None, **kwargs):
        self.emitted.append((event, data, to or room))


@pytest.fixture
def settings():
    """Development settings with a known frontend origin."""
    return Settings(FRONTEND_URL=FRONTEND_URL, PORT=4000, NODE_ENV="development")


@pytest.fixture
def fake_sio():
    return FakeSocketServer()


@pytest.fixture
def registry():
    return RoomRegistry()


@pytest.fixture
def gateway(fake_sio, registry):
    gateway = RealtimeGateway(fake_sio, registry)
    gateway.register()
    return gateway


@pytest.fixture
def app(settings, gateway):
    return create_app(settings, gateway=gateway)


@pytest.fixture
def client(app):
    """Test client sending requests from the trusted origin."""
    with TestClient(app, headers={"Origin": FRONTEND_URL}) as test_client:
        yield test_client
