"""Fixtures for API tests."""

from datetime import UTC, datetime

import pytest
from falcon.testing import TestClient

from rdsguard.application.dto import Actor
from rdsguard.config import Settings
from rdsguard.domain.entities import User
from rdsguard.main import build_app

from tests.conftest import TIMEZONE


class ActorHolder:
    """The actor the next request runs as. None means anonymous."""

    def __init__(self) -> None:
        self.actor: Actor | None = None

    def login(self, user: User) -> Actor:
        self.actor = Actor.from_user(user, TIMEZONE, now=datetime.now(UTC))
        return self.actor

    def logout(self) -> None:
        self.actor = None


class AuthBypassMiddleware:
    """Middleware that sets context.actor for testing."""

    def __init__(self, holder: ActorHolder) -> None:
        self._holder = holder

    async def process_request(self, req, resp):
        req.context.actor = self._holder.actor


@pytest.fixture
def actor_holder() -> ActorHolder:
    return ActorHolder()


@pytest.fixture
def app(uow_factory, actor_holder: ActorHolder):
    """Falcon ASGI app with every route, backed by the in-memory UoW."""
    return build_app(
        uow_factory,
        Settings(_env_file=None),
        middleware=[AuthBypassMiddleware(actor_holder)],
    )


@pytest.fixture
def client(app):
    """Falcon ASGI test client."""
    return TestClient(app)
