"""Fixtures for API tests."""

from uuid import uuid4

import pytest
from falcon.testing import TestClient

from grantkeeper.domain.value_objects import EntityType
from grantkeeper.interfaces.api.app import build_resources, create_app
from grantkeeper.interfaces.api.middleware.auth import RequestUser

from tests.conftest import FakeUnitOfWork


class AuthBypassMiddleware:
    """Middleware that sets context.user from the X-Test-User header."""

    async def process_request(self, req, resp):
        auth_id = req.get_header("X-Test-User")
        req.context.user = RequestUser(auth_id=auth_id) if auth_id else None


@pytest.fixture
def world(fake_uow: FakeUnitOfWork) -> dict:
    """Owner A of a track, B team member, C outsider."""
    a = fake_uow.profiles.add_profile("auth-a")
    b = fake_uow.profiles.add_profile("auth-b")
    c = fake_uow.profiles.add_profile("auth-c")
    team_id = uuid4()
    fake_uow.teams.add_member(team_id, a, "owner")
    fake_uow.teams.add_member(team_id, b, "member")
    return {
        "A": a,
        "B": b,
        "C": c,
        "team": team_id,
        "track": fake_uow.entities.add_entity(EntityType.TRACK, a),
    }


@pytest.fixture
def app(uow_factory, resolver):
    """Falcon ASGI app wired to the in-memory stores."""
    resources = build_resources(uow_factory, resolver)
    return create_app(resources, middleware=[AuthBypassMiddleware()])


@pytest.fixture
def client(app) -> TestClient:
    """Falcon ASGI test client."""
    return TestClient(app)
