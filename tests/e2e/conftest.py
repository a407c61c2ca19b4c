"""Shared fixtures for end-to-end tests.

The app is wired to an in-memory container. The client is used without a
``with`` block so the lifespan (table creation and the expiry sweeper)
never runs.
"""

import pytest
import pytest_asyncio
from fastapi.testclient import TestClient

from pickme.interface.api.app import create_app
from pickme.util.di.container import setup_di
from tests.di import build_test_container
from tests.factories import seed_user


@pytest_asyncio.fixture
async def container():
    container = build_test_container()
    yield container
    await container.close()


@pytest.fixture
def client(container):
    """Create test client bound to the in-memory container."""
    app = create_app()
    setup_di(app, container)
    return TestClient(app)


@pytest_asyncio.fixture
async def users(container):
    """Two seeded users: a requester who pins and a picker who proposes."""
    async with container() as env:
        requester = await seed_user(env, "Rita")
        picker = await seed_user(env, "Pete")
        stranger = await seed_user(env, "Sven")
    return {"requester": requester, "picker": picker, "stranger": stranger}
