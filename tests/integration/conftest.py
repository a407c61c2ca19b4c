"""Integration test setup.

Assumes PostgreSQL is reachable at ``DATABASE__URL``. Every test in this
package carries the ``integration`` marker and is skipped by default.
"""

import pytest
import pytest_asyncio

from pickme.config import Settings
from pickme.persistence.database import create_engine, create_tables


def pytest_collection_modifyitems(config, items):
    for item in items:
        if "tests/integration" in str(item.fspath).replace("\\", "/"):
            item.add_marker(pytest.mark.integration)


@pytest_asyncio.fixture(autouse=True)
async def schema():
    """Make sure the tables exist before touching the database."""
    engine = create_engine(Settings())
    try:
        await create_tables(engine)
    finally:
        await engine.dispose()
