import os
from datetime import date

# Keep the package-level engine away from ./data while tests import it
os.environ.setdefault("DATABASE_URL", "sqlite+aiosqlite:///:memory:")

import pytest_asyncio  # noqa: E402

from inventory_gateway.database import (  # noqa: E402
    create_all_tables,
    create_db_engine,
    create_session_factory,
)
from inventory_gateway.database.init_db import seed_sample_data  # noqa: E402
from inventory_gateway.services.gateway import DataGateway  # noqa: E402

SEED_DAY = date(2025, 3, 14)


@pytest_asyncio.fixture
async def engine(tmp_path):
    engine = create_db_engine(f"sqlite+aiosqlite:///{tmp_path / 'inventory.db'}")
    await create_all_tables(engine)
    yield engine
    await engine.dispose()


@pytest_asyncio.fixture
async def session_factory(engine):
    return create_session_factory(engine)


@pytest_asyncio.fixture
async def gateway(session_factory):
    return DataGateway(session_factory)


@pytest_asyncio.fixture
async def seeded_gateway(session_factory):
    await seed_sample_data(session_factory, today=SEED_DAY)
    return DataGateway(session_factory)
