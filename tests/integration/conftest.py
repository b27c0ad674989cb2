"""API test fixtures."""

from collections.abc import AsyncGenerator
from typing import Any

import pytest
import pytest_asyncio
from httpx import ASGITransport, AsyncClient

from tip_payroll.api.app import create_app
from tip_payroll.api.schemas import PayrollSnapshotSchema
from tip_payroll.state.types import PayrollSnapshot


@pytest_asyncio.fixture
async def client() -> AsyncGenerator[AsyncClient, None]:
    """HTTP client bound to a fresh app instance."""
    app = create_app()
    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as ac:
        yield ac


@pytest.fixture
def snapshot_payload(snapshot: PayrollSnapshot) -> dict[str, Any]:
    """The shared sheet snapshot in its JSON wire form."""
    return PayrollSnapshotSchema.from_state(snapshot).model_dump(mode="json")
