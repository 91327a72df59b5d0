"""Shared test fixtures."""

import os
import tempfile
from collections.abc import AsyncGenerator

import pytest
from httpx import ASGITransport, AsyncClient

# Configure the app before it is imported: throwaway SQLite file, no Razorpay
# credentials (tests inject a gateway), dummy S3 credentials for presigning.
_DB_PATH = os.path.join(tempfile.mkdtemp(prefix="charity-api-tests-"), "test.db")
os.environ["DATABASE_URL"] = f"sqlite+aiosqlite:///{_DB_PATH}"
os.environ.setdefault("SECRET_KEY", "test-secret-key-for-jwt")
os.environ["RAZORPAY_KEY_ID"] = ""
os.environ["RAZORPAY_KEY_SECRET"] = ""
os.environ.setdefault("S3_BUCKET", "charity-test-bucket")
os.environ.setdefault("AWS_ACCESS_KEY_ID", "testing")
os.environ.setdefault("AWS_SECRET_ACCESS_KEY", "testing")
os.environ.setdefault("ENVIRONMENT", "test")

from charity_api.core.dependencies import get_payment_gateway  # noqa: E402
from charity_api.db.base import Base  # noqa: E402
from charity_api.db.session import engine as app_engine  # noqa: E402
from charity_api.main import app  # noqa: E402
from charity_api.models import *  # noqa: E402,F401,F403
from charity_api.services.payments import RazorpayGateway  # noqa: E402
from tests.helpers import GATEWAY_KEY_ID, GATEWAY_SECRET, FakeRazorpayClient  # noqa: E402


@pytest.fixture(autouse=True)
async def _reset_schema() -> AsyncGenerator[None, None]:
    """Fresh tables for every test; pool disposed afterwards."""
    async with app_engine.begin() as conn:
        await conn.run_sync(Base.metadata.drop_all)
        await conn.run_sync(Base.metadata.create_all)
    yield
    app.dependency_overrides.clear()
    await app_engine.dispose()


@pytest.fixture
async def client() -> AsyncGenerator[AsyncClient, None]:
    """HTTP test client for the FastAPI app (no lifespan, so no gateway by default)."""
    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as c:
        yield c


@pytest.fixture
def razorpay_client() -> FakeRazorpayClient:
    return FakeRazorpayClient()


@pytest.fixture
def gateway(razorpay_client: FakeRazorpayClient) -> RazorpayGateway:
    """A gateway backed by the fake client, installed as the app's gateway."""
    gw = RazorpayGateway(GATEWAY_KEY_ID, GATEWAY_SECRET, client=razorpay_client)
    app.dependency_overrides[get_payment_gateway] = lambda: gw
    return gw

