"""API test fixtures — per-test app on a temp data dir + in-process httpx client.

Invariants:
    - Every test gets a fresh FileBackend directory under tmp_path
    - No SMTP relay unless a test installs a RecordingTransport
    - Rate limits are generous unless a test overrides them

Design Decisions:
    - ASGITransport does not run the lifespan: services are built by create_app itself
"""

import pytest
from httpx import ASGITransport, AsyncClient

from intake.config import Settings
from intake.main import create_app
from intake.services.container import build_services


@pytest.fixture
def settings(tmp_path):
    return Settings(
        _env_file=None,
        data_dir=str(tmp_path / "data"),
        public_dir=str(tmp_path / "public"),
        test_email_key="letmein",
        api_rate_limit=1000,
        test_email_rate_limit=1000,
    )


@pytest.fixture
def app(settings):
    return create_app(settings)


@pytest.fixture
def use_transport(app):
    """Rebuild the app's services around a given mail transport."""
    def _install(transport):
        settings = app.state.services.settings
        app.state.services = build_services(settings, transport=transport)
        return transport
    return _install


@pytest.fixture
async def client(app):
    async with AsyncClient(
        transport=ASGITransport(app=app), base_url="http://test",
    ) as c:
        yield c


@pytest.fixture
def services(app):
    return app.state.services
