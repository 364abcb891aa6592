import tempfile
from collections.abc import AsyncGenerator, Iterator
from unittest.mock import AsyncMock, patch

import pytest
from httpx import ASGITransport, AsyncClient

from app.core.config import Settings, get_settings, settings

# Override settings for tests (before the app is imported)
settings.gemini_api_key = ""
settings.export_dir = tempfile.mkdtemp(prefix="prompt-lab-exports-")
settings.rate_limit_enabled = False
settings.app_env = "development"

from app.main import app  # noqa: E402

TEST_API_KEY = "AIzaSyTest-fake-key"


@pytest.fixture
async def client() -> AsyncGenerator[AsyncClient, None]:
    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as c:
        yield c


@pytest.fixture
def configured_settings() -> Iterator[Settings]:
    """Settings with a Gemini key, injected into the API via get_settings."""
    test_settings = settings.model_copy(update={"gemini_api_key": TEST_API_KEY})
    app.dependency_overrides[get_settings] = lambda: test_settings
    yield test_settings
    app.dependency_overrides.pop(get_settings, None)


@pytest.fixture
def mock_httpx() -> Iterator[AsyncMock]:
    """Patch the AsyncClient used by the Gemini client; set .post/.get return values."""
    with patch("app.gateway.gemini_client.httpx.AsyncClient") as mock_client_cls:
        mock_client = AsyncMock()
        mock_client.__aenter__ = AsyncMock(return_value=mock_client)
        mock_client.__aexit__ = AsyncMock(return_value=None)
        mock_client_cls.return_value = mock_client
        yield mock_client
