"""
Pytest configuration and shared fixtures for the test suite.
"""
import sys
from pathlib import Path
from typing import Any, Dict, List
from unittest.mock import AsyncMock, MagicMock

import pytest
import pytest_asyncio

# Add the source root to Python path
project_root = Path(__file__).parent.parent
sys.path.insert(0, str(project_root / "src"))

from captcha_client.captcha import declaration  # noqa: E402
from captcha_client.solver import CaptchaSolver, ITransport  # noqa: E402


@pytest.fixture
def api_key() -> str:
    return "test_api_key"


@pytest.fixture
def mock_transport():
    """Mock transport; script responses through ``post.side_effect``."""
    transport = MagicMock(spec=ITransport)
    transport.post = AsyncMock()
    transport.close = AsyncMock()
    return transport


@pytest.fixture
def solver(api_key, mock_transport):
    """Solver wired to the mock transport."""
    return CaptchaSolver(api_key, transport=mock_transport)


@pytest.fixture
def isolated_registry():
    """Restore the captcha registry after a test declares its own variants."""
    saved = dict(declaration._registry)
    yield
    declaration._registry.clear()
    declaration._registry.update(saved)


@pytest_asyncio.fixture
async def fake_api_server():
    """Run an in-process stand-in for the task API.

    Yields a dict with the server's ``base_url``, a ``responses`` mapping of
    route to a list of JSON bodies (or raw strings) served in order, and the
    ``requests`` received as ``(route, body)`` pairs.
    """
    from aiohttp import web

    responses: Dict[str, List[Any]] = {}
    requests: List[Any] = []

    async def handle(request):
        route = request.match_info["route"]
        requests.append((route, await request.json()))
        queue = responses.get(route)
        if not queue:
            return web.Response(status=404, text="no scripted response")
        body = queue.pop(0)
        if isinstance(body, str):
            return web.Response(text=body, content_type="text/plain")
        return web.json_response(body)

    app = web.Application()
    app.router.add_post('/{route}', handle)

    runner = web.AppRunner(app)
    await runner.setup()
    site = web.TCPSite(runner, '127.0.0.1', 0)
    await site.start()

    port = site._server.sockets[0].getsockname()[1]
    base_url = f"http://127.0.0.1:{port}/"

    yield {"base_url": base_url, "responses": responses, "requests": requests}

    await runner.cleanup()


@pytest.fixture
def mock_env_vars(monkeypatch):
    """Mock environment variables for testing."""
    test_env = {
        "TWOCAPTCHA_API_KEY": "env_api_key",
        "TWOCAPTCHA_LANGUAGE_POOL": "rn",
        "TWOCAPTCHA_CALLBACK_URL": "https://example.com/pingback",
    }

    for key, value in test_env.items():
        monkeypatch.setenv(key, value)

    return test_env


def pytest_configure(config):
    """Configure pytest with custom markers."""
    config.addinivalue_line(
        "markers", "slow: marks tests as slow (deselect with '-m \"not slow\"')"
    )
    config.addinivalue_line(
        "markers", "integration: marks tests as integration tests"
    )
    config.addinivalue_line(
        "markers", "unit: marks tests as unit tests"
    )
