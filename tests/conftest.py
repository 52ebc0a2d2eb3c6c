import pytest
import sys
from pathlib import Path
from unittest.mock import AsyncMock, MagicMock

# Add project root to Python path to allow importing 'scrapeless'
sys.path.append(str(Path(__file__).parent.parent))


def make_response(status_code=200, payload=None, content_type='application/json', text=''):
    """Build a MagicMock shaped like a requests.Response"""
    response = MagicMock()
    response.status_code = status_code
    response.headers = {'content-type': content_type}
    if isinstance(payload, Exception):
        response.json.side_effect = payload
    else:
        response.json.return_value = payload
    response.text = text
    return response


@pytest.fixture
def fake_response():
    return make_response


@pytest.fixture
def sleep_mock():
    """Stand-in for asyncio.sleep that records the requested delays"""
    return AsyncMock(return_value=None)


@pytest.fixture
def scrapeless_env(monkeypatch):
    """Point every Scrapeless URL at a test host and set an API key"""
    monkeypatch.setenv('SCRAPELESS_API_KEY', 'sk_test_key')
    monkeypatch.setenv('SCRAPELESS_BASE_API_URL', 'https://api.test')
    monkeypatch.setenv('SCRAPELESS_ACTOR_API_URL', 'https://actor.test')
    monkeypatch.setenv('SCRAPELESS_STORAGE_API_URL', 'https://storage.test')
    monkeypatch.setenv('SCRAPELESS_BROWSER_API_URL', 'https://browser.test')
    monkeypatch.setenv('SCRAPELESS_CRAWL_API_URL', 'https://crawl.test')
    yield monkeypatch


@pytest.fixture
def no_scrapeless_env(monkeypatch):
    for key in ('SCRAPELESS_API_KEY', 'SCRAPELESS_BASE_API_URL', 'SCRAPELESS_ACTOR_API_URL',
                'SCRAPELESS_STORAGE_API_URL', 'SCRAPELESS_BROWSER_API_URL', 'SCRAPELESS_CRAWL_API_URL'):
        monkeypatch.delenv(key, raising=False)
    yield monkeypatch
