import json
import pytest
from unittest.mock import AsyncMock

from scrapeless import Actor, ScrapelessClient, ScrapingCrawl, Universal
from scrapeless.errors import ScrapelessError
from scrapeless.services.crawl import ScrapingCrawlService
from scrapeless.services.storage import StorageService
from scrapeless.services.storage.local import LocalStorageService


class TestClient:
    """Service wiring from configuration"""

    def test_services_use_their_hosts(self, scrapeless_env):
        """Test that each service is built on its configured host"""
        client = ScrapelessClient()

        assert client.actor.base_url == 'https://actor.test'
        assert client.storage.dataset.base_url == 'https://storage.test'
        assert client.browser.base_url == 'https://browser.test'
        assert client.browser.extension.base_url == 'https://api.test'
        assert client.scraping.base_url == 'https://api.test'
        assert client.captcha.base_url == 'https://api.test'
        assert client.profiles.base_url == 'https://api.test'
        assert isinstance(client.scraping_crawl, ScrapingCrawlService)
        assert client.scraping_crawl.crawl.base_url == 'https://crawl.test'

    def test_keyword_overrides(self, no_scrapeless_env):
        """Test that keyword arguments override the environment"""
        client = ScrapelessClient(api_key='sk_kw', timeout=10)

        assert client.config.api_key == 'sk_kw'
        assert client.proxies.api_key == 'sk_kw'
        assert client.universal.timeout == 10

    def test_requires_api_key(self, no_scrapeless_env):
        """Test that a client without an API key raises ScrapelessError"""
        with pytest.raises(ScrapelessError):
            ScrapelessClient()


class TestFacades:
    """ScrapingCrawl and Universal delegate to their services"""

    @pytest.mark.asyncio
    async def test_scraping_crawl_delegates(self, scrapeless_env):
        """Test that ScrapingCrawl.crawl_url runs the crawl service poller"""
        sleep = AsyncMock()
        crawler = ScrapingCrawl(sleep=sleep)
        crawler.service.crawl._request = AsyncMock(side_effect=[
            {'id': 'job1'},
            {'status': 'pending'},
            {'status': 'completed', 'success': True, 'data': [{'url': 'https://example.com'}]},
        ])

        result = await crawler.crawl_url('https://example.com', {'limit': 1}, poll_interval=0)

        assert result.data[0].url == 'https://example.com'
        sleep.assert_awaited_once_with(2)

    @pytest.mark.asyncio
    async def test_monitor_job_status_by_kind(self, scrapeless_env):
        """Test that monitor_job_status polls the endpoint for the given kind"""
        crawler = ScrapingCrawl(sleep=AsyncMock())
        crawler.service.crawl._request = AsyncMock(return_value={'status': 'completed', 'data': {'url': 'x'}})

        result = await crawler.monitor_job_status('s1', kind='scrape')

        assert result.kind == 'scrape'
        crawler.service.crawl._request.assert_awaited_once_with('/api/v1/crawler/scrape/s1')

    @pytest.mark.asyncio
    async def test_universal_deprecated_methods_warn(self, scrapeless_env):
        """Test that deprecated Universal helpers warn and still delegate"""
        universal = Universal()
        universal.service._request = AsyncMock(return_value={'cookie': 'abc'})

        with pytest.deprecated_call():
            result = await universal.akamaiweb_cookie({'actor': 'unlocker.akamaiweb', 'input': {}})

        assert result == {'cookie': 'abc'}
        assert await universal.js_render({'actor': 'unlocker.webunlocker', 'input': {}}) == {'cookie': 'abc'}


class TestActor:
    """Actor runtime bound to the run's storage ids"""

    @pytest.fixture
    def actor_env(self, scrapeless_env):
        scrapeless_env.setenv('SCRAPELESS_ACTOR_ID', 'actor1')
        scrapeless_env.setenv('SCRAPELESS_DATASET_ID', 'ds1')
        scrapeless_env.setenv('SCRAPELESS_KV_NAMESPACE_ID', 'ns1')
        scrapeless_env.setenv('SCRAPELESS_BUCKET_ID', 'bk1')
        scrapeless_env.setenv('SCRAPELESS_QUEUE_ID', 'q1')
        return scrapeless_env

    def test_input_json(self, actor_env):
        """Test that a JSON actor input is decoded"""
        actor_env.setenv('SCRAPELESS_INPUT', json.dumps({'url': 'https://example.com'}))

        assert Actor().input() == {'url': 'https://example.com'}

    def test_input_raw_string(self, actor_env):
        """Test that a non-JSON actor input is returned as the raw string"""
        actor_env.setenv('SCRAPELESS_INPUT', 'just text')

        assert Actor().input() == 'just text'

    def test_runner_gets_actor_id(self, actor_env):
        """Test that the runner is bound to the actor id from the environment"""
        actor = Actor()

        assert actor.runner.actor_id == 'actor1'
        assert isinstance(actor.storage, StorageService)

    @pytest.mark.asyncio
    async def test_wrappers_use_env_ids(self, actor_env):
        """Test that storage wrappers address the storage ids from the environment"""
        actor = Actor()
        actor.storage.dataset._request = AsyncMock(return_value=None)
        actor.storage.kv._request = AsyncMock(return_value='v')
        actor.storage.queue._request = AsyncMock(return_value=None)
        actor.storage.object._request = AsyncMock(return_value=None)

        await actor.add_items([{'a': 1}])
        assert await actor.get_value('k') == 'v'
        await actor.ack_message('m1')
        await actor.get_object('o1')

        assert actor.storage.dataset._request.await_args.args[0] == '/api/v1/dataset/ds1/items'
        assert actor.storage.kv._request.await_args.args[0] == '/api/v1/kv/ns1/k'
        assert actor.storage.queue._request.await_args.args[0] == '/api/v1/queue/q1/ack/m1'
        assert actor.storage.object._request.await_args.args[0] == '/api/v1/object/buckets/bk1/o1'

    @pytest.mark.asyncio
    async def test_local_storage_injection(self, scrapeless_env, tmp_path):
        """Test that an injected local storage double backs the actor wrappers"""
        local = LocalStorageService(root=str(tmp_path))
        dataset = await local.dataset.create_dataset('run-output')
        scrapeless_env.setenv('SCRAPELESS_DATASET_ID', dataset['id'])

        actor = Actor(storage=local)
        await actor.add_items([{'title': 'first'}])
        page = await actor.get_items()

        assert page['items'] == [{'title': 'first'}]
