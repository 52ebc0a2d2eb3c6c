import pytest
import time
from unittest.mock import patch

from scrapeless.errors import ScrapelessError
from scrapeless.services.storage.local import LocalStorageService


@pytest.fixture
def local(tmp_path):
    return LocalStorageService(root=str(tmp_path))


class TestLocalDataset:
    """Datasets on disk"""

    @pytest.mark.asyncio
    async def test_items_are_numbered_files(self, local, tmp_path):
        """Test that items are stored as zero-padded numbered files and tracked in metadata"""
        dataset = await local.dataset.create_dataset('products')
        await local.dataset.add_items(dataset['id'], [{'title': 'a'}, {'title': 'b', 'price': 2}])
        await local.dataset.add_items(dataset['id'], [{'title': 'c'}])

        directory = tmp_path / 'datasets' / dataset['id']
        assert sorted(p.name for p in directory.iterdir()) == [
            '00000001.json', '00000002.json', '00000003.json', 'metadata.json'
        ]
        meta = await local.dataset.get_dataset(dataset['id'])
        assert meta['fields'] == ['title', 'price']
        assert meta['stats']['count'] == 3

    @pytest.mark.asyncio
    async def test_get_items_paginates(self, local):
        """Test that get_items slices items by page and page size"""
        dataset = await local.dataset.create_dataset('pages')
        await local.dataset.add_items(dataset['id'], [{'n': i} for i in range(5)])

        page = await local.dataset.get_items(dataset['id'], {'page': 2, 'page_size': 2})

        assert page['items'] == [{'n': 2}, {'n': 3}]
        assert page['total'] == 5
        assert page['totalPage'] == 3

    @pytest.mark.asyncio
    async def test_duplicate_name(self, local):
        """Test that creating a second dataset with the same name raises 400"""
        await local.dataset.create_dataset('dup')

        with pytest.raises(ScrapelessError) as exc_info:
            await local.dataset.create_dataset('dup')

        assert exc_info.value.status_code == 400

    @pytest.mark.asyncio
    async def test_missing_dataset(self, local):
        """Test that adding items to an unknown dataset raises 404"""
        with pytest.raises(ScrapelessError) as exc_info:
            await local.dataset.add_items('nope', [{'a': 1}])

        assert exc_info.value.status_code == 404

    @pytest.mark.asyncio
    async def test_delete(self, local):
        """Test that deleting a dataset succeeds once and then reports failure"""
        dataset = await local.dataset.create_dataset('gone')

        assert (await local.dataset.del_dataset(dataset['id']))['success'] is True
        assert (await local.dataset.del_dataset(dataset['id']))['success'] is False


class TestLocalKV:
    """Key-value namespaces on disk"""

    @pytest.mark.asyncio
    async def test_set_and_get(self, local):
        """Test that a stored value can be read back and counted in stats"""
        ns = await local.kv.create_namespace('cache')

        assert (await local.kv.set_value(ns['id'], {'key': 'greeting', 'value': 'hello'}))['success'] is True
        assert await local.kv.get_value(ns['id'], 'greeting') == 'hello'
        assert await local.kv.get_value(ns['id'], 'missing') == ''

        info = await local.kv.get_namespace(ns['id'])
        assert info['stats'] == {'count': 1, 'size': 5}

    @pytest.mark.asyncio
    async def test_metadata_key_is_reserved(self, local):
        """Test that the metadata key can be neither written nor deleted"""
        ns = await local.kv.create_namespace('reserved')

        assert (await local.kv.set_value(ns['id'], {'key': 'metadata', 'value': 'x'}))['success'] is False
        assert (await local.kv.del_value(ns['id'], 'metadata'))['success'] is False

    @pytest.mark.asyncio
    async def test_expired_keys_are_hidden(self, local):
        """Test that expired keys are hidden from reads and listings"""
        ns = await local.kv.create_namespace('ttl')
        await local.kv.set_value(ns['id'], {'key': 'short', 'value': 'x', 'expiration': 10})
        await local.kv.set_value(ns['id'], {'key': 'forever', 'value': 'y'})

        with patch('scrapeless.services.storage.local.kv.time.time', return_value=time.time() + 60):
            assert await local.kv.get_value(ns['id'], 'short') == ''
            keys = await local.kv.list_keys(ns['id'])

        assert [item['key'] for item in keys['items']] == ['forever']

    @pytest.mark.asyncio
    async def test_bulk_operations(self, local):
        """Test that bulk set reports rejected keys and bulk delete removes keys"""
        ns = await local.kv.create_namespace('bulk')

        result = await local.kv.bulk_set_value(ns['id'], [
            {'key': 'a', 'value': '1'},
            {'key': 'metadata', 'value': '2'},
        ])
        assert result == {'successfulKeyCount': 1, 'unsuccessfulKeys': ['metadata']}

        assert (await local.kv.bulk_del_value(ns['id'], ['a']))['success'] is True
        assert await local.kv.get_value(ns['id'], 'a') == ''

    @pytest.mark.asyncio
    async def test_key_cannot_escape_namespace(self, local, tmp_path):
        """Test that a key climbing out of the namespace is rejected and nothing is written"""
        ns = await local.kv.create_namespace('escape')

        with pytest.raises(ScrapelessError) as exc_info:
            await local.kv.set_value(ns['id'], {'key': '../../../escaped', 'value': 'v'})

        assert exc_info.value.status_code == 400
        assert not list(tmp_path.rglob('escaped.json'))

    @pytest.mark.asyncio
    async def test_key_with_separator_is_rejected(self, local):
        """Test that keys containing path separators raise ScrapelessError 400"""
        ns = await local.kv.create_namespace('nested')

        for key in ('a/b', 'a\\b'):
            with pytest.raises(ScrapelessError) as exc_info:
                await local.kv.set_value(ns['id'], {'key': key, 'value': 'v'})
            assert exc_info.value.status_code == 400

        with pytest.raises(ScrapelessError):
            await local.kv.get_value(ns['id'], '../metadata')

    @pytest.mark.asyncio
    async def test_namespace_id_cannot_escape_root(self, local):
        """Test that a namespace id pointing outside the store is rejected"""
        with pytest.raises(ScrapelessError) as exc_info:
            await local.kv.get_namespace('../datasets')

        assert exc_info.value.status_code == 400

    @pytest.mark.asyncio
    async def test_rename(self, local):
        """Test that renaming a namespace updates its metadata"""
        ns = await local.kv.create_namespace('old')

        assert (await local.kv.rename_namespace(ns['id'], 'new'))['success'] is True
        assert (await local.kv.get_namespace(ns['id']))['name'] == 'new'


class TestLocalQueue:
    """Leased pulls and acks"""

    @pytest.mark.asyncio
    async def test_push_applies_floors(self, local, tmp_path):
        """Test that pushed messages get the minimum retry and timeout"""
        queue = await local.queue.create({'name': 'jobs'})
        pushed = await local.queue.push(queue['id'], {'payload': 'x', 'retry': 1, 'timeout': 5})

        messages = await local.queue.pull(queue['id'])

        assert messages[0]['id'] == pushed['msgId']
        assert messages[0]['retry'] == 3
        assert messages[0]['timeout'] == 60
        assert messages[0]['retried'] == 1

    @pytest.mark.asyncio
    async def test_deadline_too_soon(self, local):
        """Test that a deadline inside the minimum window is rejected"""
        queue = await local.queue.create({'name': 'deadline'})

        with pytest.raises(ScrapelessError):
            await local.queue.push(queue['id'], {'payload': 'x', 'deadline': int(time.time()) + 10})

    @pytest.mark.asyncio
    async def test_leased_message_is_skipped_then_redelivered(self, local):
        """Test that a leased message is skipped until its lease expires"""
        queue = await local.queue.create({'name': 'lease'})
        await local.queue.push(queue['id'], {'payload': 'x'})

        assert len(await local.queue.pull(queue['id'])) == 1
        assert await local.queue.pull(queue['id']) == []

        with patch('scrapeless.services.storage.local.queue.time.time', return_value=time.time() + 61):
            redelivered = await local.queue.pull(queue['id'])

        assert redelivered[0]['retried'] == 2

    @pytest.mark.asyncio
    async def test_pull_limit_leases_only_returned_messages(self, local):
        """Test that pull leases only the messages it returns"""
        queue = await local.queue.create({'name': 'limit'})
        for n in range(3):
            await local.queue.push(queue['id'], {'payload': str(n)})

        first = await local.queue.pull(queue['id'], limit=2)
        second = await local.queue.pull(queue['id'], limit=2)

        assert len(first) == 2
        assert len(second) == 1
        assert {m['payload'] for m in first + second} == {'0', '1', '2'}

    @pytest.mark.asyncio
    async def test_ack_only_while_leased(self, local):
        """Test that ack succeeds only while the message is leased"""
        queue = await local.queue.create({'name': 'ack'})
        pushed = await local.queue.push(queue['id'], {'payload': 'x'})

        assert (await local.queue.ack(queue['id'], pushed['msgId']))['success'] is False
        await local.queue.pull(queue['id'])
        assert (await local.queue.ack(queue['id'], pushed['msgId']))['success'] is True
        assert (await local.queue.ack(queue['id'], pushed['msgId']))['success'] is False

    @pytest.mark.asyncio
    async def test_exhausted_retries_are_dropped(self, local):
        """Test that messages out of retries are dropped on pull"""
        queue = await local.queue.create({'name': 'retries'})
        await local.queue.push(queue['id'], {'payload': 'x'})

        now = time.time()
        for attempt in range(3):
            with patch('scrapeless.services.storage.local.queue.time.time', return_value=now + attempt * 61):
                assert len(await local.queue.pull(queue['id'])) == 1

        with patch('scrapeless.services.storage.local.queue.time.time', return_value=now + 3 * 61):
            assert await local.queue.pull(queue['id']) == []

    @pytest.mark.asyncio
    async def test_get_by_name(self, local):
        """Test that queues are looked up by name and unknown names raise"""
        queue = await local.queue.create({'name': 'named', 'description': 'd'})

        found = await local.queue.get('named')

        assert found['id'] == queue['id']
        with pytest.raises(ScrapelessError):
            await local.queue.get('unknown')


class TestLocalObject:
    """Object storage is not available offline"""

    @pytest.mark.asyncio
    async def test_not_implemented(self, local):
        """Test that local object storage raises NotImplementedError"""
        with pytest.raises(NotImplementedError):
            await local.object.list_buckets()
