from typing import Dict, Any, List, Union
import time
import uuid

from .base import LocalStore, utc_now
from ....errors import ScrapelessError
from ....models.storage import KVValue, PaginationParams, as_params

RESERVED_KEYS = {'metadata'}


class LocalKVStorage(LocalStore):
    """Key-value namespaces, one ``{key}.json`` file per key"""

    store_dir = 'kv_stores'

    def _key_path(self, namespace_id: str, key: str):
        return self._resource_dir(namespace_id) / f"{self._safe_name(key, 'key')}.json"

    @staticmethod
    def _expired(record: Dict[str, Any]) -> bool:
        expire_at = record.get('expireAt')
        return bool(expire_at) and expire_at < time.time()

    def _live_records(self, namespace_id: str) -> List[Dict[str, Any]]:
        records = [self._read_json(path) for path in self._record_files(namespace_id)]
        return [r for r in records if not self._expired(r)]

    def _with_stats(self, meta: Dict[str, Any]) -> Dict[str, Any]:
        records = self._live_records(meta['id'])
        return {
            **meta,
            'stats': {'count': len(records), 'size': sum(r.get('size', 0) for r in records)},
        }

    async def list_namespaces(self, params: Union[PaginationParams, Dict[str, Any], None] = None):
        params = as_params(params, PaginationParams)
        page = self.paginate(self._all_metadata(params.desc), params.page, params.page_size)
        page['items'] = [self._with_stats(meta) for meta in page['items']]
        return page

    async def create_namespace(self, name: str):
        if not name:
            raise ScrapelessError("Namespace name must not be empty", 400)
        if self._name_exists(name):
            raise ScrapelessError("The name of the namespace already exists", 400)

        namespace_id = str(uuid.uuid4())
        self._resource_dir(namespace_id).mkdir(parents=True)
        now = utc_now()
        meta = {'id': namespace_id, 'name': name, 'createdAt': now, 'updatedAt': now, 'actorId': '', 'runId': ''}
        self._write_metadata(namespace_id, meta)
        return {**meta, 'stats': {'count': 0, 'size': 0}}

    async def get_namespace(self, namespace_id: str):
        if not namespace_id:
            raise ScrapelessError("namespace_id must not be empty", 400)
        meta = self._read_metadata(namespace_id)
        if meta is None:
            raise ScrapelessError("Namespace not found", 404)
        return self._with_stats(meta)

    async def del_namespace(self, namespace_id: str):
        if not namespace_id:
            return {'success': False}
        return {'success': self._remove_dir(namespace_id)}

    async def rename_namespace(self, namespace_id: str, name: str):
        if not namespace_id or not name:
            return {'success': False}
        meta = self._read_metadata(namespace_id)
        if meta is None:
            return {'success': False}
        meta['name'] = name
        meta['updatedAt'] = utc_now()
        self._write_metadata(namespace_id, meta)
        return {'success': True}

    async def list_keys(self, namespace_id: str, params: Union[PaginationParams, Dict[str, Any], None] = None):
        if not namespace_id:
            raise ScrapelessError("namespace_id must not be empty", 400)
        params = as_params(params, PaginationParams)
        items = [{'key': r['key'], 'size': r.get('size', 0)} for r in self._live_records(namespace_id)]
        return self.paginate(items, params.page, params.page_size)

    async def del_value(self, namespace_id: str, key: str):
        if not namespace_id:
            raise ScrapelessError("namespace_id must not be empty", 400)
        if key in RESERVED_KEYS:
            return {'success': False}
        path = self._key_path(namespace_id, key)
        if not path.is_file():
            return {'success': False}
        path.unlink()
        return {'success': True}

    async def bulk_set_value(self, namespace_id: str, data: List[Union[KVValue, Dict[str, Any]]]):
        successful = 0
        unsuccessful = []
        for item in data:
            item = as_params(item, KVValue)
            result = await self.set_value(namespace_id, item)
            if result['success']:
                successful += 1
            else:
                unsuccessful.append(item.key)
        return {'successfulKeyCount': successful, 'unsuccessfulKeys': unsuccessful}

    async def bulk_del_value(self, namespace_id: str, keys: List[str]):
        if not keys:
            return {'success': False}
        for key in keys:
            await self.del_value(namespace_id, key)
        return {'success': True}

    async def set_value(self, namespace_id: str, data: Union[KVValue, Dict[str, Any]]):
        """Write one key. An expiration of 0 or None keeps the key forever"""
        if not namespace_id:
            raise ScrapelessError("namespace_id must not be empty", 400)
        data = as_params(data, KVValue)
        if not data.key or not data.value or data.key in RESERVED_KEYS:
            return {'success': False}
        if self._read_metadata(namespace_id) is None:
            raise ScrapelessError("Namespace not found", 404)

        expiration = data.expiration or 0
        record = {
            'namespaceId': namespace_id,
            'key': data.key,
            'value': data.value,
            'expiration': expiration,
            'expireAt': time.time() + expiration if expiration else None,
            'size': len(data.value.encode('utf-8')),
        }
        self._write_json(self._key_path(namespace_id, data.key), record)
        return {'success': True}

    async def get_value(self, namespace_id: str, key: str) -> str:
        """Return the stored value, or an empty string for missing and expired keys"""
        if not key:
            raise ScrapelessError("key must not be empty", 400)
        path = self._key_path(namespace_id, key)
        if key in RESERVED_KEYS or not path.is_file():
            return ''
        record = self._read_json(path)
        if self._expired(record):
            return ''
        return record['value']
