from typing import Dict, Any, List, Union

from ..base import BaseService
from ...models.storage import KVValue, PaginationParams, as_params

KVValueLike = Union[KVValue, Dict[str, Any]]


class KVStorage(BaseService):
    """Key-value namespaces"""

    base_path = '/api/v1/kv'

    async def list_namespaces(self, params: Union[PaginationParams, Dict[str, Any], None] = None):
        query = as_params(params, PaginationParams).to_query()
        return await self._request(f'{self.base_path}/namespaces', params=query)

    async def create_namespace(self, name: str):
        return await self._request(f'{self.base_path}/namespaces', 'POST', {'name': name})

    async def get_namespace(self, namespace_id: str):
        return await self._request(f'{self.base_path}/{namespace_id}')

    async def del_namespace(self, namespace_id: str):
        return await self._request(f'{self.base_path}/{namespace_id}', 'DELETE')

    async def rename_namespace(self, namespace_id: str, name: str):
        return await self._request(f'{self.base_path}/{namespace_id}/rename', 'PUT', {'name': name})

    async def list_keys(self, namespace_id: str, params: Union[PaginationParams, Dict[str, Any], None] = None):
        query = as_params(params, PaginationParams).to_query()
        query.pop('desc', None)
        return await self._request(f'{self.base_path}/{namespace_id}/keys', params=query)

    async def del_value(self, namespace_id: str, key: str):
        return await self._request(f'{self.base_path}/{namespace_id}/{key}', 'DELETE')

    async def bulk_set_value(self, namespace_id: str, data: List[KVValueLike]):
        items = [as_params(item, KVValue).model_dump() for item in data]
        return await self._request(f'{self.base_path}/{namespace_id}/bulk', 'POST', {'Items': items})

    async def bulk_del_value(self, namespace_id: str, keys: List[str]):
        return await self._request(f'{self.base_path}/{namespace_id}/bulk', 'POST', {'keys': keys})

    async def set_value(self, namespace_id: str, data: KVValueLike):
        return await self._request(
            f'{self.base_path}/{namespace_id}/key', 'PUT', as_params(data, KVValue).model_dump()
        )

    async def get_value(self, namespace_id: str, key: str) -> str:
        return await self._request(f'{self.base_path}/{namespace_id}/{key}')
