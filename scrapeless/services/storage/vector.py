from typing import Optional, Dict, Any, List, Union

from ..base import BaseService
from ...models.storage import PaginationParams, as_params


class VectorStorage(BaseService):
    """Vector collections and their documents"""

    base_path = '/api/v1/vector'

    async def list_collections(self, params: Union[PaginationParams, Dict[str, Any], None] = None):
        query = as_params(params, PaginationParams).to_query()
        return await self._request(self.base_path, params=query)

    async def create_collection(self, data: Dict[str, Any]):
        """data: name, dimension, description..."""
        return await self._request(self.base_path, 'POST', data)

    async def update_collection(self, collection_id: str, name: str, description: Optional[str] = None):
        body = {'name': name}
        if description is not None:
            body['description'] = description
        return await self._request(f'{self.base_path}/{collection_id}', 'PUT', body)

    async def del_collection(self, collection_id: str):
        return await self._request(f'{self.base_path}/{collection_id}', 'DELETE')

    async def get_collection(self, collection_id: str):
        return await self._request(f'{self.base_path}/{collection_id}')

    async def create_docs(self, collection_id: str, docs: List[Dict[str, Any]]):
        return await self._request(f'{self.base_path}/{collection_id}/docs', 'POST', {'docs': docs})

    async def update_docs(self, collection_id: str, docs: List[Dict[str, Any]]):
        return await self._request(f'{self.base_path}/{collection_id}/docs', 'PUT', {'docs': docs})

    async def upsert_docs(self, collection_id: str, docs: List[Dict[str, Any]]):
        return await self._request(f'{self.base_path}/{collection_id}/docs/upsert', 'POST', {'docs': docs})

    async def del_docs(self, collection_id: str, ids: List[str]):
        return await self._request(f'{self.base_path}/{collection_id}/docs', 'DELETE', {'ids': ids})

    async def query_docs(self, collection_id: str, params: Dict[str, Any]):
        """params: vector, topk, includeVector, filter..."""
        return await self._request(f'{self.base_path}/{collection_id}/docs/query', 'POST', params)

    async def query_docs_by_ids(self, collection_id: str, ids: List[str]):
        return await self._request(f'{self.base_path}/{collection_id}/docs', params={'ids': ids})
