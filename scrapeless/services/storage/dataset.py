from typing import Dict, Any, List, Union

from ..base import BaseService
from ...models.storage import DatasetListParams, PaginationParams, as_params


class DatasetStorage(BaseService):
    """Datasets: append-only tables of JSON items"""

    base_path = '/api/v1/dataset'

    async def list_datasets(self, params: Union[DatasetListParams, Dict[str, Any], None] = None):
        query = as_params(params, DatasetListParams).to_query()
        return await self._request(self.base_path, params=query)

    async def create_dataset(self, name: str):
        return await self._request(self.base_path, 'POST', {'name': name})

    async def update_dataset(self, dataset_id: str, name: str):
        return await self._request(f'{self.base_path}/{dataset_id}', 'PUT', {'name': name})

    async def del_dataset(self, dataset_id: str):
        return await self._request(f'{self.base_path}/{dataset_id}', 'DELETE')

    async def add_items(self, dataset_id: str, items: List[Dict[str, Any]]):
        return await self._request(f'{self.base_path}/{dataset_id}/items', 'POST', {'items': items})

    async def get_items(self, dataset_id: str, params: Union[PaginationParams, Dict[str, Any], None] = None):
        query = as_params(params, PaginationParams).to_query()
        return await self._request(f'{self.base_path}/{dataset_id}/items', params=query)

    async def get_dataset(self, dataset_id: str):
        return await self._request(f'{self.base_path}/{dataset_id}')
