from typing import Dict, Any, List, Union
import re
import uuid

from .base import LocalStore, utc_now
from ....errors import ScrapelessError
from ....models.storage import DatasetListParams, PaginationParams, as_params

ITEM_FILE = re.compile(r'^\d{8}\.json$')


class LocalDatasetStorage(LocalStore):
    store_dir = 'datasets'

    def _require_meta(self, dataset_id: str) -> Dict[str, Any]:
        if not dataset_id:
            raise ScrapelessError("dataset_id must not be empty", 400)
        meta = self._read_metadata(dataset_id)
        if meta is None:
            raise ScrapelessError("Dataset not found", 404)
        return meta

    def _item_files(self, dataset_id: str):
        return [p for p in self._record_files(dataset_id) if ITEM_FILE.match(p.name)]

    async def list_datasets(self, params: Union[DatasetListParams, Dict[str, Any], None] = None):
        params = as_params(params, DatasetListParams)
        return self.paginate(self._all_metadata(params.desc), params.page, params.page_size)

    async def get_dataset(self, dataset_id: str):
        return self._require_meta(dataset_id)

    async def create_dataset(self, name: str):
        if not name:
            raise ScrapelessError("name must not be empty", 400)
        if self._name_exists(name):
            raise ScrapelessError("The name of the dataset already exists", 400)

        dataset_id = str(uuid.uuid4())
        self._resource_dir(dataset_id).mkdir(parents=True)
        now = utc_now()
        meta = {
            'id': dataset_id,
            'name': name,
            'createdAt': now,
            'updatedAt': now,
            'fields': [],
            'stats': {'count': 0, 'size': 0},
        }
        self._write_metadata(dataset_id, meta)
        self.logger.info(f"Created local dataset {name} ({dataset_id})")
        return meta

    async def update_dataset(self, dataset_id: str, name: str):
        if not name:
            raise ScrapelessError("name must not be empty", 400)
        meta = self._require_meta(dataset_id)
        meta['name'] = name
        meta['updatedAt'] = utc_now()
        self._write_metadata(dataset_id, meta)
        return meta

    async def del_dataset(self, dataset_id: str):
        if not dataset_id:
            raise ScrapelessError("dataset_id must not be empty", 400)
        if not self._remove_dir(dataset_id):
            return {'success': False, 'message': 'Dataset not found'}
        return {'success': True, 'message': 'dataset deleted successfully'}

    async def add_items(self, dataset_id: str, items: List[Dict[str, Any]]):
        """Append items as numbered files and merge their keys into the field list"""
        meta = self._require_meta(dataset_id)
        files = self._item_files(dataset_id)
        next_index = int(files[-1].name[:8]) + 1 if files else 1

        fields = list(meta.get('fields') or [])
        directory = self._resource_dir(dataset_id)
        for offset, item in enumerate(items):
            for key in item:
                if key not in fields:
                    fields.append(key)
            self._write_json(directory / f"{next_index + offset:08d}.json", item)

        meta['fields'] = fields
        meta['updatedAt'] = utc_now()
        stats = meta.setdefault('stats', {'count': 0, 'size': 0})
        stats['count'] = stats.get('count', 0) + len(items)
        self._write_metadata(dataset_id, meta)
        return {'success': True, 'message': 'Items added'}

    async def get_items(self, dataset_id: str, params: Union[PaginationParams, Dict[str, Any], None] = None):
        if not dataset_id:
            raise ScrapelessError("dataset_id must not be empty", 400)
        params = as_params(params, PaginationParams)
        files = self._item_files(dataset_id)
        if params.desc:
            files.reverse()
        items = [self._read_json(path) for path in files]
        return self.paginate(items, params.page, params.page_size)
