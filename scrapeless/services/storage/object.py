from typing import Dict, Any, Union

from ..base import BaseService
from ...models.storage import (
    ObjectCreateParams,
    ObjectListParams,
    ObjectPaginationParams,
    ObjectUploadParams,
    as_params,
)


class ObjectStorage(BaseService):
    """Buckets of binary objects"""

    base_path = '/api/v1/object'

    async def list_buckets(self, params: Union[ObjectListParams, Dict[str, Any], None] = None):
        query = as_params(params, ObjectListParams).to_query()
        return await self._request(f'{self.base_path}/buckets', params=query)

    async def create_bucket(self, data: Union[ObjectCreateParams, Dict[str, Any]]):
        body = as_params(data, ObjectCreateParams).model_dump(exclude_none=True)
        return await self._request(f'{self.base_path}/buckets', 'POST', body)

    async def delete_bucket(self, bucket_id: str):
        return await self._request(f'{self.base_path}/buckets/{bucket_id}', 'DELETE')

    async def get_bucket(self, bucket_id: str):
        return await self._request(f'{self.base_path}/buckets/{bucket_id}')

    async def list(self, bucket_id: str, params: Union[ObjectPaginationParams, Dict[str, Any], None] = None):
        query = as_params(params, ObjectPaginationParams).to_query()
        return await self._request(f'{self.base_path}/buckets/{bucket_id}/objects', params=query)

    async def get(self, bucket_id: str, object_id: str):
        return await self._request(f'{self.base_path}/buckets/{bucket_id}/{object_id}')

    async def put(self, bucket_id: str, data: Union[ObjectUploadParams, Dict[str, Any]]):
        upload = as_params(data, ObjectUploadParams)
        form = {}
        if upload.actor_id:
            form['actorId'] = upload.actor_id
        if upload.run_id:
            form['runId'] = upload.run_id
        return await self._request(
            f'{self.base_path}/buckets/{bucket_id}/object',
            'POST',
            files={'file': (upload.filename, upload.file)},
            data=form,
        )

    async def delete(self, bucket_id: str, object_id: str):
        return await self._request(f'{self.base_path}/buckets/{bucket_id}/{object_id}', 'DELETE')
