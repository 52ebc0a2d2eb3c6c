from typing import Optional, Dict, Any, Union

from ..base import BaseService
from ...models.storage import (
    PaginationParams,
    QueueCreateParams,
    QueuePushParams,
    QueueUpdateParams,
    as_params,
)


class QueueStorage(BaseService):
    """Message queues with leased pulls and explicit acks"""

    base_path = '/api/v1/queue'

    async def list(self, params: Union[PaginationParams, Dict[str, Any], None] = None):
        query = as_params(params, PaginationParams).to_query()
        return await self._request(f'{self.base_path}/queues', params=query)

    async def create(self, data: Union[QueueCreateParams, Dict[str, Any]]):
        return await self._request(self.base_path, 'POST', as_params(data, QueueCreateParams).to_body())

    async def get(self, name: str, queue_id: Optional[str] = None):
        return await self._request(self.base_path, params={'name': name, 'id': queue_id or ''})

    async def update(self, queue_id: str, data: Union[QueueUpdateParams, Dict[str, Any]]):
        body = as_params(data, QueueUpdateParams).model_dump(exclude_none=True)
        return await self._request(f'{self.base_path}/{queue_id}', 'PUT', body)

    async def delete(self, queue_id: str):
        return await self._request(f'{self.base_path}/{queue_id}', 'DELETE')

    async def push(self, queue_id: str, params: Union[QueuePushParams, Dict[str, Any]]):
        body = as_params(params, QueuePushParams).model_dump(exclude_none=True)
        return await self._request(f'{self.base_path}/{queue_id}/push', 'POST', body)

    async def pull(self, queue_id: str, limit: Optional[int] = None):
        query = {'limit': limit} if limit is not None else None
        return await self._request(f'{self.base_path}/{queue_id}/pull', params=query)

    async def ack(self, queue_id: str, msg_id: str):
        return await self._request(f'{self.base_path}/{queue_id}/ack/{msg_id}', 'POST')
