from typing import Dict, Any, Union

from .base import BaseService
from ..models.actor import ActorRunRequest
from ..models.storage import PaginationParams, as_params

RunRequestLike = Union[ActorRunRequest, Dict[str, Any]]


class ActorService(BaseService):
    """Runs and builds of deployed actors"""

    base_path = '/api/v1/actors'

    async def run(self, actor_id: str, data: RunRequestLike):
        body = as_params(data, ActorRunRequest).model_dump(exclude_none=True)
        self.logger.info(f"Starting run of actor {actor_id}")
        return await self._request(f'{self.base_path}/{actor_id}/runs', 'POST', body)

    async def get_run_info(self, run_id: str):
        return await self._request(f'{self.base_path}/runs/{run_id}')

    async def abort_run(self, actor_id: str, run_id: str):
        return await self._request(f'{self.base_path}/{actor_id}/runs/{run_id}', 'DELETE')

    async def build(self, actor_id: str):
        return await self._request(f'{self.base_path}/{actor_id}/builds', 'POST')

    async def get_build_status(self, actor_id: str, build_id: str):
        return await self._request(f'{self.base_path}/{actor_id}/builds/{build_id}')

    async def abort_build(self, actor_id: str, build_id: str):
        return await self._request(f'{self.base_path}/{actor_id}/builds/{build_id}', 'DELETE')

    async def get_run_list(self, params: Union[PaginationParams, Dict[str, Any], None] = None):
        query = as_params(params, PaginationParams).to_query()
        return await self._request(f'{self.base_path}/runs', params=query)
