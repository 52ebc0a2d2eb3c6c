from typing import Dict, Any, Union
import asyncio

from .base import BaseService
from ..models.scraping import ScrapingTaskRequest

ScrapingRequestLike = Union[ScrapingTaskRequest, Dict[str, Any]]


def request_body(request: ScrapingRequestLike) -> Dict[str, Any]:
    if isinstance(request, ScrapingTaskRequest):
        return request.model_dump(exclude_none=True)
    return dict(request)


class ScrapingService(BaseService):
    """Actor based scraper API (scraper.amazon, scraper.google.search...)"""

    base_path = '/api/v1/scraper'

    async def create_task(self, request: ScrapingRequestLike) -> Dict[str, Any]:
        """Queue a scraping task. Always asynchronous; returns ``{"status", "data"}``"""
        body = {**request_body(request), 'async': True}
        return await self._request(f'{self.base_path}/request', 'POST', body, with_status=True)

    async def get_task_result(self, task_id: str) -> Dict[str, Any]:
        return await self._request(f'{self.base_path}/result/{task_id}', with_status=True)

    async def scrape(self, request: ScrapingRequestLike, poll_interval: float = 1) -> Any:
        """
        Run a scraping task and wait for its result.

        The API answers 200 once the result is ready; any other 2xx carries a
        taskId to poll.
        """
        body = {**request_body(request), 'async': False}
        response = await self._request(f'{self.base_path}/request', 'POST', body, with_status=True)
        if response['status'] == 200:
            return response['data']

        task_id = response['data']['taskId']
        self.logger.info(f"Scraping task {task_id} accepted, waiting for result")
        while True:
            await asyncio.sleep(poll_interval)
            result = await self.get_task_result(task_id)
            if result['status'] == 200:
                return result['data']
