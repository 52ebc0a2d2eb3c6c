from typing import Optional, Dict, Any, Union
import asyncio
import time

from .base import BaseService
from ..errors import PollTimeout
from ..models.captcha import CaptchaTask

CaptchaTaskLike = Union[CaptchaTask, Dict[str, Any]]


class CaptchaService(BaseService):
    base_path = '/api/v1'

    async def captcha_create(self, data: CaptchaTaskLike) -> Dict[str, Any]:
        """Create a solving task. Returns ``{"status", "data"}``"""
        if isinstance(data, CaptchaTask):
            data = data.model_dump(exclude_none=True)
        return await self._request(f'{self.base_path}/createTask', 'POST', data, with_status=True)

    async def captcha_result_get(self, task_id: str) -> Dict[str, Any]:
        return await self._request(f'{self.base_path}/getTaskResult/{task_id}', with_status=True)

    async def captcha_solver(self, data: CaptchaTaskLike, poll_interval: float = 1,
                             timeout: Optional[float] = None) -> Dict[str, Any]:
        """
        Create a task and wait until the solver reports success.

        Args:
            data: Captcha task
            poll_interval: Seconds between result checks
            timeout: Optional budget in seconds, unbounded by default

        Returns:
            The successful result body (``solution``, ``taskId``...)
        """
        task = await self.captcha_create(data)
        task_id = task['data']['taskId']
        self.logger.info(f"Created captcha task {task_id}")
        deadline = None if timeout is None else time.monotonic() + timeout

        while True:
            result = await self.captcha_result_get(task_id)
            if result['data'].get('success'):
                return result['data']
            if deadline is not None and time.monotonic() >= deadline:
                raise PollTimeout(f"Captcha task {task_id} not solved after {timeout}s", job_id=task_id)
            await asyncio.sleep(poll_interval)
