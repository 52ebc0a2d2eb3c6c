from typing import Optional

from .base import BaseService
from ..errors import ScrapelessError


class RunnerService(BaseService):
    """Runner control for the actor executing this process"""

    actor_id: Optional[str] = None

    def set_actor_id(self, actor_id: str):
        self.actor_id = actor_id

    async def abort_run(self, runner_id: str, run_id: str):
        if not self.actor_id:
            raise ScrapelessError("Actor ID not set, cannot abort runner", 400)
        return await self._request(f'/actors/{self.actor_id}/runners/{runner_id}/runs/{run_id}', 'DELETE')
