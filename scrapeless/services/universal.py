from typing import Any

from .base import BaseService
from .scraping import ScrapingRequestLike, request_body


class UniversalService(BaseService):
    """Universal scraping API (js render, web unlocker)"""

    base_path = '/api/v1/unlocker'

    async def scrape(self, request: ScrapingRequestLike) -> Any:
        return await self._request(f'{self.base_path}/request', 'POST', request_body(request))
