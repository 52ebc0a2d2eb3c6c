from typing import Optional, Any
import warnings

from .config import ScrapelessConfig
from .services.scraping import ScrapingRequestLike
from .services.universal import UniversalService


class Universal:
    """Universal scraping API: JS rendering and the web unlocker"""

    def __init__(self, config: Optional[ScrapelessConfig] = None):
        config = (config or ScrapelessConfig()).resolve()
        self.service = UniversalService(config.api_key, config.base_api_url, config.timeout)

    async def js_render(self, request: ScrapingRequestLike) -> Any:
        return await self.service.scrape(request)

    async def web_unlocker(self, request: ScrapingRequestLike) -> Any:
        return await self.service.scrape(request)

    async def akamaiweb_cookie(self, request: ScrapingRequestLike) -> Any:
        warnings.warn("akamaiweb_cookie is deprecated", DeprecationWarning, stacklevel=2)
        return await self.service.scrape(request)

    async def akamaiweb_sensor(self, request: ScrapingRequestLike) -> Any:
        warnings.warn("akamaiweb_sensor is deprecated", DeprecationWarning, stacklevel=2)
        return await self.service.scrape(request)
