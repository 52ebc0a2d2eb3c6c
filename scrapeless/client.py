from typing import Optional
import logging

from .config import ScrapelessConfig
from .services.actor import ActorService
from .services.browser import BrowserService
from .services.captcha import CaptchaService
from .services.crawl import ScrapingCrawlService
from .services.profiles import ProfilesService
from .services.proxies import ProxiesService
from .services.scraping import ScrapingService
from .services.storage import StorageService
from .services.universal import UniversalService

logger = logging.getLogger(__name__)


class ScrapelessClient:
    """
    One object holding every Scrapeless API service.

    Keyword overrides are merged over ``config``, so
    ``ScrapelessClient(api_key="sk_...")`` works without building a config.
    Unset values fall back to the environment, then to the public hosts.
    """

    def __init__(self, config: Optional[ScrapelessConfig] = None, **overrides):
        config = config or ScrapelessConfig()
        if overrides:
            config = config.model_copy(update=overrides)
        self.config = config.resolve()
        api_key, timeout = self.config.api_key, self.config.timeout

        self.actor = ActorService(api_key, self.config.actor_api_url, timeout)
        self.browser = BrowserService(api_key, self.config.browser_api_url, timeout,
                                      extension_base_url=self.config.base_api_url)
        self.storage = StorageService(api_key, self.config.storage_api_url, timeout)
        self.scraping = ScrapingService(api_key, self.config.base_api_url, timeout)
        self.universal = UniversalService(api_key, self.config.base_api_url, timeout)
        self.proxies = ProxiesService(api_key, self.config.base_api_url, timeout)
        self.captcha = CaptchaService(api_key, self.config.base_api_url, timeout)
        self.profiles = ProfilesService(api_key, self.config.base_api_url, timeout)
        self.scraping_crawl = ScrapingCrawlService(api_key, self.config.scraping_crawl_api_url, timeout)
        logger.debug("Scrapeless client initialized")
