from typing import Optional
import logging

from .base import ScrapingCrawlBaseService, RUNNING_STATUSES, MIN_POLL_INTERVAL
from .crawl import CrawlService
from .extract import ExtractService
from .scrape import ScrapeService


class ScrapingCrawlService:
    """Groups the scrape, crawl and extract services behind one API key"""

    def __init__(self, api_key: str, base_url: str, timeout: Optional[float] = 30.0,
                 logger: Optional[logging.Logger] = None, **poller_options):
        self.scrape = ScrapeService(api_key, base_url, timeout, logger, **poller_options)
        self.crawl = CrawlService(api_key, base_url, timeout, logger, **poller_options)
        self.extract = ExtractService(api_key, base_url, timeout, logger, **poller_options)


__all__ = [
    'ScrapingCrawlService',
    'ScrapingCrawlBaseService',
    'ScrapeService',
    'CrawlService',
    'ExtractService',
    'RUNNING_STATUSES',
    'MIN_POLL_INTERVAL',
]
