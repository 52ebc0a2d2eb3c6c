from typing import Optional, Dict, Any, List

from .config import ScrapelessConfig
from .models.crawl import CrawlErrorsResponse, JobKind, JobResult
from .services.crawl import ScrapingCrawlService
from .services.crawl.crawl import CrawlParamsLike
from .services.crawl.extract import ExtractParamsLike
from .services.crawl.scrape import ScrapeParamsLike


class ScrapingCrawl:
    """
    Entry point for scrape, batch scrape, crawl and extract jobs.

    Blocking methods (``scrape_url``, ``crawl_url``...) submit a job and poll
    it to completion; ``async_*`` methods only submit; ``check_*`` methods
    read the status once.
    """

    def __init__(self, config: Optional[ScrapelessConfig] = None, **poller_options):
        config = (config or ScrapelessConfig()).resolve()
        self.service = ScrapingCrawlService(
            config.api_key, config.scraping_crawl_api_url, config.timeout, **poller_options
        )

    async def scrape_url(self, url: str, params: ScrapeParamsLike = None, poll_interval: float = 2,
                         timeout: Optional[float] = None, max_attempts: Optional[int] = None) -> JobResult:
        return await self.service.scrape.scrape_url(url, params, poll_interval, timeout, max_attempts)

    async def async_scrape_url(self, url: str, params: ScrapeParamsLike = None) -> Dict[str, Any]:
        return await self.service.scrape.async_scrape_url(url, params)

    async def check_scrape_status(self, job_id: str) -> JobResult:
        return await self.service.scrape.check_scrape_status(job_id)

    async def batch_scrape_urls(self, urls: List[str], params: ScrapeParamsLike = None, poll_interval: float = 2,
                                ignore_invalid_urls: Optional[bool] = None, timeout: Optional[float] = None,
                                max_attempts: Optional[int] = None) -> JobResult:
        return await self.service.scrape.batch_scrape_urls(
            urls, params, poll_interval, ignore_invalid_urls, timeout, max_attempts
        )

    async def async_batch_scrape_urls(self, urls: List[str], params: ScrapeParamsLike = None,
                                      ignore_invalid_urls: Optional[bool] = None) -> Dict[str, Any]:
        return await self.service.scrape.async_batch_scrape_urls(urls, params, ignore_invalid_urls)

    async def check_batch_scrape_status(self, job_id: str, get_all_data: bool = False) -> JobResult:
        return await self.service.scrape.check_batch_scrape_status(job_id, get_all_data)

    async def crawl_url(self, url: str, params: CrawlParamsLike = None, poll_interval: float = 2,
                        timeout: Optional[float] = None, max_attempts: Optional[int] = None) -> JobResult:
        return await self.service.crawl.crawl_url(url, params, poll_interval, timeout, max_attempts)

    async def async_crawl_url(self, url: str, params: CrawlParamsLike = None) -> Dict[str, Any]:
        return await self.service.crawl.async_crawl_url(url, params)

    async def check_crawl_status(self, job_id: Optional[str] = None, get_all_data: bool = False,
                                 next_url: Optional[str] = None, skip: Optional[int] = None,
                                 limit: Optional[int] = None) -> JobResult:
        return await self.service.crawl.check_crawl_status(job_id, get_all_data, next_url, skip, limit)

    async def check_crawl_errors(self, job_id: str) -> CrawlErrorsResponse:
        return await self.service.crawl.check_crawl_errors(job_id)

    async def cancel_crawl(self, job_id: str) -> Dict[str, Any]:
        return await self.service.crawl.cancel_crawl(job_id)

    async def monitor_job_status(self, job_id: str, poll_interval: float = 2, kind: JobKind = 'crawl',
                                 timeout: Optional[float] = None, max_attempts: Optional[int] = None) -> JobResult:
        return await self.service.crawl.monitor_job_status(job_id, poll_interval, kind, timeout, max_attempts)

    async def extract_urls(self, urls: Optional[List[str]] = None, params: ExtractParamsLike = None,
                           poll_interval: float = 2, timeout: Optional[float] = None,
                           max_attempts: Optional[int] = None) -> JobResult:
        return await self.service.extract.extract_urls(urls, params, poll_interval, timeout, max_attempts)

    async def async_extract_urls(self, urls: List[str], params: ExtractParamsLike = None) -> Dict[str, Any]:
        return await self.service.extract.async_extract_urls(urls, params)

    async def get_extract_status(self, job_id: str) -> JobResult:
        return await self.service.extract.get_extract_status(job_id)
