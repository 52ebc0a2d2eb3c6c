from typing import Optional, Dict, Any, List, Union

from .base import ScrapingCrawlBaseService
from ...errors import translate_errors
from ...models.crawl import ScrapeParams, JobResult

ScrapeParamsLike = Union[ScrapeParams, Dict[str, Any], None]


def _params_payload(params: ScrapeParamsLike) -> Dict[str, Any]:
    if params is None:
        return {}
    if isinstance(params, dict):
        params = ScrapeParams.model_validate(params)
    return params.to_payload()


def _batch_body(urls: List[str], params: ScrapeParamsLike, ignore_invalid_urls: Optional[bool]) -> Dict[str, Any]:
    body: Dict[str, Any] = {'urls': list(urls), **_params_payload(params)}
    if ignore_invalid_urls is not None:
        body['ignoreInvalidURLs'] = ignore_invalid_urls
    return body


class ScrapeService(ScrapingCrawlBaseService):
    """Single page and batch scraping jobs"""

    async def scrape_url(
        self,
        url: str,
        params: ScrapeParamsLike = None,
        poll_interval: float = 2,
        timeout: Optional[float] = None,
        max_attempts: Optional[int] = None,
    ) -> JobResult:
        job_id = await self._submit('/api/v1/crawler/scrape', {'url': url, **_params_payload(params)}, 'scrape')
        return await self.monitor_job_status(
            job_id, poll_interval, kind='scrape', timeout=timeout, max_attempts=max_attempts
        )

    async def async_scrape_url(self, url: str, params: ScrapeParamsLike = None) -> Dict[str, Any]:
        with translate_errors():
            return await self._request('/api/v1/crawler/scrape', 'POST', {'url': url, **_params_payload(params)})

    async def check_scrape_status(self, job_id: str) -> JobResult:
        return await self._status('scrape', job_id)

    async def batch_scrape_urls(
        self,
        urls: List[str],
        params: ScrapeParamsLike = None,
        poll_interval: float = 2,
        ignore_invalid_urls: Optional[bool] = None,
        timeout: Optional[float] = None,
        max_attempts: Optional[int] = None,
    ) -> JobResult:
        """Scrape many URLs as one job and block until every page is collected"""
        job_id = await self._submit(
            '/api/v1/crawler/batch/scrape', _batch_body(urls, params, ignore_invalid_urls), 'batch_scrape'
        )
        return await self.monitor_job_status(
            job_id, poll_interval, kind='batch_scrape', timeout=timeout, max_attempts=max_attempts
        )

    async def async_batch_scrape_urls(
        self,
        urls: List[str],
        params: ScrapeParamsLike = None,
        ignore_invalid_urls: Optional[bool] = None,
    ) -> Dict[str, Any]:
        with translate_errors():
            return await self._request(
                '/api/v1/crawler/batch/scrape', 'POST', _batch_body(urls, params, ignore_invalid_urls)
            )

    async def check_batch_scrape_status(self, job_id: str, get_all_data: bool = False) -> JobResult:
        return await self._status('batch_scrape', job_id, get_all_data)
