from typing import Optional, Dict, Any, Union

from .base import ScrapingCrawlBaseService
from ...errors import ScrapelessError, translate_errors
from ...models.crawl import CrawlParams, CrawlErrorsResponse, JobResult

CrawlParamsLike = Union[CrawlParams, Dict[str, Any], None]


def _params_payload(params: CrawlParamsLike) -> Dict[str, Any]:
    if params is None:
        return {}
    if isinstance(params, dict):
        params = CrawlParams.model_validate(params)
    return params.to_payload()


class CrawlService(ScrapingCrawlBaseService):
    """Crawl a site starting from one URL"""

    async def crawl_url(
        self,
        url: str,
        params: CrawlParamsLike = None,
        poll_interval: float = 2,
        timeout: Optional[float] = None,
        max_attempts: Optional[int] = None,
    ) -> JobResult:
        """Start a crawl and block until it finishes, returning every crawled page"""
        job_id = await self._submit('/api/v1/crawler/crawl', {'url': url, **_params_payload(params)}, 'crawl')
        return await self.monitor_job_status(
            job_id, poll_interval, kind='crawl', timeout=timeout, max_attempts=max_attempts
        )

    async def async_crawl_url(self, url: str, params: CrawlParamsLike = None) -> Dict[str, Any]:
        """Start a crawl and return the raw submission response (job id)"""
        with translate_errors():
            return await self._request('/api/v1/crawler/crawl', 'POST', {'url': url, **_params_payload(params)})

    async def check_crawl_status(
        self,
        job_id: Optional[str] = None,
        get_all_data: bool = False,
        next_url: Optional[str] = None,
        skip: Optional[int] = None,
        limit: Optional[int] = None,
    ) -> JobResult:
        """
        Read a crawl's status once.

        Args:
            job_id: Crawl job id
            get_all_data: Follow `next` cursors when the crawl is completed
            next_url: Pagination cursor to read instead of the first page
            skip: Records to skip
            limit: Maximum records to return

        Returns:
            A CrawlStatusResponse, or an ErrorResponse when upstream reports a failure
        """
        params = {k: v for k, v in {'skip': skip, 'limit': limit}.items() if v is not None}
        return await self._status('crawl', job_id, get_all_data, next_url, params or None)

    async def check_crawl_errors(self, job_id: str) -> CrawlErrorsResponse:
        if not job_id:
            raise ScrapelessError("No crawl ID provided", 400)
        with translate_errors():
            response = await self._request(f'/api/v1/crawler/crawl/{job_id}/errors', 'DELETE')
            return CrawlErrorsResponse.model_validate(response or {})

    async def cancel_crawl(self, job_id: str) -> Dict[str, Any]:
        if not job_id:
            raise ScrapelessError("No crawl ID provided", 400)
        with translate_errors():
            response = await self._request(f'/api/v1/crawler/crawl/{job_id}', 'DELETE')
            self.logger.info(f"Cancelled crawl job {job_id}")
            return response
