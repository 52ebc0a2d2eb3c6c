from typing import Optional, Dict, Any, List, Callable, Awaitable
import asyncio
import logging
import time

from ..base import BaseService
from ...errors import (
    ScrapelessError,
    JobStartFailure,
    JobDataMissing,
    JobFailed,
    PollTimeout,
    translate_errors,
)
from ...models.crawl import JobKind, JobResult, assemble

RUNNING_STATUSES = frozenset({'active', 'paused', 'pending', 'queued', 'waiting', 'scraping'})
MIN_POLL_INTERVAL = 2

STATUS_ENDPOINTS: Dict[str, str] = {
    'crawl': '/api/v1/crawler/crawl/{id}',
    'batch_scrape': '/api/v1/crawler/batch/scrape/{id}',
    'scrape': '/api/v1/crawler/scrape/{id}',
    'extract': '/v1/extract/{id}',
}

# Kinds whose completed data is a list that may continue behind a `next` cursor
PAGINATED_KINDS = frozenset({'crawl', 'batch_scrape'})

JOB_LABELS = {
    'crawl': 'Crawl',
    'batch_scrape': 'Batch scrape',
    'scrape': 'Scrape',
    'extract': 'Extract',
}


class ScrapingCrawlBaseService(BaseService):
    """Job submission plus the status polling loop shared by scrape, crawl and extract."""

    raw_response = True

    def __init__(
        self,
        api_key: str,
        base_url: str,
        timeout: Optional[float] = 30.0,
        logger: Optional[logging.Logger] = None,
        sleep: Optional[Callable[[float], Awaitable[Any]]] = None,
        clock: Optional[Callable[[], float]] = None,
    ):
        super().__init__(api_key, base_url, timeout, logger)
        self._sleep = sleep or asyncio.sleep
        self._clock = clock or time.monotonic

    @staticmethod
    def _require_id(job_id: Optional[str], kind: JobKind):
        if not job_id:
            raise ScrapelessError(f"No {JOB_LABELS[kind].lower()} ID provided", 400)

    async def _submit(self, endpoint: str, body: Dict[str, Any], kind: JobKind) -> str:
        """POST a new job and return its id. Never retried."""
        label = JOB_LABELS[kind].lower()
        try:
            response = await self._request(endpoint, 'POST', body)
        except ScrapelessError as e:
            raise JobStartFailure(f"Failed to start {label} job: {e.message}", e.status_code) from e

        job_id = response.get('id') if isinstance(response, dict) else None
        if not job_id:
            self.logger.error(f"Job submission to {endpoint} returned no id")
            raise JobStartFailure(f"Failed to start {label} job")
        self.logger.info(f"Started {label} job {job_id}")
        return job_id

    async def _collect_pages(self, page: Dict[str, Any]) -> List[Any]:
        """
        Follow `next` cursors from a completed page, concatenating their data.

        Stops at the first page with empty data without following that
        page's own cursor.
        """
        data = list(page.get('data') or [])
        while page.get('next') and data:
            page = await self._request(page['next'])
            if not isinstance(page, dict):
                break
            page_data = page.get('data') or []
            if not page_data:
                break
            data.extend(page_data)
        return data

    async def _complete(self, kind: JobKind, job_id: str, response: Dict[str, Any]) -> JobResult:
        if 'data' not in response:
            self.logger.error(f"{JOB_LABELS[kind]} job {job_id} completed without data")
            raise JobDataMissing(f"{JOB_LABELS[kind]} job {job_id} completed but no data was returned")

        payload = dict(response)
        if kind in PAGINATED_KINDS:
            payload['data'] = await self._collect_pages(response)
            payload.pop('next', None)
        return assemble(kind, payload)

    async def monitor_job_status(
        self,
        job_id: str,
        poll_interval: float = 2,
        kind: JobKind = 'crawl',
        timeout: Optional[float] = None,
        max_attempts: Optional[int] = None,
    ) -> JobResult:
        """
        Poll a job until it reaches a terminal status.

        Args:
            job_id: Job identifier returned at submission
            poll_interval: Seconds between checks, floored to 2
            kind: Which job family the id belongs to
            timeout: Optional wall clock budget in seconds
            max_attempts: Optional cap on status requests

        Returns:
            The completed envelope with every result page concatenated

        Raises:
            JobDataMissing: completed without a data field
            JobFailed: failed, cancelled or unknown status
            PollTimeout: the timeout or attempt budget ran out
        """
        self._require_id(job_id, kind)
        endpoint = STATUS_ENDPOINTS[kind].format(id=job_id)
        deadline = None if timeout is None else self._clock() + timeout
        attempts = 0

        with translate_errors():
            while True:
                response = await self._request(endpoint)
                attempts += 1
                if not isinstance(response, dict):
                    response = {}
                status = response.get('status')

                if status == 'completed':
                    self.logger.info(f"{JOB_LABELS[kind]} job {job_id} completed after {attempts} checks")
                    return await self._complete(kind, job_id, response)

                if status not in RUNNING_STATUSES:
                    message = f"{JOB_LABELS[kind]} job {job_id} failed or was stopped. Status: {status}"
                    if response.get('error'):
                        message += f". Error: {response['error']}"
                    self.logger.error(message)
                    raise JobFailed(message, job_id=job_id, status=status)

                if max_attempts is not None and attempts >= max_attempts:
                    raise PollTimeout(
                        f"{JOB_LABELS[kind]} job {job_id} still {status} after {attempts} checks",
                        job_id=job_id,
                        attempts=attempts,
                    )
                if deadline is not None and self._clock() >= deadline:
                    raise PollTimeout(
                        f"{JOB_LABELS[kind]} job {job_id} still {status} after {timeout}s",
                        job_id=job_id,
                        attempts=attempts,
                    )

                self.logger.debug(f"{JOB_LABELS[kind]} job {job_id} is {status}, checking again")
                await self._sleep(max(poll_interval, MIN_POLL_INTERVAL))

    async def _status(
        self,
        kind: JobKind,
        job_id: Optional[str],
        get_all_data: bool = False,
        next_url: Optional[str] = None,
        params: Optional[Dict[str, Any]] = None,
    ) -> JobResult:
        """Single status read. Upstream failures come back as an ErrorResponse."""
        self._require_id(job_id, kind)
        endpoint = next_url or STATUS_ENDPOINTS[kind].format(id=job_id)
        with translate_errors():
            response = await self._request(endpoint, params=params)
            if not isinstance(response, dict):
                raise ScrapelessError(f"Unexpected {JOB_LABELS[kind].lower()} status response: {response!r}")
            payload = dict(response)
            if get_all_data and kind in PAGINATED_KINDS and payload.get('status') == 'completed' \
                    and 'data' in payload:
                payload['data'] = await self._collect_pages(response)
                payload.pop('next', None)
            return assemble(kind, payload, tag_errors=True)
