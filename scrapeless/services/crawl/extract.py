from typing import Optional, Dict, Any, List, Union

from pydantic import BaseModel

from .base import ScrapingCrawlBaseService
from ...errors import ScrapelessError, JobFailed, translate_errors
from ...models.crawl import ExtractParams, JobResult

ExtractParamsLike = Union[ExtractParams, Dict[str, Any], None]

INVALID_SCHEMA = "Invalid schema. Schema must be either a pydantic model class or a JSON schema object."


def to_json_schema(schema: Any) -> Optional[Dict[str, Any]]:
    """Accept a pydantic model class or a JSON schema dict"""
    if schema is None:
        return None
    if isinstance(schema, dict):
        return schema
    if isinstance(schema, type) and issubclass(schema, BaseModel):
        try:
            return schema.model_json_schema()
        except Exception as e:
            raise ScrapelessError(INVALID_SCHEMA, 400) from e
    raise ScrapelessError(INVALID_SCHEMA, 400)


def _extract_body(urls: Optional[List[str]], params: ExtractParamsLike) -> Dict[str, Any]:
    if params is None:
        params = ExtractParams()
    elif isinstance(params, dict):
        params = ExtractParams.model_validate(params)
    body = params.model_dump(by_alias=True, exclude_none=True, exclude={'schema_'})
    if urls is not None:
        body['urls'] = list(urls)
    schema = to_json_schema(params.schema_)
    if schema is not None:
        body['schema'] = schema
    body['origin'] = 'api-sdk'
    return body


class ExtractService(ScrapingCrawlBaseService):
    """LLM extraction of structured data from one or more URLs"""

    async def extract_urls(
        self,
        urls: Optional[List[str]] = None,
        params: ExtractParamsLike = None,
        poll_interval: float = 2,
        timeout: Optional[float] = None,
        max_attempts: Optional[int] = None,
    ) -> JobResult:
        """
        Submit an extraction and wait for its result.

        Raises:
            ScrapelessError: invalid schema (400)
            JobFailed: the job finished without success=true, failed or was cancelled
        """
        body = _extract_body(urls, params)
        job_id = await self._submit('/v1/extract', body, 'extract')
        result = await self.monitor_job_status(
            job_id, poll_interval, kind='extract', timeout=timeout, max_attempts=max_attempts
        )
        if not result.success:
            message = f"Failed to extract data. Error: {result.error}"
            self.logger.error(f"Extract job {job_id}: {message}")
            raise JobFailed(message, job_id=job_id, status=result.status)
        return result

    async def async_extract_urls(self, urls: List[str], params: ExtractParamsLike = None) -> Dict[str, Any]:
        body = _extract_body(urls, params)
        with translate_errors():
            return await self._request('/v1/extract', 'POST', body)

    async def get_extract_status(self, job_id: str) -> JobResult:
        return await self._status('extract', job_id)
