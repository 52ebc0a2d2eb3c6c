from datetime import datetime
from typing import Annotated, Optional, Dict, Any, List, Literal, Union

from pydantic import BaseModel, ConfigDict, Field, TypeAdapter, field_validator
from pydantic.alias_generators import to_camel

JobKind = Literal["scrape", "batch_scrape", "crawl", "extract"]

ScrapeFormat = Literal["markdown", "html", "rawHtml", "content", "links", "screenshot", "screenshot@fullPage"]


class CamelModel(BaseModel):
    """Snake_case attributes, camelCase on the wire"""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True, extra="allow")

    def to_payload(self) -> Dict[str, Any]:
        return self.model_dump(by_alias=True, exclude_none=True)


# ---- request parameters ----

class CrawlScrapeOptions(CamelModel):
    formats: Optional[List[ScrapeFormat]] = None
    headers: Optional[Dict[str, str]] = None
    include_tags: Optional[List[str]] = None
    exclude_tags: Optional[List[str]] = None
    only_main_content: Optional[bool] = None
    wait_for: Optional[int] = None
    timeout: Optional[int] = None


class ScrapeParams(CrawlScrapeOptions):
    browser_options: Optional[Dict[str, Any]] = None


class CrawlParams(CamelModel):
    include_paths: Optional[List[str]] = None
    exclude_paths: Optional[List[str]] = None
    max_depth: Optional[int] = None
    max_discovery_depth: Optional[int] = None
    limit: Optional[int] = None
    allow_backward_links: Optional[bool] = None
    allow_external_links: Optional[bool] = None
    ignore_sitemap: Optional[bool] = None
    scrape_options: Optional[CrawlScrapeOptions] = None
    deduplicate_similar_urls: Optional[bool] = Field(None, alias="deduplicateSimilarURLs")
    ignore_query_parameters: Optional[bool] = None
    regex_on_full_url: Optional[bool] = Field(None, alias="regexOnFullURL")
    delay: Optional[float] = Field(None, description="Seconds between scrapes")
    browser_options: Optional[Dict[str, Any]] = None


class ExtractParams(CamelModel):
    prompt: Optional[str] = None
    schema_: Optional[Any] = Field(None, alias="schema")
    system_prompt: Optional[str] = None
    allow_external_links: Optional[bool] = None
    enable_web_search: Optional[bool] = None
    include_subdomains: Optional[bool] = None
    show_sources: Optional[bool] = None
    scrape_options: Optional[CrawlScrapeOptions] = None


# ---- responses ----

class ScrapingCrawlDocument(CamelModel):
    url: Optional[str] = None
    markdown: Optional[str] = None
    html: Optional[str] = None
    raw_html: Optional[str] = None
    links: Optional[List[str]] = None
    extract: Optional[Any] = None
    json_: Optional[Any] = Field(None, alias="json")
    screenshot: Optional[str] = None
    metadata: Optional[Dict[str, Any]] = None
    title: Optional[str] = None
    description: Optional[str] = None


class JobEnvelope(CamelModel):
    """Common shape every job status is normalized into"""

    success: Optional[bool] = None
    status: Optional[str] = None
    total: Optional[int] = None
    completed: Optional[int] = None
    expires_at: Optional[datetime] = None
    next: Optional[str] = None
    error: Optional[str] = None


class PagedEnvelope(JobEnvelope):
    """Envelope whose documents arrive in pages; in-progress jobs may report `data: null`"""

    data: List[ScrapingCrawlDocument] = Field(default_factory=list)

    @field_validator("data", mode="before")
    @classmethod
    def _null_data(cls, value):
        return [] if value is None else value


class CrawlStatusResponse(PagedEnvelope):
    kind: Literal["crawl"] = "crawl"


class BatchScrapeStatusResponse(PagedEnvelope):
    kind: Literal["batch_scrape"] = "batch_scrape"


class ScrapeResponse(JobEnvelope):
    kind: Literal["scrape"] = "scrape"
    data: Optional[ScrapingCrawlDocument] = None
    warning: Optional[str] = None


class ExtractResponse(JobEnvelope):
    kind: Literal["extract"] = "extract"
    data: Optional[Any] = None
    warning: Optional[str] = None
    sources: Optional[Any] = None


class ErrorResponse(JobEnvelope):
    """Upstream reported success=false with an error message"""

    kind: Literal["error"] = "error"
    success: Literal[False] = False
    error: str
    job_kind: Optional[JobKind] = None
    data: Optional[Any] = None


class CrawlErrorsResponse(CamelModel):
    errors: List[Dict[str, Any]] = Field(default_factory=list)
    robots_blocked: List[str] = Field(default_factory=list)


JobResult = Annotated[
    Union[CrawlStatusResponse, BatchScrapeStatusResponse, ScrapeResponse, ExtractResponse, ErrorResponse],
    Field(discriminator="kind"),
]

_job_result_adapter = TypeAdapter(JobResult)


def assemble(kind: JobKind, payload: Dict[str, Any], tag_errors: bool = False) -> JobResult:
    """
    Normalize a raw job payload into the envelope for its kind.

    With ``tag_errors`` an upstream ``success: false`` carrying an ``error``
    string becomes an ErrorResponse instead of a regular envelope.
    """
    body = {k: v for k, v in payload.items() if k != "kind"}
    if tag_errors and body.get("success") is False and body.get("error"):
        return _job_result_adapter.validate_python({**body, "kind": "error", "job_kind": kind})
    return _job_result_adapter.validate_python({**body, "kind": kind})
