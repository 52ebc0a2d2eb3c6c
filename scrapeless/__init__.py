from .actor import Actor
from .client import ScrapelessClient
from .config import ScrapelessConfig
from .errors import (
    ScrapelessError,
    TransportError,
    JobStartFailure,
    JobDataMissing,
    JobFailed,
    PollTimeout,
)
from .logger import setup_logging
from .scraping_crawl import ScrapingCrawl
from .universal import Universal

__version__ = "0.1.0"

__all__ = [
    'Actor',
    'ScrapelessClient',
    'ScrapelessConfig',
    'ScrapelessError',
    'TransportError',
    'JobStartFailure',
    'JobDataMissing',
    'JobFailed',
    'PollTimeout',
    'ScrapingCrawl',
    'Universal',
    'setup_logging',
]
