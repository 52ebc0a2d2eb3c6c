from contextlib import contextmanager
from typing import Optional
import logging

logger = logging.getLogger(__name__)


class ScrapelessError(Exception):
    """Base error for every failure raised by the SDK.

    Carries an HTTP-status-like ``status_code``: 400 for caller misuse,
    500 for unexpected failures, or the upstream status when one is known.
    """

    default_status: Optional[int] = None

    def __init__(self, message: str, status_code: Optional[int] = None):
        self.message = message
        self.status_code = status_code if status_code is not None else self.default_status
        super().__init__(f"[Scrapeless]: {message}")


class TransportError(ScrapelessError):
    """Non-2xx response or undecodable JSON body"""

    default_status = 500

    def __init__(self, message: str, status_code: Optional[int] = None, trace_id: Optional[str] = None):
        self.trace_id = trace_id
        super().__init__(message, status_code)


class JobStartFailure(ScrapelessError):
    """A job submission did not yield a job identifier"""

    default_status = 400


class JobDataMissing(ScrapelessError):
    """A job reported ``completed`` without a data payload"""

    default_status = 500


class JobFailed(ScrapelessError):
    """A job reached ``failed``/``cancelled`` or an unrecognized status"""

    default_status = 500

    def __init__(self, message: str, status_code: Optional[int] = None, job_id: Optional[str] = None,
                 status: Optional[str] = None):
        self.job_id = job_id
        self.status = status
        super().__init__(message, status_code)


class PollTimeout(ScrapelessError):
    """Polling exceeded the caller supplied deadline or attempt budget"""

    default_status = 408

    def __init__(self, message: str, job_id: Optional[str] = None, attempts: int = 0):
        self.job_id = job_id
        self.attempts = attempts
        super().__init__(message)


class MissingEnvironmentError(KeyError):
    """Required environment variable is not defined"""

    def __init__(self, key: str):
        self.key = key
        super().__init__(f"Environment variable {key} is not defined")

    def __str__(self):
        return self.args[0]


@contextmanager
def translate_errors(default_status: int = 500):
    """Re-raise SDK errors untouched and wrap anything else into ScrapelessError."""
    try:
        yield
    except ScrapelessError:
        raise
    except Exception as e:
        logger.error(f"Unexpected error: {e}")
        raise ScrapelessError(str(e), default_status) from e
