from typing import Optional, Dict, Any, Union
from urllib.parse import urlencode
import json
import logging
import re

from .base import BaseService
from .extension import ExtensionService
from ..config import SCRAPELESS_BASE_API_URL, DEFAULT_BASE_API_URL, get_env_with_default
from ..errors import ScrapelessError
from ..models.browser import BrowserOptions

BrowserOptionsLike = Union[BrowserOptions, Dict[str, Any], None]


def _as_query_value(value: Any) -> Optional[str]:
    if value is None:
        return None
    if isinstance(value, bool):
        return 'true' if value else 'false'
    return str(value)


class BrowserService(BaseService):
    """Builds scraping browser WebSocket endpoints"""

    def __init__(self, api_key: str, base_url: str, timeout: Optional[float] = 30.0,
                 logger: Optional[logging.Logger] = None, extension_base_url: Optional[str] = None):
        super().__init__(api_key, base_url, timeout, logger)
        extension_base_url = extension_base_url or get_env_with_default(SCRAPELESS_BASE_API_URL, DEFAULT_BASE_API_URL)
        self.extension = ExtensionService(api_key, extension_base_url, timeout, logger)

    def _search_params(self, options: BrowserOptionsLike) -> str:
        if not isinstance(options, BrowserOptions):
            options = BrowserOptions.model_validate(options or {})

        params = {
            'token': self.api_key,
            'sessionName': options.session_name,
            'sessionTTL': _as_query_value(options.session_ttl),
            'sessionRecording': _as_query_value(options.session_recording),
            'proxyCountry': options.proxy_country,
            'proxyURL': options.proxy_url,
            'fingerprint': json.dumps(options.fingerprint, separators=(',', ':')) if options.fingerprint else None,
            'extensionIds': ','.join(options.extension_ids) if options.extension_ids else None,
            'profileId': options.profile_id,
            'profilePersist': _as_query_value(options.profile_persist),
        }
        if options.proxy_url:
            params.pop('proxyCountry')

        return urlencode({k: v for k, v in params.items() if v is not None and v != ''})

    def _ws_base(self) -> str:
        protocol = 'ws' if self.base_url.startswith('http://') else 'wss'
        return f"{protocol}://{re.sub(r'^.*?://', '', self.base_url)}"

    def create(self, options: BrowserOptionsLike = None) -> Dict[str, str]:
        """
        Build the browser endpoint locally without contacting the API.

        Returns:
            {"browserWSEndpoint": "wss://<host>/api/v2/browser?token=..."}
        """
        return {'browserWSEndpoint': f"{self._ws_base()}/api/v2/browser?{self._search_params(options)}"}

    async def create_async(self, options: BrowserOptionsLike = None) -> Dict[str, str]:
        return self.create(options)

    async def create_session(self, options: BrowserOptionsLike = None) -> Dict[str, str]:
        """Reserve a browser task on the server and return its dedicated endpoint"""
        task = await self._request(f"/api/v2/browser?{self._search_params(options)}", with_status=True)
        data = task['data']

        if not isinstance(data, dict) or not data.get('success'):
            message = f"Failed to create browser session: {json.dumps(data)}"
            self.logger.error(message)
            raise ScrapelessError(message)
        task_id = data.get('taskId')
        if not task_id:
            self.logger.error("Browser session response has no taskId")
            raise ScrapelessError("Failed to create browser session: taskId is missing")

        self.logger.info(f"Created browser session {task_id}")
        return {'browserWSEndpoint': f"{self._ws_base()}/browser/{task_id}?token={self.api_key}"}
