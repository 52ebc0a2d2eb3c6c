from typing import Optional, Dict, Any
import asyncio
import logging

import requests

from ..errors import TransportError


class BaseService:
    """Owns an authenticated requests session against one Scrapeless API host.

    The blocking call runs in a worker thread so every service method can be
    awaited without stalling the event loop.
    """

    # Return the whole decoded body instead of its ``data`` field
    raw_response = False

    def __init__(self, api_key: str, base_url: str, timeout: Optional[float] = 30.0,
                 logger: Optional[logging.Logger] = None):
        self.api_key = api_key
        self.base_url = base_url.rstrip('/')
        self.timeout = timeout or None
        self.logger = logger or logging.getLogger(type(self).__module__)
        self.session = requests.Session()
        self.session.headers.update({
            'X-API-Key': api_key,
            'Accept': 'application/json'
        })

    def _url(self, endpoint: str) -> str:
        if endpoint.startswith(('http://', 'https://', 'ws://', 'wss://')):
            return endpoint
        return f"{self.base_url}{endpoint}"

    def _send(self, method: str, url: str, body, headers, files, data, params) -> requests.Response:
        kwargs: Dict[str, Any] = {
            'headers': headers or {},
            'timeout': self.timeout,
        }
        if params:
            kwargs['params'] = params
        if files is not None or data is not None:
            kwargs['files'] = files
            kwargs['data'] = data
        elif body is not None:
            kwargs['json'] = body
        return self.session.request(method, url, **kwargs)

    @staticmethod
    def _error_detail(payload: Any, status_code: int):
        """Build the error message and effective status code from an error body."""
        message = ''
        code = status_code
        if isinstance(payload, dict):
            if payload.get('error'):
                message = str(payload['error'])
            if payload.get('msg'):
                message = str(payload['msg'])
            if payload.get('code'):
                code = payload['code']
            trace_id = payload.get('traceId')
            if trace_id:
                if message:
                    message += f" (TraceID: {trace_id})"
                else:
                    message = f"failed with status {status_code} (TraceID: {trace_id})"
                return message, code, trace_id
        return message or f"failed with status {status_code}", code, None

    async def _request(
        self,
        endpoint: str,
        method: str = 'GET',
        body: Optional[Dict[str, Any]] = None,
        headers: Optional[Dict[str, str]] = None,
        with_status: bool = False,
        files: Optional[Dict[str, Any]] = None,
        data: Optional[Dict[str, Any]] = None,
        params: Optional[Dict[str, Any]] = None,
    ) -> Any:
        """
        Issue one request and decode the response.

        Args:
            endpoint: Path relative to ``base_url`` or an absolute URL (pagination cursors)
            method: HTTP verb
            body: JSON body
            headers: Extra headers merged over the session defaults
            with_status: Return ``{"status": code, "data": body}``
            files: Multipart files, sent instead of ``body``
            data: Multipart form fields
            params: Query string parameters

        Returns:
            The status/body pair, the raw body for ``raw_response`` services,
            or the body's ``data`` field otherwise

        Raises:
            TransportError: on connection failures, non-2xx replies and invalid JSON
        """
        url = self._url(endpoint)
        try:
            response = await asyncio.to_thread(self._send, method, url, body, headers, files, data, params)
        except requests.RequestException as e:
            message = f"Request {method} {url} failed: {e}"
            self.logger.error(message)
            raise TransportError(message) from e

        content_type = response.headers.get('content-type', '') or ''
        if 'application/json' in content_type:
            try:
                payload = response.json()
            except ValueError as e:
                message = f"Request {method} {url} returned invalid JSON"
                self.logger.error(message)
                raise TransportError(message, response.status_code if response.status_code >= 400 else None) from e
        else:
            payload = response.text

        if not 200 <= response.status_code < 300:
            detail, code, trace_id = self._error_detail(payload, response.status_code)
            message = f"Request {method} {url} {detail}"
            self.logger.error(message)
            raise TransportError(message, code, trace_id)

        if with_status:
            return {'status': response.status_code, 'data': payload}
        if self.raw_response:
            return payload
        if isinstance(payload, dict):
            return payload.get('data')
        return payload
