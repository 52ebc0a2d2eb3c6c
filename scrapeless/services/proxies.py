from typing import Dict, Any, Union
import random
import string
import time

from .base import BaseService
from ..models.proxies import ProxyOptions

ProxyOptionsLike = Union[ProxyOptions, Dict[str, Any]]

_BASE36 = string.digits + string.ascii_lowercase


def _to_base36(number: int) -> str:
    if number == 0:
        return '0'
    digits = []
    while number:
        number, remainder = divmod(number, 36)
        digits.append(_BASE36[remainder])
    return ''.join(reversed(digits))


class ProxiesService(BaseService):
    """Builds residential proxy URLs. The API key doubles as the proxy password."""

    def proxy(self, options: ProxyOptionsLike) -> str:
        if not isinstance(options, ProxyOptions):
            options = ProxyOptions.model_validate(options)

        proxy_part = f"-country_{options.country}"
        if options.state:
            proxy_part += f"-state_{options.state}"
        if options.city:
            proxy_part += f"-city_{options.city}"

        return (
            f"http://CHANNEL-proxy.{options.type}{proxy_part}"
            f"-r_{options.session_duration}m-s_{options.session_id}:{self.api_key}@{options.gateway}"
        )

    def create_proxy(self, options: ProxyOptionsLike) -> str:
        return self.proxy(options)

    @staticmethod
    def generate_session_id() -> str:
        """Timestamp plus random suffix, both base36"""
        timestamp = _to_base36(int(time.time() * 1000))
        suffix = ''.join(random.choices(_BASE36, k=8))
        return f"{timestamp}-{suffix}"
