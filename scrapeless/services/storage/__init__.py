from typing import Optional
import logging

from .dataset import DatasetStorage
from .kv import KVStorage
from .object import ObjectStorage
from .queue import QueueStorage
from .vector import VectorStorage


class StorageService:
    """Dataset, key-value, object, queue and vector storage against the HTTP API"""

    def __init__(self, api_key: str, base_url: str, timeout: Optional[float] = 30.0,
                 logger: Optional[logging.Logger] = None):
        self.dataset = DatasetStorage(api_key, base_url, timeout, logger)
        self.kv = KVStorage(api_key, base_url, timeout, logger)
        self.object = ObjectStorage(api_key, base_url, timeout, logger)
        self.queue = QueueStorage(api_key, base_url, timeout, logger)
        self.vector = VectorStorage(api_key, base_url, timeout, logger)


__all__ = [
    'StorageService',
    'DatasetStorage',
    'KVStorage',
    'ObjectStorage',
    'QueueStorage',
    'VectorStorage',
]
