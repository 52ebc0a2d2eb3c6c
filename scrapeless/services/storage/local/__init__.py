from typing import Optional
import logging

from .dataset import LocalDatasetStorage
from .kv import LocalKVStorage
from .object import LocalObjectStorage
from .queue import LocalQueueStorage


class LocalStorageService:
    """Filesystem double for StorageService, rooted at ``root``"""

    def __init__(self, root: str = 'storage', logger: Optional[logging.Logger] = None):
        self.dataset = LocalDatasetStorage(root, logger)
        self.kv = LocalKVStorage(root, logger)
        self.queue = LocalQueueStorage(root, logger)
        self.object = LocalObjectStorage(root, logger)


__all__ = [
    'LocalStorageService',
    'LocalDatasetStorage',
    'LocalKVStorage',
    'LocalQueueStorage',
    'LocalObjectStorage',
]
