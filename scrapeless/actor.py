from typing import Optional, Dict, Any, List, Union
import json
import logging

from .config import (
    ScrapelessConfig,
    SCRAPELESS_ACTOR_ID,
    SCRAPELESS_RUN_ID,
    SCRAPELESS_INPUT,
    SCRAPELESS_DATASET_ID,
    SCRAPELESS_KV_NAMESPACE_ID,
    SCRAPELESS_BUCKET_ID,
    SCRAPELESS_QUEUE_ID,
    get_env,
    get_env_with_default,
)
from .services.browser import BrowserService
from .services.captcha import CaptchaService
from .services.proxies import ProxiesService
from .services.runner import RunnerService
from .services.storage import StorageService
from .models.storage import (
    DatasetListParams,
    KVValue,
    ObjectCreateParams,
    ObjectListParams,
    ObjectPaginationParams,
    ObjectUploadParams,
    PaginationParams,
    QueueCreateParams,
    QueuePushParams,
    QueueUpdateParams,
)

logger = logging.getLogger(__name__)


class Actor:
    """
    Runtime helper for code executing inside a Scrapeless actor.

    The platform injects the run's dataset, key-value namespace, bucket and
    queue ids through environment variables; the storage wrappers below act
    on those. Pass ``storage`` to swap the HTTP backend, e.g. for
    ``LocalStorageService`` during local development.
    """

    def __init__(self, config: Optional[ScrapelessConfig] = None, storage=None):
        config = (config or ScrapelessConfig()).resolve()

        self.actor_id = get_env_with_default(SCRAPELESS_ACTOR_ID, '')
        self.run_id = get_env_with_default(SCRAPELESS_RUN_ID, '')
        self.dataset_id = get_env_with_default(SCRAPELESS_DATASET_ID, '')
        self.namespace_id = get_env_with_default(SCRAPELESS_KV_NAMESPACE_ID, '')
        self.bucket_id = get_env_with_default(SCRAPELESS_BUCKET_ID, '')
        self.queue_id = get_env_with_default(SCRAPELESS_QUEUE_ID, '')

        self.runner = RunnerService(config.api_key, config.actor_api_url, config.timeout)
        if self.actor_id:
            self.runner.set_actor_id(self.actor_id)
        self.storage = storage or StorageService(config.api_key, config.storage_api_url, config.timeout)
        self.browser = BrowserService(config.api_key, config.browser_api_url, config.timeout,
                                      extension_base_url=config.base_api_url)
        self.captcha = CaptchaService(config.api_key, config.base_api_url, config.timeout)
        self.proxy = ProxiesService(config.api_key, config.base_api_url, config.timeout)

    def input(self) -> Any:
        """Actor input, JSON-decoded when possible"""
        raw = get_env(SCRAPELESS_INPUT)
        try:
            return json.loads(raw)
        except ValueError:
            logger.debug("Actor input is not JSON, returning raw string")
            return raw

    # Dataset

    async def list_datasets(self, params: Union[DatasetListParams, Dict[str, Any], None] = None):
        return await self.storage.dataset.list_datasets(params)

    async def add_items(self, items: List[Dict[str, Any]]):
        return await self.storage.dataset.add_items(self.dataset_id, items)

    async def get_items(self, params: Union[PaginationParams, Dict[str, Any], None] = None):
        return await self.storage.dataset.get_items(self.dataset_id, params)

    async def update_dataset(self, name: str):
        return await self.storage.dataset.update_dataset(self.dataset_id, name)

    async def delete_dataset(self):
        return await self.storage.dataset.del_dataset(self.dataset_id)

    # Key-value

    async def list_namespaces(self, params: Union[PaginationParams, Dict[str, Any], None] = None):
        return await self.storage.kv.list_namespaces(params)

    async def create_namespace(self, name: str):
        return await self.storage.kv.create_namespace(name)

    async def get_namespace(self):
        return await self.storage.kv.get_namespace(self.namespace_id)

    async def delete_namespace(self):
        return await self.storage.kv.del_namespace(self.namespace_id)

    async def rename_namespace(self, name: str):
        return await self.storage.kv.rename_namespace(self.namespace_id, name)

    async def list_keys(self, params: Union[PaginationParams, Dict[str, Any], None] = None):
        return await self.storage.kv.list_keys(self.namespace_id, params)

    async def delete_value(self, key: str):
        return await self.storage.kv.del_value(self.namespace_id, key)

    async def bulk_set_value(self, data: List[Union[KVValue, Dict[str, Any]]]):
        return await self.storage.kv.bulk_set_value(self.namespace_id, data)

    async def bulk_del_value(self, keys: List[str]):
        return await self.storage.kv.bulk_del_value(self.namespace_id, keys)

    async def set_value(self, data: Union[KVValue, Dict[str, Any]]):
        return await self.storage.kv.set_value(self.namespace_id, data)

    async def get_value(self, key: str):
        return await self.storage.kv.get_value(self.namespace_id, key)

    # Object

    async def list_buckets(self, params: Union[ObjectListParams, Dict[str, Any], None] = None):
        return await self.storage.object.list_buckets(params)

    async def create_bucket(self, data: Union[ObjectCreateParams, Dict[str, Any]]):
        return await self.storage.object.create_bucket(data)

    async def delete_bucket(self):
        return await self.storage.object.delete_bucket(self.bucket_id)

    async def get_bucket(self):
        return await self.storage.object.get_bucket(self.bucket_id)

    async def list(self, params: Union[ObjectPaginationParams, Dict[str, Any], None] = None):
        return await self.storage.object.list(self.bucket_id, params)

    async def get_object(self, object_id: str):
        return await self.storage.object.get(self.bucket_id, object_id)

    async def put_object(self, data: Union[ObjectUploadParams, Dict[str, Any]]):
        return await self.storage.object.put(self.bucket_id, data)

    async def delete_object(self, object_id: str):
        return await self.storage.object.delete(self.bucket_id, object_id)

    # Queue

    async def list_queues(self, params: Union[PaginationParams, Dict[str, Any], None] = None):
        return await self.storage.queue.list(params)

    async def create_queue(self, data: Union[QueueCreateParams, Dict[str, Any]]):
        return await self.storage.queue.create(data)

    async def get_queue(self, name: str):
        return await self.storage.queue.get(name, self.queue_id)

    async def update_queue(self, data: Union[QueueUpdateParams, Dict[str, Any]]):
        return await self.storage.queue.update(self.queue_id, data)

    async def delete_queue(self):
        return await self.storage.queue.delete(self.queue_id)

    async def push_message(self, data: Union[QueuePushParams, Dict[str, Any]]):
        return await self.storage.queue.push(self.queue_id, data)

    async def pull_message(self, limit: Optional[int] = None):
        return await self.storage.queue.pull(self.queue_id, limit)

    async def ack_message(self, msg_id: str):
        return await self.storage.queue.ack(self.queue_id, msg_id)
