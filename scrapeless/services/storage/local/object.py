from .base import LocalStore


class LocalObjectStorage(LocalStore):
    """Object storage has no local counterpart yet"""

    store_dir = 'objects_stores'

    async def list_buckets(self, params=None):
        raise NotImplementedError("local object storage is not implemented")

    async def create_bucket(self, data):
        raise NotImplementedError("local object storage is not implemented")

    async def delete_bucket(self, bucket_id: str):
        raise NotImplementedError("local object storage is not implemented")

    async def get_bucket(self, bucket_id: str):
        raise NotImplementedError("local object storage is not implemented")

    async def list(self, bucket_id: str, params=None):
        raise NotImplementedError("local object storage is not implemented")

    async def get(self, bucket_id: str, object_id: str):
        raise NotImplementedError("local object storage is not implemented")

    async def put(self, bucket_id: str, data):
        raise NotImplementedError("local object storage is not implemented")

    async def delete(self, bucket_id: str, object_id: str):
        raise NotImplementedError("local object storage is not implemented")
