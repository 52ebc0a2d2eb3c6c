from typing import Optional, Dict, Any, Union
import time
import uuid

from .base import LocalStore, utc_now
from ....errors import ScrapelessError
from ....models.storage import (
    PaginationParams,
    QueueCreateParams,
    QueuePushParams,
    QueueUpdateParams,
    as_params,
)

MIN_RETRY = 3
MIN_TIMEOUT = 60
MIN_DEADLINE_WINDOW = 300


class LocalQueueStorage(LocalStore):
    """
    Queues with one file per message.

    A pull leases each returned message for its ``timeout`` seconds by
    setting ``reenterTime``; an ack deletes the message only while that
    lease is still running. Messages past their deadline, already
    settled or out of retries are dropped on the next pull.
    """

    store_dir = 'queues_stores'

    def _require_queue(self, queue_id: str) -> Dict[str, Any]:
        if not queue_id:
            raise ScrapelessError("Queue id must not be empty", 400)
        meta = self._read_metadata(queue_id)
        if meta is None:
            raise ScrapelessError("Queue not found", 404)
        return meta

    async def list(self, params: Union[PaginationParams, Dict[str, Any], None] = None):
        params = as_params(params, PaginationParams)
        return self.paginate(self._all_metadata(params.desc), params.page, params.page_size)

    async def create(self, data: Union[QueueCreateParams, Dict[str, Any]]):
        data = as_params(data, QueueCreateParams)
        if not data.name:
            raise ScrapelessError("Queue name must not be empty", 400)
        if self._name_exists(data.name):
            raise ScrapelessError("The name of the queue already exists", 400)

        queue_id = str(uuid.uuid4())
        self._resource_dir(queue_id).mkdir(parents=True)
        now = utc_now()
        self._write_metadata(queue_id, {
            'id': queue_id,
            'name': data.name,
            'description': data.description or '',
            'createdAt': now,
            'updatedAt': now,
            'actorId': data.actor_id or '',
            'runId': data.run_id or '',
            'stats': {'failed': 0, 'pending': 0, 'running': 0, 'success': 0},
        })
        return {'id': queue_id, 'name': data.name}

    async def get(self, name: str, queue_id: Optional[str] = None):
        if not name:
            raise ScrapelessError("Queue name must not be empty", 400)
        for meta in self._all_metadata():
            if meta.get('name') == name:
                return meta
        raise ScrapelessError("Queue not found", 404)

    async def update(self, queue_id: str, data: Union[QueueUpdateParams, Dict[str, Any]]):
        meta = self._require_queue(queue_id)
        data = as_params(data, QueueUpdateParams)
        if data.name:
            meta['name'] = data.name
        if data.description:
            meta['description'] = data.description
        meta['updatedAt'] = utc_now()
        self._write_metadata(queue_id, meta)
        return None

    async def delete(self, queue_id: str):
        if not queue_id:
            raise ScrapelessError("Queue id must not be empty", 400)
        return {'success': self._remove_dir(queue_id)}

    async def push(self, queue_id: str, params: Union[QueuePushParams, Dict[str, Any]]):
        self._require_queue(queue_id)
        params = as_params(params, QueuePushParams)
        now = time.time()
        earliest_deadline = int(now) + MIN_DEADLINE_WINDOW
        deadline = params.deadline or earliest_deadline
        if deadline < earliest_deadline:
            raise ScrapelessError(f"Deadline must be after now + {MIN_DEADLINE_WINDOW}s", 400)

        msg_id = str(uuid.uuid4())
        self._write_json(self._resource_dir(queue_id) / f"{msg_id}.json", {
            'id': msg_id,
            'queueId': queue_id,
            'name': params.name,
            'payload': params.payload,
            'deadline': deadline,
            'retry': max(params.retry, MIN_RETRY),
            'timeout': max(params.timeout, MIN_TIMEOUT),
            'retried': 0,
            'successAt': 0,
            'failedAt': 0,
            'updateTime': now,
            'reenterTime': 0,
        })
        return {'msgId': msg_id}

    async def pull(self, queue_id: str, limit: Optional[int] = 1):
        """Lease up to ``limit`` available messages, oldest first"""
        if not queue_id:
            raise ScrapelessError("Queue id must not be empty", 400)
        now = time.time()
        available = []
        for path in self._record_files(queue_id):
            msg = self._read_json(path)
            if msg.get('reenterTime', 0) > now:
                continue
            if msg['successAt'] or msg['failedAt'] or msg['deadline'] < now or msg['retried'] >= msg['retry']:
                path.unlink()
                continue
            available.append((path, msg))

        available.sort(key=lambda pair: pair[1]['updateTime'])
        leased = []
        for path, msg in available[:limit or 1]:
            msg['reenterTime'] = now + msg['timeout']
            msg['retried'] += 1
            self._write_json(path, msg)
            leased.append(msg)
        return leased

    async def ack(self, queue_id: str, msg_id: str):
        if not queue_id:
            raise ScrapelessError("Queue id must not be empty", 400)
        path = self._resource_dir(queue_id) / f"{self._safe_name(msg_id, 'message id')}.json"
        if not path.is_file():
            return {'success': False}
        msg = self._read_json(path)
        if msg.get('reenterTime', 0) > time.time():
            path.unlink()
            return {'success': True}
        return {'success': False}
