from typing import Optional, Dict, Any, List

from pydantic import BaseModel, Field


class PaginationParams(BaseModel):
    page: int = 1
    page_size: int = 10
    desc: Optional[bool] = None

    def to_query(self) -> Dict[str, Any]:
        query: Dict[str, Any] = {'page': self.page, 'pageSize': self.page_size}
        if self.desc is not None:
            query['desc'] = '1' if self.desc else '0'
        return query


class DatasetListParams(PaginationParams):
    actor_id: Optional[str] = None
    run_id: Optional[str] = None

    def to_query(self) -> Dict[str, Any]:
        query = super().to_query()
        if self.actor_id:
            query['actorId'] = self.actor_id
        if self.run_id:
            query['runId'] = self.run_id
        return query


class ObjectListParams(PaginationParams):
    actor: Optional[str] = None
    run_id: Optional[str] = None

    def to_query(self) -> Dict[str, Any]:
        query = super().to_query()
        if self.actor:
            query['actor'] = self.actor
        if self.run_id:
            query['runId'] = self.run_id
        return query


class ObjectPaginationParams(BaseModel):
    page: int = 1
    page_size: int = 10
    search: Optional[str] = None

    def to_query(self) -> Dict[str, Any]:
        query: Dict[str, Any] = {'page': self.page, 'pageSize': self.page_size}
        if self.search is not None:
            query['search'] = self.search
        return query


class Page(BaseModel):
    """One page of a listing"""

    items: List[Any] = Field(default_factory=list)
    total: int = 0
    page: int = 1
    page_size: int = Field(10, alias="pageSize")
    total_page: int = Field(0, alias="totalPage")

    model_config = {"populate_by_name": True}


class KVValue(BaseModel):
    key: str
    value: str
    expiration: Optional[int] = Field(None, description="Seconds until the key expires")


class ObjectCreateParams(BaseModel):
    name: str
    description: Optional[str] = None


class ObjectUploadParams(BaseModel):
    file: bytes
    filename: str = "file"
    actor_id: Optional[str] = None
    run_id: Optional[str] = None


class QueueCreateParams(BaseModel):
    name: str
    description: Optional[str] = None
    actor_id: Optional[str] = None
    run_id: Optional[str] = None

    def to_body(self) -> Dict[str, Any]:
        body: Dict[str, Any] = {'name': self.name}
        if self.description is not None:
            body['description'] = self.description
        if self.actor_id:
            body['actorId'] = self.actor_id
        if self.run_id:
            body['runId'] = self.run_id
        return body


class QueueUpdateParams(BaseModel):
    name: Optional[str] = None
    description: Optional[str] = None


class QueuePushParams(BaseModel):
    name: str = ""
    payload: str
    retry: int = 3
    timeout: int = Field(60, description="Lease length in seconds")
    deadline: Optional[int] = Field(None, description="Unix seconds after which the message is dropped")


def as_params(value: Any, model: type):
    """Accept a model instance, a plain dict or None for any params model"""
    if value is None:
        return model()
    if isinstance(value, model):
        return value
    return model.model_validate(value)
