from typing import Optional, Any

from pydantic import BaseModel, Field


class ActorRunOptions(BaseModel):
    CPU: Optional[float] = None
    memory: Optional[int] = Field(None, description="Memory in MB")
    timeout: Optional[int] = Field(None, description="Run timeout in seconds")
    version: Optional[str] = None


class ActorRunRequest(BaseModel):
    input: Any = None
    runOptions: ActorRunOptions = Field(default_factory=ActorRunOptions)
