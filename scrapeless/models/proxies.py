from typing import Optional

from pydantic import BaseModel, Field


class ProxyOptions(BaseModel):
    """Residential proxy configuration"""

    country: str = Field(..., description="Country code, e.g. US, UK, JP")
    session_duration: int = Field(..., description="Sticky session length in minutes")
    session_id: str
    gateway: str = Field(..., description="Gateway host:port")
    type: str = "residential"
    state: Optional[str] = None
    city: Optional[str] = None
