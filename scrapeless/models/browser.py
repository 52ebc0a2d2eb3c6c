from typing import Optional, Dict, Any, List

from pydantic import BaseModel, Field


class BrowserOptions(BaseModel):
    """Scraping browser session options"""

    session_name: Optional[str] = ""
    session_ttl: Optional[int] = Field(180, description="Session lifetime in seconds")
    session_recording: Optional[bool] = None
    proxy_country: Optional[str] = "ANY"
    proxy_url: Optional[str] = Field(None, description="Custom proxy, replaces proxy_country")
    fingerprint: Optional[Dict[str, Any]] = None
    extension_ids: Optional[List[str]] = None
    profile_id: Optional[str] = None
    profile_persist: Optional[bool] = None
