from typing import Optional, Dict, Any

from pydantic import BaseModel, ConfigDict


class ScrapingTaskRequest(BaseModel):
    """Actor request shared by the scraper and universal APIs"""

    model_config = ConfigDict(extra="allow")

    actor: str  # e.g. scraper.amazon, unlocker.webunlocker
    input: Dict[str, Any]
    proxy: Optional[Dict[str, Any]] = None
