from typing import Optional, Dict, Any

from pydantic import BaseModel


class CaptchaTask(BaseModel):
    """Captcha solving request"""

    actor: str
    input: Dict[str, Any]
    proxy: Optional[str] = None
