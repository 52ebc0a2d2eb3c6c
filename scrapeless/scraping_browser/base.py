from typing import Optional
import logging

from ..config import ScrapelessConfig
from ..services.browser import BrowserService

logger = logging.getLogger(__name__)

# CDP domain served by the Scrapeless browser
AGENT_LIVE_URL = 'Agent.liveURL'
AGENT_CLICK = 'Agent.click'
AGENT_TYPE = 'Agent.type'
CAPTCHA_SET_AUTO_SOLVE = 'Captcha.setAutoSolve'
CAPTCHA_SOLVE = 'Captcha.solve'
CAPTCHA_DETECTED = 'Captcha.detected'
CAPTCHA_SOLVE_FINISHED = 'Captcha.solveFinished'
CAPTCHA_SOLVE_FAILED = 'Captcha.solveFailed'

CAPTCHA_DETECT_TIMEOUT = 30_000


class BaseBrowser:
    """Shared setup for drivers connecting to the Scrapeless scraping browser"""

    def __init__(self, config: Optional[ScrapelessConfig] = None):
        self.config = (config or ScrapelessConfig()).resolve()
        self.browser_service = BrowserService(
            self.config.api_key,
            self.config.browser_api_url,
            self.config.timeout,
            extension_base_url=self.config.base_api_url,
        )
