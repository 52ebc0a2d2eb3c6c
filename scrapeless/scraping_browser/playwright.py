from typing import Optional, Dict, Any, List, Union
import asyncio
import json
import logging

from playwright.async_api import async_playwright, Page

from .base import (
    BaseBrowser,
    AGENT_LIVE_URL,
    AGENT_CLICK,
    AGENT_TYPE,
    CAPTCHA_SET_AUTO_SOLVE,
    CAPTCHA_SOLVE,
    CAPTCHA_DETECTED,
    CAPTCHA_SOLVE_FINISHED,
    CAPTCHA_SOLVE_FAILED,
    CAPTCHA_DETECT_TIMEOUT,
)
from ..config import ScrapelessConfig
from ..errors import ScrapelessError
from ..models.browser import BrowserOptions

logger = logging.getLogger(__name__)


def _with_options(params: Dict[str, Any], options: Optional[List[Dict[str, Any]]]) -> Dict[str, Any]:
    # the browser expects captcha options as a JSON string
    if options is not None:
        params['options'] = json.dumps(options)
    return params


class ScrapelessPage:
    """
    A playwright page with the Scrapeless agent and captcha commands attached.

    Anything not defined here is forwarded to the wrapped page, so it can
    be used wherever a playwright ``Page`` is expected.
    """

    def __init__(self, page: Page, cdp_session):
        self.page = page
        self.cdp = cdp_session

    def __getattr__(self, name):
        return getattr(self.page, name)

    async def live_url(self) -> Dict[str, Optional[str]]:
        """Return ``{"error", "liveURL"}``; errors are reported, never raised"""
        try:
            result = await self.cdp.send(AGENT_LIVE_URL) or {}
            return {'error': result.get('error') or None, 'liveURL': result.get('liveURL') or None}
        except Exception as e:
            logger.error(f"Error in live_url: {e}")
            return {'error': str(e), 'liveURL': None}

    async def real_click(self, selector: str):
        try:
            await self.cdp.send(AGENT_CLICK, {'selector': selector})
        except Exception as e:
            logger.error(f"Error in real_click on {selector}: {e}")
            raise ScrapelessError(f'Failed to click element "{selector}": {e}') from e

    async def real_fill(self, selector: str, text: str):
        try:
            await self.cdp.send(AGENT_TYPE, {'selector': selector, 'content': text})
        except Exception as e:
            logger.error(f"Error in real_fill on {selector}: {e}")
            raise ScrapelessError(f'Failed to type text into "{selector}": {e}') from e

    async def set_auto_solve(self, auto_solve: bool = True, options: Optional[List[Dict[str, Any]]] = None):
        """Turn automatic captcha solving on for this page, with per-captcha ``options``"""
        try:
            return await self.cdp.send(CAPTCHA_SET_AUTO_SOLVE, _with_options({'autoSolve': auto_solve}, options))
        except Exception as e:
            logger.error(f"Error in set_auto_solve: {e}")
            raise ScrapelessError(f"Failed to set auto solve: {e}") from e

    async def disable_captcha_auto_solve(self):
        try:
            return await self.cdp.send(CAPTCHA_SET_AUTO_SOLVE, {'autoSolve': False})
        except Exception as e:
            logger.error(f"Error in disable_captcha_auto_solve: {e}")
            raise ScrapelessError(f"Failed to disable captcha auto solve: {e}") from e

    async def solve_captcha(
        self,
        timeout: int = CAPTCHA_DETECT_TIMEOUT,
        options: Optional[List[Dict[str, Any]]] = None,
    ) -> Dict[str, Any]:
        """
        Ask the browser to detect and solve a captcha on the current page.

        ``timeout`` is the detection window in milliseconds.
        """
        try:
            return await self.cdp.send(CAPTCHA_SOLVE, _with_options({'detectTimeout': timeout}, options))
        except Exception as e:
            logger.error(f"Error in solve_captcha: {e}")
            raise ScrapelessError(f"Failed to solve captcha: {e}") from e

    async def wait_captcha_detected(self, timeout: int = CAPTCHA_DETECT_TIMEOUT) -> Dict[str, Any]:
        """Wait for ``Captcha.detected``; a timeout is returned as an unsuccessful result"""
        logger.debug(f"Waiting for captcha detected with timeout: {timeout}ms")
        return await self._wait_for_events(
            (CAPTCHA_DETECTED,), timeout, 'Timeout waiting for captcha detected'
        )

    async def wait_captcha_solved(self, timeout: int = CAPTCHA_DETECT_TIMEOUT) -> Dict[str, Any]:
        """Wait until the browser reports the captcha as solved or as failed"""
        logger.debug(f"Waiting for captcha solved with timeout: {timeout}ms")
        return await self._wait_for_events(
            (CAPTCHA_SOLVE_FINISHED, CAPTCHA_SOLVE_FAILED), timeout, 'Timeout waiting for captcha solved'
        )

    async def _wait_for_events(self, events, timeout: int, timeout_message: str) -> Dict[str, Any]:
        future = asyncio.get_running_loop().create_future()

        def resolve(response):
            if not future.done():
                future.set_result(response)

        for event in events:
            self.cdp.on(event, resolve)
        try:
            return await asyncio.wait_for(future, timeout / 1000)
        except asyncio.TimeoutError:
            return {'success': False, 'message': timeout_message}
        finally:
            for event in events:
                self.cdp.remove_listener(event, resolve)


class PlaywrightBrowser(BaseBrowser):
    """Playwright session on a Scrapeless cloud browser, connected over CDP"""

    def __init__(self, config: Optional[ScrapelessConfig] = None):
        super().__init__(config)
        self._playwright = None
        self.browser = None
        self.context = None

    @classmethod
    async def connect(
        cls,
        options: Union[BrowserOptions, Dict[str, Any], None] = None,
        config: Optional[ScrapelessConfig] = None,
    ) -> "PlaywrightBrowser":
        instance = cls(config)
        endpoint = instance.browser_service.create(options)['browserWSEndpoint']
        try:
            instance._playwright = await async_playwright().start()
            instance.browser = await instance._playwright.chromium.connect_over_cdp(endpoint)
            contexts = instance.browser.contexts
            instance.context = contexts[0] if contexts else await instance.browser.new_context()
        except Exception as e:
            logger.error(f"Failed to connect to browser: {e}")
            await instance.close()
            raise ScrapelessError(f"Failed to connect to browser: {e}") from e

        logger.info("Connected to Scrapeless browser")
        return instance

    async def new_page(self) -> ScrapelessPage:
        if self.context is None:
            logger.error("Attempted to create a page with no browser context")
            raise ScrapelessError("Browser context not initialized")
        try:
            page = await self.context.new_page()
            cdp_session = await self.context.new_cdp_session(page)
        except Exception as e:
            logger.error(f"Failed to create new page: {e}")
            raise ScrapelessError(f"Failed to create new page: {e}") from e
        return ScrapelessPage(page, cdp_session)

    async def close(self):
        """Close context, browser and the playwright driver. Errors are logged"""
        try:
            if self.context is not None:
                await self.context.close()
            if self.browser is not None:
                await self.browser.close()
                logger.info("Browser closed")
        except Exception as e:
            logger.error(f"Error closing browser: {e}")
        finally:
            self.context = None
            self.browser = None
            if self._playwright is not None:
                await self._playwright.stop()
                self._playwright = None

    async def __aenter__(self):
        return self

    async def __aexit__(self, exc_type, exc, tb):
        await self.close()
