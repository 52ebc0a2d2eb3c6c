from .base import BaseBrowser
from .playwright import PlaywrightBrowser, ScrapelessPage

__all__ = ['BaseBrowser', 'PlaywrightBrowser', 'ScrapelessPage']
