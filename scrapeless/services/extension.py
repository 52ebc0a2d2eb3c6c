from pathlib import Path
from typing import Optional, Dict, Any, List

from .base import BaseService
from ..errors import ScrapelessError

VALID_SUFFIXES = ['.zip']


class ExtensionService(BaseService):
    """Upload and manage browser extensions"""

    def _read_extension(self, file_path: str):
        path = Path(file_path)
        suffix = path.suffix.lower()
        if suffix not in VALID_SUFFIXES:
            raise ScrapelessError(
                f"Invalid file suffix: {suffix}. Supported suffixes: {', '.join(VALID_SUFFIXES)}", 400
            )
        return path.name, path.read_bytes()

    async def upload(self, file_path: str, name: str) -> Dict[str, Any]:
        file_name, content = self._read_extension(file_path)
        res = await self._request(
            '/browser/extensions/upload',
            'POST',
            files={'file': (file_name, content, 'application/zip')},
            data={'name': name},
            with_status=True,
        )
        self.logger.info(f"Uploaded extension {name} from {file_name}")
        return res['data']

    async def update(self, extension_id: str, file_path: str, name: Optional[str] = None) -> Dict[str, Any]:
        file_name, content = self._read_extension(file_path)
        res = await self._request(
            f'/browser/extensions/{extension_id}',
            'PUT',
            files={'file': (file_name, content, 'application/zip')},
            data={'name': name} if name else {},
            with_status=True,
        )
        return res['data']

    async def get(self, extension_id: str) -> Dict[str, Any]:
        res = await self._request(f'/browser/extensions/{extension_id}', with_status=True)
        return res['data']

    async def list(self) -> List[Dict[str, Any]]:
        res = await self._request('/browser/extensions/list', with_status=True)
        return res['data']

    async def delete(self, extension_id: str) -> Dict[str, Any]:
        res = await self._request(f'/browser/extensions/{extension_id}', 'DELETE', with_status=True)
        return res['data']
