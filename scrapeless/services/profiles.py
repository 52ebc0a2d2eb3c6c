from typing import Optional, Dict, Any

from .base import BaseService


class ProfilesService(BaseService):
    """Persistent browser profiles"""

    base_path = '/browser/profiles'

    async def create(self, name: str) -> Dict[str, Any]:
        res = await self._request(self.base_path, 'POST', {'name': name}, with_status=True)
        return res['data']

    async def delete(self, profile_id: str) -> Dict[str, Any]:
        res = await self._request(f'{self.base_path}/{profile_id}', 'DELETE', with_status=True)
        return res['data']

    async def get(self, profile_id: str) -> Dict[str, Any]:
        res = await self._request(f'{self.base_path}/{profile_id}', with_status=True)
        return res['data']

    async def list(self, page: int = 1, page_size: int = 10, name: Optional[str] = None) -> Dict[str, Any]:
        params: Dict[str, Any] = {'page': page, 'pageSize': page_size}
        if name is not None:
            params['s'] = name
        res = await self._request(self.base_path, params=params, with_status=True)
        return res['data']
