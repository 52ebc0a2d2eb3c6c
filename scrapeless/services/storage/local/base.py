from datetime import datetime, timezone
from pathlib import Path
from typing import Optional, Dict, Any, List
import json
import logging
import math
import shutil

from ....errors import ScrapelessError
from ....models.storage import Page

METADATA_FILE = 'metadata.json'


def utc_now() -> str:
    return datetime.now(timezone.utc).isoformat()


class LocalStore:
    """
    One directory per resource under ``<root>/<store_dir>``, each holding a
    ``metadata.json`` and one JSON file per record.

    Offline stand-in for the storage API. Single writer, no locking.
    """

    store_dir = ''

    def __init__(self, root: str = 'storage', logger: Optional[logging.Logger] = None):
        self.root = Path(root) / self.store_dir
        self.root.mkdir(parents=True, exist_ok=True)
        self.logger = logger or logging.getLogger(type(self).__module__)

    @staticmethod
    def _safe_name(value: str, label: str) -> str:
        """Reject ids and keys that would resolve outside their directory"""
        if not value or value in ('.', '..') or any(sep in value for sep in ('/', '\\', '\0')):
            raise ScrapelessError(f"Invalid {label}: {value!r}", 400)
        return value

    def _resource_dir(self, resource_id: str) -> Path:
        return self.root / self._safe_name(resource_id, 'id')

    @staticmethod
    def _read_json(path: Path) -> Any:
        return json.loads(path.read_text(encoding='utf-8'))

    @staticmethod
    def _write_json(path: Path, data: Any):
        path.write_text(json.dumps(data, ensure_ascii=False), encoding='utf-8')

    def _read_metadata(self, resource_id: str) -> Optional[Dict[str, Any]]:
        path = self._resource_dir(resource_id) / METADATA_FILE
        if not path.is_file():
            return None
        return self._read_json(path)

    def _write_metadata(self, resource_id: str, meta: Dict[str, Any]):
        self._write_json(self._resource_dir(resource_id) / METADATA_FILE, meta)

    def _all_metadata(self, desc: Optional[bool] = None) -> List[Dict[str, Any]]:
        metas = []
        for entry in self.root.iterdir():
            if not entry.is_dir():
                continue
            meta = self._read_metadata(entry.name)
            if meta is not None:
                metas.append(meta)
        metas.sort(key=lambda m: m.get('createdAt') or '', reverse=bool(desc))
        return metas

    def _name_exists(self, name: str) -> bool:
        return any(meta.get('name') == name for meta in self._all_metadata())

    def _remove_dir(self, resource_id: str) -> bool:
        path = self._resource_dir(resource_id)
        if not path.is_dir():
            return False
        shutil.rmtree(path)
        return True

    def _record_files(self, resource_id: str) -> List[Path]:
        path = self._resource_dir(resource_id)
        if not path.is_dir():
            return []
        return sorted(p for p in path.glob('*.json') if p.name != METADATA_FILE)

    @staticmethod
    def paginate(items: List[Any], page: int = 1, page_size: int = 10) -> Dict[str, Any]:
        page = page or 1
        page_size = page_size or 10
        start = (page - 1) * page_size
        return Page(
            items=items[start:start + page_size],
            total=len(items),
            page=page,
            page_size=page_size,
            total_page=math.ceil(len(items) / page_size),
        ).model_dump(by_alias=True)
