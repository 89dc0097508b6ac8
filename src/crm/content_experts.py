"""
Content expert lookup: staff username -> Salesforce contact id.

The mapping lives in the settings store under CONTENT_EXPERT_SETTING and is
created empty the first time it is read.
"""

import json
import threading
from pathlib import Path
from typing import Any, Dict, Optional

from src.util.logging import get_logger

logger = get_logger(__name__)

CONTENT_EXPERT_SETTING = "content_expert_salesforce_ids"


class JsonSettingStore:
    """Key/value settings persisted as one JSON object on disk."""

    def __init__(self, path):
        self.path = Path(path)
        self._lock = threading.Lock()

    def _read(self) -> Dict[str, Any]:
        if not self.path.exists():
            return {}
        with self.path.open(encoding="utf-8") as f:
            return json.load(f)

    def _write(self, data: Dict[str, Any]) -> None:
        self.path.parent.mkdir(parents=True, exist_ok=True)
        tmp_path = self.path.with_suffix(self.path.suffix + ".tmp")
        with tmp_path.open("w", encoding="utf-8") as f:
            json.dump(data, f, ensure_ascii=False, indent=2, sort_keys=True)
        tmp_path.replace(self.path)

    def find_or_create(self, key: str, default: Any) -> Any:
        """
        Return the value stored under key, storing default first if missing.

        Args:
            key: Setting name
            default: Value to create when the key is missing

        Returns:
            Any: The stored value
        """
        with self._lock:
            data = self._read()
            if key not in data:
                logger.info(f"Creating setting '{key}' in {self.path}")
                data[key] = default
                self._write(data)
            return data[key]


class ContentExpertRegistry:
    """
    Lazily loaded, cached view of the content expert ids.

    Implements get() so it can be passed straight to the field builder.
    """

    def __init__(self, store: JsonSettingStore):
        self.store = store
        self._ids: Optional[Dict[str, str]] = None

    @property
    def ids(self) -> Dict[str, str]:
        if self._ids is None:
            value = self.store.find_or_create(CONTENT_EXPERT_SETTING, {})
            self._ids = dict(value or {})
            logger.debug(f"Loaded {len(self._ids)} content expert ids")
        return self._ids

    def get(self, username: str, default: Optional[str] = None) -> Optional[str]:
        return self.ids.get(username, default)


_registry: Optional[ContentExpertRegistry] = None


def get_content_expert_registry() -> ContentExpertRegistry:
    """Process-wide registry backed by the configured settings file."""
    global _registry
    if _registry is None:
        from src.settings import app_settings

        _registry = ContentExpertRegistry(
            JsonSettingStore(app_settings.settings_file)
        )
    return _registry
