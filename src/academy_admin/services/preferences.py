"""Persisted console preferences with an explicit storage interface

Keys:
  token      bearer token sent with every API request; removed on 401/403
  admin      serialized signed-in admin profile; removed on 401/403
  activeTab  last opened console tab, one of VALID_TABS
  theme      "light" or "dark"

File-backed stores load once on construction and save on every write.
"""
import json
import logging
from abc import ABC, abstractmethod
from pathlib import Path
from typing import Dict, Optional

logger = logging.getLogger(__name__)

AUTH_TOKEN_KEY = "token"
AUTH_ADMIN_KEY = "admin"
ACTIVE_TAB_KEY = "activeTab"
THEME_KEY = "theme"

VALID_TABS = ["import-export", "modules", "programs", "participants", "enrollments", "grades"]
DEFAULT_TAB = "import-export"
VALID_THEMES = ["light", "dark"]
DEFAULT_THEME = "light"


class PreferenceStore(ABC):
    @abstractmethod
    def get(self, key: str) -> Optional[str]:
        pass

    @abstractmethod
    def set(self, key: str, value: str) -> None:
        pass

    @abstractmethod
    def remove(self, key: str) -> None:
        pass

    def clear_auth(self) -> None:
        self.remove(AUTH_TOKEN_KEY)
        self.remove(AUTH_ADMIN_KEY)

    def active_tab(self) -> str:
        saved = self.get(ACTIVE_TAB_KEY)
        if saved in VALID_TABS:
            return saved
        return DEFAULT_TAB

    def set_active_tab(self, tab: str) -> None:
        if tab not in VALID_TABS:
            raise ValueError(f"tab must be one of: {VALID_TABS}")
        self.set(ACTIVE_TAB_KEY, tab)

    def theme(self) -> str:
        saved = self.get(THEME_KEY)
        if saved in VALID_THEMES:
            return saved
        return DEFAULT_THEME

    def toggle_theme(self) -> str:
        new_theme = "dark" if self.theme() == "light" else "light"
        self.set(THEME_KEY, new_theme)
        return new_theme


class InMemoryPreferenceStore(PreferenceStore):
    def __init__(self, initial: Optional[Dict[str, str]] = None):
        self._values: Dict[str, str] = dict(initial or {})

    def get(self, key: str) -> Optional[str]:
        return self._values.get(key)

    def set(self, key: str, value: str) -> None:
        self._values[key] = value

    def remove(self, key: str) -> None:
        self._values.pop(key, None)


class JsonFilePreferenceStore(PreferenceStore):
    def __init__(self, path: str):
        self.path = Path(path)
        self._values: Dict[str, str] = self._load()

    def _load(self) -> Dict[str, str]:
        if not self.path.exists():
            return {}
        try:
            data = json.loads(self.path.read_text(encoding="utf-8"))
        except (OSError, ValueError) as e:
            logger.warning(f"Ignoring unreadable preferences file {self.path}: {e}")
            return {}
        if not isinstance(data, dict):
            logger.warning(f"Ignoring preferences file {self.path}: expected an object")
            return {}
        return {str(k): str(v) for k, v in data.items() if v is not None}

    def _save(self) -> None:
        self.path.parent.mkdir(parents=True, exist_ok=True)
        self.path.write_text(json.dumps(self._values, indent=2, sort_keys=True), encoding="utf-8")

    def get(self, key: str) -> Optional[str]:
        return self._values.get(key)

    def set(self, key: str, value: str) -> None:
        self._values[key] = value
        self._save()

    def remove(self, key: str) -> None:
        if key in self._values:
            del self._values[key]
            self._save()
