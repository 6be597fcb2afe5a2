"""
Settings Provider
Configuration values that administrators change at runtime (mail sender,
notification window, feature toggles). Components receive a provider instead
of reading the settings table themselves.
"""

from abc import ABC, abstractmethod
from typing import Any, Dict, Optional
from fire_inventory import db
from fire_inventory.data.core.setting import Setting
from fire_inventory.utils.logging_sanitizer import sanitize_value
from fire_inventory.logger import get_logger

logger = get_logger("fire_inventory.buisness.core.settings")

EMAIL_SETTINGS_KEY = 'email_settings'
EMAIL_SENDER_KEY = 'email_sender'


class SettingsProvider(ABC):
    """Read access to key-value settings"""

    @abstractmethod
    def get(self, key: str, default: Any = None) -> Any:
        """Return the value stored under key, or default when absent"""
        pass

    def get_section(self, key: str) -> Dict[str, Any]:
        """Return a dict-valued setting; anything else is treated as empty"""
        value = self.get(key)
        return value if isinstance(value, dict) else {}

    def get_int(self, key: str, field: str, default: int) -> int:
        """Return section[field] as a positive int, falling back to default"""
        raw = self.get_section(key).get(field)
        try:
            value = int(raw)
        except (TypeError, ValueError):
            return default
        return value if value > 0 else default

    def get_bool(self, key: str, field: str, default: bool) -> bool:
        raw = self.get_section(key).get(field)
        if raw is None:
            return default
        if isinstance(raw, str):
            return raw.lower() in ('true', '1', 'yes', 'on')
        return bool(raw)


class StaticSettingsProvider(SettingsProvider):
    """Settings from a plain dictionary"""

    def __init__(self, values: Optional[Dict[str, Any]] = None):
        self.values = dict(values or {})

    def get(self, key, default=None):
        return self.values.get(key, default)


class DatabaseSettingsProvider(SettingsProvider):
    """Settings read from the settings table on every call, so changes apply without restart"""

    def __init__(self, session=None):
        self.session = session or db.session

    def get(self, key, default=None):
        setting = self.session.get(Setting, key)
        if setting is None:
            return default
        return setting.value

    def set(self, key: str, value: Any) -> Setting:
        """Insert or replace a setting and commit"""
        setting = self.session.get(Setting, key)
        if setting is None:
            setting = Setting(key=key, value=value)
            self.session.add(setting)
        else:
            setting.value = value
        try:
            self.session.commit()
        except Exception:
            self.session.rollback()
            raise
        logger.info(f"Setting {key} updated: {sanitize_value(value)}")
        return setting
