import json
from dataclasses import asdict, dataclass, fields
from typing import Optional

from config.settings import DEFAULT_SOUND, SOUNDS, STORAGE_KEYS
from tools.alarm.alarm_item import DismissMethod
from tools.storage.key_value_storage import KeyValueStorage
from util.decorator import log_exceptions_from_self_logger
from util.loggin_mixin import LoggingMixin


@dataclass
class AppSettings:
    is_dark_mode: bool = False
    default_sound: str = DEFAULT_SOUND
    default_dismiss_method: DismissMethod = DismissMethod.BUTTON
    notifications_enabled: bool = True
    vibration_enabled: bool = True

    def __post_init__(self):
        if self.default_sound not in SOUNDS:
            self.default_sound = DEFAULT_SOUND
        self.default_dismiss_method = DismissMethod(self.default_dismiss_method)


_JSON_KEYS = {
    "is_dark_mode": "isDarkMode",
    "default_sound": "defaultSound",
    "default_dismiss_method": "defaultDismissMethod",
    "notifications_enabled": "notificationsEnabled",
    "vibration_enabled": "vibrationEnabled",
}


class SettingsRepository(LoggingMixin):
    """App-Einstellungen als JSON-Blob; fehlende Werte kommen aus den Defaults."""

    def __init__(self, storage: Optional[KeyValueStorage] = None, key: str = STORAGE_KEYS["settings"]):
        self.storage = storage or KeyValueStorage()
        self.key = key

    @log_exceptions_from_self_logger("loading settings", default=AppSettings())
    def get_settings(self) -> AppSettings:
        raw = self.storage.get_item(self.key)
        if raw is None:
            return AppSettings()

        stored = json.loads(raw)
        values = {
            field.name: stored[_JSON_KEYS[field.name]]
            for field in fields(AppSettings)
            if _JSON_KEYS[field.name] in stored
        }
        return AppSettings(**values)

    def save_settings(self, settings: AppSettings) -> None:
        data = asdict(settings)
        data["default_dismiss_method"] = settings.default_dismiss_method.value
        self.storage.set_item(
            self.key, json.dumps({_JSON_KEYS[name]: value for name, value in data.items()})
        )
        self.logger.info("⚙️ Einstellungen gespeichert")
