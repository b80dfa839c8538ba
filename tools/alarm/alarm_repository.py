import json
from abc import ABC, abstractmethod
from typing import List, Optional

from config.settings import STORAGE_KEYS
from tools.alarm.alarm_item import Alarm
from tools.alarm.alarm_mapper import AlarmMapper
from tools.storage.errors import PersistenceError
from tools.storage.key_value_storage import KeyValueStorage
from util.loggin_mixin import LoggingMixin


class AlarmRepository(ABC):
    """Durable full-collection storage for alarms."""

    @abstractmethod
    def load_all(self) -> List[Alarm]:
        """Returns every stored alarm. Raises PersistenceError."""

    @abstractmethod
    def replace_all(self, alarms: List[Alarm]) -> None:
        """Overwrites the stored collection. Raises PersistenceError."""


class StorageAlarmRepository(AlarmRepository, LoggingMixin):
    """Keeps the alarm list as one JSON blob in a KeyValueStorage"""

    def __init__(self, storage: Optional[KeyValueStorage] = None, key: str = STORAGE_KEYS["alarms"]):
        self.storage = storage or KeyValueStorage()
        self.key = key

    def load_all(self) -> List[Alarm]:
        raw = self.storage.get_item(self.key)
        if raw is None:
            return []

        try:
            items = json.loads(raw)
        except json.JSONDecodeError as e:
            raise PersistenceError(f"corrupt alarm data: {e}") from e
        if not isinstance(items, list):
            raise PersistenceError("corrupt alarm data: expected a list")

        alarms = []
        for item in items:
            try:
                alarms.append(AlarmMapper.from_dict(item))
            except (KeyError, TypeError, ValueError, AttributeError) as e:
                self.logger.warning("⚠️ Überspringe ungültigen Alarm-Eintrag %r: %s", item, e)
        return alarms

    def replace_all(self, alarms: List[Alarm]) -> None:
        payload = json.dumps([AlarmMapper.to_dict(alarm) for alarm in alarms])
        self.storage.set_item(self.key, payload)
