import datetime
import json
from typing import Any, Dict, List, Optional

from config.settings import SLEEP_RECORD_RETENTION_DAYS, STORAGE_KEYS
from tools.sleep.sleep_models import SleepRecord
from tools.storage.errors import PersistenceError
from tools.storage.key_value_storage import KeyValueStorage
from util.decorator import log_exceptions_from_self_logger
from util.loggin_mixin import LoggingMixin


class SleepRecordRepository(LoggingMixin):
    """Sleep records of the last ``SLEEP_RECORD_RETENTION_DAYS`` days."""

    def __init__(self, storage: Optional[KeyValueStorage] = None, key: str = STORAGE_KEYS["sleep_records"]):
        self.storage = storage or KeyValueStorage()
        self.key = key

    @log_exceptions_from_self_logger("loading sleep records", default=[])
    def get_sleep_records(self) -> List[SleepRecord]:
        return self._load_records()

    def save_sleep_record(self, record: SleepRecord, now: Optional[datetime.datetime] = None) -> List[SleepRecord]:
        """Raises PersistenceError instead of overwriting unreadable history."""
        now = now or datetime.datetime.now()
        cutoff = (now - datetime.timedelta(days=SLEEP_RECORD_RETENTION_DAYS)).date()

        records = self._load_records()
        records.append(record)
        kept = [r for r in records if datetime.date.fromisoformat(r.date) >= cutoff]

        self.storage.set_item(self.key, json.dumps([self._to_dict(r) for r in kept]))
        self.logger.info("😴 Schlafeintrag gespeichert (%d Minuten)", record.total_sleep)
        return kept

    def _load_records(self) -> List[SleepRecord]:
        raw = self.storage.get_item(self.key)
        if raw is None:
            return []

        try:
            items = json.loads(raw)
        except json.JSONDecodeError as e:
            raise PersistenceError(f"corrupt sleep data: {e}") from e
        if not isinstance(items, list):
            raise PersistenceError("corrupt sleep data: expected a list")

        records = []
        for item in items:
            try:
                records.append(self._from_dict(item))
            except (KeyError, TypeError, ValueError, AttributeError) as e:
                self.logger.warning("⚠️ Überspringe ungültigen Schlafeintrag %r: %s", item, e)
        return records

    @staticmethod
    def _to_dict(record: SleepRecord) -> Dict[str, Any]:
        return {
            "id": record.id,
            "date": record.date,
            "bedTime": record.bed_time.isoformat(),
            "wakeTime": record.wake_time.isoformat(),
            "totalSleep": record.total_sleep,
        }

    @staticmethod
    def _from_dict(item: Dict[str, Any]) -> SleepRecord:
        return SleepRecord(
            id=item["id"],
            date=datetime.date.fromisoformat(item["date"]).isoformat(),
            bed_time=datetime.datetime.fromisoformat(item["bedTime"]),
            wake_time=datetime.datetime.fromisoformat(item["wakeTime"]),
            total_sleep=item["totalSleep"],
        )
