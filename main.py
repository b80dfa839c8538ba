from dotenv import load_dotenv

from config.settings import ALARM_STORAGE_DIR
from tools.alarm.alarm_repository import StorageAlarmRepository
from tools.alarm.alarm_store import AlarmStore
from tools.storage.key_value_storage import KeyValueStorage
from util.loggin_mixin import LoggingMixin
from util.time_format import format_date, format_time

load_dotenv()


class AlarmOverview(LoggingMixin):
    """Loads the stored alarms and logs when each one rings next."""

    def __init__(self, storage_dir: str = ALARM_STORAGE_DIR):
        storage = KeyValueStorage(storage_dir)
        self.store = AlarmStore(StorageAlarmRepository(storage))

    def run(self) -> None:
        try:
            alarms = self.store.load()
            if not alarms:
                self.logger.info("⏰ Keine Alarme gespeichert")
                return

            for alarm in alarms:
                upcoming = alarm.next_trigger()
                self.logger.info(
                    "⏰ %s -> %s, %s",
                    alarm,
                    format_date(upcoming),
                    format_time(upcoming),
                )
        finally:
            self.store.shutdown()


if __name__ == "__main__":
    AlarmOverview().run()
