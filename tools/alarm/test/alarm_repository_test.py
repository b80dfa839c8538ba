import unittest
import datetime
import json
import tempfile

from tools.alarm.alarm_item import Alarm, DayOfWeek, DismissMethod
from tools.alarm.alarm_repository import StorageAlarmRepository
from tools.storage.errors import PersistenceError
from tools.storage.key_value_storage import KeyValueStorage

CREATED = datetime.datetime(2024, 1, 1, 8, 0)


class TestStorageAlarmRepository(unittest.TestCase):

    def setUp(self):
        self.tmp_dir = tempfile.TemporaryDirectory()
        self.storage = KeyValueStorage(self.tmp_dir.name)
        self.repository = StorageAlarmRepository(self.storage)

    def tearDown(self):
        self.tmp_dir.cleanup()

    def test_empty_storage_has_no_alarms(self):
        self.assertEqual(self.repository.load_all(), [])

    def test_replace_all_writes_iso_timestamps(self):
        alarm = Alarm(
            id="x1",
            time=datetime.time(6, 30),
            label="Early",
            repeat_days=[DayOfWeek.SATURDAY, DayOfWeek.MONDAY],
            dismiss_method=DismissMethod.MATH,
            created_at=CREATED,
            updated_at=CREATED + datetime.timedelta(minutes=1),
        )

        self.repository.replace_all([alarm])

        stored = json.loads(self.storage.get_item("@alarms"))
        self.assertEqual(stored[0]["time"], "06:30:00")
        self.assertEqual(stored[0]["createdAt"], "2024-01-01T08:00:00")
        self.assertEqual(stored[0]["repeatDays"], [1, 6])
        self.assertEqual(stored[0]["dismissMethod"], "math")
        self.assertEqual(self.repository.load_all(), [alarm])

    def test_full_timestamp_time_is_reduced_to_time_of_day(self):
        self.storage.set_item("@alarms", json.dumps([{
            "id": "legacy",
            "time": "2023-06-01T07:45:00",
            "label": "",
            "isEnabled": False,
            "repeatDays": [],
            "sound": "Gentle",
            "dismissMethod": "button",
            "createdAt": "2023-06-01T07:00:00",
            "updatedAt": "2023-06-01T07:00:00",
        }]))

        [alarm] = self.repository.load_all()

        self.assertEqual(alarm.time, datetime.time(7, 45))
        self.assertEqual(alarm.label, "Alarm")
        self.assertFalse(alarm.is_enabled)

    def test_invalid_records_are_skipped(self):
        self.storage.set_item("@alarms", json.dumps([
            {"id": "broken"},
            {
                "id": "ok",
                "time": "09:00:00",
                "createdAt": "2024-01-01T08:00:00",
                "updatedAt": "2024-01-01T08:00:00",
            },
        ]))

        self.assertEqual([a.id for a in self.repository.load_all()], ["ok"])

    def test_corrupt_json_raises_persistence_error(self):
        self.storage.set_item("@alarms", "{not json")
        with self.assertRaises(PersistenceError):
            self.repository.load_all()


if __name__ == '__main__':
    unittest.main()
