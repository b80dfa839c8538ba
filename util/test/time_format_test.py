import unittest
import datetime

from tools.alarm.alarm_item import DayOfWeek
from util.time_format import (
    day_name,
    format_date,
    format_duration,
    format_time,
    is_today,
    is_yesterday,
)


class TestTimeFormat(unittest.TestCase):

    def test_format_time_uses_twelve_hours(self):
        self.assertEqual(format_time(datetime.time(0, 5)), "12:05 AM")
        self.assertEqual(format_time(datetime.time(7, 5)), "7:05 AM")
        self.assertEqual(format_time(datetime.time(12, 0)), "12:00 PM")
        self.assertEqual(format_time(datetime.datetime(2024, 1, 1, 23, 59)), "11:59 PM")

    def test_format_date(self):
        self.assertEqual(format_date(datetime.date(2024, 1, 5)), "Jan 5, 2024")

    def test_format_duration(self):
        self.assertEqual(format_duration(45), "45m")
        self.assertEqual(format_duration(120), "2h")
        self.assertEqual(format_duration(90), "1h 30m")

    def test_day_name(self):
        self.assertEqual(day_name(DayOfWeek.SUNDAY), "Sun")
        self.assertEqual(day_name(6), "Sat")

    def test_today_and_yesterday(self):
        now = datetime.datetime(2024, 3, 1, 9, 0)
        self.assertTrue(is_today(datetime.datetime(2024, 3, 1, 0, 1), now))
        self.assertTrue(is_yesterday(datetime.datetime(2024, 2, 29, 23, 0), now))
        self.assertFalse(is_yesterday(datetime.datetime(2024, 3, 1, 0, 0), now))


if __name__ == '__main__':
    unittest.main()
