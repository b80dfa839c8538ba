import unittest
import datetime

from freezegun import freeze_time

from tools.alarm.alarm_item import Alarm, DayOfWeek
from tools.alarm.recurrence import next_trigger, weekday_index

# 2024-01-01 ist ein Montag
MONDAY = datetime.date(2024, 1, 1)


class TestNextTrigger(unittest.TestCase):
    """Tests für die Berechnung des nächsten Auslösezeitpunkts."""

    def test_one_shot_later_today(self):
        now = datetime.datetime(2024, 1, 1, 10, 0)
        result = next_trigger(datetime.time(14, 0), [], now)
        self.assertEqual(result, datetime.datetime(2024, 1, 1, 14, 0))

    def test_one_shot_already_passed_moves_to_tomorrow(self):
        now = datetime.datetime(2024, 1, 1, 10, 0)
        result = next_trigger(datetime.time(8, 0), [], now)
        self.assertEqual(result, datetime.datetime(2024, 1, 2, 8, 0))

    def test_one_shot_at_exactly_now_is_not_in_the_future(self):
        now = datetime.datetime(2024, 1, 1, 8, 0)
        result = next_trigger(datetime.time(8, 0), [], now)
        self.assertEqual(result, datetime.datetime(2024, 1, 2, 8, 0))

    def test_repeat_fires_today_when_still_ahead(self):
        now = datetime.datetime(2024, 1, 1, 7, 0)
        result = next_trigger(
            datetime.time(9, 0), [DayOfWeek.MONDAY, DayOfWeek.WEDNESDAY], now
        )
        self.assertEqual(result, datetime.datetime(2024, 1, 1, 9, 0))

    def test_repeat_moves_to_next_matching_day(self):
        now = datetime.datetime(2024, 1, 1, 10, 0)
        result = next_trigger(
            datetime.time(9, 0), [DayOfWeek.MONDAY, DayOfWeek.WEDNESDAY], now
        )
        self.assertEqual(result, datetime.datetime(2024, 1, 3, 9, 0))

    def test_repeat_only_today_passed_waits_a_full_week(self):
        now = datetime.datetime(2024, 1, 1, 10, 0)
        result = next_trigger(datetime.time(9, 0), [DayOfWeek.MONDAY], now)
        self.assertEqual(result, datetime.datetime(2024, 1, 8, 9, 0))

    def test_repeat_wraps_from_saturday_to_sunday(self):
        saturday_night = datetime.datetime(2024, 1, 6, 23, 30)
        result = next_trigger(datetime.time(6, 15), [DayOfWeek.SUNDAY], saturday_night)
        self.assertEqual(result, datetime.datetime(2024, 1, 7, 6, 15))

    def test_repeat_ignores_today_when_not_in_set(self):
        now = datetime.datetime(2024, 1, 1, 5, 0)
        result = next_trigger(datetime.time(9, 0), [DayOfWeek.FRIDAY], now)
        self.assertEqual(result, datetime.datetime(2024, 1, 5, 9, 0))

    def test_result_is_always_after_now(self):
        now = datetime.datetime(2024, 1, 3, 12, 0, 30)
        for day in DayOfWeek:
            with self.subTest(day=day):
                self.assertGreater(next_trigger(datetime.time(12, 0), [day], now), now)

    def test_seconds_of_now_are_respected(self):
        now = datetime.datetime(2024, 1, 1, 9, 0, 1)
        result = next_trigger(datetime.time(9, 0), [], now)
        self.assertEqual(result, datetime.datetime(2024, 1, 2, 9, 0))

    @freeze_time("2024-01-01 10:00:00")
    def test_defaults_to_current_time(self):
        result = next_trigger(datetime.time(14, 0), [])
        self.assertEqual(result, datetime.datetime(2024, 1, 1, 14, 0))

    def test_weekday_index_counts_from_sunday(self):
        self.assertEqual(weekday_index(MONDAY), 1)
        self.assertEqual(weekday_index(datetime.date(2024, 1, 7)), 0)
        self.assertEqual(weekday_index(datetime.date(2024, 1, 6)), 6)


class TestAlarmNextTrigger(unittest.TestCase):
    """Alarm.next_trigger delegiert an den Rechner."""

    def test_alarm_uses_its_own_time_and_days(self):
        created = datetime.datetime(2023, 12, 1, 8, 0)
        alarm = Alarm(
            id="abc",
            time=datetime.time(9, 0),
            repeat_days=[DayOfWeek.WEDNESDAY, DayOfWeek.MONDAY],
            created_at=created,
            updated_at=created,
        )
        self.assertEqual(
            alarm.next_trigger(datetime.datetime(2024, 1, 1, 10, 0)),
            datetime.datetime(2024, 1, 3, 9, 0),
        )


if __name__ == '__main__':
    unittest.main()
