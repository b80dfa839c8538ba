import unittest
import datetime

from tools.alarm.alarm_item import Alarm, DayOfWeek, DismissMethod

CREATED = datetime.datetime(2024, 1, 1, 8, 0)


def make_alarm(**overrides):
    values = dict(id="a1", time=datetime.time(7, 30), created_at=CREATED, updated_at=CREATED)
    values.update(overrides)
    return Alarm(**values)


class TestAlarmItem(unittest.TestCase):

    def test_defaults(self):
        alarm = make_alarm()
        self.assertEqual(alarm.label, "Alarm")
        self.assertTrue(alarm.is_enabled)
        self.assertEqual(alarm.repeat_days, ())
        self.assertEqual(alarm.sound, "Default")
        self.assertIs(alarm.dismiss_method, DismissMethod.BUTTON)
        self.assertFalse(alarm.is_recurring)

    def test_blank_label_falls_back_to_default(self):
        self.assertEqual(make_alarm(label="   ").label, "Alarm")

    def test_repeat_days_are_sorted_and_unique(self):
        alarm = make_alarm(repeat_days=[5, 1, 5, DayOfWeek.SUNDAY])
        self.assertEqual(
            alarm.repeat_days, (DayOfWeek.SUNDAY, DayOfWeek.MONDAY, DayOfWeek.FRIDAY)
        )

    def test_invalid_repeat_day_is_rejected(self):
        with self.assertRaises(ValueError):
            make_alarm(repeat_days=[7])

    def test_unknown_sound_is_rejected(self):
        with self.assertRaises(ValueError):
            make_alarm(sound="Airhorn")

    def test_dismiss_method_is_coerced_from_string(self):
        self.assertIs(make_alarm(dismiss_method="math").dismiss_method, DismissMethod.MATH)

    def test_datetime_is_reduced_to_hour_and_minute(self):
        alarm = make_alarm(time=datetime.datetime(2024, 5, 5, 6, 45, 59))
        self.assertEqual(alarm.time, datetime.time(6, 45))

    def test_updated_before_created_is_rejected(self):
        with self.assertRaises(ValueError):
            make_alarm(updated_at=CREATED - datetime.timedelta(seconds=1))


if __name__ == '__main__':
    unittest.main()
