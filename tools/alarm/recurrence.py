import datetime
from typing import Iterable, Optional


def weekday_index(value: datetime.date) -> int:
    """Wochentag mit Sonntag=0 bis Samstag=6 (Python zählt ab Montag=0)."""
    return (value.weekday() + 1) % 7


def next_trigger(
    time_of_day: datetime.time,
    repeat_days: Iterable[int],
    now: Optional[datetime.datetime] = None,
) -> datetime.datetime:
    """
    Computes the next instant an alarm rings.

    Args:
        time_of_day: Hour and minute of the alarm, seconds are ignored
        repeat_days: Weekday indices (Sunday=0); empty means a one-shot alarm
        now: Reference instant, defaults to the current local time

    Returns:
        datetime.datetime: The first matching instant strictly after ``now``.
        Works on naive wall-clock time, DST transitions are not special-cased.
    """
    if now is None:
        now = datetime.datetime.now()

    hour, minute = time_of_day.hour, time_of_day.minute
    if not (0 <= hour <= 23 and 0 <= minute <= 59):
        raise ValueError(f"Invalid alarm time {hour}:{minute}")

    days = {int(day) for day in repeat_days}
    candidate = now.replace(hour=hour, minute=minute, second=0, microsecond=0)

    if not days:
        if candidate > now:
            return candidate
        return candidate + datetime.timedelta(days=1)

    today = weekday_index(now)
    if today in days and candidate > now:
        return candidate

    for offset in range(1, 8):
        if (today + offset) % 7 in days:
            return candidate + datetime.timedelta(days=offset)

    # nicht erreichbar: ein nicht-leerer Satz trifft innerhalb einer Woche
    raise ValueError(f"Invalid repeat days {sorted(days)}")
