# tools/alarm/alarm_item.py
import datetime
from dataclasses import dataclass
from enum import Enum, IntEnum
from typing import Iterable, Optional, Tuple, Union

from config.settings import DEFAULT_ALARM_LABEL, DEFAULT_SOUND, SOUNDS
from tools.alarm.recurrence import next_trigger


class DayOfWeek(IntEnum):
    SUNDAY = 0
    MONDAY = 1
    TUESDAY = 2
    WEDNESDAY = 3
    THURSDAY = 4
    FRIDAY = 5
    SATURDAY = 6


class DismissMethod(Enum):
    BUTTON = "button"
    MATH = "math"


TimeLike = Union[datetime.time, datetime.datetime]


def to_time_of_day(value: TimeLike) -> datetime.time:
    """Reduziert eine Zeitangabe auf Stunde und Minute."""
    if isinstance(value, datetime.datetime):
        value = value.time()
    if not isinstance(value, datetime.time):
        raise ValueError(f"Invalid alarm time: {value!r}")
    return datetime.time(value.hour, value.minute)


def normalize_repeat_days(days: Iterable[int]) -> Tuple[DayOfWeek, ...]:
    """Sorted, duplicate-free tuple of weekdays (Sunday=0)."""
    try:
        return tuple(sorted({DayOfWeek(int(day)) for day in days}))
    except (TypeError, ValueError) as e:
        raise ValueError(f"Invalid repeat days {days!r}: {e}") from e


@dataclass
class Alarm:
    id: str
    time: datetime.time
    created_at: datetime.datetime
    updated_at: datetime.datetime
    label: str = DEFAULT_ALARM_LABEL
    is_enabled: bool = True
    repeat_days: Tuple[DayOfWeek, ...] = ()
    sound: str = DEFAULT_SOUND
    dismiss_method: DismissMethod = DismissMethod.BUTTON

    def __post_init__(self):
        self.time = to_time_of_day(self.time)
        if not self.label or not self.label.strip():
            self.label = DEFAULT_ALARM_LABEL
        self.is_enabled = bool(self.is_enabled)
        self.repeat_days = normalize_repeat_days(self.repeat_days)
        if self.sound not in SOUNDS:
            raise ValueError(f"Unknown sound '{self.sound}', expected one of {SOUNDS}")
        self.dismiss_method = DismissMethod(self.dismiss_method)
        if self.updated_at < self.created_at:
            raise ValueError("updated_at must not be earlier than created_at")

    @property
    def is_recurring(self) -> bool:
        return bool(self.repeat_days)

    def next_trigger(self, now: Optional[datetime.datetime] = None) -> datetime.datetime:
        return next_trigger(self.time, self.repeat_days, now)

    def __str__(self) -> str:
        days = ",".join(day.name[:3].title() for day in self.repeat_days) or "once"
        state = "on" if self.is_enabled else "off"
        return f"Alarm {self.id} '{self.label}' at {self.time.strftime('%H:%M')} ({days}, {state})"
