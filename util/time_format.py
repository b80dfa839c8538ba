import datetime
from typing import Optional, Union

DAY_LABELS = ("Sun", "Mon", "Tue", "Wed", "Thu", "Fri", "Sat")


def format_time(value: Union[datetime.time, datetime.datetime]) -> str:
    """12-Stunden-Format ohne führende Null, z.B. '7:05 AM'."""
    hour = value.hour % 12 or 12
    suffix = "AM" if value.hour < 12 else "PM"
    return f"{hour}:{value.minute:02d} {suffix}"


def format_date(value: Union[datetime.date, datetime.datetime]) -> str:
    return f"{value.strftime('%b')} {value.day}, {value.year}"


def format_duration(minutes: int) -> str:
    if minutes < 60:
        return f"{minutes}m"
    hours, remaining_minutes = divmod(minutes, 60)
    return f"{hours}h" if remaining_minutes == 0 else f"{hours}h {remaining_minutes}m"


def day_name(day: int) -> str:
    return DAY_LABELS[int(day)]


def is_today(value: datetime.datetime, now: Optional[datetime.datetime] = None) -> bool:
    now = now or datetime.datetime.now()
    return value.date() == now.date()


def is_yesterday(value: datetime.datetime, now: Optional[datetime.datetime] = None) -> bool:
    now = now or datetime.datetime.now()
    return value.date() == now.date() - datetime.timedelta(days=1)
