import datetime
from dataclasses import dataclass
from typing import List, Sequence


def calculate_sleep_duration(bed_time: datetime.datetime, wake_time: datetime.datetime) -> int:
    """Schlafdauer in ganzen Minuten (gerundet)."""
    return round((wake_time - bed_time).total_seconds() / 60)


@dataclass
class SleepRecord:
    id: str
    date: str
    bed_time: datetime.datetime
    wake_time: datetime.datetime
    total_sleep: int = 0

    @classmethod
    def create(cls, record_id: str, bed_time: datetime.datetime, wake_time: datetime.datetime) -> "SleepRecord":
        return cls(
            id=record_id,
            date=wake_time.date().isoformat(),
            bed_time=bed_time,
            wake_time=wake_time,
            total_sleep=calculate_sleep_duration(bed_time, wake_time),
        )


class SleepStats:
    """Kennzahlen über Schlafeinträge, neueste zuerst."""

    WEEK = 7

    def __init__(self, records: Sequence[SleepRecord]):
        self.records: List[SleepRecord] = list(records)

    @property
    def weekly_average(self) -> int:
        last_week = self.records[: self.WEEK]
        if not last_week:
            return 0
        return round(sum(record.total_sleep for record in last_week) / len(last_week))

    @property
    def total(self) -> int:
        return sum(record.total_sleep for record in self.records)

    @property
    def longest(self) -> int:
        return max((record.total_sleep for record in self.records), default=0)

    @property
    def shortest(self) -> int:
        return min((record.total_sleep for record in self.records), default=0)
