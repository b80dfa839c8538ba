import datetime
from typing import Any, Dict

from tools.alarm.alarm_item import Alarm


class AlarmMapper:
    """Maps between the persisted JSON layout and Alarm objects"""

    @staticmethod
    def to_dict(alarm: Alarm) -> Dict[str, Any]:
        return {
            "id": alarm.id,
            "time": alarm.time.isoformat(),
            "label": alarm.label,
            "isEnabled": alarm.is_enabled,
            "repeatDays": [int(day) for day in alarm.repeat_days],
            "sound": alarm.sound,
            "dismissMethod": alarm.dismiss_method.value,
            "createdAt": alarm.created_at.isoformat(),
            "updatedAt": alarm.updated_at.isoformat(),
        }

    @staticmethod
    def from_dict(item: Dict[str, Any]) -> Alarm:
        """Raises KeyError/ValueError for records that cannot be restored."""
        return Alarm(
            id=str(item["id"]),
            time=AlarmMapper._parse_time_of_day(item["time"]),
            label=item.get("label", ""),
            is_enabled=item.get("isEnabled", True),
            repeat_days=item.get("repeatDays", []),
            sound=item.get("sound", "Default"),
            dismiss_method=item.get("dismissMethod", "button"),
            created_at=AlarmMapper._parse_datetime(item["createdAt"]),
            updated_at=AlarmMapper._parse_datetime(item["updatedAt"]),
        )

    @staticmethod
    def _parse_time_of_day(value: str) -> datetime.time:
        # ältere Daten speichern den kompletten Zeitstempel
        if "T" in value or "-" in value[:10]:
            return AlarmMapper._parse_datetime(value).time()
        return datetime.time.fromisoformat(value)

    @staticmethod
    def _parse_datetime(value: str) -> datetime.datetime:
        # JSON-Zeitstempel wie "2024-01-01T07:00:00.000Z"
        if value.endswith("Z"):
            value = value[:-1] + "+00:00"
        parsed = datetime.datetime.fromisoformat(value)
        if parsed.tzinfo is not None:
            parsed = parsed.astimezone().replace(tzinfo=None)
        return parsed
