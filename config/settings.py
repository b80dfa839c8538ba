import os
from dotenv import load_dotenv

load_dotenv()

LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO")

ALARM_STORAGE_DIR = os.getenv("ALARM_STORAGE_DIR", ".alarm_storage")

# Sekunden, in denen ein gelöschter Alarm wiederhergestellt werden kann
UNDO_WINDOW_SECONDS = float(os.getenv("UNDO_WINDOW_SECONDS", "5"))

MATH_MAX_ATTEMPTS = 3

SLEEP_RECORD_RETENTION_DAYS = 30

STORAGE_KEYS = {
    "alarms": "@alarms",
    "settings": "@settings",
    "sleep_records": "@sleepRecords",
}

SOUNDS = ("Default", "Classic", "Gentle", "Loud", "Nature")
DEFAULT_SOUND = "Default"
DEFAULT_ALARM_LABEL = "Alarm"

NAP_PRESETS = (10, 15, 20, 30, 45, 60)
DEFAULT_NAP_MINUTES = 20
