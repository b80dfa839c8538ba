import copy
import datetime
import random
import threading
from dataclasses import replace
from typing import Callable, List, Optional, Tuple

from config.settings import DEFAULT_ALARM_LABEL, DEFAULT_SOUND, UNDO_WINDOW_SECONDS
from tools.alarm.alarm_ids import generate_id
from tools.alarm.alarm_item import Alarm, DismissMethod, TimeLike
from tools.alarm.alarm_repository import AlarmRepository
from tools.storage.errors import PersistenceError
from util.decorator import log_exceptions_from_self_logger
from util.feedback import FeedbackSink, FeedbackType, LoggingFeedback
from util.loggin_mixin import LoggingMixin

PROTECTED_FIELDS = frozenset({"id", "created_at", "updated_at"})


class AlarmStore(LoggingMixin):
    """
    In-memory authority for the alarm list.

    Every command mutates the list synchronously, keeps it sorted by time of
    day and then writes the whole list through the repository. A write
    failure is logged and re-raised, the in-memory change stays applied.

    Deleted alarms are held in a single "recently deleted" slot for
    ``undo_window`` seconds; a newer delete replaces the slot and cancels the
    previous expiry timer.
    """

    def __init__(
        self,
        repository: AlarmRepository,
        feedback: Optional[FeedbackSink] = None,
        clock: Optional[Callable[[], datetime.datetime]] = None,
        rng: Optional[random.Random] = None,
        timer_factory: Callable[..., threading.Timer] = threading.Timer,
        undo_window: float = UNDO_WINDOW_SECONDS,
    ):
        self.repository = repository
        self.feedback = feedback or LoggingFeedback()
        self.undo_window = undo_window
        self.is_loading = False

        self._clock = clock
        self._rng = rng
        self._timer_factory = timer_factory

        self._alarms: List[Alarm] = []
        self._recently_deleted: Optional[Alarm] = None
        self._tombstone_token: Optional[object] = None
        self._undo_timer: Optional[threading.Timer] = None
        self._lock = threading.RLock()

    # ------------------------------------------------------------------ reads

    @property
    def alarms(self) -> Tuple[Alarm, ...]:
        with self._lock:
            return tuple(copy.copy(alarm) for alarm in self._alarms)

    @property
    def recently_deleted(self) -> Optional[Alarm]:
        with self._lock:
            return copy.copy(self._recently_deleted)

    def get(self, alarm_id: str) -> Optional[Alarm]:
        with self._lock:
            index = self._index_of(alarm_id)
            return None if index is None else copy.copy(self._alarms[index])

    def next_trigger(
        self, alarm_id: str, now: Optional[datetime.datetime] = None
    ) -> Optional[datetime.datetime]:
        alarm = self.get(alarm_id)
        return alarm.next_trigger(now or self._now()) if alarm else None

    # --------------------------------------------------------------- commands

    def load(self) -> Tuple[Alarm, ...]:
        """Reads the stored alarms. A failing read leaves an empty list."""
        self.is_loading = True
        try:
            alarms = self._read_all()
        finally:
            self.is_loading = False

        with self._lock:
            self._alarms = alarms
            self._sort()

        self.logger.info("⏰ %d Alarme geladen", len(alarms))
        return self.alarms

    def add(
        self,
        time: TimeLike,
        label: str = DEFAULT_ALARM_LABEL,
        is_enabled: bool = True,
        repeat_days=(),
        sound: str = DEFAULT_SOUND,
        dismiss_method: DismissMethod = DismissMethod.BUTTON,
    ) -> Alarm:
        now = self._now()
        with self._lock:
            alarm = Alarm(
                id=self._new_id(),
                time=time,
                label=label,
                is_enabled=is_enabled,
                repeat_days=repeat_days,
                sound=sound,
                dismiss_method=dismiss_method,
                created_at=now,
                updated_at=now,
            )
            self._alarms.append(alarm)
            self._sort()

        self._signal(FeedbackType.LIGHT)
        self.logger.info("⏰ Alarm hinzugefügt: %s", alarm)
        self._persist()
        return copy.copy(alarm)

    def update(self, alarm_id: str, **patch) -> Optional[Alarm]:
        """Merges ``patch`` into the alarm. Unknown ids are ignored."""
        protected = PROTECTED_FIELDS.intersection(patch)
        if protected:
            raise ValueError(f"Fields cannot be updated: {sorted(protected)}")

        with self._lock:
            index = self._index_of(alarm_id)
            if index is None:
                self.logger.debug("Kein Alarm mit ID %s zum Aktualisieren", alarm_id)
                return None

            current = self._alarms[index]
            updated = replace(current, **patch, updated_at=self._touch(current))
            self._alarms[index] = updated
            self._sort()

        self._signal(FeedbackType.LIGHT)
        self.logger.info("⏰ Alarm aktualisiert: %s", updated)
        self._persist()
        return copy.copy(updated)

    def toggle(self, alarm_id: str) -> Optional[Alarm]:
        with self._lock:
            index = self._index_of(alarm_id)
            if index is None:
                return None

            current = self._alarms[index]
            toggled = replace(
                current, is_enabled=not current.is_enabled, updated_at=self._touch(current)
            )
            self._alarms[index] = toggled
            self._sort()

        self._signal(FeedbackType.SUCCESS if toggled.is_enabled else FeedbackType.LIGHT)
        self.logger.info(
            "⏰ Alarm %s %s", toggled.id, "aktiviert" if toggled.is_enabled else "deaktiviert"
        )
        self._persist()
        return copy.copy(toggled)

    def delete(self, alarm_id: str) -> bool:
        with self._lock:
            index = self._index_of(alarm_id)
            if index is None:
                return False

            alarm = self._alarms.pop(index)
            self._cancel_undo_timer()
            self._recently_deleted = alarm
            self._tombstone_token = token = object()
            self._undo_timer = self._timer_factory(
                self.undo_window, self._expire_tombstone, args=(token,)
            )
            self._undo_timer.daemon = True
            self._undo_timer.start()

        self._signal(FeedbackType.MEDIUM)
        self.logger.info(
            "🗑️ Alarm gelöscht: %s (rückgängig machbar für %s Sekunden)", alarm, self.undo_window
        )
        self._persist()
        return True

    def undo_delete(self) -> Optional[Alarm]:
        with self._lock:
            alarm = self._recently_deleted
            if alarm is None:
                return None

            self._clear_tombstone()
            self._alarms.append(alarm)
            self._sort()

        self._signal(FeedbackType.LIGHT)
        self.logger.info("↩️ Alarm wiederhergestellt: %s", alarm)
        self._persist()
        return copy.copy(alarm)

    def clear_recently_deleted(self) -> None:
        with self._lock:
            self._clear_tombstone()

    def duplicate(self, alarm_id: str) -> Optional[Alarm]:
        now = self._now()
        with self._lock:
            index = self._index_of(alarm_id)
            if index is None:
                return None

            source = self._alarms[index]
            duplicated = replace(
                source,
                id=self._new_id(),
                label=f"{source.label} Copy",
                is_enabled=False,
                created_at=now,
                updated_at=now,
            )
            self._alarms.append(duplicated)
            self._sort()

        self._signal(FeedbackType.LIGHT)
        self.logger.info("⏰ Alarm dupliziert: %s -> %s", source.id, duplicated.id)
        self._persist()
        return copy.copy(duplicated)

    def shutdown(self) -> None:
        """Stoppt einen noch laufenden Undo-Timer."""
        with self._lock:
            self._cancel_undo_timer()

    # ---------------------------------------------------------------- helpers

    def _now(self) -> datetime.datetime:
        return self._clock() if self._clock else datetime.datetime.now()

    def _touch(self, alarm: Alarm) -> datetime.datetime:
        return max(self._now(), alarm.created_at)

    def _new_id(self) -> str:
        taken = {alarm.id for alarm in self._alarms}
        if self._recently_deleted is not None:
            taken.add(self._recently_deleted.id)

        alarm_id = generate_id(self._rng)
        while alarm_id in taken:
            alarm_id = generate_id(self._rng)
        return alarm_id

    def _index_of(self, alarm_id: str) -> Optional[int]:
        for index, alarm in enumerate(self._alarms):
            if alarm.id == alarm_id:
                return index
        return None

    def _sort(self) -> None:
        # list.sort ist stabil: gleiche Uhrzeiten behalten ihre Reihenfolge
        self._alarms.sort(key=lambda alarm: alarm.time)

    def _cancel_undo_timer(self) -> None:
        if self._undo_timer is not None:
            self._undo_timer.cancel()
            self._undo_timer = None

    def _clear_tombstone(self) -> None:
        self._cancel_undo_timer()
        self._recently_deleted = None
        self._tombstone_token = None

    def _expire_tombstone(self, token: object) -> None:
        with self._lock:
            # ein alter Timer darf einen neueren Eintrag nicht entfernen
            if token is not self._tombstone_token:
                return
            alarm = self._recently_deleted
            self._recently_deleted = None
            self._tombstone_token = None
            self._undo_timer = None

        self.logger.info("🗑️ Alarm endgültig entfernt: %s", alarm)

    @log_exceptions_from_self_logger("loading alarms", default=[])
    def _read_all(self) -> List[Alarm]:
        return list(self.repository.load_all())

    @log_exceptions_from_self_logger("sending feedback")
    def _signal(self, feedback: FeedbackType) -> None:
        self.feedback.signal(feedback)

    def _persist(self) -> None:
        with self._lock:
            snapshot = list(self._alarms)
        try:
            self.repository.replace_all(snapshot)
        except PersistenceError as e:
            self.logger.error("❌ Fehler beim Speichern der Alarme: %s", e)
            raise
