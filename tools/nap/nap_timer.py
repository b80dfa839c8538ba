import threading
import time
from typing import Callable, Optional

from singleton_decorator import singleton

from config.settings import DEFAULT_NAP_MINUTES, NAP_PRESETS
from util.loggin_mixin import LoggingMixin


@singleton
class NapTimer(LoggingMixin):
    def __init__(
        self,
        on_finished: Optional[Callable[[], None]] = None,
        clock: Callable[[], float] = time.monotonic,
        timer_factory: Callable[..., threading.Timer] = threading.Timer,
    ):
        self.on_finished = on_finished
        self.duration_minutes = DEFAULT_NAP_MINUTES
        self.is_active = False
        self.is_paused = False

        self._clock = clock
        self._timer_factory = timer_factory
        self._remaining = float(DEFAULT_NAP_MINUTES * 60)
        self._started_at: Optional[float] = None
        self._timer: Optional[threading.Timer] = None
        self._lock = threading.RLock()

    def select_preset(self, minutes: int) -> bool:
        if minutes not in NAP_PRESETS:
            raise ValueError(f"Unknown nap preset {minutes}, expected one of {NAP_PRESETS}")
        if self.is_active:
            self.logger.info("Ein Nickerchen läuft bereits, Dauer bleibt unverändert.")
            return False

        self.duration_minutes = minutes
        self._remaining = float(minutes * 60)
        return True

    def start(self, minutes: Optional[int] = None) -> bool:
        with self._lock:
            if self.is_active:
                self.logger.info("Ein Timer läuft bereits!")
                return False
            if minutes is not None:
                if minutes <= 0:
                    raise ValueError("Nap duration must be positive")
                self.duration_minutes = minutes

            self._remaining = float(self.duration_minutes * 60)
            self.is_active = True
            self._run()

        self.logger.info("😴 Nap-Timer gestartet für %d Minuten.", self.duration_minutes)
        return True

    def pause(self) -> bool:
        with self._lock:
            if not self.is_active or self.is_paused:
                return False
            self._remaining = self.remaining_seconds()
            self._cancel()
            self.is_paused = True

        self.logger.info("⏸️ Nap-Timer pausiert (%.0f Sekunden übrig).", self._remaining)
        return True

    def resume(self) -> bool:
        with self._lock:
            if not self.is_active or not self.is_paused:
                return False
            self._run()

        self.logger.info("▶️ Nap-Timer fortgesetzt.")
        return True

    def reset(self) -> None:
        with self._lock:
            self._cancel()
            self.is_active = False
            self.is_paused = False
            self._remaining = float(self.duration_minutes * 60)

    def remaining_seconds(self) -> float:
        with self._lock:
            if not self.is_active or self.is_paused or self._started_at is None:
                return self._remaining
            elapsed = self._clock() - self._started_at
            return max(0.0, self._remaining - elapsed)

    def progress(self) -> float:
        """Fortschritt in Prozent (0-100)."""
        total = self.duration_minutes * 60
        return (total - self.remaining_seconds()) / total * 100

    def _run(self) -> None:
        self._cancel()
        self.is_paused = False
        self._started_at = self._clock()
        self._timer = self._timer_factory(self._remaining, self._finish)
        self._timer.daemon = True  # Damit der Thread das Programm nicht blockiert
        self._timer.start()

    def _cancel(self) -> None:
        if self._timer is not None:
            self._timer.cancel()
            self._timer = None

    def _finish(self) -> None:
        with self._lock:
            if not self.is_active or self.is_paused:
                return
            self.is_active = False
            self._remaining = 0.0
            self._timer = None

        self.logger.info("⏰ Zeit ist um! Nickerchen beendet.")
        if self.on_finished:
            self.on_finished()
