from enum import Enum
from typing import Protocol, Sequence

from util.loggin_mixin import LoggingMixin


class FeedbackType(Enum):
    LIGHT = "light"
    MEDIUM = "medium"
    SUCCESS = "success"
    ERROR = "error"


# Pause/Vibration in Millisekunden, abwechselnd
WRONG_ANSWER_VIBRATION = (0, 200, 100, 200)


class FeedbackSink(Protocol):
    """Haptic/acoustic output of the device. Calls are fire-and-forget."""

    def signal(self, feedback: FeedbackType) -> None:
        pass

    def vibrate(self, pattern: Sequence[int]) -> None:
        pass


class LoggingFeedback(LoggingMixin):
    """Default sink used when no device output is attached."""

    def signal(self, feedback: FeedbackType) -> None:
        self.logger.debug("📳 Feedback: %s", feedback.value)

    def vibrate(self, pattern: Sequence[int]) -> None:
        self.logger.debug("📳 Vibration: %s", list(pattern))
