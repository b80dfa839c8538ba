import random
import re
from enum import Enum
from typing import Callable, Optional, Union

from config.settings import MATH_MAX_ATTEMPTS
from tools.alarm.alarm_item import Alarm, DismissMethod
from tools.challenge.math_problem import MathProblem, generate_math_problem
from util.decorator import log_exceptions_from_self_logger
from util.feedback import WRONG_ANSWER_VIBRATION, FeedbackSink, FeedbackType, LoggingFeedback
from util.loggin_mixin import LoggingMixin

# nur ASCII-Ziffern, optional mit Vorzeichen
ANSWER_PATTERN = re.compile(r"[+-]?[0-9]+")


class ChallengeState(Enum):
    IDLE = "idle"
    PRESENTING = "presenting"
    SOLVED = "solved"


class SubmissionOutcome(Enum):
    SOLVED = "solved"
    WRONG = "wrong"
    REGENERATED = "regenerated"
    INACTIVE = "inactive"


class DismissalChallenge(LoggingMixin):
    """
    Math gate in front of dismissing a ringing alarm.

    There is no timeout: the challenge stays open until it is solved. After
    ``MATH_MAX_ATTEMPTS`` wrong answers in a row a fresh problem replaces the
    current one, so nobody gets stuck on a single question.
    """

    def __init__(
        self,
        on_solved: Optional[Callable[[], None]] = None,
        feedback: Optional[FeedbackSink] = None,
        rng: Optional[random.Random] = None,
        max_attempts: int = MATH_MAX_ATTEMPTS,
    ):
        self.on_solved = on_solved
        self.feedback = feedback or LoggingFeedback()
        self.max_attempts = max_attempts
        self.answer_input = ""

        self._rng = rng
        self._state = ChallengeState.IDLE
        self._problem: Optional[MathProblem] = None
        self._attempt_count = 0

    @property
    def state(self) -> ChallengeState:
        return self._state

    @property
    def current_problem(self) -> Optional[MathProblem]:
        return self._problem

    @property
    def attempt_count(self) -> int:
        return self._attempt_count

    def start(self, alarm: Alarm) -> Optional[MathProblem]:
        """Presents a problem for math alarms. Button alarms need no challenge."""
        if alarm.dismiss_method is not DismissMethod.MATH:
            return None
        if self._state is ChallengeState.PRESENTING:
            return self._problem

        self._present_new_problem()
        self.logger.info("🧮 Rechenaufgabe für '%s': %s", alarm.label, self._problem.question)
        return self._problem

    def generate(self) -> MathProblem:
        """Replaces the current problem and resets the attempt counter."""
        self._present_new_problem()
        return self._problem

    def update_input(self, text: str) -> None:
        self.answer_input = text

    def submit(self, value: Union[str, int, None] = None) -> SubmissionOutcome:
        if self._state is not ChallengeState.PRESENTING:
            return SubmissionOutcome.INACTIVE

        submitted = self.answer_input if value is None else value
        answer = self._parse_answer(submitted)

        if answer is not None and answer == self._problem.answer:
            self._state = ChallengeState.SOLVED
            self.answer_input = ""
            self._signal(FeedbackType.SUCCESS)
            self.logger.info("✅ Aufgabe gelöst, Alarm wird beendet")
            if self.on_solved:
                self.on_solved()
            return SubmissionOutcome.SOLVED

        self._attempt_count += 1
        self.answer_input = ""
        self._signal(FeedbackType.ERROR)
        self._vibrate()

        if self._attempt_count >= self.max_attempts:
            self.logger.info("🔁 %d Fehlversuche, neue Aufgabe", self._attempt_count)
            self._problem = generate_math_problem(self._rng)
            self._attempt_count = 0
            return SubmissionOutcome.REGENERATED

        self.logger.info("❌ Falsche Antwort (%d/%d)", self._attempt_count, self.max_attempts)
        return SubmissionOutcome.WRONG

    def reset(self) -> None:
        self._state = ChallengeState.IDLE
        self._problem = None
        self._attempt_count = 0
        self.answer_input = ""

    def _present_new_problem(self) -> None:
        self._problem = generate_math_problem(self._rng)
        self._attempt_count = 0
        self.answer_input = ""
        self._state = ChallengeState.PRESENTING

    @staticmethod
    def _parse_answer(value: Union[str, int]) -> Optional[int]:
        if isinstance(value, bool):
            return None
        if isinstance(value, int):
            return value
        text = str(value).strip()
        if not ANSWER_PATTERN.fullmatch(text):
            return None
        return int(text)

    @log_exceptions_from_self_logger("sending feedback")
    def _signal(self, feedback: FeedbackType) -> None:
        self.feedback.signal(feedback)

    @log_exceptions_from_self_logger("vibrating")
    def _vibrate(self) -> None:
        self.feedback.vibrate(WRONG_ANSWER_VIBRATION)
