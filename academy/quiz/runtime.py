"""Quiz attempt state machine.

    PRESENTING(0) --submit--> FEEDBACK(0) --next--> PRESENTING(1) ... --next--> RESULTS
    RESULTS --retry--> PRESENTING(0)
"""
import enum
import logging
import random
from dataclasses import dataclass, field
from typing import Any

from academy.errors import InvalidTransition
from academy.models.quiz import QuizPayload
from academy.quiz.scoring import is_correct, score_percent

logger = logging.getLogger(__name__)


class Phase(str, enum.Enum):
    PRESENTING = "PRESENTING"
    FEEDBACK = "FEEDBACK"
    RESULTS = "RESULTS"


@dataclass
class QuestionOutcome:
    question_id: str
    answer: Any
    correct: bool


@dataclass
class QuizResult:
    """Final score of one attempt."""

    score: float
    passed: bool
    correct_count: int
    total: int
    passing_score: int
    outcomes: list[QuestionOutcome] = field(default_factory=list)


class QuizRuntime:
    """Walks a learner through one quiz payload.

    Args:
        payload: Decoded quiz.
        rng: Random source used for shuffling; pass a seeded
            ``random.Random`` for reproducible order.
    """

    def __init__(self, payload: QuizPayload, rng: random.Random | None = None):
        if not payload.questions:
            raise ValueError("quiz has no questions")
        self.payload = payload
        self._rng = rng or random.Random()
        self.attempt = 0
        self._start()

    def _start(self) -> None:
        self.attempt += 1
        self.questions = list(self.payload.questions)
        if self.payload.shuffleQuestions:
            self._rng.shuffle(self.questions)
        self.index = 0
        self.answers: dict[int, Any] = {}
        self.phase = Phase.PRESENTING
        self.result: QuizResult | None = None

    def _require(self, phase: Phase, action: str) -> None:
        if self.phase is not phase:
            raise InvalidTransition(f"cannot {action} while in {self.phase.value}")

    @property
    def total(self) -> int:
        return len(self.questions)

    @property
    def current_question(self):
        if self.phase is Phase.RESULTS:
            return None
        return self.questions[self.index]

    @property
    def is_last_question(self) -> bool:
        return self.index == self.total - 1

    @property
    def is_current_correct(self) -> bool:
        """Correctness of the answer being shown as feedback."""
        self._require(Phase.FEEDBACK, "check the answer")
        return is_correct(self.questions[self.index], self.answers.get(self.index))

    def submit(self, answer: Any) -> bool:
        """Record the answer for the current question and show feedback."""
        self._require(Phase.PRESENTING, "submit")
        self.answers[self.index] = answer
        self.phase = Phase.FEEDBACK
        return self.is_current_correct

    def next(self) -> Phase:
        """Advance to the next question, or finish the attempt."""
        self._require(Phase.FEEDBACK, "advance")
        if self.is_last_question:
            self.result = self._finish()
            self.phase = Phase.RESULTS
        else:
            self.index += 1
            self.phase = Phase.PRESENTING
        return self.phase

    def retry(self) -> None:
        """Start a fresh attempt, reshuffling if the quiz asks for it."""
        self._require(Phase.RESULTS, "retry")
        self._start()

    def _finish(self) -> QuizResult:
        outcomes = []
        for position, question in enumerate(self.questions):
            answer = self.answers.get(position)
            outcomes.append(
                QuestionOutcome(
                    question_id=question.id,
                    answer=answer,
                    correct=is_correct(question, answer),
                )
            )
        correct_count = sum(1 for outcome in outcomes if outcome.correct)
        score = score_percent(correct_count, self.total)
        passing_score = self.payload.passingScore
        logger.debug(
            "Quiz attempt %d finished: %d/%d correct", self.attempt, correct_count, self.total
        )
        return QuizResult(
            score=score,
            passed=score >= passing_score,
            correct_count=correct_count,
            total=self.total,
            passing_score=passing_score,
            outcomes=outcomes,
        )
