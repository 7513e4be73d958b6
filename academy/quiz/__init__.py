"""Quiz runtime and scoring."""
from academy.quiz.runtime import Phase, QuestionOutcome, QuizResult, QuizRuntime
from academy.quiz.scoring import is_correct, score_percent

__all__ = [
    "Phase",
    "QuestionOutcome",
    "QuizResult",
    "QuizRuntime",
    "is_correct",
    "score_percent",
]
