import random

import pytest

from academy.errors import InvalidTransition
from academy.models.quiz import QuizPayload
from academy.quiz import Phase, QuizRuntime


def _payload(count: int = 4, shuffle: bool = False, passing: int = 70) -> QuizPayload:
    return QuizPayload.model_validate(
        {
            "questions": [
                {
                    "id": f"q{i}",
                    "type": "SINGLE_CHOICE",
                    "question": f"Question {i}",
                    "options": ["wrong", "right"],
                    "correctAnswers": [1],
                }
                for i in range(count)
            ],
            "shuffleQuestions": shuffle,
            "passingScore": passing,
        }
    )


def _answer_all(runtime: QuizRuntime, correct: int) -> None:
    for position in range(runtime.total):
        runtime.submit(1 if position < correct else 0)
        runtime.next()


def test_three_of_four_passes() -> None:
    runtime = QuizRuntime(_payload())
    _answer_all(runtime, correct=3)

    assert runtime.phase is Phase.RESULTS
    assert runtime.result.score == 75
    assert runtime.result.passed is True
    assert runtime.result.correct_count == 3


def test_two_of_four_fails() -> None:
    runtime = QuizRuntime(_payload())
    _answer_all(runtime, correct=2)

    assert runtime.result.score == 50
    assert runtime.result.passed is False


def test_walks_presenting_feedback_presenting() -> None:
    runtime = QuizRuntime(_payload(count=2))
    assert runtime.phase is Phase.PRESENTING
    assert runtime.current_question.id == "q0"

    assert runtime.submit(1) is True
    assert runtime.phase is Phase.FEEDBACK
    assert runtime.is_current_correct is True

    assert runtime.next() is Phase.PRESENTING
    assert runtime.index == 1

    assert runtime.submit(0) is False
    assert runtime.next() is Phase.RESULTS
    assert runtime.current_question is None
    assert [o.correct for o in runtime.result.outcomes] == [True, False]


def test_invalid_transitions() -> None:
    runtime = QuizRuntime(_payload(count=1))
    with pytest.raises(InvalidTransition):
        runtime.next()
    with pytest.raises(InvalidTransition):
        runtime.retry()

    runtime.submit(1)
    with pytest.raises(InvalidTransition):
        runtime.submit(1)

    runtime.next()
    with pytest.raises(InvalidTransition):
        runtime.submit(1)


def test_unanswered_counts_as_wrong() -> None:
    runtime = QuizRuntime(_payload(count=2))
    runtime.submit(None)
    runtime.next()
    runtime.submit(1)
    runtime.next()
    assert runtime.result.score == 50


def test_retry_resets_answers() -> None:
    runtime = QuizRuntime(_payload(count=2))
    _answer_all(runtime, correct=0)
    assert runtime.result.passed is False

    runtime.retry()

    assert runtime.phase is Phase.PRESENTING
    assert runtime.index == 0
    assert runtime.answers == {}
    assert runtime.result is None
    assert runtime.attempt == 2
    _answer_all(runtime, correct=2)
    assert runtime.result.passed is True


def test_shuffle_once_per_attempt() -> None:
    payload = _payload(count=8, shuffle=True)
    runtime = QuizRuntime(payload, rng=random.Random(3))
    first_order = [q.id for q in runtime.questions]

    assert sorted(first_order) == sorted(q.id for q in payload.questions)
    runtime.submit(1)
    runtime.next()
    assert [q.id for q in runtime.questions] == first_order

    expected = list(payload.questions)
    check = random.Random(3)
    check.shuffle(expected)
    assert first_order == [q.id for q in expected]


def test_no_shuffle_keeps_authored_order() -> None:
    runtime = QuizRuntime(_payload(count=5), rng=random.Random(1))
    assert [q.id for q in runtime.questions] == ["q0", "q1", "q2", "q3", "q4"]


def test_empty_quiz_is_rejected() -> None:
    with pytest.raises(ValueError):
        QuizRuntime(QuizPayload(questions=[]))
