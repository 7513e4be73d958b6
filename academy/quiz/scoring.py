"""Answer checking for each quiz question variant.

Answer shapes:
    SINGLE_CHOICE / TRUE_FALSE  selected option index (``int``)
    MULTIPLE_CHOICE             selected option indices (any iterable of ``int``)
    TEXT_INPUT                  free text (``str``)
    MATCHING                    ``{left_index: chosen_right_value}``
    FILL_BLANKS                 one string per blank, in order

``None`` means unanswered and is always wrong.
"""
from typing import Any, Callable, Iterable, Mapping

from academy.models.quiz import (
    FillBlanksQuestion,
    MatchingQuestion,
    MultipleChoiceQuestion,
    SingleAnswerQuestion,
    TextInputQuestion,
)


def _normalize(value: Any) -> str:
    return str(value).strip()


def check_single(question: SingleAnswerQuestion, answer: Any) -> bool:
    # A one-element list is accepted too, browser clients send [index]
    if isinstance(answer, (list, tuple)):
        if len(answer) != 1:
            return False
        answer = answer[0]
    if isinstance(answer, bool) or not isinstance(answer, int):
        return False
    return answer == question.correct_index


def check_multiple(question: MultipleChoiceQuestion, answer: Iterable[int] | None) -> bool:
    if answer is None or isinstance(answer, (str, int)):
        return False
    return set(answer) == set(question.correctAnswers)


def check_text_input(question: TextInputQuestion, answer: str | None) -> bool:
    if answer is None:
        return False
    given = _normalize(answer)
    expected = _normalize(question.correctAnswer)
    if question.caseSensitive:
        return given == expected
    return given.casefold() == expected.casefold()


def check_matching(question: MatchingQuestion, answer: Mapping[Any, str] | None) -> bool:
    if not isinstance(answer, Mapping) or not answer:
        return False
    # JSON round-trips turn int keys into strings
    chosen = {str(key): value for key, value in answer.items()}
    for index, pair in enumerate(question.pairs):
        value = chosen.get(str(index))
        if not isinstance(value, str) or _normalize(value) != _normalize(pair.right):
            return False
    return True


def check_fill_blanks(question: FillBlanksQuestion, answer: list[str] | None) -> bool:
    if not isinstance(answer, (list, tuple)) or len(answer) != len(question.answers):
        return False
    for given, expected in zip(answer, question.answers):
        if not isinstance(given, str):
            return False
        if _normalize(given).casefold() != _normalize(expected).casefold():
            return False
    return True


CHECKERS: dict[str, Callable[[Any, Any], bool]] = {
    "SINGLE_CHOICE": check_single,
    "TRUE_FALSE": check_single,
    "MULTIPLE_CHOICE": check_multiple,
    "TEXT_INPUT": check_text_input,
    "MATCHING": check_matching,
    "FILL_BLANKS": check_fill_blanks,
}


def is_correct(question, answer: Any) -> bool:
    """Check ``answer`` against ``question``; unanswered is wrong."""
    if answer is None:
        return False
    return CHECKERS[question.type](question, answer)


def score_percent(correct: int, total: int) -> float:
    """Percentage of correct answers, 0 for an empty quiz."""
    if total <= 0:
        return 0.0
    return correct / total * 100
